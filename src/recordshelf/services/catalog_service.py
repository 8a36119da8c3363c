"""
Catalog service: one method per pipeline run, wiring scraper, fetcher, merger and store.

Every run is sequential. Each request finishes before the next begins and a
fixed courtesy delay separates successive per-release requests.
"""

import time
from dataclasses import dataclass, field
from typing import List, Optional

from ..core.config import ARTWORK_CONFIG, STOREFRONT_CONFIG, THROTTLE_CONFIG
from ..core.logger import get_logger
from ..models.releases import Release, Track
from .asset_fetcher import AssetFetcher, is_placeholder_image, normalize_artwork_url
from .catalog_merger import CatalogMerger
from .catalog_scraper import CatalogScraper
from .catalog_store import CatalogStore

logger = get_logger("service")


@dataclass
class RunReport:
    """Outcome of one pipeline run."""
    releases: List[Release] = field(default_factory=list)
    new_releases: List[Release] = field(default_factory=list)
    processed: int = 0
    succeeded: int = 0
    failed: int = 0
    written: bool = False


def _pause(index: int, total: int, delay: float):
    """Sleep between items, never after the last one."""
    if index < total - 1:
        logger.debug(f"Waiting {delay:g} seconds before next request...")
        time.sleep(delay)


class CatalogService:
    """Runs the scrape, enrich, and merge pipelines against the catalog file."""

    def __init__(
        self,
        scraper: Optional[CatalogScraper] = None,
        fetcher: Optional[AssetFetcher] = None,
        merger: Optional[CatalogMerger] = None,
        store: Optional[CatalogStore] = None,
        expected_count: Optional[int] = None
    ):
        self.scraper = scraper or CatalogScraper()
        self.fetcher = fetcher or AssetFetcher(client=self.scraper.client)
        self.merger = merger or CatalogMerger()
        self.store = store or CatalogStore()
        if expected_count is None:
            expected_count = STOREFRONT_CONFIG["EXPECTED_RELEASE_COUNT"]
        self.expected_count = expected_count

    def _download_listing_cover(self, release: Release) -> Optional[bool]:
        """
        Download a release's listing cover.

        Returns None when there is no usable cover, otherwise whether the
        download succeeded. On failure the remote cover URL is kept.
        """
        if not release.cover or is_placeholder_image(release.cover):
            logger.warning(f"⚠️  Skipping {release.title} - no valid artwork URL")
            return None
        if self.fetcher.download_artwork(release, normalize_artwork_url(release.cover)):
            return True
        logger.info(f"Using original URL as fallback for {release.title}")
        return False

    def scrape_catalog(self) -> RunReport:
        """Scrape the listing, download every listing cover, and write a fresh catalog."""
        releases = self.scraper.scrape(require_cover=True, expected_count=self.expected_count)
        report = RunReport(releases=releases)
        if not releases:
            logger.warning("No releases found!")
            return report

        logger.info("Downloading artwork...")
        for index, release in enumerate(releases):
            report.processed += 1
            result = self._download_listing_cover(release)
            if result:
                report.succeeded += 1
            elif result is False:
                report.failed += 1
            _pause(index, len(releases), THROTTLE_CONFIG["LISTING_ARTWORK"])

        self.store.save(releases)
        report.written = True
        return report

    def rebuild_catalog(self) -> RunReport:
        """
        Scrape the listing and take artwork from each release's own page.

        Releases without artwork get a placeholder cover; releases whose artwork
        fails to download keep the remote artwork URL.
        """
        releases = self.scraper.scrape(require_cover=False, require_url=True, expected_count=self.expected_count)
        report = RunReport(releases=releases)

        for index, release in enumerate(releases):
            logger.info(f"{index + 1}/{len(releases)}: {release.artist} - {release.title}")
            report.processed += 1

            artwork_url = self.fetcher.resolve_artwork(release.url)
            if artwork_url is None:
                release.cover = ARTWORK_CONFIG["PLACEHOLDER_COVER"].format(id=release.id)
                report.failed += 1
            elif self.fetcher.download_artwork(release, artwork_url):
                report.succeeded += 1
            else:
                release.cover = artwork_url
                report.failed += 1

            _pause(index, len(releases), THROTTLE_CONFIG["DETAIL_PAGE"])

        self.store.save(releases)
        report.written = True
        return report

    def update_catalog(self, with_tracks: bool = False) -> RunReport:
        """
        Append releases that are on the storefront but not yet in the catalog.

        New releases get their artwork (and, with ``with_tracks``, their audio)
        before being appended. Existing entries are left exactly as they are.
        """
        existing = self.store.load()
        scraped = self.scraper.scrape(require_cover=True, expected_count=self.expected_count)

        new_releases = self.merger.find_new_releases(scraped, existing)
        report = RunReport(releases=list(existing), new_releases=new_releases)
        if not new_releases:
            logger.info("✓ No new releases found. Catalog is up to date!")
            return report

        logger.info(f"Found {len(new_releases)} new release(s):")
        for index, release in enumerate(new_releases, 1):
            logger.info(f"  {index}. {release.artist} - {release.title} ({release.type})")

        logger.info(f"Downloading artwork for {len(new_releases)} new release(s)...")
        for index, release in enumerate(new_releases):
            report.processed += 1
            result = self._download_listing_cover(release)
            if result:
                report.succeeded += 1
            elif result is False:
                report.failed += 1

            if with_tracks and not release.is_single:
                tracks = self.fetcher.download_release_audio(release.url)
                if tracks:
                    release.tracks = tracks

            _pause(index, len(new_releases), THROTTLE_CONFIG["NEW_RELEASE_ARTWORK"])

        report.releases = self.merger.merge(existing, new_releases)
        self.store.save(report.releases)
        report.written = True
        logger.info(f"Total releases in catalog: {len(report.releases)}")
        return report

    def refresh_artwork(self) -> RunReport:
        """Download artwork from every catalog release's detail page."""
        releases = self.store.load()
        report = RunReport(releases=releases)

        for index, release in enumerate(releases):
            report.processed += 1
            artwork_url = self.fetcher.resolve_artwork(release.url)
            if artwork_url and self.fetcher.download_artwork(release, artwork_url):
                report.succeeded += 1
            else:
                logger.warning(f"✗ No artwork downloaded for: {release.url}")
                report.failed += 1
            _pause(index, len(releases), THROTTLE_CONFIG["CATALOG_ARTWORK"])

        self.store.save(releases)
        report.written = True
        return report

    def attach_tracks(self) -> RunReport:
        """
        Record track metadata with local audio paths on releases that lack it.

        Singles and releases that already list tracks are skipped. No audio is
        downloaded.
        """
        releases = self.store.load()
        report = RunReport(releases=releases)
        logger.info(f"Processing {len(releases)} releases...")

        pending = [r for r in releases if not r.is_single and not r.has_tracks]
        for release in releases:
            if release.has_tracks:
                logger.info(f"{release.title} - already has tracks")

        for index, release in enumerate(pending):
            logger.info(f"[{index + 1}/{len(pending)}] {release.artist} - {release.title}...")
            report.processed += 1
            tracks = self.fetcher.resolve_tracks(release.url)
            if tracks:
                release.tracks = [self.fetcher.local_track(track) for track in tracks]
                report.succeeded += 1
                logger.info(f"  ✓ Added {len(tracks)} track(s)")
            else:
                report.failed += 1
                logger.warning("  ⚠️  No tracks found")
            _pause(index, len(pending), THROTTLE_CONFIG["TRACK_METADATA"])

        self.store.save(releases)
        report.written = True
        return report

    def download_album_audio(self, album_url: str, album_id: Optional[str] = None) -> List[Track]:
        """Download every track of one album page into the audio directory."""
        logger.info(f"=== Downloading Audio for {album_id or 'album-unknown'} ===")
        logger.info(f"URL: {album_url}")
        return self.fetcher.download_release_audio(album_url)

    def download_catalog_audio(self) -> RunReport:
        """
        Download audio for every album and EP in the catalog.

        Each release's tracks are replaced by the tracks that are present
        locally after the run. Already-downloaded files are not fetched again.
        """
        releases = self.store.load()
        report = RunReport(releases=releases)

        targets = [r for r in releases if r.type in ("album", "ep") and not r.is_single]
        logger.info(f"Found {len(targets)} albums/EPs to process")

        for index, release in enumerate(targets):
            logger.info(f"[{index + 1}/{len(targets)}] {release.artist} - {release.title}")
            report.processed += 1

            tracks = self.fetcher.download_release_audio(release.url)
            if tracks:
                release.tracks = tracks
                report.succeeded += 1
                logger.info(f"  ✓ Downloaded {len(tracks)} track(s)")
            else:
                report.failed += 1

            _pause(index, len(targets), THROTTLE_CONFIG["RELEASE_AUDIO"])

        self.store.save(releases)
        report.written = True
        return report
