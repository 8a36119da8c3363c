"""
Asset fetching service for resolving and downloading release artwork and audio.
"""

import json
import time
from pathlib import Path
from typing import List, Optional

from bs4 import BeautifulSoup

from ..clients.downloader import AssetDownloader
from ..clients.storefront import StorefrontClient
from ..core.config import ARTWORK_CONFIG, TRACK_CONFIG, THROTTLE_CONFIG, PATHS
from ..core.exceptions import NetworkError
from ..core.logger import get_logger
from ..models.releases import Release, Track
from ..utils.string_utils import track_filename

logger = get_logger("assets")


def is_placeholder_image(src: Optional[str]) -> bool:
    """Whether an image source is one of the storefront's blank marker images."""
    return any(marker in src for marker in ARTWORK_CONFIG["PLACEHOLDER_MARKERS"]) if src else False


def normalize_artwork_url(url: str) -> str:
    """Swap a thumbnail suffix for the high-resolution one; other URLs pass through."""
    for suffix in ARTWORK_CONFIG["LOW_RES_SUFFIXES"]:
        if suffix in url:
            return url.replace(suffix, ARTWORK_CONFIG["HIGH_RES_SUFFIX"], 1)
    return url


class AssetFetcher:
    """Resolves artwork and track URLs from detail pages and downloads them locally."""

    def __init__(
        self,
        client: Optional[StorefrontClient] = None,
        downloader: Optional[AssetDownloader] = None,
        artwork_dir: Optional[Path] = None,
        audio_dir: Optional[Path] = None
    ):
        self.client = client or StorefrontClient()
        self.downloader = downloader or AssetDownloader()
        self.artwork_dir = Path(artwork_dir or PATHS["ARTWORK_DIR"])
        self.audio_dir = Path(audio_dir or PATHS["AUDIO_DIR"])
        self.artwork_prefix = PATHS["ARTWORK_URL_PREFIX"]
        self.audio_prefix = PATHS["AUDIO_URL_PREFIX"]

    # Artwork

    def find_artwork_url(self, soup: BeautifulSoup) -> Optional[str]:
        """
        Try each artwork selector in order and return the first usable image URL.

        Empty sources and placeholder images are passed over. The URL is
        normalized to the high-resolution variant.
        """
        for selector in ARTWORK_CONFIG["SELECTORS"]:
            image = soup.select_one(selector)
            if image is None:
                continue
            src = image.get("src")
            if src and not is_placeholder_image(src):
                return normalize_artwork_url(src)
        return None

    def resolve_artwork(self, page_url: str) -> Optional[str]:
        """Fetch a detail page and find its artwork URL; None if the page or image is missing."""
        try:
            soup = self.client.fetch_soup(page_url)
        except NetworkError as e:
            logger.error(f"Error visiting {page_url}: {e}")
            return None

        artwork_url = self.find_artwork_url(soup)
        if artwork_url:
            logger.info(f"Found artwork: {artwork_url}")
        else:
            logger.warning(f"⚠️  No artwork found on page: {page_url}")
        return artwork_url

    def artwork_filename(self, release: Release) -> str:
        return f"{release.id}{ARTWORK_CONFIG['EXTENSION']}"

    def download_artwork(self, release: Release, artwork_url: str) -> bool:
        """
        Download artwork for a release and point its cover at the local copy.

        The cover is left unchanged when every attempt fails.
        """
        filename = self.artwork_filename(release)
        if not self.downloader.download_image(artwork_url, self.artwork_dir / filename):
            return False
        release.cover = f"{self.artwork_prefix}/{filename}"
        return True

    # Tracks

    def parse_tracks(self, soup: BeautifulSoup) -> List[Track]:
        """
        Read playable tracks from the embedded track-info JSON.

        Blocks whose JSON does not parse are skipped. Tracks are numbered 1..n
        in the order the metadata lists them.
        """
        attribute = TRACK_CONFIG["DATA_ATTRIBUTE"]
        tracks = []

        for element in soup.find_all(attrs={attribute: True}):
            try:
                data = json.loads(element[attribute])
            except (json.JSONDecodeError, TypeError) as e:
                logger.warning(f"Error parsing {attribute}: {e}")
                continue

            track_info = data.get(TRACK_CONFIG["TRACK_LIST_KEY"]) if isinstance(data, dict) else None
            if not isinstance(track_info, list):
                continue

            for entry in track_info:
                if not isinstance(entry, dict):
                    continue
                files = entry.get("file")
                if not isinstance(files, dict):
                    continue
                audio_url = files.get(TRACK_CONFIG["AUDIO_FORMAT_KEY"])
                if not audio_url:
                    continue
                tracks.append(Track(
                    id=entry.get("track_id") or entry.get("id"),
                    title=entry.get("title") or "",
                    duration=entry.get("duration"),
                    url=audio_url,
                ))

        return self.renumber(tracks)

    @staticmethod
    def renumber(tracks: List[Track]) -> List[Track]:
        for number, track in enumerate(tracks, 1):
            track.track_number = number
        return tracks

    def resolve_tracks(self, page_url: str) -> List[Track]:
        """Fetch a detail page and read its tracks; empty on failure."""
        try:
            soup = self.client.fetch_soup(page_url, browser=True)
        except NetworkError as e:
            logger.error(f"Error scraping {page_url}: {e}")
            return []
        return self.parse_tracks(soup)

    def track_filename(self, track: Track) -> str:
        return track_filename(track.id, track.title)

    def local_track(self, track: Track) -> Track:
        """Copy of a track pointing at its local /audio/ path."""
        return Track(
            id=track.id,
            title=track.title,
            duration=track.duration,
            track_number=track.track_number,
            path=f"{self.audio_prefix}/{self.track_filename(track)}",
        )

    def download_tracks(self, tracks: List[Track]) -> List[Track]:
        """
        Download each track in order, pausing between downloads.

        Tracks whose download fails are left out of the result, which is
        renumbered from 1.
        """
        downloaded = []

        for index, track in enumerate(tracks):
            filename = self.track_filename(track)
            logger.info(f"  [{index + 1}/{len(tracks)}] {track.title}")
            existed = self.downloader.is_downloaded(self.audio_dir / filename)

            if self.downloader.download_audio(track.url, self.audio_dir / filename):
                downloaded.append(self.local_track(track))
            else:
                logger.warning(f"  ✗ Failed to download {track.title}")

            if not existed and index < len(tracks) - 1:
                time.sleep(THROTTLE_CONFIG["TRACK_DOWNLOAD"])

        return self.renumber(downloaded)

    def download_release_audio(self, page_url: str) -> List[Track]:
        """Resolve and download every track of a release page."""
        tracks = self.resolve_tracks(page_url)
        if not tracks:
            logger.warning("  ⚠️  No tracks found")
            return []
        logger.info(f"  Found {len(tracks)} track(s)")
        return self.download_tracks(tracks)
