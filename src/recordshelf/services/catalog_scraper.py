"""
Catalog scraping service: storefront listing page to Release records.
"""

from typing import List, Optional

from bs4 import BeautifulSoup

from ..clients.storefront import StorefrontClient
from ..core.config import STOREFRONT_CONFIG
from ..core.exceptions import NetworkError, ScrapeError, ReleaseCountMismatchError
from ..core.logger import get_logger
from ..models.releases import Release
from ..utils.string_utils import slugify_title, split_title_artist, classify_release_type

logger = get_logger("scraper")


class CatalogScraper:
    """Extracts partially-populated releases from the storefront listing."""

    def __init__(self, client: Optional[StorefrontClient] = None):
        self.client = client or StorefrontClient()
        self.item_selector = STOREFRONT_CONFIG["ITEM_SELECTOR"]
        self.item_id_attribute = STOREFRONT_CONFIG["ITEM_ID_ATTRIBUTE"]

    @staticmethod
    def item_href(item) -> Optional[str]:
        """The href of an item's first link, if any."""
        link = item.find("a")
        return (link.get("href") or None) if link else None

    def parse_item(self, item) -> Optional[Release]:
        """
        Build a Release from one listing item container.

        Args:
            item: BeautifulSoup tag for the item container

        Returns:
            Release, or None when the item has no title or artist
        """
        link = item.find("a")
        href = self.item_href(item)
        title, artist = split_title_artist(link.get_text() if link else "")
        if not title or not artist:
            return None

        image = item.find("img")
        cover = (image.get("src") or "") if image else ""

        item_id = item.get(self.item_id_attribute)
        return Release(
            id=item_id or slugify_title(title),
            title=title,
            artist=artist,
            url=self.client.absolute_url(href) or self.client.root_url,
            cover=cover,
            type=classify_release_type(href, title),
        )

    def parse_listing(self, html: str, require_cover: bool = True, require_url: bool = False) -> List[Release]:
        """
        Parse a listing document into releases, in page order.

        Items missing a title or artist, a cover when ``require_cover`` is set, or
        a link when ``require_url`` is set are dropped. When two items share an
        id only the first is kept.
        """
        soup = BeautifulSoup(html, "html.parser")
        releases = []
        seen_ids = set()

        for item in soup.select(self.item_selector):
            release = self.parse_item(item)
            if release is None:
                logger.debug(f"Skipping listing item {item.get(self.item_id_attribute)}: no title or artist")
                continue
            if require_cover and not release.cover:
                logger.debug(f"Skipping {release.title}: no cover image")
                continue
            if require_url and not self.item_href(item):
                logger.debug(f"Skipping {release.title}: no release link")
                continue
            if release.id in seen_ids:
                logger.warning(f"⚠️  Skipping {release.title}: duplicate release id {release.id}")
                continue
            seen_ids.add(release.id)
            releases.append(release)

        return releases

    def scrape(
        self,
        require_cover: bool = True,
        require_url: bool = False,
        expected_count: Optional[int] = None
    ) -> List[Release]:
        """
        Fetch the listing page and return its releases.

        Args:
            require_cover: Drop items without a cover image
            require_url: Drop items without a release link
            expected_count: Abort unless exactly this many releases are found

        Raises:
            ScrapeError: If the listing page cannot be fetched
            ReleaseCountMismatchError: If ``expected_count`` does not match
        """
        logger.info(f"Scraping storefront listing: {self.client.listing_url}")
        try:
            html = self.client.fetch_listing()
        except NetworkError as e:
            raise ScrapeError(f"Error scraping listing page: {e}") from e

        releases = self.parse_listing(html, require_cover=require_cover, require_url=require_url)
        logger.info(f"Found {len(releases)} releases")

        if expected_count is not None and len(releases) != expected_count:
            raise ReleaseCountMismatchError(expected_count, len(releases))

        for index, release in enumerate(releases, 1):
            logger.debug(f"{index}. {release.artist} - {release.title} ({release.type})")

        return releases
