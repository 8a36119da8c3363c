"""
Catalog merging: find genuinely new releases and append them to the catalog.
"""

from typing import List, Sequence

from ..models.releases import Release


class CatalogMerger:
    """Additive merge of freshly scraped releases into an existing catalog."""

    def __init__(self, match_urls: bool = True):
        # Also treat a release as known when its URL is already in the catalog
        self.match_urls = match_urls

    def find_new_releases(self, scraped: Sequence[Release], existing: Sequence[Release]) -> List[Release]:
        """
        Return the scraped releases not already in the catalog, in listing order.

        Args:
            scraped: Releases from the listing page
            existing: Releases from the persisted catalog

        Returns:
            Releases whose id (and URL, when matching URLs) is not yet present
        """
        existing_ids = {release.id for release in existing}
        existing_urls = {release.url for release in existing} if self.match_urls else set()

        return [
            release for release in scraped
            if release.id not in existing_ids and release.url not in existing_urls
        ]

    @staticmethod
    def merge(existing: Sequence[Release], new_releases: Sequence[Release]) -> List[Release]:
        """Existing releases followed by the new ones; neither list is modified."""
        return list(existing) + list(new_releases)
