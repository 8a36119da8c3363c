"""
Storefront Client Module
Fetches listing and detail pages from the Bandcamp storefront.
"""

from typing import Dict, Optional
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup

from ..core.config import STOREFRONT_CONFIG
from ..core.exceptions import NetworkError
from ..core.logger import get_logger

logger = get_logger("storefront")


class StorefrontClient:
    """HTML page client for a single Bandcamp storefront."""

    def __init__(self, base_url: Optional[str] = None, session: Optional[requests.Session] = None):
        self.base_url = (base_url or STOREFRONT_CONFIG["BASE_URL"]).rstrip("/")
        self.listing_path = STOREFRONT_CONFIG["LISTING_PATH"]
        self.timeout = STOREFRONT_CONFIG["PAGE_TIMEOUT"]
        self.browser_headers = {'User-Agent': STOREFRONT_CONFIG["USER_AGENT"]}

        self.session = session or requests.Session()

    @property
    def listing_url(self) -> str:
        return f"{self.base_url}{self.listing_path}"

    @property
    def root_url(self) -> str:
        return f"{self.base_url}/"

    def absolute_url(self, href: Optional[str]) -> Optional[str]:
        """Resolve an href from storefront markup against the storefront origin."""
        if not href:
            return None
        return urljoin(self.root_url, href)

    def fetch_page(self, url: str, browser: bool = False) -> str:
        """
        Fetch a page and return its HTML.

        Args:
            url: Page URL
            browser: Send a browser User-Agent (needed for pages scraped for audio)

        Returns:
            Response body

        Raises:
            NetworkError: On connection failure, timeout, or HTTP error status
        """
        headers: Dict[str, str] = dict(self.browser_headers) if browser else {}
        try:
            logger.debug(f"GET {url}")
            response = self.session.get(url, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            return response.text
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Failed to fetch {url}: {e}") from e

    def fetch_soup(self, url: str, browser: bool = False) -> BeautifulSoup:
        """Fetch a page and parse it."""
        return BeautifulSoup(self.fetch_page(url, browser=browser), "html.parser")

    def fetch_listing(self) -> str:
        """Fetch the storefront's music listing page."""
        return self.fetch_page(self.listing_url)
