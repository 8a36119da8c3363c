"""
Catalog services for Recordshelf.
"""

from .catalog_scraper import CatalogScraper
from .asset_fetcher import AssetFetcher
from .catalog_merger import CatalogMerger
from .catalog_store import CatalogStore
from .catalog_service import CatalogService, RunReport

__all__ = [
    'CatalogScraper',
    'AssetFetcher',
    'CatalogMerger',
    'CatalogStore',
    'CatalogService',
    'RunReport'
]
