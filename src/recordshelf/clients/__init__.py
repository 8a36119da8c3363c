"""
Client modules for the storefront and asset hosts.
"""

from .storefront import StorefrontClient
from .downloader import AssetDownloader

__all__ = [
    'StorefrontClient',
    'AssetDownloader'
]
