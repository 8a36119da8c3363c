"""
Utility modules for Recordshelf.
"""

from .retry import retry_with_backoff, RetryError
from .string_utils import slugify_title, safe_title, track_filename, split_title_artist, classify_release_type
from .asset_urls import get_asset_url

__all__ = [
    'retry_with_backoff',
    'RetryError',
    'slugify_title',
    'safe_title',
    'track_filename',
    'split_title_artist',
    'classify_release_type',
    'get_asset_url'
]
