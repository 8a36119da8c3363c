"""
Data models for Recordshelf.
"""

from .releases import Track, Release

__all__ = [
    'Track',
    'Release'
]
