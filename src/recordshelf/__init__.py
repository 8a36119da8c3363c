"""
Recordshelf - Bandcamp storefront catalog tooling.
"""

__version__ = "1.0.0"
