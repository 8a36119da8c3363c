#!/usr/bin/env python3
"""
Configuration for Recordshelf.
Contains all constants, settings, and global parameters.
"""

import os
from pathlib import Path

# Project Information
PROJECT_NAME = "Recordshelf"
PROJECT_VERSION = "1.0.0"
PROJECT_DESCRIPTION = "Scrape a Bandcamp storefront into a static JSON catalog and host its assets locally"

# File Paths
BASE_DIR = Path(os.environ.get("RECORDSHELF_BASE_DIR", Path.cwd()))
CATALOG_PATH = Path(os.environ.get("RECORDSHELF_CATALOG_PATH", BASE_DIR / "src" / "data" / "bandcamp.json"))
ARTWORK_DIR = Path(os.environ.get("RECORDSHELF_ARTWORK_DIR", BASE_DIR / "public" / "artwork"))
AUDIO_DIR = Path(os.environ.get("RECORDSHELF_AUDIO_DIR", BASE_DIR / "public" / "audio"))

PATHS = {
    "CATALOG": CATALOG_PATH,
    "ARTWORK_DIR": ARTWORK_DIR,
    "AUDIO_DIR": AUDIO_DIR,
    # Root-relative prefixes the front-end serves the two asset directories under
    "ARTWORK_URL_PREFIX": "/artwork",
    "AUDIO_URL_PREFIX": "/audio",
}

# CDN base URL for the front-end asset helper; empty means local mode
CDN_URL = os.environ.get("RECORDSHELF_CDN_URL", "")

BROWSER_USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"


def _expected_release_count():
    value = os.environ.get("RECORDSHELF_EXPECTED_RELEASES")
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


# Storefront Configuration
STOREFRONT_CONFIG = {
    "BASE_URL": os.environ.get("RECORDSHELF_BASE_URL", "https://format416.bandcamp.com"),
    "LISTING_PATH": "/music",
    "ITEM_SELECTOR": "li[data-item-id]",
    "ITEM_ID_ATTRIBUTE": "data-item-id",
    "SINGLE_PATH_MARKER": "/track/",
    "EP_TITLE_KEYWORD": "ep",
    "USER_AGENT": BROWSER_USER_AGENT,
    # None disables the listing count check
    "EXPECTED_RELEASE_COUNT": _expected_release_count(),
    "PAGE_TIMEOUT": None,
}

# Download Configuration
DOWNLOAD_CONFIG = {
    "MAX_ATTEMPTS": 3,
    "BACKOFF_STEP": 2,  # seconds, multiplied by the attempt number
    "IMAGE_TIMEOUT": 30,
    "AUDIO_TIMEOUT": 120,
    "CHUNK_SIZE": 64 * 1024,
}

# Artwork Configuration
ARTWORK_CONFIG = {
    "SELECTORS": [
        "#tralbumArt img",
        ".popupImage img",
        ".art img",
        'img[src*="bcbits.com"]',
        ".albumart img",
    ],
    "PLACEHOLDER_MARKERS": ["blank.gif", "/0.gif"],
    "LOW_RES_SUFFIXES": ["_10.jpg", "_16.jpg"],
    "HIGH_RES_SUFFIX": "_2.jpg",
    "EXTENSION": ".jpg",
    "PLACEHOLDER_COVER": "https://picsum.photos/seed/{id}/400/400",
}

# Track Configuration
TRACK_CONFIG = {
    "DATA_ATTRIBUTE": "data-tralbum",
    "TRACK_LIST_KEY": "trackinfo",
    "AUDIO_FORMAT_KEY": "mp3-128",
    "EXTENSION": ".mp3",
}

# Courtesy delays between successive per-item requests (seconds)
THROTTLE_CONFIG = {
    "LISTING_ARTWORK": 0.5,
    "CATALOG_ARTWORK": 1.0,
    "NEW_RELEASE_ARTWORK": 3.0,
    "DETAIL_PAGE": 4.0,
    "TRACK_DOWNLOAD": 2.0,
    "TRACK_METADATA": 2.0,
    "RELEASE_AUDIO": 3.0,
}

# Logging Configuration
LOGGING_CONFIG = {
    "LEVEL": os.environ.get("RECORDSHELF_LOG_LEVEL", "INFO").upper(),
    "FORMAT": "%(levelname)s - %(name)s - %(message)s",
}

# Default Values
DEFAULTS = {
    "RELEASE_DATE": "TBD",
    "DURATION": "TBD",
    "RELEASE_TYPE": "album",
}

RELEASE_TYPES = ["album", "ep", "single", "compilation"]
