"""
String utility functions for release identifiers, filenames, and listing text.
"""

import re
from typing import Any, List, Optional, Tuple

from ..core.config import STOREFRONT_CONFIG, TRACK_CONFIG


def slugify_title(title: str) -> str:
    """
    Fallback release id: lowercase, every character outside [a-z0-9] becomes '-'.

    Runs of hyphens are left as they are so existing catalog ids stay stable.
    """
    return re.sub(r'[^a-z0-9]', '-', title.lower())


def safe_title(title: Optional[str]) -> str:
    """
    Filesystem-safe form of a track title.

    Non-alphanumerics become hyphens, runs are collapsed, and leading or
    trailing hyphens are trimmed.
    """
    if not title:
        return ""
    slug = re.sub(r'[^a-z0-9]', '-', title, flags=re.IGNORECASE).lower()
    slug = re.sub(r'-+', '-', slug)
    return slug.strip('-')


def track_filename(track_id: Any, title: Optional[str], extension: Optional[str] = None) -> str:
    """
    Build the local audio filename for a track.

    >>> track_filename(123, "Doom Scrolling (Remix)!!")
    '123-doom-scrolling-remix.mp3'
    """
    extension = extension or TRACK_CONFIG["EXTENSION"]
    return f"{track_id}-{safe_title(title)}{extension}"


def split_lines(text: Optional[str]) -> List[str]:
    """Split text on newlines, strip each line, and drop empty ones."""
    if not text:
        return []
    return [line.strip() for line in text.strip().split("\n") if line.strip()]


def split_title_artist(text: Optional[str]) -> Tuple[str, str]:
    """
    Read (title, artist) from a listing link's text.

    The first non-empty line is the title and the last is the artist. A title
    or artist wrapped over several lines is mis-assigned; the storefront markup
    has not been seen to do that.
    """
    lines = split_lines(text)
    if not lines:
        return "", ""
    return lines[0], lines[-1]


def classify_release_type(url: Optional[str], title: Optional[str]) -> str:
    """
    Infer a release type from its URL path and title.

    '/track/' in the URL means a single, otherwise an 'ep' substring anywhere in
    the lowercased title means an EP, otherwise it is an album.
    """
    if url and STOREFRONT_CONFIG["SINGLE_PATH_MARKER"] in url:
        return "single"
    if title and STOREFRONT_CONFIG["EP_TITLE_KEYWORD"] in title.lower():
        return "ep"
    return "album"
