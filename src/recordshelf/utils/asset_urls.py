"""
Asset URL resolution shared with the playback front-end.
"""

from typing import Optional

from ..core.config import CDN_URL


def is_absolute_url(path: Optional[str]) -> bool:
    return bool(path) and path.startswith(("http://", "https://"))


def get_asset_url(path: Optional[str], cdn_url: Optional[str] = None) -> str:
    """
    Resolve a catalog asset reference to the URL the front-end loads.

    Absolute URLs pass through unchanged. With a CDN base configured the path is
    joined to it; otherwise the root-relative local path is returned as is.

    Args:
        path: Cover or track path from the catalog
        cdn_url: CDN base URL (defaults to RECORDSHELF_CDN_URL)

    Returns:
        Resolved URL, or an empty string for an empty path
    """
    if not path:
        return ""

    if is_absolute_url(path):
        return path

    base = CDN_URL if cdn_url is None else cdn_url
    if base:
        clean_path = path[1:] if path.startswith("/") else path
        clean_base = base[:-1] if base.endswith("/") else base
        return f"{clean_base}/{clean_path}"

    return path
