"""
Pytest configuration and shared fixtures.
"""

import json
import pytest
import sys
import tempfile
import shutil
from pathlib import Path
from typing import Dict, Generator, List, Optional, Union
from unittest.mock import patch

import requests

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


BASE_URL = "https://format416.bandcamp.com"

# (href, title, artist, expected type)
LISTING_ITEMS = [
    ("/album/doom-scrolling", "Doom Scrolling", "Format416", "album"),
    ("/album/night-shift", "Night Shift", "Kale Ortiz", "album"),
    ("/album/harbor-lights", "Harbor Lights", "Mira Vance", "album"),
    ("/album/tundra", "Tundra", "Format416", "album"),
    ("/album/low-tide", "Low Tide", "Halden", "album"),
    ("/album/glass-harmonics", "Glass Harmonics", "Mira Vance", "album"),
    ("/album/static-bloom", "Static Bloom", "Kale Ortiz", "album"),
    ("/album/northbound", "Northbound", "Halden", "album"),
    ("/album/cold-open", "Cold Open", "Format416", "album"),
    ("/album/drift", "Drift", "Various Artists", "album"),
    ("/album/deep-water-ep", "Deep Water EP", "Halden", "ep"),
    ("/album/sleepwalker", "Sleepwalker", "Mira Vance", "ep"),
    ("/track/pulse", "Pulse", "Kale Ortiz", "single"),
    ("/track/repeat", "Repeat", "Format416", "single"),
]


def listing_item_html(item_id: Optional[str], href: Optional[str], title: str, artist: str,
                      cover: Optional[str] = "auto") -> str:
    """One storefront grid item the way the listing page renders it."""
    if cover == "auto":
        cover = f"https://f4.bcbits.com/img/a{title.lower().replace(' ', '')}_16.jpg"
    id_attr = f' data-item-id="{item_id}"' if item_id else ' data-item-id=""'
    href_attr = f' href="{href}"' if href else ""
    img = f'<img src="{cover}" alt="">' if cover is not None else ""
    return f"""
    <li class="music-grid-item square"{id_attr}>
        <a{href_attr}>
            <div class="art">{img}</div>
            <p class="title">
                {title}
                <br>
                <span class="artist-override">
                {artist}
                </span>
            </p>
        </a>
    </li>"""


def listing_page_html(items_html: List[str]) -> str:
    return f"""<!DOCTYPE html>
<html><body>
<ol id="music-grid" class="editable-grid music-grid columns-4">
{''.join(items_html)}
</ol>
</body></html>"""


def detail_page_html(artwork_src: Optional[str] = None, trackinfo: Optional[list] = None,
                     extra_head: str = "") -> str:
    """A release page with optional artwork and embedded track data."""
    art = ""
    if artwork_src is not None:
        art = f'<div id="tralbumArt"><a class="popupImage" href="#"><img src="{artwork_src}"></a></div>'
    script = ""
    if trackinfo is not None:
        payload = json.dumps({"artist": "Format416", "trackinfo": trackinfo}).replace("'", "&#39;")
        script = f"<script type=\"text/javascript\" data-tralbum='{payload}'></script>"
    return f"<html><head>{extra_head}{script}</head><body>{art}</body></html>"


def trackinfo_entry(track_id: int, title: str, duration: float = 180.5, playable: bool = True) -> dict:
    return {
        "id": track_id,
        "track_id": track_id,
        "title": title,
        "duration": duration,
        "file": {"mp3-128": f"https://t4.bcbits.com/stream/{track_id}/mp3-128"} if playable else None,
    }


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, url: str, status_code: int = 200, text: str = "", content: bytes = b""):
        self.url = url
        self.status_code = status_code
        self.text = text
        self.content = content
        self.closed = False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error for url: {self.url}")

    def iter_content(self, chunk_size: int = 1):
        for start in range(0, len(self.content), chunk_size):
            yield self.content[start:start + chunk_size]

    def close(self):
        self.closed = True


class FakeSession:
    """Routes GET requests to canned responses and records every call."""

    def __init__(self, routes: Optional[Dict[str, Union[str, bytes, Exception, list]]] = None):
        self.routes = dict(routes or {})
        self.calls: List[dict] = []

    def get(self, url, headers=None, timeout=None, stream=False, **kwargs):
        self.calls.append({"url": url, "headers": headers or {}, "timeout": timeout, "stream": stream})
        route = self.routes.get(url)
        if isinstance(route, list):
            # Successive responses for repeated requests
            route = route.pop(0) if len(route) > 1 else route[0]
        if route is None:
            return FakeResponse(url, status_code=404)
        if isinstance(route, Exception):
            raise route
        if isinstance(route, bytes):
            return FakeResponse(url, content=route)
        return FakeResponse(url, text=route)

    def urls(self) -> List[str]:
        return [call["url"] for call in self.calls]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def no_sleep():
    """Patch out backoff and courtesy delays."""
    with patch('time.sleep') as mock_sleep:
        yield mock_sleep


@pytest.fixture
def listing_html() -> str:
    """Listing page with the fourteen-release storefront."""
    items = [
        listing_item_html(f"album-{1000 + i}", href, title, artist)
        for i, (href, title, artist, _) in enumerate(LISTING_ITEMS)
    ]
    return listing_page_html(items)


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def storefront_client(fake_session):
    from recordshelf.clients.storefront import StorefrontClient
    return StorefrontClient(base_url=BASE_URL, session=fake_session)


@pytest.fixture
def sample_release():
    """Sample release with two local tracks."""
    from recordshelf.models.releases import Release, Track
    return Release(
        id="album-2947447909",
        title="Doom Scrolling",
        artist="Format416",
        url=f"{BASE_URL}/album/doom-scrolling",
        cover="/artwork/album-2947447909.jpg",
        type="album",
        tracks=[
            Track(id=111, title="Intro", duration=61.2, track_number=1, path="/audio/111-intro.mp3"),
            Track(id=123, title="Doom Scrolling (Remix)!!", duration=240.0, track_number=2,
                  path="/audio/123-doom-scrolling-remix.mp3"),
        ]
    )
