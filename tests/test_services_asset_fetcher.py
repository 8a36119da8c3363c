"""
Tests for artwork and track resolution and download.
"""

import pytest
import sys
from pathlib import Path
from unittest.mock import Mock

from bs4 import BeautifulSoup

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from conftest import BASE_URL, detail_page_html, trackinfo_entry
from recordshelf.clients.downloader import AssetDownloader
from recordshelf.models.releases import Release, Track
from recordshelf.services.asset_fetcher import AssetFetcher, is_placeholder_image, normalize_artwork_url

PAGE_URL = f"{BASE_URL}/album/doom-scrolling"


def soup(html):
    return BeautifulSoup(html, "html.parser")


@pytest.fixture
def fetcher(storefront_client, fake_session, temp_dir):
    downloader = AssetDownloader(session=fake_session, sleep=Mock())
    return AssetFetcher(
        client=storefront_client,
        downloader=downloader,
        artwork_dir=temp_dir / "artwork",
        audio_dir=temp_dir / "audio"
    )


class TestArtworkHelpers:
    """Tests for artwork URL helpers."""
    
    def test_is_placeholder_image(self):
        assert is_placeholder_image("https://s4.bcbits.com/img/blank.gif")
        assert is_placeholder_image("https://f4.bcbits.com/img/0.gif")
        assert not is_placeholder_image("https://f4.bcbits.com/img/a1_2.jpg")
        assert not is_placeholder_image("")
        assert not is_placeholder_image(None)
    
    def test_normalize_artwork_url(self):
        """Test thumbnail suffixes are replaced by the high-resolution one."""
        assert normalize_artwork_url("https://f4.bcbits.com/img/a1_16.jpg") == "https://f4.bcbits.com/img/a1_2.jpg"
        assert normalize_artwork_url("https://f4.bcbits.com/img/a1_10.jpg") == "https://f4.bcbits.com/img/a1_2.jpg"
        assert normalize_artwork_url("https://f4.bcbits.com/img/a1_5.jpg") == "https://f4.bcbits.com/img/a1_5.jpg"


class TestFindArtwork:
    """Tests for locating artwork on a detail page."""
    
    def test_primary_selector(self, fetcher):
        page = soup(detail_page_html(artwork_src="https://f4.bcbits.com/img/a1_10.jpg"))
        
        assert fetcher.find_artwork_url(page) == "https://f4.bcbits.com/img/a1_2.jpg"
    
    def test_selector_order(self, fetcher):
        """Test that earlier selectors win over later ones."""
        page = soup("""
            <div class="albumart"><img src="https://f4.bcbits.com/img/late_2.jpg"></div>
            <div class="art"><img src="https://f4.bcbits.com/img/early_2.jpg"></div>
        """)
        
        assert fetcher.find_artwork_url(page) == "https://f4.bcbits.com/img/early_2.jpg"
    
    def test_placeholder_falls_through(self, fetcher):
        """Test that placeholder and empty sources are skipped in favor of the next selector."""
        page = soup("""
            <div id="tralbumArt"><img src="https://s4.bcbits.com/img/blank.gif"></div>
            <div class="art"><img src=""></div>
            <div class="albumart"><img src="https://example.com/cover.png"></div>
        """)
        
        assert fetcher.find_artwork_url(page) == "https://example.com/cover.png"
    
    def test_no_artwork(self, fetcher):
        assert fetcher.find_artwork_url(soup(detail_page_html())) is None
    
    def test_resolve_artwork_page_failure(self, fetcher):
        """Test that an unreachable page yields no artwork."""
        assert fetcher.resolve_artwork(f"{BASE_URL}/album/missing") is None
    
    def test_download_artwork(self, fetcher, fake_session, temp_dir):
        """Test that a successful download points the cover at the local copy."""
        url = "https://f4.bcbits.com/img/a1_2.jpg"
        fake_session.routes[url] = b"image"
        release = Release(id="album-1", title="T", artist="A", url=PAGE_URL, cover="https://f4.bcbits.com/img/a1_16.jpg")
        
        assert fetcher.download_artwork(release, url) is True
        assert release.cover == "/artwork/album-1.jpg"
        assert (temp_dir / "artwork" / "album-1.jpg").read_bytes() == b"image"
    
    def test_download_artwork_failure_keeps_cover(self, fetcher, no_sleep):
        release = Release(id="album-1", title="T", artist="A", url=PAGE_URL, cover="https://f4.bcbits.com/img/a1_16.jpg")
        
        assert fetcher.download_artwork(release, "https://f4.bcbits.com/img/gone_2.jpg") is False
        assert release.cover == "https://f4.bcbits.com/img/a1_16.jpg"


class TestParseTracks:
    """Tests for reading embedded track metadata."""
    
    def test_playable_tracks(self, fetcher):
        """Test that only tracks with an mp3-128 stream are kept and numbered 1..n."""
        page = soup(detail_page_html(trackinfo=[
            trackinfo_entry(111, "Intro", duration=61.2),
            trackinfo_entry(112, "Hidden", playable=False),
            trackinfo_entry(123, "Doom Scrolling (Remix)!!", duration=240.0),
        ]))
        
        tracks = fetcher.parse_tracks(page)
        
        assert [t.id for t in tracks] == [111, 123]
        assert [t.track_number for t in tracks] == [1, 2]
        assert tracks[0].duration == 61.2
        assert tracks[1].url == "https://t4.bcbits.com/stream/123/mp3-128"
    
    def test_track_title_with_apostrophe(self, fetcher):
        page = soup(detail_page_html(trackinfo=[trackinfo_entry(5, "Don't Stop")]))
        
        assert fetcher.parse_tracks(page)[0].title == "Don't Stop"
    
    def test_malformed_json_is_skipped(self, fetcher):
        """Test that a broken metadata block does not prevent reading the next one."""
        good = detail_page_html(trackinfo=[trackinfo_entry(7, "Seven")])
        page = soup('<div data-tralbum="{not json"></div>' + good)
        
        tracks = fetcher.parse_tracks(page)
        
        assert [t.id for t in tracks] == [7]
    
    def test_malformed_entries_are_skipped(self, fetcher):
        """Test that entries or file maps of the wrong shape are passed over."""
        page = soup(detail_page_html(trackinfo=[
            {"id": 1, "title": "Broken", "file": "oops"},
            "not an entry",
            None,
            trackinfo_entry(2, "Two"),
        ]))
        
        tracks = fetcher.parse_tracks(page)
        
        assert [(t.id, t.track_number) for t in tracks] == [(2, 1)]
    
    def test_no_metadata(self, fetcher):
        assert fetcher.parse_tracks(soup(detail_page_html())) == []
    
    def test_resolve_tracks_uses_browser_agent(self, fetcher, fake_session):
        fake_session.routes[PAGE_URL] = detail_page_html(trackinfo=[trackinfo_entry(1, "One")])
        
        tracks = fetcher.resolve_tracks(PAGE_URL)
        
        assert len(tracks) == 1
        assert "User-Agent" in fake_session.calls[0]["headers"]
    
    def test_resolve_tracks_page_failure(self, fetcher):
        assert fetcher.resolve_tracks(f"{BASE_URL}/album/missing") == []


class TestTrackDownloads:
    """Tests for downloading a release's audio."""
    
    def test_track_filename(self, fetcher):
        track = Track(id=123, title="Doom Scrolling (Remix)!!")
        
        assert fetcher.track_filename(track) == "123-doom-scrolling-remix.mp3"
    
    def test_local_track(self, fetcher):
        track = Track(id=111, title="Intro", duration=61.2, track_number=1, url="https://t4.bcbits.com/stream/111/mp3-128")
        
        local = fetcher.local_track(track)
        
        assert local.path == "/audio/111-intro.mp3"
        assert local.url is None
        assert local.track_number == 1
        assert track.url is not None
    
    def test_failed_track_is_dropped_and_renumbered(self, fetcher, fake_session, temp_dir, no_sleep):
        """Test that a failing track is left out and the rest are numbered 1..n."""
        fake_session.routes["https://t4.bcbits.com/stream/1/mp3-128"] = b"one"
        fake_session.routes["https://t4.bcbits.com/stream/3/mp3-128"] = b"three"
        tracks = fetcher.renumber([
            Track(id=1, title="One", url="https://t4.bcbits.com/stream/1/mp3-128"),
            Track(id=2, title="Two", url="https://t4.bcbits.com/stream/2/mp3-128"),
            Track(id=3, title="Three", url="https://t4.bcbits.com/stream/3/mp3-128"),
        ])
        
        downloaded = fetcher.download_tracks(tracks)
        
        assert [t.id for t in downloaded] == [1, 3]
        assert [t.track_number for t in downloaded] == [1, 2]
        assert [t.path for t in downloaded] == ["/audio/1-one.mp3", "/audio/3-three.mp3"]
        assert not (temp_dir / "audio" / "2-two.mp3").exists()
        # Courtesy delay between tracks, none after the last
        assert no_sleep.call_count == 2
    
    def test_download_release_audio_is_idempotent(self, fetcher, fake_session, temp_dir, no_sleep):
        """Test that a second run fetches only the page and downloads nothing."""
        fake_session.routes[PAGE_URL] = detail_page_html(trackinfo=[
            trackinfo_entry(111, "Intro"),
            trackinfo_entry(123, "Doom Scrolling (Remix)!!"),
        ])
        fake_session.routes["https://t4.bcbits.com/stream/111/mp3-128"] = b"a"
        fake_session.routes["https://t4.bcbits.com/stream/123/mp3-128"] = b"b"
        
        first = fetcher.download_release_audio(PAGE_URL)
        assert len(fake_session.calls) == 3
        
        fake_session.calls.clear()
        no_sleep.reset_mock()
        second = fetcher.download_release_audio(PAGE_URL)
        
        assert fake_session.urls() == [PAGE_URL]
        assert no_sleep.call_count == 0
        assert [t.to_dict() for t in second] == [t.to_dict() for t in first]
        assert fetcher.downloader.network_downloads == 2
        assert (temp_dir / "audio" / "123-doom-scrolling-remix.mp3").read_bytes() == b"b"
    
    def test_download_release_audio_without_tracks(self, fetcher, fake_session):
        fake_session.routes[PAGE_URL] = detail_page_html()
        
        assert fetcher.download_release_audio(PAGE_URL) == []
