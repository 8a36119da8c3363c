"""
Asset Downloader Module
Streams artwork and audio files to disk with bounded retry.
"""

from pathlib import Path
from typing import Callable, Dict, Optional, Union

import requests

from ..core.config import DOWNLOAD_CONFIG, STOREFRONT_CONFIG
from ..core.exceptions import DownloadError
from ..core.logger import get_logger
from ..utils.retry import retry_with_backoff, RetryError

logger = get_logger("downloader")

IMAGE = "image"
AUDIO = "audio"


class AssetDownloader:
    """Downloads artwork and audio files to local storage."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        max_attempts: Optional[int] = None,
        backoff_step: Optional[float] = None,
        sleep: Optional[Callable[[float], None]] = None
    ):
        self.session = session or requests.Session()
        self.max_attempts = max_attempts or DOWNLOAD_CONFIG["MAX_ATTEMPTS"]
        self.backoff_step = DOWNLOAD_CONFIG["BACKOFF_STEP"] if backoff_step is None else backoff_step
        self.chunk_size = DOWNLOAD_CONFIG["CHUNK_SIZE"]
        self.timeouts = {
            IMAGE: DOWNLOAD_CONFIG["IMAGE_TIMEOUT"],
            AUDIO: DOWNLOAD_CONFIG["AUDIO_TIMEOUT"],
        }
        self._sleep = sleep
        # Number of files actually fetched over the network
        self.network_downloads = 0

    @staticmethod
    def is_downloaded(path: Union[str, Path]) -> bool:
        """Whether the destination already holds a non-empty file."""
        path = Path(path)
        return path.is_file() and path.stat().st_size > 0

    def _headers_for(self, kind: str) -> Dict[str, str]:
        # The storefront CDN blocks audio requests without a browser User-Agent
        if kind == AUDIO:
            return {'User-Agent': STOREFRONT_CONFIG["USER_AGENT"]}
        return {}

    def _download_once(self, url: str, destination: Path, kind: str) -> Path:
        """Stream one attempt to disk; raise DownloadError unless a non-empty file results."""
        try:
            response = self.session.get(
                url,
                headers=self._headers_for(kind),
                stream=True,
                timeout=self.timeouts[kind]
            )
            try:
                response.raise_for_status()
                with open(destination, 'wb') as f:
                    for chunk in response.iter_content(chunk_size=self.chunk_size):
                        if chunk:
                            f.write(chunk)
            finally:
                response.close()
        except (requests.exceptions.RequestException, OSError) as e:
            self._remove_partial(destination)
            raise DownloadError(f"{e}") from e

        if not self.is_downloaded(destination):
            self._remove_partial(destination)
            raise DownloadError("Downloaded file is empty")

        return destination

    @staticmethod
    def _remove_partial(destination: Path):
        try:
            destination.unlink()
        except FileNotFoundError:
            pass

    def download(self, url: str, destination: Union[str, Path], kind: str = IMAGE) -> bool:
        """
        Download an asset unless it is already present.

        Args:
            url: Remote asset URL
            destination: Local file path
            kind: IMAGE or AUDIO; selects timeout and headers

        Returns:
            True if the file is present and non-empty afterwards, False once every
            attempt has failed
        """
        destination = Path(destination)
        if self.is_downloaded(destination):
            logger.info(f"{destination.name} (already exists)")
            return True

        destination.parent.mkdir(parents=True, exist_ok=True)

        @retry_with_backoff(
            max_attempts=self.max_attempts,
            backoff_step=self.backoff_step,
            exceptions=(DownloadError,),
            sleep=self._sleep
        )
        def attempt_download():
            logger.debug(f"Downloading {destination.name}: {url}")
            return self._download_once(url, destination, kind)

        try:
            attempt_download()
        except RetryError as e:
            logger.error(f"✗ Failed to download {destination.name} after {e.attempts} attempts: {e.__cause__}")
            return False

        self.network_downloads += 1
        size_mb = destination.stat().st_size / 1024 / 1024
        logger.info(f"✓ Downloaded {destination.name} ({size_mb:.2f} MB)")
        return True

    def download_image(self, url: str, destination: Union[str, Path]) -> bool:
        """Download an artwork image (30s timeout)."""
        return self.download(url, destination, kind=IMAGE)

    def download_audio(self, url: str, destination: Union[str, Path]) -> bool:
        """Download an audio file (120s timeout, browser User-Agent)."""
        return self.download(url, destination, kind=AUDIO)
