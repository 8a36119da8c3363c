"""
Recordshelf CLI Module
Command-line interface for scraping the storefront and maintaining the catalog.
"""

import argparse
import sys
from typing import List, Optional

from ..clients.storefront import StorefrontClient
from ..core.config import PROJECT_NAME, PROJECT_VERSION, PROJECT_DESCRIPTION, CDN_URL, PATHS
from ..core.exceptions import RecordshelfError
from ..core.logger import setup_logging
from ..services.asset_fetcher import AssetFetcher
from ..services.catalog_scraper import CatalogScraper
from ..services.catalog_service import CatalogService
from ..services.catalog_store import CatalogStore
from ..ui.display import DisplayManager


class RecordshelfCLI:
    """Main CLI class for the catalog tooling."""

    def __init__(self, display_manager: Optional[DisplayManager] = None):
        self.display_manager = display_manager or DisplayManager()

    def create_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser."""
        parser = argparse.ArgumentParser(
            prog=PROJECT_NAME.lower(),
            description=f"{PROJECT_NAME} v{PROJECT_VERSION} - {PROJECT_DESCRIPTION}",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  %(prog)s update
  %(prog)s rebuild --expect 14
  %(prog)s audio "https://format416.bandcamp.com/album/doom-scrolling" album-2947447909
  %(prog)s list --cdn-url https://cdn.example.com
            """
        )

        parser.add_argument(
            '--version',
            action='version',
            version=f'{PROJECT_NAME} {PROJECT_VERSION}'
        )
        parser.add_argument(
            '--catalog', '-c',
            default=str(PATHS["CATALOG"]),
            help='Catalog JSON file (default: %(default)s)'
        )
        parser.add_argument(
            '--artwork-dir',
            default=str(PATHS["ARTWORK_DIR"]),
            help='Directory for downloaded artwork (default: %(default)s)'
        )
        parser.add_argument(
            '--audio-dir',
            default=str(PATHS["AUDIO_DIR"]),
            help='Directory for downloaded audio (default: %(default)s)'
        )
        parser.add_argument(
            '--base-url',
            help='Storefront base URL (default: configured storefront)'
        )
        parser.add_argument(
            '--log-level',
            choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
            help='Logging level'
        )

        subparsers = parser.add_subparsers(
            dest='mode',
            help='Available modes',
            required=True
        )

        scrape_parser = subparsers.add_parser(
            'scrape',
            help='Scrape the listing, download listing artwork, and write a fresh catalog'
        )
        self._add_expect_arg(scrape_parser)

        rebuild_parser = subparsers.add_parser(
            'rebuild',
            help='Scrape the listing and take artwork from every release page'
        )
        self._add_expect_arg(rebuild_parser)

        update_parser = subparsers.add_parser(
            'update',
            help='Append new storefront releases to the catalog'
        )
        self._add_expect_arg(update_parser)
        update_parser.add_argument(
            '--with-tracks',
            action='store_true',
            help='Also download audio for new releases'
        )

        subparsers.add_parser(
            'artwork',
            help='Download artwork for every catalog release from its page'
        )

        subparsers.add_parser(
            'tracks',
            help='Add track listings with local audio paths to catalog releases'
        )

        audio_parser = subparsers.add_parser(
            'audio',
            help='Download audio for one album, or for every album/EP in the catalog'
        )
        audio_parser.add_argument(
            'album_url',
            nargs='?',
            help='Album page URL (omit to process the whole catalog)'
        )
        audio_parser.add_argument(
            'album_id',
            nargs='?',
            help='Album id used in progress output'
        )

        list_parser = subparsers.add_parser(
            'list',
            help='Show the catalog with resolved asset URLs'
        )
        list_parser.add_argument(
            '--cdn-url',
            default=CDN_URL,
            help='CDN base URL for asset paths (default: RECORDSHELF_CDN_URL)'
        )
        list_parser.add_argument(
            '--tracks', '-t',
            action='store_true',
            help='Also list tracks'
        )

        return parser

    @staticmethod
    def _add_expect_arg(parser: argparse.ArgumentParser):
        parser.add_argument(
            '--expect', '-e',
            type=int,
            help='Abort unless the listing has exactly this many releases'
        )

    def build_service(self, parsed_args: argparse.Namespace) -> CatalogService:
        """Wire the services for the given arguments."""
        client = StorefrontClient(base_url=parsed_args.base_url)
        return CatalogService(
            scraper=CatalogScraper(client=client),
            fetcher=AssetFetcher(
                client=client,
                artwork_dir=parsed_args.artwork_dir,
                audio_dir=parsed_args.audio_dir
            ),
            store=CatalogStore(parsed_args.catalog),
            expected_count=getattr(parsed_args, 'expect', None)
        )

    def dispatch(self, parsed_args: argparse.Namespace):
        display = self.display_manager

        if parsed_args.mode == 'list':
            releases = CatalogStore(parsed_args.catalog).load()
            display.display_catalog(releases, cdn_url=parsed_args.cdn_url, show_tracks=parsed_args.tracks)
            return

        service = self.build_service(parsed_args)

        if parsed_args.mode == 'scrape':
            report = service.scrape_catalog()
            display.display_run_report(report, "Artwork downloaded")
        elif parsed_args.mode == 'rebuild':
            report = service.rebuild_catalog()
            display.display_release_summary(report.releases)
            display.display_run_report(report, "Artwork downloaded")
        elif parsed_args.mode == 'update':
            report = service.update_catalog(with_tracks=parsed_args.with_tracks)
            display.display_new_releases(report.new_releases)
            display.display_run_report(report, "Artwork downloaded")
        elif parsed_args.mode == 'artwork':
            report = service.refresh_artwork()
            display.display_run_report(report, "Artwork downloaded")
        elif parsed_args.mode == 'tracks':
            report = service.attach_tracks()
            display.display_run_report(report, "Releases updated with tracks")
        elif parsed_args.mode == 'audio':
            if parsed_args.album_url:
                tracks = service.download_album_audio(parsed_args.album_url, parsed_args.album_id)
                display.display_downloaded_tracks(tracks)
            else:
                report = service.download_catalog_audio()
                display.display_run_report(report, "Releases with audio")

    def run(self, args: List[str] = None):
        """Run the CLI with given arguments."""
        parser = self.create_parser()
        parsed_args = parser.parse_args(args)

        if parsed_args.log_level:
            setup_logging(level=parsed_args.log_level)

        try:
            self.dispatch(parsed_args)
        except KeyboardInterrupt:
            self.display_manager.console.print("\n[yellow]⚠[/yellow] Operation cancelled by user.")
            sys.exit(1)
        except RecordshelfError as e:
            self.display_manager.display_error(f"{e}")
            sys.exit(1)
