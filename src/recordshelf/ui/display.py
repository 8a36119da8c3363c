"""
Display management for the Recordshelf CLI with Rich components.
"""

from typing import List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..core.config import PATHS
from ..models.releases import Release, Track
from ..services.catalog_service import RunReport
from ..utils.asset_urls import get_asset_url


def is_local_artwork(release: Release) -> bool:
    return release.cover.startswith(PATHS["ARTWORK_URL_PREFIX"].rstrip("/") + "/")


class DisplayManager:
    """Renders catalogs and run summaries."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    @staticmethod
    def cover_status(release: Release) -> str:
        """Local, remote, or placeholder artwork marker for a release."""
        if is_local_artwork(release):
            return "[green]✓ Local[/green]"
        if "bcbits.com" in release.cover:
            return "[cyan]✓ URL[/cyan]"
        return "[yellow]⚠️ Placeholder[/yellow]"

    def display_header(self, title: str, subtitle: Optional[str] = None):
        self.console.print(Panel(f"[bold cyan]{title}[/bold cyan]", subtitle=subtitle, box=box.ROUNDED, expand=False))

    def display_catalog(self, releases: Sequence[Release], cdn_url: Optional[str] = None, show_tracks: bool = False):
        """Display the catalog with asset references resolved as the front-end would."""
        table = Table(box=box.SIMPLE_HEAVY, show_lines=False)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Artist", style="bold")
        table.add_column("Title")
        table.add_column("Type", style="magenta")
        table.add_column("Tracks", justify="right")
        table.add_column("Cover", overflow="fold")

        for index, release in enumerate(releases, 1):
            table.add_row(
                str(index),
                release.artist,
                release.title,
                release.type,
                str(len(release.tracks)) if release.tracks else "-",
                get_asset_url(release.cover, cdn_url),
            )

        self.console.print(table)

        if show_tracks:
            for release in releases:
                if release.tracks:
                    self.display_tracks(release.tracks, f"{release.artist} - {release.title}", cdn_url)

    def display_tracks(self, tracks: List[Track], heading: str, cdn_url: Optional[str] = None):
        self.console.print(f"\n[bold]{heading}[/bold]")
        for track in tracks:
            location = get_asset_url(track.path or track.url, cdn_url)
            self.console.print(f"  {track.track_number}. {track.title} [dim]{location}[/dim]")

    def display_release_summary(self, releases: Sequence[Release]):
        """Final per-release artwork status, one line each."""
        self.console.print("\n[bold]Final Summary:[/bold]")
        for index, release in enumerate(releases, 1):
            self.console.print(f"{index}. {release.artist} - {release.title} {self.cover_status(release)}")

    def display_run_report(self, report: RunReport, action: str):
        """Display the counts from a pipeline run."""
        self.console.print()
        if report.processed:
            color = "green" if report.failed == 0 else "yellow"
            self.console.print(
                f"[{color}]✓[/{color}] {action}: {report.succeeded}/{report.processed} succeeded"
                + (f", [red]{report.failed} failed[/red]" if report.failed else "")
            )
        if report.written:
            self.console.print(f"[green]✓[/green] Catalog written with {len(report.releases)} release(s)")
        else:
            self.console.print("[dim]Catalog not modified[/dim]")

    def display_new_releases(self, releases: Sequence[Release]):
        if not releases:
            return
        self.console.print("\n[bold]New releases added:[/bold]")
        for index, release in enumerate(releases, 1):
            marker = "[green]✓[/green]" if is_local_artwork(release) else "[yellow]⚠️[/yellow]"
            self.console.print(f"  {index}. {release.artist} - {release.title} {marker}")

    def display_downloaded_tracks(self, tracks: Sequence[Track]):
        self.console.print("\n[bold]=== Summary ===[/bold]")
        self.console.print(f"Downloaded {len(tracks)} track(s)")
        for index, track in enumerate(tracks, 1):
            self.console.print(f"  {index}. {track.title} - {track.path}")

    def display_error(self, message: str):
        self.console.print(f"[bold red]✗[/bold red] {message}")
