"""Command-line interface for jaspardata.

Provides commands for listing JASPAR releases, downloading them into the
local cache, building SQLite databases, and managing the cache.
"""

from pathlib import Path

import typer
from rich.console import Console

app = typer.Typer(
    name="jaspardata",
    help="Versioned JASPAR database releases with local caching",
    no_args_is_help=True,
)
console = Console()

# Sub-applications
cache_app = typer.Typer(help="Manage the release file cache")

app.add_typer(cache_app, name="cache")


# =============================================================================
# Top-level commands
# =============================================================================


@app.command("releases")
def releases_cmd() -> None:
    """List available JASPAR releases, newest first."""
    from jaspardata.cache import FileCache
    from jaspardata.errors import JasparDataError
    from jaspardata.resolver import default_catalog

    try:
        catalog = default_catalog()
        cache = FileCache()
        statuses = [
            (release, cache.get_cached(catalog.resolve(release)) is not None)
            for release in catalog.list_releases()
        ]
    except JasparDataError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print("[bold blue]Available JASPAR Releases[/bold blue]")
    console.print("=" * 50)

    for release, cached in statuses:
        status = "[green]cached[/green]" if cached else "[dim]not cached[/dim]"
        console.print(f"  {release:<16} {status}")


@app.command("open")
def open_cmd(
    release: str = typer.Argument(None, help="Release to open (default: newest)"),
) -> None:
    """Download a release into the cache (if needed) and print its path."""
    from jaspardata.errors import JasparDataError
    from jaspardata.resolver import open_release

    try:
        handle = open_release(release)
    except (JasparDataError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]{handle.release_id}[/green]: {handle.local_path}")


@app.command("make-sqlite")
def make_sqlite_cmd(
    release: str = typer.Argument(None, help="Release to build (default: newest)"),
    output: Path = typer.Option(
        None,
        "-o", "--output",
        help="Output SQLite file (default: <release>.sqlite)",
    ),
    force: bool = typer.Option(False, "-f", "--force", help="Overwrite existing output"),
) -> None:
    """Build a SQLite database from a release's SQL dump."""
    import sqlite3

    from jaspardata.errors import JasparDataError
    from jaspardata.resolver import open_release
    from jaspardata.sqlite import build_sqlite

    try:
        handle = open_release(release)
        if output is None:
            output = Path(f"{handle.release_id}.sqlite")
        console.print(f"[blue]Building {output} from {handle.local_path.name}...[/blue]")
        db_path = build_sqlite(handle.local_path, output, overwrite=force)
    except (JasparDataError, OSError, ValueError, sqlite3.Error) as e:
        # ValueError covers UnicodeDecodeError from non-UTF-8 dumps
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Built {handle.release_id} database: {db_path}[/green]")


# =============================================================================
# Cache commands
# =============================================================================


@cache_app.command("list")
def cache_list_cmd() -> None:
    """List all cached release files."""
    from jaspardata.cache import FileCache

    entries = FileCache().list_cached()

    console.print("[bold blue]Cached Release Files[/bold blue]")
    console.print("=" * 60)

    if not entries:
        console.print("\n[yellow]No cached files found.[/yellow]")
        console.print("Run 'jaspardata open <release>' to cache a release.")
        return

    for entry in entries:
        size_mb = entry["file_size_bytes"] / 1024 / 1024
        console.print(
            f"{entry['filename']:<40} {size_mb:>6.1f} MB    {entry['cached_at'][:10]}"
        )
        console.print(f"[dim]  {entry['source_url']}[/dim]")

    console.print(f"\nTotal: {len(entries)} cached file(s)")


@cache_app.command("add")
def cache_add_cmd(
    local_file: Path = typer.Argument(..., help="Path to a downloaded release file"),
    url: str = typer.Option(..., "--url", help="Source URL the file was downloaded from"),
) -> None:
    """Add an already downloaded file to the cache."""
    from jaspardata.cache import FileCache

    if not local_file.exists():
        console.print(f"[red]File not found: {local_file}[/red]")
        raise typer.Exit(1)

    cached_path = FileCache().add_to_cache(local_file, url)
    console.print(f"[green]Cached as {cached_path.name}[/green]")


@cache_app.command("remove")
def cache_remove_cmd(
    url: str = typer.Argument(..., help="Source URL of the cached file"),
    force: bool = typer.Option(False, "-f", "--force", help="Skip confirmation"),
) -> None:
    """Remove a cached release file."""
    from jaspardata.cache import FileCache

    cache = FileCache()
    cached_path = cache.get_cached(url)

    if cached_path is None:
        console.print(f"[red]No cached file found for: {url}[/red]")
        raise typer.Exit(1)

    if not force:
        console.print(f"About to remove: {cached_path.name}")
        confirm = typer.confirm("Are you sure?")
        if not confirm:
            console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(0)

    cache.remove_cached(url)
    console.print(f"[green]Removed: {cached_path.name}[/green]")


if __name__ == "__main__":
    app()
