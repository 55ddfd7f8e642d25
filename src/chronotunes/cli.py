"""chronotunes CLI using Typer.

Commands:
- generate: Recommend a playlist for a year and location
- songs: List the catalog
- add-song: Add a song to the JSON file or the Google Sheet
- sync-from-sheets / sync-to-sheets: Copy the catalog between backends
- compare: Show which songs differ between the JSON file and the sheet
- test-connection: Check that the Google Sheet is reachable
- clear-cache: Drop cached sheet snapshots
"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from .cache import CatalogCache
from .catalog import CatalogSource
from .catalog.factory import (
    FallbackCatalog,
    build_catalog_source,
    build_json_catalog,
    build_sheets_catalog,
)
from .catalog.sync import compare_catalogs, sync_json_to_sheet, sync_sheet_to_json
from .config import CatalogMode, Settings, get_settings
from .errors import ChronotunesError
from .generator import PlaylistGenerator
from .logging import configure_logging
from .models import PlaylistQuery
from .query import parse_query

app = typer.Typer(
    name="chronotunes",
    help="Recommend playlists for a historical year and place.",
    add_completion=False,
)


def _settings(catalog: Path | None = None) -> Settings:
    settings = get_settings()
    configure_logging(level=settings.log_level, format=settings.log_format)
    if catalog:
        settings = settings.model_copy(update={"catalog_path": catalog})
    return settings


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(1)


@app.command()
def generate(
    query: Annotated[Optional[str], typer.Argument(help="Combined query, e.g. '1776, New York'")] = None,
    year: Annotated[Optional[int], typer.Option("--year", "-y", help="Historical year")] = None,
    location: Annotated[Optional[str], typer.Option("--location", "-l", help="Location")] = None,
    source: Annotated[Optional[str], typer.Option("--source", "-s", help="Catalog source (auto, json, sheets)")] = None,
    catalog: Annotated[Optional[Path], typer.Option("--catalog", "-c", help="Path to songs JSON file")] = None,
    count: Annotated[Optional[int], typer.Option("--count", "-n", min=1, help="Maximum playlist length")] = None,
    output_json: Annotated[Optional[Path], typer.Option("--output", "-o", help="Output JSON file for results")] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)")] = None,
    log_format: Annotated[Optional[str], typer.Option("--log-format", help="Log format (console, json)")] = None,
) -> None:
    """Recommend a playlist for a year and location.

    Example:
        chronotunes generate "1776, New York"
        chronotunes generate --year 1889 --location Paris
    """
    settings = _settings(catalog)
    if log_level or log_format:
        configure_logging(
            level=log_level or settings.log_level,
            format="json" if (log_format or settings.log_format) == "json" else "console",
        )

    try:
        if query:
            playlist_query = parse_query(query)
        elif year is not None and location:
            playlist_query = PlaylistQuery(year=year, location=location)
        else:
            raise _fail("Provide a query like '1776, New York' or both --year and --location")

        mode = _catalog_mode(source)
        with build_catalog_source(settings, mode) as catalog_source:
            generator = PlaylistGenerator(catalog_source, count=count or settings.playlist_size)
            result = generator.generate(playlist_query)
    except ChronotunesError as e:
        raise _fail(str(e))

    typer.echo(f"Playlist for {result.query_location}, {result.query_year}")
    typer.echo("=" * 60)
    if not result.songs:
        typer.echo("No songs existed yet for that year in the catalog.")
    for i, song in enumerate(result.songs, 1):
        typer.echo(f"{i:2}. {song.title} - {song.artist} ({song.year})")
        details = ", ".join(part for part in (song.genre, song.cultural_region) if part)
        if details:
            typer.echo(f"    {details}")
        if song.historical_significance:
            typer.echo(f"    {song.historical_significance}")

    if output_json:
        output_json.write_text(result.model_dump_json(indent=2), encoding="utf-8")
        typer.echo()
        typer.echo(f"Results written to: {output_json}")


def _catalog_mode(value: str | None) -> CatalogMode | None:
    if value is None:
        return None
    if value not in ("auto", "json", "sheets"):
        raise _fail(f"Unknown source '{value}'. Use auto, json or sheets.")
    return value  # type: ignore[return-value]


def _served_by(source: CatalogSource) -> str:
    if isinstance(source, FallbackCatalog) and source.last_used:
        return source.last_used
    return source.name


@app.command()
def songs(
    source: Annotated[Optional[str], typer.Option("--source", "-s", help="Catalog source (auto, json, sheets)")] = None,
    catalog: Annotated[Optional[Path], typer.Option("--catalog", "-c", help="Path to songs JSON file")] = None,
) -> None:
    """List every song in the catalog."""
    settings = _settings(catalog)
    try:
        with build_catalog_source(settings, _catalog_mode(source)) as catalog_source:
            all_songs = catalog_source.fetch_songs()
            served_by = _served_by(catalog_source)
    except ChronotunesError as e:
        raise _fail(str(e))

    typer.echo(f"{len(all_songs)} song(s) from {served_by}:")
    for song in sorted(all_songs, key=lambda s: (s.year, s.id)):
        typer.echo(f"  [{song.id}] {song.year}  {song.title} - {song.artist} ({song.cultural_region})")


@app.command("add-song")
def add_song(
    title: Annotated[str, typer.Option("--title", "-t", help="Song title")],
    artist: Annotated[str, typer.Option("--artist", "-a", help="Artist")],
    year: Annotated[int, typer.Option("--year", "-y", help="Release or origin year")],
    genre: Annotated[str, typer.Option("--genre", "-g", help="Genre")] = "",
    region: Annotated[str, typer.Option("--region", "-r", help="Cultural region")] = "",
    significance: Annotated[str, typer.Option("--significance", help="Historical significance")] = "",
    target: Annotated[str, typer.Option("--target", help="Where to add the song (json, sheets)")] = "json",
    catalog: Annotated[Optional[Path], typer.Option("--catalog", "-c", help="Path to songs JSON file")] = None,
) -> None:
    """Add a song to the JSON catalog or the Google Sheet."""
    settings = _settings(catalog)
    fields = {
        "title": title,
        "artist": artist,
        "year": year,
        "genre": genre,
        "cultural_region": region,
        "historical_significance": significance,
    }

    try:
        if target == "json":
            song = build_json_catalog(settings).add_song(fields)
        elif target == "sheets":
            with build_sheets_catalog(settings) as sheets:
                song = sheets.append_song(fields)
        else:
            raise _fail(f"Unknown target '{target}'. Use json or sheets.")
    except ChronotunesError as e:
        raise _fail(str(e))

    typer.echo(f"Added [{song.id}] {song.title} - {song.artist} ({song.year})")


@app.command("sync-from-sheets")
def sync_from_sheets(
    catalog: Annotated[Optional[Path], typer.Option("--catalog", "-c", help="Path to songs JSON file")] = None,
) -> None:
    """Overwrite the local JSON catalog with the Google Sheet (keeps a backup)."""
    settings = _settings(catalog)
    try:
        with build_sheets_catalog(settings) as sheets:
            count = sync_sheet_to_json(sheets, build_json_catalog(settings))
    except ChronotunesError as e:
        raise _fail(str(e))

    typer.echo(f"Synced {count} song(s) from Google Sheets to {settings.catalog_path}")


@app.command("sync-to-sheets")
def sync_to_sheets(
    catalog: Annotated[Optional[Path], typer.Option("--catalog", "-c", help="Path to songs JSON file")] = None,
) -> None:
    """Replace the Google Sheet contents with the local JSON catalog."""
    settings = _settings(catalog)
    try:
        with build_sheets_catalog(settings) as sheets:
            count = sync_json_to_sheet(build_json_catalog(settings), sheets)
    except ChronotunesError as e:
        raise _fail(str(e))

    typer.echo(f"Synced {count} song(s) from {settings.catalog_path} to Google Sheets")


@app.command()
def compare(
    catalog: Annotated[Optional[Path], typer.Option("--catalog", "-c", help="Path to songs JSON file")] = None,
) -> None:
    """Show which songs exist only in the JSON file or only in the Google Sheet."""
    settings = _settings(catalog)
    try:
        with build_sheets_catalog(settings, use_cache=False) as sheets:
            result = compare_catalogs(build_json_catalog(settings), sheets)
    except ChronotunesError as e:
        raise _fail(str(e))

    typer.echo(f"Local songs: {result.local_count}")
    typer.echo(f"Sheet songs: {result.sheet_count}")
    if result.count_difference:
        typer.echo(f"Count mismatch: {result.count_difference} difference")

    for label, only in (("Only in local", result.only_local), ("Only in sheet", result.only_sheet)):
        if only:
            typer.echo(f"{label} ({len(only)}):")
            for song in only:
                typer.echo(f"  - [{song.id}] {song.title} by {song.artist}")

    if result.in_sync:
        typer.echo("Catalogs are in sync.")


@app.command("test-connection")
def connection_check() -> None:
    """Check that the configured Google Sheet is reachable."""
    settings = _settings()
    try:
        with build_sheets_catalog(settings, use_cache=False) as sheets:
            title = sheets.check_connection()
    except ChronotunesError as e:
        raise _fail(str(e))

    typer.echo(f"Connected to spreadsheet '{title}'")


@app.command("clear-cache")
def clear_cache() -> None:
    """Clear cached Google Sheets snapshots."""
    settings = _settings()
    CatalogCache(settings.cache_path, settings.cache_ttl_hours).clear_all()
    typer.echo("Cache cleared.")


def main() -> None:
    """CLI entry point."""
    app()
