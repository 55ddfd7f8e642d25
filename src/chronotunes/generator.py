"""Playlist generation orchestrator.

Coordinates the flow:
1. Score every catalog entry against the query
2. Run diversity selection
3. Package the result with a generation timestamp
"""

from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from .catalog import CatalogSource
from .logging import get_logger
from .models import PlaylistQuery, PlaylistResult, Song
from .scoring import score_catalog
from .selection import PLAYLIST_SIZE, select_playlist

logger = get_logger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def generate_playlist(
    catalog: Sequence[Song],
    query_year: int,
    query_location: str,
    *,
    count: int = PLAYLIST_SIZE,
    clock: Clock | None = None,
) -> PlaylistResult:
    """Generate a playlist for a year and location.

    The catalog is treated as an immutable snapshot; nothing is cached
    between calls. Given the same catalog, query and clock the result is
    fully deterministic.

    Args:
        catalog: Songs to choose from
        query_year: Historical year of interest
        query_location: Free-text location
        count: Maximum playlist length
        clock: Optional time source, defaults to UTC wall-clock time

    Returns:
        PlaylistResult echoing the query
    """
    scored = score_catalog(catalog, query_year, query_location)
    songs = select_playlist(scored, count)

    generated_at = (clock or _utc_now)()

    logger.info(
        "playlist_generated",
        year=query_year,
        location=query_location,
        catalog_size=len(catalog),
        selected=len(songs),
    )

    return PlaylistResult(
        query_year=query_year,
        query_location=query_location,
        generated_at=generated_at,
        songs=songs,
    )


class PlaylistGenerator:
    """Generate playlists from whatever catalog a source currently holds."""

    def __init__(
        self,
        source: CatalogSource,
        count: int = PLAYLIST_SIZE,
        clock: Clock | None = None,
    ):
        """Initialize the generator.

        Args:
            source: Catalog source to fetch a snapshot from on each call
            count: Maximum playlist length
            clock: Optional time source
        """
        self.source = source
        self.count = count
        self.clock = clock

    def generate(self, query: PlaylistQuery) -> PlaylistResult:
        """Fetch a fresh catalog snapshot and generate a playlist for it."""
        catalog = self.source.fetch_songs()
        logger.debug("catalog_snapshot", source=self.source.name, songs=len(catalog))
        return generate_playlist(
            catalog,
            query.year,
            query.location,
            count=self.count,
            clock=self.clock,
        )
