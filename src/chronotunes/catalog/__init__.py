"""Catalog source interface and base classes.

The scoring core only needs a list of songs. Sources own where that list
lives (a local JSON file, a Google Sheets spreadsheet) and hand out a
fresh snapshot per call.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from ..errors import CatalogError
from ..models import Song


@runtime_checkable
class CatalogSource(Protocol):
    """Protocol for song catalog sources.

    Implement this protocol to add new storage backends.
    """

    @property
    def name(self) -> str:
        """Unique identifier for this source."""
        ...

    def fetch_songs(self) -> list[Song]:
        """Return the current catalog snapshot.

        Raises:
            CatalogError: If the catalog cannot be read or validated
        """
        ...

    def close(self) -> None:
        """Release any connections held by the source."""
        ...


class BaseCatalogSource(ABC):
    """Abstract base class for catalog sources.

    Usable as a context manager; ``close`` runs on exit.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this source."""
        pass

    @abstractmethod
    def fetch_songs(self) -> list[Song]:
        """Return the current catalog snapshot."""
        pass

    def close(self) -> None:
        """Release any connections held by the source."""

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def validate_catalog(songs: Iterable[Song]) -> list[Song]:
    """Check that no two songs share an id.

    Raises:
        CatalogError: On the first duplicate id
    """
    seen: set[int] = set()
    result: list[Song] = []
    for song in songs:
        if song.id in seen:
            raise CatalogError(f"Duplicate song id {song.id} ('{song.title}')")
        seen.add(song.id)
        result.append(song)
    return result


def next_song_id(songs: Iterable[Song]) -> int:
    """Next free id: one past the current maximum, or 1 for an empty catalog."""
    return max((song.id for song in songs), default=0) + 1


__all__ = [
    "CatalogSource",
    "BaseCatalogSource",
    "validate_catalog",
    "next_song_id",
]
