"""Local JSON file catalog.

The file holds a JSON array of song objects.
"""

import json
import shutil
import time
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from ..errors import CatalogError
from ..logging import get_logger
from ..models import Song
from . import BaseCatalogSource, next_song_id, validate_catalog

logger = get_logger(__name__)

_SONG_LIST = TypeAdapter(list[Song])


class JsonFileCatalog(BaseCatalogSource):
    """Catalog backed by a local JSON file."""

    def __init__(self, path: Path):
        """Initialize the JSON catalog.

        Args:
            path: Path to the songs JSON file
        """
        self.path = Path(path)

    @property
    def name(self) -> str:
        return "json"

    def fetch_songs(self) -> list[Song]:
        if not self.path.exists():
            raise CatalogError(f"Catalog file not found: {self.path}")

        try:
            songs = _SONG_LIST.validate_json(self.path.read_bytes())
        except ValidationError as e:
            logger.error("catalog_invalid", path=str(self.path), errors=e.error_count())
            raise CatalogError(f"Invalid catalog file {self.path}: {e}") from e

        songs = validate_catalog(songs)
        logger.info("catalog_loaded", source=self.name, path=str(self.path), count=len(songs))
        return songs

    def backup(self) -> Path | None:
        """Copy the current file to <stem>.backup.<millis>.json, if it exists."""
        if not self.path.exists():
            return None
        backup_path = self.path.with_name(
            f"{self.path.stem}.backup.{int(time.time() * 1000)}{self.path.suffix}"
        )
        shutil.copyfile(self.path, backup_path)
        logger.info("catalog_backup_created", path=str(backup_path))
        return backup_path

    def save_songs(self, songs: list[Song], backup: bool = True) -> None:
        """Write the catalog, backing up any existing file first."""
        songs = validate_catalog(songs)
        if backup:
            self.backup()

        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [song.model_dump(exclude_none=True) for song in songs]
        self.path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        logger.info("catalog_saved", path=str(self.path), count=len(songs))

    def add_song(self, fields: dict[str, Any]) -> Song:
        """Append a new song with the next free id.

        Args:
            fields: Song fields without ``id``; title, artist and year are required

        Returns:
            The stored song
        """
        songs = self.fetch_songs() if self.path.exists() else []
        try:
            song = Song.model_validate({**fields, "id": next_song_id(songs)})
        except ValidationError as e:
            raise CatalogError(f"Invalid song: {e}") from e

        self.save_songs([*songs, song], backup=False)
        logger.info("song_added", source=self.name, id=song.id, title=song.title)
        return song
