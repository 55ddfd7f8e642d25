"""Google Sheets catalog source.

Reads and writes the song catalog through the Sheets v4 REST API.
API documentation: https://developers.google.com/sheets/api/reference/rest

Sheet layout (row 1 is the header):
    A: ID  B: Title  C: Artist  D: Year  E: Genre  F: Cultural Region
    G: Historical Significance  H: Spotify URL  I: YouTube URL  J: Apple Music URL
"""

import re
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from ..cache import CatalogCache
from ..errors import CatalogError
from ..logging import get_logger
from ..models import Song
from . import BaseCatalogSource, next_song_id, validate_catalog

logger = get_logger(__name__)

HEADERS = [
    "ID",
    "Title",
    "Artist",
    "Year",
    "Genre",
    "Cultural Region",
    "Historical Significance",
    "Spotify URL",
    "YouTube URL",
    "Apple Music URL",
]

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


def _parse_int(value: Any) -> int | None:
    """Parse the leading integer of a cell, or None if there is none."""
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def _cell(row: list[Any], index: int) -> str:
    return str(row[index]).strip() if index < len(row) and row[index] is not None else ""


def row_to_song(row: list[Any]) -> Song:
    """Convert a sheet row into a Song.

    Unparseable year cells default to 0.

    Raises:
        ValueError: If the id cell holds no integer
        ValidationError: If required fields are empty
    """
    song_id = _parse_int(_cell(row, 0))
    if song_id is None:
        raise ValueError(f"Unparseable song id {_cell(row, 0)!r}")

    return Song(
        id=song_id,
        title=_cell(row, 1),
        artist=_cell(row, 2),
        year=_parse_int(_cell(row, 3)) or 0,
        genre=_cell(row, 4),
        cultural_region=_cell(row, 5),
        historical_significance=_cell(row, 6),
        spotify_url=_cell(row, 7) or None,
        youtube_url=_cell(row, 8) or None,
        apple_music_url=_cell(row, 9) or None,
    )


def song_to_row(song: Song) -> list[Any]:
    """Convert a Song into a sheet row in column order."""
    return [
        song.id,
        song.title,
        song.artist,
        song.year,
        song.genre,
        song.cultural_region,
        song.historical_significance,
        song.spotify_url or "",
        song.youtube_url or "",
        song.apple_music_url or "",
    ]


class SheetsCatalog(BaseCatalogSource):
    """Google Sheets catalog source.

    An API key is enough to read a publicly shared sheet. Writing needs an
    OAuth access token with the spreadsheets scope.
    """

    BASE_URL = "https://sheets.googleapis.com/v4"
    MAX_ROWS = 1000

    def __init__(
        self,
        spreadsheet_id: str,
        api_key: str | None = None,
        access_token: str | None = None,
        tab: str = "Sheet1",
        cache: CatalogCache | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the Sheets source.

        Args:
            spreadsheet_id: Spreadsheet ID from the sheet URL
            api_key: Optional Google API key for read access
            access_token: Optional OAuth bearer token, required for writes
            tab: Name of the worksheet holding the catalog
            cache: Optional snapshot cache for pulls
            transport: Optional httpx transport override
        """
        self.spreadsheet_id = spreadsheet_id
        self.tab = tab
        self.cache = cache
        self.access_token = access_token

        headers = {"Accept": "application/json"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"

        self._client = httpx.Client(
            base_url=self.BASE_URL,
            headers=headers,
            params={"key": api_key} if api_key else None,
            timeout=30.0,
            transport=transport,
        )

    @property
    def name(self) -> str:
        return "sheets"

    def close(self) -> None:
        self._client.close()

    def check_connection(self) -> str:
        """Fetch the spreadsheet title to confirm the sheet is reachable.

        Raises:
            CatalogError: If the request fails
        """
        data = self._request(
            "GET",
            f"/spreadsheets/{self.spreadsheet_id}",
            params={"fields": "properties.title"},
        )
        title = data.get("properties", {}).get("title", "")
        logger.info("sheet_connection_ok", spreadsheet_id=self.spreadsheet_id, title=title)
        return title

    def _values_path(self, cell_range: str, suffix: str = "") -> str:
        quoted = quote(f"{self.tab}!{cell_range}", safe="!:")
        return f"/spreadsheets/{self.spreadsheet_id}/values/{quoted}{suffix}"

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(
                "sheets_request_failed",
                method=method,
                path=path,
                error=str(e),
            )
            raise CatalogError(f"Google Sheets request failed: {e}") from e
        return response.json() if response.content else {}

    def _require_token(self) -> None:
        if not self.access_token:
            raise CatalogError("Writing to Google Sheets requires an OAuth access token")

    def fetch_songs(self) -> list[Song]:
        if self.cache:
            cached = self.cache.get_snapshot(self.name, self.spreadsheet_id)
            if cached is not None:
                logger.info("catalog_cache_hit", source=self.name, count=len(cached))
                return cached

        logger.info("pulling_sheet", spreadsheet_id=self.spreadsheet_id, tab=self.tab)
        data = self._request("GET", self._values_path(f"A2:J{self.MAX_ROWS}"))

        songs: list[Song] = []
        for row_number, row in enumerate(data.get("values", []), start=2):
            if not row or not _cell(row, 0):
                continue
            try:
                songs.append(row_to_song(row))
            except ValidationError as e:
                logger.warning("skipping_invalid_row", row=row_number, errors=e.error_count())
            except ValueError as e:
                logger.warning("skipping_invalid_row", row=row_number, error=str(e))

        songs = validate_catalog(songs)
        logger.info("catalog_loaded", source=self.name, count=len(songs))

        if self.cache:
            self.cache.set_snapshot(self.name, self.spreadsheet_id, songs)
        return songs

    def push_songs(self, songs: list[Song]) -> None:
        """Replace the sheet contents with a header row plus ``songs``."""
        self._require_token()
        songs = validate_catalog(songs)

        self._request("POST", self._values_path("A:J", ":clear"))
        rows = [HEADERS, *(song_to_row(s) for s in songs)]
        self._request(
            "PUT",
            self._values_path(f"A1:J{len(rows)}"),
            params={"valueInputOption": "RAW"},
            json={"values": rows},
        )

        if self.cache:
            self.cache.invalidate(self.name, self.spreadsheet_id)
        logger.info("sheet_pushed", spreadsheet_id=self.spreadsheet_id, count=len(songs))

    def append_song(self, fields: dict[str, Any]) -> Song:
        """Append one song with the next free id.

        Args:
            fields: Song fields without ``id``; title, artist and year are required

        Returns:
            The stored song
        """
        self._require_token()
        if self.cache:
            self.cache.invalidate(self.name, self.spreadsheet_id)
        existing = self.fetch_songs()

        try:
            song = Song.model_validate({**fields, "id": next_song_id(existing)})
        except ValidationError as e:
            raise CatalogError(f"Invalid song: {e}") from e

        self._request(
            "POST",
            self._values_path("A:J", ":append"),
            params={"valueInputOption": "RAW", "insertDataOption": "INSERT_ROWS"},
            json={"values": [song_to_row(song)]},
        )

        if self.cache:
            self.cache.invalidate(self.name, self.spreadsheet_id)
        logger.info("song_added", source=self.name, id=song.id, title=song.title)
        return song
