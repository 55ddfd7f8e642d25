"""Sync between the local JSON catalog and a Google Sheets catalog."""

from dataclasses import dataclass, field

from ..logging import get_logger
from ..models import Song
from .json_file import JsonFileCatalog
from .sheets import SheetsCatalog

logger = get_logger(__name__)


@dataclass
class CatalogComparison:
    """Differences between the JSON catalog and the sheet, matched by id."""

    local_count: int
    sheet_count: int
    only_local: list[Song] = field(default_factory=list)
    only_sheet: list[Song] = field(default_factory=list)

    @property
    def count_difference(self) -> int:
        return abs(self.local_count - self.sheet_count)

    @property
    def in_sync(self) -> bool:
        return not self.only_local and not self.only_sheet


def sync_sheet_to_json(sheets: SheetsCatalog, json_catalog: JsonFileCatalog) -> int:
    """Pull the sheet and overwrite the JSON file, keeping a backup.

    Returns:
        Number of songs written
    """
    if sheets.cache:
        sheets.cache.invalidate(sheets.name, sheets.spreadsheet_id)
    songs = sheets.fetch_songs()
    json_catalog.save_songs(songs, backup=True)
    logger.info("synced_sheet_to_json", path=str(json_catalog.path), count=len(songs))
    return len(songs)


def sync_json_to_sheet(json_catalog: JsonFileCatalog, sheets: SheetsCatalog) -> int:
    """Replace the sheet contents with the JSON catalog.

    Returns:
        Number of songs uploaded
    """
    songs = json_catalog.fetch_songs()
    sheets.push_songs(songs)
    logger.info("synced_json_to_sheet", spreadsheet_id=sheets.spreadsheet_id, count=len(songs))
    return len(songs)


def compare_catalogs(json_catalog: JsonFileCatalog, sheets: SheetsCatalog) -> CatalogComparison:
    """Compare the JSON catalog with a fresh pull of the sheet.

    Only ids are compared; a song present on both sides with different
    fields counts as in sync.
    """
    if sheets.cache:
        sheets.cache.invalidate(sheets.name, sheets.spreadsheet_id)
    local_songs = json_catalog.fetch_songs()
    sheet_songs = sheets.fetch_songs()

    local_ids = {s.id for s in local_songs}
    sheet_ids = {s.id for s in sheet_songs}

    comparison = CatalogComparison(
        local_count=len(local_songs),
        sheet_count=len(sheet_songs),
        only_local=[s for s in local_songs if s.id not in sheet_ids],
        only_sheet=[s for s in sheet_songs if s.id not in local_ids],
    )
    logger.info(
        "catalogs_compared",
        local=comparison.local_count,
        sheet=comparison.sheet_count,
        only_local=len(comparison.only_local),
        only_sheet=len(comparison.only_sheet),
    )
    return comparison
