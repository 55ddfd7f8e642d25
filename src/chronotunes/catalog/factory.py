"""Build catalog sources from settings."""

from ..cache import CatalogCache
from ..config import CatalogMode, Settings
from ..errors import CatalogError
from ..logging import get_logger
from ..models import Song
from . import BaseCatalogSource, CatalogSource
from .json_file import JsonFileCatalog
from .sheets import SheetsCatalog

logger = get_logger(__name__)


class FallbackCatalog(BaseCatalogSource):
    """Try a primary source, falling back to a secondary one on failure."""

    def __init__(self, primary: CatalogSource, fallback: CatalogSource):
        self.primary = primary
        self.fallback = fallback
        self.last_used: str | None = None

    @property
    def name(self) -> str:
        return "auto"

    def fetch_songs(self) -> list[Song]:
        try:
            songs = self.primary.fetch_songs()
            self.last_used = self.primary.name
        except CatalogError as e:
            logger.warning(
                "catalog_fallback",
                primary=self.primary.name,
                fallback=self.fallback.name,
                error=str(e),
            )
            songs = self.fallback.fetch_songs()
            self.last_used = self.fallback.name
        return songs

    def close(self) -> None:
        try:
            self.primary.close()
        finally:
            self.fallback.close()


def build_json_catalog(settings: Settings) -> JsonFileCatalog:
    return JsonFileCatalog(settings.catalog_path)


def build_sheets_catalog(settings: Settings, use_cache: bool = True) -> SheetsCatalog:
    """Build the Sheets source.

    Raises:
        CatalogError: If no spreadsheet id is configured
    """
    if not settings.google_sheets_id:
        raise CatalogError("CHRONOTUNES_GOOGLE_SHEETS_ID is not configured")

    cache = CatalogCache(settings.cache_path, settings.cache_ttl_hours) if use_cache else None
    return SheetsCatalog(
        spreadsheet_id=settings.google_sheets_id,
        api_key=settings.google_sheets_api_key,
        access_token=settings.google_sheets_access_token,
        tab=settings.google_sheets_tab,
        cache=cache,
    )


def build_catalog_source(settings: Settings, mode: CatalogMode | None = None) -> CatalogSource:
    """Build the catalog source for a mode ("auto", "json" or "sheets").

    Auto uses Google Sheets when a spreadsheet id is configured, falling
    back to the JSON file if the pull fails.
    """
    mode = mode or settings.catalog_source

    if mode == "json":
        return build_json_catalog(settings)
    if mode == "sheets":
        return build_sheets_catalog(settings)

    if not settings.google_sheets_id:
        logger.debug("sheets_not_configured", fallback="json")
        return build_json_catalog(settings)
    return FallbackCatalog(build_sheets_catalog(settings), build_json_catalog(settings))
