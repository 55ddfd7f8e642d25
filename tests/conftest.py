import json
from pathlib import Path

import pytest
import structlog

from chronotunes.config import get_settings
from chronotunes.models import Song


def make_song(
    id: int,
    year: int = 1700,
    artist: str | None = None,
    genre: str | None = None,
    region: str = "America",
    title: str | None = None,
) -> Song:
    return Song(
        id=id,
        title=title or f"Song {id}",
        artist=artist or f"Artist {id}",
        year=year,
        genre=genre or f"Genre {id}",
        cultural_region=region,
    )


@pytest.fixture
def song_factory():
    return make_song


@pytest.fixture
def catalog_file(tmp_path: Path) -> Path:
    path = tmp_path / "songs.json"
    songs = [
        make_song(1, year=1755, artist="Traditional", genre="Folk", region="America", title="Yankee Doodle"),
        make_song(2, year=1570, artist="Traditional", genre="Anthem", region="Dutch", title="Wilhelmus"),
        make_song(3, year=1792, artist="Rouget de Lisle", genre="Anthem", region="France", title="La Marseillaise"),
        make_song(4, year=1787, artist="Mozart", genre="Classical", region="Global", title="Eine kleine Nachtmusik"),
        make_song(5, year=1814, artist="Francis Scott Key", genre="Anthem", region="America", title="The Star-Spangled Banner"),
    ]
    path.write_text(json.dumps([s.model_dump() for s in songs]), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point settings at temporary paths and keep real env/.env out."""
    monkeypatch.chdir(tmp_path)
    for var in (
        "CHRONOTUNES_GOOGLE_SHEETS_ID",
        "CHRONOTUNES_GOOGLE_SHEETS_API_KEY",
        "CHRONOTUNES_GOOGLE_SHEETS_ACCESS_TOKEN",
        "CHRONOTUNES_CATALOG_SOURCE",
        "CHRONOTUNES_CATALOG_PATH",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("CHRONOTUNES_CACHE_PATH", str(tmp_path / "cache" / "cache.db"))
    monkeypatch.setenv("CHRONOTUNES_LOG_LEVEL", "WARNING")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    # CLI runs point structlog at the runner's stderr, which is closed afterwards
    structlog.reset_defaults()
