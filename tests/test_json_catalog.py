"""Tests for the local JSON catalog."""

import json

import pytest

from chronotunes.catalog import CatalogSource, next_song_id, validate_catalog
from chronotunes.catalog.json_file import JsonFileCatalog
from chronotunes.errors import CatalogError

from .conftest import make_song


def test_fetch_songs_reads_file(catalog_file):
    songs = JsonFileCatalog(catalog_file).fetch_songs()

    assert [s.id for s in songs] == [1, 2, 3, 4, 5]
    assert songs[0].title == "Yankee Doodle"


def test_missing_file_raises(tmp_path):
    with pytest.raises(CatalogError, match="not found"):
        JsonFileCatalog(tmp_path / "missing.json").fetch_songs()


def test_malformed_json_raises(tmp_path):
    path = tmp_path / "songs.json"
    path.write_text("[{", encoding="utf-8")

    with pytest.raises(CatalogError, match="Invalid catalog"):
        JsonFileCatalog(path).fetch_songs()


def test_records_missing_required_fields_raise(tmp_path):
    path = tmp_path / "songs.json"
    path.write_text(json.dumps([{"id": 1, "title": "No artist", "year": 1700}]), encoding="utf-8")

    with pytest.raises(CatalogError):
        JsonFileCatalog(path).fetch_songs()


def test_duplicate_ids_raise(tmp_path):
    path = tmp_path / "songs.json"
    path.write_text(
        json.dumps([make_song(1).model_dump(), make_song(1, title="Other").model_dump()]),
        encoding="utf-8",
    )

    with pytest.raises(CatalogError, match="Duplicate song id 1"):
        JsonFileCatalog(path).fetch_songs()


def test_save_songs_creates_backup(catalog_file):
    catalog = JsonFileCatalog(catalog_file)
    original = catalog_file.read_text(encoding="utf-8")

    catalog.save_songs([make_song(42)])

    backups = list(catalog_file.parent.glob("songs.backup.*.json"))
    assert len(backups) == 1
    assert backups[0].read_text(encoding="utf-8") == original
    assert [s.id for s in catalog.fetch_songs()] == [42]


def test_save_songs_without_backup(catalog_file):
    JsonFileCatalog(catalog_file).save_songs([make_song(1)], backup=False)
    assert not list(catalog_file.parent.glob("songs.backup.*.json"))


def test_save_songs_omits_empty_links(tmp_path):
    path = tmp_path / "songs.json"
    JsonFileCatalog(path).save_songs([make_song(1)])

    record = json.loads(path.read_text(encoding="utf-8"))[0]
    assert "spotify_url" not in record
    assert record["cultural_region"] == "America"


def test_add_song_assigns_next_id(catalog_file):
    catalog = JsonFileCatalog(catalog_file)

    song = catalog.add_song({"title": "Chester", "artist": "William Billings", "year": 1770})

    assert song.id == 6
    assert catalog.fetch_songs()[-1] == song


def test_add_song_to_new_file_starts_at_one(tmp_path):
    catalog = JsonFileCatalog(tmp_path / "new" / "songs.json")

    song = catalog.add_song({"title": "Greensleeves", "artist": "Traditional", "year": 1580})

    assert song.id == 1
    assert catalog.fetch_songs() == [song]


def test_add_song_requires_title(catalog_file):
    with pytest.raises(CatalogError, match="Invalid song"):
        JsonFileCatalog(catalog_file).add_song({"title": "", "artist": "X", "year": 1700})


def test_json_catalog_satisfies_protocol(catalog_file):
    assert isinstance(JsonFileCatalog(catalog_file), CatalogSource)


def test_next_song_id():
    assert next_song_id([]) == 1
    assert next_song_id([make_song(3), make_song(10), make_song(7)]) == 11


def test_validate_catalog_passes_unique_ids():
    songs = [make_song(1), make_song(2)]
    assert validate_catalog(songs) == songs


def test_sources_work_as_context_managers(catalog_file):
    with JsonFileCatalog(catalog_file) as catalog:
        assert len(catalog.fetch_songs()) == 5
