"""Tests for playlist generation end to end."""

from datetime import datetime, timezone

import pytest

from chronotunes.catalog.json_file import JsonFileCatalog
from chronotunes.generator import PlaylistGenerator, generate_playlist
from chronotunes.models import PlaylistQuery

from .conftest import make_song

FIXED = datetime(2024, 7, 4, 12, 0, tzinfo=timezone.utc)


def fixed_clock():
    return FIXED


def test_only_songs_from_before_the_query_year_appear():
    catalog = [make_song(1, year=1690), make_song(2, year=1710)]

    result = generate_playlist(catalog, 1700, "America", clock=fixed_clock)

    assert [s.id for s in result.songs] == [1]


def test_empty_catalog_gives_empty_playlist():
    result = generate_playlist([], 1776, "Boston", clock=fixed_clock)

    assert result.songs == []
    assert result.query_year == 1776
    assert result.query_location == "Boston"


def test_single_artist_catalog_fills_to_ten():
    catalog = [
        make_song(i, year=1700 + i, artist="Bach", genre="Baroque", region="Leipzig")
        for i in range(20)
    ]

    result = generate_playlist(catalog, 1750, "Leipzig", clock=fixed_clock)

    assert len(result.songs) == 10
    # Newest two win the first pass, the rest fill in by weight
    assert [s.id for s in result.songs] == [19, 18, 17, 16, 15, 14, 13, 12, 11, 10]


def test_single_artist_catalog_first_pass_respects_artist_cap():
    catalog = [
        make_song(i, year=1700, artist="Bach", genre=f"G{i}", region="Leipzig") for i in range(20)
    ]
    catalog.append(make_song(100, year=1600, artist="Purcell", genre="Other", region="London"))

    result = generate_playlist(catalog, 1750, "Leipzig", clock=fixed_clock)

    # Purcell is far weaker but is admitted in the first pass ahead of fill-ins
    assert [s.id for s in result.songs][:3] == [0, 1, 100]
    assert len(result.songs) == 10


def test_location_breaks_ties_between_same_year_songs():
    catalog = [
        make_song(1, year=1776, region="Japan"),
        make_song(2, year=1776, region="Global"),
        make_song(3, year=1776, region="British"),
        make_song(4, year=1776, region="Boston"),
    ]

    result = generate_playlist(catalog, 1776, "Boston", clock=fixed_clock)

    assert [s.id for s in result.songs] == [4, 3, 2, 1]


def test_antarctica_ranks_purely_by_time():
    catalog = [
        make_song(1, year=1800, region="America"),
        make_song(2, year=1849, region="France"),
        make_song(3, year=1830, region="Dutch"),
    ]

    result = generate_playlist(catalog, 1850, "Antarctica", clock=fixed_clock)

    assert [s.id for s in result.songs] == [2, 3, 1]


def test_uses_the_supplied_clock():
    result = generate_playlist([make_song(1)], 1700, "America", clock=fixed_clock)
    assert result.generated_at == FIXED


def test_default_clock_is_timezone_aware():
    result = generate_playlist([make_song(1)], 1700, "America")
    assert result.generated_at.tzinfo is not None


def test_is_deterministic_for_a_fixed_clock():
    catalog = [make_song(i, year=1650 + i * 3, region=r) for i, r in enumerate(["Dutch", "Global", "England"] * 6)]

    first = generate_playlist(catalog, 1700, "New Amsterdam", clock=fixed_clock)
    second = generate_playlist(catalog, 1700, "New Amsterdam", clock=fixed_clock)

    assert first == second


def test_does_not_mutate_catalog():
    catalog = [make_song(i, year=1700 + i) for i in range(15)]
    snapshot = list(catalog)

    generate_playlist(catalog, 1710, "America", clock=fixed_clock)

    assert catalog == snapshot


def test_count_limits_result():
    catalog = [make_song(i, year=1700) for i in range(8)]
    assert len(generate_playlist(catalog, 1700, "America", count=3).songs) == 3


def test_result_serializes_to_json():
    result = generate_playlist([make_song(1)], 1700, "America", clock=fixed_clock)
    payload = result.model_dump(mode="json")

    assert payload["query_year"] == 1700
    assert payload["generated_at"].startswith("2024-07-04T12:00:00")
    assert payload["songs"][0]["id"] == 1


class TestPlaylistGenerator:
    def test_generates_from_json_catalog(self, catalog_file):
        generator = PlaylistGenerator(JsonFileCatalog(catalog_file), clock=fixed_clock)

        result = generator.generate(PlaylistQuery(year=1776, location="New York"))

        titles = [s.title for s in result.songs]
        assert titles == ["Yankee Doodle", "Wilhelmus"]

    def test_reads_a_fresh_snapshot_each_call(self, catalog_file):
        source = JsonFileCatalog(catalog_file)
        generator = PlaylistGenerator(source, clock=fixed_clock)
        query = PlaylistQuery(year=1800, location="Paris")

        before = generator.generate(query)
        source.add_song({"title": "Ca Ira", "artist": "Ladre", "year": 1800, "cultural_region": "France"})
        after = generator.generate(query)

        assert "Ca Ira" not in [s.title for s in before.songs]
        assert after.songs[0].title == "Ca Ira"

    @pytest.mark.parametrize("count", [1, 2])
    def test_respects_configured_count(self, catalog_file, count):
        generator = PlaylistGenerator(JsonFileCatalog(catalog_file), count=count)
        result = generator.generate(PlaylistQuery(year=1900, location="America"))
        assert len(result.songs) == count
