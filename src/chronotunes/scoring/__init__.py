"""Scoring functions for chronotunes.

A song's combined weight for a query is its temporal weight multiplied
by its location relevance. Both functions are pure and accept any
integer year and any location string.
"""

import math
from collections.abc import Iterable, Mapping

from ..models import ScoredSong, Song
from .aliases import LOCATION_ALIASES

# exp(-40 / 17.5) ~= 0.1, so a song 40 years older is about 10x less likely
TEMPORAL_DECAY_YEARS = 17.5

BASE_RELEVANCE = 0.5
EXACT_RELEVANCE = 1.0
ALIAS_RELEVANCE = 0.8
GLOBAL_RELEVANCE = 0.7


def temporal_weight(song_year: int, query_year: int) -> float:
    """Weight a song by how long before the query year it appeared.

    Songs from after the query year get 0. Otherwise the weight decays
    exponentially from 1.0 for a song released in the query year.
    """
    if song_year > query_year:
        return 0.0
    years_before = query_year - song_year
    return math.exp(-years_before / TEMPORAL_DECAY_YEARS)


def location_relevance(
    song: Song,
    query_location: str,
    aliases: Mapping[str, frozenset[str]] = LOCATION_ALIASES,
) -> float:
    """Score how well a song's cultural region fits the query location.

    Always returns a value in [0.5, 1.0]:
    - 1.0 when either string contains the other
    - 0.8 when an alias of the location appears in the region
    - 0.7 when the region is "global"
    - 0.5 otherwise
    """
    location = query_location.lower()
    region = song.cultural_region.lower()

    score = BASE_RELEVANCE

    if location in region or region in location:
        score = EXACT_RELEVANCE

    for key, mapped_regions in aliases.items():
        if key in location and any(mapped in region for mapped in mapped_regions):
            score = max(score, ALIAS_RELEVANCE)

    if "global" in region:
        score = max(score, GLOBAL_RELEVANCE)

    return score


def combined_weight(song: Song, query_year: int, query_location: str) -> float:
    """Product of temporal weight and location relevance."""
    return temporal_weight(song.year, query_year) * location_relevance(song, query_location)


def score_catalog(
    catalog: Iterable[Song], query_year: int, query_location: str
) -> list[ScoredSong]:
    """Score every song in catalog order."""
    return [
        ScoredSong(song=song, weight=combined_weight(song, query_year, query_location))
        for song in catalog
    ]


__all__ = [
    "LOCATION_ALIASES",
    "TEMPORAL_DECAY_YEARS",
    "temporal_weight",
    "location_relevance",
    "combined_weight",
    "score_catalog",
]
