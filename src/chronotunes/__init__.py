"""chronotunes - Recommend playlists for a historical year and place.

Scores a song catalog by how recently each song predates the query year
and how closely its cultural region fits the query location, then picks
a short, varied playlist.
"""

from .generator import PlaylistGenerator, generate_playlist
from .models import PlaylistQuery, PlaylistResult, ScoredSong, Song
from .query import parse_query
from .scoring import location_relevance, temporal_weight
from .selection import select_playlist

__all__ = [
    "Song",
    "ScoredSong",
    "PlaylistQuery",
    "PlaylistResult",
    "temporal_weight",
    "location_relevance",
    "select_playlist",
    "generate_playlist",
    "PlaylistGenerator",
    "parse_query",
]
