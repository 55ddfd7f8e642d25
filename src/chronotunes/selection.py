"""Weighted diversity selection.

Turns scored songs into an ordered playlist that favours high weights
while capping how many songs one artist or one genre may contribute.
"""

from collections import Counter
from collections.abc import Iterable

from .logging import get_logger
from .models import ScoredSong, Song

logger = get_logger(__name__)

PLAYLIST_SIZE = 10
MAX_PER_ARTIST = 2
MAX_PER_GENRE = 3


def select_playlist(scored_songs: Iterable[ScoredSong], count: int = PLAYLIST_SIZE) -> list[Song]:
    """Select up to ``count`` songs from the scored pool.

    Pass 1 walks songs by descending weight and admits a song only while
    its artist and genre are under their caps. Pass 2 fills any remaining
    slots from the top of the same ordering, ignoring the caps.

    Args:
        scored_songs: Songs with their combined weights, in catalog order
        count: Maximum playlist length

    Returns:
        Selected songs in presentation order (pass-1 admissions first)
    """
    if count <= 0:
        return []

    # sorted() is stable, so equal weights keep catalog order
    ranked = sorted(
        (s for s in scored_songs if s.weight > 0),
        key=lambda s: s.weight,
        reverse=True,
    )
    if not ranked:
        return []

    selected: list[Song] = []
    selected_ids: set[int] = set()
    artist_counts: Counter[str] = Counter()
    genre_counts: Counter[str] = Counter()

    for scored in ranked:
        if len(selected) >= count:
            break
        song = scored.song
        if song.id in selected_ids:
            continue
        if artist_counts[song.artist] < MAX_PER_ARTIST and genre_counts[song.genre] < MAX_PER_GENRE:
            selected.append(song)
            selected_ids.add(song.id)
            artist_counts[song.artist] += 1
            genre_counts[song.genre] += 1

    diverse_count = len(selected)

    for scored in ranked:
        if len(selected) >= count:
            break
        if scored.song.id not in selected_ids:
            selected.append(scored.song)
            selected_ids.add(scored.song.id)

    logger.debug(
        "playlist_selected",
        candidates=len(ranked),
        diverse=diverse_count,
        filled=len(selected) - diverse_count,
    )

    return selected[:count]
