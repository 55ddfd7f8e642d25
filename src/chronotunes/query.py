"""Free-text query parsing.

Splits strings like "1776, New York" or "Paris 1889" into a year and a
location.
"""

import re

from .errors import QueryParseError
from .models import PlaylistQuery

# Years are ASCII digits only. Year-first patterns are tried first
_YEAR_FIRST = re.compile(r"^(?P<year>\d{4}),?\s+(?P<location>.+)$", re.ASCII)
_YEAR_LAST = re.compile(r"^(?P<location>.+?),?\s+(?P<year>\d{4})$", re.ASCII)


def parse_query(text: str) -> PlaylistQuery:
    """Parse a combined "year, location" string.

    Accepts "<year>, <location>", "<year> <location>", "<location>, <year>"
    and "<location> <year>", where the year is exactly four digits.

    Raises:
        QueryParseError: If no pattern matches
    """
    stripped = text.strip()

    for pattern in (_YEAR_FIRST, _YEAR_LAST):
        match = pattern.match(stripped)
        if not match:
            continue
        location = match.group("location").strip().rstrip(",").strip()
        if location:
            return PlaylistQuery(year=int(match.group("year")), location=location)

    raise QueryParseError(text)
