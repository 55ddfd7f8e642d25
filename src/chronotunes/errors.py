"""Exception hierarchy for chronotunes.

The scoring core is total over its inputs and raises none of these.
"""


class ChronotunesError(Exception):
    """Base class for all chronotunes errors."""


class QueryParseError(ChronotunesError, ValueError):
    """Free-text query could not be split into a year and a location."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(
            f"Could not parse '{text}'. Use a format like '1776, New York' or 'Paris 1889'."
        )


class CatalogError(ChronotunesError):
    """A catalog could not be read, written, or validated."""
