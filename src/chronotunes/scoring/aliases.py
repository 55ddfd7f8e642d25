"""Historical location aliases.

Maps a location keyword to region keywords treated as culturally
equivalent. Loaded once at import and never modified.
"""

from collections.abc import Mapping
from types import MappingProxyType

LOCATION_ALIASES: Mapping[str, frozenset[str]] = MappingProxyType(
    {
        "new amsterdam": frozenset({"dutch", "holland", "netherlands", "new york"}),
        "new york": frozenset({"america", "american", "new amsterdam"}),
        "boston": frozenset({"america", "american", "england", "british"}),
        "philadelphia": frozenset({"america", "american"}),
        "virginia": frozenset({"america", "american", "england", "british"}),
        "london": frozenset({"england", "british", "global"}),
        "paris": frozenset({"france", "french", "global"}),
    }
)
