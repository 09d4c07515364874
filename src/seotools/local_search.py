"""Localized Google search URL builder.

Location targeting uses the ``gl`` country parameter plus a ``uule`` value:
the fixed ``w+CAIQICI`` prefix followed by the base64 of the canonical
location name with padding removed.
"""

import base64
import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from seotools.constants import GOOGLE_SEARCH_URL, LOCATION_PRESETS

logger = logging.getLogger(__name__)

UULE_PREFIX = "w+CAIQICI"

# Characters encodeURIComponent leaves alone
_QUERY_SAFE = "-_.!~*'()"


@dataclass(frozen=True)
class LocationPreset:
    name: str
    country: str
    code: str


LOCATIONS = [LocationPreset(*preset) for preset in LOCATION_PRESETS]


def find_location(name: str) -> Optional[LocationPreset]:
    wanted = name.strip().lower()
    for location in LOCATIONS:
        if location.name.lower() == wanted:
            return location
    return None


def uule(location_name: str) -> str:
    encoded = base64.b64encode(location_name.encode("latin-1")).decode("ascii")
    return UULE_PREFIX + encoded.rstrip("=")


def build_search_url(query: str, location: Optional[str] = None) -> str:
    """Google search URL for ``query``, localized to a preset location.

    Unknown location names are ignored.

    Raises:
        ValueError: If ``query`` is empty
    """
    if not query or not query.strip():
        raise ValueError("Search query must not be empty")

    url = f"{GOOGLE_SEARCH_URL}?q={quote(query.strip(), safe=_QUERY_SAFE)}"

    if location:
        preset = find_location(location)
        if preset is None:
            logger.warning(f"Unknown location {location!r}; building an unlocalized URL")
        else:
            url += f"&gl={preset.code}&uule={uule(preset.name)}"

    return url
