"""Heuristic parsing of formatted addresses into city, state and country.

The heuristics target addresses returned by map services, which usually follow
``Name, Neighbourhood, City <postal>, State <postal>, Country``. South Asian
addresses commonly attach the 5-6 digit postal code either to the city or to
the state segment, so the city lookup keys off the postal code position.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

from placesync.utils.helpers import normalize_whitespace

_POSTAL_CODE_RE = re.compile(r"(?<!\d)\d{5,6}(?!\d)")

KNOWN_STATES = frozenset(
    name.lower()
    for name in (
        "Andhra Pradesh",
        "Arunachal Pradesh",
        "Assam",
        "Bihar",
        "Chhattisgarh",
        "Goa",
        "Gujarat",
        "Haryana",
        "Himachal Pradesh",
        "Jharkhand",
        "Karnataka",
        "Kerala",
        "Madhya Pradesh",
        "Maharashtra",
        "Manipur",
        "Meghalaya",
        "Mizoram",
        "Nagaland",
        "Odisha",
        "Punjab",
        "Rajasthan",
        "Sikkim",
        "Tamil Nadu",
        "Telangana",
        "Tripura",
        "Uttar Pradesh",
        "Uttarakhand",
        "West Bengal",
        "Delhi",
        "Jammu and Kashmir",
        "Ladakh",
        "Puducherry",
        "Chandigarh",
    )
)


@dataclass(frozen=True)
class AddressComponents:
    """City, state and country extracted from one formatted address."""

    city: str | None
    state: str | None
    country: str | None


def _segments(formatted_address: str | None) -> List[str]:
    if not formatted_address:
        return []
    return [part.strip() for part in formatted_address.split(",") if part.strip()]


def _has_postal_code(segment: str) -> bool:
    return _POSTAL_CODE_RE.search(segment) is not None


def strip_postal_code(segment: str) -> str:
    """Remove embedded 5-6 digit postal codes and tidy the remaining text."""

    return normalize_whitespace(_POSTAL_CODE_RE.sub(" ", segment))


def _or_none(value: str) -> str | None:
    return value or None


def extract_country(formatted_address: str | None) -> str | None:
    """Return the last comma-separated segment, usually the country."""

    parts = _segments(formatted_address)
    if not parts:
        return None
    return parts[-1]


def extract_state(formatted_address: str | None) -> str | None:
    """Return the second-to-last segment with postal codes removed."""

    parts = _segments(formatted_address)
    if len(parts) < 2:
        return None
    return _or_none(strip_postal_code(parts[-2]))


def extract_city(formatted_address: str | None) -> str | None:
    """Return the most likely city segment of a formatted address.

    Examples:
        ``"Brihadeeswara Temple, Thanjavur 613001, India"`` -> ``"Thanjavur"``
        ``"8FJC+Q26, Hampi, Karnataka 583239, India"`` -> ``"Hampi"``
        ``"Shringeri, Karnataka, India"`` -> ``"Shringeri"``
    """

    parts = _segments(formatted_address)
    if not parts:
        return None

    # Right-to-left, skipping the country segment.
    for index in range(len(parts) - 2, -1, -1):
        segment = parts[index]
        if not _has_postal_code(segment):
            continue
        stripped = strip_postal_code(segment)
        if stripped.lower() in KNOWN_STATES:
            if index == 0:
                return None
            return _or_none(strip_postal_code(parts[index - 1]))
        return _or_none(stripped)

    if len(parts) >= 3:
        return _or_none(strip_postal_code(parts[-3]))
    return _or_none(strip_postal_code(parts[0]))


def parse_address(formatted_address: str | None) -> AddressComponents:
    """Extract every address component at once."""

    return AddressComponents(
        city=extract_city(formatted_address),
        state=extract_state(formatted_address),
        country=extract_country(formatted_address),
    )


__all__ = [
    "AddressComponents",
    "KNOWN_STATES",
    "extract_city",
    "extract_state",
    "extract_country",
    "parse_address",
    "strip_postal_code",
]
