"""Keyword classification of temples into well-known pilgrimage groups."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from placesync.entities.core import PlaceCategory, PlaceRecord
from placesync.utils.helpers import ordered_unique
from placesync.utils.logging import get_logger


_LOGGER = get_logger(module=__name__)
_SHORT_WORD_LENGTH = 4


@dataclass(frozen=True)
class TempleGroup:
    """One classification group and the reference names that identify it.

    ``temples`` are matched against the place name. With ``exact_match`` a name
    word must equal a reference name, or be a fragment of it longer than four
    characters, so short names such as "Rama" do not match unrelated places.
    ``keywords`` are matched against the lowercased name and address together.
    """

    tag: str
    temples: Tuple[str, ...] = field(default_factory=tuple)
    keywords: Tuple[str, ...] = field(default_factory=tuple)
    exact_match: bool = False

    def matches(self, name: str, address: str = "") -> bool:
        name_lower = name.lower()
        if self.temples and self._matches_temples(name_lower):
            return True
        if self.keywords:
            combined = f"{name_lower} {address.lower()}"
            return any(keyword.lower() in combined for keyword in self.keywords)
        return False

    def _matches_temples(self, name_lower: str) -> bool:
        words = name_lower.split()
        for temple in self.temples:
            temple_lower = temple.lower()
            if self.exact_match:
                if any(
                    word == temple_lower
                    or (word in temple_lower and len(word) > _SHORT_WORD_LENGTH)
                    for word in words
                ):
                    return True
            elif temple_lower in name_lower:
                return True
        return False


TEMPLE_GROUPS: Tuple[TempleGroup, ...] = (
    TempleGroup(
        tag="Divya Desam",
        keywords=(
            "sri rangam",
            "tirupati",
            "tirumala",
            "badrinath",
            "dwarka",
            "puri jagannath",
            "kanchipuram",
            "ayodhya",
        ),
        temples=(
            "Srirangam",
            "Tirupati",
            "Tirumala",
            "Badrinath",
            "Dwarka",
            "Puri",
            "Kanchipuram Varadaraja",
            "Ayodhya",
            "Thiruvananthapuram",
        ),
    ),
    TempleGroup(
        tag="Jyotirlinga",
        exact_match=True,
        temples=(
            "Somnath",
            "Mallikarjuna",
            "Mahakaleshwar",
            "Omkareshwar",
            "Kedarnath",
            "Bhimashankar",
            "Kashi Vishwanath",
            "Trimbakeshwar",
            "Vaidyanath",
            "Nageshwar",
            "Rameswaram",
            "Rameshwar",
            "Grishneshwar",
        ),
    ),
    TempleGroup(
        tag="Pancha Bhoota",
        exact_match=True,
        temples=(
            "Chidambaram Nataraja",  # space
            "Thiruvanaikaval",  # water
            "Jambukeswarar",
            "Tiruvannamalai",  # fire
            "Annamalaiyar",
            "Ekambareswarar",  # earth
            "Ekambaranathar",
            "Kalahasti",  # air
            "Srikalahasti",
        ),
    ),
    TempleGroup(
        tag="Shakti Peetham",
        temples=(
            "Kamakhya",
            "Kalighat",
            "Vindhyavasini",
            "Ambaji",
            "Chamundeshwari",
            "Mookambika",
            "Kanchi Kamakshi",
            "Meenakshi",
        ),
    ),
    TempleGroup(
        tag="Abhimana Sthalam",
        keywords=("brihadeeswarar", "brihadeeswara", "thanjavur", "gangaikonda"),
        temples=(
            "Brihadeeswarar",
            "Brihadeeswara",
            "Gangaikonda Cholapuram",
            "Airavatesvara",
        ),
    ),
    TempleGroup(
        tag="Char Dham",
        temples=("Badrinath", "Dwarka", "Puri", "Rameshwar", "Rameswaram"),
    ),
)

DEITY_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Vishnu", ("rangam", "venkatesh", "tirupati", "badrinath", "jagannath", "varadaraja")),
    ("Shiva", ("shwar", "ishwar", "nataraja", "kailash", "somnath", "mahakal", "kedarnath")),
    ("Devi", ("kamakshi", "meenakshi", "kamakhya", "ambika", "chamundi", "durga", "kali")),
    ("Hanuman", ("hanuman", "anjaneya")),
    ("Ganesha", ("ganesha", "ganapati", "vinayaka")),
)


def classify(
    name: str | None,
    address: str | None = None,
    *,
    groups: Sequence[TempleGroup] = TEMPLE_GROUPS,
) -> List[str]:
    """Return the classification tags matching a temple, in table order."""

    if not name or not name.strip():
        return []
    tags = [group.tag for group in groups if group.matches(name, address or "")]
    return ordered_unique(tags)


def get_deity(name: str | None) -> str | None:
    """Return the first deity whose keywords appear in the temple name."""

    if not name:
        return None
    name_lower = name.lower()
    for deity, keywords in DEITY_KEYWORDS:
        if any(keyword in name_lower for keyword in keywords):
            return deity
    return None


def enhance_temple_metadata(record: PlaceRecord, *, address: str | None = None) -> PlaceRecord:
    """Attach classification tags and deity to a Temple record.

    Existing tags are kept and new ones appended. ``address`` is used for
    keyword matching when the record has no location address. Records of any
    other category are returned unchanged.
    """

    if record.category is not PlaceCategory.TEMPLE:
        return record

    tags = classify(record.name, record.address or address)
    merged = ordered_unique([*record.temple_types, *tags])
    deity = record.deity or get_deity(record.name)
    if merged == record.temple_types and deity == record.deity:
        return record
    _LOGGER.debug(
        "Classified temple",
        name=record.name,
        temple_types=merged,
        deity=deity,
    )
    return record.model_copy(update={"temple_types": merged, "deity": deity})


__all__ = [
    "TempleGroup",
    "TEMPLE_GROUPS",
    "DEITY_KEYWORDS",
    "classify",
    "get_deity",
    "enhance_temple_metadata",
]
