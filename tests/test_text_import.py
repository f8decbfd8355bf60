from pathlib import Path

import pytest

from placesync.config.policies import EnrichmentPolicy
from placesync.entities.core import PlaceCategory
from placesync.errors import TextImportError
from placesync.importers.text import TextEntry, entry_to_record, load_text_file, parse_line, parse_text


@pytest.mark.parametrize(
    "line, expected",
    [
        ("Kailasa Temple", TextEntry(name="Kailasa Temple")),
        ("Shore Temple, Mahabalipuram", TextEntry(name="Shore Temple", location="Mahabalipuram")),
        (
            "Meenakshi Temple - Madurai, Tamil Nadu",
            TextEntry(name="Meenakshi Temple", location="Madurai, Tamil Nadu"),
        ),
        ("Hampi, Vijayanagara, Karnataka", TextEntry(name="Hampi, Vijayanagara, Karnataka")),
        ("- Golden Temple", TextEntry(name="Golden Temple")),
        ("• Lotus Temple", TextEntry(name="Lotus Temple")),
        ("12. Konark Sun Temple", TextEntry(name="Konark Sun Temple")),
        (
            "Shore Temple https://maps.app.goo.gl/abc",
            TextEntry(name="Shore Temple", url="https://maps.app.goo.gl/abc"),
        ),
        (
            "https://www.google.com/maps/place/Brihadeeswara+Temple/@10.78,79.13,17z",
            TextEntry(
                name="Brihadeeswara Temple",
                url="https://www.google.com/maps/place/Brihadeeswara+Temple/@10.78,79.13,17z",
            ),
        ),
        ("https://maps.app.goo.gl/abc", None),
        ("-", None),
    ],
)
def test_parse_line(line, expected):
    assert parse_line(line) == expected


def test_parse_text_skips_blank_lines_and_comments():
    content = "# temples\n\nShore Temple\n// later\n  Kailasa Temple  \n"

    assert [entry.name for entry in parse_text(content)] == ["Shore Temple", "Kailasa Temple"]


def test_load_text_file(tmp_path: Path):
    path = tmp_path / "places.txt"
    path.write_text("Shore Temple\nHampi - Karnataka\n", encoding="utf-8")

    entries = load_text_file(path)

    assert entries == [TextEntry(name="Shore Temple"), TextEntry(name="Hampi", location="Karnataka")]


def test_load_text_file_missing(tmp_path: Path):
    with pytest.raises(TextImportError):
        load_text_file(tmp_path / "absent.txt")


def test_entry_to_record_defaults():
    record = entry_to_record(TextEntry(name="Hampi", location="Karnataka"), "places.txt")

    assert record.category is PlaceCategory.OTHER
    assert record.sources == ["Text Import"]
    assert record.status == "Want to go"
    assert record.notes == "Imported from places.txt. Location: Karnataka"
    assert record.location is None


def test_entry_to_record_uses_url_coordinates_and_source_override():
    entry = parse_line("https://www.google.com/maps/place/Brihadeeswara+Temple/@10.78,79.13,17z")
    policy = EnrichmentPolicy(default_status="Maybe")

    record = entry_to_record(entry, "list.txt", source="WhatsApp", policy=policy)

    assert record.location is not None
    assert (record.location.lat, record.location.lon) == (10.78, 79.13)
    assert record.location.name == "Brihadeeswara Temple"
    assert record.sources == ["WhatsApp"]
    assert record.status == "Maybe"
    assert record.notes == "Imported from list.txt"
