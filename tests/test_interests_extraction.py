"""Tests for interests extraction."""

from profile_parser.core.interests_parser import extract_interests


def names(interests):
    return [i.name for i in interests]


def test_comma_list():
    interests = extract_interests(["Running, Golf, Photography"])
    assert names(interests) == ["Running", "Golf", "Photography"]
    assert all(i.category == "hobby" for i in interests)


def test_lead_in_sentence_with_and():
    interests = extract_interests(["Interests include: reading, hiking and travel."])
    assert names(interests) == ["Reading", "Hiking", "Travel"]
    assert interests[0].category == "interest"


def test_prose_uses_vocabulary():
    interests = extract_interests(["I enjoy cycling and cooking at weekends."])
    assert names(interests) == ["Cycling", "Cooking"]


def test_meetup_line_is_volunteer_involvement():
    interests = extract_interests(["Meetups: PyData Belfast"])
    assert len(interests) == 1
    assert interests[0].name == "PyData Belfast"
    assert interests[0].category == "volunteer"
    assert interests[0].description == "Professional community involvement"


def test_volunteering_line():
    interests = extract_interests(["Volunteering: Food bank, Charity Work"])
    assert [(i.name, i.category) for i in interests] == [
        ("Food bank", "volunteer"),
        ("Charity Work", "volunteer"),
    ]


def test_strict_mode_ignores_contact_details():
    """Personal sections only contribute vocabulary hits."""
    interests = extract_interests(
        ["Email: jane@example.com", "Nationality: Irish", "Enjoys golf at the weekend"],
        strict=True,
    )
    assert names(interests) == ["Golf"]


def test_duplicates_removed():
    assert names(extract_interests(["Golf, golf", "• Golf"])) == ["Golf"]
