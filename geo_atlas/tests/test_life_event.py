import pytest

from geo_atlas.life_event import EventType, GedcomEvent, describe_event
from geo_atlas.person import PersonRecord


@pytest.mark.parametrize("event_type,expected", [
    (EventType.BIRTH, "Born in Boston"),
    (EventType.DEATH, "Died in Boston"),
    (EventType.MARRIAGE, "Married in Boston"),
    (EventType.RESIDENCE, "Lived in Boston"),
])
def test_describe_event(event_type, expected):
    assert describe_event(event_type, "Boston") == expected


def test_describe_event_unknown_place():
    assert describe_event(EventType.BIRTH, None) == "Born in unknown location"


def test_event_type_str():
    assert str(EventType.MIGRATION) == "migration"
    assert EventType("birth") is EventType.BIRTH
    assert EventType.DEATH == "death"


def test_gedcom_event_str():
    event = GedcomEvent(EventType.BIRTH, date="1900", place="Boston")
    assert str(event) == "birth : 1900 - Boston"


def test_person_places_birth_first():
    person = PersonRecord("I1", "A", birth_place="Boston", death_place="Chicago", death_date="1950")
    assert person.places() == [(EventType.BIRTH, "Boston"), (EventType.DEATH, "Chicago")]
    assert person.date_for(EventType.DEATH) == "1950"
    assert person.date_for(EventType.MARRIAGE) is None


def test_person_places_skip_empty():
    person = PersonRecord("I1", "A", birth_place="", death_place="Chicago")
    assert person.places() == [(EventType.DEATH, "Chicago")]
