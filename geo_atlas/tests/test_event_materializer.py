from geo_atlas.event_materializer import materialize_events
from geo_atlas.life_event import EventType
from geo_atlas.person import PersonRecord
from geo_atlas.schema import LocationCreate


def _store_location(storage, name, location_type):
    return storage.locations.create(LocationCreate(
        name=name, latitude=1.0, longitude=2.0, location_type=location_type, member_count=1
    ))


def test_one_event_per_resolved_place(storage):
    person = PersonRecord("I1", "John", birth_date="1900", birth_place="Boston",
                          death_date="1950", death_place="Chicago")
    boston = _store_location(storage, "Boston", "birth")
    chicago = _store_location(storage, "Chicago", "death")

    events = materialize_events("m1", person, [(EventType.BIRTH, boston), (EventType.DEATH, chicago)])

    assert [(e.event_type, e.event_date, e.description) for e in events] == [
        ("birth", "1900", "Born in Boston"),
        ("death", "1950", "Died in Chicago"),
    ]
    assert all(e.member_id == "m1" for e in events)
    assert [e.location_id for e in events] == [boston.id, chicago.id]
    assert all(e.notes == "" for e in events)


def test_unresolved_role_produces_no_event(storage):
    person = PersonRecord("I1", "John", birth_place="Atlantis", death_place="Chicago")
    chicago = _store_location(storage, "Chicago", "death")
    events = materialize_events("m1", person, [(EventType.DEATH, chicago)])
    assert [e.event_type for e in events] == ["death"]
    assert events[0].event_date is None


def test_no_locations_no_events():
    assert materialize_events("m1", PersonRecord("I1", "John"), []) == []
