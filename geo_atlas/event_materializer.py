"""
event_materializer.py - Derive stored life events from resolved places.

Module: geo_atlas.event_materializer
"""
from __future__ import annotations

from typing import Iterable, List, Tuple

from .life_event import EventType, describe_event
from .person import PersonRecord
from .schema import EventCreate, Location


def materialize_events(member_id: str, person: PersonRecord,
                       stored_locations: Iterable[Tuple[EventType, Location]]) -> List[EventCreate]:
    """
    Build one life event per resolved (role, location) pair, in input order.

    A role whose place did not resolve has no stored location, so it simply
    produces no event.

    Args:
        member_id (str): Id of the stored family member.
        person (PersonRecord): The normalized person.
        stored_locations: (role, stored location) pairs, birth before death.

    Returns:
        List[EventCreate]: Event payloads ready for storage.
    """
    events = []
    for role, location in stored_locations:
        events.append(EventCreate(
            member_id=member_id,
            location_id=location.id,
            event_type=location.location_type or str(role),
            event_date=person.date_for(role),
            description=describe_event(role, location.name),
            notes='',
        ))
    return events
