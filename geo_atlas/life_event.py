"""
life_event.py - Event types and the GedcomEvent record.

GedcomEvent is the event as found in an upload (a GEDCOM BIRT/DEAT/MARR/RESI
block, or a birth/death synthesized from a CSV row). Stored life events
linking a member to a location are created later by the event materializer.

Module: geo_atlas.life_event
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class EventType(str, Enum):
    """Event and location type tags."""
    BIRTH = 'birth'
    DEATH = 'death'
    MARRIAGE = 'marriage'
    RESIDENCE = 'residence'
    MIGRATION = 'migration'

    def __str__(self) -> str:
        return self.value


_DESCRIPTION_VERBS = {
    EventType.BIRTH: 'Born',
    EventType.DEATH: 'Died',
    EventType.MARRIAGE: 'Married',
    EventType.RESIDENCE: 'Lived',
    EventType.MIGRATION: 'Moved',
}


def describe_event(event_type: EventType, place: Optional[str], unknown: str = 'unknown location') -> str:
    """
    Human-readable description of an event at a place, e.g. "Born in Boston".

    Args:
        event_type (EventType): The event type.
        place (Optional[str]): Place name; `unknown` is used when empty.
        unknown (str): Placeholder for a missing place.
    """
    verb = _DESCRIPTION_VERBS.get(event_type, str(event_type).capitalize())
    return f"{verb} in {place or unknown}"


@dataclass(frozen=True)
class GedcomEvent:
    """
    A life event read from an upload.

    Attributes:
        event_type (EventType): birth, death, marriage or residence.
        date (Optional[str]): Free-text date.
        place (Optional[str]): Free-text place.
        description (Optional[str]): Optional human-readable description.
    """
    event_type: EventType
    date: Optional[str] = None
    place: Optional[str] = None
    description: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.event_type} : {self.date or ''} - {self.place or ''}"
