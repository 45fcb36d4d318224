"""
person.py - Canonical person record produced by the record normalizer.

Module: geo_atlas.person
"""
from __future__ import annotations

__all__ = ['PersonRecord']

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .life_event import EventType, GedcomEvent


@dataclass(frozen=True)
class PersonRecord:
    """
    A person as read from one GEDCOM individual or one CSV row.

    Attributes:
        xref_id (str): GEDCOM cross-reference id (e.g. '@I1@') or synthetic row id ('I3').
        name (str): Display name.
        birth_date (Optional[str]): Free-text birth date.
        death_date (Optional[str]): Free-text death date.
        birth_place (Optional[str]): Free-text birth place.
        death_place (Optional[str]): Free-text death place.
        notes (str): Free-text notes.
        events (Tuple[GedcomEvent, ...]): Events in the order they were read.
    """
    xref_id: str
    name: str
    birth_date: Optional[str] = None
    death_date: Optional[str] = None
    birth_place: Optional[str] = None
    death_place: Optional[str] = None
    notes: str = ''
    events: Tuple[GedcomEvent, ...] = field(default_factory=tuple)

    def date_for(self, role: EventType) -> Optional[str]:
        """Return the birth or death date for the given role."""
        if role == EventType.BIRTH:
            return self.birth_date
        if role == EventType.DEATH:
            return self.death_date
        return None

    def place_for(self, role: EventType) -> Optional[str]:
        """Return the birth or death place for the given role."""
        if role == EventType.BIRTH:
            return self.birth_place
        if role == EventType.DEATH:
            return self.death_place
        return None

    def places(self) -> List[Tuple[EventType, str]]:
        """
        Return the (role, place) pairs that need resolving, birth first.
        Empty places are left out.
        """
        pairs = []
        for role in (EventType.BIRTH, EventType.DEATH):
            place = self.place_for(role)
            if place:
                pairs.append((role, place))
        return pairs

    def __str__(self) -> str:
        return f"Person(id={self.xref_id}, name={self.name})"
