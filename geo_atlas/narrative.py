"""
narrative.py - Build a prose story from stored life events.

Each member's events are ordered by date and rendered as one sentence of the
form "Name's journey began with their birth in X in 1900, and their life
concluded in Y in 1950." followed by the member's notes.

Module: geo_atlas.narrative
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional

from .gedcom_date import DEFAULT_SORT_DATE, sort_date
from .life_event import EventType
from .schema import FamilyMember, LifeEvent, Location

logger = logging.getLogger(__name__)

# event type -> (template, fallback when the location is not among the selected ones)
FRAGMENT_TEMPLATES = {
    EventType.BIRTH.value: ('with their birth in {place}', 'an unknown location'),
    EventType.MIGRATION.value: ('followed by a significant migration to {place}', 'a new location'),
    EventType.DEATH.value: ('and their life concluded in {place}', 'an unknown location'),
}


def event_fragment(event: LifeEvent, location: Optional[Location]) -> Optional[str]:
    """
    Render one event as a sentence fragment, or None for event types with no template.
    """
    template = FRAGMENT_TEMPLATES.get(event.event_type)
    if template is None:
        return None
    text, fallback = template
    fragment = text.format(place=location.name if location is not None else fallback)
    if event.event_date:
        fragment += f" in {event.event_date}"
    return fragment


def member_paragraph(member: FamilyMember, events: List[LifeEvent], locations: Dict[str, Location]) -> str:
    """
    One member's journey sentence plus notes. A member whose events all lack
    templates gets no journey sentence, only the notes.
    """
    fragments = []
    for event in events:
        fragment = event_fragment(event, locations.get(event.location_id))
        if fragment:
            fragments.append(fragment)
    parts = []
    if fragments:
        parts.append(f"{member.name}'s journey began {', '.join(fragments)}.")
    if member.notes:
        parts.append(member.notes)
    return ' '.join(parts)


def build_story(events: Iterable[LifeEvent], members: Iterable[FamilyMember], locations: Iterable[Location],
                default_date: date = DEFAULT_SORT_DATE) -> str:
    """
    Build the narrative for a selection of events, members and locations.

    Events are grouped by member in order of first appearance; events of a
    member that is not in the selection are left out. Within a member, events
    are sorted by parsed date, with missing or unparseable dates sorting as
    `default_date`; ties keep their input order.

    Args:
        events: Selected life events.
        members: Selected family members.
        locations: Selected locations.
        default_date (date): Sort key for events without a usable date.

    Returns:
        str: The story text, empty when there are no events.
    """
    members_by_id = {member.id: member for member in members}
    locations_by_id = {location.id: location for location in locations}

    grouped: Dict[str, List[LifeEvent]] = {}
    for event in events:
        grouped.setdefault(event.member_id, []).append(event)

    paragraphs = []
    for member_id, member_events in grouped.items():
        member = members_by_id.get(member_id)
        if member is None:
            logger.debug(f"No member {member_id} in selection, skipping {len(member_events)} events")
            continue
        ordered = sorted(member_events, key=lambda event: sort_date(event.event_date, default_date))
        paragraph = member_paragraph(member, ordered, locations_by_id)
        if paragraph:
            paragraphs.append(paragraph)
    return ' '.join(paragraphs).strip()
