"""
gedcom_parser.py - Tolerant line-oriented GEDCOM tokenizer and tree builder.

Walks GEDCOM text one line at a time and rebuilds individuals (INDI) and
families (FAM) from the level numbers alone. Parsing never raises: lines
that cannot be tokenized, and INDI/FAM records without a cross-reference id,
are reported in the `skipped` list of the result instead.

The walk is an explicit state machine. The parse context is one of
`ParseContext.NONE`, `INDIVIDUAL` or `FAMILY`, and transitions go through
open_individual(), open_family(), close_context(), open_event() and
attach_event().

Module: geo_atlas.gedcom_parser
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

from .family import Family
from .life_event import EventType, GedcomEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GedcomLine:
    """
    One tokenized GEDCOM line: `LEVEL [@XREF@] TAG [VALUE]`.

    Attributes:
        number (int): 1-based line number in the source text.
        level (int): Nesting level.
        xref (Optional[str]): Cross-reference id before the tag, e.g. '@I1@'.
        tag (str): Tag, e.g. 'INDI', 'NAME', 'DATE'.
        value (str): Remainder of the line, may be empty.
    """
    number: int
    level: int
    xref: Optional[str]
    tag: str
    value: str = ''


@dataclass(frozen=True)
class SkippedLine:
    """
    A line, row or record dropped while reading an upload.

    Attributes:
        line_number (int): 1-based line number in the source text.
        text (str): The offending text, trimmed.
        reason (str): Why it was dropped.
    """
    line_number: int
    text: str
    reason: str


@dataclass(frozen=True)
class GedcomIndividual:
    """
    An individual as read from an INDI record, before normalization.
    """
    xref_id: str
    name: str = ''
    birth_date: Optional[str] = None
    death_date: Optional[str] = None
    birth_place: Optional[str] = None
    death_place: Optional[str] = None
    notes: Optional[str] = None
    events: Tuple[GedcomEvent, ...] = field(default_factory=tuple)
    line_number: int = 0


@dataclass
class ParsedGedcom:
    """
    Output of GedcomParser.parse().

    Attributes:
        individuals (List[GedcomIndividual]): Individuals in file order.
        families (List[Family]): Families in file order.
        events (List[GedcomEvent]): Every attached event, individual and family, in file order.
        skipped (List[SkippedLine]): Lines and records that were dropped.
    """
    individuals: List[GedcomIndividual] = field(default_factory=list)
    families: List[Family] = field(default_factory=list)
    events: List[GedcomEvent] = field(default_factory=list)
    skipped: List[SkippedLine] = field(default_factory=list)


class ParseContext(Enum):
    """Record currently being built."""
    NONE = 'none'
    INDIVIDUAL = 'individual'
    FAMILY = 'family'


LEVEL_RE = re.compile(r'^-?\d+$')


def tokenize_line(number: int, raw: str) -> Union[GedcomLine, SkippedLine]:
    """
    Split one raw line into level, optional xref, tag and value.

    Args:
        number (int): 1-based line number, carried into the result.
        raw (str): The raw line.

    Returns:
        GedcomLine, or SkippedLine if the level is not a non-negative integer
        or the tag is missing.
    """
    text = raw.strip()
    level_token, _, rest = text.partition(' ')
    if not LEVEL_RE.match(level_token):
        return SkippedLine(number, text, 'non-numeric level')
    level = int(level_token)
    if level < 0:
        return SkippedLine(number, text, 'invalid level')
    rest = rest.lstrip()
    xref = None
    if rest.startswith('@'):
        xref, _, rest = rest.partition(' ')
        rest = rest.lstrip()
    tag, _, value = rest.partition(' ')
    if not tag:
        return SkippedLine(number, text, 'missing tag')
    return GedcomLine(number=number, level=level, xref=xref, tag=tag, value=value.strip())


class _IndividualBuilder:
    """Mutable individual under construction."""
    __slots__ = ['xref_id', 'line_number', 'name', 'birth_date', 'death_date',
                 'birth_place', 'death_place', 'notes', 'events']

    def __init__(self, xref_id: str, line_number: int):
        self.xref_id = xref_id
        self.line_number = line_number
        self.name = ''
        self.birth_date: Optional[str] = None
        self.death_date: Optional[str] = None
        self.birth_place: Optional[str] = None
        self.death_place: Optional[str] = None
        self.notes: Optional[str] = None
        self.events: List[GedcomEvent] = []

    def build(self) -> GedcomIndividual:
        return GedcomIndividual(
            xref_id=self.xref_id,
            name=self.name,
            birth_date=self.birth_date,
            death_date=self.death_date,
            birth_place=self.birth_place,
            death_place=self.death_place,
            notes=self.notes,
            events=tuple(self.events),
            line_number=self.line_number,
        )


class _FamilyBuilder:
    """Mutable family under construction."""
    __slots__ = ['xref_id', 'line_number', 'husband', 'wife', 'children',
                 'marriage_date', 'marriage_place']

    def __init__(self, xref_id: str, line_number: int):
        self.xref_id = xref_id
        self.line_number = line_number
        self.husband: Optional[str] = None
        self.wife: Optional[str] = None
        self.children: List[str] = []
        self.marriage_date: Optional[str] = None
        self.marriage_place: Optional[str] = None

    def build(self) -> Family:
        return Family(
            xref_id=self.xref_id,
            husband=self.husband,
            wife=self.wife,
            children=tuple(self.children),
            marriage_date=self.marriage_date,
            marriage_place=self.marriage_place,
        )


class _PendingEvent:
    """
    Event opened by a level-1 event tag, waiting for its first DATE or PLAC line.
    """
    __slots__ = ['event_type', 'date', 'place']

    def __init__(self, event_type: EventType):
        self.event_type = event_type
        self.date: Optional[str] = None
        self.place: Optional[str] = None

    def to_event(self) -> GedcomEvent:
        return GedcomEvent(event_type=self.event_type, date=self.date, place=self.place)


class GedcomParser:
    """
    Rebuilds individuals and families from GEDCOM text.

    A parser instance can be reused; each call to parse() starts from a clean state.

    Attributes:
        context (ParseContext): Current parse context.
    """
    INDIVIDUAL_EVENT_TAGS = {
        'BIRT': EventType.BIRTH,
        'DEAT': EventType.DEATH,
        'RESI': EventType.RESIDENCE,
    }
    FAMILY_EVENT_TAGS = {
        'MARR': EventType.MARRIAGE,
    }

    def __init__(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self.context = ParseContext.NONE
        self._individual: Optional[_IndividualBuilder] = None
        self._family: Optional[_FamilyBuilder] = None
        self._pending: Optional[_PendingEvent] = None
        self._result = ParsedGedcom()

    def parse(self, text: str) -> ParsedGedcom:
        """
        Parse GEDCOM text.

        Args:
            text (str): Full GEDCOM file content.

        Returns:
            ParsedGedcom: Individuals, families, flat events and skipped lines.
        """
        self._reset()
        for number, raw in enumerate(text.split('\n'), 1):
            if not raw.strip():
                continue
            token = tokenize_line(number, raw)
            if isinstance(token, SkippedLine):
                logger.debug(f"Skipping GEDCOM line {number} ({token.reason}): {token.text!r}")
                self._result.skipped.append(token)
                continue
            self.feed(token)
        self.close_context()

        result = self._result
        logger.info(
            f"Parsed {len(result.individuals)} individuals, {len(result.families)} families, "
            f"{len(result.events)} events ({len(result.skipped)} skipped)"
        )
        return result

    def feed(self, line: GedcomLine) -> None:
        """
        Apply one tokenized line to the state machine. Lines deeper than level 2 are ignored.
        """
        if line.level == 0:
            self._on_record(line)
        elif line.level == 1:
            self._on_fact(line)
        elif line.level == 2:
            self._on_detail(line)

    # Transitions

    def open_individual(self, xref_id: str, line_number: int) -> None:
        """Start building an individual."""
        self.context = ParseContext.INDIVIDUAL
        self._individual = _IndividualBuilder(xref_id, line_number)

    def open_family(self, xref_id: str, line_number: int) -> None:
        """Start building a family."""
        self.context = ParseContext.FAMILY
        self._family = _FamilyBuilder(xref_id, line_number)

    def close_context(self) -> None:
        """
        Emit the record being built, if it has an id, and return to ParseContext.NONE.
        A record without an id is reported as skipped. A pending event is left
        open; it is replaced only by the next event tag.
        """
        if self._individual is not None:
            if self._individual.xref_id:
                self._result.individuals.append(self._individual.build())
            else:
                self._skip_record(self._individual.line_number, 'INDI')
        if self._family is not None:
            if self._family.xref_id:
                self._result.families.append(self._family.build())
            else:
                self._skip_record(self._family.line_number, 'FAM')
        self._individual = None
        self._family = None
        self.context = ParseContext.NONE

    def open_event(self, event_type: EventType) -> None:
        """Open a pending event to collect the following DATE/PLAC lines."""
        self._pending = _PendingEvent(event_type)

    def attach_event(self) -> None:
        """
        Close the pending event: attach it to the record being built and to the
        flat event list.

        Birth and death are also copied to the individual's top-level fields and
        marriage to the family's; a later event of the same type overwrites the
        earlier copy. Once closed, further DATE/PLAC lines are ignored until the
        next event tag.
        """
        pending = self._pending
        if pending is None:
            return
        self._pending = None
        event = pending.to_event()

        if self.context is ParseContext.INDIVIDUAL and self._individual is not None:
            individual = self._individual
            individual.events.append(event)
            if event.event_type is EventType.BIRTH:
                individual.birth_date = event.date
                individual.birth_place = event.place
            elif event.event_type is EventType.DEATH:
                individual.death_date = event.date
                individual.death_place = event.place
        elif self.context is ParseContext.FAMILY and self._family is not None:
            if event.event_type is EventType.MARRIAGE:
                self._family.marriage_date = event.date
                self._family.marriage_place = event.place

        self._result.events.append(event)

    # Line handlers

    def _on_record(self, line: GedcomLine) -> None:
        self.close_context()
        if 'INDI' in line.tag:
            self.open_individual(line.xref or '', line.number)
        elif 'FAM' in line.tag:
            self.open_family(line.xref or '', line.number)

    def _on_fact(self, line: GedcomLine) -> None:
        if self.context is ParseContext.INDIVIDUAL:
            self._on_individual_fact(line)
        elif self.context is ParseContext.FAMILY:
            self._on_family_fact(line)

    def _on_individual_fact(self, line: GedcomLine) -> None:
        individual = self._individual
        if line.tag == 'NAME':
            individual.name = line.value.replace('/', '').strip()
        elif line.tag in self.INDIVIDUAL_EVENT_TAGS:
            self.open_event(self.INDIVIDUAL_EVENT_TAGS[line.tag])
        elif line.tag == 'NOTE':
            individual.notes = line.value

    def _on_family_fact(self, line: GedcomLine) -> None:
        family = self._family
        if line.tag == 'HUSB':
            family.husband = line.value
        elif line.tag == 'WIFE':
            family.wife = line.value
        elif line.tag == 'CHIL':
            family.children.append(line.value)
        elif line.tag in self.FAMILY_EVENT_TAGS:
            self.open_event(self.FAMILY_EVENT_TAGS[line.tag])

    def _on_detail(self, line: GedcomLine) -> None:
        if self._pending is None:
            return
        if line.tag == 'DATE':
            self._pending.date = line.value
        elif line.tag == 'PLAC':
            self._pending.place = line.value
        else:
            return
        self.attach_event()

    def _skip_record(self, line_number: int, record_type: str) -> None:
        logger.debug(f"Discarding {record_type} record at line {line_number}: no identifier")
        self._result.skipped.append(SkippedLine(line_number, f"0 {record_type}", 'record without identifier'))


def parse_gedcom(text: str) -> ParsedGedcom:
    """Convenience wrapper around GedcomParser().parse()."""
    return GedcomParser().parse(text)
