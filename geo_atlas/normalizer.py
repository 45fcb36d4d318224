"""
normalizer.py - Map GEDCOM individuals and CSV rows to PersonRecords.

CSV support is deliberately minimal: the first non-blank line is the header,
values are split on a literal comma and there is no quoting or escaping, so
a field containing a comma shifts the remaining columns of its row.

Module: geo_atlas.normalizer
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .family import Family
from .gedcom_parser import GedcomIndividual, ParsedGedcom, SkippedLine
from .life_event import EventType, GedcomEvent, describe_event
from .person import PersonRecord

logger = logging.getLogger(__name__)

# canonical field -> header aliases, first non-empty wins
CSV_ALIASES: Dict[str, Tuple[str, ...]] = {
    'birth_date': ('birth_date', 'birthdate'),
    'death_date': ('death_date', 'deathdate'),
    'birth_place': ('birth_place', 'birthplace'),
    'death_place': ('death_place', 'deathplace'),
}


@dataclass
class NormalizedBatch:
    """
    PersonRecords from one upload, plus what was dropped on the way.

    Attributes:
        people (List[PersonRecord]): Records in input order.
        skipped (List[SkippedLine]): Dropped lines, rows and records.
        families (List[Family]): Families (GEDCOM only).
    """
    people: List[PersonRecord] = field(default_factory=list)
    skipped: List[SkippedLine] = field(default_factory=list)
    families: List[Family] = field(default_factory=list)


def csv_lines(text: str) -> List[Tuple[int, str]]:
    """
    Return the non-blank lines of a CSV text as (1-based line number, line) pairs.
    A leading byte-order mark is dropped.
    """
    return [(number, line) for number, line in enumerate(text.lstrip('\ufeff').split('\n'), 1) if line.strip()]


def split_csv_line(line: str) -> List[str]:
    """Split on a literal comma and trim each value."""
    return [value.strip() for value in line.split(',')]


class RecordNormalizer:
    """
    Produces PersonRecords from either input format.
    """

    def from_gedcom_individual(self, individual: GedcomIndividual) -> PersonRecord:
        """
        Map a parsed GEDCOM individual to a PersonRecord. The parsed events are kept as-is.
        """
        return PersonRecord(
            xref_id=individual.xref_id,
            name=individual.name,
            birth_date=individual.birth_date or None,
            death_date=individual.death_date or None,
            birth_place=individual.birth_place or None,
            death_place=individual.death_place or None,
            notes=individual.notes or '',
            events=tuple(individual.events),
        )

    def from_csv_row(self, row: Dict[str, str], row_id: str) -> Optional[PersonRecord]:
        """
        Map a header-keyed CSV row to a PersonRecord.

        Args:
            row (Dict[str, str]): Lower-cased header -> value.
            row_id (str): Synthetic id for the record.

        Returns:
            PersonRecord, or None if the row has no name.
        """
        name = row.get('name', '')
        if not name:
            return None
        values = {key: self._first_non_empty(row, aliases) for key, aliases in CSV_ALIASES.items()}
        return PersonRecord(
            xref_id=row_id,
            name=name,
            birth_date=values['birth_date'],
            death_date=values['death_date'],
            birth_place=values['birth_place'],
            death_place=values['death_place'],
            notes=row.get('notes', ''),
            events=self.synthesize_events(
                values['birth_date'], values['birth_place'],
                values['death_date'], values['death_place'],
            ),
        )

    def normalize_gedcom(self, parsed: ParsedGedcom) -> NormalizedBatch:
        """
        Normalize every parsed individual. Individuals without a name are skipped.
        """
        batch = NormalizedBatch(skipped=list(parsed.skipped), families=list(parsed.families))
        for individual in parsed.individuals:
            if not individual.name:
                logger.debug(f"Skipping individual {individual.xref_id}: no name")
                batch.skipped.append(SkippedLine(individual.line_number, individual.xref_id, 'individual without name'))
                continue
            batch.people.append(self.from_gedcom_individual(individual))
        return batch

    def normalize_csv(self, text: str) -> NormalizedBatch:
        """
        Normalize CSV text. Fewer than two non-blank lines yields an empty batch.

        Row ids are 'I{n}' where n is the row's position after the header,
        counting only non-blank lines.
        """
        batch = NormalizedBatch()
        lines = csv_lines(text)
        if len(lines) < 2:
            return batch

        headers = [header.lower() for header in split_csv_line(lines[0][1])]
        for index, (number, line) in enumerate(lines[1:], 1):
            values = split_csv_line(line)
            row = {header: (values[i] if i < len(values) else '') for i, header in enumerate(headers)}
            person = self.from_csv_row(row, f"I{index}")
            if person is None:
                logger.debug(f"Skipping CSV line {number}: empty name")
                batch.skipped.append(SkippedLine(number, line.strip(), 'empty name'))
                continue
            batch.people.append(person)
        logger.info(f"Normalized {len(batch.people)} CSV rows ({len(batch.skipped)} skipped)")
        return batch

    @staticmethod
    def synthesize_events(birth_date: Optional[str], birth_place: Optional[str],
                          death_date: Optional[str], death_place: Optional[str]) -> Tuple[GedcomEvent, ...]:
        """
        Birth and death event precursors; each is created when its date or place is present.
        """
        events = []
        for role, date, place in ((EventType.BIRTH, birth_date, birth_place),
                                  (EventType.DEATH, death_date, death_place)):
            if date or place:
                events.append(GedcomEvent(
                    event_type=role,
                    date=date,
                    place=place,
                    description=describe_event(role, place),
                ))
        return tuple(events)

    @staticmethod
    def _first_non_empty(row: Dict[str, str], aliases: Sequence[str]) -> Optional[str]:
        for alias in aliases:
            value = row.get(alias)
            if value:
                return value
        return None
