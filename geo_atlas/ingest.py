"""
ingest.py - Upload ingestion pipeline: normalize, resolve places, store.

For each person in source order the pipeline creates the family member,
resolves the birth place and then the death place, stores the resolved
locations and finally stores the events derived from them. A life event is
therefore never stored before its member and location. Geocoding calls are
strictly sequential; a place that fails to resolve only loses its event.

Module: geo_atlas.ingest
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .app_hooks import AppHooks
from .event_materializer import materialize_events
from .exceptions import UploadError
from .gedcom_parser import SkippedLine, parse_gedcom
from .geocode import PlaceResolver
from .normalizer import NormalizedBatch, RecordNormalizer, csv_lines
from .person import PersonRecord
from .schema import FamilyMemberCreate, LocationCreate
from .storage import AtlasStorage

logger = logging.getLogger(__name__)


@dataclass
class IngestResult:
    """
    What one upload produced.

    Attributes:
        members (int): Family members created.
        locations (int): Locations created.
        events (int): Life events created.
        families (int): Families read (GEDCOM only; families are not stored).
        skipped (List[SkippedLine]): Lines, rows and records that were dropped.
        stopped (bool): True if the run was stopped through the app hooks.
    """
    members: int = 0
    locations: int = 0
    events: int = 0
    families: int = 0
    skipped: List[SkippedLine] = field(default_factory=list)
    stopped: bool = False

    def counts(self) -> Dict[str, int]:
        return {
            'members': self.members,
            'locations': self.locations,
            'events': self.events,
            'skipped': len(self.skipped),
        }


class IngestionPipeline:
    """
    Turns uploaded GEDCOM or CSV text into stored members, locations and events.

    Attributes:
        storage (AtlasStorage): Destination store.
        resolver (PlaceResolver): Place resolver.
        normalizer (RecordNormalizer): Record normalizer.
        app_hooks (Optional[AppHooks]): Progress and stop hooks.
    """

    def __init__(self, storage: AtlasStorage, resolver: PlaceResolver,
                 normalizer: Optional[RecordNormalizer] = None, app_hooks: Optional['AppHooks'] = None) -> None:
        self.storage = storage
        self.resolver = resolver
        self.normalizer = normalizer or RecordNormalizer()
        self.app_hooks = app_hooks

    def ingest_gedcom(self, text: str) -> IngestResult:
        """
        Ingest GEDCOM text. Malformed lines are skipped and reported, never raised.
        """
        parsed = parse_gedcom(text)
        batch = self.normalizer.normalize_gedcom(parsed)
        result = self.store_batch(batch)
        logger.info(f"GEDCOM upload: {result.members} members, {result.locations} locations, "
                    f"{result.events} events, {len(result.skipped)} skipped")
        return result

    def ingest_csv(self, text: str) -> IngestResult:
        """
        Ingest CSV text.

        Raises:
            UploadError: If the text has no header row plus at least one data row.
        """
        if len(csv_lines(text)) < 2:
            raise UploadError("CSV file must have header and data rows")
        batch = self.normalizer.normalize_csv(text)
        result = self.store_batch(batch)
        logger.info(f"CSV upload: {result.members} members, {result.locations} locations, "
                    f"{result.events} events, {len(result.skipped)} skipped")
        return result

    def store_batch(self, batch: NormalizedBatch) -> IngestResult:
        """
        Store every person of a normalized batch, in order.
        """
        result = IngestResult(families=len(batch.families), skipped=list(batch.skipped))
        self._report_step(info="Storing people", target=len(batch.people), reset_counter=True, plus_step=0)
        for person in batch.people:
            if self._stop_requested("Ingestion stopped by user"):
                logger.info(f"Ingestion stopped after {result.members} of {len(batch.people)} people")
                result.stopped = True
                break
            self.store_person(person, result)
            self._report_step(plus_step=1)
        return result

    def store_person(self, person: PersonRecord, result: IngestResult) -> None:
        """
        Create one member, its resolved locations and its events, updating the counts in `result`.
        """
        member = self.storage.members.create(FamilyMemberCreate(
            name=person.name,
            birth_date=person.birth_date,
            death_date=person.death_date,
            birth_place=person.birth_place,
            death_place=person.death_place,
            notes=person.notes,
            photos=[],
        ))
        result.members += 1

        stored_locations = []
        for role, resolved in self.resolver.resolve_person(person):
            location = self.storage.locations.create(LocationCreate(**resolved.as_dict()))
            stored_locations.append((role, location))
            result.locations += 1

        for event in materialize_events(member.id, person, stored_locations):
            self.storage.events.create(event)
            result.events += 1

    def _report_step(self, info: str = "", target: Optional[int] = None, reset_counter: bool = False, plus_step: int = 0) -> None:
        """
        Report a step via app hooks if available. (Private method)
        """
        if self.app_hooks and callable(getattr(self.app_hooks, "report_step", None)):
            self.app_hooks.report_step(info=info, target=target, reset_counter=reset_counter, plus_step=plus_step)
        elif info:
            logger.debug(info)

    def _stop_requested(self, logger_stop_message: str = "Stop requested by user") -> bool:
        """
        Check if stop has been requested via app hooks. (Private method)
        """
        if self.app_hooks and callable(getattr(self.app_hooks, "stop_requested", None)):
            if self.app_hooks.stop_requested():
                if logger_stop_message:
                    logger.debug(logger_stop_message)
                return True
        return False
