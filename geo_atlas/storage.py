"""
storage.py - Repository protocol and in-memory storage for the atlas entities.

The application factory constructs a MemoryStorage explicitly and injects it;
nothing in the package holds a module-level store. There is no concurrency
control and nothing survives a restart.

Module: geo_atlas.storage
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Mapping, Optional, Protocol, Type, TypeVar

from .schema import (
    AtlasModel, AtlasProject, FamilyMember, GeopackageLayer, LifeEvent, Location, StoredModel, Story
)

logger = logging.getLogger(__name__)

RecordT = TypeVar('RecordT', bound=StoredModel)


class Repository(Protocol[RecordT]):
    """
    One collection of stored records.
    """
    def list(self) -> List[RecordT]: ...

    def get(self, record_id: str) -> Optional[RecordT]: ...

    def create(self, data: AtlasModel) -> RecordT: ...

    def update(self, record_id: str, changes: Mapping[str, Any]) -> Optional[RecordT]: ...

    def delete(self, record_id: str) -> bool: ...


class MemoryRepository(Generic[RecordT]):
    """
    Dictionary-backed repository; records are listed in insertion order.

    Attributes:
        record_cls (Type[RecordT]): Stored model class.
        records (Dict[str, RecordT]): Records by id.
    """
    __slots__ = ['record_cls', 'records']

    def __init__(self, record_cls: Type[RecordT]):
        self.record_cls = record_cls
        self.records: Dict[str, RecordT] = {}

    def list(self) -> List[RecordT]:
        return list(self.records.values())

    def get(self, record_id: str) -> Optional[RecordT]:
        return self.records.get(record_id)

    def create(self, data: AtlasModel) -> RecordT:
        """
        Store a new record built from a create payload, with a fresh id and timestamp.
        """
        record = self.record_cls.model_validate({
            **data.model_dump(),
            'id': str(uuid.uuid4()),
            'created_at': datetime.now(timezone.utc),
        })
        self.records[record.id] = record
        logger.debug(f"Created {self.record_cls.__name__} {record.id}")
        return record

    def update(self, record_id: str, changes: Mapping[str, Any]) -> Optional[RecordT]:
        """
        Apply field changes to a stored record.

        Args:
            record_id (str): Record id.
            changes (Mapping[str, Any]): Field name -> new value. id and created_at cannot change.

        Returns:
            The updated record, or None if the id is unknown.

        Raises:
            pydantic.ValidationError: If the changed record does not validate.
        """
        record = self.records.get(record_id)
        if record is None:
            return None
        values = {key: value for key, value in changes.items() if key not in ('id', 'created_at')}
        updated = self.record_cls.model_validate({**record.model_dump(), **values})
        self.records[record_id] = updated
        return updated

    def delete(self, record_id: str) -> bool:
        return self.records.pop(record_id, None) is not None

    def clear(self) -> None:
        self.records.clear()

    def __len__(self) -> int:
        return len(self.records)


class AtlasStorage(Protocol):
    """
    The store handed to the ingestion pipeline and the HTTP layer.
    """
    members: Repository[FamilyMember]
    locations: Repository[Location]
    events: Repository[LifeEvent]
    stories: Repository[Story]
    geopackage_layers: Repository[GeopackageLayer]
    atlas_projects: Repository[AtlasProject]

    def events_by_member(self, member_id: str) -> List[LifeEvent]: ...

    def events_by_location(self, location_id: str) -> List[LifeEvent]: ...


class MemoryStorage:
    """
    In-memory implementation of AtlasStorage.
    """

    def __init__(self):
        self.members: MemoryRepository[FamilyMember] = MemoryRepository(FamilyMember)
        self.locations: MemoryRepository[Location] = MemoryRepository(Location)
        self.events: MemoryRepository[LifeEvent] = MemoryRepository(LifeEvent)
        self.stories: MemoryRepository[Story] = MemoryRepository(Story)
        self.geopackage_layers: MemoryRepository[GeopackageLayer] = MemoryRepository(GeopackageLayer)
        self.atlas_projects: MemoryRepository[AtlasProject] = MemoryRepository(AtlasProject)

    def events_by_member(self, member_id: str) -> List[LifeEvent]:
        return [event for event in self.events.list() if event.member_id == member_id]

    def events_by_location(self, location_id: str) -> List[LifeEvent]:
        return [event for event in self.events.list() if event.location_id == location_id]

    def clear(self) -> None:
        for repository in (self.members, self.locations, self.events, self.stories,
                           self.geopackage_layers, self.atlas_projects):
            repository.clear()
