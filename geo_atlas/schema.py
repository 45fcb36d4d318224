"""
schema.py - Stored entity types and their create payloads.

Every collection has a *Create model (the validated body of a POST, and what
the ingestion pipeline hands to storage) and a stored model that adds the
generated id and creation timestamp. JSON uses camelCase keys; Python code
uses the snake_case field names.

Module: geo_atlas.schema
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AtlasModel(BaseModel):
    """Base model: camelCase aliases on the wire, field names accepted too."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode='json')


class StoredModel(AtlasModel):
    id: str
    created_at: datetime


class FamilyMemberCreate(AtlasModel):
    name: str = Field(min_length=1)
    birth_date: Optional[str] = None
    death_date: Optional[str] = None
    birth_place: Optional[str] = None
    death_place: Optional[str] = None
    notes: Optional[str] = None
    photos: List[str] = Field(default_factory=list)


class FamilyMember(FamilyMemberCreate, StoredModel):
    pass


class LocationCreate(AtlasModel):
    name: str = Field(min_length=1)
    latitude: float
    longitude: float
    address: Optional[str] = None
    location_type: Optional[str] = None
    time_span: Optional[str] = None
    member_count: int = 0


class Location(LocationCreate, StoredModel):
    pass


class EventCreate(AtlasModel):
    member_id: Optional[str] = None
    location_id: Optional[str] = None
    event_type: str = Field(min_length=1)
    event_date: Optional[str] = None
    description: Optional[str] = None
    notes: Optional[str] = None


class LifeEvent(EventCreate, StoredModel):
    pass


class StoryCreate(AtlasModel):
    title: str = Field(min_length=1)
    content: str
    location_id: Optional[str] = None
    member_ids: List[str] = Field(default_factory=list)
    event_ids: List[str] = Field(default_factory=list)
    is_generated: bool = True


class Story(StoryCreate, StoredModel):
    pass


class GeopackageLayerCreate(AtlasModel):
    name: str = Field(min_length=1)
    file_name: str
    layer_name: str
    layer_type: str
    is_visible: bool = True
    style: Optional[Dict[str, Any]] = None
    bounds: Optional[Tuple[float, float, float, float]] = None


class GeopackageLayer(GeopackageLayerCreate, StoredModel):
    pass


class AtlasProjectCreate(AtlasModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    member_count: int = 0
    location_count: int = 0
    story_count: int = 0
    time_span: Optional[str] = None


class AtlasProject(AtlasProjectCreate, StoredModel):
    last_generated: Optional[datetime] = None


class StoryRequest(AtlasModel):
    """Body of a story generation request: the records to narrate."""
    event_ids: List[str] = Field(default_factory=list)
    member_ids: List[str] = Field(default_factory=list)
    location_ids: List[str] = Field(default_factory=list)
