"""
location.py - Geocoded location produced by the place resolver.

Module: geo_atlas.location
"""
from __future__ import annotations

__all__ = ['ResolvedLocation']

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .lat_lon import LatLon
from .life_event import EventType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedLocation:
    """
    A place string resolved to coordinates for one (person, role) pair.

    Every resolution creates its own location, even when several people share
    a place string, so member_count is always 1.

    Attributes:
        name (str): The input place string, used as display name.
        latlon (LatLon): Resolved coordinates.
        address (Optional[str]): Source address string.
        location_type (EventType): Role that triggered resolution (birth, death, ...).
        time_span (Optional[str]): The role's date string.
        member_count (int): Usage counter.
    """
    name: str
    latlon: LatLon
    address: Optional[str] = None
    location_type: EventType = EventType.BIRTH
    time_span: Optional[str] = None
    member_count: int = 1

    @property
    def latitude(self) -> Optional[float]:
        return self.latlon.lat

    @property
    def longitude(self) -> Optional[float]:
        return self.latlon.lon

    def as_dict(self) -> Dict[str, Any]:
        """
        Field mapping accepted by the storage layer's location schema.
        """
        return {
            'name': self.name,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'address': self.address,
            'location_type': str(self.location_type),
            'time_span': self.time_span,
            'member_count': self.member_count,
        }

    def __str__(self):
        return f"Location(name={self.name}, latlon={self.latlon})"
