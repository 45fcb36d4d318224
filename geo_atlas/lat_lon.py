"""
lat_lon.py - Latitude/longitude pair used by resolved locations.

Module: geo_atlas.lat_lon
"""
__all__ = ['LatLon']

from typing import Optional


class LatLon:
    """
    Geographic position in decimal degrees.

    Attributes:
        lat (Optional[float]): Latitude.
        lon (Optional[float]): Longitude.
    """
    __slots__ = ['lat', 'lon']

    def __init__(self, lat: Optional[float], lon: Optional[float]):
        self.lat = float(lat) if lat is not None else None
        self.lon = float(lon) if lon is not None else None

    def is_valid(self) -> bool:
        """
        Returns True if both coordinates are present and inside the valid ranges.
        """
        if self.lat is None or self.lon is None:
            return False
        return -90.0 <= self.lat <= 90.0 and -180.0 <= self.lon <= 180.0

    def __eq__(self, other) -> bool:
        if not isinstance(other, LatLon):
            return NotImplemented
        return self.lat == other.lat and self.lon == other.lon

    def __hash__(self):
        return hash((self.lat, self.lon))

    def __str__(self) -> str:
        return f"({self.lat}, {self.lon})"

    def __repr__(self) -> str:
        return f"LatLon(lat={self.lat!r}, lon={self.lon!r})"
