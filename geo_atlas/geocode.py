"""
geocode.py - Place resolution through an external geocoding collaborator.

The geocoder is a black box that takes a free-text query and returns zero or
one best match. NominatimGeocoder is the default collaborator (geopy's
Nominatim client); tests and other deployments can pass anything with a
compatible geocode() method.

PlaceResolver turns collaborator failures into absences: a raised error and
an empty result both come back as None, so one bad place never stops an upload.

Module: geo_atlas.geocode
"""

import logging
from typing import List, Optional, Protocol, Tuple

from geopy.extra.rate_limiter import RateLimiter
from geopy.geocoders import Nominatim

from .lat_lon import LatLon
from .life_event import EventType
from .location import ResolvedLocation
from .person import PersonRecord

# Re-use higher-level logger (inherits configuration from main script)
logger = logging.getLogger(__name__)

GEOCODEUSERAGENT = "geo_atlas"


class Geocoder(Protocol):
    """
    Geocoding collaborator.
    """
    def geocode(self, query: str) -> Optional[LatLon]:
        """
        Return the best match for a free-text query, or None if there is none.
        May raise on service errors.
        """
        ...


class NominatimGeocoder:
    """
    Geocoder backed by OpenStreetMap Nominatim via geopy.

    Requests go through geopy's RateLimiter so that consecutive calls are at
    least sleep_interval seconds apart. Rate-limited requests are not retried.

    Attributes:
        geolocator (Nominatim): Geopy Nominatim geocoder instance.
        rate_limited_geocode (RateLimiter): Throttled wrapper around geolocator.geocode.
    """
    __slots__ = ['geolocator', 'rate_limited_geocode']

    geocode_sleep_interval = 1  # Nominatim request limit

    def __init__(self, user_agent: str = GEOCODEUSERAGENT, domain: str = 'nominatim.openstreetmap.org',
                 timeout: float = 10, sleep_interval: Optional[float] = None, geolocator=None):
        """
        Args:
            user_agent (str): User agent sent to Nominatim (required by its usage policy).
            domain (str): Nominatim host.
            timeout (float): Request timeout in seconds.
            sleep_interval (Optional[float]): Minimum seconds between requests,
                geocode_sleep_interval when omitted.
            geolocator: Geopy geocoder used instead of a new Nominatim client.
        """
        if geolocator is None:
            geolocator = Nominatim(user_agent=user_agent, domain=domain, timeout=timeout)
        if sleep_interval is None:
            sleep_interval = self.geocode_sleep_interval
        self.geolocator = geolocator
        self.rate_limited_geocode = RateLimiter(
            geolocator.geocode,
            min_delay_seconds=sleep_interval,
            max_retries=0,
            error_wait_seconds=sleep_interval,
            swallow_exceptions=False,
        )

    def geocode(self, query: str) -> Optional[LatLon]:
        if not query:
            return None
        geo_location = self.rate_limited_geocode(query, exactly_one=True)
        if geo_location is None:
            return None
        return LatLon(geo_location.latitude, geo_location.longitude)


class PlaceResolver:
    """
    Resolves place strings to locations, one collaborator call per request.

    There is no caching and no retry: the same place string is looked up again
    every time it is asked for, and a failed lookup stays failed for the run.

    Attributes:
        geocoder (Geocoder): The geocoding collaborator.
    """
    __slots__ = ['geocoder']

    def __init__(self, geocoder: Geocoder):
        self.geocoder = geocoder

    def lookup(self, address: str) -> Optional[LatLon]:
        """
        Geocode a free-text address.

        Args:
            address (str): Address or place string.

        Returns:
            Optional[LatLon]: Coordinates, or None on no match or collaborator error.
        """
        if not address:
            return None
        try:
            latlon = self.geocoder.geocode(address)
        except Exception as e:
            logger.warning(f"Error geocoding {address}: {e}")
            return None
        if latlon is None:
            logger.info(f"No geocoding match for {address}")
            return None
        if not latlon.is_valid():
            logger.warning(f"Ignoring invalid coordinates {latlon} for {address}")
            return None
        logger.debug(f"Geocoded {address} to {latlon}")
        return latlon

    def resolve(self, place: str, location_type: EventType, time_span: Optional[str] = None) -> Optional[ResolvedLocation]:
        """
        Resolve a place string for one role.

        Args:
            place (str): Place string.
            location_type (EventType): Role that triggered the resolution.
            time_span (Optional[str]): The role's date string.

        Returns:
            Optional[ResolvedLocation]: Location with member_count 1, or None if the place did not resolve.
        """
        latlon = self.lookup(place)
        if latlon is None:
            return None
        return ResolvedLocation(
            name=place,
            latlon=latlon,
            address=place,
            location_type=location_type,
            time_span=time_span,
            member_count=1,
        )

    def resolve_person(self, person: PersonRecord) -> List[Tuple[EventType, ResolvedLocation]]:
        """
        Resolve a person's birth place then death place, independently.

        Returns:
            List of (role, location) for the places that resolved, birth first.
        """
        resolved = []
        for role, place in person.places():
            location = self.resolve(place, role, person.date_for(role))
            if location is not None:
                resolved.append((role, location))
        return resolved
