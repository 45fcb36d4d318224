"""geo_atlas package: GEDCOM/CSV ingestion, place geocoding and family story generation."""

from geo_atlas.atlas_config import AtlasConfig
from geo_atlas.family import Family
from geo_atlas.gedcom_date import GedcomDate
from geo_atlas.gedcom_parser import GedcomParser, ParsedGedcom, SkippedLine, parse_gedcom
from geo_atlas.geocode import Geocoder, NominatimGeocoder, PlaceResolver
from geo_atlas.ingest import IngestionPipeline, IngestResult
from geo_atlas.lat_lon import LatLon
from geo_atlas.life_event import EventType, GedcomEvent
from geo_atlas.location import ResolvedLocation
from geo_atlas.narrative import build_story
from geo_atlas.normalizer import RecordNormalizer
from geo_atlas.person import PersonRecord
from geo_atlas.storage import AtlasStorage, MemoryStorage

__all__ = [
    "AtlasConfig",
    "AtlasStorage",
    "EventType",
    "Family",
    "GedcomDate",
    "GedcomEvent",
    "GedcomParser",
    "Geocoder",
    "IngestionPipeline",
    "IngestResult",
    "LatLon",
    "MemoryStorage",
    "NominatimGeocoder",
    "ParsedGedcom",
    "PersonRecord",
    "PlaceResolver",
    "RecordNormalizer",
    "ResolvedLocation",
    "SkippedLine",
    "build_story",
    "parse_gedcom",
]
