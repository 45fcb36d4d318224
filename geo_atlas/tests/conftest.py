"""
Pytest configuration and fixtures for geo_atlas
"""
from typing import Dict, List, Optional

import pytest

from geo_atlas.atlas_config import AtlasConfig
from geo_atlas.geocode import PlaceResolver
from geo_atlas.ingest import IngestionPipeline
from geo_atlas.lat_lon import LatLon
from geo_atlas.storage import MemoryStorage
from geo_atlas.web import create_app


KNOWN_PLACES = {
    'Boston': (42.3601, -71.0589),
    'Chicago': (41.8781, -87.6298),
    'New York': (40.7128, -74.0060),
    'Dublin, Ireland': (53.3498, -6.2603),
}


class FakeGeocoder:
    """
    Geocoder answering from a fixed table. Records every query; raises for
    queries listed in `failing`.
    """
    def __init__(self, places: Optional[Dict[str, tuple]] = None, failing: tuple = ()):
        self.places = dict(KNOWN_PLACES if places is None else places)
        self.failing = set(failing)
        self.queries: List[str] = []

    def geocode(self, query: str) -> Optional[LatLon]:
        self.queries.append(query)
        if query in self.failing:
            raise RuntimeError(f"geocoding service unavailable for {query}")
        coords = self.places.get(query)
        return LatLon(*coords) if coords else None


class RecordingHooks:
    """App hooks that record progress and stop after a number of steps."""
    def __init__(self, stop_after: Optional[int] = None):
        self.stop_after = stop_after
        self.steps = 0
        self.infos: List[str] = []

    def report_step(self, info: str = "", target: Optional[int] = None, reset_counter: bool = False, plus_step: int = 1) -> None:
        if reset_counter:
            self.steps = 0
        self.steps += plus_step
        if info:
            self.infos.append(info)

    def stop_requested(self) -> bool:
        return self.stop_after is not None and self.steps >= self.stop_after


@pytest.fixture
def fake_geocoder():
    """The fake geocoder class, for tests that need a custom place table"""
    return FakeGeocoder


@pytest.fixture
def recording_hooks():
    """The recording hooks class"""
    return RecordingHooks


@pytest.fixture
def geocoder():
    return FakeGeocoder()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def resolver(geocoder):
    return PlaceResolver(geocoder)


@pytest.fixture
def pipeline(storage, resolver):
    return IngestionPipeline(storage, resolver)


@pytest.fixture
def config():
    return AtlasConfig()


@pytest.fixture
def app(config, storage, geocoder):
    app = create_app(config=config, storage=storage, geocoder=geocoder)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sample_gedcom():
    """Two individuals and a family. Each event closes at its first DATE or PLAC line."""
    return """0 HEAD
1 SOUR test
1 GEDC
2 VERS 5.5.1
1 CHAR UTF-8
0 @I1@ INDI
1 NAME John /Smith/
1 SEX M
1 BIRT
2 PLAC Boston
2 DATE 1900
1 DEAT
2 PLAC Chicago
1 NOTE Worked on the railways.
0 @I2@ INDI
1 NAME Mary /Jones/
1 BIRT
2 PLAC Atlantis
1 DEAT
2 DATE 3 APR 1970
0 @F1@ FAM
1 HUSB @I1@
1 WIFE @I2@
1 CHIL @I3@
1 MARR
2 PLAC New York
0 TRLR
"""


@pytest.fixture
def sample_csv():
    return "name,birth_date,birth_place\nJohn,1900,Boston\n"
