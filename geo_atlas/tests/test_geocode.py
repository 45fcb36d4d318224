import logging

from geopy.exc import GeocoderRateLimited
from geopy.extra.rate_limiter import RateLimiter

from geo_atlas.geocode import NominatimGeocoder, PlaceResolver
from geo_atlas.lat_lon import LatLon
from geo_atlas.life_event import EventType
from geo_atlas.person import PersonRecord


def test_resolve_builds_location(resolver):
    location = resolver.resolve("Boston", EventType.BIRTH, "1900")
    assert location.name == "Boston"
    assert location.address == "Boston"
    assert location.latlon == LatLon(42.3601, -71.0589)
    assert location.latitude == 42.3601
    assert location.longitude == -71.0589
    assert location.location_type == EventType.BIRTH
    assert location.time_span == "1900"
    assert location.member_count == 1


def test_resolve_no_match(resolver):
    assert resolver.resolve("Atlantis", EventType.BIRTH) is None


def test_resolve_collaborator_error_is_absence(caplog, fake_geocoder):
    resolver = PlaceResolver(fake_geocoder(failing=("Boston",)))
    with caplog.at_level(logging.WARNING):
        assert resolver.resolve("Boston", EventType.BIRTH) is None
    assert "Error geocoding Boston" in caplog.text


def test_resolve_invalid_coordinates(fake_geocoder):
    resolver = PlaceResolver(fake_geocoder(places={"Nowhere": (123.0, 0.0)}))
    assert resolver.lookup("Nowhere") is None


def test_lookup_empty_address_skips_collaborator(geocoder, resolver):
    assert resolver.lookup("") is None
    assert geocoder.queries == []


def test_no_caching_within_run(geocoder, resolver):
    resolver.resolve("Boston", EventType.BIRTH)
    resolver.resolve("Boston", EventType.DEATH)
    assert geocoder.queries == ["Boston", "Boston"]


def test_resolve_person_birth_then_death(geocoder, resolver):
    person = PersonRecord("I1", "John", birth_date="1900", birth_place="Boston",
                          death_date="1950", death_place="Chicago")
    resolved = resolver.resolve_person(person)
    assert geocoder.queries == ["Boston", "Chicago"]
    assert [(role, loc.name, loc.time_span) for role, loc in resolved] == [
        (EventType.BIRTH, "Boston", "1900"),
        (EventType.DEATH, "Chicago", "1950"),
    ]


def test_resolve_person_independent_failures(fake_geocoder):
    geocoder = fake_geocoder(failing=("Boston",))
    person = PersonRecord("I1", "John", birth_place="Boston", death_place="Chicago")
    resolved = PlaceResolver(geocoder).resolve_person(person)
    assert [role for role, _ in resolved] == [EventType.DEATH]
    assert geocoder.queries == ["Boston", "Chicago"]


def test_location_as_dict(resolver):
    data = resolver.resolve("Chicago", EventType.DEATH, "1950").as_dict()
    assert data == {
        'name': "Chicago",
        'latitude': 41.8781,
        'longitude': -87.6298,
        'address': "Chicago",
        'location_type': "death",
        'time_span': "1950",
        'member_count': 1,
    }


class _StubNominatim:
    def __init__(self, result):
        self.result = result
        self.calls = []

    def geocode(self, query, exactly_one=True):
        self.calls.append((query, exactly_one))
        return self.result


class _GeoPoint:
    latitude = 51.5
    longitude = -0.12


def test_nominatim_geocoder_wraps_geopy():
    stub = _StubNominatim(_GeoPoint())
    geocoder = NominatimGeocoder(geolocator=stub)
    assert geocoder.geocode("London") == LatLon(51.5, -0.12)
    assert stub.calls == [("London", True)]


def test_nominatim_geocoder_no_match():
    stub = _StubNominatim(None)
    geocoder = NominatimGeocoder(geolocator=stub)
    assert geocoder.geocode("Atlantis") is None
    assert geocoder.geocode("") is None
    assert stub.calls == [("Atlantis", True)]


def test_nominatim_geocoder_is_throttled():
    geocoder = NominatimGeocoder(user_agent="geo_atlas_tests")
    assert isinstance(geocoder.rate_limited_geocode, RateLimiter)
    assert geocoder.rate_limited_geocode.min_delay_seconds == 1
    assert geocoder.rate_limited_geocode.max_retries == 0


def test_consecutive_lookups_wait_between_requests(monkeypatch):
    clock = [100.0]
    waits = []

    def fake_sleep(self, seconds):
        waits.append(seconds)
        clock[0] += seconds

    monkeypatch.setattr(RateLimiter, '_clock', lambda self: clock[0])
    monkeypatch.setattr(RateLimiter, '_sleep', fake_sleep)
    stub = _StubNominatim(_GeoPoint())
    geocoder = NominatimGeocoder(geolocator=stub, sleep_interval=1)
    geocoder.geocode("London")
    geocoder.geocode("Paris")
    assert waits == [1]
    assert [query for query, _ in stub.calls] == ["London", "Paris"]


def test_rate_limited_request_not_retried():
    class _Refusing:
        calls = 0

        def geocode(self, query, exactly_one=True):
            self.calls += 1
            raise GeocoderRateLimited("Too many requests")

    refusing = _Refusing()
    resolver = PlaceResolver(NominatimGeocoder(geolocator=refusing))
    assert resolver.lookup("London") is None
    assert refusing.calls == 1
