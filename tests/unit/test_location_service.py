"""ジオコーダー・位置情報サービスのテスト（ネットワークなし）"""

from typing import Any, Optional

import googlemaps
import pytest

from vkire_proximity.features.location.domain.models import LocationData
from vkire_proximity.features.location.providers.cache_geocoder import CacheGeocoder
from vkire_proximity.features.location.providers.google_maps_geocoder import GoogleMapsGeocoder
from vkire_proximity.features.location.services.location_service import LocationService
from vkire_proximity.features.proximity.domain.models import GeoPoint, LocatableEntity
from vkire_proximity.shared.exceptions.errors import GeocodingError, InvalidCoordinateError

REVERSE_RESULT = {
    "formatted_address": "Bandra West, Mumbai, Maharashtra, India",
    "place_id": "abc",
    "address_components": [
        {"long_name": "14", "types": ["street_number"]},
        {"long_name": "Hill Road", "types": ["route"]},
        {"long_name": "Mumbai", "types": ["locality", "political"]},
        {"long_name": "Mumbai Suburban", "types": ["administrative_area_level_2", "political"]},
        {"long_name": "Maharashtra", "types": ["administrative_area_level_1", "political"]},
        {"long_name": "India", "types": ["country", "political"]},
    ],
}


class FakeClient:
    """googlemaps.Client互換のフェイク"""

    def __init__(self, geocode_results: Optional[dict[str, list]] = None, error: Optional[Exception] = None) -> None:
        self.geocode_results = geocode_results or {}
        self.reverse_results: list[dict[str, Any]] = [REVERSE_RESULT]
        self.error = error
        self.calls: list[Any] = []

    def geocode(self, address: str, region: str = "in") -> list:
        self.calls.append(("geocode", address, region))
        if self.error:
            raise self.error
        return self.geocode_results.get(address, [])

    def reverse_geocode(self, latlng: tuple[float, float]) -> list:
        self.calls.append(("reverse", latlng))
        if self.error:
            raise self.error
        return self.reverse_results


def geocode_result(lat: float, lng: float) -> list[dict[str, Any]]:
    return [{"geometry": {"location": {"lat": lat, "lng": lng}}}]


def test_geocode() -> None:
    """都市名から座標を取得"""
    client = FakeClient({"Delhi": geocode_result(28.6139, 77.2090)})
    geocoder = GoogleMapsGeocoder("dummy", client=client)

    assert geocoder.geocode("Delhi") == GeoPoint(latitude=28.6139, longitude=77.2090)
    assert geocoder.geocode("Nowhere") is None
    assert geocoder.geocode("") is None


def test_reverse_geocode_components() -> None:
    """逆ジオコーディング結果の住所要素"""
    geocoder = GoogleMapsGeocoder("dummy", client=FakeClient())

    location = geocoder.reverse_geocode(19.0596, 72.8295)

    assert location.city == "Mumbai"
    assert location.region == "Maharashtra"
    assert location.country == "India"
    assert location.address == "14 Hill Road, Mumbai, Maharashtra, India"


def test_reverse_geocode_city_falls_back_to_subregion() -> None:
    """localityがない場合はadministrative_area_level_2"""
    client = FakeClient()
    client.reverse_results = [
        {
            "address_components": [
                {"long_name": "Thane", "types": ["administrative_area_level_2"]},
                {"long_name": "India", "types": ["country"]},
            ]
        }
    ]
    geocoder = GoogleMapsGeocoder("dummy", client=client)

    location = geocoder.reverse_geocode(19.2, 72.97)

    assert location.city == "Thane"
    assert location.address == "Thane, India"


def test_api_error_is_wrapped() -> None:
    """APIエラーはGeocodingErrorに変換"""
    geocoder = GoogleMapsGeocoder(
        "dummy", client=FakeClient(error=googlemaps.exceptions.ApiError("OVER_QUERY_LIMIT"))
    )

    with pytest.raises(GeocodingError):
        geocoder.geocode("Delhi")
    with pytest.raises(GeocodingError):
        geocoder.reverse_geocode(1.0, 1.0)


def test_cache_geocoder_hits() -> None:
    """同じ都市名・座標はキャッシュから返す"""
    client = FakeClient({"Delhi": geocode_result(28.6139, 77.2090)})
    cache = CacheGeocoder(GoogleMapsGeocoder("dummy", client=client))

    cache.geocode("Delhi")
    cache.geocode("  delhi ")
    cache.reverse_geocode(19.0596, 72.8295)
    cache.reverse_geocode(19.05960001, 72.8295)

    stats = cache.get_cache_stats()
    assert stats["hit_count"] == 2
    assert stats["miss_count"] == 2
    assert stats["hit_rate_percent"] == 50.0
    assert len(client.calls) == 2

    cache.clear_cache()
    assert cache.get_cache_stats()["cache_size"] == 0


def test_cache_geocoder_prefetch() -> None:
    """prefetchは重複を除いて一度だけ問い合わせる"""
    client = FakeClient({"Delhi": geocode_result(28.6139, 77.2090)})
    cache = CacheGeocoder(GoogleMapsGeocoder("dummy", client=client))

    cache.prefetch(["Delhi", "Delhi", "", "Goa"])

    assert len(client.calls) == 2


def test_resolve_current_location() -> None:
    """座標から現在地情報を生成"""
    service = LocationService(GoogleMapsGeocoder("dummy", client=FakeClient()), delay_between_requests=0)

    location = service.resolve_current_location(19.0596, 72.8295)

    assert location.city == "Mumbai"
    assert (location.latitude, location.longitude) == (19.0596, 72.8295)


def test_resolve_current_location_falls_back_on_error() -> None:
    """逆ジオコーディング失敗時は座標のみ"""
    client = FakeClient(error=googlemaps.exceptions.TransportError("timeout"))
    service = LocationService(GoogleMapsGeocoder("dummy", client=client), delay_between_requests=0)

    location = service.resolve_current_location(19.0596, 72.8295)

    assert location == LocationData(latitude=19.0596, longitude=72.8295)


def test_resolve_current_location_rejects_invalid() -> None:
    """範囲外の座標はエラー"""
    service = LocationService(GoogleMapsGeocoder("dummy", client=FakeClient()), delay_between_requests=0)

    with pytest.raises(InvalidCoordinateError):
        service.resolve_current_location(91.0, 0.0)


def test_geocode_entities_batch() -> None:
    """座標のないエンティティを都市名で補完"""
    client = FakeClient(
        {
            "Delhi": geocode_result(28.6139, 77.2090),
            "Atlantis": geocode_result(123.0, 0.0),
        }
    )
    service = LocationService(
        CacheGeocoder(GoogleMapsGeocoder("dummy", client=client)),
        delay_between_requests=0,
    )
    existing = GeoPoint(latitude=19.0, longitude=72.8)
    entities = [
        LocatableEntity(id="1", locality_text="Delhi"),
        LocatableEntity(id="2", coordinate=existing, locality_text="Mumbai"),
        LocatableEntity(id="3", locality_text="Nowhere"),
        LocatableEntity(id="4"),
        LocatableEntity(id="5", locality_text="Atlantis"),
    ]

    completed, result = service.geocode_entities_batch(entities, show_progress=False)

    assert [entity.id for entity in completed] == ["1", "2", "3", "4", "5"]
    assert completed[0].coordinate == GeoPoint(latitude=28.6139, longitude=77.2090)
    assert completed[1].coordinate == existing
    assert completed[2].coordinate is None
    assert completed[4].coordinate is None
    assert entities[0].coordinate is None
    assert result == {"success": 1, "failure": 2, "skipped": 2, "total": 5}
    assert service.get_cache_stats()["miss_count"] == 3


def test_cache_stats_without_cache() -> None:
    """キャッシュなしの場合はNone"""
    service = LocationService(GoogleMapsGeocoder("dummy", client=FakeClient()), delay_between_requests=0)

    assert service.get_cache_stats() is None
