"""Google Maps Geocoding API実装"""
from typing import Any, Optional

import googlemaps

from ....shared.exceptions.errors import GeocodingError
from ....shared.logging.config import get_logger
from ...proximity.domain.models import GeoPoint
from ..domain.models import LocationData

logger = get_logger(__name__)


class GoogleMapsGeocoder:
    """Google Maps Geocoding API実装"""

    def __init__(self, api_key: str, client: Optional[Any] = None) -> None:
        """
        Args:
            api_key: Google Maps API キー
            client: googlemaps.Client互換のクライアント（テスト用に差し替え可能）
        """
        if client is not None:
            self.client = client
            return

        try:
            self.client = googlemaps.Client(key=api_key)
            logger.info("GoogleMapsGeocoder initialized")
        except Exception as e:
            raise GeocodingError(f"Failed to initialize Google Maps client: {e}") from e

    def geocode(self, address: str, region: str = "in") -> Optional[GeoPoint]:
        """
        住所・都市名をジオコーディング

        Args:
            address: 住所文字列
            region: 地域バイアス（デフォルト: "in"）

        Returns:
            Optional[GeoPoint]: 座標（見つからない場合はNone）

        Raises:
            GeocodingError: APIリクエストに失敗した場合
        """
        if not address:
            logger.warning("Empty address provided for geocoding")
            return None

        try:
            logger.debug(f"Geocoding address: {address}")

            results = self.client.geocode(address, region=region)

            if not results:
                logger.warning(f"No geocoding results for address: {address}")
                return None

            location = results[0].get("geometry", {}).get("location", {})
            latitude = location.get("lat")
            longitude = location.get("lng")

            if latitude is None or longitude is None:
                logger.warning(f"Invalid geocoding result (missing lat/lng): {address}")
                return None

            logger.debug(f"Geocoded: {address} -> ({latitude}, {longitude})")
            return GeoPoint(latitude=latitude, longitude=longitude)

        except googlemaps.exceptions.ApiError as e:
            raise GeocodingError(f"Google Maps API error: {e}") from e
        except googlemaps.exceptions.TransportError as e:
            raise GeocodingError(f"Google Maps transport error: {e}") from e
        except Exception as e:
            raise GeocodingError(f"Unexpected error during geocoding: {e}") from e

    def reverse_geocode(
        self, latitude: float, longitude: float
    ) -> Optional[LocationData]:
        """
        座標から住所を取得（逆ジオコーディング）

        Args:
            latitude: 緯度
            longitude: 経度

        Returns:
            Optional[LocationData]: 住所付きの位置情報（見つからない場合はNone）

        Raises:
            GeocodingError: APIリクエストに失敗した場合
        """
        try:
            logger.debug(f"Reverse geocoding: ({latitude}, {longitude})")

            results = self.client.reverse_geocode((latitude, longitude))

            if not results:
                logger.warning(
                    f"No reverse geocoding results for: ({latitude}, {longitude})"
                )
                return None

            location = self._to_location_data(latitude, longitude, results[0])

            logger.debug(
                f"Reverse geocoded: ({latitude}, {longitude}) -> {location.address}"
            )
            return location

        except googlemaps.exceptions.ApiError as e:
            raise GeocodingError(f"Google Maps API error: {e}") from e
        except googlemaps.exceptions.TransportError as e:
            raise GeocodingError(f"Google Maps transport error: {e}") from e
        except Exception as e:
            raise GeocodingError(
                f"Unexpected error during reverse geocoding: {e}"
            ) from e

    @staticmethod
    def _to_location_data(
        latitude: float, longitude: float, result: dict[str, Any]
    ) -> LocationData:
        """逆ジオコーディング結果をLocationDataに変換"""
        components: dict[str, str] = {}
        for component in result.get("address_components", []):
            for component_type in component.get("types", []):
                components.setdefault(component_type, component.get("long_name", ""))

        street_parts = [components.get("street_number"), components.get("route")]
        street = " ".join(part for part in street_parts if part) or None

        # localityがない地域ではadministrative_area_level_2を都市として扱う
        city = components.get("locality") or components.get(
            "administrative_area_level_2"
        )
        region = components.get("administrative_area_level_1")
        country = components.get("country")

        return LocationData(
            latitude=latitude,
            longitude=longitude,
            address=LocationData.format_address(street, city, region, country),
            city=city,
            region=region,
            country=country,
        )
