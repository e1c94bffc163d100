"""位置情報サービス"""

import time
from dataclasses import replace
from typing import Optional, Sequence, Union

from tqdm import tqdm

from ....shared.exceptions.errors import GeocodingError, InvalidCoordinateError
from ....shared.logging.config import get_logger
from ...proximity.domain.models import GeoPoint, LocatableEntity, validate_coordinate
from ..domain.models import LocationData
from ..providers.cache_geocoder import CacheGeocoder
from ..providers.google_maps_geocoder import GoogleMapsGeocoder

logger = get_logger(__name__)

Geocoder = Union[CacheGeocoder, GoogleMapsGeocoder]


class LocationService:
    """
    位置情報サービス

    端末座標の逆ジオコーディングと、都市名しか持たないエンティティの
    座標補完を担当する。ランキング自体は行わない。
    """

    def __init__(
        self,
        geocoder: Geocoder,
        region: str = "in",
        delay_between_requests: float = 0.1,
    ) -> None:
        """
        Args:
            geocoder: ジオコーダー（CacheGeocoderまたはGoogleMapsGeocoder）
            region: 地域バイアス
            delay_between_requests: バッチ処理時のリクエスト間の遅延（秒）
        """
        self.geocoder = geocoder
        self.region = region
        self.delay_between_requests = delay_between_requests

        logger.info(
            f"LocationService initialized: region={region}, "
            f"delay={delay_between_requests}s"
        )

    @classmethod
    def create(
        cls,
        api_key: str,
        use_cache: bool = True,
        region: str = "in",
        delay_between_requests: float = 0.1,
    ) -> "LocationService":
        """Google Maps APIキーからサービスを生成"""
        base_geocoder = GoogleMapsGeocoder(api_key)
        geocoder: Geocoder = CacheGeocoder(base_geocoder) if use_cache else base_geocoder
        return cls(
            geocoder,
            region=region,
            delay_between_requests=delay_between_requests,
        )

    def resolve_current_location(
        self, latitude: float, longitude: float
    ) -> LocationData:
        """
        端末の座標から現在地情報を生成

        逆ジオコーディングに失敗しても座標だけのLocationDataを返す

        Raises:
            InvalidCoordinateError: 座標が範囲外の場合
        """
        validate_coordinate(latitude, longitude)

        try:
            location = self.geocoder.reverse_geocode(latitude, longitude)
        except GeocodingError as e:
            logger.error(f"Reverse geocoding failed for ({latitude}, {longitude}): {e}")
            location = None

        if location is None:
            logger.warning(
                f"Using bare coordinates without address: ({latitude}, {longitude})"
            )
            return LocationData(latitude=latitude, longitude=longitude)

        return location

    def geocode_entities_batch(
        self,
        entities: Sequence[LocatableEntity],
        show_progress: bool = True,
    ) -> tuple[list[LocatableEntity], dict[str, int]]:
        """
        座標のないエンティティを都市名からジオコーディング

        Args:
            entities: エンティティのリスト
            show_progress: プログレスバーを表示するか

        Returns:
            tuple: (座標を補完した新しいエンティティのリスト, 結果件数)
        """
        success_count = 0
        failure_count = 0
        skipped_count = 0
        completed: list[LocatableEntity] = []

        logger.info(f"Starting batch geocoding: {len(entities)} entities")

        iterator = tqdm(entities, desc="Geocoding") if show_progress else entities

        for entity in iterator:
            if entity.has_coordinate or not entity.locality_text:
                skipped_count += 1
                completed.append(entity)
                continue

            point = self._geocode_locality(entity)
            if point is not None:
                success_count += 1
                completed.append(replace(entity, coordinate=point))
            else:
                failure_count += 1
                completed.append(entity)

            if self.delay_between_requests > 0:
                time.sleep(self.delay_between_requests)

        result = {
            "success": success_count,
            "failure": failure_count,
            "skipped": skipped_count,
            "total": len(entities),
        }

        logger.info(
            f"Batch geocoding completed: {success_count} success, "
            f"{failure_count} failure, {skipped_count} skipped"
        )

        return completed, result

    def get_cache_stats(self) -> Optional[dict[str, float]]:
        """キャッシュ統計を取得（CacheGeocoderを使用している場合のみ）"""
        if isinstance(self.geocoder, CacheGeocoder):
            return self.geocoder.get_cache_stats()

        logger.warning("Cache stats are only available when using CacheGeocoder")
        return None

    def _geocode_locality(self, entity: LocatableEntity) -> Optional[GeoPoint]:
        try:
            point = self.geocoder.geocode(entity.locality_text, region=self.region)
        except GeocodingError as e:
            logger.error(f"Geocoding error for entity {entity.id}: {e}")
            return None

        if point is None:
            logger.warning(
                f"Failed to geocode entity {entity.id}: {entity.locality_text}"
            )
            return None

        try:
            point.validate()
        except InvalidCoordinateError as e:
            logger.warning(f"Discarding geocoded point for entity {entity.id}: {e}")
            return None

        logger.debug(f"Geocoded entity {entity.id}: {entity.locality_text} -> {point}")
        return point
