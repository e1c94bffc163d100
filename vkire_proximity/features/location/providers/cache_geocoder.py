"""キャッシュ付きジオコーダー"""
from typing import Optional

from ....shared.logging.config import get_logger
from ....shared.utils.text import normalize_text
from ...proximity.domain.models import GeoPoint
from ..domain.models import LocationData
from .google_maps_geocoder import GoogleMapsGeocoder

logger = get_logger(__name__)


class CacheGeocoder:
    """
    キャッシュ付きジオコーダー

    同じ都市名・座標に対するAPI呼び出しを削減するため、
    インスタンスごとのメモリ内キャッシュを使用
    """

    def __init__(self, geocoder: GoogleMapsGeocoder) -> None:
        """
        Args:
            geocoder: ベースとなるジオコーダー
        """
        self.geocoder = geocoder
        self.point_cache: dict[str, Optional[GeoPoint]] = {}
        self.location_cache: dict[str, Optional[LocationData]] = {}
        self.hit_count = 0
        self.miss_count = 0

        logger.info("CacheGeocoder initialized")

    def geocode(self, address: str, region: str = "in") -> Optional[GeoPoint]:
        """
        住所・都市名をジオコーディング（キャッシュあり）

        Returns:
            Optional[GeoPoint]: 座標（見つからない場合はNone）
        """
        if not address:
            return None

        cache_key = self._normalize_address(address)

        if cache_key in self.point_cache:
            self.hit_count += 1
            logger.debug(f"Cache hit for address: {address}")
            return self.point_cache[cache_key]

        self.miss_count += 1
        logger.debug(f"Cache miss for address: {address}")

        point = self.geocoder.geocode(address, region=region)
        self.point_cache[cache_key] = point

        return point

    def reverse_geocode(
        self, latitude: float, longitude: float
    ) -> Optional[LocationData]:
        """
        座標から住所を取得（キャッシュあり）

        Returns:
            Optional[LocationData]: 住所付きの位置情報（見つからない場合はNone）
        """
        # 小数点以下6桁（約0.1m）で丸めてキーにする
        cache_key = f"{latitude:.6f},{longitude:.6f}"

        if cache_key in self.location_cache:
            self.hit_count += 1
            logger.debug(f"Cache hit for coordinates: ({latitude}, {longitude})")
            return self.location_cache[cache_key]

        self.miss_count += 1
        logger.debug(f"Cache miss for coordinates: ({latitude}, {longitude})")

        location = self.geocoder.reverse_geocode(latitude, longitude)
        self.location_cache[cache_key] = location

        return location

    def clear_cache(self) -> None:
        """キャッシュをクリア"""
        cache_size = len(self.point_cache) + len(self.location_cache)
        self.point_cache.clear()
        self.location_cache.clear()
        self.hit_count = 0
        self.miss_count = 0
        logger.info(f"Cache cleared: {cache_size} entries removed")

    def get_cache_stats(self) -> dict[str, float]:
        """
        キャッシュ統計を取得

        Returns:
            dict[str, float]: キャッシュ統計（サイズ、ヒット数、ミス数、ヒット率）
        """
        total_requests = self.hit_count + self.miss_count
        hit_rate = (self.hit_count / total_requests * 100) if total_requests > 0 else 0.0

        stats = {
            "cache_size": len(self.point_cache) + len(self.location_cache),
            "hit_count": self.hit_count,
            "miss_count": self.miss_count,
            "total_requests": total_requests,
            "hit_rate_percent": round(hit_rate, 2),
        }

        logger.info(f"Cache stats: {stats}")
        return stats

    def prefetch(self, addresses: list[str], region: str = "in") -> None:
        """複数の都市名を事前にキャッシュ"""
        unique_addresses = list(dict.fromkeys(a for a in addresses if a))

        logger.info(f"Prefetching {len(unique_addresses)} unique addresses")

        for address in unique_addresses:
            if self._normalize_address(address) not in self.point_cache:
                self.geocode(address, region=region)

        logger.info(f"Prefetch completed: {len(self.point_cache)} entries cached")

    @staticmethod
    def _normalize_address(address: str) -> str:
        """キャッシュキー用に正規化（小文字化・空白の整理）"""
        return (normalize_text(address) or "").lower()
