"""位置情報機能のドメインモデル"""
from dataclasses import dataclass
from typing import Optional

from ....shared.exceptions.errors import ValidationError
from ....shared.logging.config import get_logger
from ....shared.utils.text import join_address_parts, normalize_text
from ...proximity.domain.enums import LocationMode
from ...proximity.domain.models import GeoPoint, ReferenceLocation

logger = get_logger(__name__)


@dataclass
class LocationData:
    """端末の現在地（逆ジオコーディング結果を含む）"""

    latitude: float  # 緯度
    longitude: float  # 経度
    address: Optional[str] = None  # 表示用住所
    city: Optional[str] = None  # 都市名
    region: Optional[str] = None  # 州・地域
    country: Optional[str] = None  # 国

    def __repr__(self) -> str:
        return f"LocationData(lat={self.latitude}, lng={self.longitude}, city={self.city})"

    def to_geo_point(self) -> GeoPoint:
        """GeoPointに変換"""
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)

    @staticmethod
    def format_address(
        street: Optional[str] = None,
        city: Optional[str] = None,
        region: Optional[str] = None,
        country: Optional[str] = None,
    ) -> str:
        """住所要素を「通り, 都市, 地域, 国」の順で連結"""
        return join_address_parts(street, city, region, country)


class LocationPreference:
    """
    ユーザーの位置情報設定

    GPSの現在地と手入力の都市名は排他で、どちらか一方のみが有効。
    呼び出し側（セッション）が保持し、ランキング時にto_reference()で渡す。
    """

    def __init__(
        self,
        current_location: Optional[LocationData] = None,
        manual_location: Optional[str] = None,
    ) -> None:
        if current_location is not None and manual_location is not None:
            raise ValidationError(
                "current_location and manual_location are mutually exclusive"
            )
        self.current_location = current_location
        self.manual_location = normalize_text(manual_location)

    def use_current_location(self, location: LocationData) -> None:
        """GPSの現在地を使用（手入力の都市名はクリア）"""
        self.current_location = location
        self.manual_location = None
        logger.info(f"Using GPS location: {location}")

    def use_manual_location(self, locality_text: str) -> None:
        """
        手入力の都市名を使用（GPSの現在地はクリア）

        Raises:
            ValidationError: 都市名が空の場合
        """
        normalized = normalize_text(locality_text)
        if normalized is None:
            raise ValidationError("Manual location must not be empty")

        self.manual_location = normalized
        self.current_location = None
        logger.info(f"Using manual location: {normalized}")

    def clear(self) -> None:
        """位置情報を無効化"""
        self.current_location = None
        self.manual_location = None
        logger.info("Location preference cleared")

    @property
    def mode(self) -> LocationMode:
        """現在のモード"""
        if self.manual_location is not None:
            return LocationMode.MANUAL
        if self.current_location is not None:
            return LocationMode.GPS
        return LocationMode.NONE

    @property
    def is_enabled(self) -> bool:
        """位置情報が有効か"""
        return self.mode is not LocationMode.NONE

    @property
    def display_name(self) -> Optional[str]:
        """ヘッダーに表示する現在地名"""
        if self.manual_location is not None:
            return self.manual_location
        if self.current_location is not None:
            return self.current_location.city or "Location enabled"
        return None

    def to_reference(self) -> Optional[ReferenceLocation]:
        """ランキング用の基準位置に変換（無効時はNone）"""
        if self.manual_location is not None:
            return ReferenceLocation.from_locality(self.manual_location)
        if self.current_location is not None:
            return ReferenceLocation(point=self.current_location.to_geo_point())
        return None
