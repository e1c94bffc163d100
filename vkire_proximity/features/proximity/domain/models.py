"""近接ランキング機能のドメインモデル"""
import math
from dataclasses import dataclass, field
from typing import Any, Optional

from ....shared.exceptions.errors import InvalidCoordinateError, ValidationError
from ....shared.utils.text import format_distance
from .enums import LocationMode


def validate_coordinate(latitude: float, longitude: float) -> None:
    """
    緯度・経度の範囲をチェック

    Raises:
        InvalidCoordinateError: 有限値でない、または範囲外の場合
    """
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise InvalidCoordinateError(
            f"Coordinate must be finite: ({latitude}, {longitude})"
        )
    if not -90.0 <= latitude <= 90.0:
        raise InvalidCoordinateError(f"Latitude out of range [-90, 90]: {latitude}")
    if not -180.0 <= longitude <= 180.0:
        raise InvalidCoordinateError(
            f"Longitude out of range [-180, 180]: {longitude}"
        )


@dataclass(frozen=True)
class GeoPoint:
    """地理座標（度）"""

    latitude: float  # 緯度
    longitude: float  # 経度

    def __repr__(self) -> str:
        return f"GeoPoint(lat={self.latitude}, lng={self.longitude})"

    def validate(self) -> "GeoPoint":
        """範囲チェックを行い、自身を返す"""
        validate_coordinate(self.latitude, self.longitude)
        return self

    def to_tuple(self) -> tuple[float, float]:
        """(緯度, 経度)のタプルとして返す"""
        return (self.latitude, self.longitude)

    @classmethod
    def from_optional(
        cls, latitude: Optional[float], longitude: Optional[float]
    ) -> Optional["GeoPoint"]:
        """緯度・経度の両方が揃っている場合のみ生成"""
        if latitude is None or longitude is None:
            return None
        return cls(latitude=float(latitude), longitude=float(longitude))


@dataclass(frozen=True)
class LocatableEntity:
    """
    ランキング対象のエンティティ

    プロフェッショナル・投稿・予約などのドメインオブジェクトから射影される。
    payloadは元のドメインオブジェクトで、ランキング結果にそのまま引き継がれる。
    """

    id: str
    coordinate: Optional[GeoPoint] = None
    locality_text: Optional[str] = None  # 都市名などの自由入力テキスト
    payload: Any = field(default=None, compare=False, repr=False)

    @property
    def has_coordinate(self) -> bool:
        """座標を持っているか"""
        return self.coordinate is not None


@dataclass(frozen=True)
class ReferenceLocation:
    """
    ランキングの基準位置

    GPS座標(point)と手入力の都市名(locality_text)はどちらか一方のみ
    """

    point: Optional[GeoPoint] = None
    locality_text: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.point is None) == (self.locality_text is None):
            raise ValidationError(
                "ReferenceLocation requires exactly one of point or locality_text"
            )

    @classmethod
    def from_point(cls, latitude: float, longitude: float) -> "ReferenceLocation":
        """GPS座標から生成"""
        return cls(point=GeoPoint(latitude=latitude, longitude=longitude))

    @classmethod
    def from_locality(cls, locality_text: str) -> "ReferenceLocation":
        """都市名から生成"""
        return cls(locality_text=locality_text)

    @property
    def mode(self) -> LocationMode:
        """基準位置のモード"""
        if self.point is not None:
            return LocationMode.GPS
        return LocationMode.MANUAL


@dataclass(frozen=True)
class RankedResult:
    """ランキング結果の1件"""

    entity: LocatableEntity
    distance_km: Optional[float] = None  # 基準・エンティティ双方に座標がある場合のみ

    @property
    def distance_label(self) -> Optional[str]:
        """表示用の距離ラベル（例: "6.08km away"）"""
        return format_distance(self.distance_km)

    def to_dict(self) -> dict[str, Any]:
        """JSONレスポンス用の辞書に変換"""
        return {
            "id": self.entity.id,
            "distance_km": self.distance_km,
            "distance_label": self.distance_label,
            "locality": self.entity.locality_text,
        }
