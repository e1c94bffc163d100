"""マーケットプレイスのドメインモデル

各モデルはto_locatable()でランキング用のLocatableEntityに射影される。
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from ...proximity.domain.models import GeoPoint, LocatableEntity


def _point_from_dict(data: dict[str, Any]) -> Optional[GeoPoint]:
    point = GeoPoint.from_optional(data.get("latitude"), data.get("longitude"))
    return point.validate() if point is not None else None


@dataclass
class Professional:
    """フォトグラファー・ビデオグラファー"""

    id: str
    name: str
    city: Optional[str] = None  # 活動拠点の都市
    latitude: Optional[float] = None  # 緯度
    longitude: Optional[float] = None  # 経度
    services: list[str] = field(default_factory=list)  # 提供サービス（例: "Wedding Photography"）

    @property
    def coordinate(self) -> Optional[GeoPoint]:
        return GeoPoint.from_optional(self.latitude, self.longitude)

    def to_locatable(self) -> LocatableEntity:
        """ランキング用エンティティに変換"""
        return LocatableEntity(
            id=self.id,
            coordinate=self.coordinate,
            locality_text=self.city,
            payload=self,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Professional":
        """
        辞書から生成

        Raises:
            InvalidCoordinateError: 座標が範囲外の場合
        """
        point = _point_from_dict(data)
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            city=data.get("city"),
            latitude=point.latitude if point else None,
            longitude=point.longitude if point else None,
            services=[str(service) for service in data.get("services") or []],
        )


@dataclass
class Post:
    """フィードの投稿"""

    id: str
    caption: Optional[str] = None
    likes_count: int = 0
    professional: Optional[Professional] = None  # 投稿者

    def to_locatable(self) -> LocatableEntity:
        """ランキング用エンティティに変換（位置は投稿者のもの）"""
        if self.professional is None:
            return LocatableEntity(id=self.id, payload=self)

        return LocatableEntity(
            id=self.id,
            coordinate=self.professional.coordinate,
            locality_text=self.professional.city,
            payload=self,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Post":
        """辞書から生成"""
        professional = data.get("professional")
        return cls(
            id=str(data["id"]),
            caption=data.get("caption"),
            likes_count=int(data.get("likes_count") or 0),
            professional=(
                Professional.from_dict(professional) if professional else None
            ),
        )


@dataclass
class Booking:
    """予約"""

    id: str
    professional_name: str
    location: Optional[str] = None  # 撮影場所（都市名）
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    status: str = "pending"

    def to_locatable(self) -> LocatableEntity:
        """ランキング用エンティティに変換"""
        return LocatableEntity(
            id=self.id,
            coordinate=GeoPoint.from_optional(self.latitude, self.longitude),
            locality_text=self.location,
            payload=self,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Booking":
        """辞書から生成"""
        point = _point_from_dict(data)
        return cls(
            id=str(data["id"]),
            professional_name=data.get("professional_name", ""),
            location=data.get("location"),
            latitude=point.latitude if point else None,
            longitude=point.longitude if point else None,
            status=data.get("status", "pending"),
        )
