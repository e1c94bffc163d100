"""近接ランキングの入出力スキーマ（Pydantic）"""
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

from .models import GeoPoint, LocatableEntity, RankedResult, ReferenceLocation


class GeoPointSchema(BaseModel):
    """座標"""

    latitude: float = Field(..., ge=-90, le=90, description="緯度")
    longitude: float = Field(..., ge=-180, le=180, description="経度")

    def to_domain(self) -> GeoPoint:
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)


class ReferenceSchema(BaseModel):
    """基準位置（latitude/longitude または locality のどちらか一方）"""

    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    locality: Optional[str] = Field(default=None, description="手入力の都市名")

    @model_validator(mode="after")
    def check_exclusive(self) -> "ReferenceSchema":
        has_point = self.latitude is not None and self.longitude is not None
        has_partial_point = (self.latitude is None) != (self.longitude is None)
        if has_partial_point:
            raise ValueError("latitude and longitude must be given together")
        if has_point and self.locality is not None:
            raise ValueError("give either latitude/longitude or locality, not both")
        if not has_point and self.locality is None:
            raise ValueError("latitude/longitude or locality is required")
        return self

    def to_domain(self) -> ReferenceLocation:
        if self.locality is not None:
            return ReferenceLocation.from_locality(self.locality)
        return ReferenceLocation.from_point(self.latitude, self.longitude)


class EntitySchema(BaseModel):
    """ランキング対象"""

    id: str
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    locality: Optional[str] = Field(default=None, description="都市名")
    popularity: Optional[int] = Field(
        default=None, description="手入力モードでの並び順（降順）"
    )

    def to_domain(self) -> LocatableEntity:
        return LocatableEntity(
            id=self.id,
            coordinate=GeoPoint.from_optional(self.latitude, self.longitude),
            locality_text=self.locality,
            payload=self,
        )


def popularity_descending(entity: LocatableEntity) -> int:
    """EntitySchema.popularityの降順用キー"""
    payload: Any = entity.payload
    return -(getattr(payload, "popularity", None) or 0)


class DistanceRequest(BaseModel):
    origin: GeoPointSchema
    destination: GeoPointSchema


class DistanceResponse(BaseModel):
    distance_km: float
    distance_label: str


class RankRequest(BaseModel):
    reference: Optional[ReferenceSchema] = None
    entities: list[EntitySchema] = Field(default_factory=list)


class RankedEntitySchema(BaseModel):
    id: str
    distance_km: Optional[float] = None
    distance_label: Optional[str] = None
    locality: Optional[str] = None

    @classmethod
    def from_result(cls, result: RankedResult) -> "RankedEntitySchema":
        return cls(**result.to_dict())


class RankResponse(BaseModel):
    mode: str
    results: list[RankedEntitySchema]
