"""共通フィクスチャ"""

import pytest

from vkire_proximity.features.proximity.domain.models import GeoPoint, LocatableEntity

MUMBAI = GeoPoint(latitude=19.0760, longitude=72.8777)
DELHI = GeoPoint(latitude=28.6139, longitude=77.2090)
BANDRA = GeoPoint(latitude=19.0176, longitude=72.8562)
BANGALORE = GeoPoint(latitude=12.9716, longitude=77.5946)


@pytest.fixture
def mumbai() -> GeoPoint:
    return MUMBAI


@pytest.fixture
def scenario_entities() -> list[LocatableEntity]:
    """Mumbai基準のシナリオ（Delhi / 近所 / 座標なし）"""
    return [
        LocatableEntity(id="p1", coordinate=DELHI, locality_text="Delhi"),
        LocatableEntity(id="p2", coordinate=BANDRA, locality_text="Mumbai"),
        LocatableEntity(id="p3", coordinate=None, locality_text="Pune"),
    ]
