"""Haversine距離計算のテスト"""

import math

import pytest

from vkire_proximity.features.proximity.domain.models import GeoPoint
from vkire_proximity.features.proximity.services.distance import (
    EARTH_RADIUS_KM,
    distance_km,
    round_half_up,
)

MUMBAI = GeoPoint(latitude=19.0760, longitude=72.8777)
DELHI = GeoPoint(latitude=28.6139, longitude=77.2090)
BANDRA = GeoPoint(latitude=19.0176, longitude=72.8562)


def test_earth_radius() -> None:
    """地球半径は6371km固定"""
    assert EARTH_RADIUS_KM == 6371


def test_delhi_to_mumbai() -> None:
    """Delhi - Mumbai の大圏距離"""
    assert distance_km(DELHI, MUMBAI) == pytest.approx(1148, abs=5)


def test_mumbai_to_bandra_is_short() -> None:
    """市内の距離は数km"""
    assert 6.0 <= distance_km(MUMBAI, BANDRA) < 7.0


@pytest.mark.parametrize(
    "a,b",
    [
        (DELHI, MUMBAI),
        (MUMBAI, BANDRA),
        (GeoPoint(0.0, 179.9), GeoPoint(0.0, -179.9)),
        (GeoPoint(89.9, 10.0), GeoPoint(-89.9, -170.0)),
    ],
)
def test_symmetry(a: GeoPoint, b: GeoPoint) -> None:
    """distance(a, b) == distance(b, a)"""
    assert distance_km(a, b) == distance_km(b, a)


@pytest.mark.parametrize("point", [DELHI, MUMBAI, GeoPoint(90.0, 0.0), GeoPoint(-33.8688, 151.2093)])
def test_identity_is_zero(point: GeoPoint) -> None:
    """同一地点は0.00km"""
    assert distance_km(point, point) == 0.0


def test_floating_noise_is_tolerated() -> None:
    """末尾の浮動小数点ノイズは0km扱い"""
    noisy = GeoPoint(latitude=19.0760000001, longitude=72.8777)
    assert distance_km(MUMBAI, noisy) == 0.0


def test_antimeridian() -> None:
    """日付変更線をまたぐ2点は近距離"""
    result = distance_km(GeoPoint(0.0, 179.9), GeoPoint(0.0, -179.9))
    assert result == pytest.approx(22.24, abs=0.01)


def test_pole_to_pole() -> None:
    """北極から南極は半周"""
    result = distance_km(GeoPoint(90.0, 0.0), GeoPoint(-90.0, 0.0))
    assert result == pytest.approx(math.pi * EARTH_RADIUS_KM, abs=0.01)


def test_result_has_two_decimals() -> None:
    """小数点以下2桁に丸められる"""
    result = distance_km(DELHI, MUMBAI)
    assert result == round_half_up(result)
    assert round(result * 100) == pytest.approx(result * 100)


@pytest.mark.parametrize(
    "value,expected",
    [
        (1.005 + 1e-9, 1.01),
        (2.675 + 1e-9, 2.68),
        (0.125, 0.13),
        (6.874, 6.87),
        (0.0, 0.0),
    ],
)
def test_round_half_up(value: float, expected: float) -> None:
    """0.5は切り上げ"""
    assert round_half_up(value) == expected


def test_nan_propagates() -> None:
    """NaNは例外にせずそのまま返す"""
    result = distance_km(GeoPoint(float("nan"), 0.0), MUMBAI)
    assert math.isnan(result)
