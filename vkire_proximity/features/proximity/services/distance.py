"""大圏距離の計算（Haversine）"""
import math

from ..domain.models import GeoPoint

# 地球の平均半径（km）
EARTH_RADIUS_KM = 6371


def round_half_up(value: float, digits: int = 2) -> float:
    """
    四捨五入（0.5は切り上げ）

    round()の偶数丸めとは異なり、ちょうど0.5は常に切り上げる
    """
    if not math.isfinite(value):
        return value
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """
    2点間の大圏距離をHaversine公式で計算

    入力値の範囲チェックは行わない（GeoPoint.validate()は呼び出し側の責務）。

    Args:
        a: 地点A
        b: 地点B

    Returns:
        float: 距離（km、小数点以下2桁）
    """
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(b.longitude) - math.radians(a.longitude)

    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return round_half_up(EARTH_RADIUS_KM * c)
