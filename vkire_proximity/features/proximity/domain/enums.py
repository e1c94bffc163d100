"""近接ランキング機能のEnum定義"""
from enum import Enum


class LocationMode(str, Enum):
    """基準位置のモード"""

    GPS = "gps"  # 端末のGPS座標
    MANUAL = "manual"  # ユーザーが入力した都市名
    NONE = "none"  # 位置情報なし
