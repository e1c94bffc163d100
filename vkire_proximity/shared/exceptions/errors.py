"""カスタム例外定義"""


class ProximityError(Exception):
    """近接ランキング基底例外"""

    pass


class InvalidCoordinateError(ProximityError):
    """緯度・経度が有効範囲外"""

    pass


class GeocodingError(ProximityError):
    """ジオコーディングエラー"""

    pass


class ConfigurationError(ProximityError):
    """設定エラー"""

    pass


class ValidationError(ProximityError):
    """バリデーションエラー"""

    pass
