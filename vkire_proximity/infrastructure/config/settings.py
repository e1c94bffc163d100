"""アプリケーション設定（Pydantic Settings）"""
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ...shared.exceptions.errors import ConfigurationError


class Settings(BaseSettings):
    """アプリケーション設定"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Project
    project_name: str = Field(
        default="vkire-proximity",
        description="プロジェクト名",
    )
    environment: str = Field(
        default="development",
        description="環境 (development, staging, production)",
    )

    # Geocoding
    google_maps_api_key: Optional[str] = Field(
        default=None,
        description="Google Maps API Key",
    )
    geocoding_enabled: bool = Field(
        default=False,
        description="ジオコーディング（逆ジオコーディング含む）を有効にするか",
    )
    geocoding_cache_enabled: bool = Field(
        default=True,
        description="ジオコーディングキャッシュを有効にするか",
    )
    geocoding_region: str = Field(
        default="in",
        description="ジオコーディングの地域バイアス（ccTLD）",
    )
    geocoding_delay_seconds: float = Field(
        default=0.1,
        ge=0.0,
        description="バッチジオコーディング時のリクエスト間隔（秒）",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    gcp_logging_enabled: bool = Field(
        default=False,
        description="Cloud Loggingを有効にするか",
    )
    gcp_project_id: Optional[str] = Field(
        default=None,
        description="GCPプロジェクトID（Cloud Logging有効時に使用）",
    )

    # HTTP server
    port: int = Field(
        default=8080,
        description="HTTPサーバーのポート番号",
    )

    def require_google_maps_api_key(self) -> str:
        """
        Google Maps API Keyを取得

        Raises:
            ConfigurationError: API Keyが未設定の場合
        """
        if not self.google_maps_api_key:
            raise ConfigurationError(
                "GOOGLE_MAPS_API_KEY is required when geocoding is enabled"
            )
        return self.google_maps_api_key
