"""近接ランキングHTTPサーバー（FastAPI）"""
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .features.location.services.location_service import LocationService
from .features.proximity.domain.enums import LocationMode
from .features.proximity.domain.schemas import (
    DistanceRequest,
    DistanceResponse,
    GeoPointSchema,
    RankedEntitySchema,
    RankRequest,
    RankResponse,
    popularity_descending,
)
from .features.proximity.services.distance import distance_km
from .features.proximity.services.ranker import rank
from .infrastructure.config.settings import Settings
from .shared.exceptions.errors import ConfigurationError, ProximityError
from .shared.logging.config import get_logger, setup_logging
from .shared.utils.text import format_distance

settings = Settings()

setup_logging(
    level=settings.log_level,
    enable_cloud_logging=settings.gcp_logging_enabled,
    project_id=settings.gcp_project_id,
)
logger = get_logger(__name__)

app = FastAPI(
    title="Vkire 近接ランキングサービス",
    description="クリエイターや投稿をユーザーの現在地から近い順に並べ替えるサービス",
    version="1.0.0",
)

_location_service: Optional[LocationService] = None


def get_location_service() -> Optional[LocationService]:
    """逆ジオコーディング用サービスを取得（無効時はNone）"""
    global _location_service

    if not settings.geocoding_enabled:
        return None

    if _location_service is None:
        _location_service = LocationService.create(
            api_key=settings.require_google_maps_api_key(),
            use_cache=settings.geocoding_cache_enabled,
            region=settings.geocoding_region,
            delay_between_requests=settings.geocoding_delay_seconds,
        )
    return _location_service


@app.get("/")
async def root() -> dict[str, Any]:
    """ルートエンドポイント"""
    return {
        "service": "Vkire 近接ランキングサービス",
        "version": "1.0.0",
        "status": "running",
        "environment": settings.environment,
    }


@app.get("/health")
async def health() -> dict[str, str]:
    """ヘルスチェックエンドポイント"""
    return {"status": "healthy"}


@app.post("/distance", response_model=DistanceResponse)
async def distance(request: DistanceRequest) -> DistanceResponse:
    """2点間の距離を計算"""
    value = distance_km(request.origin.to_domain(), request.destination.to_domain())
    return DistanceResponse(distance_km=value, distance_label=format_distance(value))


@app.post("/rank", response_model=RankResponse)
async def rank_entities(request: RankRequest) -> RankResponse:
    """
    エンティティを基準位置から近い順に並べ替え

    手入力モードでは都市一致グループ内をpopularityの降順に並べる
    """
    reference = request.reference.to_domain() if request.reference else None
    mode = reference.mode if reference else LocationMode.NONE

    logger.info(f"Received rank request: {len(request.entities)} entities, mode={mode.value}")

    results = rank(
        reference,
        [entity.to_domain() for entity in request.entities],
        secondary_key=popularity_descending,
    )
    return RankResponse(
        mode=mode.value,
        results=[RankedEntitySchema.from_result(result) for result in results],
    )


@app.post("/location/resolve")
def resolve_location(point: GeoPointSchema) -> dict[str, Any]:
    """
    端末の座標から現在地情報（都市名・住所）を取得

    逆ジオコーディングを含むためスレッドプールで実行される同期エンドポイント
    """
    service = get_location_service()
    if service is None:
        return {
            "latitude": point.latitude,
            "longitude": point.longitude,
            "city": None,
            "address": None,
        }

    location = service.resolve_current_location(point.latitude, point.longitude)
    return {
        "latitude": location.latitude,
        "longitude": location.longitude,
        "city": location.city,
        "region": location.region,
        "country": location.country,
        "address": location.address,
    }


@app.exception_handler(ConfigurationError)
async def configuration_exception_handler(
    request: Request, exc: ConfigurationError
) -> JSONResponse:
    """設定不備の例外ハンドラー"""
    logger.error(f"Service misconfigured: {exc}")
    return JSONResponse(
        status_code=503,
        content={"message": "Service unavailable", "detail": str(exc)},
    )


@app.exception_handler(ProximityError)
async def proximity_exception_handler(
    request: Request, exc: ProximityError
) -> JSONResponse:
    """ドメイン例外ハンドラー"""
    logger.warning(f"Request rejected: {exc}")
    return JSONResponse(
        status_code=400,
        content={"message": "Bad request", "detail": str(exc)},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """グローバル例外ハンドラー"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"message": "Internal server error", "detail": str(exc)},
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
