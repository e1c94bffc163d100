"""CLIエントリーポイント"""
import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .features.proximity.domain.models import GeoPoint, ReferenceLocation
from .features.proximity.domain.schemas import EntitySchema, popularity_descending
from .features.proximity.services.distance import distance_km
from .features.proximity.services.ranker import rank
from .infrastructure.config.settings import Settings
from .shared.exceptions.errors import ProximityError, ValidationError
from .shared.logging.config import get_logger, setup_logging
from .shared.utils.text import format_distance

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """引数パーサーを作成"""
    parser = argparse.ArgumentParser(
        prog="vkire-proximity",
        description="Vkire 近接ランキングツール",
    )
    parser.add_argument(
        "--env-file",
        type=str,
        default=".env",
        help="環境変数ファイルのパス（デフォルト: .env）",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="ログレベル",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    distance_parser = subparsers.add_parser("distance", help="2点間の距離（km）")
    distance_parser.add_argument("lat1", type=float)
    distance_parser.add_argument("lon1", type=float)
    distance_parser.add_argument("lat2", type=float)
    distance_parser.add_argument("lon2", type=float)

    rank_parser = subparsers.add_parser("rank", help="エンティティを近い順に並べ替え")
    rank_parser.add_argument(
        "--input",
        "-i",
        type=str,
        required=True,
        help="エンティティのJSONファイル（'-'で標準入力）",
    )
    rank_parser.add_argument("--lat", type=float, help="基準位置の緯度")
    rank_parser.add_argument("--lon", type=float, help="基準位置の経度")
    rank_parser.add_argument("--city", type=str, help="基準位置の都市名（手入力）")

    return parser


def resolve_reference(args: argparse.Namespace) -> Optional[ReferenceLocation]:
    """
    引数から基準位置を決定

    Raises:
        ValidationError: GPSと都市名が同時に指定された場合など
    """
    has_lat = args.lat is not None
    has_lon = args.lon is not None

    if has_lat != has_lon:
        raise ValidationError("--lat and --lon must be given together")
    if has_lat and args.city is not None:
        raise ValidationError("--lat/--lon and --city are mutually exclusive")

    if has_lat:
        point = GeoPoint(latitude=args.lat, longitude=args.lon).validate()
        return ReferenceLocation(point=point)
    if args.city is not None:
        return ReferenceLocation.from_locality(args.city)
    return None


def load_entities(path: str) -> list[EntitySchema]:
    """JSONファイルからエンティティを読み込み"""
    if path == "-":
        raw = sys.stdin.read()
    else:
        raw = Path(path).read_text(encoding="utf-8")

    try:
        return TypeAdapter(list[EntitySchema]).validate_json(raw)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid entity file {path}: {e}") from e


def run_distance(args: argparse.Namespace) -> None:
    origin = GeoPoint(latitude=args.lat1, longitude=args.lon1).validate()
    destination = GeoPoint(latitude=args.lat2, longitude=args.lon2).validate()

    distance = distance_km(origin, destination)
    print(json.dumps({"distance_km": distance, "distance_label": format_distance(distance)}))


def run_rank(args: argparse.Namespace) -> None:
    reference = resolve_reference(args)
    schemas = load_entities(args.input)

    logger.info(f"Ranking {len(schemas)} entities from {args.input}")

    results = rank(
        reference,
        [schema.to_domain() for schema in schemas],
        secondary_key=popularity_descending,
    )
    for result in results:
        print(json.dumps(result.to_dict(), ensure_ascii=False))


def main(argv: Optional[list[str]] = None) -> int:
    """
    メインエントリーポイント

    Returns:
        int: 終了コード（0: 成功, 1: 失敗）
    """
    args = build_parser().parse_args(argv)

    try:
        settings = Settings(_env_file=args.env_file)

        if args.log_level:
            settings.log_level = args.log_level

        setup_logging(
            level=settings.log_level,
            enable_cloud_logging=settings.gcp_logging_enabled,
            project_id=settings.gcp_project_id,
        )

        if args.command == "distance":
            run_distance(args)
        elif args.command == "rank":
            run_rank(args)

        return 0

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130  # SIGINT
    except ProximityError as e:
        logger.error(f"{e}")
        return 1
    except Exception as e:
        logger.error(f"Application failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
