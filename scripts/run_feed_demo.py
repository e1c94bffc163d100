#!/usr/bin/env python3
"""ローカル開発用のフィード並べ替え確認スクリプト"""
import argparse
import sys
from pathlib import Path

# プロジェクトルートをPythonパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from vkire_proximity.features.location.domain.models import LocationData, LocationPreference
from vkire_proximity.features.marketplace.domain.models import Post, Professional
from vkire_proximity.features.marketplace.services.marketplace_service import MarketplaceService
from vkire_proximity.infrastructure.config.settings import Settings
from vkire_proximity.shared.logging.config import get_logger, setup_logging

PROFESSIONALS = [
    Professional(id="pro1", name="Sarah Johnson", city="Delhi", latitude=28.6139, longitude=77.2090),
    Professional(id="pro2", name="Mike Chen", city="Mumbai", latitude=19.0760, longitude=72.8777),
    Professional(id="pro3", name="Emma Davis", city="Bangalore", latitude=12.9716, longitude=77.5946),
    Professional(id="pro4", name="Alex Kumar", city="Delhi", latitude=28.7041, longitude=77.1025),
    Professional(id="pro5", name="Lisa Wang", city="Mumbai", latitude=19.0176, longitude=72.8562),
]

POSTS = [
    Post(id="1", caption="Wedding photography session in Delhi", likes_count=24, professional=PROFESSIONALS[0]),
    Post(id="2", caption="Product photography for e-commerce brands", likes_count=18, professional=PROFESSIONALS[1]),
    Post(id="3", caption="Fashion portfolio shoot", likes_count=42, professional=PROFESSIONALS[2]),
]


def main():
    """メイン関数"""
    parser = argparse.ArgumentParser(description="フィード並べ替えの確認（ローカル開発用）")
    parser.add_argument("--lat", type=float, help="現在地の緯度")
    parser.add_argument("--lon", type=float, help="現在地の経度")
    parser.add_argument("--city", "-c", type=str, help="手入力の都市名")
    parser.add_argument("--debug", "-d", action="store_true", help="デバッグモードで実行")

    args = parser.parse_args()

    settings = Settings()
    setup_logging(level="DEBUG" if args.debug else settings.log_level)
    logger = get_logger(__name__)

    preference = LocationPreference()
    if args.city:
        preference.use_manual_location(args.city)
    elif args.lat is not None and args.lon is not None:
        preference.use_current_location(LocationData(latitude=args.lat, longitude=args.lon))

    logger.info("=" * 60)
    logger.info(f"Location: {preference.display_name or 'disabled'} (mode={preference.mode.value})")
    logger.info("=" * 60)

    service = MarketplaceService()

    for result in service.sort_posts(POSTS, preference):
        post = result.entity.payload
        city = post.professional.city if post.professional else "Unknown Location"
        label = f" • {result.distance_label}" if result.distance_label else ""
        logger.info(f"[{post.id}] {post.professional.name} - {city}{label} ({post.likes_count} likes)")

    logger.info("-" * 60)

    for result in service.sort_professionals(PROFESSIONALS, preference):
        professional = result.entity.payload
        label = f" • {result.distance_label}" if result.distance_label else ""
        logger.info(f"{professional.name} - {professional.city}{label}")


if __name__ == "__main__":
    main()
