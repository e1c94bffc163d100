"""マーケットプレイスの一覧並べ替えサービス"""
from typing import Optional, Sequence

from ....shared.logging.config import get_logger
from ....shared.utils.text import contains_ignore_case, normalize_text
from ...location.domain.models import LocationPreference
from ...proximity.domain.models import LocatableEntity, RankedResult
from ...proximity.services.ranker import rank
from ..domain.models import Booking, Post, Professional

logger = get_logger(__name__)


def popularity_key(entity: LocatableEntity) -> int:
    """いいね数の降順用キー"""
    post = entity.payload
    return -(getattr(post, "likes_count", 0) or 0)


class MarketplaceService:
    """フィード・プロフェッショナル一覧・予約一覧を現在地で並べ替える"""

    def sort_posts(
        self, posts: Sequence[Post], preference: LocationPreference
    ) -> list[RankedResult]:
        """
        投稿を並べ替え

        GPS: 投稿者までの距離順 / 手入力: 都市一致→いいね数の降順 / なし: そのまま
        """
        results = rank(
            preference.to_reference(),
            [post.to_locatable() for post in posts],
            secondary_key=popularity_key,
        )
        logger.info(f"Sorted {len(results)} posts (mode={preference.mode.value})")
        return results

    def sort_professionals(
        self, professionals: Sequence[Professional], preference: LocationPreference
    ) -> list[RankedResult]:
        """プロフェッショナルを近い順に並べ替え"""
        return rank(
            preference.to_reference(),
            [professional.to_locatable() for professional in professionals],
        )

    def sort_bookings(
        self, bookings: Sequence[Booking], preference: LocationPreference
    ) -> list[RankedResult]:
        """予約を撮影場所の近い順に並べ替え"""
        return rank(
            preference.to_reference(),
            [booking.to_locatable() for booking in bookings],
        )


def search_professionals(
    professionals: Sequence[Professional], query: Optional[str]
) -> list[Professional]:
    """
    名前・提供サービス・都市名の部分一致で絞り込み（大文字小文字無視）

    検索語が空の場合は全件を返す
    """
    needle = normalize_text(query)
    if needle is None:
        return list(professionals)

    return [
        professional
        for professional in professionals
        if contains_ignore_case(professional.name, needle)
        or any(contains_ignore_case(service, needle) for service in professional.services)
        or contains_ignore_case(professional.city, needle)
    ]
