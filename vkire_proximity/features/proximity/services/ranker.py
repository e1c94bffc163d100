"""近接ランキング"""
from typing import Any, Callable, Optional, Sequence

from ....shared.logging.config import get_logger
from ....shared.utils.text import contains_ignore_case, normalize_text
from ..domain.models import GeoPoint, LocatableEntity, RankedResult, ReferenceLocation
from .distance import distance_km

logger = get_logger(__name__)

SecondaryKey = Callable[[LocatableEntity], Any]


def rank(
    reference: Optional[ReferenceLocation],
    entities: Sequence[LocatableEntity],
    secondary_key: Optional[SecondaryKey] = None,
) -> list[RankedResult]:
    """
    基準位置に対してエンティティを並べ替える

    - GPSモード: 距離の昇順。座標のないエンティティは常に末尾
    - 手入力モード: 都市名の部分一致（大文字小文字無視）を先頭に、
      各グループ内はsecondary_keyの昇順
    - 基準位置なし: 入力順のまま

    同順位は常に入力順を保持する（安定ソート）。

    Args:
        reference: 基準位置（Noneの場合は並べ替えなし）
        entities: ランキング対象
        secondary_key: 手入力モードでのグループ内の並び順キー

    Returns:
        list[RankedResult]: 入力と同じ件数のランキング結果
    """
    if reference is None:
        return [RankedResult(entity=entity) for entity in entities]

    if reference.point is not None:
        return rank_by_distance(reference.point, entities)

    return rank_by_locality(reference.locality_text or "", entities, secondary_key)


def rank_by_distance(
    origin: GeoPoint, entities: Sequence[LocatableEntity]
) -> list[RankedResult]:
    """GPS座標からの距離で並べ替え"""
    results = [
        RankedResult(
            entity=entity,
            distance_km=(
                distance_km(origin, entity.coordinate)
                if entity.coordinate is not None
                else None
            ),
        )
        for entity in entities
    ]

    # 距離なしは数値比較せず別グループとして末尾に置く
    ranked = sorted(
        results,
        key=lambda result: (
            result.distance_km is None,
            result.distance_km if result.distance_km is not None else 0.0,
        ),
    )

    logger.debug(
        f"Ranked {len(ranked)} entities by distance from {origin} "
        f"({sum(1 for r in ranked if r.distance_km is None)} without coordinate)"
    )
    return ranked


def rank_by_locality(
    locality_text: str,
    entities: Sequence[LocatableEntity],
    secondary_key: Optional[SecondaryKey] = None,
) -> list[RankedResult]:
    """手入力の都市名との一致で並べ替え（座標は使わない）"""
    needle = normalize_text(locality_text)
    if needle is None:
        logger.debug("Empty locality text, keeping input order")
        return [RankedResult(entity=entity) for entity in entities]

    def sort_key(entity: LocatableEntity) -> tuple[Any, ...]:
        group = 0 if contains_ignore_case(entity.locality_text, needle) else 1
        if secondary_key is None:
            return (group,)
        return (group, secondary_key(entity))

    ranked = [RankedResult(entity=entity) for entity in sorted(entities, key=sort_key)]

    logger.debug(f"Ranked {len(ranked)} entities by locality '{needle}'")
    return ranked
