"""テキスト処理ユーティリティ"""

import re
from typing import Optional


def normalize_text(text: Optional[str]) -> Optional[str]:
    """
    テキストを正規化

    - 前後の空白を除去
    - 連続する空白を1つに
    - 全角スペースを半角スペースに変換
    """
    if not text:
        return None

    text = text.replace("　", " ")
    text = re.sub(r"\s+", " ", text)
    text = text.strip()

    return text if text else None


def contains_ignore_case(haystack: Optional[str], needle: str) -> bool:
    """
    大文字・小文字を区別せずに部分一致を判定

    haystackがNoneまたは空の場合は常にFalse

    Args:
        haystack: 検索対象（例: クリエイターの都市名）
        needle: 検索語（例: ユーザーが入力した都市名）

    Returns:
        bool: 部分一致した場合True
    """
    if not haystack:
        return False

    return needle.lower() in haystack.lower()


def format_number(value: float) -> str:
    """
    数値を表示用文字列に変換

    整数値は小数点なし（1158.0 -> "1158"）、それ以外はそのまま（6.08 -> "6.08"）
    """
    if float(value).is_integer():
        return str(int(value))

    return str(value)


def format_distance(distance_km: Optional[float]) -> Optional[str]:
    """
    距離ラベルを生成（例: "6.08km away"）

    Args:
        distance_km: 距離（km）。Noneの場合はラベルなし

    Returns:
        Optional[str]: 表示用ラベル
    """
    if distance_km is None:
        return None

    return f"{format_number(distance_km)}km away"


def join_address_parts(*parts: Optional[str]) -> str:
    """空でない住所要素を", "で連結"""
    return ", ".join(part for part in parts if part)
