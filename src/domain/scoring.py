"""検索結果のスコアリングとランキング"""

import math
from dataclasses import replace
from datetime import datetime, timezone

from src.domain.entities import NormalizedResultItem, SearchSource
from src.domain.text_utils import MAX_RESULTS, MIN_RESULTS, clamp
from src.domain.time_utils import age_in_days

# ソースごとの基本重み（鮮度・エンゲージメントの期待値順）
SOURCE_WEIGHTS: dict[SearchSource, float] = {
    SearchSource.VIDEO: 0.5,
    SearchSource.WEB: 0.45,
    SearchSource.BLOG: 0.4,
}
DEFAULT_WEIGHT = 0.3

RECENCY_MAX_BONUS = 0.2
RECENCY_HORIZON_DAYS = 14

TITLE_MATCH_BONUS = 0.25
SNIPPET_MATCH_BONUS = 0.15


def recency_bonus(published_at: datetime | None, now: datetime) -> float:
    """公開直後で +0.2、14日スケールで指数的に減衰"""
    if published_at is None:
        return 0.0
    days = age_in_days(published_at, now)
    return clamp(math.exp(-days / RECENCY_HORIZON_DAYS) * RECENCY_MAX_BONUS, 0.0, RECENCY_MAX_BONUS)


def query_bonus(query: str, title: str, snippet: str) -> float:
    """クエリ文字列がタイトル・スニペットに含まれる場合の加点"""
    q = (query or "").lower()
    if not q:
        return 0.0
    bonus = 0.0
    if q in (title or "").lower():
        bonus += TITLE_MATCH_BONUS
    if q in (snippet or "").lower():
        bonus += SNIPPET_MATCH_BONUS
    return bonus


def score_item(
    item: NormalizedResultItem,
    query: str,
    now: datetime | None = None,
) -> float:
    """
    アイテムの関連度スコアを計算

    基本重み + 新しさボーナス → [0,1] にクランプ
    → クエリ一致ボーナス → 再度 [0,1] にクランプ

    Args:
        item: 正規化済みアイテム
        query: 検索クエリ
        now: 基準時刻（省略時は現在時刻）

    Returns:
        0.0 - 1.0 のスコア
    """
    now = now or datetime.now(timezone.utc)
    base = SOURCE_WEIGHTS.get(item.source, DEFAULT_WEIGHT)
    score = clamp(base + recency_bonus(item.published_at, now), 0.0, 1.0)
    score += query_bonus(query, item.title, item.snippet)
    return clamp(score, 0.0, 1.0)


def rank_items(
    items: list[NormalizedResultItem],
    query: str,
    limit: int,
    now: datetime | None = None,
) -> list[NormalizedResultItem]:
    """
    全ソースの結果をスコア降順に並べて上位を返す

    同点の場合は入力順を維持する（安定ソート）

    Args:
        items: ファンアウトで収集した順のアイテム
        query: 検索クエリ
        limit: 最大件数（[1, 10] にクランプ）
        now: 基準時刻

    Returns:
        スコア付きの上位アイテム
    """
    now = now or datetime.now(timezone.utc)
    limit = int(clamp(limit, MIN_RESULTS, MAX_RESULTS))
    scored = [replace(item, score=score_item(item, query, now)) for item in items]
    ranked = sorted(scored, key=lambda item: item.score, reverse=True)
    return ranked[:limit]
