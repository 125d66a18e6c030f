"""ユースケース: 複数ソースを横断検索してランキング"""

from dataclasses import dataclass
from datetime import datetime

from src.application.fanout import settle_all
from src.application.interfaces.search_provider import SearchProvider
from src.domain.entities import (
    ALL_SOURCES,
    NormalizedResultItem,
    SearchCredentials,
    SearchSource,
)
from src.domain.exceptions import ClientInputError
from src.domain.scoring import rank_items
from src.domain.text_utils import clamp_max_results
from src.infrastructure.logging_config import LogContext, get_logger, trace_chain

logger = get_logger(__name__)

ALL_SELECTOR = "all"


def resolve_sources(selector: str | None) -> list[SearchSource]:
    """
    source パラメータから対象ソースを決定

    "all" → 全ソース（固定順）、既知のソース名 → そのソースのみ、
    それ以外 → 空リスト
    """
    value = (selector or "").strip().lower()
    if value == ALL_SELECTOR:
        return list(ALL_SOURCES)
    for source in ALL_SOURCES:
        if source.value == value:
            return [source]
    return []


@dataclass
class SearchWebConfig:
    """ユースケースの設定"""

    fanout_timeout_sec: float = 10.0
    max_workers: int | None = None


class SearchWebUseCase:
    """
    ユースケース: 指定ソースを並列検索し、スコア順の上位を返す

    個別ソースの失敗はログに残して無視する（残りのソースの結果を返す）
    """

    def __init__(
        self,
        providers: list[SearchProvider],
        credentials: SearchCredentials,
        config: SearchWebConfig | None = None,
    ):
        self.providers = {provider.source: provider for provider in providers}
        self.credentials = credentials
        self.config = config or SearchWebConfig()

    @trace_chain(name="search_web")
    def execute(
        self,
        query: str,
        source: str | None = SearchSource.VIDEO.value,
        max_results: object = None,
        now: datetime | None = None,
    ) -> list[NormalizedResultItem]:
        """
        メイン実行フロー

        Args:
            query: 検索クエリ（空白のみは不可）
            source: ソース名 または "all"
            max_results: 最大件数（[1, 10] にクランプ）
            now: スコアリングの基準時刻

        Returns:
            スコア降順の NormalizedResultItem リスト

        Raises:
            ClientInputError: クエリが空
        """
        if not query or not query.strip():
            raise ClientInputError("query required")

        limit = clamp_max_results(max_results)
        active = [s for s in resolve_sources(source) if s in self.providers]
        ctx = LogContext(query=query, source=source, limit=limit)

        if not active:
            logger.info(f"[Search] 対象ソースなし | {ctx}")
            return []

        logger.info(f"[Search] 検索開始 | {ctx.update(active=[s.value for s in active])}")

        outcomes = settle_all(
            [
                (s, lambda p=self.providers[s]: p.search(query, limit, self.credentials))
                for s in active
            ],
            timeout=self.config.fanout_timeout_sec,
            max_workers=self.config.max_workers,
        )

        collected: list[NormalizedResultItem] = []
        for outcome in outcomes:
            if not outcome.ok:
                logger.warning(f"[Search] {outcome.key.value} 失敗: {outcome.error}")
                continue
            items = outcome.value or []
            logger.debug(f"  {outcome.key.value}: {len(items)}件")
            collected.extend(items)

        if not collected:
            logger.info(f"[Search] 結果0件 | {ctx}")
            return []

        ranked = rank_items(collected, query, limit, now=now)
        logger.info(f"[Search] 完了: {len(ranked)}件 (収集 {len(collected)}件)")
        return ranked
