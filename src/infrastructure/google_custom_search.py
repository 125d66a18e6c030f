"""Google Custom Search JSON API アダプタ"""

from src.domain.entities import NormalizedResultItem, SearchCredentials, SearchSource
from src.domain.text_utils import MAX_RESULTS, safe_text
from src.infrastructure.google_api import (
    ResourceFactory,
    build_google_service,
    execute_request,
)
from src.infrastructure.logging_config import get_logger, trace_tool

logger = get_logger(__name__)


def normalize_cse_item(item: dict) -> NormalizedResultItem:
    return NormalizedResultItem(
        title=safe_text(item.get("title")),
        url=item.get("link") or "",
        snippet=safe_text(item.get("snippet")),
        source=SearchSource.WEB,
    )


class GoogleCustomSearchClient:
    """Custom Search (cse.list) で一般ウェブ検索"""

    source = SearchSource.WEB

    def __init__(
        self,
        timeout_sec: float = 8.0,
        resource_factory: ResourceFactory | None = None,
    ):
        self.timeout_sec = timeout_sec
        self._resource_factory = resource_factory or build_google_service

    @trace_tool(name="google_custom_search")
    def search(
        self,
        query: str,
        limit: int,
        credentials: SearchCredentials,
    ) -> list[NormalizedResultItem]:
        """
        Raises:
            UpstreamTransportError: API呼び出しエラー
        """
        if not (credentials.google_api_key and credentials.google_cx):
            logger.debug("[Google] APIキー/CX未設定のためスキップ")
            return []

        num = min(limit, MAX_RESULTS)
        logger.info(f"[Google] 検索開始: {query!r} (num={num})")

        service = self._resource_factory(
            "customsearch", "v1", credentials.google_api_key, self.timeout_sec
        )
        request = service.cse().list(q=query, cx=credentials.google_cx, num=num)
        response = execute_request(request, "Google CSE")

        items = [normalize_cse_item(i) for i in (response.get("items") or [])[:num]]
        logger.info(f"[Google] 検索完了: {len(items)}件")
        return items
