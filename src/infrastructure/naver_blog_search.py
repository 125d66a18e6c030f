"""Naver ブログ検索 API アダプタ"""

import httpx

from src.domain.entities import NormalizedResultItem, SearchCredentials, SearchSource
from src.domain.exceptions import UpstreamTransportError, classify_upstream_error
from src.domain.text_utils import MAX_RESULTS, strip_html
from src.infrastructure.logging_config import get_logger, trace_tool

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://openapi.naver.com/v1/search/blog.json"


def normalize_blog_item(item: dict) -> NormalizedResultItem:
    """タイトル・説明文に含まれる <b> などのタグを除去"""
    return NormalizedResultItem(
        title=strip_html(item.get("title")),
        url=item.get("link") or "",
        snippet=strip_html(item.get("description")),
        source=SearchSource.BLOG,
    )


class NaverBlogSearchClient:
    """Naver Search API (blog) でブログ記事を検索"""

    source = SearchSource.BLOG

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout_sec: float = 8.0):
        self.base_url = base_url
        self.timeout_sec = timeout_sec

    @trace_tool(name="naver_blog_search")
    def search(
        self,
        query: str,
        limit: int,
        credentials: SearchCredentials,
    ) -> list[NormalizedResultItem]:
        """
        Raises:
            UpstreamTransportError: 非2xx・タイムアウト・通信エラー
        """
        if not (credentials.naver_client_id and credentials.naver_client_secret):
            logger.debug("[Naver] クライアントID/シークレット未設定のためスキップ")
            return []

        display = min(limit, MAX_RESULTS)
        logger.info(f"[Naver] 検索開始: {query!r} (display={display})")

        try:
            with httpx.Client(timeout=self.timeout_sec) as client:
                response = client.get(
                    self.base_url,
                    params={"query": query, "display": display},
                    headers={
                        "X-Naver-Client-Id": credentials.naver_client_id,
                        "X-Naver-Client-Secret": credentials.naver_client_secret,
                    },
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise classify_upstream_error(
                f"Naver API {e.response.status_code}: {e.response.text[:200]}",
                e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamTransportError(f"Naver API failed: {e}") from e

        items = [normalize_blog_item(i) for i in response.json().get("items") or []]
        logger.info(f"[Naver] 検索完了: {len(items)}件")
        return items[:display]
