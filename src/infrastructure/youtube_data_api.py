"""YouTube Data API v3 クライアント"""

import httplib2
from googleapiclient.errors import HttpError

from src.domain.entities import (
    CommentPage,
    CommentRecord,
    NormalizedResultItem,
    SearchCredentials,
    SearchSource,
    VideoMeta,
    pick_thumbnail_url,
)
from src.domain.exceptions import (
    ConfigurationError,
    NotFoundError,
    UpstreamTransportError,
    is_quota_message,
)
from src.domain.text_utils import MAX_RESULTS, safe_text
from src.domain.time_utils import parse_timestamp
from src.infrastructure.google_api import (
    ResourceFactory,
    build_google_service,
    execute_request,
    http_status,
    upstream_error_from_http,
)
from src.infrastructure.logging_config import get_logger, trace_tool

logger = get_logger(__name__)

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"

# commentThreads.list の1ページ最大件数
COMMENTS_PAGE_SIZE = 100
COMMENT_FIELDS = (
    "items(id,snippet/topLevelComment/snippet("
    "authorDisplayName,likeCount,publishedAt,textDisplay,textOriginal)),nextPageToken"
)
VIDEO_FIELDS = "items(id,snippet(title,thumbnails))"

# 権限なし・存在しない（コメント無効化など）は「これ以上データなし」として扱う
NO_MORE_DATA_STATUSES = (403, 404)


def normalize_search_item(item: dict) -> NormalizedResultItem | None:
    """search.list の1件を正規化（動画IDがなければ None）"""
    video_id = (item.get("id") or {}).get("videoId")
    if not video_id:
        return None
    snippet = item.get("snippet") or {}
    return NormalizedResultItem(
        title=safe_text(snippet.get("title")),
        url=WATCH_URL.format(video_id=video_id),
        snippet=safe_text(snippet.get("description")),
        source=SearchSource.VIDEO,
        published_at=parse_timestamp(snippet.get("publishedAt")),
    )


def normalize_comment_thread(item: dict) -> CommentRecord | None:
    """commentThreads.list の1件をトップレベルコメントに変換"""
    thread_id = item.get("id")
    comment = (
        ((item.get("snippet") or {}).get("topLevelComment") or {}).get("snippet")
    )
    if not thread_id or not isinstance(comment, dict):
        return None
    try:
        like_count = max(0, int(comment.get("likeCount") or 0))
    except (TypeError, ValueError):
        like_count = 0
    return CommentRecord(
        id=thread_id,
        text=comment.get("textDisplay") or comment.get("textOriginal") or "",
        like_count=like_count,
        published_at=comment.get("publishedAt") or "",
        author=comment.get("authorDisplayName") or "",
    )


class YouTubeDataAPIClient:
    """YouTube Data API v3 を使用した動画検索・メタデータ・コメント取得"""

    source = SearchSource.VIDEO

    def __init__(
        self,
        api_key: str | None = None,
        timeout_sec: float = 8.0,
        resource_factory: ResourceFactory | None = None,
    ):
        """
        Args:
            api_key: メタデータ・コメント取得用の YouTube Data API キー
            timeout_sec: 1回のAPI呼び出しのタイムアウト（秒）
            resource_factory: Resource の生成関数（テスト用に差し替え可能）
        """
        self.api_key = api_key
        self.timeout_sec = timeout_sec
        self._resource_factory = resource_factory or build_google_service

    def _youtube(self, api_key: str):
        return self._resource_factory("youtube", "v3", api_key, self.timeout_sec)

    def _require_api_key(self) -> str:
        if not self.api_key:
            raise ConfigurationError("YOUTUBE_API_KEY missing")
        return self.api_key

    @trace_tool(name="youtube_search")
    def search(
        self,
        query: str,
        limit: int,
        credentials: SearchCredentials,
    ) -> list[NormalizedResultItem]:
        """
        YouTube動画を検索

        Args:
            query: 検索クエリ
            limit: 最大取得件数（API側は10件で頭打ち）
            credentials: 認証情報（youtube_api_key 未設定なら空リスト）

        Returns:
            NormalizedResultItem のリスト

        Raises:
            UpstreamTransportError: API呼び出しエラー
        """
        if not credentials.youtube_api_key:
            logger.debug("[YouTube] APIキー未設定のためスキップ")
            return []

        max_results = min(limit, MAX_RESULTS)
        logger.info(f"[YouTube] 検索開始: {query!r} (max={max_results})")

        request = self._youtube(credentials.youtube_api_key).search().list(
            part="snippet",
            type="video",
            q=query,
            maxResults=max_results,
        )
        response = execute_request(request, "YouTube API")

        items = [
            normalized
            for normalized in (normalize_search_item(i) for i in response.get("items") or [])
            if normalized is not None
        ]
        logger.info(f"[YouTube] 検索完了: {len(items)}件")
        return items[:max_results]

    @trace_tool(name="youtube_video_meta")
    def fetch_video_meta(self, video_id: str) -> VideoMeta:
        """
        動画のタイトルとサムネイルを取得

        サムネイルは maxres → high → medium → default の順で選択

        Raises:
            ConfigurationError: APIキー未設定
            NotFoundError: 該当動画なし
            UpstreamTransportError: API呼び出しエラー
        """
        api_key = self._require_api_key()
        logger.debug(f"[YouTube] videos.list: {video_id}")

        request = self._youtube(api_key).videos().list(
            part="snippet",
            id=video_id,
            fields=VIDEO_FIELDS,
        )
        response = execute_request(request, "videos.list")

        items = response.get("items") or []
        if not items:
            logger.warning(f"[YouTube] 動画が見つかりません: {video_id}")
            raise NotFoundError("Video not found")

        snippet = items[0].get("snippet") or {}
        return VideoMeta(
            title=snippet.get("title") or "",
            thumbnail_url=pick_thumbnail_url(snippet.get("thumbnails")),
            thumbnail_alt="",
        )

    @trace_tool(name="youtube_comment_threads")
    def fetch_comments_page(
        self,
        video_id: str,
        order: str,
        page_token: str = "",
    ) -> CommentPage:
        """
        トップレベルコメントを1ページ取得

        Args:
            video_id: 動画ID
            order: "relevance" / "time"
            page_token: 続きのページトークン

        Returns:
            CommentPage（403/404 の場合は空ページ）

        Raises:
            ConfigurationError: APIキー未設定
            UpstreamQuotaError: クォータ超過
            UpstreamTransportError: その他のAPI呼び出しエラー
        """
        api_key = self._require_api_key()
        params = {
            "part": "snippet",
            "videoId": video_id,
            "maxResults": COMMENTS_PAGE_SIZE,
            "order": order,
            "textFormat": "plainText",
            "fields": COMMENT_FIELDS,
        }
        if page_token:
            params["pageToken"] = page_token

        try:
            response = self._youtube(api_key).commentThreads().list(**params).execute() or {}
        except HttpError as e:
            error = upstream_error_from_http("commentThreads.list", e)
            if http_status(e) in NO_MORE_DATA_STATUSES and not is_quota_message(str(error)):
                logger.info(
                    f"[YouTube] コメント取得不可 ({http_status(e)}): {video_id} order={order}"
                )
                return CommentPage.empty()
            logger.error(f"[YouTube] commentThreads.list エラー: {error}")
            raise error from e
        except (OSError, httplib2.HttpLib2Error) as e:
            logger.error(f"[YouTube] commentThreads.list 通信エラー: {e}")
            raise UpstreamTransportError(f"commentThreads.list failed: {e}") from e

        comments = [
            record
            for record in (normalize_comment_thread(i) for i in response.get("items") or [])
            if record is not None
        ]
        return CommentPage(
            comments=comments,
            next_page_token=response.get("nextPageToken") or "",
        )
