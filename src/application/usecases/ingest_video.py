"""ユースケース: 動画URLからメタデータとコメントを取り込む"""

from concurrent.futures import ThreadPoolExecutor
from threading import Event

from src.application.interfaces.video_metadata import VideoMetadataFetcher
from src.application.usecases.collect_comments import CommentCollector
from src.domain.entities import CommentSortKey, VideoIngestResult
from src.domain.exceptions import ClientInputError
from src.domain.text_utils import clamp_max_comments
from src.domain.video_url import extract_video_id
from src.infrastructure.logging_config import LogContext, get_logger, trace_chain

logger = get_logger(__name__)


class IngestVideoUseCase:
    """
    メインユースケース: 動画のタイトル・サムネイルとコメントを取得

    メタデータ取得とコメント収集は並列に実行する。
    どちらかが失敗した場合はリクエスト全体を失敗とする（部分的な結果は返さない）
    """

    def __init__(
        self,
        metadata_fetcher: VideoMetadataFetcher,
        comment_collector: CommentCollector,
        default_max_comments: int = 300,
    ):
        self.metadata_fetcher = metadata_fetcher
        self.comment_collector = comment_collector
        self.default_max_comments = default_max_comments

    @trace_chain(name="ingest_video")
    def execute(
        self,
        video_url: str | None,
        sort_by: str | None = None,
        max_comments: object = None,
    ) -> VideoIngestResult:
        """
        Args:
            video_url: 動画URL
            sort_by: "likes" / "time"（不明な値はいいね順）
            max_comments: 最大コメント数

        Returns:
            VideoIngestResult

        Raises:
            ClientInputError: videoUrl がない・解釈できない
            NotFoundError: 動画が存在しない
            UpstreamTransportError: 外部API呼び出しエラー
        """
        if not video_url or not video_url.strip():
            raise ClientInputError("videoUrl required")

        video_id = extract_video_id(video_url)
        if not video_id:
            raise ClientInputError("Invalid videoUrl")

        sort_key = CommentSortKey.parse(sort_by)
        limit = clamp_max_comments(max_comments, default=self.default_max_comments)

        ctx = LogContext(video_id=video_id, sort_by=sort_key.value)
        logger.info(f"[Ingest] 取り込み開始 | {ctx}")

        stop = Event()
        executor = ThreadPoolExecutor(max_workers=2)
        try:
            meta_future = executor.submit(self.metadata_fetcher.fetch_video_meta, video_id)
            comments_future = executor.submit(
                self.comment_collector.collect,
                video_id,
                sort_key,
                limit,
                stop,
            )
            try:
                meta = meta_future.result()
            except Exception:
                # 失敗が確定したリクエストでは残りのコメントページを取得しない
                stop.set()
                comments_future.cancel()
                logger.warning(f"[Ingest] メタデータ取得失敗、コメント収集を中断 | {ctx}")
                raise
            comments = comments_future.result()
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        logger.info(f"[Ingest] 完了 | {ctx.update(comments=len(comments))}")
        return VideoIngestResult(video_id=video_id, meta=meta, comments=comments)
