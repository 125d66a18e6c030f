"""ユースケース: 2種類の並び順でコメントを収集し重複排除"""

from dataclasses import dataclass
from threading import Event

from src.application.interfaces.comment_fetcher import CommentPageFetcher
from src.domain.entities import CommentRecord, CommentSortKey
from src.domain.text_utils import clamp_max_comments
from src.domain.time_utils import sort_key_timestamp
from src.infrastructure.logging_config import get_logger, trace_chain

logger = get_logger(__name__)

# 収集時の並び順（この順に巡回する）
COMMENT_ORDERS: tuple[str, ...] = ("relevance", "time")


@dataclass
class CollectCommentsConfig:
    """ユースケースの設定"""

    pages_per_order: int = 3


def sort_comments(
    comments: list[CommentRecord],
    sort_by: CommentSortKey,
) -> list[CommentRecord]:
    """いいね数または公開日時の降順（同値は収集順を維持）"""
    if sort_by is CommentSortKey.TIME:
        return sorted(comments, key=lambda c: sort_key_timestamp(c.published_at), reverse=True)
    return sorted(comments, key=lambda c: c.like_count, reverse=True)


class CommentCollector:
    """
    コメント一覧APIを relevance 順・time 順の2回ページングし、
    コメントIDで重複排除したうえで並び替えて上位N件を返す
    """

    def __init__(
        self,
        fetcher: CommentPageFetcher,
        config: CollectCommentsConfig | None = None,
    ):
        self.fetcher = fetcher
        self.config = config or CollectCommentsConfig()

    @trace_chain(name="collect_comments")
    def collect(
        self,
        video_id: str,
        sort_by: CommentSortKey = CommentSortKey.LIKES,
        max_comments: object = None,
        stop: Event | None = None,
    ) -> list[CommentRecord]:
        """
        Args:
            video_id: 動画ID
            sort_by: 並び替えキー
            max_comments: 最大件数（[100, 300] にクランプ）
            stop: セットされたら次のページ取得を行わずに打ち切る

        Returns:
            並び替え・切り詰め済みのコメントリスト

        Raises:
            UpstreamTransportError: ページ取得が権限なし・存在しない以外の理由で失敗
        """
        limit = clamp_max_comments(max_comments)
        collected: dict[str, CommentRecord] = {}

        for order in COMMENT_ORDERS:
            self._sweep(video_id, order, collected, stop)

        comments = sort_comments(list(collected.values()), sort_by)
        logger.info(
            f"[Comments] 収集完了: {video_id} - ユニーク{len(collected)}件 → {min(limit, len(comments))}件"
        )
        return comments[:limit]

    def _sweep(
        self,
        video_id: str,
        order: str,
        collected: dict[str, CommentRecord],
        stop: Event | None = None,
    ) -> None:
        """1つの並び順でページ上限まで巡回（後から来た同一IDは上書き）"""
        token = ""
        for page_no in range(1, self.config.pages_per_order + 1):
            if stop is not None and stop.is_set():
                logger.info(f"[Comments] 中断: {video_id} order={order}")
                return
            page = self.fetcher.fetch_comments_page(video_id, order, token)
            for comment in page.comments:
                collected[comment.id] = comment
            logger.debug(f"  order={order} page={page_no}: {len(page.comments)}件")

            token = page.next_page_token
            if not token:
                break
