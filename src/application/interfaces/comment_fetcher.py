"""コメント取得インターフェース"""

from typing import Protocol

from src.domain.entities import CommentPage


class CommentPageFetcher(Protocol):
    """コメント一覧APIのページ取得"""

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
            order: 並び順 ("relevance" / "time")
            page_token: 続きを取得するためのトークン（先頭ページは空文字）

        Returns:
            CommentPage（権限なし・存在しない場合は空ページ）

        Raises:
            UpstreamTransportError: それ以外の失敗
        """
        ...
