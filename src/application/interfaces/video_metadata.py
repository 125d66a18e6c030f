"""動画メタデータ取得インターフェース"""

from typing import Protocol

from src.domain.entities import VideoMeta


class VideoMetadataFetcher(Protocol):
    """動画タイトル・サムネイルの取得"""

    def fetch_video_meta(self, video_id: str) -> VideoMeta:
        """
        Raises:
            NotFoundError: 該当する動画がない
            UpstreamTransportError: API呼び出しエラー
        """
        ...
