"""ドメインエンティティ定義"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class SearchSource(str, Enum):
    """検索ソース（レスポンスの source フィールド値）"""

    VIDEO = "youtube"
    WEB = "google"
    BLOG = "naver"


# "all" 指定時の呼び出し順（同点時の並び順もこの順になる）
ALL_SOURCES: tuple[SearchSource, ...] = (
    SearchSource.VIDEO,
    SearchSource.WEB,
    SearchSource.BLOG,
)


class CommentSortKey(str, Enum):
    """コメントの並び替えキー"""

    LIKES = "likes"
    TIME = "time"

    @classmethod
    def parse(cls, value: str | None) -> "CommentSortKey":
        """不明な値はいいね順として扱う"""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.LIKES


@dataclass(frozen=True)
class SearchCredentials:
    """各検索プロバイダの認証情報（未設定のプロバイダは無効扱い）"""

    youtube_api_key: str | None = None
    google_api_key: str | None = None
    google_cx: str | None = None
    naver_client_id: str | None = None
    naver_client_secret: str | None = None

    def is_configured(self, source: SearchSource) -> bool:
        """指定ソースの認証情報が揃っているか"""
        if source is SearchSource.VIDEO:
            return bool(self.youtube_api_key)
        if source is SearchSource.WEB:
            return bool(self.google_api_key and self.google_cx)
        if source is SearchSource.BLOG:
            return bool(self.naver_client_id and self.naver_client_secret)
        return False


@dataclass(frozen=True)
class NormalizedResultItem:
    """検索結果の正規化済みアイテム"""

    title: str
    url: str
    snippet: str
    source: SearchSource
    score: float = 0.0
    # スコアリング専用（レスポンスには含めない）
    published_at: datetime | None = field(default=None, compare=False)

    def to_dict(self) -> dict[str, str | float]:
        return {
            "title": self.title,
            "url": self.url,
            "snippet": self.snippet,
            "source": self.source.value,
            "score": self.score,
        }


@dataclass(frozen=True)
class CommentRecord:
    """トップレベルコメント1件（id が同一性キー）"""

    id: str
    text: str
    like_count: int
    published_at: str
    author: str

    def to_dict(self) -> dict[str, str | int]:
        return {
            "id": self.id,
            "text": self.text,
            "likeCount": self.like_count,
            "publishedAt": self.published_at,
            "author": self.author,
        }


@dataclass
class CommentPage:
    """コメント一覧APIの1ページ分"""

    comments: list[CommentRecord]
    next_page_token: str = ""

    @classmethod
    def empty(cls) -> "CommentPage":
        return cls(comments=[], next_page_token="")


# サムネイル解像度の優先順位
THUMBNAIL_PRIORITY: tuple[str, ...] = ("maxres", "high", "medium", "default")


def pick_thumbnail_url(thumbnails: dict | None) -> str:
    """
    利用可能な解像度から最も高いものを選ぶ

    maxres → high → medium → default → "" の順にフォールバック
    """
    thumbnails = thumbnails or {}
    for resolution in THUMBNAIL_PRIORITY:
        url = (thumbnails.get(resolution) or {}).get("url")
        if url:
            return url
    return ""


@dataclass(frozen=True)
class VideoMeta:
    """動画のタイトルとサムネイル"""

    title: str
    thumbnail_url: str
    thumbnail_alt: str = ""


@dataclass
class VideoIngestResult:
    """動画取り込み結果全体"""

    video_id: str
    meta: VideoMeta
    comments: list[CommentRecord]

    def to_dict(self) -> dict:
        return {
            "videoId": self.video_id,
            "title": self.meta.title,
            "thumbnailUrl": self.meta.thumbnail_url,
            "thumbnailAlt": self.meta.thumbnail_alt,
            "comments": [c.to_dict() for c in self.comments],
        }
