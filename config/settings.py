"""設定管理"""

from functools import lru_cache

from pydantic_settings import BaseSettings

from src.domain.entities import SearchCredentials


class Settings(BaseSettings):
    """アプリケーション設定"""

    # API Keys（未設定のプロバイダは無効化される）
    YOUTUBE_API_KEY: str | None = None
    GOOGLE_API_KEY: str | None = None
    GOOGLE_CX: str | None = None
    NAVER_CLIENT_ID: str | None = None
    NAVER_CLIENT_SECRET: str | None = None
    # OCRだけは未設定だと 500 を返す
    OCRSPACE_API_KEY: str | None = None

    # Endpoints
    NAVER_BLOG_SEARCH_URL: str = "https://openapi.naver.com/v1/search/blog.json"
    OCRSPACE_URL: str = "https://api.ocr.space/parse/image"

    # Processing
    DEFAULT_MAX_RESULTS: int = 5
    DEFAULT_MAX_COMMENTS: int = 300  # [100, 300] にクランプされる
    COMMENT_PAGES_PER_ORDER: int = 3
    FANOUT_MAX_WORKERS: int = 3

    # OCR
    OCR_LANGUAGE: str = "kor"
    OCR_ENGINE: int = 2

    # Timeouts (seconds)
    UPSTREAM_TIMEOUT_SEC: float = 8.0
    FANOUT_TIMEOUT_SEC: float = 10.0
    OCR_TIMEOUT_SEC: float = 30.0

    # HTTP
    SEARCH_CACHE_CONTROL: str = "public, s-maxage=60, stale-while-revalidate=120"

    # Logging & Observability
    LOG_LEVEL: str = "INFO"
    LANGSMITH_TRACING: bool = False
    LANGSMITH_API_KEY: str | None = None
    LANGSMITH_PROJECT: str = "content-aggregator"

    def search_credentials(self) -> SearchCredentials:
        """検索プロバイダへ渡す認証情報"""
        return SearchCredentials(
            youtube_api_key=self.YOUTUBE_API_KEY,
            google_api_key=self.GOOGLE_API_KEY,
            google_cx=self.GOOGLE_CX,
            naver_client_id=self.NAVER_CLIENT_ID,
            naver_client_secret=self.NAVER_CLIENT_SECRET,
        )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """シングルトンで設定を取得"""
    return Settings()
