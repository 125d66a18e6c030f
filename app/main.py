"""FastAPI アプリケーションエントリーポイント"""

from dataclasses import dataclass
from pathlib import Path

# .envファイルを最初に読み込む（LangSmith等の環境変数を設定するため）
from dotenv import load_dotenv

project_root = Path(__file__).parent.parent
load_dotenv(project_root / ".env")

from fastapi import Depends, FastAPI, Query, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import Settings, get_settings
from src.application.interfaces.text_extractor import TextExtractor
from src.application.usecases.collect_comments import (
    CollectCommentsConfig,
    CommentCollector,
)
from src.application.usecases.ingest_video import IngestVideoUseCase
from src.application.usecases.search_web import SearchWebConfig, SearchWebUseCase
from src.domain.entities import ALL_SOURCES, SearchSource
from src.domain.exceptions import ClientInputError, ContentAggregatorError, is_quota_message
from src.infrastructure.google_custom_search import GoogleCustomSearchClient
from src.infrastructure.logging_config import get_logger, setup_logging
from src.infrastructure.naver_blog_search import NaverBlogSearchClient
from src.infrastructure.ocr_space_client import OcrSpaceClient
from src.infrastructure.youtube_data_api import YouTubeDataAPIClient

setup_logging(level=get_settings().LOG_LEVEL)

logger = get_logger(__name__)


class ResultItemModel(BaseModel):
    title: str
    url: str
    snippet: str
    source: str
    score: float


class SearchResponse(BaseModel):
    results: list[ResultItemModel]


class CommentModel(BaseModel):
    id: str
    text: str
    likeCount: int
    publishedAt: str
    author: str


class IngestResponse(BaseModel):
    videoId: str
    title: str
    thumbnailUrl: str
    thumbnailAlt: str
    comments: list[CommentModel]


class OcrResponse(BaseModel):
    text: str


class HealthResponse(BaseModel):
    status: str
    sources: dict[str, bool]


class ErrorResponse(BaseModel):
    error: str


@dataclass
class Services:
    """リクエスト処理で使うユースケース群"""

    search_web: SearchWebUseCase
    ingest_video: IngestVideoUseCase
    text_extractor: TextExtractor


def build_services(settings: Settings) -> Services:
    """DIでユースケースを組み立て"""
    youtube = YouTubeDataAPIClient(
        api_key=settings.YOUTUBE_API_KEY,
        timeout_sec=settings.UPSTREAM_TIMEOUT_SEC,
    )
    return Services(
        search_web=SearchWebUseCase(
            providers=[
                youtube,
                GoogleCustomSearchClient(timeout_sec=settings.UPSTREAM_TIMEOUT_SEC),
                NaverBlogSearchClient(
                    base_url=settings.NAVER_BLOG_SEARCH_URL,
                    timeout_sec=settings.UPSTREAM_TIMEOUT_SEC,
                ),
            ],
            credentials=settings.search_credentials(),
            config=SearchWebConfig(
                fanout_timeout_sec=settings.FANOUT_TIMEOUT_SEC,
                max_workers=settings.FANOUT_MAX_WORKERS,
            ),
        ),
        ingest_video=IngestVideoUseCase(
            metadata_fetcher=youtube,
            comment_collector=CommentCollector(
                fetcher=youtube,
                config=CollectCommentsConfig(
                    pages_per_order=settings.COMMENT_PAGES_PER_ORDER,
                ),
            ),
            default_max_comments=settings.DEFAULT_MAX_COMMENTS,
        ),
        text_extractor=OcrSpaceClient(
            api_key=settings.OCRSPACE_API_KEY,
            url=settings.OCRSPACE_URL,
            language=settings.OCR_LANGUAGE,
            engine=settings.OCR_ENGINE,
            timeout_sec=settings.OCR_TIMEOUT_SEC,
        ),
    )


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(
    settings: Settings | None = None,
    services: Services | None = None,
) -> FastAPI:
    """
    FastAPI アプリを生成

    Args:
        settings: 設定（省略時は環境変数から読み込み）
        services: ユースケース群（テスト時に差し替え）
    """
    settings = settings or get_settings()
    app = FastAPI(
        title="Content Aggregator API",
        description="動画・ウェブ・ブログ検索の横断集約と動画コメント取り込み",
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.services = services or build_services(settings)

    @app.exception_handler(ContentAggregatorError)
    async def domain_error_handler(request: Request, exc: ContentAggregatorError) -> JSONResponse:
        message = str(exc) or "Server error"
        status_code = 429 if is_quota_message(message) else exc.status_code
        if status_code >= 500:
            logger.error(f"[API] {request.url.path} 失敗: {message}")
        else:
            logger.info(f"[API] {request.url.path} {status_code}: {message}")
        return error_response(status_code, message)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"[API] {request.url.path} 予期しないエラー")
        status_code = 429 if is_quota_message(str(exc)) else 500
        return error_response(status_code, "Server error")

    @app.get(
        "/api/web/search",
        response_model=SearchResponse,
        responses={400: {"model": ErrorResponse}},
    )
    def web_search(
        response: Response,
        query: str | None = Query(None),
        source: str = Query(SearchSource.VIDEO.value),
        max_results: str | None = Query(None, alias="maxResults"),
        services: Services = Depends(get_services),
        app_settings: Settings = Depends(get_app_settings),
    ) -> SearchResponse:
        """複数ソースを横断検索してスコア順に返す"""
        items = services.search_web.execute(
            query=query or "",
            source=source,
            max_results=max_results if max_results is not None else app_settings.DEFAULT_MAX_RESULTS,
        )
        response.headers["Cache-Control"] = app_settings.SEARCH_CACHE_CONTROL
        return SearchResponse(results=[ResultItemModel(**item.to_dict()) for item in items])

    @app.get(
        "/api/youtube/ingest",
        response_model=IngestResponse,
        responses={
            400: {"model": ErrorResponse},
            429: {"model": ErrorResponse},
            500: {"model": ErrorResponse},
        },
    )
    def youtube_ingest(
        video_url: str | None = Query(None, alias="videoUrl"),
        sort_by: str = Query("likes", alias="sortBy"),
        max_comments: str | None = Query(None, alias="maxComments"),
        services: Services = Depends(get_services),
    ) -> IngestResponse:
        """動画のタイトル・サムネイルとコメントを取り込む"""
        result = services.ingest_video.execute(
            video_url=video_url,
            sort_by=sort_by,
            max_comments=max_comments,
        )
        return IngestResponse(**result.to_dict())

    @app.get(
        "/api/thumbnail/ocr",
        response_model=OcrResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    def thumbnail_ocr(
        image_url: str | None = Query(None, alias="imageUrl"),
        services: Services = Depends(get_services),
    ) -> OcrResponse:
        """サムネイル画像のテキストを抽出"""
        if not image_url or not image_url.strip():
            raise ClientInputError("imageUrl required")
        return OcrResponse(text=services.text_extractor.extract_text(image_url.strip()))

    @app.get("/health", response_model=HealthResponse)
    def health(app_settings: Settings = Depends(get_app_settings)) -> HealthResponse:
        """設定済みプロバイダの確認"""
        credentials = app_settings.search_credentials()
        sources = {source.value: credentials.is_configured(source) for source in ALL_SOURCES}
        sources["ocr"] = bool(app_settings.OCRSPACE_API_KEY)
        return HealthResponse(status="ok", sources=sources)

    return app


app = create_app()
