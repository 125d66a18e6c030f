"""HTTPエンドポイントのテスト"""

import pytest
from fastapi.testclient import TestClient

from app.main import Services, create_app
from config.settings import Settings
from src.application.usecases.collect_comments import CommentCollector
from src.application.usecases.ingest_video import IngestVideoUseCase
from src.application.usecases.search_web import SearchWebConfig, SearchWebUseCase
from src.domain.exceptions import ConfigurationError, UpstreamTransportError
from src.infrastructure.google_custom_search import GoogleCustomSearchClient
from src.infrastructure.naver_blog_search import NaverBlogSearchClient
from src.infrastructure.youtube_data_api import YouTubeDataAPIClient


def youtube_search_response(params: dict) -> dict:
    return {
        "items": [
            {
                "id": {"videoId": "v1"},
                "snippet": {"title": "Python tutorial", "description": "learn python"},
            },
            {
                "id": {"videoId": "v2"},
                "snippet": {"title": "Cooking", "description": "pasta"},
            },
        ]
    }


def video_response(params: dict) -> dict:
    return {
        "items": [
            {
                "id": params["id"],
                "snippet": {
                    "title": "Great Video",
                    "thumbnails": {"medium": {"url": "https://img/m.jpg"}},
                },
            }
        ]
    }


def comment_item(cid: str, likes: int, published_at: str = "2024-01-01T00:00:00Z") -> dict:
    return {
        "id": cid,
        "snippet": {
            "topLevelComment": {
                "snippet": {
                    "textDisplay": f"comment {cid}",
                    "likeCount": likes,
                    "publishedAt": published_at,
                    "authorDisplayName": "viewer",
                }
            }
        },
    }


class StubTextExtractor:
    def __init__(self, error: Exception | None = None):
        self.error = error

    def extract_text(self, image_url: str) -> str:
        if self.error:
            raise self.error
        return "extracted text"


def make_client(
    service,
    settings: Settings | None = None,
    text_extractor=None,
    raise_server_exceptions: bool = True,
) -> TestClient:
    """フェイクの Google API Resource を使う実アダプタでアプリを組み立てる"""
    settings = settings or Settings(YOUTUBE_API_KEY="yt-key")
    youtube = YouTubeDataAPIClient(api_key=settings.YOUTUBE_API_KEY, resource_factory=service.factory)
    services = Services(
        search_web=SearchWebUseCase(
            providers=[
                youtube,
                GoogleCustomSearchClient(resource_factory=service.factory),
                NaverBlogSearchClient(),
            ],
            credentials=settings.search_credentials(),
            config=SearchWebConfig(fanout_timeout_sec=5),
        ),
        ingest_video=IngestVideoUseCase(
            metadata_fetcher=youtube,
            comment_collector=CommentCollector(youtube),
            default_max_comments=settings.DEFAULT_MAX_COMMENTS,
        ),
        text_extractor=text_extractor or StubTextExtractor(),
    )
    app = create_app(settings=settings, services=services)
    return TestClient(app, raise_server_exceptions=raise_server_exceptions)


class TestWebSearchEndpoint:
    """GET /api/web/search"""

    def test_all_with_single_configured_provider(self, fake_google) -> None:
        """YouTubeのみ設定 → YouTubeの結果だけがスコア順で返る"""
        service = fake_google(search=youtube_search_response)
        client = make_client(service)

        response = client.get("/api/web/search", params={"query": "python", "source": "all"})

        assert response.status_code == 200
        results = response.json()["results"]
        assert [r["url"] for r in results] == [
            "https://www.youtube.com/watch?v=v1",
            "https://www.youtube.com/watch?v=v2",
        ]
        assert {r["source"] for r in results} == {"youtube"}
        assert results[0]["score"] == pytest.approx(0.9)
        assert results[1]["score"] == pytest.approx(0.5)
        assert [name for name, _ in service.calls] == ["search"]

    def test_cache_header(self, fake_google) -> None:
        client = make_client(fake_google(search=youtube_search_response))
        response = client.get("/api/web/search", params={"query": "python"})
        assert response.headers["cache-control"] == "public, s-maxage=60, stale-while-revalidate=120"

    @pytest.mark.parametrize("params", [{}, {"query": ""}, {"query": "   "}])
    def test_blank_query(self, fake_google, params) -> None:
        client = make_client(fake_google(search=youtube_search_response))
        response = client.get("/api/web/search", params=params)
        assert response.status_code == 400
        assert response.json() == {"error": "query required"}

    def test_max_results_clamped(self, fake_google) -> None:
        service = fake_google(search=youtube_search_response)
        client = make_client(service)

        response = client.get("/api/web/search", params={"query": "python", "maxResults": "0"})

        assert len(response.json()["results"]) == 1
        assert service.calls[0][1]["maxResults"] == 1

    def test_no_configured_source_is_empty(self, fake_google) -> None:
        client = make_client(fake_google(), settings=Settings())
        response = client.get("/api/web/search", params={"query": "python", "source": "all"})
        assert response.status_code == 200
        assert response.json() == {"results": []}

    def test_upstream_failure_is_not_surfaced(self, fake_google, http_error) -> None:
        client = make_client(fake_google(search=lambda params: http_error(500, "Backend Error")))
        response = client.get("/api/web/search", params={"query": "python"})
        assert response.status_code == 200
        assert response.json() == {"results": []}


class TestIngestEndpoint:
    """GET /api/youtube/ingest"""

    def test_time_sweep_forbidden_still_succeeds(self, fake_google, http_error) -> None:
        """time 順の1ページ目が403でも relevance 順の収集結果で成功する"""

        def comment_threads(params):
            if params["order"] == "time":
                return http_error(403, "The caller does not have permission")
            return {"items": [comment_item("c1", 3), comment_item("c2", 8)]}

        client = make_client(fake_google(videos=video_response, commentThreads=comment_threads))

        response = client.get("/api/youtube/ingest", params={"videoUrl": "https://youtu.be/abc123"})

        assert response.status_code == 200
        body = response.json()
        assert body["videoId"] == "abc123"
        assert body["title"] == "Great Video"
        assert body["thumbnailUrl"] == "https://img/m.jpg"
        assert body["thumbnailAlt"] == ""
        assert [c["id"] for c in body["comments"]] == ["c2", "c1"]
        assert body["comments"][0]["likeCount"] == 8

    def test_duplicates_across_sweeps(self, fake_google) -> None:
        def comment_threads(params):
            if params["order"] == "time":
                return {"items": [comment_item("c1", 5, "2024-02-01T00:00:00Z"), comment_item("c3", 0, "2024-03-01T00:00:00Z")]}
            return {"items": [comment_item("c1", 4), comment_item("c2", 1)]}

        client = make_client(fake_google(videos=video_response, commentThreads=comment_threads))

        response = client.get(
            "/api/youtube/ingest",
            params={"videoUrl": "https://example.com/watch?v=xyz789", "sortBy": "time"},
        )

        ids = [c["id"] for c in response.json()["comments"]]
        assert ids == ["c3", "c1", "c2"]

    @pytest.mark.parametrize(
        ("params", "message"),
        [({}, "videoUrl required"), ({"videoUrl": "https://example.com/about"}, "Invalid videoUrl")],
    )
    def test_bad_video_url(self, fake_google, params, message) -> None:
        client = make_client(fake_google())
        response = client.get("/api/youtube/ingest", params=params)
        assert response.status_code == 400
        assert response.json() == {"error": message}

    def test_quota_maps_to_429(self, fake_google, http_error) -> None:
        client = make_client(
            fake_google(
                videos=lambda params: http_error(403, "The request cannot be completed because you have exceeded your quota."),
                commentThreads=lambda params: {},
            )
        )
        response = client.get("/api/youtube/ingest", params={"videoUrl": "https://youtu.be/abc"})
        assert response.status_code == 429
        assert "quota" in response.json()["error"]

    def test_upstream_429_maps_to_429(self, fake_google, http_error) -> None:
        client = make_client(
            fake_google(videos=video_response, commentThreads=lambda params: http_error(429, "Too Many Requests"))
        )
        response = client.get("/api/youtube/ingest", params={"videoUrl": "https://youtu.be/abc"})
        assert response.status_code == 429
        assert response.json() == {"error": "commentThreads.list 429: Too Many Requests"}

    def test_not_found_maps_to_500(self, fake_google) -> None:
        client = make_client(
            fake_google(videos=lambda params: {"items": []}, commentThreads=lambda params: {})
        )
        response = client.get("/api/youtube/ingest", params={"videoUrl": "https://youtu.be/abc"})
        assert response.status_code == 500
        assert response.json() == {"error": "Video not found"}

    def test_comment_failure_is_fatal(self, fake_google, http_error) -> None:
        client = make_client(
            fake_google(videos=video_response, commentThreads=lambda params: http_error(500, "Backend Error"))
        )
        response = client.get("/api/youtube/ingest", params={"videoUrl": "https://youtu.be/abc"})
        assert response.status_code == 500
        assert "commentThreads.list 500" in response.json()["error"]

    def test_missing_youtube_key(self, fake_google) -> None:
        client = make_client(fake_google(), settings=Settings())
        response = client.get("/api/youtube/ingest", params={"videoUrl": "https://youtu.be/abc"})
        assert response.status_code == 500
        assert response.json() == {"error": "YOUTUBE_API_KEY missing"}


class TestOcrEndpoint:
    """GET /api/thumbnail/ocr"""

    def test_success(self, fake_google) -> None:
        client = make_client(fake_google())
        response = client.get("/api/thumbnail/ocr", params={"imageUrl": "https://img/a.png"})
        assert response.status_code == 200
        assert response.json() == {"text": "extracted text"}

    def test_missing_image_url(self, fake_google) -> None:
        client = make_client(fake_google())
        response = client.get("/api/thumbnail/ocr")
        assert response.status_code == 400
        assert response.json() == {"error": "imageUrl required"}

    @pytest.mark.parametrize(
        "error",
        [ConfigurationError("OCR API key missing"), UpstreamTransportError("OCR API failed")],
    )
    def test_failures_map_to_500(self, fake_google, error) -> None:
        client = make_client(fake_google(), text_extractor=StubTextExtractor(error))
        response = client.get("/api/thumbnail/ocr", params={"imageUrl": "https://img/a.png"})
        assert response.status_code == 500
        assert response.json() == {"error": str(error)}

    def test_unexpected_error_hides_details(self, fake_google) -> None:
        client = make_client(
            fake_google(),
            text_extractor=StubTextExtractor(KeyError("secret internals")),
            raise_server_exceptions=False,
        )
        response = client.get("/api/thumbnail/ocr", params={"imageUrl": "https://img/a.png"})
        assert response.status_code == 500
        assert response.json() == {"error": "Server error"}


class TestHealthEndpoint:
    def test_reports_configured_sources(self, fake_google) -> None:
        settings = Settings(YOUTUBE_API_KEY="yt", NAVER_CLIENT_ID="id", NAVER_CLIENT_SECRET="secret")
        client = make_client(fake_google(), settings=settings)

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "sources": {"youtube": True, "google": False, "naver": True, "ocr": False},
        }
