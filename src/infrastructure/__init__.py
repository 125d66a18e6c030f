# Infrastructure Layer
from src.infrastructure.google_custom_search import GoogleCustomSearchClient
from src.infrastructure.naver_blog_search import NaverBlogSearchClient
from src.infrastructure.ocr_space_client import OcrSpaceClient
from src.infrastructure.youtube_data_api import YouTubeDataAPIClient

__all__ = [
    "YouTubeDataAPIClient",
    "GoogleCustomSearchClient",
    "NaverBlogSearchClient",
    "OcrSpaceClient",
]
