# Application Interfaces (Protocols)
from src.application.interfaces.comment_fetcher import CommentPageFetcher
from src.application.interfaces.search_provider import SearchProvider
from src.application.interfaces.text_extractor import TextExtractor
from src.application.interfaces.video_metadata import VideoMetadataFetcher

__all__ = [
    "SearchProvider",
    "CommentPageFetcher",
    "VideoMetadataFetcher",
    "TextExtractor",
]
