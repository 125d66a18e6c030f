# Use Cases
from src.application.usecases.collect_comments import (
    CollectCommentsConfig,
    CommentCollector,
)
from src.application.usecases.ingest_video import IngestVideoUseCase
from src.application.usecases.search_web import (
    SearchWebConfig,
    SearchWebUseCase,
    resolve_sources,
)

__all__ = [
    "SearchWebUseCase",
    "SearchWebConfig",
    "resolve_sources",
    "CommentCollector",
    "CollectCommentsConfig",
    "IngestVideoUseCase",
]
