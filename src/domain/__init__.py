# Domain Layer
from src.domain.entities import (
    ALL_SOURCES,
    CommentPage,
    CommentRecord,
    CommentSortKey,
    NormalizedResultItem,
    SearchCredentials,
    SearchSource,
    VideoIngestResult,
    VideoMeta,
)
from src.domain.exceptions import (
    ClientInputError,
    ConfigurationError,
    ContentAggregatorError,
    NotFoundError,
    UpstreamQuotaError,
    UpstreamTransportError,
)

__all__ = [
    "ALL_SOURCES",
    "SearchSource",
    "SearchCredentials",
    "NormalizedResultItem",
    "CommentSortKey",
    "CommentRecord",
    "CommentPage",
    "VideoMeta",
    "VideoIngestResult",
    "ContentAggregatorError",
    "ClientInputError",
    "ConfigurationError",
    "UpstreamTransportError",
    "UpstreamQuotaError",
    "NotFoundError",
]
