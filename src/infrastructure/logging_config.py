"""ロギング設定とLangSmithトレーシング統合"""

import logging
import os
import sys
import uuid
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Callable, TypeVar

# LangSmithのインポート（トレーシングを使わない環境では未インストールでよい）
try:
    from langsmith import traceable

    LANGSMITH_AVAILABLE = True
except ImportError:
    LANGSMITH_AVAILABLE = False
    traceable = None  # type: ignore

F = TypeVar("F", bound=Callable[..., Any])

_loggers: dict[str, logging.Logger] = {}

# 外部APIクライアントのログは WARNING 以上のみ
_NOISY_LOGGERS = ("httpx", "httpcore", "googleapiclient", "urllib3", "uvicorn.access")


def get_logger(name: str) -> logging.Logger:
    """
    名前付きロガーを取得

    Args:
        name: ロガー名（通常は __name__ を使用）
    """
    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(name)
    _loggers[name] = logger
    return logger


def setup_logging(
    level: int | str = logging.INFO,
    format_string: str | None = None,
) -> None:
    """
    アプリケーション全体のロギングを設定

    Args:
        level: ログレベル（"DEBUG" などの文字列も可）
        format_string: ログフォーマット文字列
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    if format_string is None:
        format_string = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

    logging.basicConfig(
        level=level,
        format=format_string,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def is_langsmith_enabled() -> bool:
    """LangSmithが有効かどうかを確認"""
    if not LANGSMITH_AVAILABLE:
        return False

    try:
        from config.settings import get_settings

        settings = get_settings()
        return settings.LANGSMITH_TRACING and bool(settings.LANGSMITH_API_KEY)
    except Exception:
        # Settingsが使えない場合は環境変数から直接取得
        tracing_enabled = os.getenv("LANGSMITH_TRACING", "").lower() in ("true", "1", "yes")
        return tracing_enabled and bool(os.getenv("LANGSMITH_API_KEY"))


def generate_trace_metadata() -> dict[str, Any]:
    """各トレースを識別するためのリクエストIDとタイムスタンプ"""
    return {
        "request_id": str(uuid.uuid4())[:8],
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def _trace(
    name: str | None,
    run_type: str,
    metadata: dict[str, Any] | None,
) -> Callable[[F], F]:
    """
    LangSmithが有効な場合のみ traceable でラップするデコレータ

    無効の場合は関数をそのまま返す。呼び出しごとに新しい run_id を振る
    """

    def decorator(func: F) -> F:
        if not (is_langsmith_enabled() and traceable is not None):
            return func

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            traced_func = traceable(
                name=name or func.__name__,
                run_type=run_type,
                metadata={**(metadata or {}), **generate_trace_metadata()},
                run_id=uuid.uuid4(),
            )(func)
            return traced_func(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator


def trace_chain(
    name: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> Callable[[F], F]:
    """ユースケース全体をトレースするデコレータ"""
    return _trace(name=name, run_type="chain", metadata=metadata)


def trace_tool(
    name: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> Callable[[F], F]:
    """外部API呼び出しをトレースするデコレータ"""
    return _trace(name=name, run_type="tool", metadata=metadata)


class LogContext:
    """
    ログのコンテキスト情報を保持するヘルパー

    Example:
        ctx = LogContext(video_id="abc123", sort_by="likes")
        logger.info(f"Processing {ctx}")
    """

    def __init__(self, **kwargs: Any):
        self._data = kwargs

    def __str__(self) -> str:
        return " | ".join(f"{k}={v!r}" for k, v in self._data.items())

    def update(self, **kwargs: Any) -> "LogContext":
        """新しいコンテキストを追加した新しいインスタンスを返す"""
        return LogContext(**{**self._data, **kwargs})
