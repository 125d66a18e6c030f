"""Google API (googleapiclient) 共通処理"""

from typing import Any, Callable

import httplib2
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from src.domain.exceptions import UpstreamTransportError, classify_upstream_error

# (service, version, api_key, timeout_sec) → Resource
ResourceFactory = Callable[[str, str, str, float], Any]


def build_google_service(
    service: str,
    version: str,
    api_key: str,
    timeout_sec: float,
) -> Any:
    """タイムアウト付きの httplib2.Http で Resource を構築"""
    return build(
        service,
        version,
        developerKey=api_key,
        http=httplib2.Http(timeout=timeout_sec),
        cache_discovery=False,
    )


def http_status(error: HttpError) -> int:
    return int(getattr(error.resp, "status", 0) or 0)


def upstream_error_from_http(label: str, error: HttpError) -> UpstreamTransportError:
    """
    HttpError をドメイン例外に変換

    URIにはAPIキーが含まれるため、メッセージには理由のみを使う
    """
    reason = getattr(error, "reason", "") or ""
    status = http_status(error)
    return classify_upstream_error(f"{label} {status}: {reason}".strip(), status)


def execute_request(request: Any, label: str) -> dict:
    """
    リクエストを実行してレスポンスJSONを返す

    Raises:
        UpstreamQuotaError: クォータ・レート制限超過
        UpstreamTransportError: 非2xx・タイムアウト・通信エラー
    """
    try:
        return request.execute() or {}
    except HttpError as e:
        raise upstream_error_from_http(label, e) from e
    except (OSError, httplib2.HttpLib2Error) as e:
        # socket.timeout (TimeoutError) もここに含まれる
        raise UpstreamTransportError(f"{label} failed: {e}") from e
