"""ドメイン固有の例外定義"""

import re

# クォータ・レート制限を示すエラーメッセージ
_QUOTA_PATTERN = re.compile(r"quota|rate ?limit", re.IGNORECASE)

TOO_MANY_REQUESTS = 429


class ContentAggregatorError(Exception):
    """基底例外クラス"""

    status_code: int = 500


class ClientInputError(ContentAggregatorError):
    """必須パラメータの欠落・不正"""

    status_code = 400


class ConfigurationError(ContentAggregatorError):
    """必要な認証情報が設定されていない"""

    status_code = 500


class UpstreamTransportError(ContentAggregatorError):
    """外部API呼び出しの失敗（非2xx・タイムアウト・通信エラー）"""

    status_code = 500


class UpstreamQuotaError(UpstreamTransportError):
    """外部APIのクォータ・レート制限超過"""

    status_code = 429


class NotFoundError(ContentAggregatorError):
    """指定IDに対応するリソースが外部APIに存在しない"""

    status_code = 500


def is_quota_message(message: str) -> bool:
    """エラーメッセージがクォータ超過を示しているか"""
    return bool(_QUOTA_PATTERN.search(message or ""))


def classify_upstream_error(message: str, status: int | None = None) -> UpstreamTransportError:
    """HTTPステータス（429）またはメッセージ内容に応じて通信エラー／クォータエラーを生成"""
    if status == TOO_MANY_REQUESTS or is_quota_message(message):
        return UpstreamQuotaError(message)
    return UpstreamTransportError(message)
