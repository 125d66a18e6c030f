"""時間変換ユーティリティ"""

from datetime import datetime, timezone

# ソート時に公開日時不明のものを末尾に回すための下限値
EPOCH_MIN = datetime.min.replace(tzinfo=timezone.utc)


def parse_timestamp(value: str | None) -> datetime | None:
    """
    ISO 8601 文字列を timezone 付き datetime に変換

    Args:
        value: "2024-01-01T00:00:00Z" 形式の文字列

    Returns:
        UTC の datetime、解釈できない場合は None
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def age_in_days(published_at: datetime, now: datetime) -> float:
    """
    公開からの経過日数（未来の日時は0日扱い）

    Example:
        published_at = 2024-01-01T00:00Z, now = 2024-01-15T12:00Z
        → 14.5
    """
    seconds = (now - published_at).total_seconds()
    return max(0.0, seconds / 86400)


def sort_key_timestamp(value: str | None) -> datetime:
    """並び替え用キー（解釈不能な日時は最も古い扱い）"""
    return parse_timestamp(value) or EPOCH_MIN
