"""時間変換ユーティリティのテスト"""

from datetime import datetime, timezone

from src.domain.time_utils import (
    EPOCH_MIN,
    age_in_days,
    parse_timestamp,
    sort_key_timestamp,
)


class TestParseTimestamp:
    """ISO 8601 パースのテスト"""

    def test_zulu_suffix(self) -> None:
        result = parse_timestamp("2024-01-02T03:04:05Z")
        assert result == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    def test_offset_converted_to_utc(self) -> None:
        result = parse_timestamp("2024-01-02T09:00:00+09:00")
        assert result == datetime(2024, 1, 2, 0, 0, 0, tzinfo=timezone.utc)

    def test_naive_assumed_utc(self) -> None:
        result = parse_timestamp("2024-01-02T00:00:00")
        assert result is not None
        assert result.tzinfo is not None

    def test_invalid(self) -> None:
        assert parse_timestamp("yesterday") is None
        assert parse_timestamp("") is None
        assert parse_timestamp(None) is None


class TestAgeInDays:
    """経過日数のテスト"""

    def test_basic(self) -> None:
        published = datetime(2024, 1, 1, tzinfo=timezone.utc)
        now = datetime(2024, 1, 15, 12, tzinfo=timezone.utc)
        assert age_in_days(published, now) == 14.5

    def test_future_is_zero(self) -> None:
        published = datetime(2024, 2, 1, tzinfo=timezone.utc)
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert age_in_days(published, now) == 0.0


class TestSortKeyTimestamp:
    def test_unparseable_sorts_oldest(self) -> None:
        assert sort_key_timestamp("") == EPOCH_MIN
        assert sort_key_timestamp("2000-01-01T00:00:00Z") > EPOCH_MIN
