import json
from datetime import datetime, timedelta, timezone

from claudeburst.models import UsageWindow
from claudeburst.window_parser import (
    FALLBACK_SESSION_DURATION,
    parse_date_value,
    parse_usage_window,
)


class TestParseDateValue:
    def test_fractional_seconds(self) -> "None":
        parsed = parse_date_value("2026-01-07T20:00:00.123Z")
        assert parsed == datetime(2026, 1, 7, 20, 0, 0, 123000, tzinfo=timezone.utc)

    def test_whole_seconds(self) -> "None":
        parsed = parse_date_value("2026-01-07T20:00:00Z")
        assert parsed == datetime(2026, 1, 7, 20, tzinfo=timezone.utc)

    def test_epoch_seconds(self) -> "None":
        parsed = parse_date_value(1_700_000_000)
        assert parsed is not None
        assert parsed.timestamp() == 1_700_000_000
        assert parsed.tzinfo is timezone.utc

    def test_fractional_epoch_seconds(self) -> "None":
        parsed = parse_date_value(1_700_000_000.5)
        assert parsed is not None
        assert abs(parsed.timestamp() - 1_700_000_000.5) < 0.0001

    def test_rejects_invalid_input(self) -> "None":
        assert parse_date_value("not-a-date") is None
        assert parse_date_value(None) is None
        assert parse_date_value(True) is None
        assert parse_date_value(["2026-01-07T20:00:00Z"]) is None
        assert parse_date_value({"seconds": 1}) is None

    def test_rejects_out_of_range_epoch(self) -> "None":
        assert parse_date_value(1e20) is None
        assert parse_date_value(float("nan")) is None
        assert parse_date_value(float("inf")) is None


class TestParseUsageWindow:
    def test_uses_both_bounds(self) -> "None":
        parsed = parse_usage_window(
            {
                "period_start": "2026-01-08T00:30:00Z",
                "period_end": "2026-01-08T04:00:00Z",
            }
        )
        assert parsed == UsageWindow(
            start=datetime(2026, 1, 8, 0, 30, tzinfo=timezone.utc),
            end=datetime(2026, 1, 8, 4, tzinfo=timezone.utc),
        )

    def test_uses_fallback_start(self) -> "None":
        parsed = parse_usage_window({"period_end": "2026-01-08T04:00:00Z"})

        expected_end = datetime(2026, 1, 8, 4, tzinfo=timezone.utc)
        assert parsed is not None
        assert parsed.end == expected_end
        assert parsed.start == expected_end - FALLBACK_SESSION_DURATION

    def test_fallback_is_four_hours(self) -> "None":
        assert FALLBACK_SESSION_DURATION == timedelta(hours=4)

    def test_unparseable_start_uses_fallback(self) -> "None":
        parsed = parse_usage_window(
            {"period_start": "yesterday", "period_end": 1_767_844_800}
        )
        assert parsed is not None
        assert parsed.end - parsed.start == FALLBACK_SESSION_DURATION

    def test_clamps_start_after_end(self) -> "None":
        parsed = parse_usage_window(
            {
                "period_start": "2026-01-08T06:00:00Z",
                "period_end": "2026-01-08T04:00:00Z",
            }
        )
        assert parsed is not None
        assert parsed.start == parsed.end

    def test_mixed_string_and_epoch(self) -> "None":
        parsed = parse_usage_window(
            {"period_start": 1_767_830_400, "period_end": "2026-01-08T04:00:00Z"}
        )
        assert parsed == UsageWindow(
            start=datetime(2026, 1, 8, 0, tzinfo=timezone.utc),
            end=datetime(2026, 1, 8, 4, tzinfo=timezone.utc),
        )

    def test_requires_period_end(self) -> "None":
        assert parse_usage_window({"period_start": "2026-01-08T00:00:00Z"}) is None
        assert parse_usage_window({"period_end": "soon"}) is None
        assert parse_usage_window({}) is None

    def test_from_bytes(self) -> "None":
        data = json.dumps(
            {
                "period_start": "2026-01-08T00:00:00Z",
                "period_end": "2026-01-08T04:00:00Z",
            }
        ).encode()

        parsed = parse_usage_window(data)

        assert parsed is not None
        assert parsed.start == parsed.end - FALLBACK_SESSION_DURATION

    def test_from_text(self) -> "None":
        parsed = parse_usage_window('{"period_end": "2026-01-08T04:00:00.000Z"}')
        assert parsed is not None
        assert parsed.end == datetime(2026, 1, 8, 4, tzinfo=timezone.utc)

    def test_rejects_invalid_json(self) -> "None":
        assert parse_usage_window(b"{not json") is None
        assert parse_usage_window(b"\xff\xfe") is None
        assert parse_usage_window("") is None

    def test_rejects_non_object_json(self) -> "None":
        assert parse_usage_window(b"[1, 2]") is None
        assert parse_usage_window(b'"2026-01-08T04:00:00Z"') is None
        assert parse_usage_window(b"null") is None

    def test_rejects_deeply_nested_json(self) -> "None":
        assert parse_usage_window(b"[" * 100000) is None
        assert parse_usage_window("[" * 100000) is None

    def test_fallback_start_before_first_representable_moment(self) -> "None":
        assert parse_usage_window({"period_end": "0001-01-01T01:00:00Z"}) is None

    def test_explicit_start_near_first_representable_moment(self) -> "None":
        parsed = parse_usage_window(
            {
                "period_start": "0001-01-01T00:00:00Z",
                "period_end": "0001-01-01T01:00:00Z",
            }
        )

        assert parsed is not None
        assert parsed.start == datetime(1, 1, 1, tzinfo=timezone.utc)
