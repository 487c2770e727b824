"""Tests for datetime helpers."""

from __future__ import annotations

from datetime import date, datetime, timezone

from nhl_stories.utils.datetime_utils import (
    eastern_evening_utc,
    format_eastern_clock,
    parse_iso_datetime,
)


class TestParseIsoDatetime:
    def test_zulu_suffix(self) -> None:
        assert parse_iso_datetime("2026-01-16T00:00:00Z") == datetime(2026, 1, 16, tzinfo=timezone.utc)

    def test_offset_converted_to_utc(self) -> None:
        assert parse_iso_datetime("2026-01-15T19:00:00-05:00") == datetime(2026, 1, 16, tzinfo=timezone.utc)

    def test_naive_is_utc(self) -> None:
        assert parse_iso_datetime("2026-01-15T12:00:00") == datetime(2026, 1, 15, 12, tzinfo=timezone.utc)

    def test_empty_and_invalid(self) -> None:
        assert parse_iso_datetime(None) is None
        assert parse_iso_datetime("") is None
        assert parse_iso_datetime("not-a-date") is None


class TestEasternHelpers:
    def test_evening_in_standard_time(self) -> None:
        assert eastern_evening_utc(date(2026, 1, 15)) == datetime(2026, 1, 16, 0, tzinfo=timezone.utc)

    def test_evening_in_daylight_time(self) -> None:
        assert eastern_evening_utc(date(2026, 7, 15)) == datetime(2026, 7, 15, 23, tzinfo=timezone.utc)

    def test_clock_format(self) -> None:
        assert format_eastern_clock(datetime(2026, 1, 16, 0, 30, tzinfo=timezone.utc)) == "07:30 PM"
