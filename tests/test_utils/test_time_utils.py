"""Tests for tech_health/utils/time_utils.py."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from tech_health.utils.time_utils import (
    as_utc,
    days_between,
    epoch_millis,
    latest_timestamp,
    parse_timestamp,
    to_base36,
    utcnow,
)


class TestParseTimestamp:
    def test_z_suffix(self):
        assert parse_timestamp("2024-03-01T10:00:00Z") == datetime(
            2024, 3, 1, 10, tzinfo=timezone.utc
        )

    def test_offset_is_kept(self):
        ts = parse_timestamp("2024-03-01T10:00:00+02:00")
        assert ts == datetime(2024, 3, 1, 8, tzinfo=timezone.utc)

    def test_naive_string_assumed_utc(self):
        assert parse_timestamp("2024-03-01T10:00:00").tzinfo == timezone.utc

    def test_datetime_passthrough(self):
        naive = datetime(2024, 3, 1)
        assert parse_timestamp(naive) == datetime(2024, 3, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [None, "", "   ", "yesterday", 1700000000, {}])
    def test_unparseable_returns_none(self, value):
        assert parse_timestamp(value) is None


class TestLatestTimestamp:
    def test_picks_latest(self):
        assert latest_timestamp("2024-01-01T00:00:00Z", "2024-06-01T00:00:00Z") == datetime(
            2024, 6, 1, tzinfo=timezone.utc
        )

    def test_ignores_unparseable(self):
        assert latest_timestamp(None, "bad", "2024-01-01T00:00:00Z") == datetime(
            2024, 1, 1, tzinfo=timezone.utc
        )

    def test_none_when_nothing_parses(self):
        assert latest_timestamp(None, "bad") is None


class TestDaysBetween:
    def test_fractional_days(self):
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert days_between(start, start + timedelta(hours=36)) == pytest.approx(1.5)

    def test_negative_when_reversed(self):
        start = datetime(2024, 1, 2, tzinfo=timezone.utc)
        assert days_between(start, start - timedelta(days=1)) == pytest.approx(-1.0)

    def test_naive_arguments_read_as_utc(self):
        aware = datetime(2024, 1, 1, tzinfo=timezone.utc)
        naive = datetime(2024, 1, 3)
        assert days_between(aware, naive) == pytest.approx(2.0)
        assert days_between(naive, aware) == pytest.approx(-2.0)


class TestAsUtc:
    def test_naive_gets_utc(self):
        assert as_utc(datetime(2024, 1, 1)).tzinfo is timezone.utc

    def test_aware_unchanged(self):
        plus_two = timezone(timedelta(hours=2))
        moment = datetime(2024, 1, 1, 12, tzinfo=plus_two)
        assert as_utc(moment) is moment


class TestEpochMillisAndBase36:
    def test_epoch_millis(self):
        assert epoch_millis(datetime(1970, 1, 1, 0, 0, 1, 500000, tzinfo=timezone.utc)) == 1500

    def test_epoch_millis_naive_is_utc(self):
        assert epoch_millis(datetime(1970, 1, 2)) == 86_400_000

    @pytest.mark.parametrize(
        "value, expected",
        [(0, "0"), (9, "9"), (10, "a"), (35, "z"), (36, "10"), (1295, "zz"), (1296, "100")],
    )
    def test_to_base36(self, value, expected):
        assert to_base36(value) == expected

    def test_to_base36_round_trips_through_int(self):
        millis = epoch_millis(datetime(2026, 10, 18, 12, tzinfo=timezone.utc))
        assert int(to_base36(millis), 36) == millis

    def test_negative_raises(self):
        with pytest.raises(ValueError, match="non-negative"):
            to_base36(-1)


def test_utcnow_is_aware():
    assert utcnow().tzinfo is not None
