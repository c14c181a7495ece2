"""Tests for the timezone helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from campusnet.utils import datetime as datetime_utils
from campusnet.utils import parse_iso_datetime


def test_parse_accepts_browser_zulu_suffix() -> None:
    assert parse_iso_datetime("2024-05-29T16:26:40.123Z") == datetime(
        2024, 5, 29, 16, 26, 40, 123000, tzinfo=timezone.utc
    )


def test_parse_assumes_app_timezone_for_naive_values() -> None:
    parsed = parse_iso_datetime("2024-05-29T16:26:40")

    assert parsed.utcoffset() == timedelta(0)


def test_parse_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        parse_iso_datetime("yesterday")


def test_parse_passes_through_none() -> None:
    assert parse_iso_datetime(None) is None


@pytest.mark.parametrize(
    ("name", "offset"),
    [("UTC+05:30", timedelta(hours=5, minutes=30)), ("UTC-03:00", timedelta(hours=-3))],
)
def test_offset_timezones_are_resolved(monkeypatch, name, offset) -> None:
    monkeypatch.setenv("APP_TIMEZONE", name)
    datetime_utils.get_settings.cache_clear()
    datetime_utils.get_app_timezone.cache_clear()

    now = datetime_utils.now_in_app_timezone()

    assert now.utcoffset() == offset


def test_parse_reads_numbers_as_epoch_milliseconds() -> None:
    assert parse_iso_datetime(1_717_000_000_000) == datetime(
        2024, 5, 29, 16, 26, 40, tzinfo=timezone.utc
    )


@pytest.mark.parametrize("value", [1e300, float("inf"), 10**400])
def test_parse_rejects_out_of_range_numbers(value) -> None:
    with pytest.raises(ValueError):
        parse_iso_datetime(value)
