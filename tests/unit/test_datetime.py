# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the CUBA date and time helpers."""

from datetime import date, datetime, time, timedelta, timezone

import pytest

from hemis.utils.datetime import (
    format_cuba_datetime,
    format_time,
    local_now,
    parse_cuba_datetime,
    parse_date,
    parse_time,
)


class TestFormatting:
    def test_format_cuba_datetime_has_milliseconds(self) -> None:
        value = datetime(2024, 9, 1, 8, 30, 5, 120999)

        assert format_cuba_datetime(value) == "2024-09-01 08:30:05.120"

    def test_format_time(self) -> None:
        assert format_time(time(7, 5, 0)) == "07:05:00"


class TestParsing:
    @pytest.mark.parametrize(
        "text",
        [
            "2024-09-01 08:30:05.120",
            "2024-09-01T08:30:05.120",
            "2024-09-01T08:30:05.120Z",
        ],
    )
    def test_parse_cuba_datetime_variants(self, text: str) -> None:
        assert parse_cuba_datetime(text) == datetime(2024, 9, 1, 8, 30, 5, 120000)

    def test_parse_cuba_datetime_drops_offset_keeping_wall_time(self) -> None:
        parsed = parse_cuba_datetime("2024-09-01T08:30:05+05:00")

        assert parsed.tzinfo is None
        assert parsed == datetime(2024, 9, 1, 8, 30, 5)

    def test_parse_cuba_datetime_rejects_blank(self) -> None:
        with pytest.raises(ValueError):
            parse_cuba_datetime("  ")

    def test_parse_date_truncates_datetime(self) -> None:
        assert parse_date("2003-05-17") == date(2003, 5, 17)
        assert parse_date("2003-05-17 10:00:00.000") == date(2003, 5, 17)

    def test_parse_date_rejects_garbage(self) -> None:
        with pytest.raises(ValueError):
            parse_date("17.05.2003")

    def test_parse_time(self) -> None:
        assert parse_time("08:30") == time(8, 30)


class TestLocalNow:
    def test_local_now_is_naive_with_millisecond_precision(self) -> None:
        now = local_now("Asia/Tashkent")

        assert now.tzinfo is None
        assert now.microsecond % 1000 == 0

    def test_local_now_uses_zone_offset(self) -> None:
        utc = datetime.now(timezone.utc).replace(tzinfo=None)
        tashkent = local_now("Asia/Tashkent")

        assert abs((tashkent - utc) - timedelta(hours=5)) < timedelta(minutes=1)
