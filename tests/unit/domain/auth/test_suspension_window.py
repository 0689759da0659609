"""Tests for the suspension window calculator."""

from datetime import UTC, date, datetime, time, timedelta, timezone

import pytest

from ficarchive.domain.auth.service.suspension import (
    SuspensionWindow,
    effective_unban_instant,
    format_in_zone,
    localize,
)


class TestEffectiveUnbanInstant:
    def test_date_only_end_lands_on_next_day(self):
        assert effective_unban_instant(date(2024, 3, 10)) == datetime(
            2024, 3, 11, 18, 51, tzinfo=UTC
        )

    def test_date_only_end_across_year(self):
        assert effective_unban_instant(date(2024, 12, 31)) == datetime(
            2025, 1, 1, 18, 51, tzinfo=UTC
        )

    def test_midnight_timestamp_stays_on_its_day(self):
        end = datetime(2024, 3, 10, 0, 0, tzinfo=UTC)

        assert effective_unban_instant(end) == datetime(2024, 3, 10, 18, 51, tzinfo=UTC)

    def test_end_after_cutoff_moves_to_next_day(self):
        end = datetime(2024, 3, 10, 19, 0, tzinfo=UTC)

        assert effective_unban_instant(end) == datetime(2024, 3, 11, 18, 51, tzinfo=UTC)

    def test_end_exactly_at_cutoff_stays(self):
        end = datetime(2024, 3, 10, 18, 51, 0, tzinfo=UTC)

        assert effective_unban_instant(end) == end

    def test_one_second_past_cutoff_advances(self):
        end = datetime(2024, 3, 10, 18, 51, 1, tzinfo=UTC)

        assert effective_unban_instant(end).date() == date(2024, 3, 11)

    def test_naive_datetime_is_utc(self):
        assert effective_unban_instant(datetime(2024, 3, 10, 19, 0)) == datetime(
            2024, 3, 11, 18, 51, tzinfo=UTC
        )

    def test_other_offsets_are_converted_first(self):
        # 20:00 at UTC-5 is 01:00 UTC the next day
        end = datetime(2024, 3, 10, 20, 0, tzinfo=timezone(timedelta(hours=-5)))

        assert effective_unban_instant(end) == datetime(2024, 3, 11, 18, 51, tzinfo=UTC)

    def test_month_and_year_rollover(self):
        end = datetime(2024, 12, 31, 23, 0, tzinfo=UTC)

        assert effective_unban_instant(end) == datetime(2025, 1, 1, 18, 51, tzinfo=UTC)

    @pytest.mark.parametrize("hour", [0, 6, 12, 18, 19, 23])
    def test_always_18_51_utc_on_end_day_or_next(self, hour: int):
        for offset in range(0, 366, 7):
            day = date(2024, 1, 1) + timedelta(days=offset)
            end = datetime.combine(day, time(hour, 30), tzinfo=UTC)

            instant = effective_unban_instant(end)

            assert instant.tzinfo == UTC
            assert instant.timetz() == time(18, 51, tzinfo=UTC)
            expected_day = day + timedelta(days=1) if hour >= 19 else day
            assert instant.date() == expected_day


class TestLocalize:
    def test_dst_start_day(self):
        # US clocks went forward at 02:00 local on 2024-03-10
        local = localize(datetime(2024, 3, 10, 18, 51, tzinfo=UTC), "America/New_York")

        assert (local.hour, local.minute) == (14, 51)
        assert local.tzname() == "EDT"

    def test_dst_end_day(self):
        local = localize(datetime(2024, 11, 3, 18, 51, tzinfo=UTC), "America/New_York")

        assert (local.hour, local.minute) == (13, 51)
        assert local.tzname() == "EST"

    def test_unknown_zone_falls_back_to_utc(self):
        local = localize(datetime(2024, 3, 10, 18, 51, tzinfo=UTC), "Mars/Olympus_Mons")

        assert local.utcoffset() == timedelta(0)

    def test_format_in_zone(self):
        instant = datetime(2024, 3, 11, 18, 51, tzinfo=UTC)

        assert format_in_zone(instant, None) == "Mon 11 Mar 2024 06:51PM UTC"
        assert format_in_zone(instant, "Europe/London", "%Y-%m-%d %H:%M %Z") == (
            "2024-03-11 18:51 GMT"
        )


class TestSuspensionWindow:
    def test_is_over(self):
        window = SuspensionWindow.for_end(date(2024, 3, 10))

        assert not window.is_over(datetime(2024, 3, 10, 19, 0, tzinfo=UTC))
        assert not window.is_over(datetime(2024, 3, 11, 18, 50, tzinfo=UTC))
        assert window.is_over(datetime(2024, 3, 11, 18, 51, tzinfo=UTC))

    def test_keeps_stored_end(self):
        window = SuspensionWindow.for_end(date(2024, 3, 10))

        assert window.suspended_until == date(2024, 3, 10)
