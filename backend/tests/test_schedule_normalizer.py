"""Tests for the schedule normalizer."""

import unicodedata
from datetime import date, datetime, time, timezone

import pytest

from storehours.services.day_names import WEEK_DAYS
from storehours.services.schedule_normalizer import (
    LocationWithWorkHours,
    expand_day_range,
    normalize_day_map,
    normalize_sequential,
    normalize_three_schedules,
    open_this_sunday,
    parse_hours,
    parse_time,
)


def hours(entries):
    return {entry.day: (entry.from_hour, entry.to_hour) for entry in entries}


class TestParseHours:
    """Tests for splitting hour ranges."""

    @pytest.mark.parametrize("text", ["07:00 - 21:00", "07:00-21:00", "7-21", "07.00 – 21.00", "07:00 h - 21:00 h"])
    def test_range_formats(self, text):
        assert parse_hours(text) == (time(7, 0), time(21, 0))

    @pytest.mark.parametrize("text", ["", None, "Zatvoreno", "08:00-xx", "25:00-26:00"])
    def test_unparseable_is_closed(self, text):
        assert parse_hours(text) == (None, None)

    def test_midnight_closing(self):
        assert parse_hours("00-24") == (time(0, 0), time(23, 59))

    def test_parse_time_iso_datetime(self):
        """Test the wall-clock part of an ISO datetime is kept."""
        assert parse_time("2024-05-06T07:30:00") == time(7, 30)
        assert parse_time(datetime(2024, 5, 6, 20, 0)) == time(20, 0)
        assert parse_time("not a time") is None


class TestExpandDayRange:
    """Tests for day range expansion."""

    def test_weekday_range(self):
        assert expand_day_range("Pon-Pet") == list(WEEK_DAYS[:5])

    @pytest.mark.parametrize("expression", ["uto-čet", "UTO-ČET", "Uto – Čet", "uto-cet"])
    def test_range_ignores_case_and_diacritics(self, expression):
        assert expand_day_range(expression) == ["Utorak", "Srijeda", "Četvrtak"]

    def test_single_day(self):
        assert expand_day_range("Subotom") == ["Subota"]
        assert expand_day_range("NEDJELJA") == ["Nedjelja"]

    def test_reversed_range_wraps_around_sunday(self):
        assert expand_day_range("sub-pon") == ["Subota", "Nedjelja", "Ponedjeljak"]

    def test_unknown_days(self):
        assert expand_day_range("Praznici") == []
        assert expand_day_range("pon-xyz") == []
        assert expand_day_range("") == []


class TestNormalizeDayMap:
    """Tests for day -> hours maps."""

    def test_ranges_and_single_days(self, wednesday):
        """Test a range, a single day and an unmentioned Sunday."""
        entries = normalize_day_map({"Pon-Pet": "08-20", "Sub": "08-14"}, now=wednesday)

        assert [entry.day for entry in entries] == list(WEEK_DAYS)
        assert [entry.date for entry in entries] == [date(2024, 5, 6 + i) for i in range(7)]
        for entry in entries[:5]:
            assert (entry.from_hour, entry.to_hour) == (time(8), time(20))
        assert (entries[5].from_hour, entries[5].to_hour) == (time(8), time(14))
        assert (entries[6].from_hour, entries[6].to_hour) == (None, None)
        assert not open_this_sunday(entries)

    def test_english_names(self, wednesday):
        entries = normalize_day_map({}, now=wednesday)
        assert [entry.day_en for entry in entries] == [
            "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
        ]

    def test_always_seven_entries(self, wednesday):
        """Test an empty or garbage schedule still gives a full closed week."""
        for schedule in ({}, {"Praznici": "08-12"}, [("xyz", "07-21")]):
            entries = normalize_day_map(schedule, now=wednesday)
            assert len(entries) == 7
            assert not any(entry.is_open for entry in entries)

    def test_unknown_days_are_dropped(self, wednesday):
        entries = normalize_day_map([("Praznici", "08-12"), ("Pon", "07-21")], now=wednesday)
        assert hours(entries)["Ponedjeljak"] == (time(7), time(21))
        assert sum(entry.is_open for entry in entries) == 1

    def test_later_keys_override(self, wednesday):
        """Test a single day after a range overrides the range for that day."""
        entries = normalize_day_map([("Pon-Sub", "07-21"), ("Sub", "07-15")], now=wednesday)
        assert hours(entries)["Petak"] == (time(7), time(21))
        assert hours(entries)["Subota"] == (time(7), time(15))

    def test_hour_pairs(self, wednesday):
        """Test (from, to) pairs such as ISO datetimes from JSON APIs."""
        entries = normalize_day_map(
            [("Nedjelja", ("2024-05-12T08:00:00", "2024-05-12T13:00:00"))],
            now=wednesday,
        )
        assert hours(entries)["Nedjelja"] == (time(8), time(13))
        assert open_this_sunday(entries)

    def test_half_open_sunday_is_closed(self, wednesday):
        entries = normalize_day_map([("Nedjelja", ("08:00", None))], now=wednesday)
        assert not open_this_sunday(entries)


class TestNormalizeThreeSchedules:
    """Tests for weekday / Saturday / Sunday schedules."""

    def test_workweek_applies_monday_to_friday(self, wednesday):
        entries = normalize_three_schedules(
            {"start": "07:00", "end": "21:00"},
            {"start": "07:00", "end": "20:00"},
            None,
            now=wednesday,
        )
        assert [hours(entries)[day] for day in WEEK_DAYS[:5]] == [(time(7), time(21))] * 5
        assert hours(entries)["Subota"] == (time(7), time(20))
        assert hours(entries)["Nedjelja"] == (None, None)
        assert not open_this_sunday(entries)

    def test_open_sunday(self, wednesday):
        entries = normalize_three_schedules("07-21", "07-20", "08-13", now=wednesday)
        assert open_this_sunday(entries)
        assert entries[6].date == date(2024, 5, 12)


class TestNormalizeSequential:
    """Tests for consecutive rows anchored on the first recognisable day."""

    def test_rows_starting_mid_week(self, wednesday):
        """Test rows that start on Thursday continue into next week."""
        rows = [
            ("če", "07:00-21:00"),
            ("pe", "07:00-21:00"),
            ("su", "07:00-20:00"),
            ("ne", "Zatvoreno"),
            ("po", "07:00-21:00"),
            ("ut", "07:00-21:00"),
            ("sr", "07:00-21:00"),
        ]
        entries = normalize_sequential(rows, now=wednesday)

        assert [entry.day for entry in entries] == list(WEEK_DAYS)
        by_day = {entry.day: entry for entry in entries}
        assert by_day["Četvrtak"].date == date(2024, 5, 9)
        assert by_day["Nedjelja"].date == date(2024, 5, 12)
        assert by_day["Ponedjeljak"].date == date(2024, 5, 13)
        assert (by_day["Subota"].from_hour, by_day["Subota"].to_hour) == (time(7), time(20))
        assert not by_day["Nedjelja"].is_open

    def test_unreliable_labels_follow_the_anchor(self, wednesday):
        """Test labels after the first known day are not trusted."""
        rows = [("Danas", "08-20"), ("Sutra", "08-14"), ("Petak", "09-17"), ("Srijeda", "10-12")]
        entries = normalize_sequential(rows, now=wednesday)
        by_day = hours(entries)

        # "Petak" at position 2 anchors position 0 to Wednesday
        assert by_day["Srijeda"] == (time(8), time(20))
        assert by_day["Četvrtak"] == (time(8), time(14))
        assert by_day["Petak"] == (time(9), time(17))
        assert by_day["Subota"] == (time(10), time(12))

    def test_no_recognisable_day(self, wednesday):
        entries = normalize_sequential([("Danas", "08-20")], now=wednesday)
        assert len(entries) == 7
        assert not any(entry.is_open for entry in entries)

    def test_only_one_week_is_used(self, wednesday):
        rows = [("Pon", "08-20")] * 7 + [("Pon", "10-11")]
        entries = normalize_sequential(rows, now=wednesday)
        assert all(entry.from_hour == time(8) for entry in entries)


def test_location_open_this_sunday(wednesday):
    location = LocationWithWorkHours(
        name="Spar Centar",
        address="Ilica 1, 10000 Zagreb",
        work_hours=normalize_day_map({"Pon-Ned": "08-20"}, now=wednesday),
    )
    assert location.open_this_sunday


def test_decomposed_diacritics():
    """Test "Č" written as "C" plus a combining caron still matches."""
    assert expand_day_range(unicodedata.normalize("NFD", "Uto-Čet")) == ["Utorak", "Srijeda", "Četvrtak"]
    assert expand_day_range(unicodedata.normalize("NFD", "ČETVRTAK")) == ["Četvrtak"]


def test_parse_time_utc_timestamp_uses_local_wall_clock():
    """Test a UTC timestamp is stored as the local time of day."""
    expected = datetime(1970, 1, 1, 6, 0, tzinfo=timezone.utc).astimezone().time()

    assert parse_time("1970-01-01T06:00:00.000Z") == expected
    assert parse_time(datetime(1970, 1, 1, 6, 0, tzinfo=timezone.utc)) == expected


def test_parse_time_naive_timestamp_is_kept():
    assert parse_time("2024-05-06T06:00:00") == time(6, 0)
