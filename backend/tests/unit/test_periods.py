"""Unit tests for date parsing and period bounds."""

import doctest
from datetime import date, datetime

import pytest

from dealer_reports.utils import periods
from dealer_reports.utils.periods import (
    month_bounds,
    parse_date,
    previous_month,
    validate_month,
    year_bounds,
)


def test_module_doctests():
    """The examples in the module docstrings hold."""
    failures, _ = doctest.testmod(periods)
    assert failures == 0


class TestParseDate:
    def test_iso_string(self):
        """A plain YYYY-MM-DD string parses to that date."""
        assert parse_date("2025-06-01") == date(2025, 6, 1)

    def test_date_passthrough(self):
        """A date object is returned unchanged."""
        assert parse_date(date(2025, 6, 1)) == date(2025, 6, 1)

    def test_datetime_truncated(self):
        """A datetime object is truncated to its date."""
        assert parse_date(datetime(2025, 6, 1, 14, 30)) == date(2025, 6, 1)

    @pytest.mark.parametrize("value", ["2025-06-01T10:00:00", "2025-06-01 10:00:00", " 2025-06-01 "])
    def test_iso_timestamp_string_truncated(self, value):
        """ISO timestamps and padded strings resolve to the calendar date."""
        assert parse_date(value) == date(2025, 6, 1)

    @pytest.mark.parametrize("bad", ["not-a-date", "2025-13-01", "2025-02-30", ""])
    def test_invalid_raises_value_error(self, bad):
        """Unparseable or impossible dates raise ValueError."""
        with pytest.raises(ValueError, match="expected YYYY-MM-DD"):
            parse_date(bad)

    @pytest.mark.parametrize("bad", ["2025-06-01xyz", "2025-06-01 junk", "2025-06-01Tnoon"])
    def test_trailing_text_rejected(self, bad):
        """Text after the date that is not a valid time is an error, not ignored."""
        with pytest.raises(ValueError, match="expected YYYY-MM-DD"):
            parse_date(bad)


class TestMonthBounds:
    def test_leap_february(self):
        """February of a leap year ends on the 29th."""
        assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))

    def test_non_leap_february(self):
        """February of a common year ends on the 28th."""
        assert month_bounds(2025, 2)[1] == date(2025, 2, 28)

    def test_december(self):
        """December ends on the 31st without rolling into next year."""
        assert month_bounds(2025, 12) == (date(2025, 12, 1), date(2025, 12, 31))

    @pytest.mark.parametrize("month", [0, 13, -1])
    def test_invalid_month(self, month):
        """Month numbers outside 1-12 are rejected."""
        with pytest.raises(ValueError, match="between 1-12"):
            month_bounds(2025, month)


def test_validate_month_accepts_range():
    """Every month 1-12 passes validation."""
    for m in range(1, 13):
        validate_month(2025, m)


def test_year_bounds():
    """A year spans 1 January to 31 December."""
    assert year_bounds(2025) == (date(2025, 1, 1), date(2025, 12, 31))


@pytest.mark.parametrize(
    "given, expected",
    [((2025, 1), (2024, 12)), ((2025, 7), (2025, 6))],
)
def test_previous_month(given, expected):
    """The previous month wraps from January to December of the prior year."""
    assert previous_month(*given) == expected
