"""
Test Date Utilities
===================
"""

from datetime import datetime, timezone, timedelta

import pytest

from chimera_core.utils.dates import date_to_quarter, parse_timestamp, quarter_or_none


class TestDateToQuarter:
    """Tests for date_to_quarter."""

    @pytest.mark.parametrize("value", [
        "2023-10-05T12:30:00Z",
        "2023-11-22T09:12:00Z",
        "2023-12-10T16:45:00Z",
    ])
    def test_fourth_quarter(self, value):
        """Test October to December map to Q4."""
        assert date_to_quarter(value) == "Q4 2023"

    def test_third_quarter(self):
        """Test an August date."""
        assert date_to_quarter("2024-08-15T10:30:00Z") == "Q3 2024"

    @pytest.mark.parametrize("month,expected", [
        (1, "Q1"), (3, "Q1"), (4, "Q2"), (6, "Q2"),
        (7, "Q3"), (9, "Q3"), (10, "Q4"), (12, "Q4"),
    ])
    def test_quarter_boundaries(self, month, expected):
        """Test the first and last month of every quarter."""
        assert date_to_quarter(datetime(2022, month, 15, tzinfo=timezone.utc)) == f"{expected} 2022"

    def test_read_in_utc(self):
        """Test an offset that crosses a year boundary in UTC."""
        # 23:30 on Dec 31 at UTC-05:00 is already January in UTC
        assert date_to_quarter("2023-12-31T23:30:00-05:00") == "Q1 2024"

    def test_naive_is_utc(self):
        """Test naive datetimes are taken as UTC."""
        assert date_to_quarter(datetime(2023, 3, 31, 23, 59)) == "Q1 2023"

    def test_invalid(self):
        """Test a malformed timestamp."""
        with pytest.raises(ValueError):
            date_to_quarter("not-a-date")


class TestParseTimestamp:
    """Tests for parse_timestamp."""

    def test_z_suffix(self):
        """Test a trailing Z is UTC."""
        dt = parse_timestamp("2023-12-10T16:45:00Z")

        assert dt == datetime(2023, 12, 10, 16, 45, tzinfo=timezone.utc)

    def test_offset_converted(self):
        """Test offsets are converted to UTC."""
        dt = parse_timestamp(datetime(2023, 1, 1, 2, 0, tzinfo=timezone(timedelta(hours=3))))

        assert dt.tzinfo == timezone.utc
        assert dt.day == 31 and dt.month == 12


class TestQuarterOrNone:
    """Tests for quarter_or_none."""

    def test_missing(self):
        """Test missing dates give no quarter."""
        assert quarter_or_none(None) is None
        assert quarter_or_none("  ") is None

    def test_present(self):
        """Test present dates are converted."""
        assert quarter_or_none("2023-05-20T18:00:00Z") == "Q2 2023"
