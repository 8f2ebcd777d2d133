"""Unit tests for date helpers."""

from datetime import date

from cinebox.utils.dates import add_months, local_today


class TestAddMonths:
    """Tests for calendar month arithmetic."""

    def test_simple_addition(self):
        assert add_months(date(2026, 3, 15), 2) == date(2026, 5, 15)

    def test_crosses_year_boundary(self):
        assert add_months(date(2026, 11, 20), 2) == date(2027, 1, 20)

    def test_clamps_to_end_of_short_month(self):
        """Jan 31 + 1 month lands on the last day of February."""
        assert add_months(date(2026, 1, 31), 1) == date(2026, 2, 28)

    def test_clamps_to_leap_day(self):
        assert add_months(date(2027, 12, 31), 2) == date(2028, 2, 29)

    def test_clamps_thirty_day_month(self):
        assert add_months(date(2026, 8, 31), 1) == date(2026, 9, 30)

    def test_negative_months(self):
        assert add_months(date(2026, 3, 31), -1) == date(2026, 2, 28)
        assert add_months(date(2026, 1, 10), -2) == date(2025, 11, 10)

    def test_zero_months(self):
        assert add_months(date(2026, 2, 28), 0) == date(2026, 2, 28)


def test_local_today_returns_date():
    assert isinstance(local_today("UTC"), date)
