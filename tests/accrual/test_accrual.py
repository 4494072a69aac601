"""
tests/accrual/test_accrual.py

Covers:
  - Anniversary-style tenure (month/year borrowing, month ends, leap days)
  - First-year accrual and its cap
  - Yearly grants with seniority bonus and per-year cap
  - Holiday bonus through the built-in and injected calendars
  - Zero at origin, monotonicity, purity
  - Input validation (malformed dates, inverted ranges, bad policies)
  - Coverage warning
"""

from datetime import date, datetime

import numpy as np
import pytest

from leavetool.accrual import (
    AccrualError,
    AccrualPolicy,
    InvalidDateError,
    InvertedRangeError,
    LeaveBreakdown,
    Tenure,
    calculate_total_leave,
    leave_breakdown,
    tenure,
)
from leavetool.calendar import HolidayCalendar, default_calendar


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def no_holidays():
    return HolidayCalendar()


@pytest.fixture
def policy():
    return AccrualPolicy()


# ── Tenure ────────────────────────────────────────────────────────────────────

class TestTenure:

    def test_same_day(self):
        assert tenure("2024-05-10", "2024-05-10") == Tenure(0, 0, 0)

    def test_exact_anniversary(self):
        assert tenure("2024-01-15", "2025-01-15")[:2] == (1, 0)

    def test_day_before_anniversary(self):
        assert tenure("2024-01-15", "2025-01-14")[:2] == (0, 11)

    def test_partial_month_not_counted(self):
        assert tenure("2024-01-15", "2024-12-14")[:2] == (0, 10)
        assert tenure("2024-01-15", "2024-12-15")[:2] == (0, 11)

    def test_month_end_join(self):
        assert tenure("2024-01-31", "2024-02-29")[:2] == (0, 0)
        assert tenure("2024-01-31", "2024-03-01")[:2] == (0, 1)

    def test_leap_day_join(self):
        assert tenure("2024-02-29", "2025-02-28")[:2] == (0, 11)
        assert tenure("2024-02-29", "2025-03-01")[:2] == (1, 0)

    @pytest.mark.parametrize(
        "join, cutoff, expected",
        [
            ("2024-01-15", "2024-12-14", (0, 10, 29)),
            ("2024-01-15", "2025-01-20", (1, 0, 5)),
            ("2024-01-31", "2024-02-29", (0, 0, 29)),
            ("2024-01-31", "2024-03-01", (0, 1, 1)),
            ("2024-02-29", "2025-02-28", (0, 11, 30)),
            ("2024-02-29", "2025-03-01", (1, 0, 1)),
        ],
    )
    def test_leftover_days(self, join, cutoff, expected):
        assert tenure(join, cutoff) == Tenure(*expected)

    def test_leftover_days_below_a_month(self):
        for day in range(1, 32):
            assert 0 <= tenure("2023-01-31", date(2024, 3, day)).days < 31

    def test_many_years(self):
        assert tenure("2001-07-19", "2025-07-18")[:2] == (23, 11)

    def test_inverted_raises(self):
        with pytest.raises(InvertedRangeError):
            tenure("2025-01-02", "2025-01-01")


# ── First-year component ──────────────────────────────────────────────────────

class TestFirstYear:

    def test_one_day_per_completed_month(self, no_holidays):
        b = leave_breakdown("2024-01-15", "2024-06-20", no_holidays)
        assert b == LeaveBreakdown(first_year=5, yearly=0, holiday=0, total=5)

    def test_less_than_a_month(self, no_holidays):
        assert calculate_total_leave("2024-01-15", "2024-02-14", no_holidays) == 0

    def test_eleven_months_is_the_cap(self, no_holidays):
        b = leave_breakdown("2024-01-15", "2025-01-14", no_holidays)
        assert b.first_year == 11
        assert b.yearly == 0

    def test_locked_after_first_anniversary(self, no_holidays):
        for cutoff in ["2025-01-15", "2026-07-01", "2040-01-01"]:
            assert leave_breakdown("2024-01-15", cutoff, no_holidays).first_year == 11

    def test_custom_cap(self, no_holidays):
        b = leave_breakdown("2024-01-15", "2024-12-15", no_holidays, AccrualPolicy(first_year_cap=6))
        assert b.first_year == 6

    def test_policy_never_exceeds_cap(self, policy):
        for months in range(12):
            assert policy.first_year(Tenure(0, months, 0)) == min(months, 11)


# ── Yearly component ──────────────────────────────────────────────────────────

class TestYearly:

    def test_three_years(self, no_holidays):
        # 15 + 15 + 16
        b = leave_breakdown("2020-01-01", "2023-01-01", no_holidays)
        assert b == LeaveBreakdown(first_year=11, yearly=46, holiday=0, total=57)

    def test_three_years_with_builtin_calendar(self):
        # The built-in table starts in 2024, so no holiday falls in range.
        assert calculate_total_leave("2020-01-01", "2023-01-01") == 57

    @pytest.mark.parametrize(
        "year, grant",
        [(1, 15), (2, 15), (3, 16), (4, 16), (5, 17), (19, 24), (20, 24), (21, 25), (25, 25), (60, 25)],
    )
    def test_grant_per_year(self, policy, year, grant):
        assert policy.yearly_grant(year) == grant

    def test_grant_never_exceeds_cap(self, policy):
        assert max(policy.yearly_grant(i) for i in range(1, 200)) == 25

    def test_cap_saturation_sum(self, policy):
        # 2 * (15 + ... + 24) + 10 * 25
        assert policy.yearly(30) == 640

    def test_sum_matches_per_year_grants(self, policy):
        for years in range(0, 40):
            assert policy.yearly(years) == sum(policy.yearly_grant(i) for i in range(1, years + 1))

    def test_thirty_years_total(self, no_holidays):
        assert calculate_total_leave("1990-01-01", "2020-01-01", no_holidays) == 11 + 640

    def test_custom_policy(self, no_holidays):
        p = AccrualPolicy(base_grant=10, bonus_every=1, max_grant=12)
        # 10 + 11 + 12 + 12
        assert leave_breakdown("2020-03-01", "2024-03-01", no_holidays, p).yearly == 45


# ── Holiday component ─────────────────────────────────────────────────────────

class TestHolidayBonus:

    def test_first_anniversary_window_builtin(self):
        # 11 normal days in 2024 after Jan 15, New Year 2025, Chuseok Tue+Wed 2024.
        b = leave_breakdown("2024-01-15", "2025-01-14")
        assert b == LeaveBreakdown(first_year=11, yearly=0, holiday=14, total=25)

    def test_full_table(self):
        b = leave_breakdown("2024-01-01", "2026-12-31")
        # 2 completed years: 11 first-year, 15 + 15 yearly
        assert b == LeaveBreakdown(first_year=11, yearly=30, holiday=42, total=83)

    def test_saturday_major_does_not_count(self):
        assert calculate_total_leave("2024-02-10", "2024-02-10") == 0

    def test_tuesday_major_counts(self):
        assert calculate_total_leave("2024-09-17", "2024-09-17") == 1

    def test_custom_rest_days(self):
        weekend = default_calendar().with_rest_weekdays("Sat", "Sun")
        assert calculate_total_leave("2024-02-01", "2024-02-28") == 0
        assert calculate_total_leave("2024-02-01", "2024-02-28", weekend) == 2

    def test_injected_calendar(self):
        cal = HolidayCalendar(normal=["2030-05-01"], major=["2030-05-07"], rest_weekdays=["Tue"])
        assert leave_breakdown("2030-04-01", "2030-05-31", cal).holiday == 2


# ── Properties ────────────────────────────────────────────────────────────────

class TestInvariants:

    @pytest.mark.parametrize(
        "day, expected",
        [
            ("2024-07-01", 0),   # ordinary day
            ("2024-01-01", 1),   # normal holiday
            ("2024-09-17", 1),   # major holiday on a Tuesday
            ("2024-09-16", 0),   # major holiday on a Monday
        ],
    )
    def test_zero_at_origin(self, day, expected):
        assert calculate_total_leave(day, day) == expected

    def test_monotone_in_cutoff(self):
        cutoffs = np.arange(
            np.datetime64("2023-06-15"), np.datetime64("2026-12-31"), dtype="datetime64[D]"
        )
        totals = np.array([calculate_total_leave("2023-06-15", c.item()) for c in cutoffs])
        assert totals[0] == 0
        assert np.all(np.diff(totals) >= 0)

    def test_non_negative(self, no_holidays):
        rng = np.random.default_rng(3)
        for offset in rng.integers(0, 20_000, size=50):
            cutoff = date(1990, 1, 1).toordinal() + int(offset)
            assert calculate_total_leave("1990-01-01", date.fromordinal(cutoff), no_holidays) >= 0

    def test_pure(self):
        first = leave_breakdown("2022-11-30", "2025-10-08")
        second = leave_breakdown("2022-11-30", "2025-10-08")
        assert first == second

    def test_default_cutoff_is_today(self, no_holidays):
        assert calculate_total_leave("2015-03-01", None, no_holidays) == calculate_total_leave(
            "2015-03-01", date.today(), no_holidays
        )

    def test_accepts_date_and_datetime(self):
        assert calculate_total_leave(date(2024, 1, 15), datetime(2025, 1, 14, 18, 30)) == 25

    def test_result_is_int(self):
        assert isinstance(calculate_total_leave("2024-01-15", "2025-01-14"), int)


# ── Validation ────────────────────────────────────────────────────────────────

class TestValidation:

    @pytest.mark.parametrize("bad", ["2024-02-30", "15/01/2024", "", None])
    def test_invalid_join_date(self, bad):
        with pytest.raises(InvalidDateError):
            calculate_total_leave(bad, "2025-01-01")

    def test_invalid_cutoff(self):
        with pytest.raises(InvalidDateError):
            calculate_total_leave("2024-01-01", "2025-02-29")

    def test_inverted_range(self):
        with pytest.raises(InvertedRangeError) as info:
            calculate_total_leave("2025-01-02", "2025-01-01")
        assert info.value.join_date == date(2025, 1, 2)
        assert info.value.cutoff_date == date(2025, 1, 1)

    def test_errors_are_value_errors(self):
        assert issubclass(InvertedRangeError, AccrualError)
        assert issubclass(InvertedRangeError, ValueError)
        assert issubclass(InvalidDateError, ValueError)

    @pytest.mark.parametrize(
        "kwargs",
        [{"bonus_every": 0}, {"base_grant": 15, "max_grant": 14}, {"first_year_cap": -1}],
    )
    def test_bad_policy(self, kwargs):
        with pytest.raises(AccrualError):
            AccrualPolicy(**kwargs)


# ── Logging ───────────────────────────────────────────────────────────────────

class TestLogging:

    def test_warns_past_calendar_coverage(self, caplog):
        calculate_total_leave("2025-01-01", "2027-03-01")
        assert "runs past holiday calendar '2024-2026'" in caplog.text

    def test_silent_within_coverage(self, caplog):
        calculate_total_leave("2025-01-01", "2026-03-01")
        assert "runs past" not in caplog.text
