"""
Tests for waiting-period eligibility.
"""

from datetime import date, datetime

import pytest
from policy_diff.eligibility.waiting_period import WaitingPeriodChecker


class TestWaitingPeriodChecker:
    """Test suite for WaitingPeriodChecker."""

    @pytest.fixture
    def checker(self):
        return WaitingPeriodChecker()

    def test_eligible_after_waiting_period(self, checker):
        result = checker.check(date(2024, 1, 1), date(2024, 3, 1), "hospitalization")

        assert result.eligible
        assert result.required_days == 30
        assert result.remaining_days == 0
        assert "Hospitalization" in result.message

    def test_not_eligible_with_remaining_days(self, checker):
        result = checker.check("2024-01-01", "2024-09-01", "maternity")

        assert not result.eligible
        assert result.required_days == 730
        assert result.days_elapsed == 244
        assert result.remaining_days == 486
        assert "486 day(s) remaining" in result.message

    def test_boundary_day_is_eligible(self, checker):
        result = checker.check(date(2024, 1, 1), date(2024, 3, 31), "surgery")

        assert result.days_elapsed == 90
        assert result.eligible

    def test_treatment_before_start_is_invalid(self, checker):
        result = checker.check(date(2024, 5, 1), date(2024, 4, 1), "general")

        assert not result.eligible
        assert result.message.startswith("Invalid dates")

    def test_unknown_type_uses_default_period(self, checker):
        result = checker.check(date(2024, 1, 1), date(2024, 1, 10), "physiotherapy")

        assert result.required_days == 30
        assert result.label == "physiotherapy"
        assert result.remaining_days == 21

    def test_accepts_datetimes(self, checker):
        result = checker.check(datetime(2020, 1, 1, 8, 30), datetime(2023, 1, 2, 23, 0), "pre-existing")

        assert result.eligible
        assert result.label == "Pre-Existing Condition"

    def test_accepts_iso_datetime_strings(self, checker):
        result = checker.check("2024-01-01T10:00", "2024-01-31T09:30:00", "general")

        assert result.days_elapsed == 30
        assert result.eligible

    def test_invalid_date_string(self, checker):
        with pytest.raises(ValueError):
            checker.check("01/02/2024", "2024-03-01", "general")

    def test_to_dict(self, checker):
        data = checker.check("2024-01-01", "2024-07-01", "dental").to_dict()

        assert data['eligible'] is True
        assert data['required_days'] == 180
