"""Unit tests for rental pricing."""

from datetime import datetime, timedelta

import pytest

from rentals.domain.errors import InvalidRange
from rentals.domain.pricing import rental_days, total_amount, validate_range

JAN_1 = datetime(2025, 1, 1)


class TestRentalDays:
    def test_whole_days(self):
        assert rental_days(JAN_1, datetime(2025, 1, 3)) == 2

    def test_partial_day_rounds_up(self):
        assert rental_days(JAN_1, JAN_1 + timedelta(days=2, hours=1)) == 3

    def test_short_rental_billed_as_one_day(self):
        assert rental_days(JAN_1, JAN_1 + timedelta(hours=3)) == 1

    def test_floor_of_one_even_for_empty_range(self):
        assert rental_days(JAN_1, JAN_1) == 1


class TestTotalAmount:
    def test_price_times_days(self):
        # 50/day for Jan 1 -> Jan 3
        assert total_amount(50, JAN_1, datetime(2025, 1, 3)) == 100

    def test_one_hour_costs_one_day(self):
        assert total_amount(70, JAN_1, JAN_1 + timedelta(hours=1)) == 70

    def test_week(self):
        assert total_amount(35, JAN_1, JAN_1 + timedelta(days=7)) == 245


class TestValidateRange:
    def test_end_after_start_ok(self):
        validate_range(JAN_1, JAN_1 + timedelta(minutes=1))

    def test_equal_dates_rejected(self):
        with pytest.raises(InvalidRange):
            validate_range(JAN_1, JAN_1)

    def test_end_before_start_rejected(self):
        with pytest.raises(InvalidRange):
            validate_range(datetime(2025, 1, 3), JAN_1)
