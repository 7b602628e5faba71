"""
Rental pricing
==============

Formula
-------
Total = Daily_Price x Days,  Days = max(1, ceil((end - start) / 1 day))

Partial days are billed as full days; a booking shorter than a day is
billed as one day.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta

from .errors import InvalidRange

ONE_DAY = timedelta(days=1)


def validate_range(start_date: datetime, end_date: datetime) -> None:
    if end_date <= start_date:
        raise InvalidRange("End date must be after start date")


def rental_days(start_date: datetime, end_date: datetime) -> int:
    return max(1, math.ceil((end_date - start_date) / ONE_DAY))


def total_amount(daily_price: int, start_date: datetime, end_date: datetime) -> int:
    return daily_price * rental_days(start_date, end_date)
