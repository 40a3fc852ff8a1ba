from __future__ import annotations

import math
from calendar import isleap, monthrange
from datetime import date, timedelta
from typing import Iterable, List

from rental_billing.frequency import (
    FIXED_DAY_INTERVALS,
    MONTH_INTERVALS,
    BillingFrequency,
    parse_frequency,
    validate_custom_payment_days,
)

ONE_DAY = timedelta(days=1)
QUARTER_MONTHS = 3
HALF_YEAR_MONTHS = 6


def calculate_next_payment_date(
    current_date: date,
    frequency: BillingFrequency | str,
    custom_payment_days: Iterable[int] | None = None,
) -> date:
    normalized_frequency = parse_frequency(frequency)
    if normalized_frequency in FIXED_DAY_INTERVALS:
        return current_date + timedelta(days=FIXED_DAY_INTERVALS[normalized_frequency])
    if normalized_frequency in MONTH_INTERVALS:
        return add_months(
            current_date, MONTH_INTERVALS[normalized_frequency], current_date.day
        )
    days = validate_custom_payment_days(custom_payment_days)
    return _next_custom_payment_date(current_date, days)


def _next_custom_payment_date(current_date: date, days: tuple[int, ...]) -> date:
    last_day = days_in_month(current_date)
    if current_date.day < last_day:
        for day in days:
            if day > current_date.day:
                return current_date.replace(day=min(day, last_day))
    return add_months(current_date, 1, days[0])


def upcoming_payment_dates(
    start_date: date,
    frequency: BillingFrequency | str,
    custom_payment_days: Iterable[int] | None = None,
    count: int = 12,
) -> List[date]:
    """Next ``count`` payment dates strictly after ``start_date``."""
    if count < 0:
        raise ValueError("count must be zero or greater.")
    dates: List[date] = []
    current_date = start_date
    for _ in range(count):
        current_date = calculate_next_payment_date(
            current_date, frequency, custom_payment_days
        )
        dates.append(current_date)
    return dates


def days_in_period(period_date: date, frequency: BillingFrequency | str) -> int:
    normalized_frequency = parse_frequency(frequency)
    if normalized_frequency in FIXED_DAY_INTERVALS:
        return FIXED_DAY_INTERVALS[normalized_frequency]
    if normalized_frequency in (BillingFrequency.MONTHLY, BillingFrequency.CUSTOM):
        return days_in_month(period_date)
    if normalized_frequency == BillingFrequency.QUARTERLY:
        return _days_in_month_block(period_date, QUARTER_MONTHS)
    if normalized_frequency == BillingFrequency.SEMIANNUAL:
        return _days_in_month_block(period_date, HALF_YEAR_MONTHS)
    return days_in_year(period_date.year)


def days_in_month(period_date: date) -> int:
    return monthrange(period_date.year, period_date.month)[1]


def days_in_year(year: int) -> int:
    return 366 if isleap(year) else 365


def _days_in_month_block(period_date: date, block_months: int) -> int:
    # Blocks are aligned to the calendar year: Jan/Apr/Jul/Oct for quarters.
    first_month = (period_date.month - 1) // block_months * block_months + 1
    return sum(
        monthrange(period_date.year, month)[1]
        for month in range(first_month, first_month + block_months)
    )


def days_between(start_date: date, end_date: date) -> int:
    """Whole days from ``start_date`` to ``end_date``, partial days rounded up."""
    return math.ceil((end_date - start_date) / ONE_DAY)


def add_days(start_date: date, days: int) -> date:
    return start_date + timedelta(days=days)


def add_months(start_date: date, months: int, anchor_day: int) -> date:
    total_month = start_date.month - 1 + months
    year = start_date.year + total_month // 12
    month = total_month % 12 + 1
    last_day = monthrange(year, month)[1]
    day = min(anchor_day, last_day)
    return start_date.replace(year=year, month=month, day=day)
