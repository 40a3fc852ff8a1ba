from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Iterator, List

from rental_billing.frequency import (
    BillingFrequency,
    parse_frequency,
    validate_custom_payment_days,
)
from rental_billing.payment_calendar import (
    calculate_next_payment_date,
    days_between,
    days_in_period,
)

logger = logging.getLogger(__name__)

DAYS_PER_MONTH_APPROX = Decimal("30")
MONTHS_PER_YEAR = Decimal("12")
WEEKS_PER_YEAR = Decimal("52")
FORTNIGHTS_PER_YEAR = Decimal("26")


@dataclass(frozen=True)
class BillingPeriod:
    start_date: date
    end_date: date
    amount: Decimal


def calculate_prorated_amount(
    base_amount: Decimal | int | float | str,
    start_date: date,
    end_date: date,
    frequency: BillingFrequency | str,
) -> Decimal:
    """Scale ``base_amount`` by the share of the period actually covered.

    The period length is anchored at ``start_date``. Reversed ranges are not
    rejected and produce a negative amount.
    """
    total_days = days_in_period(start_date, frequency)
    actual_days = days_between(start_date, end_date)
    return _coerce_amount(base_amount) * Decimal(actual_days) / Decimal(total_days)


def adjust_amount_for_frequency(
    monthly_amount: Decimal | int | float | str,
    frequency: BillingFrequency | str,
) -> Decimal:
    normalized_frequency = parse_frequency(frequency)
    amount = _coerce_amount(monthly_amount)
    if normalized_frequency == BillingFrequency.DAILY:
        return amount / DAYS_PER_MONTH_APPROX
    if normalized_frequency == BillingFrequency.WEEKLY:
        return amount * MONTHS_PER_YEAR / WEEKS_PER_YEAR
    if normalized_frequency == BillingFrequency.BIWEEKLY:
        return amount * MONTHS_PER_YEAR / FORTNIGHTS_PER_YEAR
    if normalized_frequency == BillingFrequency.QUARTERLY:
        return amount * 3
    if normalized_frequency == BillingFrequency.SEMIANNUAL:
        return amount * 6
    if normalized_frequency == BillingFrequency.ANNUAL:
        return amount * 12
    # MONTHLY, and CUSTOM which bills on a monthly base.
    return amount


def iter_payment_periods(
    start_date: date,
    end_date: date,
    base_amount: Decimal | int | float | str,
    frequency: BillingFrequency | str,
    custom_payment_days: Iterable[int] | None = None,
) -> Iterator[BillingPeriod]:
    # Validate eagerly so a bad configuration fails at the call site, not on
    # the first next().
    normalized_frequency = parse_frequency(frequency)
    days = None
    if normalized_frequency == BillingFrequency.CUSTOM:
        days = validate_custom_payment_days(custom_payment_days)
    amount = _coerce_amount(base_amount)
    return _walk_periods(start_date, end_date, amount, normalized_frequency, days)


def _walk_periods(
    start_date: date,
    end_date: date,
    base_amount: Decimal,
    frequency: BillingFrequency,
    custom_payment_days: tuple[int, ...] | None,
) -> Iterator[BillingPeriod]:
    current_start = start_date
    while current_start < end_date:
        period_end = calculate_next_payment_date(
            current_start, frequency, custom_payment_days
        )
        actual_end = min(period_end, end_date)
        yield BillingPeriod(
            start_date=current_start,
            end_date=actual_end,
            amount=calculate_prorated_amount(
                base_amount, current_start, actual_end, frequency
            ),
        )
        current_start = period_end


def generate_payment_periods(
    start_date: date,
    end_date: date,
    base_amount: Decimal | int | float | str,
    frequency: BillingFrequency | str,
    custom_payment_days: Iterable[int] | None = None,
) -> List[BillingPeriod]:
    periods = list(
        iter_payment_periods(
            start_date, end_date, base_amount, frequency, custom_payment_days
        )
    )
    logger.debug(
        "Generated %d %s payment periods from %s to %s",
        len(periods),
        parse_frequency(frequency).value,
        start_date,
        end_date,
    )
    return periods


def _coerce_amount(amount: Decimal | int | float | str) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    return Decimal(str(amount))
