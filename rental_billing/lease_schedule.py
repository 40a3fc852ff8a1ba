"""
Lease payment scheduling.

Turns the billing periods of a lease into payments with due dates, the way
the property's due-date setting asks for them. The current date is always
passed in as ``today`` so schedules are reproducible.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Iterable, List, Optional

from rental_billing.config import DEFAULTS
from rental_billing.frequency import (
    MAX_PAYMENT_DAY,
    MIN_PAYMENT_DAY,
    BillingFrequency,
    InvalidConfiguration,
)
from rental_billing.payment_calculations import (
    adjust_amount_for_frequency,
    calculate_prorated_amount,
    generate_payment_periods,
)
from rental_billing.payment_calendar import (
    add_days,
    add_months,
    calculate_next_payment_date,
    days_in_month,
)

logger = logging.getLogger(__name__)


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"


@dataclass(frozen=True)
class ScheduledPayment:
    billing_cycle_start: date
    billing_cycle_end: date
    amount: Decimal
    due_date: date
    status: PaymentStatus = PaymentStatus.PENDING
    paid_on: Optional[date] = None


def validate_due_date_offset(due_date_offset: int) -> int:
    if isinstance(due_date_offset, bool) or not isinstance(due_date_offset, int):
        raise InvalidConfiguration(f"Due date offset must be an integer: {due_date_offset!r}")
    if not MIN_PAYMENT_DAY <= due_date_offset <= MAX_PAYMENT_DAY:
        raise InvalidConfiguration(
            f"Due date offset must be between {MIN_PAYMENT_DAY} and {MAX_PAYMENT_DAY}."
        )
    return due_date_offset


def resolve_due_date(
    period_start: date,
    due_date_offset: int,
    today: date,
    grace_days: int = DEFAULTS.grace_days,
) -> date:
    """Due date for a recurring period starting at ``period_start``.

    The payment is due on day ``due_date_offset`` of the period's month, or of
    the next month when that day comes before the period starts. A period in
    the current month whose due date has already passed gets ``grace_days``
    from today instead of being created overdue.
    """
    validate_due_date_offset(due_date_offset)
    due_date = _day_of_month(period_start, due_date_offset)
    if due_date < period_start:
        due_date = add_months(period_start, 1, due_date_offset)
    if due_date < today and _same_month(period_start, today):
        due_date = add_days(today, grace_days)
    return due_date


def build_lease_payment_schedule(
    start_date: date,
    end_date: date,
    rent_amount: Decimal | int | float | str,
    frequency: BillingFrequency | str,
    *,
    due_date_offset: int,
    today: date,
    custom_payment_days: Iterable[int] | None = None,
    first_payment_paid: bool = False,
    grace_days: int = DEFAULTS.grace_days,
) -> List[ScheduledPayment]:
    validate_due_date_offset(due_date_offset)
    periods = generate_payment_periods(
        start_date, end_date, rent_amount, frequency, custom_payment_days
    )
    payments: List[ScheduledPayment] = []
    for index, period in enumerate(periods):
        if index == 0:
            # The first payment is collected at signing.
            status = PaymentStatus.PAID if first_payment_paid else PaymentStatus.PENDING
            payments.append(
                ScheduledPayment(
                    billing_cycle_start=period.start_date,
                    billing_cycle_end=period.end_date,
                    amount=period.amount,
                    due_date=today,
                    status=status,
                    paid_on=today if first_payment_paid else None,
                )
            )
            continue
        payments.append(
            ScheduledPayment(
                billing_cycle_start=period.start_date,
                billing_cycle_end=period.end_date,
                amount=period.amount,
                due_date=resolve_due_date(
                    period.start_date, due_date_offset, today, grace_days
                ),
            )
        )
    logger.debug(
        "Scheduled %d lease payments from %s to %s", len(payments), start_date, end_date
    )
    return payments


def build_billing_cycle(
    base_amount: Decimal | int | float | str,
    frequency: BillingFrequency | str,
    *,
    due_date_offset: int,
    cycle_start: date,
    cycle_end: Optional[date] = None,
    custom_payment_days: Iterable[int] | None = None,
    prorate: bool = False,
) -> ScheduledPayment:
    """A single pending invoice for the cycle beginning at ``cycle_start``.

    Without ``cycle_end`` the cycle runs to the next payment date. Prorated
    cycles charge the base amount for the days covered; otherwise the monthly
    base amount is converted to the billing frequency. Due ``due_date_offset``
    days after the cycle starts.
    """
    validate_due_date_offset(due_date_offset)
    next_payment_date = calculate_next_payment_date(
        cycle_start, frequency, custom_payment_days
    )
    billing_cycle_end = cycle_end or next_payment_date
    if prorate:
        amount = calculate_prorated_amount(
            base_amount, cycle_start, billing_cycle_end, frequency
        )
    else:
        amount = adjust_amount_for_frequency(base_amount, frequency)
    return ScheduledPayment(
        billing_cycle_start=cycle_start,
        billing_cycle_end=billing_cycle_end,
        amount=amount,
        due_date=add_days(cycle_start, due_date_offset),
    )


def next_rent_due_date(today: date, due_date_offset: int) -> date:
    validate_due_date_offset(due_date_offset)
    due_date = _day_of_month(today, due_date_offset)
    if due_date < today:
        due_date = add_months(today, 1, due_date_offset)
    return due_date


def _day_of_month(value: date, day: int) -> date:
    return value.replace(day=min(day, days_in_month(value)))


def _same_month(first: date, second: date) -> bool:
    return (first.year, first.month) == (second.year, second.month)
