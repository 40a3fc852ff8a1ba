from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Iterable, List

from pydantic import BaseModel

from rental_billing.config import DEFAULTS
from rental_billing.frequency import (
    BillingFrequency,
    parse_frequency,
    validate_custom_payment_days,
)
from rental_billing.lease_schedule import (
    PaymentStatus,
    ScheduledPayment,
    validate_due_date_offset,
)
from rental_billing.payment_calculations import BillingPeriod
from rental_billing.payment_calendar import add_months
from rental_billing.price_tiers import PriceTier


class BillingSettingsPayload(BaseModel):
    payment_frequency: str | None = None
    custom_payment_days: list[int] = []
    due_date_offset: int | None = None

    @classmethod
    def validate_payload(
        cls, payload: "BillingSettingsPayload"
    ) -> "BillingSettingsPayload":
        frequency = parse_frequency(
            payload.payment_frequency or DEFAULTS.payment_frequency
        )
        payload.payment_frequency = frequency.value
        if frequency == BillingFrequency.CUSTOM:
            payload.custom_payment_days = list(
                validate_custom_payment_days(payload.custom_payment_days)
            )
        else:
            payload.custom_payment_days = []
        if payload.due_date_offset is None:
            payload.due_date_offset = DEFAULTS.due_date_offset
        validate_due_date_offset(payload.due_date_offset)
        return payload

    @property
    def frequency(self) -> BillingFrequency:
        return parse_frequency(self.payment_frequency or DEFAULTS.payment_frequency)


class PriceTierPayload(BaseModel):
    id: str
    room_id: str
    duration: int
    price: Decimal
    is_default: bool = False

    @classmethod
    def validate_payload(cls, payload: "PriceTierPayload") -> "PriceTierPayload":
        if payload.duration < 1:
            raise ValueError("Duration must be at least 1 month.")
        if payload.price < 0:
            raise ValueError("Price must be greater than or equal to 0.")
        return payload

    def to_price_tier(self) -> PriceTier:
        return PriceTier(
            id=self.id,
            room_id=self.room_id,
            duration=self.duration,
            price=self.price,
            is_default=self.is_default,
        )


def validate_tier_set(payloads: Iterable[PriceTierPayload]) -> List[PriceTier]:
    """Validate a room's tiers and convert them for the tier selector."""
    tiers: List[PriceTier] = []
    default_rooms: set[str] = set()
    for payload in payloads:
        PriceTierPayload.validate_payload(payload)
        if payload.is_default:
            if payload.room_id in default_rooms:
                raise ValueError(
                    f"Room {payload.room_id} has more than one default price tier."
                )
            default_rooms.add(payload.room_id)
        tiers.append(payload.to_price_tier())
    return tiers


class LeaseTermsPayload(BaseModel):
    rent_amount: Decimal
    start_date: date
    end_date: date

    @classmethod
    def validate_payload(cls, payload: "LeaseTermsPayload") -> "LeaseTermsPayload":
        if payload.rent_amount <= 0:
            raise ValueError("Rent amount must be greater than zero.")
        if payload.end_date <= payload.start_date:
            raise ValueError("Lease end date must be after the start date.")
        return payload

    def lease_duration_months(self) -> int:
        """Whole months covered by the lease, counting a started month as one."""
        months = (self.end_date.year - self.start_date.year) * 12 + (
            self.end_date.month - self.start_date.month
        )
        if add_months(self.start_date, months, self.start_date.day) < self.end_date:
            months += 1
        return max(months, 1)


class BillingPeriodResponse(BaseModel):
    start_date: date
    end_date: date
    amount: Decimal

    @classmethod
    def from_period(cls, period: BillingPeriod) -> "BillingPeriodResponse":
        return cls(
            start_date=period.start_date,
            end_date=period.end_date,
            amount=period.amount,
        )


class ScheduledPaymentResponse(BaseModel):
    billing_cycle_start: date
    billing_cycle_end: date
    amount: Decimal
    due_date: date
    status: PaymentStatus
    paid_on: date | None = None

    @classmethod
    def from_payment(cls, payment: ScheduledPayment) -> "ScheduledPaymentResponse":
        return cls(
            billing_cycle_start=payment.billing_cycle_start,
            billing_cycle_end=payment.billing_cycle_end,
            amount=payment.amount,
            due_date=payment.due_date,
            status=payment.status,
            paid_on=payment.paid_on,
        )
