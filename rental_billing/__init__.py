from rental_billing.frequency import BillingFrequency, InvalidConfiguration, parse_frequency
from rental_billing.lease_schedule import (
    PaymentStatus,
    ScheduledPayment,
    build_billing_cycle,
    build_lease_payment_schedule,
    next_rent_due_date,
    resolve_due_date,
)
from rental_billing.payment_calculations import (
    BillingPeriod,
    adjust_amount_for_frequency,
    calculate_prorated_amount,
    generate_payment_periods,
    iter_payment_periods,
)
from rental_billing.payment_calendar import (
    calculate_next_payment_date,
    days_between,
    days_in_period,
    upcoming_payment_dates,
)
from rental_billing.price_tiers import (
    PriceTier,
    calculate_price_with_frequency,
    calculate_total_lease_price,
    find_appropriate_room_price_tier,
)

__all__ = [
    "BillingFrequency",
    "BillingPeriod",
    "InvalidConfiguration",
    "PaymentStatus",
    "PriceTier",
    "ScheduledPayment",
    "adjust_amount_for_frequency",
    "build_billing_cycle",
    "build_lease_payment_schedule",
    "calculate_next_payment_date",
    "calculate_price_with_frequency",
    "calculate_prorated_amount",
    "calculate_total_lease_price",
    "days_between",
    "days_in_period",
    "find_appropriate_room_price_tier",
    "generate_payment_periods",
    "iter_payment_periods",
    "next_rent_due_date",
    "parse_frequency",
    "resolve_due_date",
    "upcoming_payment_dates",
]
