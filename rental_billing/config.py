from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from rental_billing.frequency import (
    MAX_PAYMENT_DAY,
    MIN_PAYMENT_DAY,
    BillingFrequency,
    InvalidConfiguration,
    parse_frequency,
)

logger = logging.getLogger(__name__)

FALLBACK_FREQUENCY = BillingFrequency.MONTHLY
FALLBACK_DUE_DATE_OFFSET = 5
FALLBACK_GRACE_DAYS = 3


@dataclass(frozen=True)
class BillingDefaults:
    payment_frequency: BillingFrequency = FALLBACK_FREQUENCY
    due_date_offset: int = FALLBACK_DUE_DATE_OFFSET
    grace_days: int = FALLBACK_GRACE_DAYS


def get_default_frequency() -> BillingFrequency:
    raw = os.getenv("RENTAL_BILLING_DEFAULT_FREQUENCY", FALLBACK_FREQUENCY.value)
    try:
        frequency = parse_frequency(raw)
    except InvalidConfiguration:
        logger.warning("Ignoring invalid RENTAL_BILLING_DEFAULT_FREQUENCY=%r", raw)
        return FALLBACK_FREQUENCY
    if frequency == BillingFrequency.CUSTOM:
        # CUSTOM needs per-property days, so it cannot be a global default.
        logger.warning("RENTAL_BILLING_DEFAULT_FREQUENCY cannot be CUSTOM")
        return FALLBACK_FREQUENCY
    return frequency


def get_default_due_date_offset() -> int:
    value = _read_int("RENTAL_BILLING_DUE_DATE_OFFSET", FALLBACK_DUE_DATE_OFFSET)
    if not MIN_PAYMENT_DAY <= value <= MAX_PAYMENT_DAY:
        logger.warning("Ignoring out of range RENTAL_BILLING_DUE_DATE_OFFSET=%d", value)
        return FALLBACK_DUE_DATE_OFFSET
    return value


def get_default_grace_days() -> int:
    value = _read_int("RENTAL_BILLING_GRACE_DAYS", FALLBACK_GRACE_DAYS)
    if value < 0:
        logger.warning("Ignoring negative RENTAL_BILLING_GRACE_DAYS=%d", value)
        return FALLBACK_GRACE_DAYS
    return value


def load_defaults() -> BillingDefaults:
    return BillingDefaults(
        payment_frequency=get_default_frequency(),
        due_date_offset=get_default_due_date_offset(),
        grace_days=get_default_grace_days(),
    )


def _read_int(name: str, fallback: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return fallback
    try:
        return int(raw.strip())
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r", name, raw)
        return fallback


DEFAULTS = load_defaults()
