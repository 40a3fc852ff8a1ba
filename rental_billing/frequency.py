from __future__ import annotations

from enum import Enum
from typing import Iterable, Tuple


class InvalidConfiguration(ValueError):
    """Raised when a billing frequency or its custom days are unusable."""


class BillingFrequency(str, Enum):
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    BIWEEKLY = "BIWEEKLY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    SEMIANNUAL = "SEMIANNUAL"
    ANNUAL = "ANNUAL"
    CUSTOM = "CUSTOM"


FIXED_DAY_INTERVALS = {
    BillingFrequency.DAILY: 1,
    BillingFrequency.WEEKLY: 7,
    BillingFrequency.BIWEEKLY: 14,
}
MONTH_INTERVALS = {
    BillingFrequency.MONTHLY: 1,
    BillingFrequency.QUARTERLY: 3,
    BillingFrequency.SEMIANNUAL: 6,
    BillingFrequency.ANNUAL: 12,
}

# Spellings seen in stored property settings, keyed after normalization.
FREQUENCY_ALIASES = {
    "byweekly": BillingFrequency.BIWEEKLY,
    "fortnightly": BillingFrequency.BIWEEKLY,
    "semiannually": BillingFrequency.SEMIANNUAL,
    "halfyearly": BillingFrequency.SEMIANNUAL,
    "annually": BillingFrequency.ANNUAL,
    "yearly": BillingFrequency.ANNUAL,
}

MIN_PAYMENT_DAY = 1
MAX_PAYMENT_DAY = 31


def parse_frequency(value: BillingFrequency | str) -> BillingFrequency:
    if isinstance(value, BillingFrequency):
        return value
    if not isinstance(value, str):
        raise InvalidConfiguration(f"Unsupported billing frequency: {value!r}")
    normalized = _normalize_frequency(value)
    for frequency in BillingFrequency:
        if normalized == frequency.value.lower():
            return frequency
    try:
        return FREQUENCY_ALIASES[normalized]
    except KeyError as exc:
        raise InvalidConfiguration(f"Unsupported billing frequency: {value!r}") from exc


def _normalize_frequency(value: str) -> str:
    return "".join(ch for ch in value.strip().lower() if ch.isalnum())


def validate_custom_payment_days(days: Iterable[int] | None) -> Tuple[int, ...]:
    """Return the custom days sorted and deduplicated.

    CUSTOM billing has no sensible default, so a missing or empty list is a
    configuration error rather than a fallback to monthly.
    """
    if not days:
        raise InvalidConfiguration(
            "Custom payment days must be provided for CUSTOM frequency."
        )
    normalized = set()
    for day in days:
        if isinstance(day, bool) or not isinstance(day, int):
            raise InvalidConfiguration(f"Custom payment day must be an integer: {day!r}")
        if not MIN_PAYMENT_DAY <= day <= MAX_PAYMENT_DAY:
            raise InvalidConfiguration(
                f"Custom payment day must be between {MIN_PAYMENT_DAY} and {MAX_PAYMENT_DAY}."
            )
        normalized.add(day)
    return tuple(sorted(normalized))
