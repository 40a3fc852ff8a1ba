from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from rental_billing.frequency import BillingFrequency
from rental_billing.payment_calculations import adjust_amount_for_frequency

ZERO = Decimal("0")
ONE = Decimal("1")


@dataclass(frozen=True)
class PriceTier:
    """Price for renting a room for ``duration`` months."""

    id: str
    room_id: str
    duration: int
    price: Decimal
    is_default: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "price", _coerce_amount(self.price))


def find_appropriate_room_price_tier(
    price_tiers: Iterable[PriceTier],
    lease_duration: int,
) -> Optional[PriceTier]:
    """Pick the tier to bill a lease of ``lease_duration`` months with.

    Preference order:
    1. A tier whose duration matches exactly, default or not.
    2. The first tier flagged as default.
    3. The longest tier not exceeding the lease duration, or the shortest
       tier when every tier is longer than the lease.

    Returns None when there are no tiers.
    """
    tiers = list(price_tiers)
    if not tiers:
        return None

    for tier in tiers:
        if tier.duration == lease_duration:
            return tier

    for tier in tiers:
        if tier.is_default:
            return tier

    sorted_tiers = sorted(tiers, key=lambda tier: tier.duration)
    closest_tier = sorted_tiers[0]
    for tier in sorted_tiers:
        if tier.duration > lease_duration:
            break
        closest_tier = tier
    return closest_tier


def calculate_price_with_frequency(
    price_tier: Optional[PriceTier],
    frequency: BillingFrequency | str,
    lease_duration: int,
) -> Decimal:
    if price_tier is None:
        return ZERO
    monthly_price = _adjusted_monthly_price(price_tier, lease_duration)
    return adjust_amount_for_frequency(monthly_price, frequency)


def calculate_total_lease_price(
    price_tier: Optional[PriceTier],
    lease_duration: int,
) -> Decimal:
    if price_tier is None:
        return ZERO
    return _adjusted_monthly_price(price_tier, lease_duration) * lease_duration


def _adjusted_monthly_price(price_tier: PriceTier, lease_duration: int) -> Decimal:
    monthly_price = price_tier.price / price_tier.duration
    if monthly_price == ZERO:
        return ZERO
    # Discount embedded in the tier price relative to a linear monthly rate.
    # With monthly_price derived from the same tier this is zero up to rounding.
    discount = ONE - price_tier.price / (monthly_price * price_tier.duration)
    if lease_duration == price_tier.duration:
        return monthly_price
    return monthly_price * (ONE - discount)


def _coerce_amount(amount: Decimal | int | float | str) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    return Decimal(str(amount))
