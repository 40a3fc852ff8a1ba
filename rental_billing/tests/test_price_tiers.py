import unittest
from decimal import Decimal

from rental_billing.frequency import BillingFrequency
from rental_billing.payment_calculations import adjust_amount_for_frequency
from rental_billing.price_tiers import (
    PriceTier,
    calculate_price_with_frequency,
    calculate_total_lease_price,
    find_appropriate_room_price_tier,
)


class FindPriceTierTests(unittest.TestCase):
    def setUp(self) -> None:
        self.monthly = PriceTier(
            id="tier-1",
            room_id="room-1",
            duration=1,
            price=Decimal("1000000"),
            is_default=True,
        )
        self.half_year = PriceTier(
            id="tier-6",
            room_id="room-1",
            duration=6,
            price=Decimal("5400000"),
        )

    def test_exact_duration_wins_over_default(self) -> None:
        tier = find_appropriate_room_price_tier([self.monthly, self.half_year], 6)

        self.assertIs(tier, self.half_year)

    def test_falls_back_to_default_tier(self) -> None:
        tier = find_appropriate_room_price_tier([self.monthly, self.half_year], 3)

        self.assertIs(tier, self.monthly)

    def test_first_default_wins(self) -> None:
        other_default = PriceTier(
            id="tier-12",
            room_id="room-1",
            duration=12,
            price=Decimal("9600000"),
            is_default=True,
        )

        tier = find_appropriate_room_price_tier([other_default, self.monthly], 3)

        self.assertIs(tier, other_default)

    def test_empty_tiers_return_none(self) -> None:
        self.assertIsNone(find_appropriate_room_price_tier([], 6))

    def test_closest_shorter_tier_without_default(self) -> None:
        tiers = [
            PriceTier(id="t12", room_id="room-2", duration=12, price=Decimal("10800")),
            PriceTier(id="t3", room_id="room-2", duration=3, price=Decimal("3000")),
            PriceTier(id="t6", room_id="room-2", duration=6, price=Decimal("5700")),
        ]

        self.assertEqual(find_appropriate_room_price_tier(tiers, 7).id, "t6")
        self.assertEqual(find_appropriate_room_price_tier(tiers, 12).id, "t12")
        self.assertEqual(find_appropriate_room_price_tier(tiers, 24).id, "t12")

    def test_shortest_tier_when_all_are_longer(self) -> None:
        tiers = [
            PriceTier(id="t6", room_id="room-2", duration=6, price=Decimal("5700")),
            PriceTier(id="t3", room_id="room-2", duration=3, price=Decimal("3000")),
        ]

        self.assertEqual(find_appropriate_room_price_tier(tiers, 2).id, "t3")

    def test_price_is_coerced_to_decimal(self) -> None:
        tier = PriceTier(id="t1", room_id="room-3", duration=1, price=1500.5)

        self.assertEqual(tier.price, Decimal("1500.5"))


class TierPriceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.monthly = PriceTier(
            id="tier-1",
            room_id="room-1",
            duration=1,
            price=Decimal("1000000"),
            is_default=True,
        )
        self.half_year = PriceTier(
            id="tier-6",
            room_id="room-1",
            duration=6,
            price=Decimal("5400000"),
        )

    def test_missing_tier_costs_nothing(self) -> None:
        self.assertEqual(
            calculate_price_with_frequency(None, BillingFrequency.MONTHLY, 12), Decimal("0")
        )
        self.assertEqual(calculate_total_lease_price(None, 12), Decimal("0"))

    def test_monthly_price_from_tier(self) -> None:
        self.assertEqual(
            calculate_price_with_frequency(self.half_year, BillingFrequency.MONTHLY, 6),
            Decimal("900000"),
        )
        self.assertEqual(
            calculate_price_with_frequency(self.half_year, BillingFrequency.QUARTERLY, 6),
            Decimal("2700000"),
        )

    def test_frequency_adjustment_matches_adjuster(self) -> None:
        self.assertEqual(
            calculate_price_with_frequency(self.monthly, "WEEKLY", 1),
            adjust_amount_for_frequency(Decimal("1000000"), BillingFrequency.WEEKLY),
        )

    def test_total_lease_price(self) -> None:
        self.assertEqual(calculate_total_lease_price(self.half_year, 6), Decimal("5400000"))
        self.assertEqual(calculate_total_lease_price(self.half_year, 12), Decimal("10800000"))
        self.assertEqual(calculate_total_lease_price(self.monthly, 3), Decimal("3000000"))

    def test_uneven_tier_price_stays_linear(self) -> None:
        tier = PriceTier(id="t3", room_id="room-1", duration=3, price=Decimal("1000000"))

        self.assertAlmostEqual(
            calculate_total_lease_price(tier, 3), Decimal("1000000"), places=6
        )
        self.assertAlmostEqual(
            calculate_total_lease_price(tier, 4), Decimal("1333333.333333"), places=5
        )

    def test_free_tier(self) -> None:
        tier = PriceTier(id="t0", room_id="room-1", duration=1, price=Decimal("0"))

        self.assertEqual(calculate_total_lease_price(tier, 12), Decimal("0"))
        self.assertEqual(
            calculate_price_with_frequency(tier, BillingFrequency.WEEKLY, 12), Decimal("0")
        )


if __name__ == "__main__":
    unittest.main()
