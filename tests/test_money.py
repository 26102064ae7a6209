from decimal import Decimal
import unittest
from billsplit.utils.money import to_decimal, round_amount, is_settled, balance_status

class TestMoney(unittest.TestCase):
    def test_round_half_up(self):
        """Halves round away from zero, like the client's Math.round on positive amounts."""
        self.assertEqual(round_amount(Decimal("2.345")), Decimal("2.35"))
        self.assertEqual(round_amount(Decimal("2.344")), Decimal("2.34"))
        self.assertEqual(round_amount(Decimal("-2.345")), Decimal("-2.35"))

    def test_round_thirds(self):
        self.assertEqual(round_amount(Decimal("10") / 3), Decimal("3.33"))
        self.assertEqual(round_amount(Decimal("20") / 3), Decimal("6.67"))

    def test_to_decimal_float_uses_shortest_repr(self):
        self.assertEqual(to_decimal(15.5), Decimal("15.5"))
        self.assertEqual(to_decimal(0.1), Decimal("0.1"))

    def test_to_decimal_passthrough_and_strings(self):
        d = Decimal("31.00")
        self.assertIs(to_decimal(d), d)
        self.assertEqual(to_decimal("31.00"), Decimal("31.00"))
        self.assertEqual(to_decimal(3), Decimal("3"))
        self.assertEqual(to_decimal(None), Decimal("0"))

    def test_tolerance_band_is_inclusive(self):
        self.assertTrue(is_settled(Decimal("0.01")))
        self.assertTrue(is_settled(Decimal("-0.01")))
        self.assertFalse(is_settled(Decimal("0.011")))

    def test_balance_status(self):
        self.assertEqual(balance_status(Decimal("2.00")), "owes")
        self.assertEqual(balance_status(Decimal("-4.00")), "owed")
        self.assertEqual(balance_status(Decimal("0.009")), "settled")
        self.assertEqual(balance_status(Decimal("0")), "settled")

if __name__ == "__main__":
    unittest.main()
