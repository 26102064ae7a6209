import unittest
import uuid
from decimal import Decimal

from pydantic import ValidationError

from billsplit.schemas.bill import BillUpdate, ClaimUpdate, LineItemCreate, ParticipantCreate
from billsplit.schemas.friend import FriendCreate


class TestBillSchemas(unittest.TestCase):

    def test_update_distinguishes_null_from_absent(self):
        self.assertEqual(BillUpdate().model_dump(exclude_unset=True), {})
        self.assertEqual(
            BillUpdate(payer_id=None).model_dump(exclude_unset=True), {"payer_id": None}
        )

    def test_update_rejects_null_name_and_total(self):
        with self.assertRaises(ValidationError):
            BillUpdate.model_validate({"name": None})
        with self.assertRaises(ValidationError):
            BillUpdate.model_validate({"total": None})
        self.assertEqual(
            BillUpdate.model_validate({"name": "Cena"}).model_dump(exclude_unset=True), {"name": "Cena"}
        )

    def test_update_rejects_negative_total(self):
        with self.assertRaises(ValidationError):
            BillUpdate(total=Decimal("-1"))

    def test_line_item_quantity_must_be_positive(self):
        with self.assertRaises(ValidationError):
            LineItemCreate(description="Paella", quantity=0, unit_price=Decimal("15.50"))
        item = LineItemCreate(description="Paella", quantity=2, unit_price=Decimal("15.50"))
        self.assertFalse(item.is_shared)

    def test_claim_quantity_may_be_zero(self):
        self.assertEqual(ClaimUpdate(quantity=0, is_shared=True).quantity, 0)
        with self.assertRaises(ValidationError):
            ClaimUpdate(quantity=-1, is_shared=False)

    def test_participant_from_friend_needs_no_name(self):
        p = ParticipantCreate(friend_id=uuid.uuid4())
        self.assertIsNone(p.name)
        self.assertIsNone(p.color)


class TestColors(unittest.TestCase):

    def test_valid_colors(self):
        for color in ("#3b82f6", "#10B981", "#000000"):
            self.assertEqual(FriendCreate(name="Ana", color=color).color, color)

    def test_invalid_colors(self):
        for color in ("3b82f6", "#3b82f", "#3b82f6ff", "#gggggg", "blue"):
            with self.assertRaises(ValidationError):
                FriendCreate(name="Ana", color=color)
        with self.assertRaises(ValidationError):
            ParticipantCreate(name="Ana", color="red")


if __name__ == "__main__":
    unittest.main()
