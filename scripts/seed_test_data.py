"""Create a demo bill (with saved friends) for an existing or new user.

Usage: python -m scripts.seed_test_data <user-uuid> [--email you@example.com]
Run from the repository root.
"""

import argparse
import asyncio
import uuid
from decimal import Decimal

from billsplit.core.database import async_session_factory
from billsplit.models.user import User
from billsplit.schemas.bill import BillDetail
from billsplit.services.bill_service import (
    create_bill, add_participant, add_line_item, update_claim, update_bill, get_bill,
)
from billsplit.services.friend_service import add_friend, list_friends
from billsplit.services.settlement_service import calculate_transfers

BILL_NAME = "Restaurante El Mar"

FRIENDS = [
    ("Ana García", "#3b82f6"),
    ("Carlos López", "#10b981"),
    ("María Sánchez", "#f59e0b"),
]

# (description, quantity, unit_price, is_shared, claims as {friend index: quantity})
ITEMS = [
    ("Paella Valenciana", 2, Decimal("15.50"), False, {0: 1, 1: 1}),
    ("Cerveza", 4, Decimal("2.50"), False, {0: 2, 1: 1, 2: 1}),
    ("Patatas Bravas", 1, Decimal("6.00"), True, {0: 1, 1: 1, 2: 1}),
]


async def main(user_id: uuid.UUID, email: str | None):
    async with async_session_factory() as db:
        user = await db.get(User, user_id)
        if not user:
            user = User(id=user_id, email=email)
            db.add(user)
            await db.commit()
            print(f"  Added user to DB: {user_id}")
        else:
            print(f"  User already in DB: {user_id}")

        existing = {f.name: f for f in await list_friends(db, user_id)}
        friends = []
        for name, color in FRIENDS:
            friend = existing.get(name) or await add_friend(db, user_id, name, color)
            friends.append(friend)
        print(f"  {len(friends)} saved friends")

        total = sum(qty * price for _, qty, price, _, _ in ITEMS)
        bill = await create_bill(db, user_id, BILL_NAME, total)
        print(f"\n  Created bill: {BILL_NAME} ({bill.id}) total {total}")

        participants = [
            await add_participant(db, bill.id, user_id, friend_id=f.id) for f in friends
        ]

        for description, qty, price, shared, claims in ITEMS:
            item = await add_line_item(db, bill.id, user_id, description, qty, price, shared)
            for idx, claim_qty in claims.items():
                await update_claim(db, item.id, participants[idx].id, user_id, claim_qty, shared)
            print(f"  Added item: {description} x{qty}")

        await update_bill(db, bill.id, user_id, {"payer_id": participants[0].id})

        snapshot = BillDetail.model_validate(await get_bill(db, bill.id, user_id))
        names = {p.id: p.name for p in snapshot.participants}

    print("\nDone! Settlement:")
    for t in calculate_transfers(snapshot):
        print(f"  {names[t.from_id]} owes {t.amount} to {names[t.to_id]}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("user_id", type=uuid.UUID)
    parser.add_argument("--email", default=None)
    args = parser.parse_args()
    asyncio.run(main(args.user_id, args.email))
