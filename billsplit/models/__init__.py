from billsplit.models.user import User
from billsplit.models.friend import Friend
from billsplit.models.bill import Bill, Participant, LineItem, Claim
from billsplit.models.payment import Payment

__all__ = [
    "User", "Friend",
    "Bill", "Participant", "LineItem", "Claim",
    "Payment",
]
