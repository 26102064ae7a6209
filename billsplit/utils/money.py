from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")

# Balances within this band of zero count as settled; it absorbs the remainders
# left by unrounded shared-item divisions.
TOLERANCE = Decimal("0.01")


def to_decimal(value) -> Decimal:
    """
    Coerce a stored or wire amount to Decimal.

    Floats go through str() so 15.5 becomes Decimal("15.5") rather than its
    binary expansion. Strings such as "31.00" (how totals come back from the
    database driver in some setups) are accepted as-is.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if value is None:
        return Decimal("0")
    return Decimal(value)


def round_amount(value: Decimal) -> Decimal:
    """Round to cents, halves away from zero."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def is_settled(balance: Decimal) -> bool:
    return -TOLERANCE <= balance <= TOLERANCE


def balance_status(balance: Decimal) -> str:
    """Label a signed balance: positive owes into the pot, negative is owed."""
    if balance > TOLERANCE:
        return "owes"
    if balance < -TOLERANCE:
        return "owed"
    return "settled"
