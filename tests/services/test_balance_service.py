import uuid
from decimal import Decimal

from billsplit.services.balance_service import calculate_balances, item_charges
from tests.builders import person, claim, item, bill


def test_individual_claims_and_payer():
    """Two diners split a 2 x 15.50 dish, p1 paid 31.00."""
    p1, p2 = person("Ana"), person("Carlos", "#10b981")
    b = bill([p1, p2], [item(2, "15.50", [claim(p1), claim(p2)])], payer=p1, total="31.00")

    balances = calculate_balances(b)
    assert balances == {p1.id: Decimal("-15.50"), p2.id: Decimal("15.50")}


def test_shared_item_with_payer():
    p1, p2, p3 = person("Ana"), person("Carlos"), person("María")
    shared = item(1, "6.00", [claim(p, shared=True) for p in (p1, p2, p3)], shared=True)
    b = bill([p1, p2, p3], [shared], payer=p1, total="6.00")

    balances = calculate_balances(b)
    assert balances[p1.id] == Decimal("-4.00")
    assert balances[p2.id] == Decimal("2.00")
    assert balances[p3.id] == Decimal("2.00")


def test_shared_split_is_exact():
    p1, p2, p3 = person("Ana"), person("Carlos"), person("María")
    shared = item(1, "6.00", [claim(p, shared=True) for p in (p1, p2, p3)], shared=True)

    charges = item_charges(shared)
    assert [amount for _, amount in charges] == [Decimal("2"), Decimal("2"), Decimal("2")]


def test_shared_split_ignores_claim_quantity():
    """Every pool member pays the same share whatever quantity their claim carries."""
    p1, p2 = person("Ana"), person("Carlos")
    shared = item(1, "9.00", [claim(p1, quantity=3, shared=True), claim(p2, quantity=1, shared=True)], shared=True)

    charges = dict(item_charges(shared))
    assert charges[p1.id] == charges[p2.id] == Decimal("4.5")


def test_shared_item_with_empty_pool_charges_nobody():
    p1 = person("Ana")
    shared = item(1, "6.00", [claim(p1, shared=False)], shared=True)
    b = bill([p1], [shared])

    assert item_charges(shared) == []
    assert calculate_balances(b) == {p1.id: Decimal("0")}


def test_shared_split_is_not_rounded():
    p1, p2, p3 = person("Ana"), person("Carlos"), person("María")
    shared = item(1, "10.00", [claim(p, shared=True) for p in (p1, p2, p3)], shared=True)
    b = bill([p1, p2, p3], [shared], payer=p1, total="10.00")

    balances = calculate_balances(b)
    assert balances[p2.id] == Decimal("10.00") / 3
    assert abs(sum(balances.values())) <= Decimal("0.01")


def test_individual_item_charges_every_claim_by_quantity():
    """Claims on an individual item are not normalized against the item's quantity."""
    p1, p2 = person("Ana"), person("Carlos")
    over = item(1, "5.00", [claim(p1, quantity=2), claim(p2, quantity=1, shared=True)])

    charges = dict(item_charges(over))
    assert charges[p1.id] == Decimal("10.00")
    assert charges[p2.id] == Decimal("5.00")


def test_no_payer_means_no_credit():
    p1, p2 = person("Ana"), person("Carlos")
    b = bill([p1, p2], [item(1, "8.00", [claim(p1)])], payer=None, total="8.00")

    assert calculate_balances(b) == {p1.id: Decimal("8.00"), p2.id: Decimal("0")}


def test_payer_credited_with_declared_total_not_item_sum():
    p1, p2 = person("Ana"), person("Carlos")
    b = bill([p1, p2], [item(1, "20.00", [claim(p2)])], payer=p1, total="25.00")

    balances = calculate_balances(b)
    assert balances[p1.id] == Decimal("-25.00")
    assert balances[p2.id] == Decimal("20.00")


def test_balances_follow_participant_order():
    people = [person(name) for name in ("Zoe", "Ana", "Marc")]
    b = bill(people, [item(3, "1.00", [claim(p) for p in reversed(people)])])

    assert list(calculate_balances(b)) == [p.id for p in people]


def test_claim_for_unknown_participant_is_ignored():
    p1 = person("Ana")
    ghost = person("Ghost")
    b = bill([p1], [item(2, "3.00", [claim(p1), claim(ghost)])])

    assert calculate_balances(b) == {p1.id: Decimal("3.00")}


def test_payer_outside_participants_is_ignored():
    p1 = person("Ana")
    b = bill([p1], [item(1, "3.00", [claim(p1)])], total="3.00")
    b = b.model_copy(update={"payer_id": uuid.uuid4()})

    assert calculate_balances(b) == {p1.id: Decimal("3.00")}


def test_zero_sum_for_fully_claimed_bill():
    a, c, m = person("Ana"), person("Carlos"), person("María")
    items = [
        item(2, "15.50", [claim(a), claim(c)]),
        item(4, "2.50", [claim(a, 2), claim(c), claim(m)]),
        item(1, "6.00", [claim(p, shared=True) for p in (a, c, m)], shared=True),
        item(1, "7.00", [claim(p, shared=True) for p in (a, m, c)], shared=True),
    ]
    b = bill([a, c, m], items, payer=c, total="54.00")

    assert abs(sum(calculate_balances(b).values())) <= Decimal("0.01")


def test_empty_bill():
    assert calculate_balances(bill([], [])) == {}
