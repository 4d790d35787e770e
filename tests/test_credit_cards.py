from datetime import date

from finsight.analytics.credit_cards import build_credit_cards, latest_balance
from finsight.records.models import AccountBalance, Transaction


def balance(credit_card_balance: float = 500.0, day: date = date(2024, 1, 31)) -> AccountBalance:
    return AccountBalance(
        date=day,
        checking=1000.0,
        credit_card_balance=credit_card_balance,
        savings=0.0,
        investment_account=0.0,
        net_worth=500.0,
    )


def tx(amount: float, transaction_type: str, account: str = "Credit Card", card_id: str | None = "secondary"):
    return Transaction(
        date=date(2024, 1, 5),
        description="x",
        category="Misc",
        amount=amount,
        account=account,
        transaction_type=transaction_type,
        card_id=card_id,
    )


def test_only_primary_without_secondary_transactions():
    cards = build_credit_cards([tx(20.0, "Debit", card_id="primary"), tx(5.0, "Debit", account="Checking")], balance())

    assert len(cards) == 1
    assert cards[0].card_id == "primary"
    assert cards[0].balance == 500.0


def test_secondary_debit_adds():
    cards = build_credit_cards([tx(100.0, "Debit")], balance())

    assert [c.card_id for c in cards] == ["primary", "secondary"]
    assert cards[1].balance == 100.0


def test_secondary_credit_subtracts():
    cards = build_credit_cards([tx(100.0, "Credit")], balance())
    assert cards[1].balance == -100.0


def test_secondary_balance_sums_mixed_types():
    cards = build_credit_cards([tx(100.0, "Debit"), tx(30.0, "Credit"), tx(5.0, "Refund")], balance())
    assert cards[1].balance == 65.0


def test_secondary_requires_credit_card_account():
    cards = build_credit_cards([tx(100.0, "Debit", account="Checking")], balance())
    assert len(cards) == 1


def test_latest_balance_picks_newest():
    older = balance(1.0, date(2023, 12, 31))
    newer = balance(2.0, date(2024, 1, 31))

    assert latest_balance([newer, older]) is newer
    assert latest_balance([]) is None
