from __future__ import annotations

from typing import Iterable

from ..records.models import (
    CREDIT_CARD_ACCOUNT,
    DEBIT,
    SECONDARY_CARD_ID,
    AccountBalance,
    CreditCard,
    Transaction,
)


def signed_card_amount(tx: Transaction) -> float:
    # Debit grows the card balance, anything else pays it down
    return tx.amount if tx.transaction_type == DEBIT else -tx.amount


def build_credit_cards(transactions: Iterable[Transaction], balance: AccountBalance) -> list[CreditCard]:
    """
    Primary card always comes from the balance snapshot. The secondary card
    only exists when some "Credit Card" transaction is tagged "secondary".
    """
    secondary = [
        t for t in transactions if t.account == CREDIT_CARD_ACCOUNT and t.card_id == SECONDARY_CARD_ID
    ]

    cards = [CreditCard.primary(balance.credit_card_balance)]
    if secondary:
        cards.append(CreditCard.secondary(sum(signed_card_amount(t) for t in secondary)))
    return cards


def latest_balance(balances: Iterable[AccountBalance]) -> AccountBalance | None:
    return max(balances, key=lambda b: b.date, default=None)
