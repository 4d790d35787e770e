from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date
from typing import Final

DEBIT: Final = "Debit"
CREDIT: Final = "Credit"

CREDIT_CARD_ACCOUNT: Final = "Credit Card"
PRIMARY_CARD_ID: Final = "primary"
SECONDARY_CARD_ID: Final = "secondary"

SPENDING_CATEGORIES: tuple[str, ...] = (
    "groceries",
    "utilities",
    "rent",
    "transportation",
    "entertainment",
    "dining_out",
    "shopping",
    "healthcare",
    "insurance",
    "miscellaneous",
)


def new_transaction_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Transaction:
    date: date
    description: str
    category: str
    amount: float  # signed
    account: str
    transaction_type: str  # DEBIT | CREDIT
    card_id: str | None = None
    is_personal: bool = False
    id: str | None = None


@dataclass(frozen=True)
class AccountBalance:
    date: date
    checking: float
    credit_card_balance: float
    savings: float
    investment_account: float
    net_worth: float


@dataclass(frozen=True)
class MonthlySpending:
    date: date  # first day of the month
    groceries: float
    utilities: float
    rent: float
    transportation: float
    entertainment: float
    dining_out: float
    shopping: float
    healthcare: float
    insurance: float
    miscellaneous: float

    def categories(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in SPENDING_CATEGORIES}

    @property
    def total(self) -> float:
        return round(sum(self.categories().values()), 2)


@dataclass(frozen=True)
class CreditCard:
    card_id: str
    name: str
    balance: float

    @classmethod
    def primary(cls, balance: float) -> CreditCard:
        return cls(card_id=PRIMARY_CARD_ID, name="Primary Card", balance=balance)

    @classmethod
    def secondary(cls, balance: float) -> CreditCard:
        return cls(card_id=SECONDARY_CARD_ID, name="Secondary Card", balance=balance)
