from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Sequence

from .models import AccountBalance, MonthlySpending, Transaction

logger = logging.getLogger(__name__)

TRANSACTION_MIN_FIELDS = 6
TRANSACTION_ID_INDEX = 8

BALANCE_COLUMNS = 6
MONTHLY_SPENDING_COLUMNS = 11


def parse_iso_date(value: str) -> date:
    s = value.strip()
    try:
        return date.fromisoformat(s)
    except ValueError:
        # full timestamps are accepted, only the calendar date is kept
        return datetime.fromisoformat(s).date()


def parse_year_month(value: str) -> date:
    return datetime.strptime(value.strip(), "%Y-%m").date()


def parse_bool(value: str) -> bool:
    return value.strip().lower() == "true"


def parse_float_or_zero(value: str) -> float:
    try:
        return float(value)
    except ValueError as e:
        logger.warning('Error parsing number "%s": %s', value, e)
        return 0.0


def _optional(row: Sequence[str], index: int) -> str | None:
    if len(row) <= index:
        return None
    value = row[index]
    return value if value != "" else None


def parse_transaction_row(row: Sequence[str]) -> Transaction:
    """
    Build a Transaction from a CSV row with at least six fields.

    Trailing optional columns (Card_ID, IsPersonal, Id) may be missing.
    Raises ValueError for short rows and for unparsable dates or amounts.
    """
    if len(row) < TRANSACTION_MIN_FIELDS:
        raise ValueError(f"expected at least {TRANSACTION_MIN_FIELDS} fields, got {len(row)}")

    return Transaction(
        date=parse_iso_date(row[0]),
        description=row[1],
        category=row[2],
        amount=float(row[3]),
        account=row[4],
        transaction_type=row[5],
        card_id=_optional(row, 6),
        is_personal=parse_bool(row[7]) if len(row) > 7 else False,
        id=_optional(row, TRANSACTION_ID_INDEX),
    )


def transaction_to_fields(tx: Transaction) -> list[str]:
    return [
        tx.date.isoformat(),
        tx.description,
        tx.category,
        repr(float(tx.amount)),
        tx.account,
        tx.transaction_type,
        tx.card_id or "",
        "true" if tx.is_personal else "false",
        tx.id or "",
    ]


def parse_balance_row(row: Sequence[str]) -> AccountBalance:
    if len(row) < BALANCE_COLUMNS:
        raise ValueError(f"expected at least {BALANCE_COLUMNS} fields, got {len(row)}")

    return AccountBalance(
        date=parse_iso_date(row[0]),
        checking=float(row[1]),
        credit_card_balance=float(row[2]),
        savings=float(row[3]),
        investment_account=float(row[4]),
        net_worth=float(row[5]),
    )


def parse_monthly_spending_row(row: Sequence[str]) -> MonthlySpending:
    # categories are lenient: a bad number becomes 0.0, only the date can fail
    if len(row) != MONTHLY_SPENDING_COLUMNS:
        raise ValueError(f"expected {MONTHLY_SPENDING_COLUMNS} fields, got {len(row)}")

    fields = [f.strip() for f in row]
    values = [parse_float_or_zero(f) for f in fields[1:]]

    return MonthlySpending(
        date=parse_year_month(fields[0]),
        groceries=values[0],
        utilities=values[1],
        rent=values[2],
        transportation=values[3],
        entertainment=values[4],
        dining_out=values[5],
        shopping=values[6],
        healthcare=values[7],
        insurance=values[8],
        miscellaneous=values[9],
    )
