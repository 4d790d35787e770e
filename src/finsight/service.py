from __future__ import annotations

import asyncio
from typing import Iterable

from .analytics.credit_cards import build_credit_cards
from .config import Settings, load_settings
from .records.models import AccountBalance, CreditCard, MonthlySpending, Transaction
from .storage import LoadResult, RecordStore


class DataService:
    """
    Async facade over RecordStore for UI callers.

    Every operation runs the blocking file work in a worker thread. Operations
    are independent and unsynchronized; issue one at a time.
    """

    def __init__(self, store: RecordStore | None = None, settings: Settings | None = None):
        if store is None:
            store = RecordStore.from_settings(settings or load_settings())
        self.store = store

    async def initialize(self) -> bool:
        return await asyncio.to_thread(self.store.ensure_initialized)

    async def append_transaction(self, tx: Transaction) -> None:
        await asyncio.to_thread(self.store.append_transaction, tx)

    async def delete_transaction(self, tx_id: str) -> int:
        return await asyncio.to_thread(self.store.delete_transaction, tx_id)

    async def load_transactions(self) -> LoadResult[Transaction]:
        return await asyncio.to_thread(self.store.load_transactions)

    async def load_account_balances(self) -> LoadResult[AccountBalance]:
        return await asyncio.to_thread(self.store.load_account_balances)

    async def load_monthly_spending(self) -> LoadResult[MonthlySpending]:
        return await asyncio.to_thread(self.store.load_monthly_spending)

    async def get_transactions(self) -> list[Transaction]:
        return (await self.load_transactions()).records

    async def get_account_balances(self) -> list[AccountBalance]:
        return (await self.load_account_balances()).records

    async def get_monthly_spending(self) -> list[MonthlySpending]:
        return (await self.load_monthly_spending()).records

    def get_credit_cards(self, transactions: Iterable[Transaction], balance: AccountBalance) -> list[CreditCard]:
        return build_credit_cards(transactions, balance)
