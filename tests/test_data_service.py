import asyncio
from datetime import date

import pytest

from finsight.config import BUNDLED_ASSETS_DIR, Settings
from finsight.errors import TransactionSaveError
from finsight.records.models import Transaction, new_transaction_id
from finsight.service import DataService
from finsight.storage import RecordStore


def make_service(tmp_path) -> DataService:
    settings = Settings(FINSIGHT_DATA_DIR=tmp_path / "data", FINSIGHT_ASSETS_DIR=BUNDLED_ASSETS_DIR)
    return DataService(settings=settings)


def test_service_uses_settings_paths(tmp_path):
    service = make_service(tmp_path)
    assert service.store.transactions_path == tmp_path / "data" / "transactions.csv"


def test_initialize_is_idempotent(tmp_path):
    service = make_service(tmp_path)

    assert asyncio.run(service.initialize()) is True
    assert asyncio.run(service.initialize()) is False


def test_append_and_delete_round_trip(tmp_path):
    service = make_service(tmp_path)
    tx = Transaction(
        date=date(2024, 2, 1),
        description="Bookshop",
        category="Shopping",
        amount=19.99,
        account="Credit Card",
        transaction_type="Debit",
        card_id="secondary",
        id=new_transaction_id(),
    )

    async def scenario():
        before = await service.get_transactions()
        await service.append_transaction(tx)
        during = await service.get_transactions()
        removed = await service.delete_transaction(tx.id)
        after = await service.get_transactions()
        return before, during, removed, after

    before, during, removed, after = asyncio.run(scenario())

    assert len(during) == len(before) + 1
    assert during[-1] == tx
    assert removed == 1
    assert after == before


def test_get_methods_return_plain_lists(tmp_path):
    service = make_service(tmp_path)

    balances = asyncio.run(service.get_account_balances())
    spending = asyncio.run(service.get_monthly_spending())

    assert isinstance(balances, list) and balances
    assert isinstance(spending, list) and spending


def test_read_failure_degrades_to_empty(tmp_path):
    store = RecordStore(transactions_path=tmp_path / "t.csv", assets_dir=tmp_path / "missing")
    service = DataService(store=store)

    assert asyncio.run(service.get_transactions()) == []
    assert asyncio.run(service.get_account_balances()) == []
    result = asyncio.run(service.load_monthly_spending())
    assert result.records == [] and not result.ok


def test_append_failure_surfaces_to_caller(tmp_path):
    store = RecordStore(transactions_path=tmp_path / "t.csv", assets_dir=tmp_path / "missing")
    service = DataService(store=store)
    tx = Transaction(
        date=date(2024, 2, 1),
        description="x",
        category="y",
        amount=1.0,
        account="Checking",
        transaction_type="Debit",
        id="a",
    )

    with pytest.raises(TransactionSaveError, match="Failed to save transaction"):
        asyncio.run(service.append_transaction(tx))


def test_get_credit_cards_from_bundled_data(tmp_path):
    from finsight.analytics.credit_cards import latest_balance

    service = make_service(tmp_path)
    txs = asyncio.run(service.get_transactions())
    bal = latest_balance(asyncio.run(service.get_account_balances()))

    cards = service.get_credit_cards(txs, bal)

    assert cards[0].balance == bal.credit_card_balance
    assert cards[1].card_id == "secondary"
    assert round(cards[1].balance, 2) == 62.75
