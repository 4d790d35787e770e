import argparse
import asyncio
import logging
from datetime import date

from . import __version__
from .config import load_settings
from .errors import RecordStoreError
from .logging_setup import setup_logging


def _fmt_money(value: float) -> str:
    return f"{value:.2f}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="finsight")
    parser.add_argument("--version", action="store_true", help="Print version and exit")
    parser.add_argument(
        "command",
        nargs="?",
        default="health",
        choices=["health", "status-env", "transactions", "add", "delete", "balances", "spending", "cards"],
        help="Command to run",
    )

    parser.add_argument("--limit", type=int, default=None, help="Show at most N rows (used with transactions)")

    parser.add_argument("--id", dest="tx_id", type=str, default=None, help="Transaction id (add / delete)")
    parser.add_argument("--date", type=date.fromisoformat, default=None, help="YYYY-MM-DD (add). Default: today")
    parser.add_argument("--description", type=str, default="", help="Transaction description (add)")
    parser.add_argument("--category", type=str, default="", help="Transaction category (add)")
    parser.add_argument("--amount", type=float, default=None, help="Signed amount (add)")
    parser.add_argument("--account", type=str, default="Checking", help="Account name (add). Default: Checking")
    parser.add_argument(
        "--type",
        dest="transaction_type",
        choices=["Debit", "Credit"],
        default="Debit",
        help="Transaction type (add). Default: Debit",
    )
    parser.add_argument("--card-id", type=str, default=None, help="Card tag, e.g. secondary (add)")
    parser.add_argument("--personal", action="store_true", help="Mark as personal (add)")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return 0

    settings = load_settings()
    setup_logging(settings.log_level)

    logger = logging.getLogger(__name__)

    if args.command == "health":
        logger.info("Application started successfully.")
        print("ok")
        return 0

    if args.command == "status-env":
        print("FINSIGHT_DATA_DIR =", settings.data_dir)
        print("FINSIGHT_ASSETS_DIR =", settings.assets_dir)
        print("FINSIGHT_TRANSACTIONS_FILE =", settings.transactions_filename)
        print("LOG_LEVEL =", settings.log_level)
        return 0

    from .service import DataService

    service = DataService(settings=settings)

    if args.command == "transactions":
        txs = asyncio.run(service.get_transactions())
        shown = txs if args.limit is None else txs[: max(0, args.limit)]

        print("transactions_count =", len(txs))
        for t in shown:
            desc = t.description.replace("\n", " ").strip()
            if len(desc) > 40:
                desc = desc[:37] + "..."
            print(
                "tx:",
                t.date.isoformat(),
                "amount=",
                _fmt_money(t.amount),
                "type=",
                t.transaction_type,
                "account=",
                t.account,
                "card=",
                t.card_id or "-",
                "id=",
                t.id or "-",
                "desc=",
                desc,
            )

        if len(shown) < len(txs):
            print(f"... and {len(txs) - len(shown)} more transactions")
        return 0

    if args.command == "add":
        from .records.models import Transaction, new_transaction_id

        if args.amount is None:
            parser.error("add requires --amount")

        tx = Transaction(
            date=args.date or date.today(),
            description=args.description,
            category=args.category,
            amount=args.amount,
            account=args.account,
            transaction_type=args.transaction_type,
            card_id=args.card_id,
            is_personal=args.personal,
            id=args.tx_id or new_transaction_id(),
        )
        try:
            asyncio.run(service.append_transaction(tx))
        except RecordStoreError as e:
            print("error =", e)
            return 1

        print("id =", tx.id)
        return 0

    if args.command == "delete":
        if not args.tx_id:
            parser.error("delete requires --id")

        try:
            removed = asyncio.run(service.delete_transaction(args.tx_id))
        except RecordStoreError as e:
            print("error =", e)
            return 1

        print("removed =", removed)
        return 0

    if args.command == "balances":
        balances = asyncio.run(service.get_account_balances())
        print("balances_count =", len(balances))
        for b in balances:
            print(
                "balance:",
                b.date.isoformat(),
                "checking=",
                _fmt_money(b.checking),
                "credit_card=",
                _fmt_money(b.credit_card_balance),
                "savings=",
                _fmt_money(b.savings),
                "investment=",
                _fmt_money(b.investment_account),
                "net_worth=",
                _fmt_money(b.net_worth),
            )
        return 0

    if args.command == "spending":
        months = asyncio.run(service.get_monthly_spending())
        print("months_count =", len(months))
        for m in months:
            cats = " ".join(f"{k}={_fmt_money(v)}" for k, v in m.categories().items())
            print(f"month: {m.date:%Y-%m} total={_fmt_money(m.total)} {cats}")
        return 0

    if args.command == "cards":
        from .analytics.credit_cards import latest_balance

        async def _load():
            txs = await service.get_transactions()
            balances = await service.get_account_balances()
            return txs, balances

        txs, balances = asyncio.run(_load())
        balance = latest_balance(balances)
        if balance is None:
            print("error = no account balances available")
            return 1

        print("balance_date =", balance.date.isoformat())
        for card in service.get_credit_cards(txs, balance):
            print("card:", card.card_id, "name=", card.name, "balance=", _fmt_money(card.balance))
        return 0

    return 1
