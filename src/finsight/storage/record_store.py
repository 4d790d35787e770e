from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Callable, Sequence, TypeVar

from ..config import Settings
from ..errors import ErrorKind, TransactionDeleteError, TransactionSaveError
from ..records.codec import format_row, parse_line, read_rows, split_lines
from ..records.models import AccountBalance, MonthlySpending, Transaction
from ..records.parsers import (
    BALANCE_COLUMNS,
    MONTHLY_SPENDING_COLUMNS,
    TRANSACTION_ID_INDEX,
    TRANSACTION_MIN_FIELDS,
    parse_balance_row,
    parse_monthly_spending_row,
    parse_transaction_row,
    transaction_to_fields,
)
from .results import LoadIssue, LoadResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRANSACTIONS_TEMPLATE = "transactions.csv"
ACCOUNT_BALANCES_FILE = "account_balances.csv"
MONTHLY_SPENDING_FILE = "monthly_spending_categories.csv"

_READ_ERRORS = (OSError, UnicodeDecodeError, csv.Error)


class RecordStore:
    """
    CSV-backed record store for a single local user.

    Local mutable file (created from the bundled template on first access):

      <data_dir>/transactions.csv

    Read-only reference files shipped with the package:

      <assets_dir>/account_balances.csv
      <assets_dir>/monthly_spending_categories.csv

    No locking: one caller issuing one operation at a time is assumed.
    """

    def __init__(self, transactions_path: Path, assets_dir: Path):
        self.transactions_path = transactions_path
        self.assets_dir = assets_dir

    @classmethod
    def from_settings(cls, settings: Settings) -> RecordStore:
        return cls(transactions_path=settings.transactions_path, assets_dir=settings.assets_dir)

    @property
    def template_path(self) -> Path:
        return self.assets_dir / TRANSACTIONS_TEMPLATE

    def ensure_initialized(self) -> bool:
        """
        Copy the bundled template verbatim if the local file is missing.
        Returns True when the file was created. I/O errors propagate.
        """
        path = self.transactions_path
        if path.exists():
            return False

        data = self.template_path.read_text(encoding="utf-8")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(data, encoding="utf-8")
        logger.info("Initialized %s from %s", path, self.template_path)
        return True

    def _ends_without_newline(self) -> bool:
        path = self.transactions_path
        if path.stat().st_size == 0:
            return False
        with path.open("rb") as f:
            f.seek(-1, 2)
            return f.read(1) not in (b"\n", b"\r")

    def append_transaction(self, tx: Transaction) -> None:
        """
        Append one fully quoted row. The id is not checked for uniqueness.
        """
        try:
            self.ensure_initialized()
            row = format_row(transaction_to_fields(tx))
            prefix = "\n" if self._ends_without_newline() else ""
            with self.transactions_path.open("a", encoding="utf-8", newline="") as f:
                f.write(prefix + row + "\n")
        except Exception as e:
            logger.error("Error appending transaction: %s", e)
            raise TransactionSaveError() from e

    def delete_transaction(self, tx_id: str) -> int:
        """
        Rewrite the file without rows whose ninth field equals tx_id.
        The header line and rows with fewer than nine fields are always kept.
        Returns removed count.
        """
        path = self.transactions_path
        tmp = path.with_suffix(path.suffix + ".tmp")
        try:
            self.ensure_initialized()
            lines = split_lines(path.read_text(encoding="utf-8"))

            kept: list[str] = lines[:1]
            for line in lines[1:]:
                fields = parse_line(line)
                if len(fields) <= TRANSACTION_ID_INDEX or fields[TRANSACTION_ID_INDEX] != tx_id:
                    kept.append(line)

            tmp.write_text("\n".join(kept) + "\n", encoding="utf-8")
            tmp.replace(path)
        except Exception as e:
            logger.error("Error deleting transaction: %s", e)
            tmp.unlink(missing_ok=True)
            raise TransactionDeleteError() from e

        removed = len(lines) - len(kept)
        logger.debug("Deleted %s row(s) with id=%s", removed, tx_id)
        return removed

    def load_transactions(self) -> LoadResult[Transaction]:
        try:
            self.ensure_initialized()
            data = self.transactions_path.read_text(encoding="utf-8")
            table = read_rows(data)
        except _READ_ERRORS as e:
            logger.exception("Error loading transactions")
            return LoadResult.failed(ErrorKind.IO_FAILURE, f"cannot read transactions: {e}")

        return _parse_table(
            table,
            parse_transaction_row,
            accepts=lambda row: len(row) >= TRANSACTION_MIN_FIELDS,
            label="transactions",
        )

    def load_account_balances(self) -> LoadResult[AccountBalance]:
        return self._load_reference(
            ACCOUNT_BALANCES_FILE,
            BALANCE_COLUMNS,
            parse_balance_row,
            accepts=lambda row: len(row) >= BALANCE_COLUMNS,
            label="account balances",
        )

    def load_monthly_spending(self) -> LoadResult[MonthlySpending]:
        return self._load_reference(
            MONTHLY_SPENDING_FILE,
            MONTHLY_SPENDING_COLUMNS,
            parse_monthly_spending_row,
            accepts=lambda row: len(row) == MONTHLY_SPENDING_COLUMNS,
            label="monthly spending",
        )

    def _load_reference(
        self,
        filename: str,
        expected_columns: int,
        parser: Callable[[Sequence[str]], T],
        *,
        accepts: Callable[[Sequence[str]], bool],
        label: str,
    ) -> LoadResult[T]:
        path = self.assets_dir / filename
        try:
            table = read_rows(path.read_text(encoding="utf-8"))
        except _READ_ERRORS as e:
            logger.exception("Error loading %s", label)
            return LoadResult.failed(ErrorKind.IO_FAILURE, f"cannot read {label}: {e}")

        if not table:
            logger.error("Error: %s CSV table is empty", label)
            return LoadResult.failed(ErrorKind.SCHEMA_MISMATCH, f"{label} file is empty")

        header = table[0] or []
        logger.debug("%s headers: %s", label, header)
        if len(header) != expected_columns:
            msg = f"invalid number of columns in {label}: expected {expected_columns}, got {len(header)}"
            logger.error("Error: %s", msg)
            return LoadResult.failed(ErrorKind.SCHEMA_MISMATCH, msg)

        return _parse_table(table, parser, accepts=accepts, label=label)


def _parse_table(
    table: list[list[str] | None],
    parser: Callable[[Sequence[str]], T],
    *,
    accepts: Callable[[Sequence[str]], bool],
    label: str,
) -> LoadResult[T]:
    """Parse every row after the header, skipping rows that do not fit."""
    records: list[T] = []
    issues: list[LoadIssue] = []

    for i, row in enumerate(table[1:], start=1):
        if row is None:
            logger.warning("Error reading %s row %s: rejected by the CSV reader", label, i)
            issues.append(LoadIssue(ErrorKind.PARSE_FAILURE, "unreadable row", row=i))
            continue
        if not row:
            continue
        if not accepts(row):
            logger.debug("Skipping %s row %s: %s field(s)", label, i, len(row))
            issues.append(LoadIssue(ErrorKind.PARSE_FAILURE, f"unexpected field count {len(row)}", row=i))
            continue
        try:
            records.append(parser(row))
        except ValueError as e:
            logger.warning("Error parsing %s row %s: %s", label, i, e)
            issues.append(LoadIssue(ErrorKind.PARSE_FAILURE, str(e), row=i))

    return LoadResult(records=records, issues=issues)
