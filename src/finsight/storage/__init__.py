from .record_store import (
    ACCOUNT_BALANCES_FILE,
    MONTHLY_SPENDING_FILE,
    TRANSACTIONS_TEMPLATE,
    RecordStore,
)
from .results import LoadIssue, LoadResult

__all__ = [
    "RecordStore",
    "LoadResult",
    "LoadIssue",
    "TRANSACTIONS_TEMPLATE",
    "ACCOUNT_BALANCES_FILE",
    "MONTHLY_SPENDING_FILE",
]
