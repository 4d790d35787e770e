from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    IO_FAILURE = "io_failure"
    PARSE_FAILURE = "parse_failure"
    SCHEMA_MISMATCH = "schema_mismatch"


class RecordStoreError(Exception):
    """Base error for the CSV record store. `kind` tells callers what went wrong."""

    kind: ErrorKind = ErrorKind.IO_FAILURE

    def __init__(self, message: str, kind: ErrorKind | None = None):
        super().__init__(message)
        if kind is not None:
            self.kind = kind


class TransactionSaveError(RecordStoreError):
    def __init__(self, message: str = "Failed to save transaction"):
        super().__init__(message, ErrorKind.IO_FAILURE)


class TransactionDeleteError(RecordStoreError):
    def __init__(self, message: str = "Failed to delete transaction"):
        super().__init__(message, ErrorKind.IO_FAILURE)
