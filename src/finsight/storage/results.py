from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from ..errors import ErrorKind

T = TypeVar("T")


@dataclass(frozen=True)
class LoadIssue:
    kind: ErrorKind
    message: str
    row: int | None = None  # data row number, header excluded


@dataclass(frozen=True)
class LoadResult(Generic[T]):
    """
    Outcome of reading one CSV file: whatever records could be parsed plus
    everything that went wrong on the way. Reads never raise.
    """

    records: list[T] = field(default_factory=list)
    issues: list[LoadIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues

    def issues_of(self, kind: ErrorKind) -> list[LoadIssue]:
        return [i for i in self.issues if i.kind == kind]

    @classmethod
    def failed(cls, kind: ErrorKind, message: str) -> LoadResult[T]:
        return cls(records=[], issues=[LoadIssue(kind=kind, message=message)])
