from __future__ import annotations

import csv
import io
from typing import Iterable


def read_rows(text: str) -> list[list[str] | None]:
    """
    Split CSV text into rows of raw string fields.

    Blank lines come back as empty rows so row indexes stay aligned with lines.
    A row the reader rejects (e.g. a field over csv.field_size_limit()) comes
    back as None; the reader resumes on the following line.
    """
    reader = csv.reader(io.StringIO(text, newline=""))
    rows: list[list[str] | None] = []
    while True:
        try:
            row = next(reader)
        except StopIteration:
            break
        except csv.Error:
            rows.append(None)
            continue
        rows.append(row)
    return rows


def split_lines(text: str) -> list[str]:
    """Physical lines split on \\n, \\r\\n or \\r only, endings removed."""
    return [line.rstrip("\r\n") for line in io.StringIO(text, newline="")]


def parse_line(line: str) -> list[str]:
    try:
        return next(csv.reader([line]), [])
    except csv.Error:
        return []


def format_row(fields: Iterable[str]) -> str:
    """Every field double-quoted, embedded quotes doubled. No line terminator."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, doublequote=True, lineterminator="")
    writer.writerow(list(fields))
    return buf.getvalue()
