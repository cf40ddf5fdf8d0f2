"""Quote-aware parsing of comma-separated text into header names and records."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List

from .records import Record


DELIMITER = ","
QUOTE = '"'

# Column name that carries the per-record selection flag instead of data
SELECTED_COLUMN = "selected"


@dataclass
class ParseResult:
    """Header row and records produced by `parse`."""

    headers: List[str] = field(default_factory=list)
    records: List[Record] = field(default_factory=list)

    def __iter__(self) -> Iterator:
        # Allows `headers, records = parse(text)`
        return iter((self.headers, self.records))


def _non_blank(lines: List[str]) -> List[str]:
    return [line for line in lines if line.strip() != ""]


def split_logical_lines(text: str) -> List[str]:
    """
    Split text into logical lines.

    A line break (LF or CRLF) normally ends a line. It is kept inside the
    line only while a quote that opened at the start of a field is still
    open, so quoted fields may span physical lines while a stray quote
    inside an unquoted value cannot swallow the rows after it. If such a
    quote is never closed, every physical line is a logical line. Lines
    that are blank after stripping are dropped.
    """
    lines: List[str] = []
    current: List[str] = []
    in_quotes = False
    spanning = False
    field_start = True
    i = 0
    n = len(text)

    while i < n:
        char = text[i]
        if char == QUOTE:
            if in_quotes and i + 1 < n and text[i + 1] == QUOTE:
                # Escaped quote: keep both characters for parse_row
                current.append(QUOTE + QUOTE)
                i += 2
                continue
            spanning = field_start and not in_quotes
            in_quotes = not in_quotes
            field_start = False
            current.append(char)
        elif char in "\r\n" and not spanning:
            if char == "\r" and i + 1 < n and text[i + 1] == "\n":
                i += 1
            lines.append("".join(current))
            current = []
            # Quote state never carries over an unquoted line break
            in_quotes = False
            field_start = True
        else:
            field_start = char == DELIMITER and not in_quotes
            current.append(char)
        i += 1

    if spanning:
        # Unterminated quoted field
        return _non_blank(text.replace("\r\n", "\n").split("\n"))

    lines.append("".join(current))
    return _non_blank(lines)


def parse_row(row: str) -> List[str]:
    """
    Tokenize a single logical line into field values.

    - `"` toggles quoting; `""` inside quotes is one literal quote.
    - `,` ends a field only outside quotes.
    - The last field is always emitted, even if empty.
    """
    result: List[str] = []
    current: List[str] = []
    in_quotes = False
    i = 0
    n = len(row)

    while i < n:
        char = row[i]
        if char == QUOTE:
            if in_quotes and i + 1 < n and row[i + 1] == QUOTE:
                current.append(QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == DELIMITER and not in_quotes:
            result.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1

    result.append("".join(current))
    return result


def parse(text: str) -> ParseResult:
    """
    Parse CSV text into its header row and records.

    The first logical line is the header row, minus the reserved
    `selected` column. Values are assigned to headers by position: short
    rows are padded with empty strings and extra tokens are dropped.
    Every record starts unselected. Empty input yields an empty result.
    """
    lines = split_logical_lines(text)
    if not lines:
        return ParseResult()

    headers = [name for name in parse_row(lines[0]) if name != SELECTED_COLUMN]

    records: List[Record] = []
    for line in lines[1:]:
        values = parse_row(line)
        records.append(
            Record(
                fields=tuple(headers),
                values={
                    name: values[i] if i < len(values) else ""
                    for i, name in enumerate(headers)
                },
            )
        )

    return ParseResult(headers=headers, records=records)
