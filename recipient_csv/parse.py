"""
Recipient list parsing.

Stages, all pure functions over an in-memory text buffer:
- row splitting (quoted newlines stay inside the row)
- field tokenizing (comma delimiter, doubled-quote escapes)
- header resolution (name, certification_id, email by header name)
- record validation + deduplication

Row-level problems are skipped and reported in ParseResult.skipped.
Anything that makes the whole batch untrustworthy raises a CsvParseError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Set, Tuple

from .errors import (
    DuplicateCertificationId,
    InsufficientRows,
    MissingRequiredColumns,
    NoValidRecipients,
)
from .models import ParseResult, RecipientRecord, SkippedRow
from .rules import (
    CERTIFICATION_ID_COLUMN,
    DELIMITER,
    EMAIL_COLUMN,
    NAME_COLUMN,
    QUOTE,
    REQUIRED_COLUMNS,
)

logger = logging.getLogger(__name__)


def normalize_newlines(text: str) -> str:
    # CRLF/CR -> LF
    return text.replace("\r\n", "\n").replace("\r", "\n")


def number_rows(text: str) -> Iterator[Tuple[int, str]]:
    """
    Yield (line_no, row) pairs from LF-normalized text.

    line_no is the 1-based physical line the logical row starts on, so it
    matches what an editor shows even after blank lines or quoted newlines.
    A newline inside a quoted span is row content, not a separator. Doubled
    quotes inside a quoted span are kept as-is for the tokenizer to collapse.
    Whitespace-only rows are dropped. An unterminated quote does not fail:
    whatever is left at the end of the buffer is emitted as the last row.
    """
    in_quotes = False
    current: List[str] = []
    line_no = 1
    start_line = 1
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]
        if ch == QUOTE:
            if in_quotes and i + 1 < n and text[i + 1] == QUOTE:
                current.append(QUOTE * 2)
                i += 2
                continue
            in_quotes = not in_quotes
            current.append(ch)
        elif ch == "\n":
            line_no += 1
            if in_quotes:
                current.append(ch)
            else:
                row = "".join(current)
                if row.strip():
                    yield start_line, row
                current = []
                start_line = line_no
        else:
            current.append(ch)
        i += 1

    row = "".join(current)
    if row.strip():
        yield start_line, row


def split_rows(text: str) -> Iterator[str]:
    for _, row in number_rows(text):
        yield row


def tokenize_row(row: str) -> List[str]:
    """
    Split one logical row into trimmed field values.

    Lone quotes only open or close a quoted span and never reach a field, so
    any quote left in a value came from a doubled-quote escape and is kept.
    There is always at least one field, even for an empty row.
    """
    fields: List[str] = []
    buf: List[str] = []
    in_quotes = False
    i = 0
    n = len(row)

    while i < n:
        ch = row[i]
        if ch == QUOTE:
            if in_quotes and i + 1 < n and row[i + 1] == QUOTE:
                buf.append(QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
        elif ch == DELIMITER and not in_quotes:
            fields.append("".join(buf).strip())
            buf = []
        else:
            buf.append(ch)
        i += 1

    fields.append("".join(buf).strip())
    return fields


@dataclass(frozen=True)
class ColumnIndex:
    name: int
    certification_id: int
    email: int

    @property
    def required_width(self) -> int:
        return max(self.name, self.certification_id, self.email) + 1


def resolve_header(header: List[str]) -> ColumnIndex:
    positions: dict[str, int] = {}
    for idx, raw in enumerate(header):
        key = raw.strip().lower()
        # first occurrence wins
        positions.setdefault(key, idx)

    missing = [col for col in REQUIRED_COLUMNS if col not in positions]
    if missing:
        raise MissingRequiredColumns(missing)

    return ColumnIndex(
        name=positions[NAME_COLUMN],
        certification_id=positions[CERTIFICATION_ID_COLUMN],
        email=positions[EMAIL_COLUMN],
    )


def _skip(skipped: List[SkippedRow], line_no: int, issue: str, detail: str) -> None:
    logger.warning("Skipping row on line %d: %s", line_no, detail)
    skipped.append(SkippedRow(row=line_no, issue=issue, detail=detail))


def parse_recipients(text: str) -> ParseResult:
    """
    Parse a decoded CSV recipient list.

    Row numbers are the 1-based physical line each row starts on.

    Raises:
        InsufficientRows: fewer than a header row and one data row.
        MissingRequiredColumns: header lacks name, certification_id or email.
        DuplicateCertificationId: a certification_id appears twice.
        NoValidRecipients: every data row was skipped.
    """
    rows = list(number_rows(normalize_newlines(text)))
    if len(rows) < 2:
        raise InsufficientRows(len(rows))

    index = resolve_header(tokenize_row(rows[0][1]))

    recipients: List[RecipientRecord] = []
    skipped: List[SkippedRow] = []
    seen: Set[str] = set()

    for line_no, row in rows[1:]:
        values = tokenize_row(row)

        if len(values) < index.required_width:
            _skip(
                skipped,
                line_no,
                "insufficient_columns",
                f"expected {index.required_width} columns, got {len(values)}",
            )
            continue

        name = values[index.name]
        certification_id = values[index.certification_id]
        email: Optional[str] = values[index.email] or None

        if not name:
            _skip(skipped, line_no, "missing_name", "missing required name")
            continue
        if not certification_id:
            _skip(
                skipped,
                line_no,
                "missing_certification_id",
                "missing required certification_id",
            )
            continue

        if certification_id in seen:
            raise DuplicateCertificationId(certification_id, line_no)

        seen.add(certification_id)
        recipients.append(
            RecipientRecord(name=name, certification_id=certification_id, email=email)
        )

    if not recipients:
        raise NoValidRecipients(len(skipped))

    logger.info(
        "Parsed %d recipients (%d rows skipped)", len(recipients), len(skipped)
    )
    return ParseResult(recipients=recipients, skipped=skipped)


def validate_csv(text: str) -> bool:
    """True when the text parses; otherwise the parse error propagates."""
    parse_recipients(text)
    return True
