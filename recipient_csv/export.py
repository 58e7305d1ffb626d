from __future__ import annotations

import csv
import io
import re
from datetime import date
from typing import Iterable, Optional

from .models import RecipientRecord
from .rules import DELIMITER, REQUIRED_COLUMNS, TEMPLATE_ROWS


def _write_rows(rows: Iterable[Iterable[str]]) -> str:
    outp = io.StringIO(newline="")
    writer = csv.writer(outp, delimiter=DELIMITER, lineterminator="\n")
    writer.writerow(REQUIRED_COLUMNS)
    for row in rows:
        writer.writerow(row)
    return outp.getvalue()


def template_csv() -> str:
    """Sample upload: header plus three example recipients, no trailing newline."""
    return _write_rows(TEMPLATE_ROWS).rstrip("\n")


def recipients_to_csv(records: Iterable[RecipientRecord]) -> str:
    return _write_rows(
        (r.name, r.certification_id, r.email or "") for r in records
    )


def export_filename(event_title: str, count: int, today: Optional[date] = None) -> str:
    title = re.sub(r"[^a-zA-Z0-9\s_-]", "", event_title)
    title = re.sub(r"\s+", "_", title).lower()
    stamp = (today or date.today()).isoformat()
    return f"participants_{title}_{count}_{stamp}.csv"
