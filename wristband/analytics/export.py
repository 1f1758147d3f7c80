# -*- coding: utf-8 -*-
"""CSV export of the current filtered view."""

from __future__ import annotations

import csv
import io
import time
from typing import Any, Mapping, Optional, Sequence, Union

from ..readings.models import Reading

CSV_HEADER = ("device_id", "hr", "temp", "spo2", "bp_sys", "bp_dia", "created_at")

Row = Union[Reading, Mapping[str, Any]]


def _field(row: Row, name: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(name)
    return getattr(row, name)


def _plain(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def export_csv(rows: Sequence[Row], *, escape: bool = True) -> Optional[str]:
    """Render rows as CSV, ``\\n``-separated without a trailing newline.

    Returns ``None`` for an empty view. With ``escape=False`` fields are joined
    verbatim, so a value containing a comma corrupts the row.
    """
    if not rows:
        return None
    body = [[_plain(_field(row, name)) for name in CSV_HEADER] for row in rows]

    if not escape:
        lines = [",".join(CSV_HEADER)] + [",".join(values) for values in body]
        return "\n".join(lines)

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    writer.writerows(body)
    return buffer.getvalue()[: -len("\n")]


def export_filename(now_ms: Optional[int] = None) -> str:
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"wristband_data_{stamp}.csv"
