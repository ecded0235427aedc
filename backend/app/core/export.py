"""Tabular Export — CSV and spreadsheet-compatible HTML builders.

Invariants:
    - Every CSV cell is double-quoted, embedded quotes doubled; None -> ""
    - CSV text starts with a UTF-8 BOM unless include_bom=False (Excel detects encoding)
    - HTML output escapes & < > " ' in every header, cell and the sheet title
    - Malformed rows (non-sequences) render as empty rows, never raise

Design Decisions:
    - Strings out, not files: the route decides media type and Content-Disposition
    - ';' as default delimiter: the office runs Italian-locale Excel
"""

import html
import math
import re
from datetime import date, datetime, timezone
from typing import Any, Sequence

BOM = "\ufeff"


def escape_csv_cell(value: Any) -> str:
    raw = "" if value is None else str(value)
    return '"' + raw.replace('"', '""') + '"'


def _rows(rows: Any) -> list[Sequence[Any]]:
    if not isinstance(rows, (list, tuple)):
        return []
    return [r if isinstance(r, (list, tuple)) else () for r in rows]


def _header(header: Any) -> Sequence[Any]:
    return header if isinstance(header, (list, tuple)) else ()


def build_delimited_text(
    header: Sequence[Any],
    rows: Sequence[Sequence[Any]],
    delimiter: str = ";",
    include_bom: bool = True,
) -> str:
    lines = [delimiter.join(escape_csv_cell(h) for h in _header(header))]
    for row in _rows(rows):
        lines.append(delimiter.join(escape_csv_cell(c) for c in row))
    body = "\n".join(lines)
    return BOM + body if include_bom else body


def _escape_html(value: Any) -> str:
    raw = "" if value is None else str(value)
    return html.escape(raw, quote=True).replace("&#x27;", "&#39;")


def build_xls_html(
    header: Sequence[Any],
    rows: Sequence[Sequence[Any]],
    sheet_name: str | None = "Sheet1",
) -> str:
    """Minimal HTML table that spreadsheet apps open as a worksheet."""
    thead = "<tr>" + "".join(f"<th>{_escape_html(h)}</th>" for h in _header(header)) + "</tr>"
    tbody = "".join(
        "<tr>" + "".join(f"<td>{_escape_html(c)}</td>" for c in row) + "</tr>"
        for row in _rows(rows)
    )
    return "".join([
        "<html>",
        "<head>",
        '<meta charset="utf-8" />',
        f"<title>{_escape_html(sheet_name or 'Sheet1')}</title>",
        "</head>",
        "<body>",
        '<table border="1">',
        "<thead>", thead, "</thead>",
        "<tbody>", tbody, "</tbody>",
        "</table>",
        "</body>",
        "</html>",
    ])


def safe_file_stem(text: str | None) -> str:
    """Filename stem: whitespace and unsafe characters collapse to single underscores."""
    stem = str(text or "").strip() or "export"
    stem = re.sub(r"\s+", "_", stem)
    stem = re.sub(r"[^a-zA-Z0-9._-]", "_", stem)
    stem = re.sub(r"_+", "_", stem)
    return stem.strip("_")


def iso_date(value: Any) -> str:
    """YYYY-MM-DD for dates, datetimes and ISO strings; '' otherwise.

    Timezone-aware datetimes report their UTC calendar date.
    """
    if not value:
        return ""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value.isoformat()
    if not isinstance(value, datetime):
        try:
            value = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return ""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date().isoformat()


def cents_to_euros(cents: int | float | None) -> float | None:
    if cents is None:
        return None
    try:
        value = float(cents)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value / 100
