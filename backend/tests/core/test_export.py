"""Tabular Export — CSV and spreadsheet HTML builders plus cell helpers."""

import math
from datetime import date, datetime, timedelta, timezone

from app.core.export import (
    BOM,
    build_delimited_text,
    build_xls_html,
    cents_to_euros,
    escape_csv_cell,
    iso_date,
    safe_file_stem,
)


# ─── CSV ─────────────────────────────────────────────────────────

def test_escape_csv_cell_quotes_and_doubles_quotes():
    assert escape_csv_cell('say "hi"') == '"say ""hi"""'
    assert escape_csv_cell(None) == '""'
    assert escape_csv_cell(12) == '"12"'


def test_delimited_text_starts_with_bom_and_uses_semicolons():
    text = build_delimited_text(["Titolo", "Stato"], [["Report", None], ["A;B", "done"]])
    assert text.startswith(BOM)
    assert text[len(BOM):].split("\n") == [
        '"Titolo";"Stato"',
        '"Report";""',
        '"A;B";"done"',
    ]


def test_delimited_text_without_bom_and_custom_delimiter():
    assert build_delimited_text(["a", "b"], [[1, 2]], delimiter=",", include_bom=False) == (
        '"a","b"\n"1","2"'
    )


def test_malformed_rows_render_empty():
    assert build_delimited_text(["a"], [None, ["x"]], include_bom=False) == '"a"\n\n"x"'
    assert build_delimited_text(["a"], "junk", include_bom=False) == '"a"'


# ─── XLS (HTML) ──────────────────────────────────────────────────

def test_xls_html_escapes_everything():
    html = build_xls_html(["<b>Nome</b>"], [["O'Neil & \"Co\""]], sheet_name="Q1 <draft>")
    assert "<th>&lt;b&gt;Nome&lt;/b&gt;</th>" in html
    assert "<td>O&#39;Neil &amp; &quot;Co&quot;</td>" in html
    assert "<title>Q1 &lt;draft&gt;</title>" in html


def test_xls_html_structure():
    html = build_xls_html(["a"], [[1], [2]])
    assert html.startswith("<html><head><meta charset=\"utf-8\" /><title>Sheet1</title>")
    assert "<tbody><tr><td>1</td></tr><tr><td>2</td></tr></tbody>" in html
    assert html.endswith("</table></body></html>")


def test_xls_html_blank_sheet_name_defaults():
    assert "<title>Sheet1</title>" in build_xls_html([], [], sheet_name=None)


# ─── Helpers ─────────────────────────────────────────────────────

def test_safe_file_stem():
    assert safe_file_stem("  Report Q1 / 2025 ") == "Report_Q1_2025"
    assert safe_file_stem("budget-v2.final") == "budget-v2.final"
    assert safe_file_stem("") == "export"
    assert safe_file_stem(None) == "export"


def test_iso_date():
    assert iso_date("2025-01-10T12:30:00Z") == "2025-01-10"
    assert iso_date(datetime(2025, 3, 1, 8, 0)) == "2025-03-01"
    assert iso_date(date(2025, 3, 2)) == "2025-03-02"
    assert iso_date(None) == ""
    assert iso_date("bogus") == ""


def test_iso_date_aware_values_use_utc_day():
    assert iso_date("2025-01-10T01:00:00+02:00") == "2025-01-09"
    assert iso_date("2025-01-09T23:30:00-01:00") == "2025-01-10"
    plus_two = timezone(timedelta(hours=2))
    assert iso_date(datetime(2025, 1, 10, 1, 0, tzinfo=plus_two)) == "2025-01-09"


def test_cents_to_euros():
    assert cents_to_euros(12345) == 123.45
    assert cents_to_euros(0) == 0
    assert cents_to_euros(None) is None
    assert cents_to_euros("abc") is None
    assert cents_to_euros(math.nan) is None
