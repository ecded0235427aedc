"""Money Parsing — free-text euro amounts to integer cents and back.

Invariants:
    - parse_eur_to_cents returns int cents >= 0, or None (never raises)
    - Both ',' and '.' present: the rightmost one is the decimal separator
    - A single separator kind followed by exactly 3 trailing digits is a
      thousands separator ("12,345" -> 1234500 cents, not 12.345)
    - Otherwise the last occurrence of the separator is the decimal point
    - At most 2 decimal digits accepted; negatives rejected
    - Only ASCII digits count: other scripts' digits are rejected
    - format_eur_cents groups thousands from 10 000 euros up

Design Decisions:
    - Decimal arithmetic over float: "0.29" must be 29 cents, not 28.999...
    - The three-digit heuristic is intentional and pinned by tests; do not
      "fix" it to a decimal reading
"""

import math
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

_AMOUNT_RE = re.compile(r"^-?\d+(\.\d{0,2})?$", re.ASCII)
_THREE_DIGITS_RE = re.compile(r"^\d{3}$", re.ASCII)
_STRIP_RE = re.compile(r"\s+|€|'")

NON_NUMERIC_EUR = "€ 0,00"
_MIN_GROUPED_EUROS = Decimal(10000)


def _strip_noise(text: str) -> str:
    return _STRIP_RE.sub("", text).strip()


def _is_thousands_group(sep: str, text: str) -> bool:
    return bool(_THREE_DIGITS_RE.match(text[text.rfind(sep) + 1:]))


def _collapse_to_decimal(sep: str, text: str) -> str:
    """Last `sep` becomes the decimal point, earlier ones are dropped."""
    head, _, tail = text.rpartition(sep)
    return f"{head.replace(sep, '')}.{tail}"


def normalize_amount(text: str) -> str:
    """Rewrite a localized amount into plain '1234' / '1234.56' form."""
    has_comma = "," in text
    has_dot = "." in text
    if has_comma and has_dot:
        decimal_sep = "," if text.rfind(",") > text.rfind(".") else "."
        grouping_sep = "." if decimal_sep == "," else ","
        return text.replace(grouping_sep, "").replace(decimal_sep, ".")
    for sep, present in ((",", has_comma), (".", has_dot)):
        if not present:
            continue
        if _is_thousands_group(sep, text):
            return text.replace(sep, "")
        return _collapse_to_decimal(sep, text)
    return text


def parse_eur_to_cents(text: object) -> int | None:
    raw = _strip_noise(str(text or ""))
    if not raw:
        return None
    normalized = normalize_amount(raw)
    if not _AMOUNT_RE.match(normalized):
        return None
    try:
        value = Decimal(normalized)
    except InvalidOperation:
        return None
    if value < 0:
        return None
    return int((value * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def format_eur_cents(cents: object) -> str:
    """Italian display form, e.g. 1234567 -> '12.345,67 €', 123456 -> '1234,56 €'.

    Grouping starts at five integer digits; non-numeric input renders '€ 0,00'.
    """
    try:
        value = 0.0 if cents is None else float(cents)
    except (TypeError, ValueError):
        value = math.nan
    if not math.isfinite(value):
        return NON_NUMERIC_EUR
    rounded = int(round(value))
    sign = "-" if rounded < 0 else ""
    amount = Decimal(abs(rounded)) / 100
    if amount < _MIN_GROUPED_EUROS:
        return f"{sign}{amount:.2f}".replace(".", ",") + " €"
    grouped = f"{amount:,.2f}"  # 12,345.67
    italian = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}{italian} €"
