"""Amount/date normalization plus small tabular helpers used across modules."""

from __future__ import annotations

import re
from datetime import date
from typing import Iterable, List, NamedTuple, Optional
from uuid import UUID

import pandas as pd

from .constants import (
    CURRENCY_PREFIX_RX,
    DATE_ANCHOR_RXS,
    DAY_MONTH_RX,
    DAY_MONTH_YEAR_RX,
    DAY_ONLY_RX,
    DMY_SLASH_RX,
    ISO_DATE_RX,
    MONEY_HINT_RX,
    MONTH_HEADER_RX,
    MONTH_NUMBERS,
    NUMBER_BODY_RX,
    PARTIAL_ANCHOR_RXS,
    SIGN_PREFIXED_TOKEN_RX,
)


class ParsedAmount(NamedTuple):
    value: float
    explicit_sign: Optional[int] = None  # +1 / -1 only for a leading "+" / "-"

    @property
    def sign(self) -> Optional[int]:
        """Sign information carried by the token, or None when it has none."""
        if self.explicit_sign is not None:
            return self.explicit_sign
        if self.value < 0:
            return -1
        return None


class MonthContext(NamedTuple):
    month: int
    year: int


class DateAnchor(NamedTuple):
    date: date
    remainder: str


def normalize_space(s: str) -> str:
    return re.sub(r"\s+", " ", s.replace("\u00a0", " ")).strip()


# ---------------- Amounts ---------------- #
def _decimal_separator(core: str) -> str | None:
    last_dot = core.rfind(".")
    last_comma = core.rfind(",")
    if last_dot >= 0 and last_comma >= 0:
        return "." if last_dot > last_comma else ","
    sep = "." if last_dot >= 0 else "," if last_comma >= 0 else None
    if sep is None:
        return None
    # A lone separator followed by exactly two digits is a decimal point.
    if core.count(sep) == 1 and len(core) - core.index(sep) - 1 == 2:
        return sep
    return None


def normalize_amount(raw: str | None) -> ParsedAmount | None:
    """Parse a locale-formatted money token.

    Both ``1.234.567,89`` and ``1,234,567.89`` are understood. When both
    separators appear the rightmost one is the decimal mark; a single
    separator is decimal only when it occurs once and is followed by exactly
    two digits. Returns None for anything that is not a number.
    """
    if not raw or not isinstance(raw, str):
        return None
    token = normalize_space(raw).replace("\u2212", "-")
    explicit_sign = None
    negative = False
    if token[:1] in ("+", "-"):
        explicit_sign = 1 if token[0] == "+" else -1
        token = token[1:].lstrip()
    token = CURRENCY_PREFIX_RX.sub("", token)
    if explicit_sign is None and token[:1] in ("+", "-"):
        explicit_sign = 1 if token[0] == "+" else -1
        token = token[1:].lstrip()
    if token.startswith("(") and token.endswith(")"):
        negative = True
        token = token[1:-1].strip()
    elif token.endswith("-") and token.count("-") == 1:
        negative = True
        token = token[:-1].rstrip()
    if not NUMBER_BODY_RX.fullmatch(token):
        return None

    decimal = _decimal_separator(token)
    if decimal is None:
        int_part, frac_part = token, ""
    else:
        int_part, frac_part = token.rsplit(decimal, 1)
        if decimal in int_part:
            return None
    digits = int_part.replace(".", "").replace(",", "")
    if not digits.isdigit() or (frac_part and not frac_part.isdigit()):
        return None
    value = float(f"{digits}.{frac_part}" if frac_part else digits)

    if explicit_sign == -1 or (explicit_sign is None and negative):
        value = -value
    return ParsedAmount(value, explicit_sign)


def is_amount_line(text: str) -> bool:
    return normalize_amount(text) is not None


def is_numeric_only(text: str) -> bool:
    """Unsigned figure such as a stated balance; ``+``/``-`` prefixes excluded."""
    parsed = normalize_amount(text)
    return parsed is not None and parsed.explicit_sign is None


def looks_like_money(token: str) -> bool:
    """Amount token that carries a sign, separator or currency marker."""
    return bool(MONEY_HINT_RX.search(token)) and normalize_amount(token) is not None


def is_sign_prefixed_token(text: str) -> bool:
    return bool(SIGN_PREFIXED_TOKEN_RX.match(text.strip()))


# ---------------- Dates ---------------- #
def _month_number(name: str) -> int | None:
    return MONTH_NUMBERS.get(name.lower())


def _build_date(year: int, month: int | None, day: int) -> date | None:
    if month is None:
        return None
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_date(raw: str | None, context: MonthContext | None = None) -> date | None:
    """Parse ``DD Mon YYYY``, ``DD/MM/YYYY`` or ``YYYY-MM-DD`` (in that order).

    The first format whose pattern matches the whole token decides; an
    impossible calendar date yields None rather than trying the next format.
    With a month ``context`` the partial forms ``DD Mon`` and ``DD`` resolve
    their missing parts from it.
    """
    if not raw or not isinstance(raw, str):
        return None
    token = normalize_space(raw)
    m = DAY_MONTH_YEAR_RX.fullmatch(token)
    if m:
        return _build_date(
            int(m["year"]), _month_number(m["month"]), int(m["day"])
        )
    m = DMY_SLASH_RX.fullmatch(token)
    if m:
        return _build_date(int(m["year"]), int(m["month"]), int(m["day"]))
    m = ISO_DATE_RX.fullmatch(token)
    if m:
        return _build_date(int(m["year"]), int(m["month"]), int(m["day"]))
    if context is None:
        return None
    m = DAY_MONTH_RX.fullmatch(token)
    if m:
        return _build_date(context.year, _month_number(m["month"]), int(m["day"]))
    m = DAY_ONLY_RX.fullmatch(token)
    if m:
        return _build_date(context.year, context.month, int(m["day"]))
    return None


def parse_month_header(line: str) -> MonthContext | None:
    m = MONTH_HEADER_RX.match(normalize_space(line))
    if not m:
        return None
    return MonthContext(MONTH_NUMBERS[m["month"].lower()], int(m["year"]))


def match_date_anchor(
    line: str, context: MonthContext | None = None
) -> DateAnchor | None:
    """Return the date that starts ``line`` and whatever text follows it."""
    text = normalize_space(line)
    candidates = DATE_ANCHOR_RXS + (PARTIAL_ANCHOR_RXS if context else ())
    for rx in candidates:
        m = rx.match(text)
        if not m:
            continue
        d = parse_date(m["date"], context)
        if d is None:
            return None
        return DateAnchor(d, (m["rest"] or "").strip())
    return None


# ---------------- Tabular helpers ---------------- #
def ledger_to_frame(transactions: Iterable) -> pd.DataFrame:
    """Build a DataFrame (one row per transaction) preserving ledger order."""
    rows = [t.model_dump(mode="python") for t in transactions]
    df = pd.DataFrame(rows)
    if not df.empty:
        df["type"] = df["type"].map(lambda v: getattr(v, "value", v))
        df["expenditure_type"] = df["expenditure_type"].map(
            lambda v: getattr(v, "value", v)
        )
    return df


def df_to_records(df: pd.DataFrame) -> List[dict]:
    """Convert a DataFrame to JSON-serializable records.

    - Converts pandas NA to None
    - Converts date/datetime/UUID objects to strings
    """
    if df is None or df.empty:
        return []
    out = df.to_dict(orient="records")
    for rec in out:
        for k, v in list(rec.items()):
            if v is None:
                continue
            if not isinstance(v, str) and pd.isna(v):
                rec[k] = None
            elif hasattr(v, "isoformat"):
                rec[k] = v.isoformat()
            elif isinstance(v, UUID):
                rec[k] = str(v)
    return out


__all__ = [
    "ParsedAmount",
    "MonthContext",
    "DateAnchor",
    "normalize_space",
    "normalize_amount",
    "is_amount_line",
    "is_numeric_only",
    "looks_like_money",
    "is_sign_prefixed_token",
    "parse_date",
    "parse_month_header",
    "match_date_anchor",
    "ledger_to_frame",
    "df_to_records",
]
