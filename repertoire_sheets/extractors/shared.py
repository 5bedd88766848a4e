from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

import pandas as pd

from repertoire_sheets.config import SINGERS

SENTINEL_NULLS = {"", "na", "n/a", "none", "null", "nil", "nan", "tbd", "-", "—"}
MUSICIAN_MARKS = {"x", "✓", "yes"}
AFFIRMATIVE_RE = re.compile(r"yes|oui", re.IGNORECASE)
LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
PURE_NUMBER_RE = re.compile(r"^[+-]?\d+(?:\.\d+)?$")
YEAR_TOKEN_RE = re.compile(r"(?<!\d)\d{4}(?!\d)")
MIN_SHEET_YEAR = 1900

# Day-first formats come before month-first ones: the sheets are kept in French.
DATE_FORMAT_PATTERNS = [
    ("%Y-%m-%d", re.compile(r"^\d{4}-\d{2}-\d{2}$")),
    ("%Y/%m/%d", re.compile(r"^\d{4}/\d{2}/\d{2}$")),
    ("%d/%m/%Y", re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$")),
    ("%m/%d/%Y", re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$")),
    ("%d-%m-%Y", re.compile(r"^\d{1,2}-\d{1,2}-\d{4}$")),
    ("%m-%d-%Y", re.compile(r"^\d{1,2}-\d{1,2}-\d{4}$")),
    ("%d/%m/%y", re.compile(r"^\d{1,2}/\d{1,2}/\d{2}$")),
    ("%m/%d/%y", re.compile(r"^\d{1,2}/\d{1,2}/\d{2}$")),
    ("%B %d %Y", re.compile(r"^[A-Za-z]+\s+\d{1,2}\s+\d{4}$")),
    ("%b %d %Y", re.compile(r"^[A-Za-z]{3}\s+\d{1,2}\s+\d{4}$")),
    ("%d %B %Y", re.compile(r"^\d{1,2}\s+[A-Za-z]+\s+\d{4}$")),
    ("%d %b %Y", re.compile(r"^\d{1,2}\s+[A-Za-z]{3}\s+\d{4}$")),
    ("%B %d, %Y", re.compile(r"^[A-Za-z]+\s+\d{1,2},\s+\d{4}$")),
    ("%b %d, %Y", re.compile(r"^[A-Za-z]{3}\s+\d{1,2},\s+\d{4}$")),
]


@dataclass
class ExtractionContext:
    sheet_name: str
    label: str = ""
    singers: list[str] = field(default_factory=lambda: list(SINGERS))


def is_affirmative(value: str) -> bool:
    return bool(AFFIRMATIVE_RE.search(value or ""))


def is_musician_mark(value: str) -> bool:
    return (value or "").strip().lower() in MUSICIAN_MARKS


def parse_leading_int(value: str) -> Optional[int]:
    """Integer prefix of the cell ("12", "12 jours", "3.0"); None when absent or negative."""
    match = LEADING_INT_RE.match(value or "")
    if not match:
        return None
    number = int(match.group(1))
    return number if number >= 0 else None


def parse_sheet_date(value: str) -> Optional[date]:
    """
    Calendar date of a last-sang cell, or None.

    Excel serials, then the known day/month formats, then pandas inference.
    Dates before 1900 are rejected, and inferred values need a four-digit
    year, so bare times ("10:30"), day/month pairs ("3/4") and month names
    never pick up the current day or year 1.
    """
    text = (value or "").strip()
    if text.lower() in SENTINEL_NULLS:
        return None

    if PURE_NUMBER_RE.fullmatch(text):
        number = float(text)
        if 25000 <= number <= 60000:
            parsed = pd.to_datetime(number, unit="D", origin="1899-12-30", errors="coerce")
            return None if pd.isna(parsed) else parsed.date()
        return None

    for fmt, pattern in DATE_FORMAT_PATTERNS:
        if not pattern.fullmatch(text):
            continue
        try:
            parsed_fmt = datetime.strptime(text, fmt)
        except ValueError:
            continue
        return parsed_fmt.date() if parsed_fmt.year >= MIN_SHEET_YEAR else None

    if not YEAR_TOKEN_RE.search(text):
        return None
    parsed = pd.to_datetime(text, errors="coerce")
    if pd.isna(parsed):
        return None
    if isinstance(parsed, (pd.Timestamp, datetime)) and parsed.year >= MIN_SHEET_YEAR:
        return parsed.date()
    return None
