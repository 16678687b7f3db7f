"""
dates.py
Charge/renewal date handling shared by the admin table and the user view.

Raw date fields are typed in by hand, so several shapes show up in the data:
  - 2025-08-05   (ISO)
  - 2025/08/05   (year first, slashes)
  - 05/08/2025   (day first, slashes)
  - 5-Aug        (no year; the configured assumed year is used)
Anything else goes through dateutil as a last resort.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, timedelta

from dateutil import parser as date_parser

from models import DEFAULT_ASSUMED_YEAR

logger = logging.getLogger(__name__)

# A line renews this many days after it was charged
RENEWAL_PERIOD_DAYS = 30

# Shown wherever a date is missing or unreadable
UNSPECIFIED = "غير محدد"

_ISO = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_YMD_SLASH = re.compile(r"^(\d{4})/(\d{2})/(\d{2})$")
_DMY_SLASH = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")
_DAY_MON = re.compile(r"^(\d{1,2})-(\w{3})$")

MONTH_ABBR = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

_ARABIC_DIGITS = str.maketrans("0123456789", "٠١٢٣٤٥٦٧٨٩")


def _safe_date(year: int, month: int, day: int) -> date | None:
    # Out-of-range fields are rejected, never rolled over
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _fallback_parse(text: str, assumed_year: int) -> date | None:
    # Fixed default so missing fields never depend on today's date
    default = datetime(assumed_year, 1, 1)
    try:
        return date_parser.parse(text, default=default).date()
    except (ValueError, OverflowError) as exc:
        logger.debug("Unparseable date %r: %s", text, exc)
        return None


def parse_date(raw: str | None, assumed_year: int = DEFAULT_ASSUMED_YEAR) -> date | None:
    """
    Parse a raw date field into a calendar date.
    Returns None for empty or unreadable input; never raises.
    """
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None

    m = _ISO.match(text) or _YMD_SLASH.match(text)
    if m:
        y, mo, d = (int(g) for g in m.groups())
        return _safe_date(y, mo, d)

    m = _DMY_SLASH.match(text)
    if m:
        d, mo, y = (int(g) for g in m.groups())
        return _safe_date(y, mo, d)

    m = _DAY_MON.match(text)
    if m:
        month = MONTH_ABBR.get(m.group(2).lower())
        if month:
            return _safe_date(assumed_year, month, int(m.group(1)))

    return _fallback_parse(text, assumed_year)


def derive_renewal_date(
    charging: str | None,
    existing_renewal: str | None,
    assumed_year: int = DEFAULT_ASSUMED_YEAR,
) -> date | None:
    """
    Renewal date for a line: the recorded one if it parses, otherwise
    charge date + RENEWAL_PERIOD_DAYS, otherwise None.
    """
    existing = parse_date(existing_renewal, assumed_year)
    if existing:
        return existing
    base = parse_date(charging, assumed_year)
    if base is None:
        return None
    return base + timedelta(days=RENEWAL_PERIOD_DAYS)


def format_date(value: date | None) -> str:
    """D/M/YYYY with Arabic-Indic digits (ar-EG style), or the placeholder."""
    if value is None:
        return UNSPECIFIED
    return f"{value.day}/{value.month}/{value.year}".translate(_ARABIC_DIGITS)


def format_raw_date(raw: str | None, assumed_year: int = DEFAULT_ASSUMED_YEAR) -> str:
    return format_date(parse_date(raw, assumed_year))


def format_renewal(
    charging: str | None,
    renewal: str | None,
    assumed_year: int = DEFAULT_ASSUMED_YEAR,
) -> str:
    return format_date(derive_renewal_date(charging, renewal, assumed_year))
