"""
Canonical date handling.

Every date the engine stores is a "YYYY-MM-DD" string built from explicit
year/month/day components. Nothing here goes through a generic string-to-
datetime parse, so no timezone can move the calendar day.
"""

from __future__ import annotations

import logging
import re
from datetime import date, timedelta
from typing import Optional

logger = logging.getLogger(__name__)

_ISO_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")
_US_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{2,4})$")
_COMPACT_RE = re.compile(r"^(\d{4})(\d{2})(\d{2})$")
_CANONICAL_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def _build(year: int, month: int, day: int) -> Optional[str]:
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None


def normalize_date(value: str) -> str:
    """
    Convert one of the recognized date shapes to "YYYY-MM-DD".

    Shapes:
    - ISO-ish "YYYY-MM-DD", any time/zone suffix dropped
    - US "M/D/YY" or "M/D/YYYY" (two-digit years are 20yy)
    - compact "YYYYMMDD"

    Anything else, including a recognized shape that is not a real calendar
    day, comes back unchanged.
    """
    if not value:
        return ""

    cleaned = value.strip()
    result = None

    m = _US_RE.match(cleaned)
    if m:
        month, day, year_str = m.groups()
        year = 2000 + int(year_str) if len(year_str) == 2 else int(year_str)
        result = _build(year, int(month), int(day))
    else:
        m = _ISO_RE.match(cleaned) or _COMPACT_RE.match(cleaned)
        if m:
            year, month, day = (int(part) for part in m.groups())
            result = _build(year, month, day)

    if result is None:
        logger.debug("Unrecognized date shape left as-is: %r", cleaned)
        return cleaned
    return result


def parse_canonical(value: str) -> Optional[date]:
    """Canonical string -> date, or None when it is not canonical."""
    m = _CANONICAL_RE.match(value or "")
    if not m:
        return None
    year, month, day = (int(part) for part in m.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def calculate_return_date(sail_date: str, nights: int) -> str:
    start = parse_canonical(sail_date)
    if start is None:
        return sail_date
    try:
        return (start + timedelta(days=int(nights))).isoformat()
    except OverflowError:
        logger.warning("Return date out of range for %s + %s nights", sail_date, nights)
        return sail_date


def completion_state(return_date: str, today: Optional[date] = None) -> str:
    """"completed" once the return date is behind us, otherwise "upcoming"."""
    end = parse_canonical(return_date)
    if end is None:
        return "upcoming"
    return "completed" if end < (today or date.today()) else "upcoming"


def compact_to_canonical(value: str) -> str:
    """Calendar date-times such as "20250115T100000Z" -> "2025-01-15"."""
    if not value:
        return ""
    digits = re.sub(r"[^\dT]", "", value)
    if len(digits) >= 8 and digits[:8].isdigit():
        result = _build(int(digits[:4]), int(digits[4:6]), int(digits[6:8]))
        if result is not None:
            return result
    return value
