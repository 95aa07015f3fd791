"""
Turns a matched deadline phrase ("tomorrow", "in 3 days", "1/20/2024",
"friday", ...) into a concrete instant relative to a base ``now``.

Calendar-day results land at 17:00 (end of the working day). Offsets
counted in days ("in 3 days") keep the time of day of ``now``.
"""

from __future__ import annotations

import calendar
import re
from datetime import datetime, timedelta
from typing import Optional

END_OF_DAY_HOUR = 17

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
WEEKDAY_ABBREVIATIONS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")
FRIDAY = 4

MONTHS = (
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
)

_OFFSET_RE = re.compile(r"(?:in\s+)?(\d+)\s+(day|week|month)s?")
_NUMERIC_DATE_RE = re.compile(r"(\d{1,2})[/-](\d{1,2})(?:[/-](\d{2,4}))?")
_MONTH_DAY_RE = re.compile(r"([a-z]+)\s+(\d{1,2})")
_WORD_RE = re.compile(r"[a-z]+")


def _end_of_day(day: datetime) -> datetime:
    return day.replace(hour=END_OF_DAY_HOUR, minute=0, second=0, microsecond=0)


def _safe_date(year: int, month: int, day: int) -> Optional[datetime]:
    try:
        return datetime(year, month, day, END_OF_DAY_HOUR, 0)
    except ValueError:
        return None


def expand_year(year: int) -> int:
    """Two-digit years pivot at 50: 00-49 -> 20xx, 50-99 -> 19xx."""
    if year < 100:
        return 2000 + year if year < 50 else 1900 + year
    return year


def _month_index(word: str) -> Optional[int]:
    for i, name in enumerate(MONTHS):
        if word == name or (len(word) >= 3 and name.startswith(word)):
            return i + 1
    return None


def _weekday_index(text: str) -> Optional[int]:
    for word in _WORD_RE.findall(text):
        if word in WEEKDAYS:
            return WEEKDAYS.index(word)
        if word in WEEKDAY_ABBREVIATIONS:
            return WEEKDAY_ABBREVIATIONS.index(word)
    return None


def resolve_deadline_text(text: str, now: datetime) -> Optional[datetime]:
    normalized = text.lower().strip()

    if any(k in normalized for k in ("today", "tonight", "end of day", "eod")):
        return _end_of_day(now)

    if "tomorrow" in normalized or "next day" in normalized:
        return _end_of_day(now + timedelta(days=1))

    if any(k in normalized for k in ("this week", "end of week", "eow", "friday")):
        days_until_friday = (FRIDAY - now.weekday()) % 7
        return _end_of_day(now + timedelta(days=days_until_friday))

    if "next week" in normalized or "following week" in normalized:
        return _end_of_day(now + timedelta(days=7))

    if any(k in normalized for k in ("this month", "end of month", "eom")):
        last_day = calendar.monthrange(now.year, now.month)[1]
        return _end_of_day(now.replace(day=last_day))

    offset = _OFFSET_RE.search(normalized)
    if offset:
        amount = int(offset.group(1))
        unit = offset.group(2)
        days = {"day": 1, "week": 7, "month": 30}[unit] * amount
        return now + timedelta(days=days)

    numeric = _NUMERIC_DATE_RE.search(normalized)
    if numeric:
        month, day = int(numeric.group(1)), int(numeric.group(2))
        year = expand_year(int(numeric.group(3))) if numeric.group(3) else now.year
        return _safe_date(year, month, day)

    month_day = _MONTH_DAY_RE.search(normalized)
    if month_day:
        month = _month_index(month_day.group(1))
        if month is not None:
            resolved = _safe_date(now.year, month, int(month_day.group(2)))
            if resolved is not None and resolved.date() < now.date():
                resolved = _safe_date(now.year + 1, month, int(month_day.group(2)))
            return resolved

    weekday = _weekday_index(normalized)
    if weekday is not None:
        days_ahead = (weekday - now.weekday()) % 7 or 7
        return _end_of_day(now + timedelta(days=days_ahead))

    return None
