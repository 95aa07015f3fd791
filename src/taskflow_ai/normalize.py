from __future__ import annotations

import math
from datetime import datetime
from typing import Any, Optional

PRIORITIES = ("low", "medium", "high", "urgent")
DEFAULT_PRIORITY = "medium"

MIN_ESTIMATED_HOURS = 0.5
MAX_ESTIMATED_HOURS = 100.0


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def validate_priority(value: Any) -> str:
    if isinstance(value, str) and value.strip().lower() in PRIORITIES:
        return value.strip().lower()
    return DEFAULT_PRIORITY


def validate_estimated_hours(value: Any) -> Optional[float]:
    """Clamp positive estimates into 0.5-100 and round to the nearest half hour.

    Non-numeric, non-finite or non-positive values are dropped.
    """
    if isinstance(value, bool):
        return None
    try:
        hours = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(hours) or hours <= 0:
        return None
    return round(clamp(hours, MIN_ESTIMATED_HOURS, MAX_ESTIMATED_HOURS) * 2) / 2


def validate_confidence(value: Any) -> float:
    if isinstance(value, bool):
        return 0.5
    try:
        conf = float(value)
    except (TypeError, ValueError):
        return 0.5
    if math.isnan(conf):
        return 0.5
    return clamp(conf)


def to_naive_local(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return to_naive_local(value)
    if isinstance(value, str):
        text = value.strip()
        # fromisoformat() only accepts a trailing "Z" from 3.11 on
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return to_naive_local(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None


def validate_due_date(value: Any, now: Optional[datetime] = None) -> Optional[datetime]:
    """Accept only parseable instants that are still in the future."""
    due = parse_datetime(value)
    if due is None:
        return None
    now = now or datetime.now()
    if due <= now:
        return None
    return due


def dedupe(items: list[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return out
