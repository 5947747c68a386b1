"""TRIDASH — Date-Range Normalizer.

Turns the dashboard's relative range tokens ("today", "yesterday",
"{N}daysAgo") into literal calendar dates. Pure: "now" is always passed in.
"""

import re
from datetime import date, datetime, timedelta, timezone
from typing import Dict, Optional, Tuple

from app.models.results import DateRange

DEFAULT_START = "30daysAgo"
DEFAULT_END = "today"

_DAYS_AGO = re.compile(r"^(\d+)daysago$", re.IGNORECASE)
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Range selector presets → (start token, end token)
PRESETS: Dict[str, Tuple[str, str]] = {
    "today": ("today", "today"),
    "yesterday": ("yesterday", "yesterday"),
    "last_7_days": ("7daysAgo", "today"),
    "last_30_days": ("30daysAgo", "today"),
    "last_90_days": ("90daysAgo", "today"),
    "last_6_months": ("180daysAgo", "today"),
    "last_year": ("365daysAgo", "today"),
}


def _reference_date(reference: datetime) -> date:
    """UTC calendar date of the reference instant (naive = UTC)."""
    if reference.tzinfo is not None:
        reference = reference.astimezone(timezone.utc)
    return reference.date()


def normalize(token: str, reference: datetime) -> str:
    """Resolve one range token to a YYYY-MM-DD string.

    Unknown or malformed tokens are returned unchanged so the provider
    rejects them instead of this function raising.
    """
    today = _reference_date(reference)
    lowered = token.strip().lower()

    if lowered == "today":
        return today.isoformat()
    if lowered == "yesterday":
        return (today - timedelta(days=1)).isoformat()

    match = _DAYS_AGO.match(lowered)
    if match:
        try:
            return (today - timedelta(days=int(match.group(1)))).isoformat()
        except (OverflowError, ValueError):
            # Beyond date.min
            return token

    return token


def to_compact(value: str) -> str:
    """YYYY-MM-DD → YYYYMMDD. Anything else passes through."""
    if _ISO_DATE.match(value):
        return value.replace("-", "")
    return value


def parse_iso(value: str) -> Optional[date]:
    """Return the date if value is a valid YYYY-MM-DD literal, else None."""
    if not _ISO_DATE.match(value):
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return None


def resolve_range(start: str, end: str, reference: datetime) -> DateRange:
    """Normalize both bounds of a range against the same reference instant."""
    return DateRange(
        start_date=normalize(start, reference),
        end_date=normalize(end, reference),
    )


def is_ordered(date_range: DateRange) -> bool:
    """False only when both bounds are real dates and start is after end."""
    start = parse_iso(date_range.start_date)
    end = parse_iso(date_range.end_date)
    if start is None or end is None:
        return True
    return start <= end


def preset_tokens(name: str) -> Tuple[str, str]:
    """Look up a named preset. Raises KeyError for unknown names."""
    return PRESETS[name]


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(timezone.utc)
