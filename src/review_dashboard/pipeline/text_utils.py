"""Shared text, number and date helpers."""

import re
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

# Precompiled regex patterns
WHITESPACE_PATTERN = re.compile(r'\s+')
NAME_SEPARATOR_PATTERN = re.compile(r'\s*[-–—]\s*')
LOCATION_PATTERN = re.compile(
    r'\b(Shoreditch|Marais|Gothic Quarter|Kreuzberg|Berlin|Paris|Barcelona|London)\b',
    re.IGNORECASE,
)

UNKNOWN_PROPERTY = "Unknown Property"


def round_half_up(value: float, digits: int = 1) -> float:
    """Round with halves going up, the way dashboards display ratings.

    Python's round() rounds halves to even (round(4.5) == 4), which would
    put a 4.5 star review in the 4 bucket.

    Args:
        value: Number to round
        digits: Decimal places to keep

    Returns:
        Rounded value
    """
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def initials(name: Optional[str]) -> str:
    """Two-letter initials for an avatar, "??" when there is no name."""
    parts = (name or "").split()
    if not parts:
        return "??"
    if len(parts) == 1:
        return parts[0][:2].upper()
    return (parts[0][0] + parts[-1][0]).upper()


def short_property_name(full_name: str) -> str:
    """Part of a listing name before the first dash."""
    if not full_name:
        return UNKNOWN_PROPERTY
    return NAME_SEPARATOR_PATTERN.split(full_name, maxsplit=1)[0].strip()


def extract_location(listing_name: str) -> Optional[str]:
    """Known neighbourhood or city mentioned in a listing name, if any."""
    match = LOCATION_PATTERN.search(listing_name or "")
    if match:
        return match.group(1)
    return None


def slugify(text: str) -> str:
    return WHITESPACE_PATTERN.sub('-', text).lower()


def parse_timestamp(value: str) -> Optional[datetime]:
    """Parse a provider timestamp into an aware UTC datetime.

    Accepts "YYYY-MM-DD HH:MM:SS" as well as ISO-8601 with an optional "Z"
    or offset. Naive values are taken as UTC.

    Args:
        value: Timestamp string from the provider

    Returns:
        Parsed datetime, or None if the string is not a timestamp
    """
    text = (value or "").strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text.replace(" ", "T", 1))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_display_date(moment: datetime) -> str:
    """Short day-month-year form, e.g. "21 Aug 2020"."""
    return f"{moment.day} {moment.strftime('%b %Y')}"


def to_iso(moment: datetime) -> str:
    """UTC ISO string with millisecond precision and a "Z" suffix."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )
