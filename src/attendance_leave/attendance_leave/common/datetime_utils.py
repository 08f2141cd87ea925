from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Tuple, Union

from ..core.constants import HALF_DAY_MARKERS, TIMESTAMP_FORMAT

DDMMYYYY_PATTERN = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")

# Formats seen in the Timestamp column: our own writes, ISO and Google Forms style.
SHEET_TIMESTAMP_FORMATS = (
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%d/%m/%Y %H:%M:%S",
    "%d/%m/%Y %H:%M",
    "%d/%m/%Y",
)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """``YYYY-MM-DD HH:MM:SS.mmm`` in UTC (naive values are taken as UTC)."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return f"{moment.strftime(TIMESTAMP_FORMAT)}.{moment.microsecond // 1000:03d}"


def parse_sheet_timestamp(value: str) -> Optional[datetime]:
    """Parse a Timestamp cell into a naive local datetime, or None."""
    text = (value or "").strip()
    if not text:
        return None
    for fmt in SHEET_TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def parse_query_date(value: str) -> date:
    """Parse the ``date`` query parameter (ISO date/datetime or DD/MM/YYYY).

    Raises ValueError when the value is not a date.
    """
    text = (value or "").strip()
    match = DDMMYYYY_PATTERN.match(text)
    if match:
        day, month, year = (int(p) for p in match.groups())
        return date(year, month, day)
    try:
        return parse_iso_date(text)
    except ValueError:
        pass
    parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed.date()


def day_window(day: date) -> Tuple[datetime, datetime]:
    start = datetime.combine(day, datetime.min.time())
    return start, start + timedelta(days=1)


def format_date_ddmmyyyy(value: Union[date, datetime, str, None]) -> str:
    if not value:
        return ""
    if isinstance(value, (date, datetime)):
        d = value
    else:
        try:
            d = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return ""
    return f"{d.day:02d}/{d.month:02d}/{d.year:04d}"


def parse_ddmmyyyy_to_iso(value: Optional[str]) -> str:
    """Convert ``D/M/YYYY`` into ``YYYY-MM-DD``; empty string when invalid."""
    if not value or "/" not in value:
        return ""
    parts = value.split("/")
    if len(parts) != 3:
        return ""
    day, month, year = (p.strip() for p in parts)
    try:
        d = date(int(year), int(month), int(day))
    except ValueError:
        return ""
    return d.isoformat()


def validate_ddmmyyyy(value: Optional[str], *, today: Optional[date] = None) -> bool:
    """True for a real ``D/M/YYYY`` date that is not in the past."""
    if not value or not isinstance(value, str):
        return False
    if not DDMMYYYY_PATTERN.match(value):
        return False
    iso = parse_ddmmyyyy_to_iso(value)
    if not iso:
        return False
    today = today or now_local().date()
    return parse_iso_date(iso) >= today


def calculate_days(from_date: Optional[str], to_date: Optional[str], time_slot: Optional[str]) -> str:
    """Number of leave days between two DD/MM/YYYY dates, inclusive.

    A single-day request on a half-day slot counts as "0.5". Returns "" when a
    date is missing or invalid, or when from_date is after to_date.
    """
    if not from_date or not to_date:
        return ""

    from_iso = parse_ddmmyyyy_to_iso(from_date)
    to_iso = parse_ddmmyyyy_to_iso(to_date)
    if not from_iso or not to_iso:
        return ""

    start = parse_iso_date(from_iso)
    end = parse_iso_date(to_iso)
    if start > end:
        return ""

    is_half_day = bool(time_slot) and any(marker in time_slot for marker in HALF_DAY_MARKERS)
    if from_date == to_date and is_half_day:
        return "0.5"

    return str((end - start).days + 1)
