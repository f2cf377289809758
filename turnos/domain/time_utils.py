"""
Time helpers for appointments.

Appointment times are stored as ISO-8601 strings in a fixed ``-03:00`` offset
(Argentina does not observe DST). Keeping a single representation makes the
lexicographic range queries on ``start_time`` equivalent to chronological ones.
"""

import re
from datetime import date, datetime, timedelta, timezone

import pytz

AR_TZ = pytz.FixedOffset(-3 * 60)
AR_OFFSET_SUFFIX = "-03:00"

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")

# datetime.weekday(): lunes = 0
SPANISH_WEEKDAYS = ["lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo"]
SPANISH_MONTHS = [
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
]


def parse_iso_datetime(value: str) -> datetime:
    """
    Parse an ISO-8601 string into an aware datetime.

    Accepts a trailing ``Z`` and any numeric offset. Naive values are read as
    Argentina wall-clock time.

    Raises:
        ValueError: If the string is not a valid ISO-8601 datetime
    """
    text = value.strip()
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = AR_TZ.localize(parsed)
    return parsed


def to_ar_iso(moment: datetime) -> str:
    """Format a datetime as ``YYYY-MM-DDTHH:MM:SS-03:00``."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(AR_TZ).strftime("%Y-%m-%dT%H:%M:%S") + AR_OFFSET_SUFFIX


def normalize_start_time(value: str) -> str:
    """Re-express any ISO-8601 datetime in the stored ``-03:00`` representation."""
    return to_ar_iso(parse_iso_datetime(value))


def end_time_from_start(start_time: str, minutes: int = 30) -> str:
    """
    Compute the end of an appointment as start + ``minutes`` in UTC-3.

    The result is re-derived from wall-clock fields, so it rolls over days,
    months and years correctly (``23:45`` -> next day ``00:15``).
    """
    return to_ar_iso(parse_iso_datetime(start_time) + timedelta(minutes=minutes))


def form_start_time(date_str: str, time_str: str) -> str:
    """
    Build the start time for the Google Form shape from ``YYYY-MM-DD`` and ``HH:mm``.

    Raises:
        ValueError: If either part is malformed or not a real calendar value
    """
    date_str = date_str.strip()
    time_str = time_str.strip()
    if not DATE_PATTERN.match(date_str):
        raise ValueError(f"Invalid date '{date_str}', expected YYYY-MM-DD")
    match = TIME_PATTERN.match(time_str)
    if not match:
        raise ValueError(f"Invalid time '{time_str}', expected HH:mm")

    hour, minute = int(match.group(1)), int(match.group(2))
    # Validates month/day ranges and the clock fields
    datetime.strptime(f"{date_str} {hour:02d}:{minute:02d}", "%Y-%m-%d %H:%M")
    return f"{date_str}T{hour:02d}:{minute:02d}:00{AR_OFFSET_SUFFIX}"


def parse_query_date(value: str) -> date:
    """
    Validate a ``YYYY-MM-DD`` query parameter.

    Raises:
        ValueError: If the format or the calendar date is invalid
    """
    if not DATE_PATTERN.match(value):
        raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD")
    return datetime.strptime(value, "%Y-%m-%d").date()


def day_range_bounds(from_date: str, to_date: str) -> tuple[str, str]:
    """Inclusive ``start_time`` bounds covering whole days ``from_date``..``to_date``."""
    return f"{from_date}T00:00:00{AR_OFFSET_SUFFIX}", f"{to_date}T23:59:59{AR_OFFSET_SUFFIX}"


def format_spanish_date(moment: datetime) -> str:
    """Format as ``viernes 13 de febrero`` using Argentina wall-clock time."""
    local = moment.astimezone(AR_TZ)
    return f"{SPANISH_WEEKDAYS[local.weekday()]} {local.day} de {SPANISH_MONTHS[local.month - 1]}"


def format_hour(moment: datetime) -> str:
    """Format as ``HH:MM`` using Argentina wall-clock time."""
    return moment.astimezone(AR_TZ).strftime("%H:%M")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """Current UTC time as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    return utc_now().isoformat(timespec="milliseconds").replace("+00:00", "Z")
