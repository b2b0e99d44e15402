"""Timeframe tokens and the date windows they cover."""

import calendar
import re
from datetime import date, datetime, timedelta, timezone

from gold_api.services.errors import InvalidParameterError

DEFAULT_TIMEFRAME = "1M"

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# token -> (days, months)
_WINDOWS: dict[str, tuple[int, int]] = {
    "1D": (1, 0),
    "1W": (7, 0),
    "1M": (0, 1),
    "3M": (0, 3),
    "6M": (0, 6),
    "1Y": (0, 12),
    "ALL": (0, 60),
}

SUPPORTED_TIMEFRAMES = tuple(_WINDOWS)


def normalize_timeframe(timeframe: str | None) -> str:
    """Return the token if it is supported exactly as written, else 1M.

    Matching is case-sensitive: "1w" is not "1W".
    """
    return timeframe if timeframe in SUPPORTED_TIMEFRAMES else DEFAULT_TIMEFRAME


def _shift_months(d: date, months: int) -> date:
    # Clamp to month end, e.g. Mar 31 minus one month is Feb 28/29
    month_index = d.year * 12 + (d.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def get_date_range(timeframe: str | None, today: date | None = None) -> tuple[str, str]:
    """Return (start, end) ISO dates for a timeframe, ending today (UTC)."""
    end = today or datetime.now(timezone.utc).date()
    days, months = _WINDOWS[normalize_timeframe(timeframe)]
    start = _shift_months(end, months) - timedelta(days=days)
    return start.isoformat(), end.isoformat()


def validate_iso_date(value: str) -> str:
    """Check a YYYY-MM-DD string names a real calendar day."""
    if not _ISO_DATE.match(value):
        raise InvalidParameterError("Date must be in YYYY-MM-DD format")
    try:
        date.fromisoformat(value)
    except ValueError as e:
        raise InvalidParameterError(f"{value} is not a valid calendar date") from e
    return value
