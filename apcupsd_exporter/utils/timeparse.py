import re
from datetime import datetime, timedelta, timezone
from typing import Optional

# apcupsd writes "2016-09-06 22:13:28 -0400"; very old releases wrote
# "Tue Sep 06 22:13:28 EDT 2016" with no numeric offset.
_TIME_FORMAT_LONG = "%Y-%m-%d %H:%M:%S %z"
_TIME_FORMAT_LEGACY = "%a %b %d %H:%M:%S %Y"

_DURATION_UNITS = {
    "second": 1,
    "seconds": 1,
    "minute": 60,
    "minutes": 60,
    "hour": 3600,
    "hours": 3600,
}

NOT_AVAILABLE = "N/A"


def parse_duration(value: str) -> timedelta:
    """
    Parse an apcupsd duration such as '2.0 Minutes' or '30 Seconds'.

    A bare number is taken as seconds.
    """
    if not isinstance(value, str):
        raise ValueError("Invalid duration format")

    match = re.fullmatch(r"\s*(-?\d+(?:\.\d+)?)\s*([A-Za-z]*)\s*", value)
    if not match:
        raise ValueError(f"Invalid duration format: {value!r}")

    amount, unit = match.groups()
    unit = unit.lower() or "seconds"
    if unit not in _DURATION_UNITS:
        raise ValueError(f"Invalid duration unit: {unit!r}")

    return timedelta(seconds=float(amount) * _DURATION_UNITS[unit])


def parse_timestamp(value: str) -> Optional[datetime]:
    """
    Parse an apcupsd event timestamp.

    Returns None when apcupsd has not recorded the event yet.
    """
    value = value.strip()
    if not value or value == NOT_AVAILABLE:
        return None

    try:
        return datetime.strptime(value, _TIME_FORMAT_LONG)
    except ValueError:
        pass

    # Drop the zone abbreviation; the legacy format has no usable offset.
    parts = value.split()
    if len(parts) == 6:
        legacy = " ".join(parts[:4] + parts[5:])
        try:
            return datetime.strptime(legacy, _TIME_FORMAT_LEGACY).replace(tzinfo=timezone.utc)
        except ValueError:
            pass

    raise ValueError(f"Invalid timestamp format: {value!r}")
