"""
Rendering of the "last updated" timestamp.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Optional

OFFSET_PATTERN = re.compile(r"^\s*(?:GMT)?\s*([+-])?\s*(\d{1,2})\s*:\s*(\d{2})\s*$")

# Longest tokens first so that `YYYY` wins over `YY`
TOKEN_PATTERN = re.compile(r"YYYY|YY|DD|MM|HH|hh|mm|ss|AA|aa")


def parse_timezone_offset(offset: str) -> int:
    """
    Parse an offset like `+05:30` or `GMT-03:00` into minutes.

    The sign applies to both the hours and the minutes.
    """
    match = OFFSET_PATTERN.match(offset or "")
    if not match:
        raise ValueError(f"Invalid timezone offset '{offset}', expected format ±HH:MM")

    sign, hours, minutes = match.groups()
    if int(minutes) >= 60:
        raise ValueError(f"Invalid timezone offset '{offset}', minutes must be below 60")

    total = int(hours) * 60 + int(minutes)
    return -total if sign == "-" else total


def shifted_now(offset: str, now: Optional[datetime] = None) -> datetime:
    """
    Return the wall-clock time to display for the given offset.

    The UTC wall clock is taken and the offset, in minutes, is subtracted from it.
    The result is a naive datetime.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc).replace(tzinfo=None)
    return now - timedelta(minutes=parse_timezone_offset(offset))


def _two_digits(value: int) -> str:
    return f"{value:02d}"


def format_timestamp(moment: datetime, template: str) -> str:
    """
    Substitute the date tokens of `template` with the parts of `moment`.

    Tokens: `DD` day, `MM` month, `YYYY` year, `YY` two-digit year, `HH` 24-hour,
    `hh` 12-hour, `mm` minute, `ss` second, `AA`/`aa` upper/lower case meridiem.
    Everything but `YYYY` is zero-padded to two digits.

    Hours after noon are reduced modulo 12 and read "pm"; all other hours are kept
    as they are and read "am". So midnight renders as `00` and noon as `12 am`.
    """
    hour = moment.hour
    if hour > 12:
        hour_12 = hour % 12
        meridiem = "pm"
    else:
        hour_12 = hour
        meridiem = "am"

    values = {
        "YYYY": str(moment.year),
        "YY": _two_digits(moment.year % 100),
        "DD": _two_digits(moment.day),
        "MM": _two_digits(moment.month),
        "HH": _two_digits(moment.hour),
        "hh": _two_digits(hour_12),
        "mm": _two_digits(moment.minute),
        "ss": _two_digits(moment.second),
        "AA": meridiem.upper(),
        "aa": meridiem,
    }

    # Single pass, so substituted values are never re-read as tokens
    return TOKEN_PATTERN.sub(lambda m: values[m.group(0)], template)
