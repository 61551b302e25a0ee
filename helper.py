import re

from errors import InvalidArgumentError

# every reservation occupies its table for one fixed seating
SEATING_DURATION_MINUTES = 180

_TIME_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*([AaPp][Mm])\s*$", re.ASCII)
_DIGITS_RE = re.compile(r"(\d+)", re.ASCII)


def parse_time(value: str) -> int:
    """
    Parses a 12-hour clock string such as "7:00 PM" into minutes since midnight.

    "12" in the hour position counts as zero before the PM offset is added,
    so "12:30 AM" is 30 and "12:30 PM" is 750.

    Raises:
        InvalidArgumentError: if the value is not of the form "H:MM AM|PM"
            with an hour in 1-12 and a minute in 00-59.
    """
    if not isinstance(value, str):
        raise InvalidArgumentError(f"Invalid time {value!r}, expected 'H:MM AM' or 'H:MM PM'")

    match = _TIME_RE.match(value)
    if not match:
        raise InvalidArgumentError(f"Invalid time {value!r}, expected 'H:MM AM' or 'H:MM PM'")

    hours, minutes, meridiem = int(match.group(1)), int(match.group(2)), match.group(3).upper()
    if not 1 <= hours <= 12:
        raise InvalidArgumentError(f"Invalid hour in time {value!r}")
    if minutes > 59:
        raise InvalidArgumentError(f"Invalid minute in time {value!r}")

    if hours == 12:
        hours = 0
    if meridiem == "PM":
        hours += 12
    return hours * 60 + minutes


def seating_window(start_minutes: int) -> tuple[int, int]:
    """Half-open [start, end) window of one seating. The end may pass 1440."""
    return start_minutes, start_minutes + SEATING_DURATION_MINUTES


def windows_overlap(a: tuple[int, int], b: tuple[int, int]) -> bool:
    # back-to-back windows share only an endpoint and do not overlap
    return a[0] < b[1] and a[1] > b[0]


def natural_sort_key(name) -> list:
    """Sort key under which "Table 2" comes before "Table 10"."""
    parts = _DIGITS_RE.split((name or "").casefold())
    # split() alternates text and digit runs, so odd positions are numbers
    return [int(part) if i % 2 else part for i, part in enumerate(parts)]


def slugify(name: str) -> str:
    slug = name.lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[\s_-]+", "-", slug)
    return slug.strip("-") or "restaurant"
