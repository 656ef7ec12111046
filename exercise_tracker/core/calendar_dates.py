"""Calendar Dates — parsing and display of time-less dates. Pure, no IO.

Invariants:
    - parse_calendar_date never raises: unparseable input returns None
    - ISO "YYYY-MM-DD" with month 1-12 and day 1-31 always parses; days past the
      end of the month roll over ("2024-02-30" -> 2024-03-01)
    - format_display_date output parses back via parse_calendar_date

Design Decisions:
    - Rollover instead of rejection for impossible days: matches how browsers and
      JS clients construct dates from the same string
    - Fixed C-locale display format ("Mon Jan 01 2024"): stable across hosts
"""

import re
from datetime import date, datetime, timedelta

DISPLAY_FORMAT = "%a %b %d %Y"

_ISO_DATE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")

_TEXT_FORMATS = (
    DISPLAY_FORMAT,
    "%b %d %Y",
    "%B %d %Y",
    "%b %d, %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%d %B %Y",
    "%m/%d/%Y",
    "%Y/%m/%d",
)


def parse_calendar_date(raw: str) -> date | None:
    """Parse a calendar date from user input, or None if unparseable."""
    text = raw.strip()
    if not text:
        return None

    match = _ISO_DATE.match(text)
    if match:
        year, month, day = (int(g) for g in match.groups())
        return _rolled_over(year, month, day)

    try:
        # Full ISO timestamps: time-of-day is discarded
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass

    for fmt in _TEXT_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def _rolled_over(year: int, month: int, day: int) -> date | None:
    if year < 1 or not 1 <= month <= 12 or not 1 <= day <= 31:
        return None
    try:
        return date(year, month, 1) + timedelta(days=day - 1)
    except OverflowError:
        return None


def resolve_entry_date(raw: str | None, today: date) -> date:
    """Date for a new exercise entry: parsed input, else today."""
    if not raw:
        return today
    return parse_calendar_date(raw) or today


def format_display_date(value: date) -> str:
    """Render a calendar date as 'Mon Jan 01 2024'."""
    return value.strftime(DISPLAY_FORMAT)
