"""Calendar date math and display formatting.

All helpers work on datetime.date calendar fields. Dates cross the module
boundary as YYYY-MM-DD strings built from those fields, never by
formatting a UTC instant, so a reminder cannot drift a day near midnight.
"""

import calendar
from datetime import date, datetime

ISO_DATE_FORMAT = "%Y-%m-%d"

# Weekday numbers use Sunday = 0 .. Saturday = 6
WEEKDAY_NAMES = ["sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday"]
WEEKDAY_ABBREVIATIONS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

# Full or abbreviated weekday name; callers add their own word boundaries
WEEKDAY_PATTERN = (
    r"(?:sun(?:day)?|mon(?:day)?|tue(?:s(?:day)?)?|wed(?:nesday)?"
    r"|thu(?:r(?:s(?:day)?)?)?|fri(?:day)?|sat(?:urday)?)"
)

# Forms that cannot be mistaken for ordinary words ("tues", "thurs")
WEEKDAY_FULL_PATTERN = (
    r"(?:sunday|monday|tues(?:day)?|wednesday|thur(?:s(?:day)?)?|friday|saturday)"
)
# Three-letter forms ("sun", "sat") only count after one of these words
WEEKDAY_SHORT_PATTERN = r"(?:sun|mon|tue|wed|thu|fri|sat)"
WEEKDAY_LEAD_PATTERN = r"(?:on|next|this|every|by|due|starting|beginning|from)"

SATURDAY = 6
SUNDAY = 0


def js_weekday(day: date) -> int:
    """Weekday number with Sunday = 0, Saturday = 6."""
    return (day.weekday() + 1) % 7


def weekday_number(name: str) -> int | None:
    """Map a full or abbreviated weekday name to its number.

    Accepts "monday", "mon", "tues", "thurs" and similar, case-insensitively.
    """
    key = name.strip().lower()[:3]
    for number, full in enumerate(WEEKDAY_NAMES):
        if full[:3] == key:
            return number
    return None


def days_until(day: date, target_weekday: int) -> int:
    """Days from `day` forward to the next `target_weekday` (0 if it is today)."""
    return (target_weekday - js_weekday(day) + 7) % 7


def add_days(day: date, days: int) -> date:
    return date.fromordinal(day.toordinal() + days)


def add_months(day: date, months: int) -> date:
    """Add calendar months, clamping the day to the target month's length.

    Jan 31 + 1 month is Feb 28 (or 29), not a date in March.
    """
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def add_years(day: date, years: int) -> date:
    return add_months(day, 12 * years)


def format_iso_date(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD into a date. Raises ValueError if malformed."""
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def format_hhmm(hour: int, minute: int) -> str:
    """24-hour HH:MM."""
    return f"{hour:02d}:{minute:02d}"


def to_24_hour(hour: int, meridiem: str | None) -> int:
    """Convert a 12-hour clock reading to 24-hour.

    pm adds 12 unless the hour is 12; 12am becomes 0. Without a meridiem the
    hour is returned unchanged.
    """
    if not meridiem:
        return hour
    meridiem = meridiem.lower()
    if meridiem == "pm" and hour != 12:
        return hour + 12
    if meridiem == "am" and hour == 12:
        return 0
    return hour


def format_time(value: str | None) -> str:
    """Format HH:MM for display as "3:30 PM". Empty string for no time."""
    if not value:
        return ""
    hours, minutes = value.split(":")
    hour = int(hours)
    suffix = "PM" if hour >= 12 else "AM"
    return f"{hour % 12 or 12}:{minutes} {suffix}"


def format_date_label(value: str, today: date) -> str:
    """Human label for a due date: "Today", "Tomorrow" or "Oct 5"."""
    day = parse_iso_date(value)
    if day == today:
        return "Today"
    if day == add_days(today, 1):
        return "Tomorrow"
    return f"{calendar.month_abbr[day.month]} {day.day}"


def combine_local(due_date: str, due_time: str | None, default_time: str = "23:59") -> datetime:
    """Naive local datetime for a due date and optional HH:MM time."""
    hours, minutes = (due_time or default_time).split(":")
    day = parse_iso_date(due_date)
    return datetime(day.year, day.month, day.day, int(hours), int(minutes))
