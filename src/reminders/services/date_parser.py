"""Due-date extraction.

An ordered rule table, first match wins. Dates are computed from the clock's
local calendar date; nothing here goes through a UTC string.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, timedelta

from reminders.services.clock import Clock
from reminders.services.dates import (
    SATURDAY,
    SUNDAY,
    WEEKDAY_FULL_PATTERN,
    WEEKDAY_LEAD_PATTERN,
    WEEKDAY_SHORT_PATTERN,
    add_days,
    days_until,
    format_hhmm,
    js_weekday,
    weekday_number,
)

DAY_WORD_CONFIDENCE = 20
RELATIVE_CONFIDENCE = 15

# "this morning" and friends imply a time when none was given
PART_OF_DAY_TIMES = {
    "morning": "09:00",
    "afternoon": "14:00",
    "evening": "18:00",
}
TONIGHT_TIME = "20:00"
EARLY_MORNING_TIME = "06:00"

# Full weekday names anywhere, three-letter forms only after a lead word
WEEKDAY_MENTION = re.compile(
    rf"\b(?:(?:on\s+)?(?P<full>{WEEKDAY_FULL_PATTERN})"
    rf"|{WEEKDAY_LEAD_PATTERN}\s+(?:next\s+)?(?P<short>{WEEKDAY_SHORT_PATTERN}))\b",
    re.IGNORECASE,
)


@dataclass
class DateMatch:
    """A due date recognized in text."""

    due_date: date
    confidence: int
    original_text: str
    # Applied only when no explicit time was found
    default_time: str | None = None
    # Applied unconditionally ("in 3 hours" fixes both date and time)
    exact_time: str | None = None


Resolver = Callable[[re.Match, str, Clock], DateMatch | None]


def _today(match: re.Match, text: str, clock: Clock) -> DateMatch:
    return DateMatch(clock.today(), DAY_WORD_CONFIDENCE, match.group(0))


def _tonight(match: re.Match, text: str, clock: Clock) -> DateMatch:
    return DateMatch(
        clock.today(), DAY_WORD_CONFIDENCE, match.group(0), default_time=TONIGHT_TIME
    )


def _tomorrow(match: re.Match, text: str, clock: Clock) -> DateMatch:
    return DateMatch(add_days(clock.today(), 1), DAY_WORD_CONFIDENCE, match.group(0))


def _next_week(match: re.Match, text: str, clock: Clock) -> DateMatch:
    return DateMatch(add_days(clock.today(), 7), RELATIVE_CONFIDENCE, match.group(0))


def _this_weekend(match: re.Match, text: str, clock: Clock) -> DateMatch:
    today = clock.today()
    if js_weekday(today) in (SATURDAY, SUNDAY):
        target = today
    else:
        target = add_days(today, days_until(today, SATURDAY))
    return DateMatch(target, RELATIVE_CONFIDENCE, match.group(0))


def _part_of_day_time(match: re.Match) -> str:
    part = match.group(2).lower()
    if match.group(1) and part == "morning":
        return EARLY_MORNING_TIME
    return PART_OF_DAY_TIMES[part]


def _this_part_of_day(match: re.Match, text: str, clock: Clock) -> DateMatch:
    return DateMatch(
        clock.today(),
        RELATIVE_CONFIDENCE,
        match.group(0),
        default_time=_part_of_day_time(match),
    )


def _in_days(match: re.Match, text: str, clock: Clock) -> DateMatch | None:
    try:
        target = add_days(clock.today(), int(match.group(1)))
    except (OverflowError, ValueError):
        return None
    return DateMatch(target, RELATIVE_CONFIDENCE, match.group(0))


def _in_hours(match: re.Match, text: str, clock: Clock) -> DateMatch | None:
    try:
        moment = clock.after(timedelta(hours=int(match.group(1))))
    except (OverflowError, ValueError):
        return None
    return DateMatch(
        moment.date(),
        RELATIVE_CONFIDENCE,
        match.group(0),
        exact_time=format_hhmm(moment.hour, moment.minute),
    )


def _in_weeks(match: re.Match, text: str, clock: Clock) -> DateMatch | None:
    try:
        target = add_days(clock.today(), 7 * int(match.group(1)))
    except (OverflowError, ValueError):
        return None
    return DateMatch(target, RELATIVE_CONFIDENCE, match.group(0))


def _weekday(match: re.Match, text: str, clock: Clock) -> DateMatch | None:
    target = weekday_number(match.group("full") or match.group("short"))
    if target is None:
        return None
    today = clock.today()
    diff = days_until(today, target)
    if diff == 0 and re.search(r"\bnext\b", text, re.IGNORECASE):
        diff = 7
    return DateMatch(add_days(today, diff), RELATIVE_CONFIDENCE, match.group(0))


DATE_RULES: list[tuple[re.Pattern, Resolver]] = [
    (re.compile(r"\btoday\b", re.IGNORECASE), _today),
    (re.compile(r"\btonight\b", re.IGNORECASE), _tonight),
    (re.compile(r"\btomorrow\b", re.IGNORECASE), _tomorrow),
    (re.compile(r"\bnext\s+week\b", re.IGNORECASE), _next_week),
    (re.compile(r"\bthis\s+weekend\b", re.IGNORECASE), _this_weekend),
    (
        re.compile(r"\bthis\s+(?:(early)\s+)?(morning|afternoon|evening)\b", re.IGNORECASE),
        _this_part_of_day,
    ),
    (re.compile(r"\bin\s+(\d+)\s+days?\b", re.IGNORECASE), _in_days),
    (re.compile(r"\bin\s+(\d+)\s+hours?\b", re.IGNORECASE), _in_hours),
    (re.compile(r"\bin\s+(\d+)\s+weeks?\b", re.IGNORECASE), _in_weeks),
    (WEEKDAY_MENTION, _weekday),
]


class DateExtractor:
    """Extracts a due date from free text relative to the clock's today."""

    def __init__(self, rules: list[tuple[re.Pattern, Resolver]] | None = None):
        self.rules = rules if rules is not None else DATE_RULES

    def extract(self, text: str, clock: Clock) -> DateMatch | None:
        for pattern, resolve in self.rules:
            match = pattern.search(text)
            if match is None:
                continue
            result = resolve(match, text, clock)
            if result is not None:
                return result
        return None
