"""Time-of-day extraction.

Named moments ("noon", "evening") are checked before numeric times, and the
numeric patterns run from most to least specific so that "at 3:30pm" is
never cut down to a bare "30pm".
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

from reminders.services.dates import format_hhmm, to_24_hour

NAMED_MOMENT_CONFIDENCE = 15
PART_OF_DAY_CONFIDENCE = 10
NUMERIC_TIME_CONFIDENCE = 20

# "this morning" and "this early morning" belong to the date parser
_NOT_AFTER_THIS = r"(?<!\bthis\s)(?<!\bthis\searly\s)"


@dataclass
class TimeMatch:
    """A time of day recognized in text."""

    time: str  # HH:MM, 24-hour
    confidence: int
    original_text: str


def _morning(match: re.Match, text: str) -> str | None:
    return "06:00" if match.group(1) else "09:00"


def _night(match: re.Match, text: str) -> str | None:
    if re.search(r"\btonight\b", text, re.IGNORECASE):
        return None
    return "21:00"


def _fixed(value: str) -> Callable[[re.Match, str], str | None]:
    return lambda match, text: value


def _clock_reading(match: re.Match, text: str) -> str | None:
    """Resolve hour/minute/meridiem groups, rejecting impossible readings."""
    groups = match.groupdict()
    hour = int(groups["hour"])
    minute = int(groups.get("minute") or 0)
    meridiem = groups.get("meridiem")
    if minute > 59:
        return None
    if meridiem:
        if not 1 <= hour <= 12:
            return None
    elif hour > 23:
        return None
    return format_hhmm(to_24_hour(hour, meridiem), minute)


# (pattern, resolver, confidence); a resolver returning None means "no match here"
Rule = tuple[re.Pattern, Callable[[re.Match, str], str | None], int]

NAMED_MOMENTS: list[Rule] = [
    (re.compile(r"\bmidnight\b", re.I), _fixed("00:00"), NAMED_MOMENT_CONFIDENCE),
    (re.compile(r"\b(?:noon|midday)\b", re.I), _fixed("12:00"), NAMED_MOMENT_CONFIDENCE),
    (
        re.compile(r"\b(?:end\s+of\s+(?:the\s+)?day|eod)\b", re.I),
        _fixed("17:00"),
        NAMED_MOMENT_CONFIDENCE,
    ),
    (
        re.compile(rf"{_NOT_AFTER_THIS}\b(early\s+)?morning\b", re.I),
        _morning,
        PART_OF_DAY_CONFIDENCE,
    ),
    (
        re.compile(rf"{_NOT_AFTER_THIS}\bevening\b", re.I),
        _fixed("18:00"),
        PART_OF_DAY_CONFIDENCE,
    ),
    (
        re.compile(rf"{_NOT_AFTER_THIS}\bafternoon\b", re.I),
        _fixed("14:00"),
        PART_OF_DAY_CONFIDENCE,
    ),
    (re.compile(r"\bnight\b", re.I), _night, PART_OF_DAY_CONFIDENCE),
]

NUMERIC_TIMES: list[Rule] = [
    # at 3:30pm, at 15:30
    (
        re.compile(r"\bat\s+(?P<hour>\d{1,2}):(?P<minute>\d{2})\s*(?P<meridiem>am|pm)?\b", re.I),
        _clock_reading,
        NUMERIC_TIME_CONFIDENCE,
    ),
    # at 3pm
    (
        re.compile(r"\bat\s+(?P<hour>\d{1,2})\s*(?P<meridiem>am|pm)\b", re.I),
        _clock_reading,
        NUMERIC_TIME_CONFIDENCE,
    ),
    # 3:30pm
    (
        re.compile(r"\b(?P<hour>\d{1,2}):(?P<minute>\d{2})\s*(?P<meridiem>am|pm)\b", re.I),
        _clock_reading,
        NUMERIC_TIME_CONFIDENCE,
    ),
    # 3pm
    (
        re.compile(r"\b(?P<hour>\d{1,2})\s*(?P<meridiem>am|pm)\b", re.I),
        _clock_reading,
        NUMERIC_TIME_CONFIDENCE,
    ),
]

TIME_RULES: list[Rule] = NAMED_MOMENTS + NUMERIC_TIMES


class TimeExtractor:
    """Extracts a time of day from free text. First matching rule wins."""

    def __init__(self, rules: list[Rule] | None = None):
        self.rules = rules if rules is not None else TIME_RULES

    def extract(self, text: str) -> TimeMatch | None:
        for pattern, resolve, confidence in self.rules:
            for match in pattern.finditer(text):
                value = resolve(match, text)
                if value is not None:
                    return TimeMatch(
                        time=value,
                        confidence=confidence,
                        original_text=match.group(0),
                    )
        return None
