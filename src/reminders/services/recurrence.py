"""Recurrence inference.

Rules run top to bottom and the first match wins. Explicit phrasing ("every 3
days", "every monday") sits above the semantic guesses ("vitamins" means
daily) so that a stated interval is never overridden by a domain heuristic.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

from reminders.services.dates import WEEKDAY_ABBREVIATIONS, WEEKDAY_PATTERN, weekday_number
from reminders.services.models import (
    ParsedReminder,
    Recurrence,
    RecurrenceRule,
    RecurrenceUnit,
    Reminder,
)

EXPLICIT_CONFIDENCE = 15
KEYWORD_CONFIDENCE = 10
ALTERNATE_CONFIDENCE = 12

UNIT_BY_WORD = {
    "day": RecurrenceUnit.DAYS,
    "week": RecurrenceUnit.WEEKS,
    "month": RecurrenceUnit.MONTHS,
    "year": RecurrenceUnit.YEARS,
}

# Recurrence named for an interval of one unit
SINGLE_INTERVAL = {
    RecurrenceUnit.DAYS: Recurrence.DAILY,
    RecurrenceUnit.WEEKS: Recurrence.WEEKLY,
    RecurrenceUnit.MONTHS: Recurrence.MONTHLY,
    RecurrenceUnit.YEARS: Recurrence.YEARLY,
}

_DAY = rf"\b{WEEKDAY_PATTERN}\b"
_DAY_SEPARATOR = r"(?:\s*,\s*(?:and\s+)?|\s+and\s+)"

EVERY_N_UNITS = re.compile(r"\bevery\s+(\d+)\s+(day|week|month|year)s?\b", re.IGNORECASE)
EVERY_DAY_LIST = re.compile(rf"\bevery\s+({_DAY}(?:{_DAY_SEPARATOR}{_DAY})+)", re.IGNORECASE)
EVERY_WEEKDAY = re.compile(rf"\bevery\s+({_DAY})", re.IGNORECASE)
WEEKDAY_TOKEN = re.compile(_DAY, re.IGNORECASE)


@dataclass
class RecurrenceMatch:
    """A recurrence rule recognized in text."""

    rule: RecurrenceRule
    confidence: int
    original_text: str


def _rule(recurrence: Recurrence, interval: int, unit: RecurrenceUnit) -> RecurrenceRule:
    return RecurrenceRule(recurrence=recurrence, interval=interval, unit=unit)


def _every_n_units(match: re.Match) -> RecurrenceRule | None:
    try:
        interval = int(match.group(1))
    except ValueError:
        return None
    if interval < 1:
        return None
    unit = UNIT_BY_WORD[match.group(2).lower()]
    recurrence = SINGLE_INTERVAL[unit] if interval == 1 else Recurrence.CUSTOM
    return _rule(recurrence, interval, unit)


def _weekly_on(match: re.Match) -> RecurrenceRule | None:
    days = sorted({weekday_number(token) for token in WEEKDAY_TOKEN.findall(match.group(1))})
    return RecurrenceRule(
        recurrence=Recurrence.WEEKLY,
        interval=1,
        unit=RecurrenceUnit.WEEKS,
        days=days,
    )


def _constant(rule: RecurrenceRule) -> Callable[[re.Match], RecurrenceRule | None]:
    return lambda match: rule


DAILY = _rule(Recurrence.DAILY, 1, RecurrenceUnit.DAYS)
WEEKLY = _rule(Recurrence.WEEKLY, 1, RecurrenceUnit.WEEKS)
MONTHLY = _rule(Recurrence.MONTHLY, 1, RecurrenceUnit.MONTHS)
YEARLY = _rule(Recurrence.YEARLY, 1, RecurrenceUnit.YEARS)
EVERY_OTHER_DAY = _rule(Recurrence.CUSTOM, 2, RecurrenceUnit.DAYS)
BIWEEKLY = _rule(Recurrence.CUSTOM, 2, RecurrenceUnit.WEEKS)
BIMONTHLY = _rule(Recurrence.CUSTOM, 2, RecurrenceUnit.MONTHS)
QUARTERLY = _rule(Recurrence.CUSTOM, 3, RecurrenceUnit.MONTHS)
SEMIANNUAL = _rule(Recurrence.CUSTOM, 6, RecurrenceUnit.MONTHS)
BIENNIAL = _rule(Recurrence.CUSTOM, 2, RecurrenceUnit.YEARS)


def _pattern(regex: str) -> re.Pattern:
    return re.compile(regex, re.IGNORECASE)


# Checked against the whole text: (pattern, resolver, confidence, exclusion)
RecurrenceRuleEntry = tuple[
    re.Pattern,
    Callable[[re.Match], RecurrenceRule | None],
    int,
    re.Pattern | None,
]

EXPLICIT_RULES: list[RecurrenceRuleEntry] = [
    (EVERY_N_UNITS, _every_n_units, EXPLICIT_CONFIDENCE, None),
    (EVERY_DAY_LIST, _weekly_on, EXPLICIT_CONFIDENCE, None),
    (EVERY_WEEKDAY, _weekly_on, EXPLICIT_CONFIDENCE, None),
]

# "bi-weekly" must not count as "weekly", hence the lookbehinds
KEYWORD_RULES: list[RecurrenceRuleEntry] = [
    (_pattern(r"\bevery\s*day\b|(?<![\w-])daily\b"), _constant(DAILY), KEYWORD_CONFIDENCE, None),
    (_pattern(r"\bevery\s*week\b|(?<![\w-])weekly\b"), _constant(WEEKLY), KEYWORD_CONFIDENCE, None),
    (
        _pattern(r"\bevery\s*month\b|(?<![\w-])monthly\b"),
        _constant(MONTHLY),
        KEYWORD_CONFIDENCE,
        None,
    ),
    (
        _pattern(r"\bevery\s*year\b|(?<![\w-])yearly\b|\bannually\b"),
        _constant(YEARLY),
        KEYWORD_CONFIDENCE,
        None,
    ),
]

ALTERNATE_RULES: list[RecurrenceRuleEntry] = [
    (
        _pattern(r"\bbi-?weekly\b|\bevery\s+other\s+week\b|\bevery\s+2\s+weeks\b"),
        _constant(BIWEEKLY),
        ALTERNATE_CONFIDENCE,
        None,
    ),
    (
        _pattern(r"\bbi-?monthly\b|\bevery\s+other\s+month\b|\bevery\s+2\s+months\b"),
        _constant(BIMONTHLY),
        ALTERNATE_CONFIDENCE,
        None,
    ),
    (_pattern(r"\bevery\s+other\s+day\b"), _constant(EVERY_OTHER_DAY), ALTERNATE_CONFIDENCE, None),
    (_pattern(r"\bevery\s+other\s+year\b"), _constant(BIENNIAL), ALTERNATE_CONFIDENCE, None),
]

SEMANTIC_RULES: list[RecurrenceRuleEntry] = [
    (_pattern(r"\bbirthday\b"), _constant(YEARLY), 10, None),
    (_pattern(r"\banniversary\b"), _constant(YEARLY), 10, None),
    (_pattern(r"\b(?:medication|medicine|vitamins?|pills?|meds)\b"), _constant(DAILY), 8, None),
    (_pattern(r"\b(?:rent|mortgage)\b"), _constant(MONTHLY), 8, _pattern(r"paid|pay.*off")),
    (_pattern(r"\b(?:paycheck|payday|salary)\b"), _constant(BIWEEKLY), 6, None),
    (_pattern(r"\b(?:subscription|renewal|renew)\b"), _constant(MONTHLY), 6, None),
    (_pattern(r"\b(?:trash|garbage|recycling|bins)\b"), _constant(WEEKLY), 8, None),
    (_pattern(r"\bwater\s*(?:the\s*)?(?:plants?|flowers?|garden)\b"), _constant(WEEKLY), 6, None),
    (_pattern(r"\b(?:gym|workout|exercise)\b"), _constant(EVERY_OTHER_DAY), 5, None),
    (_pattern(r"\bfeed\s*(?:the\s*|my\s*)?(?:cat|dog|pet|fish|bird)s?\b"), _constant(DAILY), 8, None),
    (_pattern(r"\bwalk\s*(?:the\s*|my\s*)?(?:dog|puppy)\b"), _constant(DAILY), 8, None),
    (_pattern(r"\boil\s*change\b"), _constant(QUARTERLY), 6, None),
    (_pattern(r"\bhaircut\b"), _constant(MONTHLY), 5, None),
    (_pattern(r"\bdentist\b"), _constant(SEMIANNUAL), 5, _pattern(r"appointment|tomorrow|today")),
]

RECURRENCE_RULES: list[RecurrenceRuleEntry] = (
    EXPLICIT_RULES + KEYWORD_RULES + ALTERNATE_RULES + SEMANTIC_RULES
)


class RecurrenceInferencer:
    """Infers a recurrence rule from free text."""

    def __init__(self, rules: list[RecurrenceRuleEntry] | None = None):
        self.rules = rules if rules is not None else RECURRENCE_RULES

    def infer(self, text: str) -> RecurrenceMatch | None:
        for pattern, resolve, confidence, exclusion in self.rules:
            if exclusion is not None and exclusion.search(text):
                continue
            match = pattern.search(text)
            if match is None:
                continue
            rule = resolve(match)
            if rule is not None:
                return RecurrenceMatch(rule=rule, confidence=confidence, original_text=match.group(0))
        return None


def format_recurrence(item: ParsedReminder | Reminder) -> str:
    """Short display label such as "Daily", "Weekly on Mon, Wed" or "Every 3 days"."""
    if item.recurrence == Recurrence.NONE:
        return ""
    if item.recurrence == Recurrence.WEEKLY and item.recurrence_days:
        names = ", ".join(WEEKDAY_ABBREVIATIONS[day] for day in item.recurrence_days)
        return f"Weekly on {names}"
    if item.recurrence == Recurrence.CUSTOM:
        if item.recurrence_interval and item.recurrence_unit:
            return f"Every {item.recurrence_interval} {item.recurrence_unit.value}"
        return ""
    return item.recurrence.value.capitalize()
