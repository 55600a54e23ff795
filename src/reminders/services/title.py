"""Title extraction: strip every recognized token from the raw text.

The rules form an ordered rewrite pipeline over the original-cased text.
Within each stage the most specific pattern runs first: "every 3 days" must
go before the bare "every day" rule would get a chance to leave "3 days"
behind, and "bi-weekly" before "weekly" would leave a stray "bi-".
Stages run filler, recurrence, time, date, priority, then cleanup, because
the cleanup rules assume the noise around connectors is already gone.
"""

import re

from reminders.services.dates import (
    WEEKDAY_FULL_PATTERN,
    WEEKDAY_LEAD_PATTERN,
    WEEKDAY_PATTERN,
    WEEKDAY_SHORT_PATTERN,
)

_DAY = rf"\b{WEEKDAY_PATTERN}\b"
_DAY_SEPARATOR = r"(?:\s*,\s*(?:and\s+)?|\s+and\s+)"

# Connectors that only make sense in front of a date phrase
_DATE_LEAD = r"(?:\b(?:starting|beginning|from|by|due|on)\s+)?"

# Time-of-day words owned by the date phrases "this morning" etc.
_NOT_AFTER_THIS = r"(?<!\bthis\s)(?<!\bthis\searly\s)"


def _rules(*patterns: str) -> list[tuple[re.Pattern, str]]:
    return [(re.compile(pattern, re.IGNORECASE), "") for pattern in patterns]


FILLER_RULES = _rules(
    r"^\s*remind\s+me\s+(?:to\s+)?",
    r"^\s*(?:don't|don’t|dont|do\s+not)\s+forget\s+(?:to\s+)?",
    r"^\s*i\s+need\s+to\s+",
    r"^\s*need\s+to\s+",
)

RECURRENCE_RULES = _rules(
    r"\bevery\s+\d+\s+(?:day|week|month|year)s?\b",
    rf"\bevery\s+{_DAY}(?:{_DAY_SEPARATOR}{_DAY})*",
    r"\bevery\s+other\s+(?:day|week|month|year)\b",
    r"\bbi-?weekly\b",
    r"\bbi-?monthly\b",
    r"\bevery\s*day\b",
    r"\bevery\s*week\b",
    r"\bevery\s*month\b",
    r"\bevery\s*year\b",
    r"\bdaily\b",
    r"\bweekly\b",
    r"\bmonthly\b",
    r"\byearly\b",
    r"\bannually\b",
)

TIME_RULES = _rules(
    r"\bat\s+\d{1,2}(?::\d{2})?\s*(?:am|pm)?\b",
    r"\b\d{1,2}:\d{2}\s*(?:am|pm)\b",
    r"\b\d{1,2}\s*(?:am|pm)\b",
    r"\b(?:(?:at|by|around)\s+)?(?:midnight|noon|midday|end\s+of\s+(?:the\s+)?day|eod)\b",
    rf"{_NOT_AFTER_THIS}\b(?:in\s+the\s+)?(?:early\s+)?(?:morning|afternoon|evening)\b",
    r"\b(?:at\s+)?night\b",
)

DATE_RULES = _rules(
    rf"{_DATE_LEAD}\btoday\b",
    rf"{_DATE_LEAD}\btomorrow\b",
    rf"{_DATE_LEAD}\btonight\b",
    rf"{_DATE_LEAD}\bnext\s+week\b",
    rf"{_DATE_LEAD}\bthis\s+weekend\b",
    rf"{_DATE_LEAD}\bthis\s+(?:early\s+)?(?:morning|afternoon|evening)\b",
    rf"{_DATE_LEAD}\bin\s+\d+\s+(?:days?|hours?|weeks?|months?)\b",
    rf"{_DATE_LEAD}\b(?:next\s+|this\s+)?\b{WEEKDAY_FULL_PATTERN}\b",
    rf"\b{WEEKDAY_LEAD_PATTERN}\s+(?:next\s+)?{WEEKDAY_SHORT_PATTERN}\b",
)

PRIORITY_RULES = _rules(
    r"\burgent\b",
    r"\basap\b",
    r"\bimmediately\b",
    r"\bcritical\b",
    r"\bemergency\b",
    r"\bimportant\b",
    r"\bcrucial\b",
    r"\bhigh\s+priority\b",
    r"\blow\s+priority\b",
    r"\b(?:medium|normal)\s+priority\b",
    r"\bno\s+rush\b",
    r"\bwhenever\b",
    r"\beventually\b",
)

CLEANUP_RULES = [
    (re.compile(r"\s+to\s*$", re.IGNORECASE), ""),
    (re.compile(r"^\s*to\s+", re.IGNORECASE), ""),
    (re.compile(r"\s+"), " "),
    (re.compile(r"^[\s,;:\-]+|[\s,;:\-]+$"), ""),
]

TITLE_RULES: list[tuple[re.Pattern, str]] = (
    FILLER_RULES + RECURRENCE_RULES + TIME_RULES + DATE_RULES + PRIORITY_RULES + CLEANUP_RULES
)


def strip_tokens(text: str, rules: list[tuple[re.Pattern, str]] | None = None) -> str:
    """Apply the rewrite rules in order and return what is left, trimmed."""
    for pattern, replacement in rules if rules is not None else TITLE_RULES:
        text = pattern.sub(replacement, text)
    return text.strip()


def capitalize_first(text: str) -> str:
    """Upper-case the first character only; the rest keeps its casing."""
    return text[:1].upper() + text[1:]


def extract_title(text: str) -> str:
    """Clean, capitalized title, or "" when nothing but tokens was present."""
    return capitalize_first(strip_tokens(text))
