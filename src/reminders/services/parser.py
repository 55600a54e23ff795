import logging

from reminders.config import Settings
from reminders.config import settings as default_settings
from reminders.services.classifier import (
    CATEGORY_CONFIDENCE,
    PRIORITY_CONFIDENCE,
    detect_category,
    detect_priority,
)
from reminders.services.clock import Clock, FixedClock, get_clock
from reminders.services.confidence import TITLE_BONUS, ConfidenceBreakdown
from reminders.services.date_parser import DateExtractor
from reminders.services.dates import format_iso_date
from reminders.services.models import Category, ParsedReminder, Priority, RecurrenceRule
from reminders.services.recurrence import RecurrenceInferencer
from reminders.services.time_parser import TimeExtractor
from reminders.services.title import extract_title

logger = logging.getLogger(__name__)


def _normalize(text: str) -> str:
    return " ".join(text.split()).lower()


class ReminderParser:
    """Turns a free-text phrase into a ParsedReminder.

    Steps run in a fixed order: time, date, recurrence, category, priority,
    then title. Nothing here raises for unrecognized input; every field has
    a default and the confidence score reflects what was actually found.
    """

    def __init__(self, clock: Clock | None = None, settings: Settings | None = None):
        self.clock = clock
        self.settings = settings or default_settings
        self.times = TimeExtractor()
        self.dates = DateExtractor()
        self.recurrences = RecurrenceInferencer()

    def _clock(self, clock: Clock | None) -> Clock:
        return clock or self.clock or get_clock()

    def parse(self, text: str | None, clock: Clock | None = None) -> ParsedReminder:
        reminder, _ = self.parse_with_breakdown(text, clock)
        return reminder

    def parse_with_breakdown(
        self, text: str | None, clock: Clock | None = None
    ) -> tuple[ParsedReminder, ConfidenceBreakdown]:
        """Parse text and also return how the confidence score was built."""
        text = text or ""
        clock = self._clock(clock)
        breakdown = ConfidenceBreakdown()

        due_time = None
        time_match = self.times.extract(text)
        if time_match:
            due_time = time_match.time
            breakdown.time_bonus = time_match.confidence

        due_date = clock.today()
        date_match = self.dates.extract(text, clock)
        if date_match:
            due_date = date_match.due_date
            breakdown.date_bonus = date_match.confidence
            if date_match.exact_time:
                due_time = date_match.exact_time
            elif date_match.default_time and due_time is None:
                due_time = date_match.default_time

        rule = RecurrenceRule()
        recurrence_match = self.recurrences.infer(text)
        if recurrence_match:
            rule = recurrence_match.rule
            breakdown.recurrence_bonus = recurrence_match.confidence

        category = detect_category(text)
        if category != Category.OTHER:
            breakdown.category_bonus = CATEGORY_CONFIDENCE

        priority = detect_priority(text)
        if priority != Priority.MEDIUM:
            breakdown.priority_bonus = PRIORITY_CONFIDENCE

        # A title only counts as recognized when something was taken out of
        # the text or another signal was found; otherwise keep the raw input.
        title = text
        cleaned = extract_title(text)
        if cleaned and (breakdown.signals > 0 or _normalize(cleaned) != _normalize(text)):
            title = cleaned
            breakdown.title_bonus = TITLE_BONUS

        reminder = ParsedReminder(
            title=title,
            due_date=format_iso_date(due_date),
            due_time=due_time,
            priority=priority,
            category=category,
            recurrence=rule.recurrence,
            recurrence_interval=rule.interval,
            recurrence_unit=rule.unit,
            recurrence_days=list(rule.days) if rule.days else None,
            confidence=breakdown.total,
            raw_text=text,
        )
        logger.debug(f"Parsed {text!r}: {reminder.to_dict()}")
        return reminder, breakdown

    def parse_bulk(self, text: str | None, clock: Clock | None = None) -> list[ParsedReminder]:
        """Parse each separator-delimited segment of text independently.

        All segments share one pinned "now" so a batch cannot straddle midnight.
        """
        pinned = FixedClock(self._clock(clock).now())
        segments = (segment.strip() for segment in (text or "").split(self.settings.bulk_separator))
        return [self.parse(segment, pinned) for segment in segments if segment]

    def preview(self, text: str | None, clock: Clock | None = None) -> ParsedReminder | None:
        """Live-preview parse; None while the input is too short to bother."""
        if text is None or len(text) < self.settings.min_preview_length:
            return None
        return self.parse(text, clock)


# Module-level singleton
_parser: ReminderParser | None = None


def get_parser() -> ReminderParser:
    """Get the singleton ReminderParser instance."""
    global _parser
    if _parser is None:
        _parser = ReminderParser()
    return _parser


def reset_parser() -> None:
    """Reset the singleton (useful for testing)."""
    global _parser
    _parser = None


def parse(text: str | None, clock: Clock | None = None) -> ParsedReminder:
    """Parse one reminder phrase."""
    return get_parser().parse(text, clock)


def parse_bulk(text: str | None, clock: Clock | None = None) -> list[ParsedReminder]:
    """Parse a comma-separated list of reminder phrases."""
    return get_parser().parse_bulk(text, clock)


def preview(text: str | None, clock: Clock | None = None) -> ParsedReminder | None:
    """Parse for live preview, skipping very short input."""
    return get_parser().preview(text, clock)
