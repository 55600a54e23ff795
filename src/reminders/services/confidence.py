"""Confidence scoring for parsed reminders.

The score is additive: every signal the parser recognizes contributes its
increment, and the total is capped at 100. It is a heuristic for the UI's
percentage badge, not a probability.
"""

from dataclasses import dataclass

TITLE_BONUS = 25
MAX_CONFIDENCE = 100


@dataclass
class ConfidenceBreakdown:
    """Per-signal increments that make up a confidence score."""

    time_bonus: int = 0  # +10..+20 for a time of day
    date_bonus: int = 0  # +15..+20 for a due date
    recurrence_bonus: int = 0  # +5..+15, explicit phrasing scores higher
    category_bonus: int = 0  # +15 for a category other than "other"
    priority_bonus: int = 0  # +10 for a priority other than "medium"
    title_bonus: int = 0  # +25 for a derived title

    @property
    def signals(self) -> int:
        """Sum of every increment except the title's."""
        return (
            self.time_bonus
            + self.date_bonus
            + self.recurrence_bonus
            + self.category_bonus
            + self.priority_bonus
        )

    @property
    def total(self) -> int:
        """Calculate total confidence score (0-100)."""
        return max(0, min(MAX_CONFIDENCE, self.signals + self.title_bonus))

    def to_dict(self) -> dict:
        """Return breakdown as dictionary."""
        return {
            "time_bonus": self.time_bonus,
            "date_bonus": self.date_bonus,
            "recurrence_bonus": self.recurrence_bonus,
            "category_bonus": self.category_bonus,
            "priority_bonus": self.priority_bonus,
            "title_bonus": self.title_bonus,
            "total": self.total,
        }
