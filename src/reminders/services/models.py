"""Reminder data types.

ParsedReminder is what the parser returns for one piece of text. Reminder is
the entity a caller builds from it once the user accepts the parse; it is
what the scheduling and section helpers operate on.
"""

import random
import string
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from reminders.services.clock import Clock


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        """Sort rank, most pressing first."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    Priority.URGENT: 0,
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}


class Category(str, Enum):
    WORK = "work"
    FAMILY = "family"
    HEALTH = "health"
    ERRANDS = "errands"
    FINANCE = "finance"
    SOCIAL = "social"
    LEARNING = "learning"
    TRAVEL = "travel"
    HOME = "home"
    OTHER = "other"


class Recurrence(str, Enum):
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    CUSTOM = "custom"


class RecurrenceUnit(str, Enum):
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"


@dataclass
class RecurrenceRule:
    """A recurrence rule as inferred from text."""

    recurrence: Recurrence = Recurrence.NONE
    interval: int | None = None
    unit: RecurrenceUnit | None = None
    days: list[int] | None = None


@dataclass
class ParsedReminder:
    title: str
    due_date: str
    due_time: str | None = None
    priority: Priority = Priority.MEDIUM
    category: Category = Category.OTHER
    recurrence: Recurrence = Recurrence.NONE
    recurrence_interval: int | None = None
    recurrence_unit: RecurrenceUnit | None = None
    recurrence_days: list[int] | None = None
    confidence: int = 0
    raw_text: str = ""

    @property
    def is_recurring(self) -> bool:
        return self.recurrence != Recurrence.NONE

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase shape consumed by the UI layer.

        Optional fields are omitted when absent.
        """
        data: dict[str, Any] = {
            "title": self.title,
            "dueDate": self.due_date,
            "priority": self.priority.value,
            "category": self.category.value,
            "recurrence": self.recurrence.value,
            "confidence": self.confidence,
        }
        if self.due_time is not None:
            data["dueTime"] = self.due_time
        if self.recurrence_interval is not None:
            data["recurrenceInterval"] = self.recurrence_interval
        if self.recurrence_unit is not None:
            data["recurrenceUnit"] = self.recurrence_unit.value
        if self.recurrence_days is not None:
            data["recurrenceDays"] = list(self.recurrence_days)
        return data


def generate_id(now: datetime | None = None) -> str:
    """Generate a reminder id of the form rem_<epoch ms>_<9 random chars>."""
    stamp = int((now or datetime.now()).timestamp() * 1000)
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"rem_{stamp}_{suffix}"


@dataclass
class Reminder:
    id: str
    title: str
    due_date: str
    due_time: str | None = None
    priority: Priority = Priority.MEDIUM
    category: Category = Category.OTHER
    recurrence: Recurrence = Recurrence.NONE
    recurrence_interval: int | None = None
    recurrence_unit: RecurrenceUnit | None = None
    recurrence_days: list[int] | None = None
    end_date: str | None = None  # last date a recurring series may fall on
    completed: bool = False
    completed_at: datetime | None = None
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def is_recurring(self) -> bool:
        return self.recurrence != Recurrence.NONE

    @classmethod
    def from_parsed(
        cls,
        parsed: ParsedReminder,
        clock: "Clock | None" = None,
        end_date: str | None = None,
    ) -> "Reminder":
        """Build a fresh, uncompleted reminder from a parse result."""
        now = clock.now() if clock is not None else datetime.now()
        return cls(
            id=generate_id(now),
            title=parsed.title,
            due_date=parsed.due_date,
            due_time=parsed.due_time,
            priority=parsed.priority,
            category=parsed.category,
            recurrence=parsed.recurrence,
            recurrence_interval=parsed.recurrence_interval,
            recurrence_unit=parsed.recurrence_unit,
            recurrence_days=list(parsed.recurrence_days) if parsed.recurrence_days else None,
            end_date=end_date,
            created_at=now,
        )

    def copy(self, **changes: Any) -> "Reminder":
        return replace(self, **changes)
