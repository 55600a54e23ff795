"""Section bucketing, filtering and sorting for reminder lists."""

from collections.abc import Iterable
from datetime import datetime
from enum import Enum

from reminders.services.dates import add_days, combine_local, format_iso_date
from reminders.services.models import Category, Reminder


class Section(str, Enum):
    """Display sections, in the order they are shown."""

    OVERDUE = "overdue"
    TODAY = "today"
    TOMORROW = "tomorrow"
    UPCOMING = "upcoming"
    COMPLETED = "completed"


class StatusFilter(str, Enum):
    ALL = "all"
    PENDING = "pending"
    COMPLETED = "completed"
    OVERDUE = "overdue"


class SortField(str, Enum):
    DUE_DATE = "due_date"
    CATEGORY = "category"
    PRIORITY = "priority"


def _local(now: datetime) -> datetime:
    """Wall-clock reading of `now` without tzinfo, for comparing with due moments."""
    return now.replace(tzinfo=None)


def is_overdue(reminder: Reminder, now: datetime) -> bool:
    """Not completed and due before now. A reminder with no time is due at 23:59."""
    if reminder.completed:
        return False
    return combine_local(reminder.due_date, reminder.due_time) < _local(now)


def section_for(reminder: Reminder, now: datetime) -> Section:
    if reminder.completed:
        return Section.COMPLETED
    if is_overdue(reminder, now):
        return Section.OVERDUE
    today = now.date()
    if reminder.due_date <= format_iso_date(today):
        return Section.TODAY
    if reminder.due_date == format_iso_date(add_days(today, 1)):
        return Section.TOMORROW
    return Section.UPCOMING


def _chronological_key(reminder: Reminder) -> tuple:
    return (reminder.due_date, reminder.due_time or "23:59", reminder.priority.rank)


def bucket_reminders(reminders: Iterable[Reminder], now: datetime) -> dict[Section, list[Reminder]]:
    """Group reminders into display sections.

    Every section is present, in display order, even when empty. Within a
    section reminders are ordered by due date, due time, then priority.
    """
    buckets: dict[Section, list[Reminder]] = {section: [] for section in Section}
    for reminder in reminders:
        buckets[section_for(reminder, now)].append(reminder)
    for items in buckets.values():
        items.sort(key=_chronological_key)
    return buckets


def filter_by_status(
    reminders: Iterable[Reminder], status: StatusFilter | str, now: datetime
) -> list[Reminder]:
    status = StatusFilter(status)
    if status == StatusFilter.PENDING:
        return [r for r in reminders if not r.completed and not is_overdue(r, now)]
    if status == StatusFilter.COMPLETED:
        return [r for r in reminders if r.completed]
    if status == StatusFilter.OVERDUE:
        return [r for r in reminders if is_overdue(r, now)]
    return list(reminders)


_SORT_KEYS = {
    SortField.DUE_DATE: lambda r: r.due_date,
    SortField.CATEGORY: lambda r: r.category.value,
    SortField.PRIORITY: lambda r: r.priority.rank,
}


def sort_reminders(
    reminders: Iterable[Reminder],
    field: SortField | str = SortField.DUE_DATE,
    ascending: bool = True,
) -> list[Reminder]:
    """Stable sort by due date, category name or priority (urgent first)."""
    return sorted(reminders, key=_SORT_KEYS[SortField(field)], reverse=not ascending)


def group_by_category(reminders: Iterable[Reminder]) -> dict[Category, list[Reminder]]:
    groups: dict[Category, list[Reminder]] = {category: [] for category in Category}
    for reminder in reminders:
        groups[reminder.category].append(reminder)
    return groups
