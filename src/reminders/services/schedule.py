"""Scheduling helpers: recurring rollover and snoozing."""

import logging
from datetime import date, timedelta

from reminders.services.clock import Clock, get_clock
from reminders.services.dates import (
    add_days,
    add_months,
    add_years,
    days_until,
    format_hhmm,
    format_iso_date,
    parse_iso_date,
)
from reminders.services.models import Recurrence, RecurrenceUnit, Reminder, generate_id

logger = logging.getLogger(__name__)

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR


def _advance(day: date, interval: int, unit: RecurrenceUnit) -> date:
    if unit == RecurrenceUnit.DAYS:
        return add_days(day, interval)
    if unit == RecurrenceUnit.WEEKS:
        return add_days(day, 7 * interval)
    if unit == RecurrenceUnit.MONTHS:
        return add_months(day, interval)
    return add_years(day, interval)


def _next_listed_weekday(day: date, weekdays: list[int]) -> date:
    """First date after `day` falling on one of `weekdays`."""
    return min(add_days(day, days_until(day, weekday) or 7) for weekday in weekdays)


def next_due_date(reminder: Reminder) -> str | None:
    """Due date of the occurrence after this one, or None if not recurring."""
    if reminder.recurrence == Recurrence.NONE:
        return None

    day = parse_iso_date(reminder.due_date)
    interval = reminder.recurrence_interval or 1

    if reminder.recurrence == Recurrence.DAILY:
        nxt = add_days(day, 1)
    elif reminder.recurrence == Recurrence.WEEKLY:
        if reminder.recurrence_days:
            nxt = _next_listed_weekday(day, reminder.recurrence_days)
        else:
            nxt = add_days(day, 7)
    elif reminder.recurrence == Recurrence.MONTHLY:
        nxt = add_months(day, 1)
    elif reminder.recurrence == Recurrence.YEARLY:
        nxt = add_years(day, 1)
    elif reminder.recurrence_unit is not None:
        nxt = _advance(day, interval, reminder.recurrence_unit)
    else:
        return None
    return format_iso_date(nxt)


def roll_forward(reminder: Reminder, clock: Clock | None = None) -> Reminder | None:
    """Create the next occurrence of a recurring reminder.

    Returns a fresh, uncompleted copy due on the next date, or None when the
    reminder does not recur or the series has passed its end date.
    """
    next_date = next_due_date(reminder)
    if next_date is None:
        return None
    if reminder.end_date and next_date > reminder.end_date:
        logger.info(f"Recurring series {reminder.id} complete at {reminder.end_date}")
        return None

    now = (clock or get_clock()).now()
    return reminder.copy(
        id=generate_id(now),
        due_date=next_date,
        completed=False,
        completed_at=None,
        created_at=now,
    )


def snooze(reminder: Reminder, minutes: int, clock: Clock | None = None) -> Reminder:
    """Move a reminder to `minutes` from now, keeping everything else."""
    moment = (clock or get_clock()).after(timedelta(minutes=minutes))
    return reminder.copy(
        due_date=format_iso_date(moment.date()),
        due_time=format_hhmm(moment.hour, moment.minute),
    )


def describe_snooze(minutes: int) -> str:
    """Human duration for a snooze: "15 minutes", "1 hour", "2 days"."""
    if minutes >= MINUTES_PER_DAY:
        days = minutes // MINUTES_PER_DAY
        return "1 day" if days == 1 else f"{days} days"
    if minutes >= MINUTES_PER_HOUR:
        hours = minutes // MINUTES_PER_HOUR
        return "1 hour" if hours == 1 else f"{hours} hours"
    return f"{minutes} minutes"
