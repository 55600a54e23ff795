"""Tests for recurring rollover and snoozing."""

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from reminders.services.models import Recurrence, RecurrenceUnit, Reminder
from reminders.services.schedule import describe_snooze, next_due_date, roll_forward, snooze


def make_reminder(due_date="2024-01-16", **fields) -> Reminder:
    fields.setdefault("id", "rem_1_abcdefghi")
    fields.setdefault("title", "Test")
    return Reminder(due_date=due_date, **fields)


class TestNextDueDate:
    def test_not_recurring(self):
        assert next_due_date(make_reminder()) is None

    def test_daily(self):
        assert next_due_date(make_reminder(recurrence=Recurrence.DAILY)) == "2024-01-17"

    def test_weekly_without_days(self):
        assert next_due_date(make_reminder(recurrence=Recurrence.WEEKLY)) == "2024-01-23"

    @pytest.mark.parametrize(
        "due_date,expected",
        [
            ("2024-01-15", "2024-01-17"),  # Mon -> Wed
            ("2024-01-17", "2024-01-22"),  # Wed -> next Mon
            ("2024-01-16", "2024-01-17"),  # Tue -> Wed
        ],
    )
    def test_weekly_on_listed_days(self, due_date, expected):
        reminder = make_reminder(due_date, recurrence=Recurrence.WEEKLY, recurrence_days=[1, 3])
        assert next_due_date(reminder) == expected

    def test_weekly_single_day_is_a_week_out(self):
        reminder = make_reminder("2024-01-15", recurrence=Recurrence.WEEKLY, recurrence_days=[1])
        assert next_due_date(reminder) == "2024-01-22"

    def test_monthly_clamps(self):
        reminder = make_reminder("2024-01-31", recurrence=Recurrence.MONTHLY)
        assert next_due_date(reminder) == "2024-02-29"

    def test_yearly_from_leap_day(self):
        reminder = make_reminder("2024-02-29", recurrence=Recurrence.YEARLY)
        assert next_due_date(reminder) == "2025-02-28"

    @pytest.mark.parametrize(
        "interval,unit,expected",
        [
            (3, RecurrenceUnit.DAYS, "2024-01-19"),
            (2, RecurrenceUnit.WEEKS, "2024-01-30"),
            (3, RecurrenceUnit.MONTHS, "2024-04-16"),
            (2, RecurrenceUnit.YEARS, "2026-01-16"),
        ],
    )
    def test_custom(self, interval, unit, expected):
        reminder = make_reminder(
            recurrence=Recurrence.CUSTOM,
            recurrence_interval=interval,
            recurrence_unit=unit,
        )
        assert next_due_date(reminder) == expected

    def test_custom_without_unit(self):
        assert next_due_date(make_reminder(recurrence=Recurrence.CUSTOM)) is None


class TestRollForward:
    def test_creates_fresh_occurrence(self, tuesday):
        reminder = make_reminder(
            recurrence=Recurrence.DAILY,
            completed=True,
            completed_at=datetime(2024, 1, 16, 8, 0),
        )
        nxt = roll_forward(reminder, tuesday)
        assert nxt is not None
        assert nxt.id != reminder.id
        assert nxt.id.startswith("rem_")
        assert nxt.due_date == "2024-01-17"
        assert nxt.completed is False
        assert nxt.completed_at is None
        assert nxt.created_at == tuesday.now()
        assert nxt.title == reminder.title
        # Original is untouched
        assert reminder.completed is True

    def test_not_recurring(self, tuesday):
        assert roll_forward(make_reminder(), tuesday) is None

    def test_within_end_date(self, tuesday):
        reminder = make_reminder(recurrence=Recurrence.DAILY, end_date="2024-01-17")
        assert roll_forward(reminder, tuesday).due_date == "2024-01-17"

    def test_past_end_date(self, tuesday):
        reminder = make_reminder("2024-01-17", recurrence=Recurrence.DAILY, end_date="2024-01-17")
        assert roll_forward(reminder, tuesday) is None


class TestSnooze:
    def test_snooze_crosses_midnight(self, clock_at):
        clock = clock_at(2024, 1, 16, 23, 50)
        snoozed = snooze(make_reminder(due_time="23:00"), 15, clock)
        assert snoozed.due_date == "2024-01-17"
        assert snoozed.due_time == "00:05"

    def test_snooze_keeps_other_fields(self, tuesday):
        reminder = make_reminder(title="Call mom", recurrence=Recurrence.WEEKLY)
        snoozed = snooze(reminder, 60, tuesday)
        assert snoozed.due_time == "10:00"
        assert snoozed.title == "Call mom"
        assert snoozed.recurrence == Recurrence.WEEKLY
        assert snoozed.id == reminder.id

    def test_snooze_uses_local_time(self, clock_at):
        clock = clock_at(2024, 1, 16, 22, 0, tz=ZoneInfo("America/Los_Angeles"))
        snoozed = snooze(make_reminder(), 60, clock)
        assert snoozed.due_date == "2024-01-16"
        assert snoozed.due_time == "23:00"

    @pytest.mark.parametrize(
        "minutes,label",
        [
            (15, "15 minutes"),
            (60, "1 hour"),
            (180, "3 hours"),
            (1440, "1 day"),
            (2880, "2 days"),
        ],
    )
    def test_describe_snooze(self, minutes, label):
        assert describe_snooze(minutes) == label
