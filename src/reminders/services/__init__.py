"""Quick Reminders services module.

This module provides the natural-language reminder parser and the date,
scheduling and section helpers around it. Imports are lazy so that pulling
in one helper does not load the whole parser.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

_EXPORTS: dict[str, tuple[str, str]] = {
    # Models
    "Category": ("reminders.services.models", "Category"),
    "ParsedReminder": ("reminders.services.models", "ParsedReminder"),
    "Priority": ("reminders.services.models", "Priority"),
    "Recurrence": ("reminders.services.models", "Recurrence"),
    "RecurrenceRule": ("reminders.services.models", "RecurrenceRule"),
    "RecurrenceUnit": ("reminders.services.models", "RecurrenceUnit"),
    "Reminder": ("reminders.services.models", "Reminder"),
    # Clock
    "Clock": ("reminders.services.clock", "Clock"),
    "FixedClock": ("reminders.services.clock", "FixedClock"),
    "get_clock": ("reminders.services.clock", "get_clock"),
    "reset_clock": ("reminders.services.clock", "reset_clock"),
    "set_clock": ("reminders.services.clock", "set_clock"),
    # Parser
    "ReminderParser": ("reminders.services.parser", "ReminderParser"),
    "get_parser": ("reminders.services.parser", "get_parser"),
    "parse": ("reminders.services.parser", "parse"),
    "parse_bulk": ("reminders.services.parser", "parse_bulk"),
    "preview": ("reminders.services.parser", "preview"),
    "reset_parser": ("reminders.services.parser", "reset_parser"),
    # Extractors
    "DateExtractor": ("reminders.services.date_parser", "DateExtractor"),
    "RecurrenceInferencer": ("reminders.services.recurrence", "RecurrenceInferencer"),
    "TimeExtractor": ("reminders.services.time_parser", "TimeExtractor"),
    "detect_category": ("reminders.services.classifier", "detect_category"),
    "detect_priority": ("reminders.services.classifier", "detect_priority"),
    "extract_title": ("reminders.services.title", "extract_title"),
    "format_recurrence": ("reminders.services.recurrence", "format_recurrence"),
    # Confidence
    "ConfidenceBreakdown": ("reminders.services.confidence", "ConfidenceBreakdown"),
    # Scheduling
    "describe_snooze": ("reminders.services.schedule", "describe_snooze"),
    "next_due_date": ("reminders.services.schedule", "next_due_date"),
    "roll_forward": ("reminders.services.schedule", "roll_forward"),
    "snooze": ("reminders.services.schedule", "snooze"),
    # Sections
    "Section": ("reminders.services.sections", "Section"),
    "bucket_reminders": ("reminders.services.sections", "bucket_reminders"),
    "filter_by_status": ("reminders.services.sections", "filter_by_status"),
    "group_by_category": ("reminders.services.sections", "group_by_category"),
    "is_overdue": ("reminders.services.sections", "is_overdue"),
    "sort_reminders": ("reminders.services.sections", "sort_reminders"),
}

__all__ = list(_EXPORTS.keys())


def __getattr__(name: str) -> Any:
    if name not in _EXPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module_name, attr_name = _EXPORTS[name]
    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(_EXPORTS.keys()))
