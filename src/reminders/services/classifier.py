"""Keyword classifiers for category and priority.

Both scan the whole input independently of each other and of the date, time
and recurrence extractors. Groups are checked in a fixed order and the first
matching group wins.
"""

import re

from reminders.services.models import Category, Priority

CATEGORY_CONFIDENCE = 15
PRIORITY_CONFIDENCE = 10

CATEGORY_KEYWORDS: list[tuple[Category, re.Pattern]] = [
    (
        Category.WORK,
        re.compile(
            r"\b(?:meeting|email|report|deadline|project|client|boss|office|presentation"
            r"|call with|sync|standup|review|submit|proposal)\b",
            re.IGNORECASE,
        ),
    ),
    (
        Category.FAMILY,
        re.compile(
            r"\b(?:mom|dad|mother|father|sister|brother|family|kids|children|son|daughter"
            r"|wife|husband|grandma|grandpa|parent|anniversary)\b",
            re.IGNORECASE,
        ),
    ),
    (
        Category.HEALTH,
        re.compile(
            r"\b(?:doctor|dentist|gym|workout|exercise|medicine|prescription|appointment"
            r"|therapy|vitamin|checkup|hospital|health)\b",
            re.IGNORECASE,
        ),
    ),
    (
        Category.ERRANDS,
        re.compile(
            r"\b(?:buy|grocery|store|shop|pick up|drop off|return|mail|post office|bank"
            r"|dry clean|repair)\b",
            re.IGNORECASE,
        ),
    ),
    (
        Category.FINANCE,
        re.compile(
            r"\b(?:pay|bill|invoice|tax|budget|investment|rent|mortgage|insurance|account)\b",
            re.IGNORECASE,
        ),
    ),
    (
        Category.SOCIAL,
        re.compile(
            r"\b(?:party|dinner|lunch|coffee|friend|birthday|celebration|event|hangout"
            r"|catch up)\b",
            re.IGNORECASE,
        ),
    ),
    (
        Category.LEARNING,
        re.compile(
            r"\b(?:study|class|course|book|read|learn|homework|exam|test|practice|lesson"
            r"|tutorial)\b",
            re.IGNORECASE,
        ),
    ),
    (
        Category.TRAVEL,
        re.compile(
            r"\b(?:flight|hotel|trip|vacation|travel|pack|passport|booking|reservation"
            r"|airport)\b",
            re.IGNORECASE,
        ),
    ),
    (
        Category.HOME,
        re.compile(
            r"\b(?:clean|laundry|dishes|fix|repair|garden|lawn|organize|declutter|cook"
            r"|water plants)\b",
            re.IGNORECASE,
        ),
    ),
]

PRIORITY_KEYWORDS: list[tuple[Priority, re.Pattern]] = [
    (
        Priority.URGENT,
        re.compile(r"\b(?:urgent|asap|immediately|critical|emergency)\b", re.IGNORECASE),
    ),
    (
        Priority.HIGH,
        re.compile(r"\b(?:important|high\s+priority|crucial|must)\b", re.IGNORECASE),
    ),
    (
        Priority.LOW,
        re.compile(r"\b(?:low\s+priority|whenever|no\s+rush|eventually)\b", re.IGNORECASE),
    ),
    (
        Priority.MEDIUM,
        re.compile(r"\b(?:medium|normal)\s+priority\b", re.IGNORECASE),
    ),
]


def detect_category(text: str) -> Category:
    """Classify text into one of the fixed categories, OTHER if nothing matches."""
    for category, pattern in CATEGORY_KEYWORDS:
        if pattern.search(text):
            return category
    return Category.OTHER


def detect_priority(text: str) -> Priority:
    """Priority from explicit keywords only; MEDIUM when none is present."""
    for priority, pattern in PRIORITY_KEYWORDS:
        if pattern.search(text):
            return priority
    return Priority.MEDIUM
