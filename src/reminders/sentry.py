"""Sentry error tracking for the reminders CLI.

Usage:
    from reminders.sentry import init_sentry, capture_exception, flush
    init_sentry(dsn=settings.sentry_dsn, environment=settings.sentry_environment)

Every helper is a no-op until init_sentry() succeeds, so callers never need
to check whether Sentry is configured. Reminder text is user content and is
scrubbed from events before they leave the process.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

# Sentry SDK is optional - gracefully handle if not installed
try:
    import sentry_sdk
    from sentry_sdk.integrations.logging import LoggingIntegration

    SENTRY_AVAILABLE = True
except ImportError:
    SENTRY_AVAILABLE = False
    sentry_sdk = None
    LoggingIntegration = None

if TYPE_CHECKING:
    from sentry_sdk._types import Event, Hint

logger = logging.getLogger(__name__)

# Keys whose values are reminder text typed by the user
SCRUBBED_KEYS = {"text", "raw_text", "title", "segment", "input"}

_initialized = False


def init_sentry(
    dsn: str | None = None,
    environment: str = "production",
    release: str | None = None,
) -> bool:
    """Initialize Sentry SDK for error tracking.

    Args:
        dsn: Sentry DSN. Empty/None disables Sentry.
        environment: Environment name (production, staging, development).
        release: Release version. If None, auto-detected from package version.

    Returns:
        True if Sentry was initialized, False if skipped/unavailable.
    """
    global _initialized

    if _initialized:
        logger.debug("Sentry already initialized")
        return True

    if not SENTRY_AVAILABLE:
        logger.info("Sentry SDK not installed, error tracking disabled")
        return False

    if not dsn:
        logger.info("No SENTRY_DSN configured, error tracking disabled")
        return False

    if release is None:
        try:
            from importlib.metadata import version

            release = f"quick-reminders@{version('quick-reminders')}"
        except Exception:
            release = "quick-reminders@unknown"

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        release=release,
        integrations=[
            LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
        ],
        send_default_pii=False,
        before_send=_before_send,
    )

    _initialized = True
    logger.info(f"Sentry initialized: environment={environment}, release={release}")
    return True


def _before_send(event: Event, hint: Hint) -> Event | None:
    """Strip reminder text from extra data and breadcrumbs."""
    if "extra" in event:
        _scrub_dict(cast(dict[str, Any], event["extra"]))

    if "breadcrumbs" in event:
        breadcrumbs = cast(dict[str, Any], event["breadcrumbs"])
        for breadcrumb in breadcrumbs.get("values", []):
            if "data" in breadcrumb:
                _scrub_dict(breadcrumb["data"])

    return event


def _scrub_dict(data: dict[str, Any]) -> None:
    """Redact user text in-place, recursing into nested dicts."""
    for key in list(data.keys()):
        if key.lower() in SCRUBBED_KEYS:
            data[key] = "[REDACTED]"
        elif isinstance(data[key], dict):
            _scrub_dict(data[key])


def add_breadcrumb(message: str, category: str = "parser", data: dict[str, Any] | None = None) -> None:
    """Record a breadcrumb attached to any later error event."""
    if not SENTRY_AVAILABLE or not _initialized:
        return

    sentry_sdk.add_breadcrumb(message=message, category=category, level="info", data=data or {})


def capture_exception(exception: BaseException | None = None) -> str | None:
    """Capture an exception and send to Sentry.

    Returns:
        Event ID if captured, None otherwise.
    """
    if not SENTRY_AVAILABLE or not _initialized:
        return None

    return sentry_sdk.capture_exception(exception)


def flush(timeout: float = 2.0) -> None:
    """Flush pending Sentry events before shutdown."""
    if not SENTRY_AVAILABLE or not _initialized:
        return

    sentry_sdk.flush(timeout=timeout)


def is_enabled() -> bool:
    """Check if Sentry is enabled and initialized."""
    return SENTRY_AVAILABLE and _initialized
