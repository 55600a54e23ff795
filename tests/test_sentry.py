"""Tests for Sentry error tracking integration.

These tests verify the Sentry module works correctly both when sentry-sdk
is installed and when it's not (graceful degradation), and that reminder
text never leaves the process.
"""

from unittest.mock import MagicMock, patch

from reminders.sentry import (
    SENTRY_AVAILABLE,
    _before_send,
    _scrub_dict,
    add_breadcrumb,
    capture_exception,
    flush,
    init_sentry,
    is_enabled,
)


def _reset() -> None:
    import reminders.sentry

    reminders.sentry._initialized = False


# ============================================================
# Test SDK Availability
# ============================================================


class TestSentryAvailability:
    """Test Sentry SDK availability detection."""

    def test_sentry_available_is_bool(self) -> None:
        """SENTRY_AVAILABLE should be a boolean."""
        assert isinstance(SENTRY_AVAILABLE, bool)

    def test_is_enabled_before_init(self) -> None:
        """is_enabled should return False before initialization."""
        _reset()
        assert is_enabled() is False


# ============================================================
# Test Initialization
# ============================================================


class TestSentryInit:
    """Test Sentry initialization."""

    def setup_method(self) -> None:
        """Reset module state before each test."""
        _reset()

    def teardown_method(self) -> None:
        _reset()

    def test_init_without_dsn_returns_false(self) -> None:
        """init_sentry without DSN should return False."""
        assert init_sentry(dsn="") is False
        assert is_enabled() is False

    def test_init_with_none_dsn_returns_false(self) -> None:
        """init_sentry with None DSN should return False."""
        assert init_sentry(dsn=None) is False

    def test_init_with_dsn_calls_sdk(self) -> None:
        """A DSN initializes the SDK with the scrubbing hook installed."""
        if not SENTRY_AVAILABLE:
            assert init_sentry(dsn="https://test@sentry.io/12345") is False
            return

        with patch("reminders.sentry.sentry_sdk") as sdk:
            result = init_sentry(
                dsn="https://test@sentry.io/12345",
                environment="staging",
                release="quick-reminders@test",
            )

        assert result is True
        assert is_enabled() is True
        kwargs = sdk.init.call_args.kwargs
        assert kwargs["environment"] == "staging"
        assert kwargs["release"] == "quick-reminders@test"
        assert kwargs["send_default_pii"] is False
        assert kwargs["before_send"] is _before_send

    def test_init_twice_is_noop(self) -> None:
        """A second init_sentry call does not re-initialize the SDK."""
        if not SENTRY_AVAILABLE:
            return

        with patch("reminders.sentry.sentry_sdk") as sdk:
            init_sentry(dsn="https://test@sentry.io/12345", release="r")
            assert init_sentry(dsn="https://test@sentry.io/12345", release="r") is True

        assert sdk.init.call_count == 1


# ============================================================
# Test Data Scrubbing
# ============================================================


class TestDataScrubbing:
    """Test reminder text scrubbing."""

    def test_scrub_text(self) -> None:
        """Should scrub 'text' key."""
        data = {"text": "call my therapist tomorrow", "command": "parse"}
        _scrub_dict(data)
        assert data["text"] == "[REDACTED]"
        assert data["command"] == "parse"

    def test_scrub_title_and_raw_text(self) -> None:
        data = {"title": "Call therapist", "raw_text": "call therapist", "confidence": 70}
        _scrub_dict(data)
        assert data["title"] == "[REDACTED]"
        assert data["raw_text"] == "[REDACTED]"
        assert data["confidence"] == 70

    def test_scrub_nested_dicts(self) -> None:
        """Should scrub nested dictionaries."""
        data = {
            "outer": {
                "segment": "buy milk",
                "value": "ok",
            },
            "input": "buy milk, call mom",
        }
        _scrub_dict(data)
        assert data["outer"]["segment"] == "[REDACTED]"
        assert data["outer"]["value"] == "ok"
        assert data["input"] == "[REDACTED]"

    def test_scrub_case_insensitive(self) -> None:
        """Should scrub keys case-insensitively."""
        data = {"TEXT": "secret", "Title": "also secret"}
        _scrub_dict(data)
        assert data["TEXT"] == "[REDACTED]"
        assert data["Title"] == "[REDACTED]"


# ============================================================
# Test Before Send Filter
# ============================================================


class TestBeforeSend:
    """Test the before_send filter callback."""

    def test_passes_exceptions_through(self) -> None:
        """Events are never dropped, only scrubbed."""
        event: dict = {"exception": {}}
        hint = {"exc_info": (ValueError, ValueError("bad --now"), None)}

        assert _before_send(event, hint) is event

    def test_scrubs_extra_data(self) -> None:
        event = {"extra": {"text": "pay rent friday", "command": "parse"}}

        result = _before_send(event, {})
        assert result is not None
        assert result["extra"]["text"] == "[REDACTED]"
        assert result["extra"]["command"] == "parse"

    def test_scrubs_breadcrumb_data(self) -> None:
        """Should scrub reminder text from breadcrumbs."""
        event = {
            "breadcrumbs": {
                "values": [
                    {"data": {"text": "secret", "msg": "ok"}},
                    {"message": "no data"},
                ]
            }
        }

        result = _before_send(event, {})
        assert result is not None
        assert result["breadcrumbs"]["values"][0]["data"]["text"] == "[REDACTED]"
        assert result["breadcrumbs"]["values"][0]["data"]["msg"] == "ok"
        assert result["breadcrumbs"]["values"][1] == {"message": "no data"}


# ============================================================
# Test Helpers (graceful degradation)
# ============================================================


class TestHelpersWhenNotInitialized:
    """Every helper is a no-op until init_sentry succeeds."""

    def setup_method(self) -> None:
        """Reset module state before each test."""
        _reset()

    def test_add_breadcrumb_when_not_initialized(self) -> None:
        """add_breadcrumb should be no-op when not initialized."""
        add_breadcrumb("parse", data={"text": "buy milk"})

    def test_capture_exception_when_not_initialized(self) -> None:
        """capture_exception should return None when not initialized."""
        assert capture_exception(Exception("test")) is None

    def test_flush_when_not_initialized(self) -> None:
        """flush should be no-op when not initialized."""
        flush()


class TestHelpersWhenInitialized:
    """Helpers forward to the SDK once initialized."""

    def setup_method(self) -> None:
        import reminders.sentry

        reminders.sentry._initialized = True

    def teardown_method(self) -> None:
        _reset()

    def test_capture_exception_forwards(self) -> None:
        if not SENTRY_AVAILABLE:
            return
        error = RuntimeError("boom")
        with patch("reminders.sentry.sentry_sdk") as sdk:
            sdk.capture_exception.return_value = "event-id"
            assert capture_exception(error) == "event-id"
        sdk.capture_exception.assert_called_once_with(error)

    def test_add_breadcrumb_forwards(self) -> None:
        if not SENTRY_AVAILABLE:
            return
        with patch("reminders.sentry.sentry_sdk") as sdk:
            add_breadcrumb("bulk", data={"text": "a, b"})
        sdk.add_breadcrumb.assert_called_once_with(
            message="bulk", category="parser", level="info", data={"text": "a, b"}
        )

    def test_flush_forwards_timeout(self) -> None:
        if not SENTRY_AVAILABLE:
            return
        sdk = MagicMock()
        with patch("reminders.sentry.sentry_sdk", sdk):
            flush(timeout=0.5)
        sdk.flush.assert_called_once_with(timeout=0.5)


# ============================================================
# Test Integration with Config
# ============================================================


class TestConfigIntegration:
    """Test Sentry integration with settings."""

    def test_settings_has_sentry_property(self) -> None:
        """Settings should have has_sentry property."""
        from reminders.config import Settings

        assert Settings(sentry_dsn="").has_sentry is False
        assert Settings(sentry_dsn="https://xxx@sentry.io/123").has_sentry is True

    def test_settings_has_sentry_environment(self) -> None:
        """Settings should have sentry_environment field."""
        from reminders.config import Settings

        assert Settings(sentry_environment="staging").sentry_environment == "staging"

    def test_sentry_in_dependencies(self) -> None:
        """sentry-sdk should be in project dependencies."""
        import tomllib
        from pathlib import Path

        pyproject = Path(__file__).parent.parent / "pyproject.toml"
        with open(pyproject, "rb") as f:
            config = tomllib.load(f)

        deps = config["project"]["dependencies"]
        assert any("sentry-sdk" in d for d in deps), "sentry-sdk not in dependencies"
