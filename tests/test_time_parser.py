"""Tests for time-of-day extraction."""

import pytest

from reminders.services.time_parser import (
    NAMED_MOMENT_CONFIDENCE,
    NUMERIC_TIME_CONFIDENCE,
    PART_OF_DAY_CONFIDENCE,
    TimeExtractor,
)


class TestTimeExtractor:
    """Test suite for TimeExtractor."""

    def setup_method(self):
        self.extractor = TimeExtractor()

    # === Named moments ===

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("snack at midnight", "00:00"),
            ("lunch at noon", "12:00"),
            ("midday walk", "12:00"),
            ("finish report by end of day", "17:00"),
            ("send it end of the day", "17:00"),
            ("eod summary", "17:00"),
        ],
    )
    def test_named_moments(self, text, expected):
        result = self.extractor.extract(text)
        assert result.time == expected
        assert result.confidence == NAMED_MOMENT_CONFIDENCE

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("morning jog", "09:00"),
            ("run early morning", "06:00"),
            ("evening walk", "18:00"),
            ("afternoon tea", "14:00"),
            ("take out bins at night", "21:00"),
        ],
    )
    def test_parts_of_day(self, text, expected):
        result = self.extractor.extract(text)
        assert result.time == expected
        assert result.confidence == PART_OF_DAY_CONFIDENCE

    def test_this_morning_is_left_to_the_date_parser(self):
        """"this morning" is a date phrase with a default time, not a time."""
        assert self.extractor.extract("standup this morning") is None

    @pytest.mark.parametrize("text", ["this early morning run", "dinner this evening", "call this afternoon"])
    def test_this_part_of_day_is_left_to_the_date_parser(self, text):
        assert self.extractor.extract(text) is None

    def test_tonight_is_not_night(self):
        assert self.extractor.extract("read tonight") is None

    def test_named_moment_wins_over_numeric_time(self):
        assert self.extractor.extract("tomorrow morning at 7am").time == "09:00"

    # === Numeric times ===

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("call at 3:30pm", "15:30"),
            ("call at 3:30 PM", "15:30"),
            ("call at 15:30", "15:30"),
            ("call at 3pm", "15:00"),
            ("call 3:30pm", "15:30"),
            ("call 3pm", "15:00"),
            ("call 3 PM", "15:00"),
            ("wake at 7am", "07:00"),
            ("12am feed", "00:00"),
            ("12pm lunch", "12:00"),
            ("at 12:15am", "00:15"),
        ],
    )
    def test_numeric_times(self, text, expected):
        result = self.extractor.extract(text)
        assert result.time == expected
        assert result.confidence == NUMERIC_TIME_CONFIDENCE

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("every day at 8am", "08:00"),
            ("Call mom tomorrow 5pm", "17:00"),
            ("at 11 pm", "23:00"),
        ],
    )
    def test_hour_only_readings(self, text, expected):
        """Readings without minutes resolve to the top of the hour."""
        assert self.extractor.extract(text).time == expected

    def test_original_text_is_the_matched_phrase(self):
        assert self.extractor.extract("call at 3:30pm today").original_text == "at 3:30pm"

    def test_minutes_are_not_read_as_an_hour(self):
        """"3:30pm" must never be cut down to "30pm"."""
        assert self.extractor.extract("3:30pm").time == "15:30"

    @pytest.mark.parametrize("text", ["at 25:00", "at 99:99pm", "13pm", "0am", "room 5", ""])
    def test_impossible_or_missing_times(self, text):
        assert self.extractor.extract(text) is None

    def test_invalid_reading_falls_through_to_next(self):
        """An impossible reading is skipped and a later valid one is used."""
        assert self.extractor.extract("13pm or 2pm").time == "14:00"

    def test_custom_rules(self):
        extractor = TimeExtractor(rules=[])
        assert extractor.extract("at 3pm") is None
