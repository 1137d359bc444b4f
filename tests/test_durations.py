"""Tests for duration parsing and formatting."""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from wikipush.durations import format_duration, parse_duration


class TestParseDuration:
    """Tests for parse_duration function."""

    @pytest.mark.parametrize("text,expected", [
        ("500ms", 0.5),
        ("2s", 2.0),
        ("1.5s", 1.5),
        ("1m30s", 90.0),
        ("1h", 3600.0),
        ("250us", 0.00025),
        ("0", 0.0),
        ("3", 3.0),
        ("0.25", 0.25),
    ])
    def test_valid(self, text, expected):
        assert parse_duration(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["", "fast", "5 minutes", "1x", "ms", "1s2", "-1s", "-2"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_duration(text)


class TestFormatDuration:
    """Tests for format_duration function."""

    @pytest.mark.parametrize("seconds,expected", [
        (0, "0s"),
        (0.5, "500ms"),
        (1.0, "1s"),
        (1.5, "1.5s"),
        (75.0, "1m15s"),
        (120.0, "2m0s"),
        (3725.5, "1h2m5.5s"),
        (0.0015, "1.5ms"),
    ])
    def test_go_style(self, seconds, expected):
        assert format_duration(seconds) == expected
