"""
Tests for display formatting helpers.
"""

import pytest

from src.reporter.formatting import (
    difficulty_band,
    difficulty_color,
    format_currency,
    format_number,
    format_percent,
    format_score,
    position_band,
    position_color,
)


class TestNumbers:
    """Test number and currency text."""

    def test_format_number(self):
        assert format_number(1200) == "1,200"
        assert format_number(1234567.6) == "1,234,568"
        assert format_number(None) == "0"

    def test_format_currency(self):
        assert format_currency(1234.5) == "$1,234"
        assert format_currency(1235.5) == "$1,236"
        assert format_currency(-50) == "-$50"
        assert format_currency(12, symbol="€") == "€12"

    def test_format_percent(self):
        assert format_percent(25) == "25.0%"
        assert format_percent(33.333, digits=2) == "33.33%"

    def test_format_score(self):
        assert format_score(25) == "25"
        assert format_score(42.5) == "42.5"
        assert format_score(None) == "0"


class TestBands:
    """Test difficulty and position colour bands."""

    @pytest.mark.parametrize("difficulty,band", [
        (0, "low"),
        (30, "low"),
        (30.5, "medium"),
        (50, "medium"),
        (70, "high"),
        (71, "very-high"),
        (100, "very-high"),
    ])
    def test_difficulty_band(self, difficulty, band):
        assert difficulty_band(difficulty) == band

    def test_difficulty_colors(self):
        assert difficulty_color(25) == "#22c55e"
        assert difficulty_color(95) == "#ef4444"

    @pytest.mark.parametrize("position,band", [
        (1, "top-3"),
        (3, "top-3"),
        (4, "top-10"),
        (10, "top-10"),
        (20, "top-20"),
        (21, "beyond-20"),
    ])
    def test_position_band(self, position, band):
        assert position_band(position) == band

    def test_position_colors(self):
        assert position_color(2) == "#22c55e"
        assert position_color(50) == "#ef4444"
