"""
Tests for pie chart geometry and SVG output.
"""

import math

import pytest

from src.reporter.charts import ChartGenerator, pie_slices


class TestPieSlices:
    """Test slice angles, arcs and labels."""

    def test_two_slices_in_order(self):
        """Commercial 30 / Informational 70 spans and large-arc flags."""
        slices = pie_slices([(30, "#4d5fc7"), (70, "#061ab1")])

        assert len(slices) == 2
        commercial, informational = slices
        assert commercial.span == pytest.approx(0.3 * 2 * math.pi)
        assert informational.span == pytest.approx(0.7 * 2 * math.pi)
        assert commercial.large_arc is False
        assert informational.large_arc is True
        assert commercial.color == "#4d5fc7"
        assert informational.color == "#061ab1"

    def test_starts_at_twelve_oclock_clockwise(self):
        slices = pie_slices([(30, "a"), (70, "b")])

        assert slices[0].start_angle == pytest.approx(-math.pi / 2)
        assert slices[1].start_angle == pytest.approx(slices[0].end_angle)
        assert slices[-1].end_angle == pytest.approx(3 * math.pi / 2)
        assert slices[0].path.startswith("M 100 100 L 100 20 A 80 80 0 0 1 ")
        assert slices[0].path.endswith(" Z")
        assert " A 80 80 0 1 1 " in slices[1].path

    def test_shares_are_relative_to_total(self):
        """Values need not add up to 100."""
        slices = pie_slices([(1, "a"), (3, "b")])
        assert [s.share for s in slices] == pytest.approx([25.0, 75.0])

    def test_labels_above_threshold_only(self):
        """Slices of 10% or less get no label."""
        slices = pie_slices([(10, "a"), (90, "b")])

        assert slices[0].label is None
        assert slices[0].has_label is False
        assert slices[1].label == "90%"

    def test_label_on_bisector(self):
        slices = pie_slices([(30, "a"), (70, "b")])
        mid = (slices[0].start_angle + slices[0].end_angle) / 2

        assert slices[0].label == "30%"
        assert slices[0].label_x == pytest.approx(100 + 56 * math.cos(mid))
        assert slices[0].label_y == pytest.approx(100 + 56 * math.sin(mid))

    def test_tiny_slice_skipped_but_keeps_angle(self):
        """Slices under 0.1% are not drawn."""
        slices = pie_slices([(0.05, "a"), (99.95, "b")])

        assert len(slices) == 1
        assert slices[0].index == 1
        assert slices[0].start_angle > -math.pi / 2

    def test_full_circle(self):
        """A single 100% slice is drawn as two half arcs."""
        slices = pie_slices([(42, "a")])

        assert len(slices) == 1
        assert slices[0].large_arc is True
        assert slices[0].path.count(" A 80 80 0 1 1 ") == 2

    def test_zero_total(self):
        assert pie_slices([]) == []
        assert pie_slices([(0, "a"), (0, "b")]) == []

    def test_negative_values_clamped(self):
        slices = pie_slices([(-5, "a"), (10, "b")])
        assert len(slices) == 1
        assert slices[0].share == pytest.approx(100.0)

    def test_custom_size(self):
        slices = pie_slices([(1, "a"), (1, "b")], size=100, radius=40)
        assert slices[0].path.startswith("M 50 50 L 50 10 A 40 40 0 0 1 ")


class TestChartGenerator:
    """Test SVG rendering."""

    def test_svg_contains_slices(self):
        svg = ChartGenerator.generate_pie_chart([(30, "#4d5fc7"), (70, "#061ab1")])

        assert svg.startswith("<svg")
        assert svg.count("<path") == 2
        assert 'fill="#4d5fc7"' in svg
        assert ">30%</text>" in svg
        assert ">70%</text>" in svg

    def test_empty_chart(self):
        html = ChartGenerator.generate_pie_chart([])
        assert "No data available for chart." in html
        assert "<svg" not in html
