"""
Chart Generator for the Dashboard

Generates inline SVG pie charts for the keyword-type distributions.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PieSlice:
    """Geometry of one pie slice."""
    index: int  # position in the input sequence
    value: float
    color: str
    share: float  # percent of the total, 0-100
    start_angle: float  # radians, -pi/2 is 12 o'clock
    end_angle: float
    large_arc: bool
    path: str
    label_x: Optional[float] = None
    label_y: Optional[float] = None
    label: Optional[str] = None

    @property
    def span(self) -> float:
        return self.end_angle - self.start_angle

    @property
    def has_label(self) -> bool:
        return self.label is not None


def _fmt(value: float) -> str:
    """Compact coordinate formatting for SVG path data."""
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def _point(cx: float, cy: float, radius: float, angle: float) -> Tuple[float, float]:
    return cx + radius * math.cos(angle), cy + radius * math.sin(angle)


def pie_slices(
    entries: Iterable[Tuple[float, str]],
    size: int = 200,
    radius: float = 80,
    label_threshold: float = 10.0,
    min_share: float = 0.1,
) -> List[PieSlice]:
    """
    Compute pie slice paths for (value, color) entries.

    Angles run clockwise from 12 o'clock in input order. Slices below
    min_share percent are not drawn but still take up their angle.

    Args:
        entries: Ordered (value, color) pairs
        size: Chart size (square); the centre is (size/2, size/2)
        radius: Pie radius
        label_threshold: Only slices above this share (percent) get a label
        min_share: Slices below this share (percent) are skipped

    Returns:
        One PieSlice per drawn entry, in input order. Empty when the
        total is not positive.
    """
    entries = [(max(float(value or 0), 0.0), color) for value, color in entries]
    total = sum(value for value, _ in entries)
    if total <= 0:
        return []

    cx = cy = size / 2
    slices = []
    cumulative = 0.0

    for i, (value, color) in enumerate(entries):
        start_angle = cumulative / total * 2 * math.pi - math.pi / 2
        end_angle = (cumulative + value) / total * 2 * math.pi - math.pi / 2
        cumulative += value

        share = value / total * 100
        if share < min_share:
            continue

        large_arc = share > 50
        x1, y1 = _point(cx, cy, radius, start_angle)
        x2, y2 = _point(cx, cy, radius, end_angle)
        r = _fmt(radius)

        if share >= 100 - 1e-9:
            # Start and end coincide: draw the circle as two half arcs
            xm, ym = _point(cx, cy, radius, start_angle + math.pi)
            path = (
                f"M {_fmt(cx)} {_fmt(cy)} L {_fmt(x1)} {_fmt(y1)} "
                f"A {r} {r} 0 1 1 {_fmt(xm)} {_fmt(ym)} "
                f"A {r} {r} 0 1 1 {_fmt(x2)} {_fmt(y2)} Z"
            )
        else:
            path = (
                f"M {_fmt(cx)} {_fmt(cy)} L {_fmt(x1)} {_fmt(y1)} "
                f"A {r} {r} 0 {int(large_arc)} 1 {_fmt(x2)} {_fmt(y2)} Z"
            )

        label_x = label_y = label = None
        if share > label_threshold:
            label_x, label_y = _point(cx, cy, radius * 0.7, (start_angle + end_angle) / 2)
            label = f"{round(share)}%"

        slices.append(PieSlice(
            index=i,
            value=value,
            color=color,
            share=share,
            start_angle=start_angle,
            end_angle=end_angle,
            large_arc=large_arc,
            path=path,
            label_x=label_x,
            label_y=label_y,
            label=label,
        ))

    return slices


class ChartGenerator:
    """
    Generates charts for the dashboard.

    Uses inline SVG so pages need no client-side charting.
    """

    @staticmethod
    def generate_pie_chart(
        entries: Sequence[Tuple[float, str]],
        size: int = 200,
        radius: float = 80,
        background: str = "#f3f4f6",
    ) -> str:
        """
        Generate a pie chart as SVG.

        Args:
            entries: Ordered (value, color) pairs
            size: Chart size (square viewBox)
            radius: Pie radius
            background: Fill of the disc behind the slices

        Returns:
            SVG string
        """
        slices = pie_slices(entries, size=size, radius=radius)
        if not slices:
            return '<p class="no-data">No data available for chart.</p>'

        center = _fmt(size / 2)
        parts = []
        for s in slices:
            parts.append(
                f'<path d="{s.path}" fill="{s.color}" stroke="white" stroke-width="2"/>'
            )
            if s.has_label:
                parts.append(
                    f'<text x="{_fmt(s.label_x)}" y="{_fmt(s.label_y)}" text-anchor="middle" '
                    f'dominant-baseline="middle" fill="white" font-size="14" '
                    f'font-weight="bold">{s.label}</text>'
                )

        return (
            f'<svg width="100%" height="100%" viewBox="0 0 {size} {size}" '
            f'xmlns="http://www.w3.org/2000/svg">'
            f'<circle cx="{center}" cy="{center}" r="{_fmt(radius)}" fill="{background}"/>'
            f'{"".join(parts)}'
            f'</svg>'
        )
