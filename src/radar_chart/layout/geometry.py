"""Spoke/ring geometry for a radar chart.

Every spoke ``i`` of ``n`` sits at angle ``-i * 2pi / n + pi / 2 + offset``,
so spoke 0 points straight up when unrotated and indices proceed clockwise.
Screen coordinates are used throughout: y grows downwards.
"""

import math
from dataclasses import dataclass, field

from .gravity import DEFAULT_GRAVITY, Gravity, horizontal_component, vertical_component
from .metrics import EstimatedTextMetrics, TextMeasurer, label_font_size, label_padding

Point = tuple[float, float]


@dataclass(frozen=True)
class Layout:
    """Computed geometry for one chart state."""

    center: Point
    radius: float
    ring_step: float
    max_value: int
    font_size: float
    h_pad: float
    v_pad: float
    angles: list[float] = field(default_factory=list)
    points: list[list[Point]] = field(default_factory=list)  # points[spoke][ring]
    label_anchors: list[Point] = field(default_factory=list)

    @property
    def spoke_count(self) -> int:
        return len(self.points)

    def point(self, spoke: int, value: int) -> Point:
        """Intersection of a spoke with the ring for value.

        Values above max_value (left over after max_value shrank) are drawn
        on the outer ring.
        """
        value = min(max(value, 0), self.max_value)
        return self.points[spoke][value]

    def outer_point(self, spoke: int) -> Point:
        return self.points[spoke][self.max_value]

    def polygon(self, values: list[int]) -> list[Point]:
        """Vertices of the closed data path, one per spoke."""
        return [self.point(i, value) for i, value in enumerate(values)]

    def ring_radii(self) -> list[float]:
        """Radii of rings 1..max_value (ring 0 is the centre itself)."""
        return [self.ring_step * j for j in range(1, self.max_value + 1)]

    def label_alignment(self, spoke: int) -> str:
        """Horizontal text alignment for a spoke's label.

        Returns:
            "center" for labels near the vertical axis, "left" for labels
            right of centre (text grows away from the chart), else "right".
        """
        x = self.label_anchors[spoke][0]
        center_x = self.center[0]
        if abs(x - center_x) < self.ring_step:
            return "center"
        if x > center_x:
            return "left"
        return "right"


def spoke_angle(index: int, count: int, offset: float) -> float:
    """Angle in radians of spoke index out of count, rotated by offset."""
    return -index * 2 * math.pi / count + math.pi / 2 + offset


def _center_x(gravity: Gravity, width: float, extent: float) -> float:
    horizontal = horizontal_component(gravity)
    if horizontal == Gravity.LEFT:
        return extent
    if horizontal == Gravity.RIGHT:
        return width - extent
    return width / 2


def _center_y(gravity: Gravity, height: float, extent: float) -> float:
    vertical = vertical_component(gravity)
    if vertical == Gravity.TOP:
        return extent
    if vertical == Gravity.BOTTOM:
        return height - extent
    return height / 2


def compute_layout(
    names: list[str],
    max_value: int,
    angle_offset: float,
    width: float,
    height: float,
    gravity: Gravity = DEFAULT_GRAVITY,
    measurer: TextMeasurer | None = None,
) -> Layout:
    """Compute centre, ring spacing, spoke/ring intersections and label anchors.

    Args:
        names: Data point names in spoke order (may be empty).
        max_value: Number of rings; 0 collapses every ring onto the centre.
        angle_offset: Current rotation of the chart in radians.
        width: Bounding box width.
        height: Bounding box height.
        gravity: Alignment of the chart within the bounding box.
        measurer: Text measurement backend for label padding.

    Returns:
        Layout for the given inputs.
    """
    measurer = measurer or EstimatedTextMetrics()
    max_value = max(0, max_value)

    font_size = label_font_size(width, height)
    h_pad, v_pad = label_padding(names, font_size, measurer)

    raw_radius = min(width, height) / 2
    radius = max(0.0, raw_radius - max(v_pad, h_pad) - v_pad)
    ring_step = radius / max_value if max_value > 0 else 0.0

    center_x = _center_x(gravity, width, radius + h_pad)
    center_y = _center_y(gravity, height, radius + v_pad * 3)

    angles: list[float] = []
    points: list[list[Point]] = []
    label_anchors: list[Point] = []

    n = len(names)
    for i in range(n):
        angle = spoke_angle(i, n, angle_offset)
        cos = math.cos(angle)
        sin = math.sin(angle)
        angles.append(angle)

        # Intersections with rings 0..max_value
        points.append(
            [
                (center_x + j * ring_step * cos, center_y - j * ring_step * sin)
                for j in range(max_value + 1)
            ]
        )

        # Anchor just outside the outer ring, nudged down by half a line
        label_anchors.append(
            (
                center_x + (radius + ring_step / 3) * cos,
                center_y - (radius + ring_step) * sin + v_pad / 2,
            )
        )

    return Layout(
        center=(center_x, center_y),
        radius=radius,
        ring_step=ring_step,
        max_value=max_value,
        font_size=font_size,
        h_pad=h_pad,
        v_pad=v_pad,
        angles=angles,
        points=points,
        label_anchors=label_anchors,
    )
