"""Radar chart geometry and drawing.

Computes spoke/ring intersections and label anchors for N spokes and M rings
under an arbitrary rotation and alignment, and paints them onto a canvas.
"""

from .geometry import Layout, compute_layout, spoke_angle
from .gravity import DEFAULT_GRAVITY, Gravity, parse_gravity, resolve_gravity
from .metrics import EstimatedTextMetrics, TextMeasurer
from .render import Canvas, ChartStyle, Paint, SvgCanvas, draw_chart, render_html, render_svg

__all__ = [
    "Layout",
    "compute_layout",
    "spoke_angle",
    "DEFAULT_GRAVITY",
    "Gravity",
    "parse_gravity",
    "resolve_gravity",
    "EstimatedTextMetrics",
    "TextMeasurer",
    "Canvas",
    "ChartStyle",
    "Paint",
    "SvgCanvas",
    "draw_chart",
    "render_html",
    "render_svg",
]
