"""Drawing pass: paints a chart's layout onto an abstract canvas.

Two canvases ship with the package: ``SvgCanvas`` for static images and a
pyvis export (``render_html``) for an interactive HTML page.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from html import escape
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from .geometry import Point
from .metrics import selected_label_font_size

if TYPE_CHECKING:
    from ..model import RadarChart


@dataclass
class Paint:
    """Resolved stroke/fill attributes for one drawing call."""

    color: str
    stroke_width: float = 1.0
    fill: bool = False
    font_size: float = 12.0
    bold: bool = False


@dataclass
class ChartStyle:
    """Colours and stroke widths of every chart element."""

    circle_color: str = "#cccccc"
    selected_color: str = "#efac1d"
    label_color: str = "#333333"
    polygon_color: str = "rgba(0,102,255,0.87)"
    polygon_interactive_color: str = "rgba(255,102,255,0.87)"
    background: str | None = None
    circle_width: float = 2.0
    outer_circle_width: float = 3.0
    line_width: float = 1.0
    selected_line_width: float = 3.0
    polygon_width: float = 5.0
    polygon_interactive_width: float = 4.0
    center_radius: float = 6.0
    marker_radius: float = 8.0

    @classmethod
    def from_config(cls, config: dict | None) -> ChartStyle:
        """Build a style from a config mapping using dashed or underscored keys.

        Raises:
            ValueError: If a key is not a style attribute.
        """
        style = cls()
        for key, value in (config or {}).items():
            attr = key.replace("-", "_")
            if attr not in cls.__dataclass_fields__:
                raise ValueError(f"Unknown style option: {key!r}")
            setattr(style, attr, value)
        return style


class Canvas(Protocol):
    """Minimal drawing surface required by draw_chart()."""

    def draw_circle(self, cx: float, cy: float, r: float, paint: Paint) -> None: ...

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, paint: Paint) -> None: ...

    def draw_polygon(self, points: list[Point], paint: Paint) -> None: ...

    def draw_text(self, text: str, x: float, y: float, align: str, paint: Paint) -> None: ...


def draw_chart(chart: RadarChart, canvas: Canvas, style: ChartStyle | None = None) -> None:
    """Paint rings, spokes, labels, data polygon and markers.

    Args:
        chart: Chart whose current layout is drawn.
        canvas: Target surface.
        style: Colours and widths; defaults to ChartStyle().
    """
    style = style or ChartStyle()
    layout = chart.get_layout()
    cx, cy = layout.center
    interactive = chart.interactive

    circle_paint = Paint(style.circle_color, style.circle_width)
    outer_paint = Paint(style.circle_color, style.outer_circle_width)
    line_paint = Paint(style.circle_color, style.line_width)
    selected_line_paint = Paint(style.selected_color, style.selected_line_width)
    label_paint = Paint(style.label_color, fill=True, font_size=layout.font_size)
    selected_label_paint = Paint(
        style.selected_color,
        fill=True,
        font_size=selected_label_font_size(chart.width, chart.height),
        bold=True,
    )
    center_paint = Paint(style.selected_color if interactive else style.circle_color, fill=True)

    # Rings
    radii = layout.ring_radii()
    for r in radii[:-1]:
        canvas.draw_circle(cx, cy, r, circle_paint)
    if radii:
        canvas.draw_circle(cx, cy, radii[-1], outer_paint)

    data = chart.get_data()
    if not data:
        canvas.draw_circle(cx, cy, style.center_radius, center_paint)
        return

    for i, item in enumerate(data):
        selected = interactive and i == chart.selected_index

        x, y = layout.outer_point(i)
        canvas.draw_line(cx, cy, x, y, selected_line_paint if selected else line_paint)

        x, y = layout.label_anchors[i]
        canvas.draw_text(
            item.name,
            x,
            y,
            layout.label_alignment(i),
            selected_label_paint if selected else label_paint,
        )

    if interactive:
        polygon_paint = Paint(style.polygon_interactive_color, style.polygon_interactive_width)
    else:
        polygon_paint = Paint(style.polygon_color, style.polygon_width)
    canvas.draw_polygon(layout.polygon([item.value for item in data]), polygon_paint)

    if interactive:
        x, y = chart.get_selection_marker()
        canvas.draw_circle(x, y, style.marker_radius, selected_line_paint)

    canvas.draw_circle(cx, cy, style.center_radius, center_paint)


_SVG_ANCHORS = {"left": "start", "center": "middle", "right": "end"}


class SvgCanvas:
    """Canvas that collects SVG elements."""

    def __init__(self, width: float, height: float, background: str | None = None):
        self.width = width
        self.height = height
        self.background = background
        self.elements: list[str] = []

    @staticmethod
    def _stroke(paint: Paint) -> str:
        if paint.fill:
            return f'fill="{paint.color}" stroke="none"'
        return f'fill="none" stroke="{paint.color}" stroke-width="{paint.stroke_width}"'

    def draw_circle(self, cx: float, cy: float, r: float, paint: Paint) -> None:
        self.elements.append(
            f'<circle cx="{cx:.2f}" cy="{cy:.2f}" r="{r:.2f}" {self._stroke(paint)}/>'
        )

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, paint: Paint) -> None:
        self.elements.append(
            f'<line x1="{x1:.2f}" y1="{y1:.2f}" x2="{x2:.2f}" y2="{y2:.2f}" '
            f'stroke="{paint.color}" stroke-width="{paint.stroke_width}"/>'
        )

    def draw_polygon(self, points: list[Point], paint: Paint) -> None:
        coords = " ".join(f"{x:.2f},{y:.2f}" for x, y in points)
        self.elements.append(
            f'<polygon points="{coords}" {self._stroke(paint)} stroke-linejoin="round"/>'
        )

    def draw_text(self, text: str, x: float, y: float, align: str, paint: Paint) -> None:
        weight = ' font-weight="bold"' if paint.bold else ""
        self.elements.append(
            f'<text x="{x:.2f}" y="{y:.2f}" text-anchor="{_SVG_ANCHORS.get(align, "start")}" '
            f'font-family="sans-serif" font-size="{paint.font_size:.1f}"{weight} '
            f'fill="{paint.color}">{escape(text)}</text>'
        )

    def to_svg(self) -> str:
        body = "\n  ".join(self.elements)
        background = ""
        if self.background:
            background = f'<rect width="100%" height="100%" fill="{self.background}"/>\n  '
        return (
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{self.width:g}" '
            f'height="{self.height:g}" viewBox="0 0 {self.width:g} {self.height:g}">\n'
            f"  {background}{body}\n</svg>\n"
        )


def render_svg(chart: RadarChart, style: ChartStyle | None = None) -> str:
    """Render a chart to an SVG document string."""
    style = style or ChartStyle()
    canvas = SvgCanvas(chart.width, chart.height, style.background)
    draw_chart(chart, canvas, style)
    return canvas.to_svg()


def _create_label_svg(label: str, color: str, font_size: float, bold: bool = False) -> str:
    """Create a data URL holding a single text label.

    Args:
        label: Text to display.
        color: Text colour.
        font_size: Font size in pixels.
        bold: Whether to use a bold weight.

    Returns:
        Data URL for the SVG image.
    """
    # Estimate text dimensions (approximate)
    text_width = len(label) * font_size * 0.6
    text_height = font_size * 1.4
    weight = "bold" if bold else "normal"

    svg = f'''<svg xmlns="http://www.w3.org/2000/svg" width="{text_width + 8:.0f}" height="{text_height:.0f}">
  <text x="50%" y="{font_size:.1f}" text-anchor="middle" font-family="sans-serif"
        font-size="{font_size:.1f}" font-weight="{weight}" fill="{color}">{escape(label)}</text>
</svg>'''

    encoded = base64.b64encode(svg.encode()).decode()
    return f"data:image/svg+xml;base64,{encoded}"


def render_html(chart: RadarChart, output_path: Path, style: ChartStyle | None = None) -> None:
    """Export the chart as an interactive pyvis page.

    Nodes are pinned at the layout coordinates: the centre, one vertex per
    data point (hover for name and value), one outer node per spoke and one
    label node per spoke. Rings are drawn as webs between adjacent spokes.

    Args:
        chart: Chart to export.
        output_path: Path to write the HTML file.
        style: Colours and widths; defaults to ChartStyle().
    """
    from pyvis.network import Network

    style = style or ChartStyle()
    layout = chart.get_layout()
    cx, cy = layout.center
    interactive = chart.interactive

    net = Network(
        height=f"{chart.height:g}px",
        width=f"{chart.width:g}px",
        bgcolor=style.background or "#ffffff",
        directed=False,
    )
    net.toggle_physics(False)

    center_color = style.selected_color if interactive else style.circle_color
    net.add_node(
        "center",
        label=" ",
        x=cx,
        y=cy,
        fixed=True,
        shape="dot",
        size=style.center_radius,
        color=center_color,
    )

    data = chart.get_data() or []
    n = len(data)

    for i, item in enumerate(data):
        selected = interactive and i == chart.selected_index

        # Ring webs between this spoke and the next
        for j in range(1, layout.max_value + 1):
            net.add_node(
                f"ring-{i}-{j}",
                label=" ",
                x=layout.points[i][j][0],
                y=layout.points[i][j][1],
                fixed=True,
                shape="dot",
                size=0.5,
                color=style.circle_color,
            )

        outer = f"ring-{i}-{layout.max_value}" if layout.max_value > 0 else "center"
        if outer != "center":
            net.add_edge(
                "center",
                outer,
                color=style.selected_color if selected else style.circle_color,
                width=style.selected_line_width if selected else style.line_width,
            )

        x, y = layout.label_anchors[i]
        font_size = layout.font_size
        if selected:
            font_size = selected_label_font_size(chart.width, chart.height)
        net.add_node(
            f"label-{i}",
            label=" ",
            title=item.name,
            x=x,
            y=y,
            fixed=True,
            shape="image",
            image=_create_label_svg(
                item.name,
                style.selected_color if selected else style.label_color,
                font_size,
                bold=selected,
            ),
            size=font_size,
        )

        x, y = layout.point(i, item.value)
        net.add_node(
            f"value-{i}",
            label=" ",
            title=f"{item.name}: {item.value}/{chart.max_value}",
            x=x,
            y=y,
            fixed=True,
            shape="dot",
            size=style.marker_radius if selected else 3,
            color=style.selected_color if selected else style.polygon_color,
        )

    for i in range(n):
        following = (i + 1) % n
        if following == i:
            continue
        for j in range(1, layout.max_value + 1):
            net.add_edge(
                f"ring-{i}-{j}",
                f"ring-{following}-{j}",
                color=style.circle_color,
                width=style.outer_circle_width if j == layout.max_value else style.circle_width,
            )
        net.add_edge(
            f"value-{i}",
            f"value-{following}",
            color=style.polygon_interactive_color if interactive else style.polygon_color,
            width=style.polygon_interactive_width if interactive else style.polygon_width,
        )

    net.set_options("""
    {
        "physics": {"enabled": false},
        "interaction": {
            "zoomView": true,
            "dragView": true,
            "dragNodes": false,
            "hover": true,
            "tooltipDelay": 100
        },
        "edges": {
            "smooth": false,
            "selectionWidth": 0
        }
    }
    """)

    net.save_graph(str(output_path))
