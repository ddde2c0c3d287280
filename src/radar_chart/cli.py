"""CLI for radar-chart."""

import argparse
from pathlib import Path

from .animation import ManualScheduler
from .layout.gravity import DEFAULT_GRAVITY, parse_gravity
from .layout.render import ChartStyle, render_html, render_svg
from .model import DEFAULT_MAX_VALUE, DEFAULT_SIZE, DataPoint, RadarChart
from .state import read_state, restore_state, write_state


def load_config(config_path: Path) -> dict:
    """Load configuration from YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Dictionary of configuration values.
    """
    try:
        import yaml

        with open(config_path) as f:
            return yaml.safe_load(f) or {}
    except ImportError as err:
        raise ImportError("PyYAML required for config files: pip install pyyaml") from err


def parse_data_points(items: list) -> list[DataPoint]:
    """Parse ``data`` entries given as mappings or [name, value] pairs.

    Raises:
        ValueError: If an entry has no usable name/value.
    """
    points = []
    for item in items:
        if isinstance(item, dict):
            name, value = item.get("name"), item.get("value", 0)
        elif isinstance(item, (list, tuple)) and len(item) == 2:
            name, value = item
        else:
            raise ValueError(f"Invalid data point: {item!r}")
        if name is None:
            raise ValueError(f"Data point without a name: {item!r}")
        try:
            points.append(DataPoint(str(name), int(value)))
        except (TypeError, ValueError):
            raise ValueError(f"Invalid value for {name!r}: {value!r}") from None
    return points


def parse_data_arg(value: str) -> tuple[str, int]:
    """Parse a ``NAME=VALUE`` command line data point."""
    name, sep, number = value.rpartition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {value!r}")
    try:
        return name, int(number)
    except ValueError:
        raise argparse.ArgumentTypeError(f"value of {name!r} is not an integer") from None


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add chart arguments shared between subcommands."""
    parser.add_argument("--config", type=Path, help="Path to YAML chart config file")
    parser.add_argument(
        "--data",
        type=parse_data_arg,
        action="append",
        metavar="NAME=VALUE",
        help="Data point (can be repeated, overrides config data)",
    )
    parser.add_argument("--max-value", type=int, help="Number of rings (default: 5)")
    parser.add_argument("--width", type=float, help="Chart width in pixels (default: 400)")
    parser.add_argument("--height", type=float, help="Chart height in pixels (default: 400)")
    parser.add_argument(
        "--gravity",
        type=str,
        help="Alignment flags, e.g. 'center_horizontal|top' (default)",
    )
    parser.add_argument("--rtl", action="store_true", help="Resolve start/end right-to-left")
    parser.add_argument("--state", type=Path, help="Restore a saved state JSON file first")


def build_chart(
    args: argparse.Namespace, parser: argparse.ArgumentParser
) -> tuple[RadarChart, ChartStyle, dict]:
    """Create a chart from --config plus command line overrides.

    Returns:
        Tuple of (chart, style, config).
    """
    config = load_config(args.config) if args.config else {}

    max_value = args.max_value if args.max_value is not None else config.get("max-value")

    try:
        width = args.width or float(config.get("width", DEFAULT_SIZE))
        height = args.height or float(config.get("height", DEFAULT_SIZE))
        max_value = int(max_value) if max_value is not None else DEFAULT_MAX_VALUE
        selected = int(config.get("selected", 0))
        gravity = parse_gravity(args.gravity or config.get("gravity", DEFAULT_GRAVITY))
        style = ChartStyle.from_config(config.get("style"))
        if args.data:
            data = [DataPoint(name, value) for name, value in args.data]
        else:
            data = parse_data_points(config.get("data") or [])
    except (TypeError, ValueError) as err:
        parser.error(f"Invalid config value: {err}")

    chart = RadarChart(ManualScheduler(), width=width, height=height)
    chart.set_gravity(gravity, rtl=args.rtl or bool(config.get("rtl", False)))
    chart.set_max_value(max_value)
    chart.set_data(data or None)

    if args.state:
        if not restore_state(chart, read_state(args.state)):
            print(f"WARNING: {args.state} is not a valid chart state, using defaults")
        else:
            print(f"Restored state from {args.state}")
    else:
        chart.set_interactive(bool(config.get("interactive", False)))
        if selected and chart.interactive:
            # Jump straight to the configured spoke
            chart.turn_to(selected)
            chart.scheduler.run_until_idle()

    return chart, style, config


def write_chart(chart: RadarChart, style: ChartStyle, output: Path) -> None:
    """Write the chart as SVG or HTML depending on the file suffix."""
    if output.suffix.lower() in (".html", ".htm"):
        render_html(chart, output, style)
    else:
        output.write_text(render_svg(chart, style))


def cmd_render(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Run the render subcommand."""
    chart, style, config = build_chart(args, parser)
    output = args.output or Path(config.get("output", "radar.svg"))
    output = output.resolve()
    output.parent.mkdir(parents=True, exist_ok=True)

    n = len(chart.get_data() or [])
    print(f"Rendering {n} data point(s) on {chart.max_value} ring(s)...")
    write_chart(chart, style, output)
    print(f"Wrote {output}")

    if args.save_state:
        write_state(chart, args.save_state)
        print(f"Wrote {args.save_state}")


def cmd_animate(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Run the animate subcommand: one SVG per frame of a rotation."""
    chart, style, _config = build_chart(args, parser)
    if not chart.has_data():
        parser.error("animate needs at least one data point")

    chart.set_interactive(True)
    start_index = chart.selected_index
    if args.turn == "cw":
        chart.turn_cw()
    elif args.turn == "ccw":
        chart.turn_ccw()
    else:
        chart.turn_to(args.turn_to)

    if not chart.is_animating:
        print(f"Nothing to animate from spoke {start_index}: no valid target spoke")
        return

    print(
        f"Turning from spoke {start_index} to spoke {chart.selected_index} "
        f"({chart.selected_name})"
    )

    output = args.output.resolve()
    output.mkdir(parents=True, exist_ok=True)

    scheduler: ManualScheduler = chart.scheduler
    frames = 0
    while True:
        frame_file = output / f"frame_{frames:03d}.svg"
        frame_file.write_text(render_svg(chart, style))
        frames += 1
        if not chart.is_animating:
            break
        scheduler.advance(chart.animator.frame_delay_ms)

    print(f"Rendered {frames} frames to {output}")

    if args.save_state:
        write_state(chart, args.save_state)
        print(f"Wrote {args.save_state}")


def main() -> None:
    """Main entry point for radar-chart CLI."""
    parser = argparse.ArgumentParser(description="Render radar (spider) charts")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    render_parser = subparsers.add_parser("render", help="Render a chart to SVG or HTML")
    add_common_args(render_parser)
    render_parser.add_argument(
        "--output",
        type=Path,
        help="Output file; .html writes an interactive page (default: radar.svg)",
    )
    render_parser.add_argument("--save-state", type=Path, help="Also write the chart state")

    animate_parser = subparsers.add_parser(
        "animate",
        help="Render every frame of a rotation to a selected spoke",
    )
    add_common_args(animate_parser)
    target = animate_parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--turn-to", type=int, metavar="INDEX", help="Spoke to rotate to")
    target.add_argument("--turn", choices=["cw", "ccw"], help="Rotate one spoke")
    animate_parser.add_argument(
        "--output",
        type=Path,
        default=Path("frames"),
        help="Output directory (default: frames)",
    )
    animate_parser.add_argument("--save-state", type=Path, help="Write the final chart state")

    args = parser.parse_args()

    if args.command == "render":
        cmd_render(args, render_parser)
    elif args.command == "animate":
        cmd_animate(args, animate_parser)
    else:
        # No subcommand provided - show help
        parser.print_help()


if __name__ == "__main__":
    main()
