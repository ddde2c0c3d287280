"""Save and restore chart state across a host lifecycle."""

import json
import math
from pathlib import Path

from .model import DEFAULT_MAX_VALUE, DataPoint, RadarChart

STATE_MAX_VALUE = "max_value"
STATE_DATA = "data"
STATE_SELECTED = "selected"
STATE_OFFSET = "offset"
STATE_INTERACTIVE = "interactive"


def save_state(chart: RadarChart) -> dict:
    """Snapshot the persistable fields of a chart as plain JSON-ready values."""
    data = chart.get_data()
    return {
        STATE_MAX_VALUE: chart.max_value,
        STATE_DATA: [{"name": p.name, "value": p.value} for p in data] if data else None,
        STATE_SELECTED: chart.selected_index,
        STATE_OFFSET: chart.angle_offset,
        STATE_INTERACTIVE: chart.interactive,
    }


def _parse_state(state: dict) -> tuple[int, list[DataPoint] | None, int, float, bool]:
    """Validate a saved state.

    Raises:
        TypeError, ValueError, KeyError: If the state is malformed.
    """
    if not isinstance(state, dict):
        raise TypeError(f"State must be a mapping, got {type(state).__name__}")

    max_value = state.get(STATE_MAX_VALUE, DEFAULT_MAX_VALUE)
    if not isinstance(max_value, int) or isinstance(max_value, bool) or max_value < 0:
        raise ValueError(f"Invalid max value: {max_value!r}")

    raw_data = state.get(STATE_DATA)
    data = None
    if raw_data is not None:
        data = []
        for item in raw_data:
            name = item["name"]
            value = item["value"]
            if not isinstance(name, str) or not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"Invalid data point: {item!r}")
            data.append(DataPoint(name, value))

    selected = state.get(STATE_SELECTED, 0)
    if not isinstance(selected, int) or selected < 0 or (data and selected >= len(data)):
        raise ValueError(f"Invalid selected index: {selected!r}")

    offset = float(state.get(STATE_OFFSET, 0.0))
    if not math.isfinite(offset):
        raise ValueError(f"Invalid offset: {offset!r}")

    interactive = bool(state.get(STATE_INTERACTIVE, False))
    return max_value, data, selected, offset, interactive


def restore_state(chart: RadarChart, state: dict) -> bool:
    """Restore a state produced by save_state().

    Interactive mode is re-applied through set_interactive() so it is only
    enabled when data exists. A malformed state resets the chart to its
    defaults instead of raising.

    Returns:
        True if the state was restored, False if defaults were applied.
    """
    try:
        max_value, data, selected, offset, interactive = _parse_state(state)
    except (TypeError, ValueError, KeyError):
        max_value, data, selected, offset, interactive = DEFAULT_MAX_VALUE, None, 0, 0.0, False
        restored = False
    else:
        restored = True

    chart.restore(max_value, data, selected, offset, interactive)
    return restored


def write_state(chart: RadarChart, output_file: Path) -> None:
    """Write the chart state as JSON."""
    with open(output_file, "w") as f:
        json.dump(save_state(chart), f, indent=2)


def read_state(input_file: Path) -> dict:
    """Read a state written by write_state()."""
    with open(input_file) as f:
        return json.load(f)
