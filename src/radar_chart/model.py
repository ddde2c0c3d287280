"""Radar chart model: data points, selection, interactive mode and listeners."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .animation import ManualScheduler, RotationAnimator, Scheduler
from .layout.geometry import Layout, Point, compute_layout
from .layout.gravity import DEFAULT_GRAVITY, Gravity, resolve_gravity
from .layout.metrics import EstimatedTextMetrics, TextMeasurer

DEFAULT_MAX_VALUE = 5
DEFAULT_SIZE = 400.0


@dataclass
class DataPoint:
    """One spoke of the chart. The name is fixed; the value is mutable."""

    name: str
    value: int

    def copy(self) -> DataPoint:
        return DataPoint(self.name, self.value)


class RadarChartListener:
    """Receives change notifications from a RadarChart.

    Subclass and override the callbacks of interest.
    """

    def on_data_changed(self, data: list[DataPoint]) -> None:
        pass

    def on_selected_item_changed(self, index: int, name: str, value: int) -> None:
        pass

    def on_selected_value_changed(self, value: int) -> None:
        pass

    def on_max_value_changed(self, max_value: int) -> None:
        pass

    def on_interactive_mode_changed(self, interactive: bool) -> None:
        pass


def _clamp(value: int, low: int, high: int) -> int:
    return min(max(value, low), high)


def _to_data_point(item: DataPoint | tuple[str, int]) -> DataPoint:
    if isinstance(item, DataPoint):
        return DataPoint(item.name, item.value)
    name, value = item
    return DataPoint(str(name), int(value))


class RadarChart:
    """State of a single radar chart plus its rotation animator.

    All methods must be called from the thread that runs the scheduler's
    callbacks. Out-of-range input is clamped and invalid requests are ignored.

    Args:
        scheduler: Clock/timer of the host thread (virtual time by default).
        width: Bounding box width.
        height: Bounding box height.
        gravity: Alignment within the bounding box.
        measurer: Text measurement backend for label padding.
        request_redraw: Called whenever the chart needs repainting.
        duration_ms: Length of one rotation animation.
    """

    def __init__(
        self,
        scheduler: Scheduler | None = None,
        width: float = DEFAULT_SIZE,
        height: float = DEFAULT_SIZE,
        gravity: Gravity = DEFAULT_GRAVITY,
        measurer: TextMeasurer | None = None,
        request_redraw: Callable[[], None] | None = None,
        duration_ms: float | None = None,
    ):
        self.scheduler = scheduler or ManualScheduler()
        self.request_redraw = request_redraw

        self._data: list[DataPoint] | None = None
        self._max_value = DEFAULT_MAX_VALUE
        self._selected = 0
        self._interactive = False
        self._width = width
        self._height = height
        self._gravity = resolve_gravity(gravity)
        self._measurer: TextMeasurer = measurer or EstimatedTextMetrics()

        self._layout: Layout | None = None
        self._listeners: list[RadarChartListener] = []

        self.animator = RotationAnimator(self.scheduler, on_frame=self._on_frame)
        if duration_ms is not None:
            self.animator.duration_ms = duration_ms

    # Listeners

    def add_listener(self, listener: RadarChartListener | None) -> None:
        if listener is None:
            return
        self._listeners.append(listener)

    def remove_listener(self, listener: RadarChartListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify_data_changed(self) -> None:
        for listener in list(self._listeners):
            # Each listener gets its own copy
            listener.on_data_changed(self.get_data() or [])

    def _notify_selected_item_changed(self) -> None:
        item = self._data[self._selected]
        for listener in list(self._listeners):
            listener.on_selected_item_changed(self._selected, item.name, item.value)

    def _notify_selected_value_changed(self, value: int) -> None:
        for listener in list(self._listeners):
            listener.on_selected_value_changed(value)

    def _notify_max_value_changed(self, max_value: int) -> None:
        for listener in list(self._listeners):
            listener.on_max_value_changed(max_value)

    def _notify_interactive_mode_changed(self, interactive: bool) -> None:
        for listener in list(self._listeners):
            listener.on_interactive_mode_changed(interactive)

    # Geometry

    def invalidate(self) -> None:
        """Mark the cached layout stale and ask the host to repaint."""
        self._layout = None
        if self.request_redraw is not None:
            self.request_redraw()

    def get_layout(self) -> Layout:
        """Geometry for the current state, recomputed only after a change."""
        if self._layout is None:
            names = [item.name for item in self._data] if self._data else []
            self._layout = compute_layout(
                names,
                self._max_value,
                self.angle_offset,
                self._width,
                self._height,
                self._gravity,
                self._measurer,
            )
        return self._layout

    def get_selection_marker(self) -> Point | None:
        """Coordinate of the selected value on the selected spoke."""
        if not self.has_data():
            return None
        return self.get_layout().point(self._selected, self.selected_value)

    def _on_frame(self, finished: bool) -> None:
        self.invalidate()

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    def set_size(self, width: float, height: float) -> None:
        if (width, height) == (self._width, self._height):
            return
        self._width = width
        self._height = height
        self.invalidate()

    @property
    def gravity(self) -> Gravity:
        return self._gravity

    def set_gravity(self, gravity: Gravity, rtl: bool = False) -> None:
        """Set alignment; START/END are resolved against the layout direction."""
        self._gravity = resolve_gravity(gravity, rtl)
        self.invalidate()

    @property
    def measurer(self) -> TextMeasurer:
        return self._measurer

    def set_text_measurer(self, measurer: TextMeasurer) -> None:
        self._measurer = measurer
        self.invalidate()

    # Data

    @property
    def angle_offset(self) -> float:
        return self.animator.offset

    @property
    def max_value(self) -> int:
        return self._max_value

    def set_max_value(self, max_value: int) -> None:
        """Set the number of rings. Existing values are not re-clamped."""
        max_value = max(0, max_value)
        if max_value == self._max_value:
            return
        self._max_value = max_value
        self._notify_max_value_changed(max_value)
        self.invalidate()

    def has_data(self) -> bool:
        return bool(self._data)

    def get_data(self) -> list[DataPoint] | None:
        """Independent copy of the data points, or None without data."""
        if not self.has_data():
            return None
        return [item.copy() for item in self._data]

    def set_data(self, data: Iterable[DataPoint | tuple[str, int]] | None) -> None:
        """Replace all data points, clamping each value into [0, max_value]."""
        if data is None:
            self._data = None
        else:
            self._data = []
            for item in data:
                point = _to_data_point(item)
                point.value = _clamp(point.value, 0, self._max_value)
                self._data.append(point)

        if not self.has_data():
            if self._interactive:
                self._interactive = False
                self._notify_interactive_mode_changed(False)
            self._reset_selection()
        elif self._selected >= len(self._data):
            self._reset_selection()

        self._notify_data_changed()
        self.invalidate()

    def _reset_selection(self) -> None:
        self._selected = 0
        self.animator.jump_to(0.0)

    # Selection

    @property
    def selected_index(self) -> int:
        return self._selected

    @property
    def selected_name(self) -> str | None:
        if not self.has_data():
            return None
        return self._data[self._selected].name

    @property
    def selected_value(self) -> int:
        if not self.has_data():
            return 0
        return self._data[self._selected].value

    def set_selected_value(self, value: int) -> None:
        """Change the value of the selected data point in place."""
        if not self.has_data():
            return
        value = _clamp(value, 0, self._max_value)
        self._data[self._selected].value = value
        self._notify_selected_value_changed(value)
        self.invalidate()

    # Interaction

    @property
    def interactive(self) -> bool:
        return self._interactive

    @property
    def is_animating(self) -> bool:
        return self.animator.is_animating

    def set_interactive(self, interactive: bool) -> None:
        """Enter or leave interactive mode.

        Entering requires data. Leaving rotates the chart back to spoke 0.
        """
        if interactive == self._interactive:
            return

        if interactive:
            if not self.has_data():
                return
            self._interactive = True
        else:
            if self.has_data():
                # Still interactive here, so turn_to is allowed to run
                self.turn_to(0)
            else:
                self.animator.jump_to(0.0)
            self._interactive = False

        self._notify_interactive_mode_changed(interactive)
        self.invalidate()

    def turn_to(self, index: int) -> None:
        """Select a spoke and rotate it to the top.

        Ignored when not interactive, mid-rotation, or for an invalid index.
        """
        if not self._interactive or self.is_animating:
            return
        if index < 0 or index >= len(self._data):
            return

        self._selected = index
        self._notify_selected_item_changed()
        self.animator.animate_to(2 * math.pi / len(self._data) * index)

    def turn_ccw(self) -> None:
        """Rotate counter-clockwise, selecting the next spoke."""
        if not self._interactive or self.is_animating:
            return
        self.turn_to((self._selected + 1) % len(self._data))

    def turn_cw(self) -> None:
        """Rotate clockwise, selecting the previous spoke."""
        if not self._interactive or self.is_animating:
            return
        n = len(self._data)
        self.turn_to((self._selected - 1 + n) % n)

    # Persistence

    def restore(
        self,
        max_value: int,
        data: list[DataPoint] | None,
        selected: int,
        offset: float,
        interactive: bool,
    ) -> None:
        """Reinstate previously saved fields.

        Fields are copied as saved, without clamping or notifications, except
        for interactive mode which goes through set_interactive() so it is only
        enabled when data exists. "Data changed" is re-emitted if data was
        restored.
        """
        self._max_value = max(0, max_value)
        self._data = [item.copy() for item in data] if data else None
        self._selected = selected if self._data and 0 <= selected < len(self._data) else 0
        self.animator.jump_to(offset if self._data else 0.0)

        if self._interactive and not self._data:
            self._interactive = False
            self._notify_interactive_mode_changed(False)
        self.set_interactive(interactive)

        if self.has_data():
            self._notify_data_changed()
        self.invalidate()
