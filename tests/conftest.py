"""Pytest fixtures for radar chart tests."""

import pytest

from radar_chart.animation import ManualScheduler
from radar_chart.model import RadarChart, RadarChartListener


class RecordingListener(RadarChartListener):
    """Listener that records every notification as (event, args)."""

    def __init__(self):
        self.events: list[tuple] = []

    def on_data_changed(self, data):
        self.events.append(("data", data))

    def on_selected_item_changed(self, index, name, value):
        self.events.append(("item", (index, name, value)))

    def on_selected_value_changed(self, value):
        self.events.append(("value", value))

    def on_max_value_changed(self, max_value):
        self.events.append(("max", max_value))

    def on_interactive_mode_changed(self, interactive):
        self.events.append(("interactive", interactive))

    def names(self) -> list[str]:
        return [event for event, _args in self.events]


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Virtual clock starting at t=0."""
    return ManualScheduler()


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def compass_chart(scheduler, listener) -> RadarChart:
    """Four spokes N, E, S, W on four rings, listener attached."""
    chart = RadarChart(scheduler, width=400, height=400)
    chart.set_max_value(4)
    chart.set_data([("N", 1), ("E", 2), ("S", 3), ("W", 4)])
    chart.add_listener(listener)
    return chart


@pytest.fixture
def interactive_chart(compass_chart, listener) -> RadarChart:
    """compass_chart in interactive mode, with recorded events cleared."""
    compass_chart.set_interactive(True)
    listener.events.clear()
    return compass_chart


@pytest.fixture
def flavor_data() -> list[tuple[str, int]]:
    """Fifteen labelled values on the default five rings."""
    return [
        ("Body", 3),
        ("Charcoal", 4),
        ("Oak", 4),
        ("Leather", 4),
        ("Spice", 2),
        ("Alcohol", 3),
        ("Astringent", 3),
        ("Linger", 4),
        ("Sweet", 2),
        ("Maple", 2),
        ("Fruit", 3),
        ("Vanilla", 2),
        ("Smoke", 1),
        ("Peat", 0),
        ("Nut", 1),
    ]
