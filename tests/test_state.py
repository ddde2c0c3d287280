"""Tests for saving and restoring chart state."""

import json
import math

import pytest
from conftest import RecordingListener

from radar_chart.model import DataPoint, RadarChart
from radar_chart.state import read_state, restore_state, save_state, write_state


@pytest.fixture
def saved_interactive(scheduler) -> dict:
    """State of an interactive 3-point chart rotated to spoke 1."""
    chart = RadarChart(scheduler)
    chart.set_max_value(6)
    chart.set_data([("Oak", 4), ("Peat", 0), ("Smoke", 6)])
    chart.set_interactive(True)
    chart.turn_to(1)
    scheduler.run_until_idle()
    return save_state(chart)


class TestSaveState:
    """Tests for save_state function."""

    def test_fields(self, saved_interactive):
        assert saved_interactive == {
            "max_value": 6,
            "data": [
                {"name": "Oak", "value": 4},
                {"name": "Peat", "value": 0},
                {"name": "Smoke", "value": 6},
            ],
            "selected": 1,
            "offset": pytest.approx(2 * math.pi / 3),
            "interactive": True,
        }

    def test_no_data(self, scheduler):
        state = save_state(RadarChart(scheduler))
        assert state["data"] is None
        assert state["interactive"] is False


class TestRestoreState:
    """Tests for restore_state function."""

    def test_round_trip(self, saved_interactive, scheduler):
        chart = RadarChart(scheduler)
        listener = RecordingListener()
        chart.add_listener(listener)

        assert restore_state(chart, saved_interactive)

        assert chart.get_data() == [DataPoint("Oak", 4), DataPoint("Peat", 0), DataPoint("Smoke", 6)]
        assert chart.max_value == 6
        assert chart.selected_index == 1
        assert chart.angle_offset == pytest.approx(2 * math.pi / 3)
        assert chart.interactive
        assert listener.names() == ["interactive", "data"]
        assert save_state(chart) == saved_interactive

    def test_interactive_requires_data(self, scheduler, listener):
        """A state claiming interactive mode without data restores as non-interactive."""
        chart = RadarChart(scheduler)
        chart.add_listener(listener)

        restore_state(chart, {"max_value": 3, "data": None, "interactive": True})

        assert chart.max_value == 3
        assert not chart.interactive
        assert listener.events == []

    def test_restore_without_data_leaves_interactive_mode(self, interactive_chart, listener):
        """Restoring no data into an interactive chart drops interactive mode."""
        restore_state(interactive_chart, {"max_value": 3, "data": None, "interactive": True})

        assert not interactive_chart.interactive
        assert not interactive_chart.has_data()
        assert listener.events == [("interactive", False)]

        interactive_chart.turn_cw()
        interactive_chart.turn_ccw()
        interactive_chart.turn_to(0)
        assert interactive_chart.selected_index == 0

    def test_restore_with_data_keeps_interactive_mode(self, interactive_chart, listener):
        restore_state(
            interactive_chart,
            {"data": [{"name": "A", "value": 1}, {"name": "B", "value": 2}], "interactive": True},
        )

        assert interactive_chart.interactive
        assert listener.names() == ["data"]

    def test_restored_values_not_clamped(self, scheduler):
        """Saved values are restored as-is, like a raw field copy."""
        chart = RadarChart(scheduler)
        restore_state(chart, {"max_value": 2, "data": [{"name": "A", "value": 4}]})

        assert chart.get_data() == [DataPoint("A", 4)]

    @pytest.mark.parametrize(
        "state",
        [
            "not a mapping",
            {"max_value": "five"},
            {"max_value": -1},
            {"data": 7},
            {"data": [{"name": "A"}]},
            {"data": [{"name": 3, "value": 1}]},
            {"data": [{"name": "A", "value": True}]},
            {"data": [{"name": "A", "value": 1}], "selected": 4},
            {"offset": "north"},
            {"offset": float("nan")},
        ],
    )
    def test_malformed_state_degrades_to_defaults(self, compass_chart, state):
        compass_chart.set_interactive(True)

        assert not restore_state(compass_chart, state)

        assert compass_chart.max_value == 5
        assert not compass_chart.has_data()
        assert not compass_chart.interactive
        assert compass_chart.angle_offset == 0.0


class TestStateFiles:
    """Tests for JSON state files."""

    def test_write_and_read(self, compass_chart, tmp_path):
        output = tmp_path / "state.json"
        write_state(compass_chart, output)

        with open(output) as f:
            raw = json.load(f)
        assert raw["max_value"] == 4
        assert read_state(output) == save_state(compass_chart)
