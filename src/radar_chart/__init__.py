"""Radar (spider) chart layout with animated, interactive rotation."""

from .animation import AsyncioScheduler, ManualScheduler, RotationAnimator
from .model import DataPoint, RadarChart, RadarChartListener
from .state import restore_state, save_state

__all__ = [
    "AsyncioScheduler",
    "ManualScheduler",
    "RotationAnimator",
    "DataPoint",
    "RadarChart",
    "RadarChartListener",
    "restore_state",
    "save_state",
]
