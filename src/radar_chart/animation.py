"""Time-driven rotation of the chart's angle offset.

The animator never sleeps: it re-schedules a short callback on the host's
scheduler until the configured duration has elapsed, then snaps to the
target. Late callbacks simply see progress >= 1.0 and finish.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import math
from collections.abc import Callable
from enum import Enum
from typing import Any, Protocol

FRAME_DELAY_MS = 33
DEFAULT_DURATION_MS = 400.0

# Offsets above this many radians are treated as "past half a turn" when
# rotating to or from zero. Fixed heuristic, independent of spoke count.
WRAP_THRESHOLD = 3.0


class Scheduler(Protocol):
    """Clock plus delayed-callback facility of the host's UI thread."""

    def now(self) -> float:
        """Current time in milliseconds."""
        ...

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> Any:
        """Run callback after delay_ms; returns a handle for cancel()."""
        ...

    def cancel(self, handle: Any) -> None:
        ...


class ManualScheduler:
    """Virtual-time scheduler: callbacks only run when advance() is called."""

    def __init__(self, start_ms: float = 0.0):
        self._now = start_ms
        self._queue: list[tuple[float, int, Callable[[], None]]] = []
        self._cancelled: set[int] = set()
        self._counter = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> int:
        handle = next(self._counter)
        heapq.heappush(self._queue, (self._now + delay_ms, handle, callback))
        return handle

    def cancel(self, handle: int) -> None:
        self._cancelled.add(handle)

    @property
    def pending(self) -> int:
        """Number of callbacks still waiting to run."""
        return sum(1 for _, handle, _ in self._queue if handle not in self._cancelled)

    def advance(self, ms: float) -> None:
        """Move the clock forward, running every callback that falls due.

        Callbacks scheduled while advancing run too if they fall due before
        the new time.
        """
        target = self._now + ms
        while self._queue and self._queue[0][0] <= target:
            due, handle, callback = heapq.heappop(self._queue)
            if handle in self._cancelled:
                self._cancelled.discard(handle)
                continue
            self._now = max(self._now, due)
            callback()
        self._now = target

    def run_until_idle(self, max_ms: float = 60_000.0) -> None:
        """Advance one callback at a time until nothing is pending."""
        limit = self._now + max_ms
        while self._queue and self._queue[0][0] <= limit:
            self.advance(max(0.0, self._queue[0][0] - self._now))


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop or asyncio.get_running_loop()

    def now(self) -> float:
        return self._loop.time() * 1000.0

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self._loop.call_later(delay_ms / 1000.0, callback)

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()


class AnimationState(Enum):
    IDLE = "idle"
    ANIMATING = "animating"


def corrected_start(start: float, target: float) -> float:
    """Shift the start offset by a full turn when crossing the 0/2pi boundary.

    Only the two boundary cases are handled; this is not a general
    shortest-path rotation.
    """
    if start == 0.0 and target > WRAP_THRESHOLD:
        return 2 * math.pi
    if target == 0.0 and start > WRAP_THRESHOLD:
        return start - 2 * math.pi
    return start


class RotationAnimator:
    """Linear interpolation of an angle offset towards a target.

    Args:
        scheduler: Clock and callback scheduler of the host thread.
        on_frame: Called after every tick with True once the animation settled.
        duration_ms: Length of one rotation.
        frame_delay_ms: Delay between ticks.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        on_frame: Callable[[bool], None] | None = None,
        duration_ms: float = DEFAULT_DURATION_MS,
        frame_delay_ms: float = FRAME_DELAY_MS,
    ):
        self.scheduler = scheduler
        self.on_frame = on_frame
        self.duration_ms = duration_ms
        self.frame_delay_ms = frame_delay_ms

        self.offset = 0.0
        self.state = AnimationState.IDLE
        self._start_time = 0.0
        self._start_offset = 0.0
        self._target_offset = 0.0
        self._handle: Any = None

    @property
    def is_animating(self) -> bool:
        return self.state is AnimationState.ANIMATING

    @property
    def target_offset(self) -> float:
        return self._target_offset

    def animate_to(self, target: float) -> bool:
        """Start rotating towards target.

        Returns:
            False (and does nothing) if a rotation is already in flight.
        """
        if self.is_animating:
            return False

        self._start_time = self.scheduler.now()
        self._start_offset = corrected_start(self.offset, target)
        self._target_offset = target
        self.state = AnimationState.ANIMATING
        self._handle = self.scheduler.call_later(self.frame_delay_ms, self._tick)
        return True

    def jump_to(self, offset: float) -> None:
        """Set the offset immediately, dropping any rotation in flight."""
        if self._handle is not None:
            self.scheduler.cancel(self._handle)
            self._handle = None
        self.offset = offset
        self._target_offset = offset
        self.state = AnimationState.IDLE

    def _tick(self) -> None:
        self._handle = None
        progress = (self.scheduler.now() - self._start_time) / self.duration_ms

        if progress >= 1.0:
            self.offset = self._target_offset
            self.state = AnimationState.IDLE
        else:
            self.offset = (
                self._start_offset + (self._target_offset - self._start_offset) * progress
            )
            self._handle = self.scheduler.call_later(self.frame_delay_ms, self._tick)

        if self.on_frame is not None:
            self.on_frame(not self.is_animating)
