"""Frame loop driver: fixed-timestep simulation plus one draw per frame."""

from __future__ import annotations

import logging
import random

import pyglet

from logic import ArenaBalance
from match import MatchController
from render import ArenaRenderer, HeadlessSurface

LOG = logging.getLogger(__name__)


class ManualClock(pyglet.clock.Clock):
    """pyglet Clock whose time only moves when `advance` is called."""

    def __init__(self, start: float = 0.0):
        self.now = float(start)
        super().__init__(time_function=self._time)
        self.tick()

    def _time(self) -> float:
        return self.now

    def advance(self, seconds: float, step: float) -> None:
        """Move time forward in `step` increments, ticking after each."""
        for _ in range(max(0, round(seconds / step))):
            self.now += step
            self.tick()


class LoopDriver:
    """Schedules simulate+draw frames for one match view on a clock."""

    def __init__(self, match: MatchController, surface, clock=None, frame_interval: float | None = None):
        self.match = match
        self.surface = surface
        self.clock = clock or match.clock
        self.balance = match.balance
        self.frame_interval = frame_interval or self.balance.fixed_dt
        self.renderer = ArenaRenderer(surface) if surface is not None else None
        self._fixed_dt = self.balance.fixed_dt
        self._frame_dt_cap = self.balance.frame_dt_cap
        self._max_catchup_steps = self.balance.max_catchup_steps
        self._accumulator = 0.0
        self.scheduled = False
        self.frames = 0
        self.steps = 0

    def start(self) -> bool:
        """Kick off the match. Without a surface nothing starts."""
        if self.renderer is None:
            LOG.warning("No rendering surface available; match not started")
            return False
        if self.scheduled:
            return True
        self.clock.schedule_interval(self._on_frame, self.frame_interval)
        self.scheduled = True
        self.match.start()
        self.draw()
        return True

    def stop(self) -> None:
        if self.scheduled:
            self.clock.unschedule(self._on_frame)
            self.scheduled = False

    def cancel(self) -> None:
        """Teardown when the view goes away."""
        self.stop()
        self.match.cancel()

    def _on_frame(self, dt):
        if self.match.cancelled:
            self.stop()
            return
        self.update(dt)
        self.draw()
        if self.match.ended:
            self.stop()

    def update(self, dt: float) -> None:
        frame_dt = max(0.0, min(float(dt), self._frame_dt_cap))
        self._accumulator += frame_dt
        steps = 0
        while self._accumulator >= self._fixed_dt and steps < self._max_catchup_steps:
            self.match.frame(self._fixed_dt)
            self._accumulator -= self._fixed_dt
            steps += 1
        if steps >= self._max_catchup_steps:
            # Drop extra accumulated time to avoid spiral-of-death stalls.
            self._accumulator = 0.0
        self.steps += steps

    def draw(self) -> None:
        self.renderer.draw(self.match)
        self.frames += 1


def run_headless(
    descriptor,
    seed: int | None = None,
    balance: ArenaBalance | None = None,
    max_seconds: float = 3600.0,
) -> tuple[int, int]:
    """Play a full match in accelerated time and return (goals_a, goals_b)."""
    balance = balance or ArenaBalance()
    clock = ManualClock()
    results: list[tuple[int, int]] = []
    match = MatchController(
        descriptor,
        on_result=lambda a, b: results.append((a, b)),
        clock=clock,
        balance=balance,
        rng=random.Random(seed),
    )
    driver = LoopDriver(match, HeadlessSurface(), clock=clock)
    driver.start()

    step = driver.frame_interval
    while not results:
        if clock.now >= max_seconds:
            driver.cancel()
            raise RuntimeError(f"Match did not finish within {max_seconds}s of simulated time")
        clock.advance(step, step)
    return results[0]
