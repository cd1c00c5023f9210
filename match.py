"""Match clock, goal pause and result reporting.

A match moves through ``NotStarted -> Running -> (Paused <-> Running)* -> Ended``.
Physics only advances in ``Running``. Every timer (clock tick, goal pause,
final whistle) is a plain callback on a ``pyglet.clock.Clock`` so the whole
match can be driven by a manual clock in tests and headless runs.
"""

from __future__ import annotations

import logging
import random

import pyglet

import config
from arena import Arena
from body import Side, make_bodies
from fsm import State, StateMachine
from logic import ArenaBalance
from physics import GoalEvent, RandomSource, Resolver
from score import Scoreboard
from teams import MatchConfigError, MatchDescriptor
from utils import Vec2

LOG = logging.getLogger(__name__)

NOT_STARTED = "NotStartedState"
RUNNING = "RunningState"
PAUSED = "PausedState"
ENDED = "EndedState"


class NotStartedState(State):
    def draw(self, surface):
        self.owner.draw_banner(surface, "Match Ready!")


class RunningState(State):
    def enter(self):
        m = self.owner
        m.clock.schedule_interval(m._on_clock_tick, m.balance.tick_seconds)

    def exit(self):
        self.owner.clock.unschedule(self.owner._on_clock_tick)

    def update(self, dt: float):
        self.owner._simulate_step()


class PausedState(State):
    def enter(self):
        m = self.owner
        m.clock.schedule_once(m._on_resume, m.balance.goal_pause)

    def exit(self):
        self.owner.clock.unschedule(self.owner._on_resume)
        self.owner.celebration = None

    def draw(self, surface):
        side = self.owner.celebration
        if side is not None:
            self.owner.draw_banner(surface, f"GOAL! {self.owner.initial_for(side)}")


class EndedState(State):
    def enter(self):
        m = self.owner
        leader = m.scoreboard.leader()
        winner = "draw" if leader is None else f"{m.initial_for(leader)} win"
        LOG.info("Final whistle: %s (%s)", m.scoreboard.format(*m.initials), winner)
        m.clock.schedule_once(m._on_final_whistle, m.balance.final_whistle)

    def draw(self, surface):
        self.owner.draw_banner(surface, "Final Whistle!")


class MatchController:
    """Owns one match: arena, bodies, score and the match clock."""

    def __init__(
        self,
        descriptor: MatchDescriptor,
        on_result=None,
        clock: pyglet.clock.Clock | None = None,
        balance: ArenaBalance | None = None,
        rng: RandomSource | None = None,
        center: Vec2 | None = None,
    ):
        if descriptor is None:
            raise MatchConfigError("A match descriptor is required")
        self.descriptor = descriptor.validate()
        self.balance = balance or ArenaBalance()
        self.clock = clock or pyglet.clock.get_default()
        self.rng = rng if rng is not None else random.Random()
        if center is None:
            center = Vec2(config.SCREEN_W / 2, config.SCREEN_H / 2)

        self.arena = Arena.from_balance(center, self.balance)
        self.resolver = Resolver(self.arena, make_bodies(center, descriptor), self.balance, self.rng)
        self.scoreboard = Scoreboard()
        self.elapsed = 0
        self.celebration: Side | None = None
        self.reported = False
        self.cancelled = False
        self._on_result = on_result

        self.fsm = StateMachine(NotStartedState(self))
        self.fsm.add_state(RunningState(self))
        self.fsm.add_state(PausedState(self))
        self.fsm.add_state(EndedState(self))

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def state_name(self) -> str:
        return self.fsm.state_name

    @property
    def running(self) -> bool:
        return self.fsm.is_in(RUNNING)

    @property
    def paused(self) -> bool:
        return self.fsm.is_in(PAUSED)

    @property
    def ended(self) -> bool:
        return self.fsm.is_in(ENDED)

    @property
    def remaining(self) -> int:
        return max(0, self.balance.match_duration - self.elapsed)

    @property
    def score(self) -> tuple[int, int]:
        return self.scoreboard.as_tuple()

    @property
    def bodies(self):
        return self.resolver.bodies

    @property
    def initials(self) -> tuple[str, str]:
        return (self.descriptor.side_a.initial, self.descriptor.side_b.initial)

    def initial_for(self, side: Side) -> str:
        return self.initials[0] if side is Side.A else self.initials[1]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        if not self.fsm.is_in(NOT_STARTED):
            raise RuntimeError(f"Match cannot start from {self.state_name}")
        LOG.info("Kickoff: %s vs %s", *self.initials)
        self.fsm.set_state(RUNNING)

    def frame(self, dt: float) -> None:
        """Advance one fixed frame. Only Running moves anything."""
        if self.cancelled:
            return
        self.fsm.update(dt)

    def tick_clock(self) -> bool:
        """Count one match-clock second. Returns False when not counting."""
        if self.cancelled or not self.running:
            return False
        self.elapsed += 1
        if self.elapsed >= self.balance.match_duration:
            self.fsm.set_state(ENDED)
        return True

    def resume(self) -> bool:
        if self.cancelled or not self.paused:
            return False
        self.fsm.set_state(RUNNING)
        return True

    def cancel(self) -> None:
        """Tear down: no timer fires and nothing mutates afterwards."""
        if self.cancelled:
            return
        self.cancelled = True
        for func in (self._on_clock_tick, self._on_resume, self._on_final_whistle):
            self.clock.unschedule(func)
        LOG.info("Match cancelled in %s at %ds", self.state_name, self.elapsed)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _simulate_step(self) -> None:
        events = self.resolver.step()
        self.arena.advance()
        if events:
            self._accept_goals(events)

    def _accept_goals(self, events: list[GoalEvent]) -> None:
        # Goals from one step happened together, before the pause begins.
        for event in events:
            total = self.scoreboard.on_goal(event)
            LOG.info("Goal %s (%d) at %ds: %s", self.initial_for(event.side), total, self.elapsed,
                     self.scoreboard.format(*self.initials))
        self.celebration = events[-1].side
        self.fsm.set_state(PAUSED)

    def _report(self) -> None:
        if self.reported or self.cancelled:
            return
        self.reported = True
        a, b = self.score
        LOG.info("Reporting result %d-%d", a, b)
        if self._on_result is not None:
            self._on_result(a, b)

    def _on_clock_tick(self, dt):
        self.tick_clock()

    def _on_resume(self, dt):
        self.resume()

    def _on_final_whistle(self, dt):
        self._report()

    def draw_banner(self, surface, text: str) -> None:
        c = self.arena.center
        surface.text(text, c.x, c.y + self.arena.radius + 10, config.PALETTE["banner"], 16)
