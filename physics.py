"""Physics, collision response and goal detection for the arena."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from arena import Arena
from body import Body, Side, kickoff_layout
from logic import ArenaBalance
from utils import Vec2, angle_of, clamp_speed, dist, from_polar, reflect, unit

LOG = logging.getLogger(__name__)

WALL = "wall"
EXIT = "exit"
GOAL = "goal"


@runtime_checkable
class RandomSource(Protocol):
    """Anything with the `random.Random` float API (seeded in tests)."""

    def uniform(self, a: float, b: float) -> float: ...


@dataclass(frozen=True)
class GoalEvent:
    side: Side
    step: int


@dataclass(frozen=True)
class Contact:
    """Boundary contact recorded during a step."""
    body_index: int
    kind: str  # WALL, EXIT or GOAL
    angle: float
    step: int


def check_circle_collision(pos1: Vec2, r1: float, pos2: Vec2, r2: float) -> bool:
    """Check if two circles overlap."""
    d_sq = (pos1 - pos2).length_squared()
    r_sum = r1 + r2
    return d_sq < (r_sum * r_sum)


class Resolver:
    """Owns the bodies and advances them one fixed step at a time.

    Goal registration uses the delayed policy: a body reaching the boundary
    inside the gap is marked `exiting` and flies on untouched until its
    center passes `balance.exit_distance`, at which point one GoalEvent is
    emitted and the body respawns near the center in the same step.
    """

    def __init__(self, arena: Arena, bodies: list[Body], balance: ArenaBalance, rng: RandomSource):
        if not bodies:
            raise ValueError("Resolver needs at least one body")
        self.arena = arena
        self.bodies = bodies
        self.balance = balance
        self.rng = rng
        self.steps = 0
        self.contacts: list[Contact] = []

    @property
    def body_radius(self) -> float:
        return self.balance.body_radius

    def bodies_in_play(self) -> list[Body]:
        return [b for b in self.bodies if b.in_play]

    def place(self, index: int, pos: Vec2, vel: Vec2) -> None:
        """Put a body at an explicit position/velocity (scenario setup)."""
        b = self.bodies[index]
        b.pos = pos.copy()
        b.vel = vel.copy()
        b.exiting = False

    def kickoff(self) -> None:
        """Return every body to its starting position and velocity."""
        for body, (_side, pos, vel) in zip(self.bodies, kickoff_layout(self.arena.center)):
            body.pos = pos
            body.vel = vel
            body.exiting = False

    # ------------------------------------------------------------------
    # Per-step update
    # ------------------------------------------------------------------

    def step(self) -> list[GoalEvent]:
        """Advance every body by one step and return the goals scored."""
        self.steps += 1
        self.contacts = []
        events: list[GoalEvent] = []

        for i, body in enumerate(self.bodies):
            body.pos = body.pos + body.vel
            if self._resolve_boundary(i, body):
                events.append(GoalEvent(side=body.side, step=self.steps))
                LOG.debug("Goal for side %s at step %d", body.side.value, self.steps)
                self._respawn(body)

        self._resolve_pairs()
        return events

    def _resolve_boundary(self, index: int, body: Body) -> bool:
        """Wall bounce or gap exit. Returns True when a goal completes."""
        center = self.arena.center
        d = dist(body.pos, center)
        theta = angle_of(body.pos, center)

        if body.exiting:
            if d > self.balance.exit_distance:
                self.contacts.append(Contact(index, GOAL, theta, self.steps))
                return True
            return False

        if d < self.balance.wall_limit:
            return False

        n = unit(theta)
        if self.arena.is_within_gap(theta):
            body.exiting = True
            if body.vel.dot(n) <= 0.0:
                body.vel = n * self.balance.min_speed
            self.contacts.append(Contact(index, EXIT, theta, self.steps))
            if d > self.balance.exit_distance:
                self.contacts.append(Contact(index, GOAL, theta, self.steps))
                return True
            return False

        self._bounce(body, theta, n)
        self.contacts.append(Contact(index, WALL, theta, self.steps))
        return False

    def _bounce(self, body: Body, theta: float, n: Vec2) -> None:
        v = body.vel
        if v.dot(n) > 0.0:
            v = reflect(v, n)
        # Independent factor per axis keeps trajectories from repeating.
        v = Vec2(v.x * self.balance.jitter(self.rng), v.y * self.balance.jitter(self.rng))
        body.vel = clamp_speed(v, self.balance.min_speed, self.balance.min_speed_reset, -n)
        body.pos = from_polar(
            self.arena.center,
            theta,
            self.balance.wall_limit - self.balance.wall_epsilon,
        )

    def _respawn(self, body: Body) -> None:
        c = self.arena.center
        spread = self.balance.respawn_spread
        speed = self.balance.respawn_speed
        body.exiting = False
        body.pos = Vec2(c.x + self.rng.uniform(-spread, spread), c.y + self.rng.uniform(-spread, spread))
        vel = Vec2(self.rng.uniform(-speed, speed), self.rng.uniform(-speed, speed))
        fallback = unit(self.rng.uniform(-math.pi, math.pi))
        body.vel = clamp_speed(vel, self.balance.min_speed, self.balance.min_speed_reset, fallback)

    def _overlapping_pairs(self) -> list[tuple[Body, Body]]:
        """In-play pairs closer than two radii, in ascending (i, j) order."""
        pairs = []
        bodies = self.bodies
        for i in range(len(bodies)):
            for j in range(i + 1, len(bodies)):
                a = bodies[i]
                b = bodies[j]
                if not (a.in_play and b.in_play):
                    continue
                if check_circle_collision(a.pos, self.body_radius, b.pos, self.body_radius):
                    pairs.append((a, b))
        return pairs

    def _resolve_pairs(self) -> None:
        """Exchange velocities of touching bodies, then push them apart.

        Velocities are exchanged once per step. Separation and wall
        containment then alternate for up to `separation_passes` rounds or
        until no in-play pair overlaps.
        """
        damp = self.balance.exchange_damping
        for a, b in self._overlapping_pairs():
            va = a.vel
            vb = b.vel
            a.vel = Vec2(
                vb.x * damp + self.balance.perturbation(self.rng),
                vb.y * damp + self.balance.perturbation(self.rng),
            )
            b.vel = Vec2(
                va.x * damp + self.balance.perturbation(self.rng),
                va.y * damp + self.balance.perturbation(self.rng),
            )

        for _ in range(self.balance.separation_passes):
            pairs = self._overlapping_pairs()
            for a, b in pairs:
                self._separate(a, b)
            for body in self.bodies:
                if body.in_play:
                    self._contain(body)
            if not pairs:
                break

    def _separate(self, a: Body, b: Body) -> None:
        delta = a.pos - b.pos
        d = delta.length()
        if d <= 1e-9:
            # Coincident centers: separate along +x.
            normal = Vec2(1.0, 0.0)
        else:
            normal = delta * (1.0 / d)
        push = (self.body_radius * 2.0 - d) * 0.5 + self.balance.separation_slop
        a_pinned = self._pinned(a, normal)
        b_pinned = self._pinned(b, -normal)
        if a_pinned and not b_pinned:
            b.pos = b.pos - normal * (push * 2.0)
        elif b_pinned and not a_pinned:
            a.pos = a.pos + normal * (push * 2.0)
        else:
            a.pos = a.pos + normal * push
            b.pos = b.pos - normal * push

    def _pinned(self, body: Body, direction: Vec2) -> bool:
        """True when the wall would undo a push of `body` along `direction`."""
        offset = body.pos - self.arena.center
        at_wall = offset.length() >= self.balance.wall_limit - 1e-6
        return at_wall and offset.dot(direction) > 0.0

    def _contain(self, body: Body) -> None:
        """Pull an in-play body back inside the wall after separation."""
        center = self.arena.center
        limit = self.balance.wall_limit
        if dist(body.pos, center) > limit:
            body.pos = from_polar(center, angle_of(body.pos, center), limit)
