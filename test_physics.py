import math
import random

import pytest

from arena import Arena
from body import Body, Side
from logic import ArenaBalance
from physics import EXIT, GOAL, WALL, GoalEvent, RandomSource, Resolver
from utils import Vec2, dist

CENTER = Vec2(250.0, 200.0)


def make_resolver(rng, a=(CENTER, Vec2(0.0, 0.0)), b=(Vec2(250.0, 120.0), Vec2(0.0, 0.0)), rotation=0.0):
    balance = ArenaBalance()
    arena = Arena(CENTER, balance.arena_radius, balance.gap_half_angle, balance.rotation_rate, rotation)
    bodies = [
        Body(pos=a[0].copy(), vel=a[1].copy(), side=Side.A),
        Body(pos=b[0].copy(), vel=b[1].copy(), side=Side.B),
    ]
    return Resolver(arena, bodies, balance, rng)


def radial(resolver, body):
    return dist(body.pos, resolver.arena.center)


def test_random_random_is_a_random_source():
    assert isinstance(random.Random(1), RandomSource)


def test_resolver_needs_bodies(rng):
    balance = ArenaBalance()
    arena = Arena(CENTER, 180.0, 0.28, 0.008)
    with pytest.raises(ValueError):
        Resolver(arena, [], balance, rng)


def test_position_integrates_velocity(rng):
    r = make_resolver(rng, a=(CENTER, Vec2(1.0, 2.0)))
    events = r.step()
    assert events == []
    a = r.bodies[0]
    assert (a.pos.x, a.pos.y) == pytest.approx((251.0, 202.0))


def test_goal_registered_in_one_step_past_the_mouth(rng):
    # Gap centered at angle 0; body lands 190 units out at angle 0.
    r = make_resolver(rng, a=(Vec2(430.0, 200.0), Vec2(10.0, 0.0)))
    events = r.step()
    assert events == [GoalEvent(side=Side.A, step=1)]
    a = r.bodies[0]
    assert not a.exiting
    assert abs(a.pos.x - CENTER.x) <= r.balance.respawn_spread
    assert abs(a.pos.y - CENTER.y) <= r.balance.respawn_spread
    assert a.vel.length() >= r.balance.min_speed
    assert [c.kind for c in r.contacts] == [EXIT, GOAL]


def test_body_at_boundary_inside_gap_passes_through(rng):
    r = make_resolver(rng, a=(Vec2(428.0, 200.0), Vec2(2.0, 0.0)))
    a = r.bodies[0]

    assert r.step() == []
    assert radial(r, a) == pytest.approx(180.0)
    assert a.exiting
    assert (a.vel.x, a.vel.y) == (2.0, 0.0)

    goals = []
    for _ in range(3):
        goals.extend(r.step())
        assert a.exiting
    assert goals == []

    # 188 > 180 + 12/2 on the fifth step.
    goals = r.step()
    assert goals == [GoalEvent(side=Side.A, step=5)]
    assert not a.exiting


def test_exiting_body_scores_once_even_if_gap_rotates_away(rng):
    r = make_resolver(rng, a=(Vec2(428.0, 200.0), Vec2(2.0, 0.0)))
    r.step()
    r.arena.rotation = math.pi
    total = []
    for _ in range(10):
        total.extend(r.step())
    assert len(total) == 1


def test_wall_hit_reflects_and_repositions(rng):
    r = make_resolver(rng, a=(Vec2(90.0, 200.0), Vec2(-10.0, 0.0)))
    assert r.step() == []
    a = r.bodies[0]
    assert [c.kind for c in r.contacts] == [WALL]
    assert 9.5 <= a.vel.x <= 10.5
    assert a.vel.y == pytest.approx(0.0)
    assert radial(r, a) == pytest.approx(180.0 - 12.0 - r.balance.wall_epsilon)
    assert a.pos.x == pytest.approx(84.0)


def test_slow_wall_hit_is_bumped_to_speed_floor(rng):
    r = make_resolver(rng, a=(Vec2(82.5, 200.0), Vec2(-0.5, 0.0)))
    r.step()
    a = r.bodies[0]
    assert a.vel.length() == pytest.approx(r.balance.min_speed_reset)
    assert a.vel.x > 0


def test_zero_velocity_at_wall_gets_inward_default(rng):
    r = make_resolver(rng, a=(Vec2(80.0, 200.0), Vec2(0.0, 0.0)))
    r.step()
    a = r.bodies[0]
    assert (a.vel.x, a.vel.y) == pytest.approx((r.balance.min_speed_reset, 0.0), abs=1e-9)


def test_overlapping_bodies_exchange_and_separate(rng):
    r = make_resolver(
        rng,
        a=(Vec2(250.0, 200.0), Vec2(1.0, 0.0)),
        b=(Vec2(260.0, 200.0), Vec2(-1.0, 0.0)),
    )
    r.step()
    a, b = r.bodies
    assert dist(a.pos, b.pos) >= 2 * r.body_radius
    assert (a.vel.x, a.vel.y) != (1.0, 0.0)
    assert (b.vel.x, b.vel.y) != (-1.0, 0.0)
    # a took b's velocity (damped) plus at most 1.0 of noise per axis.
    assert abs(a.vel.x - (-0.8)) <= 1.0
    assert abs(b.vel.x - 0.8) <= 1.0
    assert a.pos.x < b.pos.x


def test_coincident_bodies_are_separated(rng):
    r = make_resolver(rng, a=(CENTER, Vec2(0.0, 0.0)), b=(CENTER, Vec2(0.0, 0.0)))
    r.step()
    a, b = r.bodies
    assert dist(a.pos, b.pos) >= 2 * r.body_radius


def test_exiting_body_skips_body_collisions(rng):
    r = make_resolver(
        rng,
        a=(Vec2(426.0, 200.0), Vec2(3.0, 0.0)),
        b=(Vec2(410.0, 210.0), Vec2(0.0, 0.0)),
    )
    a, b = r.bodies
    a.exiting = True
    r.step()
    assert r.bodies_in_play() == [b]
    assert (b.vel.x, b.vel.y) == (0.0, 0.0)
    assert (a.vel.x, a.vel.y) == (3.0, 0.0)


def test_seeded_runs_are_reproducible():
    def run(seed):
        r = make_resolver(
            random.Random(seed),
            a=(Vec2(200.0, 200.0), Vec2(3.0, 2.0)),
            b=(Vec2(340.0, 260.0), Vec2(-2.5, -3.0)),
        )
        for _ in range(800):
            r.step()
            r.arena.advance()
        return [(b.pos.x, b.pos.y, b.vel.x, b.vel.y) for b in r.bodies]

    assert run(99) == run(99)


def test_long_run_invariants():
    r = make_resolver(
        random.Random(2024),
        a=(Vec2(200.0, 200.0), Vec2(3.0, 2.0)),
        b=(Vec2(340.0, 260.0), Vec2(-2.5, -3.0)),
    )
    limit = r.balance.wall_limit
    walls = exits = goals = 0
    for _ in range(4000):
        events = r.step()
        goals += len(events)
        # Bodies are respawned, never removed.
        assert len(r.bodies) == 2
        for body in r.bodies:
            if not body.exiting:
                assert radial(r, body) <= limit + 1e-6
        a, b = r.bodies
        if a.in_play and b.in_play:
            assert dist(a.pos, b.pos) >= 2 * r.body_radius - 1e-6
        # Reflection happens only outside the gap; exits only inside it.
        for c in r.contacts:
            if c.kind == WALL:
                walls += 1
                assert not r.arena.is_within_gap(c.angle)
            elif c.kind == EXIT:
                exits += 1
                assert r.arena.is_within_gap(c.angle)
        r.arena.advance()
    assert walls > 0
    assert goals <= exits


def test_kickoff_restores_starting_layout(rng):
    r = make_resolver(rng, a=(Vec2(428.0, 200.0), Vec2(2.0, 0.0)))
    r.step()
    assert r.bodies[0].exiting
    r.kickoff()
    a, b = r.bodies
    assert not a.exiting
    assert (a.pos.x, a.pos.y) == (200.0, 200.0)
    assert (b.vel.x, b.vel.y) == (-2.5, -3.0)


def test_overlap_along_the_wall_stays_separated(rng):
    # Both bodies hug the wall away from the gap, 10 units apart.
    h = math.sqrt(167.9 ** 2 - 5.0 ** 2)
    r = make_resolver(
        rng,
        a=(Vec2(245.0, 200.0 + h), Vec2(0.0, 0.0)),
        b=(Vec2(255.0, 200.0 + h), Vec2(0.0, 0.0)),
    )
    r.step()
    a, b = r.bodies
    assert dist(a.pos, b.pos) >= 2 * r.body_radius
    for body in r.bodies:
        assert radial(r, body) <= r.balance.wall_limit + 1e-6


def test_body_pinned_at_wall_pushes_partner_inward(rng):
    r = make_resolver(
        rng,
        a=(Vec2(82.0, 200.0), Vec2(0.0, 0.0)),
        b=(Vec2(92.0, 200.0), Vec2(0.0, 0.0)),
    )
    r.step()
    a, b = r.bodies
    assert dist(a.pos, b.pos) >= 2 * r.body_radius
    assert radial(r, a) <= r.balance.wall_limit + 1e-6
    assert a.pos.x < b.pos.x
