"""Centralized arena physics tuning logic."""

from __future__ import annotations

from dataclasses import dataclass

import config


@dataclass
class ArenaBalance:
    """Single source of truth for arena tuning values."""

    fps: float = float(config.FPS)

    # Simulation pacing
    frame_dt_cap: float = 0.25
    max_catchup_steps: int = 6

    # Geometry
    arena_radius: float = config.ARENA_RADIUS
    body_radius: float = config.BODY_RADIUS
    gap_half_angle: float = config.GAP_HALF_ANGLE
    rotation_rate: float = config.ROTATION_RATE
    start_rotation: float = config.START_ROTATION

    # Wall response
    wall_epsilon: float = 2.0
    jitter_min: float = 0.95
    jitter_max: float = 1.05
    min_speed: float = 2.0
    min_speed_reset: float = 2.5

    # Body-body response
    exchange_damping: float = 0.8
    exchange_perturbation: float = 1.0
    separation_slop: float = 0.01
    separation_passes: int = 4

    # Respawn after a goal
    respawn_spread: float = 40.0
    respawn_speed: float = 3.0

    # Match pacing (seconds / ticks)
    match_duration: int = config.MATCH_DURATION
    tick_seconds: float = config.TICK_SECONDS
    goal_pause: float = config.GOAL_PAUSE_SECONDS
    final_whistle: float = config.FINAL_WHISTLE_SECONDS

    @property
    def fixed_dt(self) -> float:
        return 1.0 / max(1.0, float(self.fps))

    @property
    def wall_limit(self) -> float:
        """Farthest a body center may sit from the arena center."""
        return self.arena_radius - self.body_radius

    @property
    def exit_distance(self) -> float:
        """Distance at which an exiting body counts as a goal."""
        return self.arena_radius + self.body_radius * 0.5

    def jitter(self, rng) -> float:
        return rng.uniform(self.jitter_min, self.jitter_max)

    def perturbation(self, rng) -> float:
        return rng.uniform(-self.exchange_perturbation, self.exchange_perturbation)
