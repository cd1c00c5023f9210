"""Draw-call sink interface and the arena scene renderer.

Rendering is one-way: the renderer reads match state and issues draw calls,
nothing drawn ever feeds back into the simulation.
"""

from __future__ import annotations

import math
from typing import Protocol, runtime_checkable

import config

Color = tuple[int, int, int]


@runtime_checkable
class Surface(Protocol):
    """Minimal immediate-mode 2D surface in top-left-origin logical units."""

    width: int
    height: int

    def clear(self) -> None: ...

    def arc(self, x: float, y: float, radius: float, start: float, end: float, color: Color, width: float) -> None: ...

    def line(self, x1: float, y1: float, x2: float, y2: float, color: Color, width: float) -> None: ...

    def circle(self, x: float, y: float, radius: float, color: Color, outline: Color | None = None) -> None: ...

    def text(self, text: str, x: float, y: float, color: Color, size: int) -> None: ...


class HeadlessSurface:
    """No-op surface that only counts calls, for tests and headless runs."""

    def __init__(self, width: int = config.SCREEN_W, height: int = config.SCREEN_H):
        self.width = width
        self.height = height
        self.calls: dict[str, int] = {}
        self.texts: list[str] = []
        self.frames = 0

    def _count(self, name: str) -> None:
        self.calls[name] = self.calls.get(name, 0) + 1

    def clear(self) -> None:
        self.frames += 1
        self.texts.clear()
        self._count("clear")

    def arc(self, x, y, radius, start, end, color, width) -> None:
        self._count("arc")

    def line(self, x1, y1, x2, y2, color, width) -> None:
        self._count("line")

    def circle(self, x, y, radius, color, outline=None) -> None:
        self._count("circle")

    def text(self, text, x, y, color, size) -> None:
        self.texts.append(text)
        self._count("text")


class ArenaRenderer:
    """Draws a MatchController onto a Surface."""

    def __init__(self, surface: Surface):
        self.surface = surface

    def draw(self, match) -> None:
        s = self.surface
        s.clear()
        self._draw_arena(match.arena)
        for body in match.bodies:
            self._draw_body(body, match.balance.body_radius)
        self._draw_hud(match)
        match.fsm.draw(s)

    def _draw_arena(self, arena) -> None:
        s = self.surface
        c = arena.center
        mid = arena.gap_center()
        lo = mid - arena.gap_half_angle
        hi = mid + arena.gap_half_angle
        # Wall runs from the gap's far edge all the way round to its near edge.
        s.arc(c.x, c.y, arena.radius, hi, lo + math.tau, config.ARENA_RING, 4)
        s.arc(c.x, c.y, arena.radius, lo, hi, config.GOAL_MOUTH, 6)
        for edge in (lo, hi):
            x1 = c.x + math.cos(edge) * (arena.radius - 10)
            y1 = c.y + math.sin(edge) * (arena.radius - 10)
            x2 = c.x + math.cos(edge) * (arena.radius + 14)
            y2 = c.y + math.sin(edge) * (arena.radius + 14)
            s.line(x1, y1, x2, y2, config.PALETTE["goal_post"], 3)

    def _draw_body(self, body, radius: float) -> None:
        s = self.surface
        s.circle(body.pos.x, body.pos.y, radius, body.color, config.PALETTE["body_outline"])
        s.text(body.initial, body.pos.x, body.pos.y, config.PALETTE["initial"], 10)

    def _draw_hud(self, match) -> None:
        s = self.surface
        a, b = match.score
        ia, ib = match.initials
        s.text(f"{ia} {a} - {b} {ib}", s.width * 0.5, 14, config.HUD_TEXT, 14)
        s.text(f"{match.remaining}s", s.width - 30, 14, config.HUD_TEXT, 12)
