"""pyglet-backed drawing surface."""

from __future__ import annotations

import math

import pyglet
from pyglet import shapes

import config


class PygletSurface:
    """Immediate-mode Surface emulated with a per-frame pyglet Batch.

    Callers use top-left-origin logical coordinates; pyglet's origin is
    bottom-left, so y is flipped here and nowhere else.
    """

    def __init__(self, width: int = config.SCREEN_W, height: int = config.SCREEN_H):
        self.width = width
        self.height = height
        self.batch = pyglet.graphics.Batch()
        self._objs: list[object] = []
        self._bg = shapes.Rectangle(0, 0, width, height, color=config.BG)

    def _y(self, y: float) -> float:
        return self.height - y

    def clear(self) -> None:
        for o in self._objs:
            if hasattr(o, "delete"):
                o.delete()
        self._objs.clear()

    def arc(self, x, y, radius, start, end, color, width) -> None:
        span = end - start
        if span <= 0:
            return
        segments = max(4, int(48 * span / math.tau))
        for i in range(segments):
            a1 = start + span * (i / segments)
            a2 = start + span * ((i + 1) / segments)
            ln = shapes.Line(
                x + math.cos(a1) * radius,
                self._y(y + math.sin(a1) * radius),
                x + math.cos(a2) * radius,
                self._y(y + math.sin(a2) * radius),
                thickness=width,
                color=color,
                batch=self.batch,
            )
            self._objs.append(ln)

    def line(self, x1, y1, x2, y2, color, width) -> None:
        ln = shapes.Line(x1, self._y(y1), x2, self._y(y2), thickness=width, color=color, batch=self.batch)
        self._objs.append(ln)

    def circle(self, x, y, radius, color, outline=None) -> None:
        c = shapes.Circle(x, self._y(y), radius, color=color, batch=self.batch)
        self._objs.append(c)
        if outline is not None:
            ring = shapes.Arc(x, self._y(y), radius, segments=32, thickness=2, color=outline, batch=self.batch)
            self._objs.append(ring)

    def text(self, text, x, y, color, size) -> None:
        label = pyglet.text.Label(
            text,
            font_size=size,
            bold=True,
            x=x,
            y=self._y(y),
            anchor_x="center",
            anchor_y="center",
            color=(*color, 255),
            batch=self.batch,
        )
        self._objs.append(label)

    def present(self) -> None:
        """Flush this frame's draw calls to the active window."""
        self._bg.draw()
        self.batch.draw()
