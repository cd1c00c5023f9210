"""Utility functions and math helpers."""

import math
from dataclasses import dataclass


@dataclass
class Vec2:
    """2D Vector class."""
    x: float
    y: float

    def __add__(self, other):
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, s: float):
        return Vec2(self.x * s, self.y * s)

    def __rmul__(self, s: float):
        return self.__mul__(s)

    def __truediv__(self, s: float):
        if abs(s) <= 1e-12:
            return Vec2(0.0, 0.0)
        return Vec2(self.x / s, self.y / s)

    def __neg__(self):
        return Vec2(-self.x, -self.y)

    def copy(self):
        return Vec2(self.x, self.y)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def dot(self, other) -> float:
        return self.x * other.x + self.y * other.y

    def angle(self) -> float:
        return math.atan2(self.y, self.x)

    def normalized(self):
        l = self.length()
        if l <= 1e-9:
            return Vec2(0.0, 0.0)
        return Vec2(self.x / l, self.y / l)


def dist(a: Vec2, b: Vec2) -> float:
    """Calculate distance between two positions."""
    return (a - b).length()


def normalize_angle(angle: float) -> float:
    """Wrap an angle into (-pi, pi]."""
    a = math.fmod(angle, math.tau)
    if a <= -math.pi:
        a += math.tau
    elif a > math.pi:
        a -= math.tau
    return a


def angle_of(p: Vec2, center: Vec2) -> float:
    """Angle of p around center, in (-pi, pi]."""
    return math.atan2(p.y - center.y, p.x - center.x)


def from_polar(center: Vec2, angle: float, r: float) -> Vec2:
    """Point at distance r from center along angle."""
    return Vec2(center.x + math.cos(angle) * r, center.y + math.sin(angle) * r)


def unit(angle: float) -> Vec2:
    return Vec2(math.cos(angle), math.sin(angle))


def reflect(v: Vec2, n: Vec2) -> Vec2:
    """Reflect v about the unit normal n: v - 2 (v.n) n."""
    p = v.dot(n)
    return Vec2(v.x - 2.0 * p * n.x, v.y - 2.0 * p * n.y)


def clamp_speed(v: Vec2, min_speed: float, reset_speed: float, fallback: Vec2) -> Vec2:
    """Rescale v to reset_speed when it is slower than min_speed.

    A zero vector has no direction, so `fallback` (a unit vector) is used.
    """
    speed = v.length()
    if speed >= min_speed:
        return v
    if speed <= 1e-9:
        return fallback * reset_speed
    return v * (reset_speed / speed)
