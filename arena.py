"""Arena boundary with a single rotating goal mouth."""

import math

from utils import Vec2, normalize_angle


class Arena:
    """Circular boundary with one angular gap centered on `rotation`.

    Rotation only moves through `advance`, which the match controller calls
    once per unpaused physics step, so the gap position is fully described by
    the current rotation.
    """

    def __init__(
        self,
        center: Vec2,
        radius: float,
        gap_half_angle: float,
        rotation_rate: float,
        rotation: float = 0.0,
    ):
        if radius <= 0:
            raise ValueError(f"Arena radius must be positive, got {radius}")
        if not 0.0 < gap_half_angle < math.pi:
            raise ValueError(f"Gap half angle must be in (0, pi), got {gap_half_angle}")
        self.center = center
        self.radius = float(radius)
        self.gap_half_angle = float(gap_half_angle)
        self.rotation_rate = float(rotation_rate)
        self.rotation = float(rotation)

    @classmethod
    def from_balance(cls, center: Vec2, balance) -> "Arena":
        return cls(
            center,
            balance.arena_radius,
            balance.gap_half_angle,
            balance.rotation_rate,
            balance.start_rotation,
        )

    def gap_center(self) -> float:
        return normalize_angle(self.rotation)

    def current_gap_bounds(self) -> tuple[float, float]:
        """Return the open interval (min_angle, max_angle), each in (-pi, pi].

        When the gap straddles the +-pi seam, min_angle > max_angle.
        """
        return (
            normalize_angle(self.rotation - self.gap_half_angle),
            normalize_angle(self.rotation + self.gap_half_angle),
        )

    def is_within_gap(self, angle: float) -> bool:
        lo, hi = self.current_gap_bounds()
        a = normalize_angle(angle)
        if lo <= hi:
            return lo <= a <= hi
        # Wrapped interval.
        return a >= lo or a <= hi

    def advance(self, steps: int = 1) -> None:
        self.rotation += self.rotation_rate * steps
