"""Body entity and kickoff placement."""

from dataclasses import dataclass
from enum import Enum

import config
from utils import Vec2


class Side(Enum):
    A = "A"
    B = "B"

    @property
    def other(self) -> "Side":
        return Side.B if self is Side.A else Side.A


@dataclass
class Body:
    """A moving circle representing one side."""
    pos: Vec2
    vel: Vec2
    side: Side
    color: tuple[int, int, int] = (255, 255, 255)
    initial: str = ""
    exiting: bool = False  # past the boundary, inside the goal mouth

    @property
    def in_play(self) -> bool:
        return not self.exiting


def kickoff_layout(center: Vec2) -> list[tuple[Side, Vec2, Vec2]]:
    """Starting (side, position, velocity) for each body."""
    out = []
    for side, (dx, dy, vx, vy) in ((Side.A, config.KICKOFF_A), (Side.B, config.KICKOFF_B)):
        out.append((side, Vec2(center.x + dx, center.y + dy), Vec2(vx, vy)))
    return out


def make_bodies(center: Vec2, descriptor) -> list[Body]:
    """Create the bodies for a validated match descriptor."""
    sides = {Side.A: descriptor.side_a, Side.B: descriptor.side_b}
    bodies = []
    for side, pos, vel in kickoff_layout(center):
        info = sides[side]
        bodies.append(Body(pos=pos, vel=vel, side=side, color=info.color, initial=info.initial[:1]))
    return bodies
