"""Per-side goal tracking for a single match."""

from body import Side


class Scoreboard:
    """Goal counters for both sides plus the log of accepted goals."""

    def __init__(self):
        self.goals: dict[Side, int] = {Side.A: 0, Side.B: 0}
        self.events: list = []

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def on_goal(self, event) -> int:
        """Record a goal event.  Returns the scoring side's new total."""
        self.goals[event.side] += 1
        self.events.append(event)
        return self.goals[event.side]

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def side_a(self) -> int:
        return self.goals[Side.A]

    @property
    def side_b(self) -> int:
        return self.goals[Side.B]

    def as_tuple(self) -> tuple[int, int]:
        return (self.side_a, self.side_b)

    def leader(self) -> Side | None:
        if self.side_a == self.side_b:
            return None
        return Side.A if self.side_a > self.side_b else Side.B

    def format(self, initial_a: str = "A", initial_b: str = "B") -> str:
        return f"{initial_a} {self.side_a} - {self.side_b} {initial_b}"
