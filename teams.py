"""Team table and the match descriptor handed to the arena engine."""

from __future__ import annotations

from dataclasses import dataclass


class MatchConfigError(ValueError):
    """Raised when a match descriptor cannot be used to build a match."""


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    """'#DC143C' -> (220, 20, 60)."""
    s = str(value).strip().lstrip("#")
    if len(s) != 6:
        raise MatchConfigError(f"Invalid hex color: {value!r}")
    try:
        return (int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16))
    except ValueError as exc:
        raise MatchConfigError(f"Invalid hex color: {value!r}") from exc


@dataclass(frozen=True)
class Team:
    id: int
    name: str
    short_name: str
    logo: str
    primary_color: str
    secondary_color: str

    @property
    def initial(self) -> str:
        return self.short_name[:1]


TEAMS: tuple[Team, ...] = (
    Team(1, "Arsenal", "ARS", "🔴", "#DC143C", "#FFFFFF"),
    Team(2, "Aston Villa", "AVL", "🟣", "#95BFE5", "#670E36"),
    Team(3, "Bournemouth", "BOU", "🍒", "#DA020E", "#000000"),
    Team(4, "Brentford", "BRE", "🐝", "#E30613", "#FFD700"),
    Team(5, "Brighton", "BHA", "🔵", "#0057B8", "#FFD700"),
    Team(6, "Chelsea", "CHE", "💙", "#034694", "#FFFFFF"),
    Team(7, "Crystal Palace", "CRY", "🦅", "#1B458F", "#A7A5A6"),
    Team(8, "Everton", "EVE", "🔷", "#003399", "#FFFFFF"),
    Team(9, "Fulham", "FUL", "⚪", "#FFFFFF", "#000000"),
    Team(10, "Ipswich Town", "IPS", "🟦", "#4C9FE0", "#FFFFFF"),
    Team(11, "Leicester City", "LEI", "🦊", "#003090", "#FFD700"),
    Team(12, "Liverpool", "LIV", "❤️", "#C8102E", "#FFD700"),
    Team(13, "Manchester City", "MCI", "💙", "#6CABDD", "#1C2C5B"),
    Team(14, "Manchester United", "MUN", "🔴", "#DA020E", "#FFE500"),
    Team(15, "Newcastle United", "NEW", "⚫", "#241F20", "#FFFFFF"),
    Team(16, "Nottingham Forest", "NFO", "🌳", "#DD0000", "#FFFFFF"),
    Team(17, "Southampton", "SOU", "🔴", "#D71920", "#130C0E"),
    Team(18, "Tottenham", "TOT", "⚪", "#132257", "#FFFFFF"),
    Team(19, "West Ham United", "WHU", "⚒️", "#7A263A", "#F3D459"),
    Team(20, "Wolverhampton", "WOL", "🐺", "#FDB913", "#231F20"),
)

_BY_SHORT_NAME = {t.short_name: t for t in TEAMS}


def get_team(short_name: str) -> Team:
    """Look a team up by its short name (case-insensitive)."""
    key = str(short_name or "").upper()
    if key not in _BY_SHORT_NAME:
        raise KeyError(f"Unknown team '{short_name}'")
    return _BY_SHORT_NAME[key]


@dataclass(frozen=True)
class SideInfo:
    """What the engine needs to know about one side: how to draw it."""
    color: tuple[int, int, int]
    initial: str

    def validate(self, label: str) -> None:
        if not isinstance(self.initial, str) or not self.initial.strip():
            raise MatchConfigError(f"{label}: initial must be a non-empty string")
        c = self.color
        if not isinstance(c, tuple) or len(c) != 3:
            raise MatchConfigError(f"{label}: color must be an (r, g, b) tuple, got {c!r}")
        for component in c:
            if not isinstance(component, int) or not 0 <= component <= 255:
                raise MatchConfigError(f"{label}: color component out of range in {c!r}")


@dataclass(frozen=True)
class MatchDescriptor:
    side_a: SideInfo | None
    side_b: SideInfo | None

    @classmethod
    def from_teams(cls, home: Team, away: Team) -> "MatchDescriptor":
        return cls(
            SideInfo(hex_to_rgb(home.primary_color), home.initial),
            SideInfo(hex_to_rgb(away.primary_color), away.initial),
        )

    def validate(self) -> "MatchDescriptor":
        """Fail fast on missing or malformed side data."""
        for label, side in (("side_a", self.side_a), ("side_b", self.side_b)):
            if side is None:
                raise MatchConfigError(f"Match descriptor is missing {label}")
            if not isinstance(side, SideInfo):
                raise MatchConfigError(f"{label} must be a SideInfo, got {type(side).__name__}")
            side.validate(label)
        return self
