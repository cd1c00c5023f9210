"""League bookkeeping: fixtures, results and the standings table."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from teams import TEAMS, Team

LOG = logging.getLogger(__name__)

SEASON_WEEKS = 38
POINTS_WIN = 3
POINTS_DRAW = 1


@dataclass
class Fixture:
    id: str
    week: int
    home: Team
    away: Team
    home_goals: int | None = None
    away_goals: int | None = None
    played: bool = False

    def label(self) -> str:
        if self.played:
            return f"{self.home.short_name} {self.home_goals}-{self.away_goals} {self.away.short_name}"
        return f"{self.home.short_name} vs {self.away.short_name}"


@dataclass
class TeamStats:
    team: Team
    played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    @property
    def points(self) -> int:
        return self.wins * POINTS_WIN + self.draws * POINTS_DRAW

    def record(self, scored: int, conceded: int) -> None:
        self.played += 1
        self.goals_for += scored
        self.goals_against += conceded
        if scored > conceded:
            self.wins += 1
        elif scored == conceded:
            self.draws += 1
        else:
            self.losses += 1


def generate_fixtures(teams=TEAMS, weeks: int = SEASON_WEEKS, rng=None) -> list[Fixture]:
    """Pair shuffled teams each week; an odd team out sits the week out."""
    rng = rng or random.Random()
    fixtures: list[Fixture] = []
    match_id = 1
    for week in range(1, weeks + 1):
        shuffled = list(teams)
        rng.shuffle(shuffled)
        for i in range(0, len(shuffled) - 1, 2):
            fixtures.append(Fixture(id=f"match-{match_id}", week=week, home=shuffled[i], away=shuffled[i + 1]))
            match_id += 1
    return fixtures


class League:
    """Season state: current week, fixture list and per-team stats."""

    def __init__(self, teams=TEAMS, weeks: int = SEASON_WEEKS, rng=None):
        self.teams = tuple(teams)
        self.weeks = weeks
        self._rng = rng or random.Random()
        self.reset()

    def reset(self) -> None:
        """Start the season over: week one, fresh fixtures, empty table."""
        self.current_week = 1
        self.fixtures = generate_fixtures(self.teams, self.weeks, self._rng)
        self.stats: dict[int, TeamStats] = {t.id: TeamStats(t) for t in self.teams}
        self._by_id = {f.id: f for f in self.fixtures}
        LOG.info("League reset: %d fixtures over %d weeks", len(self.fixtures), self.weeks)

    def fixture(self, fixture_id: str) -> Fixture:
        if fixture_id not in self._by_id:
            raise KeyError(f"Unknown fixture '{fixture_id}'")
        return self._by_id[fixture_id]

    def fixtures_for_week(self, week: int | None = None) -> list[Fixture]:
        w = self.current_week if week is None else week
        return [f for f in self.fixtures if f.week == w]

    def next_unplayed(self) -> Fixture | None:
        for f in self.fixtures_for_week():
            if not f.played:
                return f
        return None

    def record_result(self, fixture_id: str, home_goals: int, away_goals: int) -> Fixture:
        f = self.fixture(fixture_id)
        if f.played:
            raise ValueError(f"Fixture '{fixture_id}' already has a result")
        if home_goals < 0 or away_goals < 0:
            raise ValueError("Goals cannot be negative")
        f.home_goals = int(home_goals)
        f.away_goals = int(away_goals)
        f.played = True
        self.stats[f.home.id].record(f.home_goals, f.away_goals)
        self.stats[f.away.id].record(f.away_goals, f.home_goals)
        LOG.info("Week %d result: %s", f.week, f.label())
        return f

    def week_complete(self) -> bool:
        return all(f.played for f in self.fixtures_for_week())

    def can_advance_week(self) -> bool:
        return self.week_complete() and self.current_week < self.weeks

    def advance_week(self) -> int:
        """Move to the next week once every fixture of this one is played."""
        if self.can_advance_week():
            self.current_week += 1
        else:
            LOG.debug("Week %d not advanced", self.current_week)
        return self.current_week

    def table(self) -> list[TeamStats]:
        return sorted(
            self.stats.values(),
            key=lambda s: (s.points, s.goal_difference, s.goals_for),
            reverse=True,
        )
