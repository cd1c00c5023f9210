import random
from collections import Counter

import pytest

from league import SEASON_WEEKS, League, TeamStats, generate_fixtures
from teams import TEAMS, MatchConfigError, MatchDescriptor, get_team, hex_to_rgb


@pytest.fixture
def league():
    return League(rng=random.Random(7))


def test_full_season_fixture_count(league):
    assert len(league.fixtures) == SEASON_WEEKS * len(TEAMS) // 2
    assert len({f.id for f in league.fixtures}) == len(league.fixtures)


def test_every_team_plays_once_per_week(league):
    for week in range(1, SEASON_WEEKS + 1):
        counts = Counter()
        for f in league.fixtures_for_week(week):
            assert f.home is not f.away
            counts[f.home.id] += 1
            counts[f.away.id] += 1
        assert set(counts) == {t.id for t in TEAMS}
        assert set(counts.values()) == {1}


def test_odd_team_sits_out():
    fixtures = generate_fixtures(TEAMS[:5], weeks=3, rng=random.Random(1))
    assert len(fixtures) == 6
    for week in (1, 2, 3):
        assert len([f for f in fixtures if f.week == week]) == 2


def test_fixtures_are_seeded():
    a = [(f.home.id, f.away.id) for f in generate_fixtures(rng=random.Random(3))]
    b = [(f.home.id, f.away.id) for f in generate_fixtures(rng=random.Random(3))]
    assert a == b


def test_record_result_updates_both_teams(league):
    f = league.fixtures_for_week()[0]
    league.record_result(f.id, 3, 1)
    home = league.stats[f.home.id]
    away = league.stats[f.away.id]
    assert (home.played, home.wins, home.points, home.goal_difference) == (1, 1, 3, 2)
    assert (away.played, away.losses, away.points, away.goal_difference) == (1, 1, 0, -2)
    assert f.played
    assert f.label() == f"{f.home.short_name} 3-1 {f.away.short_name}"


def test_draw_gives_a_point_each(league):
    f = league.fixtures_for_week()[0]
    league.record_result(f.id, 2, 2)
    assert league.stats[f.home.id].points == 1
    assert league.stats[f.away.id].points == 1


def test_result_only_recorded_once(league):
    f = league.fixtures_for_week()[0]
    league.record_result(f.id, 1, 0)
    with pytest.raises(ValueError):
        league.record_result(f.id, 0, 1)
    assert league.stats[f.home.id].played == 1


def test_negative_goals_rejected(league):
    f = league.fixtures_for_week()[0]
    with pytest.raises(ValueError):
        league.record_result(f.id, -1, 0)
    assert not f.played


def test_unknown_fixture(league):
    with pytest.raises(KeyError):
        league.fixture("match-0")


def test_next_unplayed_walks_the_week(league):
    week = league.fixtures_for_week()
    assert league.next_unplayed() is week[0]
    for f in week:
        league.record_result(f.id, 0, 0)
    assert league.next_unplayed() is None
    assert league.advance_week() == 2
    assert league.next_unplayed().week == 2


def play_week(league, home_goals=1, away_goals=0):
    for f in league.fixtures_for_week():
        if not f.played:
            league.record_result(f.id, home_goals, away_goals)


def test_week_does_not_advance_with_unplayed_fixtures(league):
    first = league.fixtures_for_week()[0]
    league.record_result(first.id, 1, 1)
    assert not league.week_complete()
    assert not league.can_advance_week()
    assert league.advance_week() == 1

    play_week(league)
    assert league.can_advance_week()
    assert league.advance_week() == 2


def test_advance_week_stops_at_season_end():
    league = League(weeks=2, rng=random.Random(1))
    play_week(league)
    assert league.advance_week() == 2
    play_week(league)
    assert league.week_complete()
    assert not league.can_advance_week()
    assert league.advance_week() == 2


def test_reset_starts_the_season_over(league):
    play_week(league, 2, 0)
    league.advance_week()
    old = list(league.fixtures)

    league.reset()

    assert league.current_week == 1
    assert len(league.fixtures) == SEASON_WEEKS * len(TEAMS) // 2
    assert not any(f.played for f in league.fixtures)
    assert not {id(f) for f in old} & {id(f) for f in league.fixtures}
    assert all(s.played == 0 and s.points == 0 for s in league.stats.values())
    first = league.fixtures_for_week()[0]
    assert league.fixture(first.id) is first


def test_table_orders_by_points_then_goal_difference():
    stats = [TeamStats(t) for t in TEAMS[:3]]
    stats[0].record(1, 0)
    stats[1].record(4, 0)
    stats[2].record(0, 0)
    league = League(teams=TEAMS[:3], weeks=1, rng=random.Random(1))
    league.stats = {s.team.id: s for s in stats}
    assert [s.team.id for s in league.table()] == [TEAMS[1].id, TEAMS[0].id, TEAMS[2].id]


def test_get_team_is_case_insensitive():
    assert get_team("ars").name == "Arsenal"
    assert get_team("CHE").initial == "C"
    with pytest.raises(KeyError):
        get_team("XYZ")


def test_descriptor_from_teams():
    d = MatchDescriptor.from_teams(get_team("ARS"), get_team("CHE")).validate()
    assert d.side_a.color == (220, 20, 60)
    assert d.side_a.initial == "A"
    assert d.side_b.color == (3, 70, 148)


def test_bad_hex_color():
    assert hex_to_rgb("#ffffff") == (255, 255, 255)
    with pytest.raises(MatchConfigError):
        hex_to_rgb("#12")
    with pytest.raises(MatchConfigError):
        hex_to_rgb("#zzzzzz")
