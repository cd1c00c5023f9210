"""Unified entrypoint for the desktop window and headless runs.

Without ``--headless`` this opens the league window. Headless mode plays
matches in accelerated time on a manual clock, so it needs no display.
"""

from __future__ import annotations

import argparse
import logging
import random
import sys


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="gap-arena", description="Gap arena league")
    parser.add_argument("--headless", action="store_true", help="simulate without opening a window")
    parser.add_argument("--home", default="ARS", help="home team short name (headless)")
    parser.add_argument("--away", default="CHE", help="away team short name (headless)")
    parser.add_argument("--week", action="store_true", help="play a whole league week (headless)")
    parser.add_argument("--seed", type=int, default=None, help="random seed for reproducible runs")
    parser.add_argument("--log-level", default="INFO", help="logging level (DEBUG, INFO, WARNING)")
    return parser.parse_args(argv)


def _run_headless(args: argparse.Namespace) -> None:
    from league import League
    from loop import run_headless
    from teams import MatchDescriptor, get_team

    if args.week:
        league = League(rng=random.Random(args.seed))
        for i, f in enumerate(league.fixtures_for_week()):
            seed = None if args.seed is None else args.seed + i
            home_goals, away_goals = run_headless(MatchDescriptor.from_teams(f.home, f.away), seed=seed)
            league.record_result(f.id, home_goals, away_goals)
            print(f.label())
        print()
        for pos, row in enumerate(league.table(), start=1):
            print(f"{pos:>2}. {row.team.name:<20} P{row.played} GD{row.goal_difference:+d} {row.points} pts")
        return

    home = get_team(args.home)
    away = get_team(args.away)
    home_goals, away_goals = run_headless(MatchDescriptor.from_teams(home, away), seed=args.seed)
    print(f"{home.name} {home_goals} - {away_goals} {away.name}")


def _run_desktop(args: argparse.Namespace) -> None:
    from game import main as game_main
    from league import League

    game_main(League(rng=random.Random(args.seed)))


def main(argv=None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        if args.headless:
            _run_headless(args)
        else:
            _run_desktop(args)
    except KeyError as exc:
        print(f"error: {exc.args[0]}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
