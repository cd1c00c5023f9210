# Pyglet gap-arena league
# Controls: SPACE opens/starts the next fixture, N next week, R twice resets, ESC back/quit.
# Install: py -m pip install pyglet

import logging

import pyglet

pyglet.options["shadow_window"] = False

import config
from config import SCREEN_W, SCREEN_H, HUD_TEXT
from fsm import State, StateMachine
from league import League
from loop import LoopDriver
from match import MatchController
from teams import MatchDescriptor
from visuals import PygletSurface

LOG = logging.getLogger(__name__)


class FixturesState(State):
    def enter(self):
        self.confirm_reset = False

    def on_key_press(self, symbol, modifiers):
        game = self.owner
        k = pyglet.window.key
        if symbol == k.R:
            # Second press confirms.
            if self.confirm_reset:
                game.league.reset()
            self.confirm_reset = not self.confirm_reset
            return
        self.confirm_reset = False
        if symbol == k.SPACE:
            fixture = game.league.next_unplayed()
            if fixture is not None:
                game.selected = fixture
                game.fsm.set_state("MatchViewState")
        elif symbol == k.N:
            game.league.advance_week()
        elif symbol == k.ESCAPE:
            game._quit_game()

    def draw(self, surface):
        league = self.owner.league
        w = surface.width
        surface.clear()
        surface.text(f"Week {league.current_week}", w * 0.5, 28, HUD_TEXT, 18)
        for i, f in enumerate(league.fixtures_for_week()):
            surface.text(f.label(), w * 0.5, 66 + i * 22, HUD_TEXT, 12)
        leader = league.table()[0]
        surface.text(
            f"Top: {leader.team.name} {leader.points} pts ({leader.goal_difference:+d})",
            w * 0.5,
            312,
            HUD_TEXT,
            11,
        )
        if self.confirm_reset:
            surface.text("Press R again to reset the league", w * 0.5, 342, HUD_TEXT, 11)
        elif league.can_advance_week():
            surface.text("Week complete: press N", w * 0.5, 342, HUD_TEXT, 11)
        surface.text("SPACE play next  N next week  R reset  ESC quit", w * 0.5, 372, HUD_TEXT, 10)


class MatchViewState(State):
    def enter(self):
        game = self.owner
        f = game.selected
        game.match = MatchController(
            MatchDescriptor.from_teams(f.home, f.away),
            on_result=game._on_match_result,
        )
        game.driver = LoopDriver(game.match, game.surface)
        game.driver.draw()

    def exit(self):
        game = self.owner
        if game.driver is not None:
            game.driver.cancel()
        game.driver = None
        game.match = None

    def on_key_press(self, symbol, modifiers):
        game = self.owner
        k = pyglet.window.key
        if symbol == k.ESCAPE:
            # Abandoned matches record nothing.
            game.fsm.set_state("FixturesState")
        elif symbol == k.SPACE and game.match.state_name == "NotStartedState":
            game.driver.start()


# ============================
# Main Game Class
# ============================
class Game(pyglet.window.Window):
    """League window hosting one match view at a time."""

    def __init__(self, league: League | None = None):
        super().__init__(width=SCREEN_W, height=SCREEN_H, caption="Gap Arena League", vsync=True)
        self.league = league or League()
        self.surface = PygletSurface(self.width, self.height)
        self.selected = None
        self.match = None
        self.driver = None

        self.fsm = StateMachine(FixturesState(self))
        self.fsm.add_state(MatchViewState(self))

    def _on_match_result(self, home_goals: int, away_goals: int):
        f = self.selected
        self.league.record_result(f.id, home_goals, away_goals)
        self.selected = None
        self.fsm.set_state("FixturesState")

    def _quit_game(self):
        """Quit the game."""
        self._schedule_app_close()

    def _schedule_app_close(self):
        def _close(_dt):
            self.close()
            pyglet.app.exit()
        pyglet.clock.schedule_once(_close, 0)

    def on_key_press(self, symbol, modifiers):
        """Handle key presses."""
        self.fsm.on_key_press(symbol, modifiers)
        return pyglet.event.EVENT_HANDLED

    def on_close(self):
        """Handle window close event."""
        if self.driver is not None:
            self.driver.cancel()
        self._schedule_app_close()
        return True

    def on_draw(self):
        """Render the current view."""
        self.clear()
        self.fsm.draw(self.surface)
        self.surface.present()


def main(league: League | None = None):
    """Start the game."""
    try:
        _ = Game(league)
        pyglet.app.run(1.0 / config.FPS)
    except KeyboardInterrupt:
        pass
    except Exception as e:
        print("Fatal error:", e)
        raise


if __name__ == "__main__":
    main()
