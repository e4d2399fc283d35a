"""Entry point for the Crystal Quest terminal prototype.

Sets up the ECS world, event bus and systems, then reads `row col` clicks from stdin.
"""
import sys

from crystal_quest.events.bus import (
    EventBus,
    EVENT_CASCADE_COMPLETE,
    EVENT_GAME_OVER,
    EVENT_LEADERBOARD_UPDATED,
    EVENT_RESET_REQUEST,
    EVENT_SCORE_CHANGED,
    EVENT_TILE_CLICK,
    EVENT_TILE_SWAP_INVALID,
)
from crystal_quest.systems.leaderboard_system import LeaderboardSystem
from crystal_quest.systems.session_system import SessionSystem
from crystal_quest.utils.session_state import get_crystal_types, get_session, set_nickname
from crystal_quest.utils.share import share_text
from crystal_quest.world import create_world
from crystal_quest.leaderboard import InvalidSubmissionError

HELP = (
    "HOW TO PLAY:\n"
    "  Enter two adjacent cells as 'row col' to swap them.\n"
    "  Match 3+ of the same crystal; cascades build combo bonuses.\n"
    "  'r' resets, 'q' quits."
)


class TerminalGame:
    def __init__(self, out=sys.stdout):
        self.out = out
        self.event_bus = EventBus()
        self.world = create_world()
        self.session_system = SessionSystem(self.world, self.event_bus)
        self.leaderboard_system = LeaderboardSystem(self.world, self.event_bus)

        self.event_bus.subscribe(EVENT_TILE_SWAP_INVALID, lambda s, **k: self._say("No match, swap bounced."))
        self.event_bus.subscribe(EVENT_SCORE_CHANGED, self._on_score_changed)
        self.event_bus.subscribe(EVENT_CASCADE_COMPLETE, lambda s, **k: self.draw())
        self.event_bus.subscribe(EVENT_GAME_OVER, lambda s, **k: self._say(f"GAME OVER\n{share_text(k['score'])}"))
        self.event_bus.subscribe(EVENT_LEADERBOARD_UPDATED, self._on_leaderboard)

    def _say(self, text: str) -> None:
        print(text, file=self.out)

    def _on_score_changed(self, sender, **kwargs):
        if kwargs.get('combo', 0) > 1:
            self._say(f"{kwargs['combo']}x COMBO!")

    def _on_leaderboard(self, sender, **kwargs):
        self._say("LEADERBOARD")
        for rank, row in enumerate(kwargs.get('rows', []), start=1):
            self._say(f"{rank:>2}. {row.nickname:<20} {row.score}")

    def draw(self) -> None:
        session = get_session(self.world)
        registry = get_crystal_types(self.world)
        size = len(session.board)
        self._say("   " + " ".join(f"{c:>2}" for c in range(size)))
        for r, row in enumerate(session.board):
            cells = []
            for c, kind in enumerate(row):
                glyph = registry.glyph_for(kind)
                cells.append(f"[{glyph}" if session.selected == (r, c) else f" {glyph}")
            self._say(f"{r:>2} " + "".join(cells))
        self._say(f"Score {session.score}  Moves {session.moves_remaining}")

    def handle(self, line: str) -> bool:
        command = line.strip().lower()
        if command == 'q':
            return False
        if command == 'r':
            self.event_bus.emit(EVENT_RESET_REQUEST)
            self.draw()
            return True
        if command in ('?', 'h', 'help'):
            self._say(HELP)
            return True
        parts = command.replace(',', ' ').split()
        if len(parts) != 2 or not all(p.isdigit() for p in parts):
            self._say("Enter 'row col', 'r', 'q' or '?'.")
            return True
        self.event_bus.emit(EVENT_TILE_CLICK, row=int(parts[0]), col=int(parts[1]))
        return True


def main():
    game = TerminalGame()
    while True:
        try:
            set_nickname(game.world, input("Enter nickname: "))
            break
        except InvalidSubmissionError as exc:
            print(exc)
        except EOFError:
            return
    game.draw()
    for line in sys.stdin:
        if not game.handle(line):
            break

if __name__ == "__main__":
    main()
