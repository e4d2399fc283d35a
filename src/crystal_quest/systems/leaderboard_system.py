import logging

from esper import World

from crystal_quest.events.bus import (
    EventBus,
    EVENT_GAME_OVER,
    EVENT_LEADERBOARD_REJECTED,
    EVENT_LEADERBOARD_UPDATED,
)
from crystal_quest.leaderboard import InvalidSubmissionError, Leaderboard
from crystal_quest.utils.session_state import get_profile

logger = logging.getLogger(__name__)


class LeaderboardSystem:
    """Submits the final score of each finished run under the player's nickname."""

    def __init__(self, world: World, event_bus: EventBus, leaderboard: Leaderboard | None = None):
        self.world = world
        self.event_bus = event_bus
        self.leaderboard = leaderboard or Leaderboard()
        self.event_bus.subscribe(EVENT_GAME_OVER, self.on_game_over)

    def on_game_over(self, sender, **kwargs):
        score = kwargs.get('score')
        if score is None:
            return
        nickname = get_profile(self.world).nickname
        if not nickname:
            self.event_bus.emit(EVENT_LEADERBOARD_REJECTED, nickname=None, score=score, reason="no_nickname")
            return
        try:
            self.leaderboard.submit(nickname, score)
        except InvalidSubmissionError as exc:
            logger.warning("Leaderboard rejected %r with score %r: %s", nickname, score, exc)
            self.event_bus.emit(EVENT_LEADERBOARD_REJECTED, nickname=nickname, score=score, reason=str(exc))
            return
        self.event_bus.emit(
            EVENT_LEADERBOARD_UPDATED,
            rows=self.leaderboard.top(),
            nickname=nickname,
            score=score,
        )
