from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems that nobody else holds on to.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_TILE_CLICK = "tile_click"            # payload: row, col
EVENT_RESET_REQUEST = "reset_request"      # payload: None


# ============================================================================
# TILE & BOARD MECHANICS
# ============================================================================
EVENT_TILE_SELECTED = "tile_selected"              # payload: row, col, previous=(r,c)|None
EVENT_TILE_SWAP_VALID = "tile_swap_valid"          # payload: src=(r,c), dst=(r,c), board
EVENT_TILE_SWAP_INVALID = "tile_swap_invalid"      # payload: src=(r,c), dst=(r,c)
EVENT_MATCH_FOUND = "match_found"                  # payload: depth=int, matches=tuple[Match], positions=[(r,c),...]
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: depth=int, falls=dict[(r,c), int], spawned=[(r,c),...]
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, step=CascadeStep
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int, board


# ============================================================================
# SCORE & LIFECYCLE
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, points=int, bonus=int, combo=int
EVENT_GAME_OVER = "game_over"                      # payload: score=int
EVENT_SESSION_RESET = "session_reset"              # payload: session=GameSession


# ============================================================================
# LEADERBOARD
# ============================================================================
EVENT_LEADERBOARD_UPDATED = "leaderboard_updated"  # payload: rows=list[LeaderboardRow], nickname=str, score=int
EVENT_LEADERBOARD_REJECTED = "leaderboard_rejected"  # payload: nickname=str|None, score=int, reason=str
