import random
import threading
from typing import Iterable, Tuple

from esper import World

from crystal_quest.components.turn_events import (
    CascadeStep,
    GameOver,
    SwapAccepted,
    SwapRejected,
    TileSelected,
    TurnEvent,
    TurnSettled,
)
from crystal_quest.events.bus import (
    EventBus,
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_STEP,
    EVENT_GAME_OVER,
    EVENT_GRAVITY_APPLIED,
    EVENT_MATCH_FOUND,
    EVENT_RESET_REQUEST,
    EVENT_SCORE_CHANGED,
    EVENT_SESSION_RESET,
    EVENT_TILE_CLICK,
    EVENT_TILE_SELECTED,
    EVENT_TILE_SWAP_INVALID,
    EVENT_TILE_SWAP_VALID,
)
from crystal_quest.systems import move_controller
from crystal_quest.systems.move_controller import Transition
from crystal_quest.utils.session_state import get_rules, get_session_state


class SessionSystem:
    """Bridges bus input events to the pure move controller and republishes turn events.

    The stored session is replaced before any event goes out, so listeners always
    read the settled state.
    """

    def __init__(self, world: World, event_bus: EventBus, *, rng: random.Random | None = None):
        self.world = world
        self.event_bus = event_bus
        self._rng = rng or getattr(world, "random", None) or random.Random()
        # Single writer: transitions never interleave on one world.
        self._lock = threading.Lock()
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_RESET_REQUEST, self.on_reset_request)

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if not isinstance(row, int) or not isinstance(col, int):
            return
        self.select((row, col))

    def on_reset_request(self, sender, **kwargs):
        self.reset()

    def select(self, position: Tuple[int, int]) -> Transition:
        with self._lock:
            state = get_session_state(self.world)
            previous_score = state.session.score
            transition = move_controller.select(state.session, position, self._rng, get_rules(self.world))
            state.session = transition.session
        self._publish(transition.events, previous_score)
        return transition

    def reset(self) -> Transition:
        with self._lock:
            state = get_session_state(self.world)
            transition = move_controller.reset(self._rng, get_rules(self.world))
            state.session = transition.session
        self.event_bus.emit(EVENT_SESSION_RESET, session=transition.session)
        return transition

    def _publish(self, events: Iterable[TurnEvent], score: int) -> None:
        for event in events:
            if isinstance(event, TileSelected):
                self.event_bus.emit(
                    EVENT_TILE_SELECTED,
                    row=event.position.row,
                    col=event.position.col,
                    previous=event.previous,
                )
            elif isinstance(event, SwapRejected):
                self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=event.src, dst=event.dst)
            elif isinstance(event, SwapAccepted):
                self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=event.src, dst=event.dst, board=event.board)
            elif isinstance(event, CascadeStep):
                score += event.total
                self.event_bus.emit(EVENT_CASCADE_STEP, depth=event.depth, step=event)
                self.event_bus.emit(
                    EVENT_MATCH_FOUND,
                    depth=event.depth,
                    matches=event.matches,
                    positions=sorted(event.cleared),
                )
                self.event_bus.emit(
                    EVENT_GRAVITY_APPLIED,
                    depth=event.depth,
                    falls=dict(event.fall_distances),
                    spawned=list(event.spawned),
                )
                self.event_bus.emit(
                    EVENT_SCORE_CHANGED,
                    score=score,
                    points=event.points,
                    bonus=event.bonus,
                    combo=event.depth,
                )
            elif isinstance(event, TurnSettled):
                self.event_bus.emit(
                    EVENT_CASCADE_COMPLETE,
                    depth=event.depth,
                    board=event.board,
                    score=event.score,
                    moves_remaining=event.moves_remaining,
                )
            elif isinstance(event, GameOver):
                self.event_bus.emit(EVENT_GAME_OVER, score=event.score)
