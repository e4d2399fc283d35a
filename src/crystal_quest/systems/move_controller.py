"""Pure session transitions: selection, swap validation, cascade loop and lifecycle.

Every public function takes the current GameSession and returns a Transition holding
the next session plus the ordered events a presentation layer can replay.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from crystal_quest.components.board import Board, Position, in_bounds, swapped
from crystal_quest.components.rules import Rules
from crystal_quest.components.session import GameSession, Phase
from crystal_quest.components.turn_events import (
    CascadeStep,
    GameOver,
    SwapAccepted,
    SwapRejected,
    TileSelected,
    TurnEvent,
    TurnSettled,
)
from crystal_quest.systems.board_ops import (
    RandomSource,
    check_settled_board,
    generate_playable_board,
    resolve,
)
from crystal_quest.systems.match_detection import find_matches
from crystal_quest.systems.scoring import score_cascade

logger = logging.getLogger(__name__)

DEFAULT_RULES = Rules()


def _is_cell(board: Board, position) -> bool:
    try:
        row, col = position
    except (TypeError, ValueError):
        return False
    if type(row) is not int or type(col) is not int:
        return False
    return in_bounds(board, (row, col))


@dataclass(frozen=True, slots=True)
class Transition:
    session: GameSession
    events: Tuple[TurnEvent, ...] = ()
    # None when the input was ignored.
    outcome: Optional[Phase] = None

    @property
    def ignored(self) -> bool:
        return self.outcome is None


def start_session(
    rng: RandomSource | None = None,
    rules: Rules | None = None,
    *,
    board: Board | None = None,
    moves_remaining: int | None = None,
) -> GameSession:
    """Create a fresh session; board defaults to a generated board without matches."""
    rules = rules or DEFAULT_RULES
    if board is None:
        board = generate_playable_board(rng or random.Random(), rules.kinds, rules.size)
    moves = rules.initial_moves if moves_remaining is None else moves_remaining
    return GameSession(board=board, moves_remaining=moves, game_over=moves <= 0)


def reset(rng: RandomSource | None = None, rules: Rules | None = None) -> Transition:
    return Transition(start_session(rng, rules), (), Phase.IDLE)


def select(
    session: GameSession,
    position: Tuple[int, int],
    rng: RandomSource | None = None,
    rules: Rules | None = None,
) -> Transition:
    if not session.accepts_input:
        return Transition(session)
    if not _is_cell(session.board, position):
        logger.debug("Ignoring invalid selection %r", position)
        return Transition(session)
    pos = Position(*position)
    first = session.selected
    if first is None:
        return Transition(session.with_selection(pos), (TileSelected(pos),), Phase.SELECTED)
    if not first.is_adjacent(pos):
        # A second click elsewhere simply moves the selection.
        return Transition(session.with_selection(pos), (TileSelected(pos, previous=first),), Phase.SELECTED)
    return attempt_swap(session.with_selection(None), first, pos, rng, rules)


def attempt_swap(
    session: GameSession,
    src: Position,
    dst: Position,
    rng: RandomSource | None = None,
    rules: Rules | None = None,
) -> Transition:
    """Validate a swap of two adjacent cells and, if it matches, play out the turn."""
    if not session.accepts_input:
        return Transition(session)
    if not (_is_cell(session.board, src) and _is_cell(session.board, dst)):
        return Transition(session)
    src, dst = Position(*src), Position(*dst)
    if not src.is_adjacent(dst):
        return Transition(session)
    rules = rules or DEFAULT_RULES
    session = session.with_selection(None)

    candidate = swapped(session.board, src, dst)
    matches = find_matches(candidate)
    if not matches:
        logger.debug("Rejected swap %s <-> %s", src, dst)
        return Transition(replace(session, combo=0), (SwapRejected(src, dst),), Phase.REJECTED_BOUNCE)

    events: List[TurnEvent] = [SwapAccepted(src, dst, candidate)]
    board, score, combo = candidate, session.score, 0
    rng = rng or random.Random()
    while matches:
        combo += 1
        step = resolve(board, matches, rng, rules.kinds)
        points, bonus = score_cascade(matches, combo, rules)
        score += points + bonus
        events.append(
            CascadeStep(
                depth=combo,
                matches=matches,
                cleared=step.cleared,
                fall_distances=step.fall_distances,
                spawned=step.spawned,
                board=step.board,
                points=points,
                bonus=bonus,
            )
        )
        board = step.board
        matches = find_matches(board)
    check_settled_board(board)

    moves_remaining = session.moves_remaining - 1
    events.append(TurnSettled(depth=combo, score=score, moves_remaining=moves_remaining, board=board))
    game_over = moves_remaining <= 0
    if game_over:
        events.append(GameOver(score=score))
        logger.debug("Game over with score %d", score)
    logger.debug("Accepted swap %s <-> %s: %d cascade(s), score %d", src, dst, combo, score)
    next_session = replace(
        session,
        board=board,
        score=score,
        combo=combo,
        moves_remaining=moves_remaining,
        game_over=game_over,
    )
    return Transition(next_session, tuple(events), Phase.ACCEPTED_CASCADE)
