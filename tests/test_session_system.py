import random
import threading

from crystal_quest.components.board import Position
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
from crystal_quest.systems.match_detection import find_matches
from crystal_quest.systems.move_controller import start_session
from crystal_quest.systems.session_system import SessionSystem
from crystal_quest.utils.session_state import get_crystal_types, get_session, get_session_state
from crystal_quest.world import create_world
from tests.helpers import BASE_ROWS, ScriptedSource, board_from_letters, with_rows

SWAP_ROWS = with_rows({6: "ABADEFAB", 7: "AAFAEBCD"})


def _setup(rows=SWAP_ROWS, moves=15, rng=None):
    bus = EventBus()
    world = create_world(rng=random.Random(1))
    get_session_state(world).session = start_session(board=board_from_letters(rows), moves_remaining=moves)
    system = SessionSystem(world, bus, rng=rng)
    return bus, world, system


def _record(bus, *names):
    log = []
    for name in names:
        bus.subscribe(name, lambda sender, _name=name, **payload: log.append((_name, payload)))
    return log


def test_world_starts_with_playable_session():
    world = create_world(rng=random.Random(9))
    session = get_session(world)
    assert len(session.board) == 8
    assert find_matches(session.board) == ()
    assert session.moves_remaining == 15
    assert get_crystal_types(world).glyph_for('ruby') == '🟥'
    assert get_crystal_types(world).glyph_for(None) == '·'


def test_click_emits_selection():
    bus, world, _ = _setup()
    log = _record(bus, EVENT_TILE_SELECTED)
    bus.emit(EVENT_TILE_CLICK, row=2, col=3)
    assert log == [(EVENT_TILE_SELECTED, {'row': 2, 'col': 3, 'previous': None})]
    assert get_session(world).selected == Position(2, 3)


def test_malformed_clicks_are_ignored():
    bus, world, _ = _setup()
    before = get_session(world)
    log = _record(bus, EVENT_TILE_SELECTED)
    bus.emit(EVENT_TILE_CLICK, row=None, col=1)
    bus.emit(EVENT_TILE_CLICK, row='a', col=1)
    bus.emit(EVENT_TILE_CLICK, row=9, col=1)
    assert log == []
    assert get_session(world) is before


def test_invalid_swap_event():
    bus, world, _ = _setup(rows=BASE_ROWS)
    log = _record(bus, EVENT_TILE_SWAP_INVALID, EVENT_TILE_SWAP_VALID)
    bus.emit(EVENT_TILE_CLICK, row=0, col=0)
    bus.emit(EVENT_TILE_CLICK, row=1, col=0)
    assert log == [(EVENT_TILE_SWAP_INVALID, {'src': Position(0, 0), 'dst': Position(1, 0)})]
    assert get_session(world).moves_remaining == 15


def test_valid_swap_publishes_cascade_in_order():
    bus, world, _ = _setup(rng=ScriptedSource("CDEF"))
    log = _record(
        bus,
        EVENT_TILE_SWAP_VALID,
        EVENT_CASCADE_STEP,
        EVENT_MATCH_FOUND,
        EVENT_GRAVITY_APPLIED,
        EVENT_SCORE_CHANGED,
        EVENT_CASCADE_COMPLETE,
    )
    seen_scores = []
    bus.subscribe(EVENT_TILE_SWAP_VALID, lambda s, **k: seen_scores.append(get_session(world).score))

    bus.emit(EVENT_TILE_CLICK, row=6, col=2)
    bus.emit(EVENT_TILE_CLICK, row=7, col=2)

    names = [name for name, _ in log]
    assert names == [
        EVENT_TILE_SWAP_VALID,
        EVENT_CASCADE_STEP,
        EVENT_MATCH_FOUND,
        EVENT_GRAVITY_APPLIED,
        EVENT_SCORE_CHANGED,
        EVENT_CASCADE_COMPLETE,
    ]
    payloads = dict(log)
    assert payloads[EVENT_MATCH_FOUND]['positions'] == [Position(7, c) for c in range(4)]
    assert payloads[EVENT_GRAVITY_APPLIED]['falls'][Position(0, 0)] == 1
    assert payloads[EVENT_SCORE_CHANGED] == {'score': 40, 'points': 40, 'bonus': 0, 'combo': 1}
    assert payloads[EVENT_CASCADE_COMPLETE]['moves_remaining'] == 14
    # The stored session is already settled when listeners run.
    assert seen_scores == [40]


def test_game_over_event_on_last_move():
    bus, world, _ = _setup(moves=1, rng=ScriptedSource("CDEF"))
    log = _record(bus, EVENT_GAME_OVER)
    bus.emit(EVENT_TILE_CLICK, row=6, col=2)
    bus.emit(EVENT_TILE_CLICK, row=7, col=2)
    assert log == [(EVENT_GAME_OVER, {'score': 40})]
    assert get_session(world).game_over
    selected = _record(bus, EVENT_TILE_SELECTED)
    bus.emit(EVENT_TILE_CLICK, row=0, col=0)
    assert selected == []


def test_reset_request_replaces_session():
    bus, world, _ = _setup(moves=1, rng=random.Random(4))
    log = _record(bus, EVENT_SESSION_RESET)
    bus.emit(EVENT_RESET_REQUEST)
    session = get_session(world)
    assert log == [(EVENT_SESSION_RESET, {'session': session})]
    assert session.moves_remaining == 15
    assert session.score == 0
    assert find_matches(session.board) == ()


def test_concurrent_clicks_keep_session_consistent():
    bus, world, _ = _setup(moves=15, rng=random.Random(5))
    accepted, step_totals, errors = [], [], []
    observed = {}
    bus.subscribe(EVENT_TILE_SWAP_VALID, lambda s, **k: accepted.append(k['src']))
    bus.subscribe(EVENT_CASCADE_STEP, lambda s, **k: step_totals.append(k['step'].total))

    def player(seed):
        rng = random.Random(seed)
        scores = observed[seed] = []
        try:
            for _ in range(40):
                row, col = rng.randrange(7), rng.randrange(7)
                dst = (row + 1, col) if rng.random() < 0.5 else (row, col + 1)
                bus.emit(EVENT_TILE_CLICK, row=row, col=col)
                bus.emit(EVENT_TILE_CLICK, row=dst[0], col=dst[1])
                scores.append(get_session(world).score)
            bus.emit(EVENT_TILE_CLICK, row=6, col=2)
            bus.emit(EVENT_TILE_CLICK, row=7, col=2)
        except Exception as exc:
            errors.append(exc)

    threads = [threading.Thread(target=player, args=(seed,)) for seed in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    session = get_session(world)
    assert errors == []
    for scores in observed.values():
        assert scores == sorted(scores)
    assert session.moves_remaining == 15 - len(accepted)
    assert session.score == sum(step_totals)
    assert session.game_over == (session.moves_remaining == 0)
    assert find_matches(session.board) == ()
