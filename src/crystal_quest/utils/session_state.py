from __future__ import annotations

from esper import World

from crystal_quest.components.crystal_types import CrystalTypes
from crystal_quest.components.player_profile import PlayerProfile
from crystal_quest.components.rules import Rules
from crystal_quest.components.session import GameSession, SessionState
from crystal_quest.leaderboard import validate_nickname


def get_session_state(world: World) -> SessionState:
    for _, state in world.get_component(SessionState):
        return state
    raise RuntimeError("SessionState not found")


def get_session(world: World) -> GameSession:
    return get_session_state(world).session


def get_rules(world: World) -> Rules:
    for _, rules in world.get_component(Rules):
        return rules
    return Rules()


def get_crystal_types(world: World) -> CrystalTypes:
    for _, registry in world.get_component(CrystalTypes):
        return registry
    raise RuntimeError("CrystalTypes definitions not found")


def get_profile(world: World) -> PlayerProfile:
    for _, profile in world.get_component(PlayerProfile):
        return profile
    profile = PlayerProfile()
    world.create_entity(profile)
    return profile


def set_nickname(world: World, raw: str | None) -> str:
    """Normalise and store the player's nickname; raises InvalidSubmissionError when too short."""
    nickname = validate_nickname(raw)
    get_profile(world).nickname = nickname
    return nickname


def clear_nickname(world: World) -> None:
    get_profile(world).nickname = None
