import random

from esper import World

from crystal_quest.components.crystal_types import CrystalTypes
from crystal_quest.components.player_profile import PlayerProfile
from crystal_quest.components.rules import Rules
from crystal_quest.components.session import SessionState
from crystal_quest.constants import CRYSTAL_GLYPHS
from crystal_quest.leaderboard import validate_nickname
from crystal_quest.systems.move_controller import start_session


def create_world(
    *,
    rng: random.Random | None = None,
    rules: Rules | None = None,
    nickname: str | None = None,
) -> World:
    world = World()
    setattr(world, "random", rng or random.Random())
    rules = rules or Rules()

    # Session entity: rules and the current session value live together.
    world.create_entity(
        rules,
        SessionState(session=start_session(world.random, rules)),
    )

    # Single registry entity with canonical crystal glyphs
    world.create_entity(CrystalTypes(glyphs=dict(CRYSTAL_GLYPHS)))

    world.create_entity(
        PlayerProfile(nickname=validate_nickname(nickname) if nickname is not None else None)
    )
    return world
