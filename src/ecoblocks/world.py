import random

from esper import World

from ecoblocks.components.game_state import GameMode, GameState


def create_world(
    initial_mode: GameMode = GameMode.NOT_STARTED,
    *,
    rng: random.Random | None = None,
) -> World:
    world = World()
    setattr(world, "random", rng or random.Random())

    # Register the global game state resource; sessions attach their own entity later.
    world.create_entity(GameState(mode=initial_mode))
    return world
