"""Map generation and the initial population of the colony."""

from __future__ import annotations

from typing import Optional

from .components import (
    MAP_LENGTH,
    MAP_WIDTH,
    TILE_SIZE,
    ActorType,
    Attackable,
    Biome,
    Brain,
    Choppable,
    Entity,
    Foragable,
    GiveMeAName,
    MapTile,
    MonsterGenerator,
    NeedsEntertainment,
    NeedsFood,
    NeedsSleep,
    Plant,
    PlantType,
    Position,
    SizeXYZ,
    Status,
    TileType,
)
from .world import World

_UNIT_TYPES = (
    ActorType.MAN2,
    ActorType.DWARF,
    ActorType.MAN,
    ActorType.MAN,
    ActorType.MAN,
)

_CHOPPABLE_AT_START = (PlantType.OAK_TREE, PlantType.PINE_TREE)


def _is_border(x: int, y: int) -> bool:
    return x in (0, MAP_WIDTH - 1) or y in (0, MAP_LENGTH - 1)


def spawn_tile(world: World, position: Position, tile_type: TileType) -> Entity:
    """Spawn one map tile entity and return it."""
    return world.spawn(
        MapTile(),
        position,
        tile_type,
        SizeXYZ.flat(TILE_SIZE),
        position.to_transform(),
    )


def generate_map(world: World, biome: Optional[Biome] = None) -> dict[Position, TileType]:
    """Fill the map with tiles: walls on the border, biome tiles inside."""
    biome = biome if biome is not None else world.biome
    tiles: dict[Position, TileType] = {}
    for x in range(MAP_WIDTH):
        for y in range(MAP_LENGTH):
            position = Position(x, y, 0)
            if _is_border(x, y):
                tile_type = TileType.WALL_GAME
            else:
                tile_type = world.rng.choice(biome.tiles)
            spawn_tile(world, position, tile_type)
            tiles[position] = tile_type
    world.tiles = tiles
    return tiles


def update_map_tiles(world: World) -> dict[Position, TileType]:
    """Rebuild the tile lookup from the map tile entities."""
    tiles = {
        position: tile_type
        for _, position, tile_type in world.query(Position, TileType, MapTile)
    }
    world.tiles = tiles
    return tiles


def _spawn_units(world: World) -> None:
    for i, actor_type in enumerate(_UNIT_TYPES, start=1):
        position = Position(3, 3 * i, 0)
        world.spawn(
            actor_type,
            position,
            position.to_transform_layer(1.0),
            Attackable(),
            GiveMeAName(),
            Status(
                needs_food=NeedsFood(current=25.1, max=100.0, rate=0.1),
                needs_entertainment=NeedsEntertainment(current=100.0, max=100.0, rate=0.1),
                needs_sleep=NeedsSleep(current=15.2, max=100.0, rate=0.1),
            ),
            Brain(),
        )


def _spawn_monster_generator(world: World) -> None:
    position = Position(10, 10, 0)
    world.spawn(
        position,
        SizeXYZ.cube(1.1),
        MonsterGenerator(),
        position.to_transform_layer(1.0),
    )


def _spawn_plants(world: World, biome: Biome) -> None:
    taken: set[Position] = set()
    rng = world.rng
    for _ in range(MAP_WIDTH * MAP_LENGTH // 10):
        x = rng.randrange(1, MAP_WIDTH - 1)
        y = rng.randrange(1, MAP_LENGTH - 1)
        growth = 0.1 + 0.9 * rng.random()
        position = Position(x, y, 0)
        if position in taken:
            continue
        taken.add(position)
        plant_type = rng.choice(biome.plants)
        plant = world.spawn(
            position,
            position.to_transform_layer(0.5),
            Plant(growth=growth, plant_type=plant_type),
        )
        if plant_type.is_forageable()[0] is not None and growth > 0.5:
            world.insert(plant, Foragable())
        if plant_type in _CHOPPABLE_AT_START and growth > 0.5:
            world.insert(plant, Choppable())


def startup(world: World, biome: Optional[Biome] = None) -> None:
    """Spawn the starting units, the monster generator and the wild plants."""
    biome = biome if biome is not None else world.biome
    _spawn_units(world)
    _spawn_monster_generator(world)
    _spawn_plants(world, biome)