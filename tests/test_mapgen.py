from orcfort.components import (
    MAP_LENGTH,
    MAP_WIDTH,
    TILE_SIZE,
    ActorType,
    Attackable,
    Biome,
    Brain,
    Choppable,
    Foragable,
    GiveMeAName,
    MapTile,
    MonsterGenerator,
    Plant,
    PlantType,
    Position,
    SizeXYZ,
    Status,
    TileType,
    Transform,
)
from orcfort.mapgen import generate_map, spawn_tile, startup, update_map_tiles
from orcfort.world import World


def _border(position):
    return position.x in (0, MAP_WIDTH - 1) or position.y in (0, MAP_LENGTH - 1)


def test_generate_map_covers_whole_map():
    world = World(seed=1)
    tiles = generate_map(world)
    assert len(tiles) == MAP_WIDTH * MAP_LENGTH
    assert world.tiles == tiles
    assert len(world.query(MapTile, Position, TileType)) == MAP_WIDTH * MAP_LENGTH


def test_generate_map_border_is_wall_and_inside_from_biome():
    world = World(seed=2)
    tiles = generate_map(world)
    for position, tile in tiles.items():
        if _border(position):
            assert tile is TileType.WALL_GAME
        else:
            assert tile in world.biome.tiles


def test_generate_map_uses_given_biome():
    world = World(seed=3)
    biome = Biome(plants=[PlantType.CABBAGE], tiles=[TileType.DIRT])
    tiles = generate_map(world, biome)
    inner = {tile for position, tile in tiles.items() if not _border(position)}
    assert inner == {TileType.DIRT}


def test_spawn_tile_components():
    world = World(seed=0)
    position = Position(2, 5, 0)
    tile = spawn_tile(world, position, TileType.STONE)
    assert world.get(tile, Position) == position
    assert world.get(tile, TileType) is TileType.STONE
    assert world.has(tile, MapTile)
    assert world.get(tile, SizeXYZ) == SizeXYZ.flat(TILE_SIZE)
    assert world.get(tile, Transform) == position.to_transform()


def test_startup_units():
    world = World(seed=4)
    startup(world)
    units = world.query(Position, Brain, Status, ActorType, Attackable, GiveMeAName)
    assert [position for _, position, *_ in units] == [Position(3, 3 * i, 0) for i in range(1, 6)]
    assert [actor for *_, actor, _, _ in units] == [
        ActorType.MAN2,
        ActorType.DWARF,
        ActorType.MAN,
        ActorType.MAN,
        ActorType.MAN,
    ]
    status = units[0][3]
    assert status.needs_food.current == 25.1
    assert status.needs_sleep.current == 15.2
    assert status.needs_entertainment.current == status.needs_entertainment.max


def test_startup_monster_generator():
    world = World(seed=5)
    startup(world)
    generators = world.query(Position, MonsterGenerator)
    assert [position for _, position, _ in generators] == [Position(10, 10, 0)]


def test_startup_plants_are_unique_and_inside():
    world = World(seed=6)
    startup(world)
    plants = world.query(Position, Plant)
    positions = [position for _, position, _ in plants]
    assert 0 < len(plants) <= MAP_WIDTH * MAP_LENGTH // 10
    assert len(set(positions)) == len(positions)
    for position in positions:
        assert 1 <= position.x < MAP_WIDTH - 1
        assert 1 <= position.y < MAP_LENGTH - 1
    for _, _, plant in plants:
        assert 0.1 <= plant.growth < 1.0
        assert plant.plant_type in world.biome.plants


def test_startup_marks_foragable_and_choppable():
    world = World(seed=7)
    biome = Biome(
        plants=[PlantType.CABBAGE, PlantType.PINE_TREE, PlantType.CEDAR_TREE],
        tiles=[TileType.GRASS],
    )
    startup(world, biome)
    for entity, plant in world.query(Plant):
        ripe = plant.growth > 0.5
        assert world.has(entity, Foragable) == (plant.plant_type is PlantType.CABBAGE and ripe)
        assert world.has(entity, Choppable) == (plant.plant_type is PlantType.PINE_TREE and ripe)