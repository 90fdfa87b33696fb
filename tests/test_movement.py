import pytest

from orcfort.components import (
    TILE_SIZE,
    ActorType,
    Attackable,
    GeneratedBy,
    MonsterGenerator,
    MoveRandom,
    MoveTowardsNearestAttackable,
    Pathing,
    Position,
    Targeting,
    TileType,
    Transform,
)
from orcfort.mapgen import spawn_tile
from orcfort.movement import (
    clear_unreachable_paths,
    find_path,
    monster_generator,
    movement_along_path,
    movement_path_generating,
    movement_random,
    movement_toward_attackable,
)
from orcfort.world import World


def _grid(width, height, walls=()):
    tiles = {}
    for x in range(width):
        for y in range(height):
            border = x in (0, width - 1) or y in (0, height - 1)
            position = Position(x, y, 0)
            wall = border or position in walls
            tiles[position] = TileType.WALL_STONE if wall else TileType.GRASS
    return tiles


def _world_with_grid(width, height, walls=(), seed=0):
    world = World(seed=seed)
    world.tiles = _grid(width, height, walls)
    for position, tile in world.tiles.items():
        spawn_tile(world, position, tile)
    return world


def _assert_valid_path(path, start, destination, tiles):
    assert path[0] == destination
    assert path[-1] == start
    for a, b in zip(path, path[1:]):
        assert abs(a.x - b.x) + abs(a.y - b.y) == 1
    for step in path[:-1]:
        assert not tiles[step].is_wall()


def test_find_path_open_grid_is_shortest():
    tiles = _grid(8, 8)
    start, destination = Position(1, 1), Position(5, 4)
    path = find_path(start, destination, tiles)
    _assert_valid_path(path, start, destination, tiles)
    manhattan = abs(start.x - destination.x) + abs(start.y - destination.y)
    assert len(path) == manhattan + 1


def test_find_path_same_position():
    tiles = _grid(5, 5)
    assert find_path(Position(2, 2), Position(2, 2), tiles) == [Position(2, 2)]


def test_find_path_goes_around_walls():
    walls = {Position(3, y) for y in range(1, 6)}
    tiles = _grid(8, 8, walls)
    start, destination = Position(1, 1), Position(5, 1)
    path = find_path(start, destination, tiles)
    _assert_valid_path(path, start, destination, tiles)
    assert not walls & set(path)
    assert len(path) > abs(start.x - destination.x) + 1


def test_find_path_unreachable():
    walls = {Position(3, y) for y in range(1, 7)}
    tiles = _grid(8, 8, walls)
    assert find_path(Position(1, 1), Position(5, 1), tiles) == []
    assert find_path(Position(1, 1), Position(0, 0), tiles) == []


def test_path_generation_and_walking():
    world = World(seed=0)
    world.tiles = _grid(8, 8)
    start, destination = Position(1, 1), Position(4, 1)
    walker = world.spawn(start, start.to_transform(), Pathing(destination=destination))
    movement_path_generating(world)
    path = list(world.get(walker, Pathing).path)
    _assert_valid_path(path, start, destination, world.tiles)
    visited = []
    while world.has(walker, Pathing):
        movement_along_path(world)
        visited.append(world.get(walker, Position))
    assert visited == list(reversed(path))
    transform = world.get(walker, Transform)
    assert transform.x == destination.x * TILE_SIZE
    assert transform.y == destination.y * TILE_SIZE


def test_unreachable_pathing_is_cleared():
    world = World(seed=0)
    world.tiles = _grid(6, 6)
    walker = world.spawn(Position(1, 1), Pathing(destination=Position(0, 0)))
    movement_path_generating(world)
    assert world.get(walker, Pathing).unreachable is True
    clear_unreachable_paths(world)
    assert not world.has(walker, Pathing)


def test_movement_toward_nearest_attackable():
    world = World(seed=0)
    hunter = world.spawn(Position(5, 5), MoveTowardsNearestAttackable())
    far = world.spawn(Position(20, 20), Attackable())
    near = world.spawn(Position(6, 7), Attackable())
    movement_toward_attackable(world)
    assert world.get(hunter, Targeting) == Targeting(near)
    assert world.get(hunter, Pathing).destination == Position(6, 7)
    assert far != near


def test_movement_toward_attackable_skips_pathing_hunters():
    world = World(seed=0)
    hunter = world.spawn(Position(5, 5), MoveTowardsNearestAttackable(), Pathing())
    world.spawn(Position(6, 6), Attackable())
    movement_toward_attackable(world)
    assert not world.has(hunter, Targeting)


def test_movement_random_steps_onto_open_ground():
    world = _world_with_grid(10, 10, seed=3)
    start = Position(5, 5)
    walker = world.spawn(start, start.to_transform(), MoveRandom())
    for _ in range(20):
        before = world.get(walker, Position)
        movement_random(world)
        after = world.get(walker, Position)
        assert abs(before.x - after.x) + abs(before.y - after.y) <= 1
        assert not world.tiles[after].is_wall()
        transform = world.get(walker, Transform)
        assert (transform.x, transform.y) == (after.x * TILE_SIZE, after.y * TILE_SIZE)


def test_movement_random_boxed_in_stays():
    world = _world_with_grid(3, 3, seed=1)
    walker = world.spawn(Position(1, 1), Position(1, 1).to_transform(), MoveRandom())
    for _ in range(10):
        movement_random(world)
    assert world.get(walker, Position) == Position(1, 1)


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_monster_generator_blocked_by_walls(seed):
    world = _world_with_grid(3, 3, walls={Position(1, 1)}, seed=seed)
    world.spawn(Position(1, 1), MonsterGenerator())
    for _ in range(20):
        assert monster_generator(world) == []
    assert world.query(GeneratedBy) == []