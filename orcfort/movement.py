"""Path finding and the systems that move entities around the map."""

from __future__ import annotations

import heapq
import itertools
import math
from typing import Iterator, Mapping, Optional

from .components import (
    TILE_SIZE,
    ActorType,
    Attackable,
    Entity,
    GeneratedBy,
    MonsterGenerator,
    MoveRandom,
    MoveTowardsNearestAttackable,
    Pathing,
    Position,
    SizeXYZ,
    Status,
    Targeting,
    TileType,
    Transform,
)
from .world import World

_NO_TARGET_DISTANCE = 9999


def _neighbors(position: Position) -> Iterator[Position]:
    yield Position(position.x + 1, position.y, 0)
    yield Position(position.x - 1, position.y, 0)
    yield Position(position.x, position.y + 1, 0)
    yield Position(position.x, position.y - 1, 0)


def _step(position: Position, direction: int) -> Position:
    """The position one step away in a direction 0-3; other values stay put."""
    x, y = position.x, position.y
    if direction == 0:
        y += 1
    elif direction == 1:
        y -= 1
    elif direction == 2:
        x -= 1
    elif direction == 3:
        x += 1
    return Position(x, y, position.z)


def _open_tiles(world: World) -> set[Position]:
    """Positions holding at least one tile entity that is not a wall."""
    return {
        position
        for _, position, tile_type in world.query(Position, TileType)
        if not tile_type.is_wall()
    }


def find_path(
    start: Position, destination: Position, tiles: Mapping[Position, TileType]
) -> list[Position]:
    """A shortest walkable path, listed from the destination back to the start.

    Only tiles present in ``tiles`` and not walls can be stepped on. An empty
    list means the destination cannot be reached.
    """
    order = itertools.count()
    g_score: dict[Position, int] = {start: 0}
    parents: dict[Position, Optional[Position]] = {start: None}
    frontier: list[tuple[int, int, Position]] = [(0, next(order), start)]
    closed: set[Position] = set()
    while frontier:
        _, _, current = heapq.heappop(frontier)
        if current in closed:
            continue
        closed.add(current)
        if current == destination:
            path = []
            node: Optional[Position] = current
            while node is not None:
                path.append(node)
                node = parents[node]
            return path
        g = g_score[current] + 1
        for neighbor in _neighbors(current):
            tile = tiles.get(neighbor)
            if tile is None or tile.is_wall() or neighbor in closed:
                continue
            if g < g_score.get(neighbor, math.inf):
                g_score[neighbor] = g
                parents[neighbor] = current
                f = g + neighbor.distance(destination)
                heapq.heappush(frontier, (f, next(order), neighbor))
    return []


def movement_toward_attackable(world: World) -> None:
    """Send every hunter without a path towards the nearest attackable entity."""
    targets = world.query(Position, Attackable)
    for attacker, attacker_position, _ in world.query(
        Position, MoveTowardsNearestAttackable, without=Pathing
    ):
        closest_distance = _NO_TARGET_DISTANCE
        closest: Optional[tuple[Entity, Position]] = None
        for target, target_position, _ in targets:
            distance = attacker_position.distance(target_position)
            if distance < closest_distance:
                closest_distance = distance
                closest = (target, target_position)
        if closest is not None:
            target, target_position = closest
            world.insert(attacker, Targeting(target), Pathing(destination=target_position))


def movement_path_generating(world: World) -> None:
    """Compute a path for every entity whose pathing has none yet."""
    for _, start, pathing in world.query(Position, Pathing):
        if pathing.path:
            continue
        pathing.path = find_path(start, pathing.destination, world.tiles)
        if not pathing.path:
            pathing.unreachable = True


def clear_unreachable_paths(world: World) -> None:
    """Drop pathing whose destination could not be reached."""
    for entity, pathing in world.query(Pathing):
        if pathing.unreachable:
            world.remove(entity, Pathing)


def movement_along_path(world: World) -> None:
    """Advance every pathing entity by one step; drop the pathing when done."""
    for entity, _, pathing, transform in world.query(Position, Pathing, Transform):
        if not pathing.path:
            continue
        next_position = pathing.path.pop()
        world.insert(entity, next_position)
        placed = next_position.to_transform()
        transform.x = placed.x
        transform.y = placed.y
        if not pathing.path:
            world.remove(entity, Pathing)


def movement_random(world: World) -> None:
    """Move each random walker one step in a random direction onto open ground."""
    open_tiles = _open_tiles(world)
    for entity, position, transform, _ in world.query(
        Position, Transform, MoveRandom, without=TileType
    ):
        new_position = _step(position, world.rng.randrange(4))
        if Position(new_position.x, new_position.y, 0) in open_tiles:
            world.insert(entity, new_position)
            transform.x = new_position.x * TILE_SIZE
            transform.y = new_position.y * TILE_SIZE


def _signed_remainder(value: int, divisor: int) -> int:
    """Remainder that keeps the sign of the dividend."""
    remainder = abs(value) % divisor
    return remainder if value >= 0 else -remainder


def monster_generator(world: World) -> list[Entity]:
    """Let each generator spawn one monster next to it, if it has none yet.

    The first generator that cannot spawn stops the whole pass.
    Returns the monsters spawned.
    """
    spawned: list[Entity] = []
    open_tiles = _open_tiles(world)
    owners = {generated.entity for _, generated in world.query(GeneratedBy)}
    for generator, position, _ in world.query(Position, MonsterGenerator):
        direction = _signed_remainder(world.rng.randint(-(2**31), 2**31 - 1), 4)
        new_position = _step(position, direction)
        can_generate = Position(new_position.x, new_position.y, 0) in open_tiles
        if generator in owners:
            can_generate = False
        if not can_generate:
            return spawned
        monster = world.spawn(
            ActorType.RAT,
            new_position,
            SizeXYZ.cube(1.1),
            new_position.to_transform_layer(1.0),
            GeneratedBy(generator),
            MoveTowardsNearestAttackable(),
            Status(),
        )
        owners.add(generator)
        spawned.append(monster)
    return spawned