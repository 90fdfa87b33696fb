"""Work and eating tasks: chopping, foraging, planting and eating."""

from __future__ import annotations

from typing import Optional

from .components import (
    Brain,
    Choppable,
    Entity,
    Food,
    Foragable,
    ForageType,
    ItemType,
    Logs,
    MapTile,
    Motivation,
    NearestEntity,
    Pathing,
    Plant,
    Position,
    Status,
    Targeting,
    Task,
    WorkMarker,
    WorkTarget,
    Zone,
    ZoneType,
)
from .world import World

_REACH = 1


def already_targeted(world: World) -> list[Entity]:
    """Targets held by brains that are not currently walking a path."""
    return [
        targeting.target
        for entity, _, _ in world.query(Brain, Position, without=Pathing)
        if (targeting := world.get(entity, Targeting)) is not None
    ]


def remove_x_markers(world: World, target: Entity) -> None:
    """Despawn the work markers attached to a target."""
    for marker, _ in world.query(WorkMarker):
        if world.parent(marker) == target:
            world.despawn(marker)


def _workers(world: World, task: Task) -> list[tuple[Entity, Brain, Position]]:
    return [
        (entity, brain, position)
        for entity, brain, position in world.query(Brain, Position, without=Pathing)
        if brain.task is task
    ]


def _is_reached(
    position: Position, target_position: Position, targeting: Optional[Targeting], target: Entity
) -> bool:
    return (
        position.distance(target_position) <= _REACH
        and targeting is not None
        and targeting.target == target
    )


def _head_for(
    world: World, entity: Entity, nearest: NearestEntity, claimed: list[Entity]
) -> None:
    world.insert(entity, Targeting(nearest.entity), Pathing(destination=nearest.position))
    claimed.append(nearest.entity)


def _drop_offsets(position: Position) -> list[Position]:
    """The two spots where dropped items land: one step diagonally each way."""
    return [
        Position(position.x + 1, position.y + 1, position.z),
        Position(position.x - 1, position.y - 1, position.z),
    ]


def spawn_logs(world: World, target: Entity, position: Position, plant: Plant) -> list[Entity]:
    """Fell a tree: despawn it and drop two logs next to it."""
    item = plant.plant_type.is_choppable()[0] or ItemType.PINE_LOG
    world.despawn(target)
    return [
        world.spawn(Logs(), spot, spot.to_transform_layer(2.0), item)
        for spot in _drop_offsets(position)
    ]


def task_system_chop(world: World) -> None:
    """Walk choppers to marked trees and fell the ones they reach."""
    claimed = already_targeted(world)
    for entity, brain, position in _workers(world, Task.CHOP):
        targeting = world.get(entity, Targeting)
        nearest: Optional[NearestEntity] = None
        chopped = False
        for target, target_position, _, plant, _ in world.query(
            Position, Choppable, Plant, WorkTarget
        ):
            if _is_reached(position, target_position, targeting, target):
                world.remove(entity, Targeting)
                remove_x_markers(world, target)
                spawn_logs(world, target, target_position, plant)
                chopped = True
                break
            if target in claimed:
                continue
            distance = position.distance(target_position)
            if nearest is None or distance < nearest.distance:
                nearest = NearestEntity(target, target_position, distance)
        if chopped:
            continue
        if nearest is not None:
            _head_for(world, entity, nearest, claimed)
        else:
            world.remove(entity, Targeting)
            world.remove(entity, Pathing)
            brain.remotivate()


def task_system_eat(world: World) -> None:
    """Walk hungry units to the nearest free food and eat it on arrival."""
    claimed = already_targeted(world)
    for entity, brain, position in _workers(world, Task.EAT):
        targeting = world.get(entity, Targeting)
        status: Optional[Status] = world.get(entity, Status)
        found_food = False
        nearest: Optional[NearestEntity] = None
        for food, food_position, _ in world.query(Position, Food):
            mine = targeting is not None and targeting.target == food
            if food in claimed and not mine:
                continue
            if _is_reached(position, food_position, targeting, food):
                if status is not None and status.needs_food is not None:
                    status.needs_food.current = status.needs_food.max
                world.despawn(food)
                world.remove(entity, Targeting)
                if brain.motivation is Motivation.HUNGER:
                    brain.remotivate()
                nearest = None
                found_food = True
                break
            distance = position.distance(food_position)
            if nearest is None or distance < nearest.distance:
                nearest = NearestEntity(food, food_position, distance)
        if nearest is not None:
            _head_for(world, entity, nearest, claimed)
            found_food = True
        else:
            world.remove(entity, Targeting)
        if not found_food:
            brain.task = Task.FORAGE if brain.motivation is Motivation.HUNGER else None


def spawn_food(world: World, target: Entity, position: Position, plant: Plant) -> list[Entity]:
    """Harvest a plant and drop two pieces of food next to it."""
    plant.growth = 0.1
    item, _, forage_type = plant.plant_type.is_forageable()
    item = item or ItemType.CABBAGE
    if forage_type is ForageType.ONCE:
        world.despawn_recursive(target)
    else:
        world.remove(target, Foragable)
    return [
        world.spawn(Food(), spot, spot.to_transform_layer(2.0), item)
        for spot in _drop_offsets(position)
    ]


def task_system_forage(world: World) -> None:
    """Walk foragers to the nearest foragable plant and harvest it on arrival."""
    claimed = already_targeted(world)
    for entity, brain, position in _workers(world, Task.FORAGE):
        targeting = world.get(entity, Targeting)
        did_foraging = False
        nearest: Optional[NearestEntity] = None
        for target, target_position, _, plant in world.query(Position, Foragable, Plant):
            if _is_reached(position, target_position, targeting, target):
                world.remove(entity, Targeting)
                spawn_food(world, target, target_position, plant)
                did_foraging = True
                nearest = None
                break
            if target in claimed:
                continue
            distance = position.distance(target_position)
            if nearest is None or distance < nearest.distance:
                nearest = NearestEntity(target, target_position, distance)
        if nearest is not None:
            _head_for(world, entity, nearest, claimed)
            continue
        world.remove(entity, Targeting)
        if did_foraging and brain.motivation is Motivation.HUNGER:
            brain.task = Task.EAT
        else:
            brain.remotivate()


def spawn_plant(world: World, position: Position, zone: Zone) -> Entity:
    """Plant a young plant of the zone's type at a position."""
    return world.spawn(
        position,
        position.to_transform_layer(0.5),
        Plant(growth=0.4, plant_type=zone.plant_type),
    )


def task_system_plant(world: World) -> None:
    """Walk planters to free farm tiles and plant there on arrival."""
    claimed = already_targeted(world)
    for entity, brain, position in _workers(world, Task.PLANT):
        targeting = world.get(entity, Targeting)
        obstacles = {
            spot for other, spot in world.query(Position, without=MapTile) if other != entity
        }
        nearest: Optional[NearestEntity] = None
        planted = False
        for target, target_position, zone in world.query(Position, Zone):
            if zone.zone_type is not ZoneType.FARM or target_position in obstacles:
                continue
            if _is_reached(position, target_position, targeting, target):
                world.remove(entity, Targeting)
                spawn_plant(world, target_position, zone)
                planted = True
                break
            if target in claimed:
                continue
            distance = position.distance(target_position)
            if nearest is None or distance < nearest.distance:
                nearest = NearestEntity(target, target_position, distance)
        if planted:
            continue
        if nearest is not None:
            _head_for(world, entity, nearest, claimed)
        else:
            world.remove(entity, Targeting)
            brain.remotivate()