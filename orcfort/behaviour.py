"""How units decide what to do, how their needs drift and how the world ages."""

from __future__ import annotations

from typing import Optional

from .components import (
    TILE_SIZE,
    Bed,
    Brain,
    Choppable,
    Entity,
    Food,
    Foragable,
    Motivation,
    Pathing,
    Plant,
    Position,
    Status,
    Targeting,
    Task,
    TileType,
    Transform,
)
from .world import World

URGENT_NEED = 5.0
PLAY_GAIN = 10.0
SLEEP_GAIN = 10.0
MATURE_GROWTH_STEP = 0.01
OVERGROWN = 1.01
DEATH_CHANCE_PERCENT = 2
REGROWN_GROWTH = 0.01
RIPE_GROWTH = 0.5

_DIRECTIONS = ((0, 1), (0, -1), (-1, 0), (1, 0))

_TASK_FOR_MOTIVATION = {
    Motivation.HUNGER: Task.EAT,
    Motivation.INJURED: Task.HOSPITAL,
    Motivation.TIRED: Task.SLEEP,
    Motivation.BORED: Task.PLAY,
    Motivation.WORK: Task.WORK,
    Motivation.MEANDER: Task.MEANDER,
}

_RESETTABLE_TASKS = frozenset({Task.WORK, Task.PLAY, Task.MEANDER})

_WORK_CHOICES = (Task.FORAGE, Task.CHOP, Task.PLANT)


def _is_urgent(need) -> bool:
    return need is not None and need.current < URGENT_NEED


def _ordered_or(brain: Brain, order: str, fallback: Motivation) -> Motivation:
    """Order if the unit was ordered to do exactly this, otherwise the fallback."""
    return Motivation.ORDER if brain.order == order else fallback


def choose_motivation(brain: Brain, status: Status) -> Motivation:
    """The most pressing motivation for a unit, by the fixed order of priorities."""
    if status.crisis is not None:
        return Motivation.CRISIS
    if status.danger is not None:
        return Motivation.ORDER if brain.order is not None else Motivation.DANGER
    if _is_urgent(status.needs_food):
        return _ordered_or(brain, "Eat", Motivation.HUNGER)
    if status.injured:
        return _ordered_or(brain, "Hospital", Motivation.INJURED)
    if _is_urgent(status.needs_sleep):
        return _ordered_or(brain, "Sleep", Motivation.TIRED)
    if _is_urgent(status.needs_entertainment):
        return _ordered_or(brain, "Entertainment", Motivation.BORED)
    if brain.order is not None:
        return Motivation.ORDER
    return Motivation.WORK


def _task_for(motivation: Motivation, brain: Brain, status: Status) -> Optional[Task]:
    if motivation is Motivation.ORDER:
        return Task.ORDER if brain.order is not None else None
    if motivation is Motivation.DANGER:
        return Task.FLEE if status.danger is not None else None
    return _TASK_FOR_MOTIVATION.get(motivation)


def thinking_system(world: World) -> None:
    """Give every idle unit a motivation and a task that follows from it."""
    for _, brain, status in world.query(Brain, Status):
        if brain.task is not None:
            continue
        if brain.motivation is None:
            brain.motivation = choose_motivation(brain, status)
        brain.task = _task_for(brain.motivation, brain, status)


def remotivate_system(world: World) -> None:
    """Let units that are working, playing or meandering reconsider."""
    for _, brain in world.query(Brain):
        if brain.task in _RESETTABLE_TASKS:
            brain.motivation = None
            brain.task = None


def needs_status_system(world: World) -> None:
    """Let every need drop by its rate, never below zero."""
    for _, status in world.query(Status):
        for need in (status.needs_food, status.needs_entertainment, status.needs_sleep):
            if need is not None:
                need.current = max(need.current - need.rate, 0.0)


def seasons(world: World) -> None:
    """Grow the plants; ripe ones become foragable or choppable, old ones may die back."""
    rng = world.rng
    for entity, plant, transform in world.query(Plant, Transform):
        if plant.growth < 1.0:
            speed = plant.plant_type.growth_speed()
            plant.growth += 3.0 * speed if rng.randrange(2) == 0 else speed
            transform.scale = (plant.growth, plant.growth, 1.0)
            if plant.growth >= RIPE_GROWTH:
                if plant.plant_type.is_forageable()[0] is not None and not world.has(
                    entity, Foragable
                ):
                    world.insert(entity, Foragable())
                if plant.plant_type.is_choppable()[0] is not None and not world.has(
                    entity, Choppable
                ):
                    world.insert(entity, Choppable())
        else:
            plant.growth += MATURE_GROWTH_STEP
            if plant.growth > OVERGROWN and rng.randrange(100) < DEATH_CHANCE_PERCENT:
                plant.growth = REGROWN_GROWTH


def spoilage_system(world: World) -> list[Entity]:
    """Let food spoil; food that has spoiled completely is removed and returned."""
    spoiled = []
    for entity, food in world.query(Food):
        food.spoilage -= food.spoilage_rate
        if food.spoilage < 0.0:
            world.despawn(entity)
            spoiled.append(entity)
    return spoiled


def _open_tiles(world: World) -> set[Position]:
    return {
        position
        for _, position, tile_type in world.query(Position, TileType)
        if not tile_type.is_wall()
    }


def task_system_meander(world: World) -> None:
    """Move each meandering unit one step in a random direction onto open ground."""
    open_tiles = _open_tiles(world)
    for entity, brain, position, transform in world.query(
        Brain, Position, Transform, without=TileType
    ):
        if brain.task is not Task.MEANDER:
            continue
        dx, dy = _DIRECTIONS[world.rng.randrange(len(_DIRECTIONS))]
        new_position = Position(position.x + dx, position.y + dy, position.z)
        if Position(new_position.x, new_position.y, 0) in open_tiles:
            world.insert(entity, new_position)
            transform.x = new_position.x * TILE_SIZE
            transform.y = new_position.y * TILE_SIZE


def _recover(world: World, task: Task, need_name: str, gain: float) -> None:
    for _, brain, status in world.query(Brain, Status):
        if brain.task is not task:
            continue
        need = getattr(status, need_name)
        if need is None:
            continue
        need.current += gain
        if need.current >= need.max:
            brain.motivation = None
            brain.task = None


def task_system_playing(world: World) -> None:
    """Playing units regain entertainment until they are satisfied."""
    _recover(world, Task.PLAY, "needs_entertainment", PLAY_GAIN)


def task_system_sleep(world: World) -> None:
    """Send tired units to the nearest bed, or let them sleep where they stand."""
    beds = world.query(Position, Bed)
    for entity, brain, position in world.query(Brain, Position, without=Targeting):
        if brain.task is not Task.SLEEP:
            continue
        if not beds:
            brain.task = Task.SLEEPING
            continue
        bed, bed_position, _ = min(beds, key=lambda item: position.distance(item[1]))
        world.insert(entity, Targeting(bed), Pathing(destination=bed_position))


def task_system_sleeping(world: World) -> None:
    """Sleeping units regain rest until they are fully rested."""
    _recover(world, Task.SLEEPING, "needs_sleep", SLEEP_GAIN)


def task_system_work(world: World) -> None:
    """Turn a general wish to work into a concrete job, or a walk if none is picked."""
    for _, brain, _ in world.query(Brain, Position, without=Targeting):
        if brain.task is not Task.WORK:
            continue
        number = world.rng.randrange(5)
        brain.task = _WORK_CHOICES[number] if number < len(_WORK_CHOICES) else Task.MEANDER