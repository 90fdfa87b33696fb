"""Names for units and the floating text labels shown above them."""

from __future__ import annotations

from dataclasses import dataclass

from .components import (
    Brain,
    Entity,
    GiveMeAName,
    HasName,
    HasNameShown,
    IsName,
    Status,
    Task,
    TextName,
    Transform,
)
from .world import World

NAMES = (
    "Alice", "Charlie", "Dave", "Eve", "Frank", "Grace", "Hank", "Iris", "Judy",
    "Karl", "Linda", "Mike", "Nancy", "Oscar", "Peggy", "Quinn", "Ruth", "Steve",
    "Tina", "Ursula", "Victor", "Wendy", "Xavier", "Yvonne", "Zach",
)

LOW_NEED = 5.0


@dataclass
class Label:
    """Text drawn above an entity."""

    text: str


def _spawn_label(world: World, owner: Entity, text: str) -> Entity:
    label = world.spawn(Label(text), TextName(), Transform(0.0, 30.0, 100.0), IsName())
    world.add_child(owner, label)
    return label


def namegiving_system(world: World) -> None:
    """Give every unit waiting for a name a random one."""
    for entity, _ in world.query(GiveMeAName):
        world.insert(entity, HasName(world.rng.choice(NAMES)))
        world.remove(entity, GiveMeAName)


def names_system(world: World) -> None:
    """Show a name label above every named entity that has none yet."""
    for entity, has_name in world.query(HasName, without=HasNameShown):
        _spawn_label(world, entity, has_name.name)
        world.insert(entity, HasNameShown())


def status_lines(name: str, status: Status, brain: Brain) -> list[str]:
    """The lines a unit's label cycles through: its name, then any alerts."""
    lines = [name]
    alerts = (
        (status.needs_food, "HUNGRY"),
        (status.needs_entertainment, "BORED"),
        (status.needs_sleep, "TIRED"),
    )
    lines.extend(text for need, text in alerts if need is not None and need.current < LOW_NEED)
    if brain.task is Task.SLEEPING:
        lines.append("ZZZ...")
    return lines


def status_display_system(world: World) -> dict[Entity, str]:
    """Replace every unit label with the next line of its status; return what is shown."""
    units = [
        (entity, has_name, status, brain)
        for entity, has_name, status, brain in world.query(HasName, Status, Brain)
        if world.children(entity)
    ]
    for label, _ in world.query(TextName):
        if world.parent(label) is not None:
            world.despawn(label)
    shown: dict[Entity, str] = {}
    for entity, has_name, status, brain in units:
        lines = status_lines(has_name.name, status, brain)
        if status.index >= len(lines):
            status.index = 0
        text = lines[status.index]
        status.index += 1
        _spawn_label(world, entity, text)
        shown[entity] = text
    return shown