"""A small entity-component store and the resources shared by the systems."""

from __future__ import annotations

import itertools
import random
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional

from .components import (
    Biome,
    Dragging,
    Entity,
    GameState,
    InfoPanelInformation,
    MenuStates,
    Position,
    SelectedObjectInformation,
    TileType,
    starting_biome,
)


@dataclass
class Camera:
    """The 2D camera: its translation and orthographic zoom."""

    x: float = 0.0
    y: float = 0.0
    scale: float = 1.0


@dataclass
class Window:
    """The primary window."""

    width: float = 1280.0
    height: float = 720.0
    title: str = "Orc Fortress"
    maximized: bool = False


class World:
    """Entities with one component per type, a parent/child hierarchy and resources."""

    def __init__(self, seed: Optional[int] = None, biome: Optional[Biome] = None) -> None:
        self._components: dict[Entity, dict[type, Any]] = {}
        self._parents: dict[Entity, Entity] = {}
        self._children: dict[Entity, list[Entity]] = {}
        self._ids = itertools.count()
        self.rng = random.Random(seed)
        self.biome = biome if biome is not None else starting_biome()
        self.tiles: dict[Position, TileType] = {}
        self.state = GameState.IN_GAME
        self.menu_state = MenuStates.HOME
        self.dragging = Dragging()
        self.selected_object = SelectedObjectInformation()
        self.info_panel = InfoPanelInformation()
        self.camera = Camera()
        self.window = Window()
        self.events: defaultdict[type, list[Any]] = defaultdict(list)

    def __len__(self) -> int:
        return len(self._components)

    def __iter__(self) -> Iterator[Entity]:
        return iter(list(self._components))

    def _entity(self, entity: Entity) -> dict[type, Any]:
        try:
            return self._components[entity]
        except KeyError:
            raise KeyError(f"no such entity: {entity}") from None

    def spawn(self, *args: Any) -> Entity:
        """Create an entity holding the given components and return its id."""
        entity = next(self._ids)
        self._components[entity] = {type(component): component for component in args}
        return entity

    def despawn(self, entity: Entity) -> None:
        """Remove an entity; its children lose their parent. Unknown ids are ignored."""
        if self._components.pop(entity, None) is None:
            return
        parent = self._parents.pop(entity, None)
        if parent is not None:
            self._children[parent].remove(entity)
        for child in self._children.pop(entity, []):
            self._parents.pop(child, None)

    def despawn_recursive(self, entity: Entity) -> None:
        """Remove an entity together with all its descendants."""
        for child in self.children(entity):
            self.despawn_recursive(child)
        self.despawn(entity)

    def contains(self, entity: Entity) -> bool:
        return entity in self._components

    def insert(self, entity: Entity, *args: Any) -> None:
        """Add components, replacing any of the same type."""
        components = self._entity(entity)
        for component in args:
            components[type(component)] = component

    def remove(self, entity: Entity, component_type: type) -> Any:
        """Remove and return a component, or None if it was not there."""
        components = self._components.get(entity)
        if components is None:
            return None
        return components.pop(component_type, None)

    def get(self, entity: Entity, component_type: type) -> Any:
        """The entity's component of that type, or None."""
        return self._entity(entity).get(component_type)

    def has(self, entity: Entity, component_type: type) -> bool:
        components = self._components.get(entity)
        return components is not None and component_type in components

    def query(self, *args: type, without: type | Iterable[type] = ()) -> list[tuple]:
        """Tuples of (entity, *components) for entities with every given type and none excluded."""
        excluded = (without,) if isinstance(without, type) else tuple(without)
        return [
            (entity, *(components[t] for t in args))
            for entity, components in self._components.items()
            if all(t in components for t in args)
            and not any(t in components for t in excluded)
        ]

    def add_child(self, parent: Entity, child: Entity) -> None:
        """Attach child to parent, detaching it from any previous parent."""
        self._entity(parent)
        self._entity(child)
        if parent == child:
            raise ValueError("an entity cannot be its own child")
        previous = self._parents.get(child)
        if previous is not None:
            self._children[previous].remove(child)
        self._parents[child] = parent
        self._children.setdefault(parent, []).append(child)

    def children(self, entity: Entity) -> list[Entity]:
        return list(self._children.get(entity, ()))

    def parent(self, entity: Entity) -> Optional[Entity]:
        return self._parents.get(entity)