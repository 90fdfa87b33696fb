"""Mouse selection: dragging a box over the map and acting on what it covers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .components import (
    TILE_SIZE,
    Brain,
    Choppable,
    ClickedOn,
    Food,
    Foragable,
    Highlighted,
    HighlightBox,
    MapTile,
    Plant,
    Position,
    SelectableType,
    Status,
    Transform,
    WorkMarker,
    WorkTarget,
    Zone,
    ZoneMarker,
)
from .labels import Label
from .world import Camera, Window, World

TOOLBAR_HEIGHT = 32.0
TOOLBAR_ICON_WIDTH = 32
BOTTOM_PANEL_HEIGHT = 164.0

# Toolbar icons from left to right: ?, Chop, Wand, Arrow, Leaf, Legs, and one more.
_TOOLBAR = (
    SelectableType.FORAGABLE,
    SelectableType.CHOPPABLE,
    SelectableType.UNSELECTING,
    SelectableType.ZONING,
    SelectableType.UNZONING,
    SelectableType.UNSELECTING,
    SelectableType.UNSELECTING,
)

Cursor = Optional[tuple[float, float]]


@dataclass(frozen=True)
class ObjectFinderEvent:
    """A click on a map position, to look for units there."""

    position: Position


@dataclass(frozen=True)
class _SelectionRequest:
    """Sent when the mouse button is released to finish a selection."""


def _pending(world: World) -> bool:
    return bool(world.events[_SelectionRequest])


def _highlighted(world: World) -> list[int]:
    return [entity for entity, _ in world.query(Highlighted)]


def unhighlight(world: World) -> None:
    """Clear the current selection and remove every highlight box."""
    for entity in _highlighted(world):
        world.remove(entity, Highlighted)
    for box, _ in world.query(HighlightBox):
        world.despawn(box)


def _despawn_children_marked(world: World, parent: int, marker: type) -> None:
    for child, _ in world.query(marker):
        if world.parent(child) == parent:
            world.despawn(child)


def _active(world: World, looking_for: SelectableType) -> bool:
    return _pending(world) and world.dragging.looking_for is looking_for


def select_foragables(world: World) -> None:
    """Mark the selected foragable plants as work targets."""
    if not _active(world, SelectableType.FORAGABLE):
        return
    for entity in _highlighted(world):
        if world.has(entity, Foragable):
            world.insert(entity, WorkTarget())
    unhighlight(world)


def select_choppables(world: World) -> None:
    """Mark the selected choppable plants as work targets and put an X on them."""
    if not _active(world, SelectableType.CHOPPABLE):
        return
    for entity in _highlighted(world):
        if world.has(entity, Choppable):
            world.insert(entity, WorkTarget())
            marker = world.spawn(Label("X"), WorkMarker(), Transform(10.0, 20.0, 100.0))
            world.add_child(entity, marker)
    unhighlight(world)


def select_zoning(world: World) -> None:
    """Zone the selected map tiles that have no zone yet."""
    if not _active(world, SelectableType.ZONING):
        return
    dragging = world.dragging
    zoned = {entity for entity, _ in world.query(Zone)}
    for entity in _highlighted(world):
        if entity in zoned or not world.has(entity, MapTile):
            continue
        world.insert(entity, Zone(zone_type=dragging.zone_type, plant_type=dragging.plant_type))
        marker = world.spawn(ZoneMarker(), Transform(0.0, 0.0, 300.0))
        world.add_child(entity, marker)
    unhighlight(world)


def select_unselecting(world: World) -> None:
    """Drop the work targets among the selection together with their X markers."""
    if not _active(world, SelectableType.UNSELECTING):
        return
    for entity in _highlighted(world):
        world.remove(entity, WorkTarget)
        _despawn_children_marked(world, entity, WorkMarker)
    unhighlight(world)


def select_unzoning(world: World) -> None:
    """Remove the zones from the selected tiles together with their markers."""
    if not _active(world, SelectableType.UNZONING):
        return
    for entity in _highlighted(world):
        world.remove(entity, Zone)
        _despawn_children_marked(world, entity, ZoneMarker)
    unhighlight(world)


def select_nothing(world: World) -> None:
    """Just clear the selection."""
    if not _active(world, SelectableType.NOTHING):
        return
    unhighlight(world)


def run_selection(world: World) -> None:
    """Apply a finished selection with the current tool, then forget the request."""
    if not _pending(world):
        return
    for system in (
        select_unselecting,
        select_foragables,
        select_choppables,
        select_zoning,
        select_unzoning,
        select_nothing,
    ):
        system(world)
    world.events[_SelectionRequest].clear()


def toolbar_selection(x: float) -> Optional[SelectableType]:
    """The tool behind the toolbar icon at horizontal pixel x, or None."""
    column = int(x)
    if column < 0:
        return None
    index = column // TOOLBAR_ICON_WIDTH
    return _TOOLBAR[index] if index < len(_TOOLBAR) else None


def screen_to_position(camera: Camera, window: Window, screen_x: float, screen_y: float) -> Position:
    """The map tile under a cursor given in window pixels, origin bottom-left."""
    world_x = camera.x + (screen_x - window.width / 2.0) * camera.scale
    world_y = camera.y + (screen_y - window.height / 2.0) * camera.scale
    world_x += TILE_SIZE / 2.0
    world_y += TILE_SIZE / 2.0
    return Position(int(world_x / TILE_SIZE), int(world_y / TILE_SIZE), 0)


def mouse_click_input(
    world: World, cursor: Cursor, just_pressed: bool = False, just_released: bool = False
) -> None:
    """Handle the left mouse button: pick tools, start and finish drags."""
    dragging = world.dragging
    if just_pressed:
        if cursor is not None:
            x, y = cursor
            if y < TOOLBAR_HEIGHT:
                tool = toolbar_selection(x)
                if tool is not None:
                    dragging.looking_for = tool
                return
            if y < BOTTOM_PANEL_HEIGHT:
                return
            position = screen_to_position(world.camera, world.window, x, y)
            world.events[ObjectFinderEvent].append(ObjectFinderEvent(position))
            dragging.dragging = True
            dragging.start_position = position
    if just_released:
        dragging.dragging = False
        world.events[_SelectionRequest].append(_SelectionRequest())


def mouse_drag_system(world: World, cursor: Cursor) -> None:
    """Highlight everything inside the dragged box and unhighlight what left it."""
    dragging = world.dragging
    if not dragging.dragging or dragging.start_position is None or cursor is None:
        return
    start = dragging.start_position
    end = screen_to_position(world.camera, world.window, *cursor)
    low_x, high_x = sorted((start.x, end.x))
    low_y, high_y = sorted((start.y, end.y))
    boxes = [(box, world.parent(box)) for box, _ in world.query(HighlightBox)]
    for entity, position in world.query(Position):
        highlighted = world.has(entity, Highlighted)
        if low_x <= position.x <= high_x and low_y <= position.y <= high_y:
            if highlighted:
                continue
            box = world.spawn(HighlightBox(), Transform(0.0, 0.0, position.z + 0.1))
            world.insert(entity, Highlighted())
            world.add_child(entity, box)
        elif highlighted:
            world.remove(entity, Highlighted)
            for box, parent in boxes:
                if parent == entity:
                    world.despawn(box)


def mouse_move_system(world: World, cursor: Cursor) -> list[str]:
    """Describe what lies under the cursor; returns the lines shown."""
    if cursor is None:
        return world.selected_object.info
    target = screen_to_position(world.camera, world.window, *cursor)
    info: list[str] = []
    for entity, position in world.query(Position):
        if (position.x, position.y) != (target.x, target.y):
            continue
        food = world.get(entity, Food)
        if food is not None:
            info.append(food.hover_note())
        plant = world.get(entity, Plant)
        if plant is not None:
            info.append(plant.hover_note())
        brain = world.get(entity, Brain)
        if brain is not None:
            if brain.task is not None:
                info.append(f"Task: {brain.task}")
            if brain.motivation is not None:
                info.append(f"Motivation: {brain.motivation}")
    world.selected_object.info = info
    return info


def object_finder_system(world: World) -> None:
    """Select the unit that was clicked on and fill the info panel with its status."""
    events = world.events[ObjectFinderEvent]
    units = world.query(Position, Brain)
    clicked = {entity for entity, _, _ in units if world.has(entity, ClickedOn)}
    for event in events:
        for entity, position, _ in units:
            if entity in clicked:
                world.remove(entity, ClickedOn)
                continue
            if position != event.position:
                continue
            status = world.get(entity, Status)
            if status is not None:
                world.insert(entity, ClickedOn())
                world.info_panel.info = [
                    f"Position: {position.x}, {position.y}",
                    *status.info_panel(),
                ]
    events.clear()