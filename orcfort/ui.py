"""On-screen interface: the in-game toolbar, the info panel, hover text and the main menu."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .components import (
    ClickedOn,
    Entity,
    GameState,
    HasName,
    InGameButton,
    MainMenuOverlay,
    MenuStates,
    PlantType,
    Position,
    SelectableType,
    Status,
    ZoneType,
)
from .labels import Label
from .world import World

Color = tuple[float, float, float, float]

NORMAL_BUTTON: Color = (0.15, 0.15, 0.15, 1.0)
HOVERED_BUTTON: Color = (0.25, 0.25, 0.25, 1.0)
PRESSED_BUTTON: Color = (0.35, 0.75, 0.35, 1.0)
MENU_BUTTON_COLOR: Color = (0.65, 0.65, 0.85, 0.65)

BUTTON_BAND_BOTTOM = 30.0
BUTTON_BAND_TOP = 92.0
BUTTON_OFFSET = 100
BUTTON_SPACING = 100
BUTTON_WIDTH = 84.0
BUTTON_HEIGHT = 64.0
PANEL_LEFT = 15.0
PANEL_FIRST_LINE = 45.0
PANEL_LINE_HEIGHT = 20.0

_MENUS: tuple[tuple[str, ...], ...] = (
    ("TASKS", "FARM", "ZONE", "BUILD", "CRAFT"),
    ("BACK", "CLEAR", "CHOP", "FORAGE", "GATHER", "HUNT", "MINE"),
    ("BACK", "NOTHING", "CABBAGE", "PINE", "OAK", "CEDAR"),
    ("BACK", "NOTHING", "FISHING", "HOSPITAL", "PARTY", "MEETING"),
    ("BACK", "NOTHING", "WALL", "BED", "TABLE", "CHAIR"),
)

_HOME_CHOICES = {
    0: MenuStates.TASKS,
    1: MenuStates.FARM,
    2: MenuStates.ZONE,
    3: MenuStates.BUILD,
    4: MenuStates.CRAFT,
}

_FARM_PLANTS = {
    2: PlantType.CABBAGE,
    3: PlantType.PINE_TREE,
    4: PlantType.OAK_TREE,
    5: PlantType.CEDAR_TREE,
}

_INTERACTIONS: dict[Optional[str], tuple[str, Color]] = {
    "clicked": ("Press", PRESSED_BUTTON),
    "hovered": ("Hover", HOVERED_BUTTON),
    None: ("Button", NORMAL_BUTTON),
}


@dataclass
class UiButton:
    """A clickable button on screen."""

    text: str
    width: float
    height: float
    left: Optional[float] = None
    bottom: Optional[float] = None
    color: Color = NORMAL_BUTTON


@dataclass(frozen=True)
class _Placement:
    left: Optional[float] = None
    top: Optional[float] = None
    bottom: Optional[float] = None
    font_size: float = 18.0


@dataclass(frozen=True)
class _InfoPanelText:
    """Marks a line of the info panel."""


@dataclass(frozen=True)
class _ObjectText:
    """Marks a line describing what lies under the cursor."""


@dataclass(frozen=True)
class _MainMenuButton:
    """Marks the start button of the main menu."""


def menu_buttons(state: MenuStates) -> list[str]:
    """Labels of the toolbar buttons on a menu page; pages without buttons show home."""
    index = state.to_index()
    if index >= len(_MENUS):
        index = MenuStates.HOME.to_index()
    return list(_MENUS[index])


def start_game_ui(world: World) -> list[Entity]:
    """Rebuild the toolbar buttons for the current menu page and return them."""
    for button, _ in world.query(InGameButton):
        world.despawn_recursive(button)
    if world.menu_state.to_index() >= len(_MENUS):
        world.menu_state = MenuStates.HOME
    return [
        world.spawn(
            UiButton(
                text,
                BUTTON_WIDTH,
                BUTTON_HEIGHT,
                left=BUTTON_OFFSET + BUTTON_SPACING * float(i),
                bottom=BUTTON_BAND_BOTTOM,
                color=MENU_BUTTON_COLOR,
            ),
            InGameButton(),
        )
        for i, text in enumerate(menu_buttons(world.menu_state))
    ]


def _button_index(x: float) -> int:
    # Integer division truncating towards zero.
    return int((int(x) - BUTTON_OFFSET) / BUTTON_SPACING)


def _tasks_click(world: World, index: int) -> None:
    dragging = world.dragging
    if index == 0:
        dragging.looking_for = SelectableType.NOTHING
        world.menu_state = MenuStates.HOME
    elif index == 1:
        dragging.looking_for = SelectableType.UNSELECTING
    elif index == 2:
        dragging.looking_for = SelectableType.CHOPPABLE
    elif index == 3:
        dragging.looking_for = SelectableType.FORAGABLE
        dragging.zone_type = ZoneType.FARM
    elif index == 4:
        dragging.looking_for = SelectableType.GATHERABLE
        dragging.zone_type = ZoneType.FARM


def _farm_click(world: World, index: int) -> None:
    dragging = world.dragging
    if index == 0:
        dragging.looking_for = SelectableType.NOTHING
        world.menu_state = MenuStates.HOME
    elif index == 1:
        dragging.looking_for = SelectableType.UNZONING
    elif index in _FARM_PLANTS:
        dragging.looking_for = SelectableType.ZONING
        dragging.zone_type = ZoneType.FARM
        dragging.plant_type = _FARM_PLANTS[index]


def game_ui_click(world: World, cursor: Optional[tuple[float, float]]) -> bool:
    """Handle a left click on the toolbar band; returns whether the band was hit."""
    if cursor is None:
        return False
    x, y = cursor
    if not BUTTON_BAND_BOTTOM < y < BUTTON_BAND_TOP:
        return False
    index = _button_index(x)
    state = world.menu_state
    if state is MenuStates.HOME:
        if index in _HOME_CHOICES:
            world.menu_state = _HOME_CHOICES[index]
    elif state is MenuStates.TASKS:
        _tasks_click(world, index)
    elif state is MenuStates.FARM:
        _farm_click(world, index)
    else:
        world.menu_state = MenuStates.HOME
    start_game_ui(world)
    return True


def info_system(world: World) -> Optional[Entity]:
    """Show the last clicked unit in the info panel and unclick the others."""
    units = world.query(Position, Status, ClickedOn)
    if not units:
        return None
    entity, position, status, _ = units[-1]
    has_name = world.get(entity, HasName)
    if has_name is not None:
        world.info_panel.name = has_name.name
    world.info_panel.info = [f"Position: {position.x}, {position.y}", *status.info_panel()]
    for other, *_ in units[:-1]:
        world.remove(other, ClickedOn)
    return entity


def show_info_panel(world: World) -> list[str]:
    """Redraw the info panel: the name, then one line per entry; returns the lines."""
    for text, _ in world.query(_InfoPanelText):
        world.despawn(text)
    panel = world.info_panel
    world.spawn(
        Label(panel.name),
        _Placement(left=PANEL_LEFT, top=PANEL_LEFT, font_size=24.0),
        _InfoPanelText(),
    )
    for i, line in enumerate(panel.info):
        world.spawn(
            Label(line),
            _Placement(left=PANEL_LEFT, top=PANEL_FIRST_LINE + i * PANEL_LINE_HEIGHT),
            _InfoPanelText(),
        )
    return [panel.name, *panel.info]


def text_system(world: World) -> list[str]:
    """Redraw the description of what lies under the cursor; returns the lines."""
    for text, _ in world.query(_ObjectText):
        world.despawn(text)
    lines = list(world.selected_object.info)
    for i, line in enumerate(lines):
        world.spawn(
            Label(line),
            _Placement(left=PANEL_LEFT, bottom=PANEL_FIRST_LINE + i * PANEL_LINE_HEIGHT),
            _ObjectText(),
        )
    return lines


def button_system(world: World, interaction: Optional[str]) -> GameState:
    """Update the main menu button for "clicked", "hovered" or no interaction.

    A click starts the game. Returns the game state afterwards.
    """
    try:
        text, color = _INTERACTIONS[interaction]
    except KeyError:
        raise ValueError(f"unknown interaction: {interaction!r}") from None
    if world.state is not GameState.MAIN_MENU:
        return world.state
    buttons = world.query(UiButton, _MainMenuButton)
    for _, button, _ in buttons:
        button.text = text
        button.color = color
    if interaction == "clicked" and buttons:
        world.state = GameState.IN_GAME
        close_main_menu(world)
        start_game_ui(world)
    return world.state


def open_main_menu(world: World) -> Entity:
    """Show the main menu overlay with its welcome text and start button."""
    overlay = world.spawn(MainMenuOverlay(), _Placement(left=0.0, top=0.0))
    for text in ("WELCOME TO", "COLONY", "Get Started"):
        world.add_child(overlay, world.spawn(Label(text), _Placement()))
    button = world.spawn(UiButton("Start Game", 100.0, 30.0), _MainMenuButton())
    world.add_child(overlay, button)
    return overlay


def close_main_menu(world: World) -> None:
    """Remove the main menu overlay with everything on it."""
    for overlay, _ in world.query(MainMenuOverlay):
        world.despawn_recursive(overlay)