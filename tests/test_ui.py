import pytest

from orcfort import ui
from orcfort.components import (
    ClickedOn,
    GameState,
    HasName,
    InGameButton,
    MainMenuOverlay,
    MenuStates,
    NeedsFood,
    PlantType,
    Position,
    SelectableType,
    Status,
)
from orcfort.world import World


def _button_texts(world):
    return [button.text for _, button, _ in world.query(ui.UiButton, InGameButton)]


def test_home_menu_buttons():
    assert ui.menu_buttons(MenuStates.HOME) == ["TASKS", "FARM", "ZONE", "BUILD", "CRAFT"]


@pytest.mark.parametrize(
    "state", [MenuStates.TASKS, MenuStates.FARM, MenuStates.ZONE, MenuStates.BUILD]
)
def test_sub_menus_start_with_back(state):
    assert ui.menu_buttons(state)[0] == "BACK"


def test_craft_menu_falls_back_to_home():
    assert ui.menu_buttons(MenuStates.CRAFT) == ui.menu_buttons(MenuStates.HOME)


def test_start_game_ui_does_not_duplicate():
    world = World()
    first = ui.start_game_ui(world)
    second = ui.start_game_ui(world)
    assert len(first) == len(second) == len(ui.menu_buttons(MenuStates.HOME))
    assert len(world) == len(second)
    assert not any(world.contains(entity) for entity in first)


def test_start_game_ui_spacing():
    world = World()
    ui.start_game_ui(world)
    lefts = sorted(button.left for _, button, _ in world.query(ui.UiButton, InGameButton))
    assert all(b - a == ui.BUTTON_SPACING for a, b in zip(lefts, lefts[1:]))


def test_start_game_ui_resets_craft_page():
    world = World()
    world.menu_state = MenuStates.CRAFT
    ui.start_game_ui(world)
    assert world.menu_state is MenuStates.HOME


def test_click_opens_tasks_menu():
    world = World()
    assert ui.game_ui_click(world, (150.0, 50.0)) is True
    assert world.menu_state is MenuStates.TASKS
    assert _button_texts(world) == ui.menu_buttons(MenuStates.TASKS)


def test_click_index_truncates_towards_zero():
    world = World()
    ui.game_ui_click(world, (50.0, 50.0))
    assert world.menu_state is MenuStates.TASKS


def test_tasks_menu_choices():
    world = World()
    world.menu_state = MenuStates.TASKS
    ui.game_ui_click(world, (350.0, 50.0))
    assert world.dragging.looking_for is SelectableType.CHOPPABLE
    ui.game_ui_click(world, (150.0, 50.0))
    assert world.dragging.looking_for is SelectableType.NOTHING
    assert world.menu_state is MenuStates.HOME


def test_farm_menu_sets_plant():
    world = World()
    world.menu_state = MenuStates.FARM
    ui.game_ui_click(world, (550.0, 50.0))
    assert world.dragging.looking_for is SelectableType.ZONING
    assert world.dragging.plant_type is PlantType.OAK_TREE


def test_zone_menu_returns_home():
    world = World()
    world.menu_state = MenuStates.ZONE
    ui.game_ui_click(world, (950.0, 50.0))
    assert world.menu_state is MenuStates.HOME


@pytest.mark.parametrize("cursor", [None, (150.0, 10.0), (150.0, 100.0)])
def test_click_outside_band_changes_nothing(cursor):
    world = World()
    assert ui.game_ui_click(world, cursor) is False
    assert world.menu_state is MenuStates.HOME
    assert len(world) == 0


def test_info_system_keeps_last_clicked():
    world = World()
    first = world.spawn(Position(1, 1), Status(), ClickedOn())
    status = Status(needs_food=NeedsFood(current=50.0, max=100.0, rate=0.1))
    second = world.spawn(Position(3, 4), status, ClickedOn(), HasName("Eve"))
    assert ui.info_system(world) == second
    assert world.info_panel.name == "Eve"
    assert world.info_panel.info[0].startswith("Position:")
    assert world.info_panel.info[1:] == status.info_panel()
    assert not world.has(first, ClickedOn)
    assert world.has(second, ClickedOn)


def test_info_system_without_clicks():
    world = World()
    world.spawn(Position(1, 1), Status())
    assert ui.info_system(world) is None
    assert world.info_panel.info == []


def test_show_info_panel_replaces_lines():
    world = World()
    world.info_panel.name = "Eve"
    world.info_panel.info = ["a", "b"]
    assert ui.show_info_panel(world) == ["Eve", "a", "b"]
    count = len(world)
    ui.show_info_panel(world)
    assert len(world) == count == 3


def test_text_system_replaces_lines():
    world = World()
    world.selected_object.info = ["x", "y"]
    assert ui.text_system(world) == ["x", "y"]
    world.selected_object.info = []
    assert ui.text_system(world) == []
    assert len(world) == 0


def test_main_menu_open_and_close():
    world = World()
    overlay = ui.open_main_menu(world)
    assert world.has(overlay, MainMenuOverlay)
    assert len(world.children(overlay)) == 4
    ui.close_main_menu(world)
    assert len(world) == 0


def test_button_hover():
    world = World()
    world.state = GameState.MAIN_MENU
    ui.open_main_menu(world)
    assert ui.button_system(world, "hovered") is GameState.MAIN_MENU
    (_, button, _), = world.query(ui.UiButton, ui._MainMenuButton)
    assert button.text == "Hover"
    assert button.color == ui.HOVERED_BUTTON
    ui.button_system(world, None)
    assert button.text == "Button"
    assert button.color == ui.NORMAL_BUTTON


def test_button_click_starts_game():
    world = World()
    world.state = GameState.MAIN_MENU
    ui.open_main_menu(world)
    assert ui.button_system(world, "clicked") is GameState.IN_GAME
    assert world.query(MainMenuOverlay) == []
    assert _button_texts(world) == ui.menu_buttons(MenuStates.HOME)


def test_button_ignored_outside_main_menu():
    world = World()
    ui.open_main_menu(world)
    assert ui.button_system(world, "clicked") is GameState.IN_GAME
    (_, button, _), = world.query(ui.UiButton, ui._MainMenuButton)
    assert button.text == "Start Game"


def test_button_rejects_unknown_interaction():
    world = World()
    with pytest.raises(ValueError):
        ui.button_system(world, "dragged")