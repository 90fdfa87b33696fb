import pytest

from orcfort.components import GameState, PauseOverlay
from orcfort.controls import (
    CAMERA_SPEED,
    MAX_ZOOM,
    MIN_ZOOM,
    keyboard_input,
    on_pause,
    on_unpause,
    scrollwheel_input,
)
from orcfort.world import World


def test_space_pauses_and_unpauses():
    world = World(seed=1)
    keyboard_input(world, just_pressed={"Space"})
    assert world.state is GameState.PAUSED
    assert len(world.query(PauseOverlay)) == 1
    keyboard_input(world, just_pressed={"Space"})
    assert world.state is GameState.IN_GAME
    assert world.query(PauseOverlay) == []


def test_space_in_main_menu_does_nothing():
    world = World(seed=1)
    world.state = GameState.MAIN_MENU
    keyboard_input(world, just_pressed={"Space"})
    assert world.state is GameState.MAIN_MENU
    assert world.query(PauseOverlay) == []


@pytest.mark.parametrize(
    "key, dx, dy",
    [
        ("Up", 0, 1),
        ("W", 0, 1),
        ("Down", 0, -1),
        ("A", -1, 0),
        ("Right", 1, 0),
    ],
)
def test_keys_pan_camera(key, dx, dy):
    world = World(seed=1)
    keyboard_input(world, pressed={key})
    assert (world.camera.x, world.camera.y) == (dx * CAMERA_SPEED, dy * CAMERA_SPEED)


def test_up_wins_over_left():
    world = World(seed=1)
    keyboard_input(world, pressed={"Up", "Left"})
    assert world.camera.x == 0.0
    assert world.camera.y == CAMERA_SPEED


def test_scroll_zooms_in_steps():
    world = World(seed=1)
    zoom = scrollwheel_input(world, [1.0, 2.0])
    assert zoom == pytest.approx(1.2)
    assert world.camera.scale == zoom
    assert scrollwheel_input(world, [-1.0]) == pytest.approx(1.1)


def test_scroll_is_clamped():
    world = World(seed=1)
    assert scrollwheel_input(world, [1.0] * 20) == MAX_ZOOM
    assert scrollwheel_input(world, [-1.0] * 40) == MIN_ZOOM


def test_zero_scroll_keeps_zoom():
    world = World(seed=1)
    assert scrollwheel_input(world, [0.0, 0.0]) == 1.0


def test_unpause_removes_all_overlays():
    world = World(seed=1)
    first = on_pause(world)
    second = on_pause(world)
    assert {e for e, _ in world.query(PauseOverlay)} == {first, second}
    on_unpause(world)
    assert not world.contains(first)
    assert not world.contains(second)