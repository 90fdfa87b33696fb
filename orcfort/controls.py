"""Keyboard and scroll-wheel controls, and entering or leaving the pause screen."""

from __future__ import annotations

from typing import Collection, Iterable

from .components import GameState, PauseOverlay
from .world import World

CAMERA_SPEED = 16.0
ZOOM_STEP = 0.1
MIN_ZOOM = 0.5
MAX_ZOOM = 1.5

PAUSE_KEY = "Space"
_UP_KEYS = frozenset({"Up", "W"})
_DOWN_KEYS = frozenset({"Down", "S"})
_LEFT_KEYS = frozenset({"Left", "A"})
_RIGHT_KEYS = frozenset({"Right", "D"})


def on_pause(world: World) -> int:
    """Darken the screen with a pause overlay and return it."""
    return world.spawn(PauseOverlay())


def on_unpause(world: World) -> None:
    """Remove every pause overlay."""
    for overlay, _ in world.query(PauseOverlay):
        world.despawn(overlay)


def keyboard_input(
    world: World, just_pressed: Collection[str] = (), pressed: Collection[str] = ()
) -> None:
    """Toggle pause on Space and pan the camera with the arrow or WASD keys."""
    if PAUSE_KEY in just_pressed:
        if world.state is GameState.IN_GAME:
            world.state = GameState.PAUSED
            on_pause(world)
        elif world.state is GameState.PAUSED:
            world.state = GameState.IN_GAME
            on_unpause(world)
    held = set(pressed)
    camera = world.camera
    if held & _UP_KEYS:
        camera.y += CAMERA_SPEED
    elif held & _DOWN_KEYS:
        camera.y -= CAMERA_SPEED
    elif held & _LEFT_KEYS:
        camera.x -= CAMERA_SPEED
    elif held & _RIGHT_KEYS:
        camera.x += CAMERA_SPEED


def scrollwheel_input(world: World, deltas: Iterable[float] = ()) -> float:
    """Zoom by one step per wheel notch, kept within bounds; returns the new zoom."""
    zoom = world.camera.scale
    for delta in deltas:
        if delta > 0.0:
            zoom += ZOOM_STEP
        elif delta < 0.0:
            zoom -= ZOOM_STEP
    zoom = max(MIN_ZOOM, min(MAX_ZOOM, zoom))
    world.camera.scale = zoom
    return zoom