"""The game loop: sets up the colony and runs every system on its schedule."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .behaviour import (
    needs_status_system,
    remotivate_system,
    seasons,
    spoilage_system,
    task_system_meander,
    task_system_playing,
    task_system_sleep,
    task_system_sleeping,
    task_system_work,
    thinking_system,
)
from .components import TILE_SIZE, Biome, Brain, Entity, GameState, HasName, MapTile, Position
from .labels import namegiving_system, names_system, status_display_system
from .mapgen import generate_map, startup
from .movement import (
    clear_unreachable_paths,
    monster_generator,
    movement_along_path,
    movement_path_generating,
    movement_random,
    movement_toward_attackable,
)
from .selection import object_finder_system, run_selection
from .tasks import task_system_chop, task_system_eat, task_system_forage, task_system_plant
from .ui import info_system, open_main_menu, show_info_panel, start_game_ui, text_system
from .world import World

System = Callable[[World], object]


@dataclass
class _Timer:
    period_ms: int
    systems: tuple[System, ...]
    in_game_only: bool
    elapsed_ms: int = 0


def _timers() -> list[_Timer]:
    return [
        _Timer(100, (movement_random,), False),
        _Timer(500, (status_display_system, thinking_system), False),
        _Timer(
            500,
            (
                task_system_eat,
                task_system_sleep,
                task_system_sleeping,
                task_system_playing,
                task_system_meander,
                task_system_work,
                task_system_forage,
                task_system_chop,
                task_system_plant,
                movement_along_path,
                spoilage_system,
            ),
            True,
        ),
        _Timer(1000, (monster_generator,), False),
        _Timer(2000, (needs_status_system, seasons), True),
        _Timer(5000, (remotivate_system,), False),
    ]


def setup_camera(world: World) -> None:
    """Point the camera at the starting area of the map."""
    world.camera.x = TILE_SIZE * 19.0
    world.camera.y = TILE_SIZE * 11.0


def remove_bad_positions(world: World) -> list[Entity]:
    """Despawn entities standing off the map or inside a wall; returns them."""
    removed = []
    for entity, position in world.query(Position, without=MapTile):
        tile = world.tiles.get(position)
        if tile is None or tile.is_wall():
            world.despawn(entity)
            removed.append(entity)
    return removed


class Game:
    """A running colony: its world and the clock that drives the systems."""

    def __init__(
        self, seed: Optional[int] = None, biome: Optional[Biome] = None, main_menu: bool = False
    ) -> None:
        self.world = World(seed=seed, biome=biome)
        self._timers = _timers()
        self._elapsed_ms = 0
        world = self.world
        generate_map(world)
        startup(world)
        setup_camera(world)
        world.window.maximized = True
        if main_menu:
            world.state = GameState.MAIN_MENU
            open_main_menu(world)
        else:
            start_game_ui(world)

    @property
    def time(self) -> float:
        """Seconds of game time elapsed."""
        return self._elapsed_ms / 1000.0

    def _every_frame(self) -> None:
        world = self.world
        in_game = world.state is GameState.IN_GAME
        namegiving_system(world)
        names_system(world)
        movement_toward_attackable(world)
        movement_path_generating(world)
        clear_unreachable_paths(world)
        remove_bad_positions(world)
        if in_game:
            object_finder_system(world)
            run_selection(world)
        info_system(world)
        show_info_panel(world)
        text_system(world)

    def tick(self, dt: float = 0.1) -> float:
        """Advance the game by dt seconds; returns the game time afterwards."""
        step = round(dt * 1000)
        if step <= 0:
            raise ValueError("dt must be at least a millisecond")
        world = self.world
        self._every_frame()
        for timer in self._timers:
            timer.elapsed_ms += step
            while timer.elapsed_ms >= timer.period_ms:
                timer.elapsed_ms -= timer.period_ms
                if timer.in_game_only and world.state is not GameState.IN_GAME:
                    continue
                for system in timer.systems:
                    system(world)
        self._elapsed_ms += step
        return self.time

    def run(self, seconds: float, dt: float = 0.1) -> int:
        """Run for the given number of seconds in steps of dt; returns the steps taken."""
        if seconds < 0:
            raise ValueError("seconds must not be negative")
        if dt <= 0:
            raise ValueError("dt must be positive")
        ticks = round(seconds / dt)
        for _ in range(ticks):
            self.tick(dt)
        return ticks


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the colony headless for a while and print where the colonists ended up."""
    parser = argparse.ArgumentParser(prog="orcfort", description=main.__doc__)
    parser.add_argument("--seconds", type=float, default=30.0, help="game time to simulate")
    parser.add_argument("--dt", type=float, default=0.1, help="length of one step in seconds")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    args = parser.parse_args(argv)
    game = Game(seed=args.seed)
    game.run(args.seconds, args.dt)
    world = game.world
    print(world.window.title)
    for entity, brain, position in world.query(Brain, Position):
        has_name = world.get(entity, HasName)
        name = has_name.name if has_name is not None else f"#{entity}"
        task = brain.task if brain.task is not None else "-"
        print(f"{name} at {position.x},{position.y}: {task}")
    return 0