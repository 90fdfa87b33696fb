# orcfort

A small colony simulation on a tile map. A handful of settlers live on a
randomly generated map of grass, dirt and gravel, bordered by walls, among
wild plants that grow, ripen and sometimes die back. Each settler has needs
(food, sleep, entertainment) that drain over time; a simple brain picks a
motivation and a task from them, and the settler then forages, chops marked
trees, plants farm zones, eats, sleeps or wanders about. A monster generator
spawns a rat that finds a path toward the nearest settler.

The whole game runs headless: the world is a small entity and component
store (`orcfort.world.World`), and every system is a plain function over it.

## Installing

```
pip install .
```

## Running

```
orcfort
```

This builds a world, simulates it for a while and prints the window title,
then one line per settler with its name, position and current task.
Options:

- `--seconds` game time to simulate (default 30)
- `--dt` length of one step in seconds (default 0.1)
- `--seed` random seed, for a repeatable run

## Using it as a library

```python
from orcfort.game import Game

game = Game(seed=1)
game.run(60.0, 0.1)   # sixty seconds of game time in steps of a tenth of a second
print(game.time)      # 60.0
```

`Game(seed=None, biome=None, main_menu=False)` generates the map, spawns
the settlers, the monster generator and the plants, and either shows the
in-game toolbar or, with `main_menu=True`, starts on the main menu.
`Game.tick(dt)` advances one step; systems run every step or on their own
timers (every 0.1, 0.5, 1, 2 and 5 seconds), and the work and need systems
only while the game is not paused.

The pieces can also be used on their own:

- `orcfort.components` holds the components, enums and resources:
  `Position`, `Status`, `Brain`, `Plant`, `PlantType`, `TileType`, `Task`,
  `Motivation`, `Zone`, `Dragging`, `starting_biome()` and the map
  constants `MAP_WIDTH`, `MAP_LENGTH` and `TILE_SIZE`.
- `orcfort.world` has `World`, the entity store (`spawn`, `insert`,
  `remove`, `get`, `has`, `query`, `despawn`, `despawn_recursive`,
  `add_child`, `children`, `parent`), which also carries the shared
  resources: tile map, game state, menu page, camera, window, selection
  and the random generator.
- `orcfort.mapgen` builds the map (`generate_map`, `update_map_tiles`)
  and the first settlers and plants (`startup`).
- `orcfort.movement` holds A* path finding (`find_path`) and the systems
  that move entities along paths, at random, or towards prey, plus
  `monster_generator`.
- `orcfort.tasks` holds chopping, foraging, planting and eating;
  `orcfort.behaviour` holds choosing motivations and tasks
  (`choose_motivation`, `thinking_system`), draining needs, sleeping,
  playing, wandering, plant growth (`seasons`) and food spoilage.
- `orcfort.labels` gives settlers names and cycles the text shown above
  them (`status_lines`, `status_display_system`).
- `orcfort.selection`, `orcfort.controls` and `orcfort.ui` model input:
  mouse clicks and drag selection given as cursor coordinates, keys given
  by name (`"Space"`, `"W"`, `"Up"`, ...), scroll-wheel deltas, the
  in-game toolbar menus, the info panel and the main menu.

## What it does not do

There is no window, drawing or sound: the camera, window, buttons, labels
and overlays are plain data in the world, and input has to be passed in by
the caller. The `orcfort` command only simulates and prints a summary; it
is not an interactive game. A game cannot be saved or loaded.

## Running the tests

```
pip install .[test]
pytest
```