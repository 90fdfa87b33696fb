"""Components, enums, resources and constants of the colony simulation."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

MAP_WIDTH = 58
MAP_LENGTH = 30

VIEWAREA_WIDTH = 76
VIEWAREA_HEIGHT = 40
TILE_SIZE = 32.0

SPRITE_SHEET_COLUMNS = 64
SPRITE_SHEET_ROWS = 95

Entity = int


def _sheet_index(row: int, col: int) -> int:
    return row * SPRITE_SHEET_COLUMNS + col


class _Named(Enum):
    """Enum whose text form is the member's display name."""

    def __str__(self) -> str:
        return self.value


@dataclass
class Transform:
    """World-space placement of a sprite."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    scale: tuple[float, float, float] = (1.0, 1.0, 1.0)


@dataclass(frozen=True)
class Position:
    """A tile coordinate."""

    x: int
    y: int
    z: int = 0

    def to_transform(self) -> Transform:
        return Transform(self.x * TILE_SIZE, self.y * TILE_SIZE, float(self.z))

    def to_transform_layer(self, layer: float) -> Transform:
        return Transform(self.x * TILE_SIZE, self.y * TILE_SIZE, self.z + layer)

    def distance(self, other: Position) -> int:
        """Euclidean distance on the x/y plane, truncated to an integer."""
        return math.isqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2)


class GameState(_Named):
    IN_GAME = "InGame"
    MAIN_MENU = "MainMenu"
    PAUSED = "Paused"


class MenuStates(Enum):
    """Menu pages, valued in the order they are displayed."""

    HOME = 0
    TASKS = 1
    FARM = 2
    ZONE = 3
    BUILD = 4
    CRAFT = 5

    def to_index(self) -> int:
        return self.value


class ActorType(_Named):
    DWARF = "Dwarf"
    MAN_CRAZY = "ManCrazy"
    ELF = "Elf"
    TEEN = "Teen"
    RANGER = "Ranger"
    WOMAN = "Woman"
    MAN = "Man"
    MAN2 = "Man2"
    MAN_CAVE = "ManCave"
    PIG = "Pig"
    RAT = "Rat"

    def sprite_row_and_col(self) -> tuple[int, int]:
        return _ACTOR_SPRITES[self]

    def sprite_index(self) -> int:
        return _sheet_index(*self.sprite_row_and_col())


_ACTOR_SPRITES = {
    ActorType.DWARF: (59, 13),
    ActorType.MAN_CRAZY: (59, 15),
    ActorType.ELF: (59, 18),
    ActorType.TEEN: (60, 11),
    ActorType.RANGER: (59, 22),
    ActorType.WOMAN: (60, 48),
    ActorType.MAN: (66, 46),
    ActorType.MAN2: (60, 21),
    ActorType.MAN_CAVE: (60, 25),
    ActorType.PIG: (64, 0),
    ActorType.RAT: (64, 19),
}


class TileType(_Named):
    GRASS = "Grass"
    DIRT = "Dirt"
    GRAVEL = "Gravel"
    SAND = "Sand"
    STONE = "Stone"
    WATER = "Water"
    WALL_BRICK = "WallBrick"
    WALL_GAME = "WallGame"
    WALL_METAL = "WallMetal"
    WALL_STONE = "WallStone"
    WALL_WOOD = "WallWood"

    def sprite_row_and_col(self) -> tuple[int, int]:
        return _TILE_SPRITES[self]

    def sprite_index(self) -> int:
        return _sheet_index(*self.sprite_row_and_col())

    def is_wall(self) -> bool:
        return self in _WALLS


_TILE_SPRITES = {
    TileType.GRASS: (9, 11),
    TileType.DIRT: (4, 1),
    TileType.GRAVEL: (7, 42),
    TileType.SAND: (7, 42),
    TileType.STONE: (3, 61),
    TileType.WATER: (5, 12),
    TileType.WALL_GAME: (7, 20),
    TileType.WALL_STONE: (7, 21),
    TileType.WALL_WOOD: (7, 22),
    TileType.WALL_BRICK: (4, 10),
    TileType.WALL_METAL: (7, 24),
}

_WALLS = frozenset(
    {
        TileType.WALL_GAME,
        TileType.WALL_STONE,
        TileType.WALL_WOOD,
        TileType.WALL_BRICK,
        TileType.WALL_METAL,
    }
)


@dataclass(frozen=True)
class PauseOverlay:
    """Marks the pause screen overlay."""


@dataclass(frozen=True)
class MainMenuOverlay:
    """Marks the main menu overlay."""


@dataclass
class Food:
    nutrition: float = 10.0
    spoilage: float = 1.0
    spoilage_rate: float = 0.03
    name: str = "Food"

    def hover_note(self) -> str:
        return f"Spoilage: {self.spoilage * 100.0:.2f}%"


@dataclass
class HasName:
    name: str


@dataclass(frozen=True)
class IsName:
    """Marks a floating name label."""


@dataclass(frozen=True)
class HasNameShown:
    """Marks an entity whose name label has been spawned."""


@dataclass(frozen=True)
class TextName:
    """Marks the text label shown above a unit."""


@dataclass(frozen=True)
class HighlightBox:
    """Marks a highlight box drawn over a selected entity."""


@dataclass(frozen=True)
class Highlighted:
    """Marks an entity inside the current drag selection."""


@dataclass(frozen=True)
class ClickedOn:
    """Marks the unit whose details are shown in the info panel."""


@dataclass(frozen=True)
class InGameButton:
    """Marks an in-game toolbar button."""


@dataclass
class _Need:
    current: float
    max: float
    rate: float

    @property
    def percent(self) -> float:
        return self.current / self.max * 100.0


class NeedsFood(_Need):
    """Hunger level."""


class NeedsEntertainment(_Need):
    """Entertainment level."""


class NeedsSleep(_Need):
    """Rest level."""


@dataclass
class Status:
    needs_food: Optional[NeedsFood] = None
    needs_entertainment: Optional[NeedsEntertainment] = None
    needs_sleep: Optional[NeedsSleep] = None
    index: int = 0
    crisis: Optional[str] = None
    danger: Optional[str] = None
    injured: bool = False

    def info_panel(self) -> list[str]:
        lines = []
        if self.needs_food is not None:
            lines.append(f"Food: {self.needs_food.percent:.2f}%")
        if self.needs_entertainment is not None:
            lines.append(f"Entertainment: {self.needs_entertainment.percent:.2f}%")
        if self.needs_sleep is not None:
            lines.append(f"Sleep: {self.needs_sleep.percent:.2f}%")
        return lines


class ZoneType(_Named):
    FARM = "Farm"
    PASTURE = "Pasture"
    STORAGE = "Storage"
    FISHING = "Fishing"
    HOSPITAL = "Hospital"
    PARTY = "Party"
    MEETING = "Meeting"


class Task(_Named):
    """Tasks, listed in order of priority; the later ones are forms of work."""

    CRISIS = "Crisis"
    FLEE = "Flee"
    FIGHT = "Fight"
    EAT = "Eat"
    HOSPITAL = "Hospital"
    SLEEP = "Sleep"
    SLEEPING = "Sleeping"
    PLAY = "Play"
    ORDER = "Order"
    WORK = "Work"
    MEANDER = "Meander"
    IDLE = "Idle"
    DOCTOR = "Doctor"
    FORAGE = "Forage"
    PLANT = "Plant"
    HARVEST = "Harvest"
    MINE = "Mine"
    CHOP = "Chop"
    CONSTRUCT = "Construct"
    HUNT = "Hunt"
    MILK = "Milk"
    COOK = "Cook"
    FISH = "Fish"
    CRAFT = "Craft"
    CLEAN = "Clean"
    HAUL = "Haul"


class Motivation(_Named):
    """Motivations, listed in order of priority."""

    CRISIS = "Crisis"
    ORDER = "Order"
    DANGER = "Danger"
    HUNGER = "Hunger"
    THIRST = "Thirst"
    TIRED = "Tired"
    BORED = "Bored"
    INJURED = "Injured"
    SICK = "Sick"
    HAPPY = "Happy"
    SAD = "Sad"
    ANGRY = "Angry"
    LONELY = "Lonely"
    LOVE = "Love"
    FEAR = "Fear"
    HATE = "Hate"
    WORK = "Work"
    MEANDER = "Meander"
    IDLE = "Idle"


@dataclass
class Brain:
    motivation: Optional[Motivation] = None
    task: Optional[Task] = None
    order: Optional[str] = None

    def remotivate(self) -> None:
        """Forget the current motivation, task and order."""
        self.motivation = None
        self.task = None
        self.order = None


@dataclass(frozen=True)
class Foragable:
    """Marks a plant that can be foraged."""


@dataclass(frozen=True)
class Choppable:
    """Marks a plant that can be chopped."""


@dataclass(frozen=True)
class GiveMeAName:
    """Marks a unit still waiting for a name."""


class ItemType(_Named):
    CABBAGE = "Cabbage"
    CARROT = "Carrot"
    CEDAR_LOG = "CedarLog"
    PINE_LOG = "PineLog"
    OAK_LOG = "OakLog"

    def sprite_index(self) -> int:
        return _ITEM_SPRITES[self]

    def nutrition(self) -> float:
        return 10.0 if self in _EDIBLE_ITEMS else 0.0

    def spoilage_rate(self) -> float:
        return 0.1 if self in _EDIBLE_ITEMS else 0.01


_ITEM_SPRITES = {
    ItemType.CABBAGE: _sheet_index(94, 33),
    ItemType.CARROT: _sheet_index(94, 24),
    ItemType.CEDAR_LOG: _sheet_index(94, 30),
    ItemType.PINE_LOG: _sheet_index(94, 30),
    ItemType.OAK_LOG: _sheet_index(94, 30),
}

_EDIBLE_ITEMS = frozenset({ItemType.CABBAGE, ItemType.CARROT})


class ForageType(_Named):
    ONCE = "Once"
    REPEAT = "Repeat"


class PlantType(_Named):
    ALOE = "Aloe"
    AZALEA = "Azalea"
    BUSH = "Bush"
    CABBAGE = "Cabbage"
    CACTUS_ROUND = "CactusRound"
    CACTUS_UP = "CactusUp"
    CARROT = "Carrot"
    CEDAR_TREE = "CedarTree"
    FLOWER_BUSH = "FlowerBush"
    PINE_TREE = "PineTree"
    OAK_TREE = "OakTree"
    THORN_BUSH = "ThornBush"
    VINE = "Vine"
    WEED = "Weed"

    def is_edible(self) -> bool:
        return self is PlantType.CABBAGE

    def sprite_row_and_col(self) -> tuple[int, int]:
        return _PLANT_SPRITES.get(self, (67, 57))

    def sprite_index(self) -> int:
        return _sheet_index(*self.sprite_row_and_col())

    def growth_speed(self) -> float:
        return 0.001 if self is PlantType.CABBAGE else 0.01

    def is_forageable(self) -> tuple[Optional[ItemType], int, ForageType]:
        item = _FORAGE_ITEMS.get(self)
        return (item, 1 if item else 0, ForageType.ONCE)

    def is_choppable(self) -> tuple[Optional[ItemType], int]:
        item = _CHOP_ITEMS.get(self)
        return (item, 1 if item else 0)


_PLANT_SPRITES = {
    PlantType.CABBAGE: (94, 32),
    PlantType.CARROT: (94, 31),
    PlantType.CEDAR_TREE: (13, 15),
    PlantType.PINE_TREE: (13, 13),
    PlantType.OAK_TREE: (13, 14),
}

_FORAGE_ITEMS = {
    PlantType.CABBAGE: ItemType.CABBAGE,
    PlantType.CARROT: ItemType.CARROT,
}

_CHOP_ITEMS = {
    PlantType.PINE_TREE: ItemType.PINE_LOG,
    PlantType.OAK_TREE: ItemType.OAK_LOG,
    PlantType.CEDAR_TREE: ItemType.CEDAR_LOG,
}


@dataclass
class Plant:
    growth: float
    plant_type: PlantType

    def hover_note(self) -> str:
        return f"{self.plant_type} Growth: {self.growth * 100.0:.2f}%"


@dataclass(frozen=True)
class WorkMarker:
    """Marks the "X" drawn over a work target."""


@dataclass(frozen=True)
class ZoneMarker:
    """Marks the tint drawn over a zoned tile."""


@dataclass
class Zone:
    zone_type: ZoneType = ZoneType.FARM
    plant_type: PlantType = PlantType.CABBAGE
    material_delivered: bool = False


@dataclass
class NearestEntity:
    entity: Entity
    position: Position
    distance: int


class SelectableType(_Named):
    CHOPPABLE = "Choppable"
    CONSTRUCTABLE = "Constructable"
    FORAGABLE = "Foragable"
    GATHERABLE = "Gatherable"
    HARVESTABLE = "Harvestable"
    MINEABLE = "Mineable"
    NOTHING = "Nothing"
    UNSELECTING = "Unselecting"
    UNZONING = "Unzoning"
    ZONING = "Zoning"


@dataclass(frozen=True)
class WorkTarget:
    """Marks an entity chosen as a work target."""


@dataclass(frozen=True)
class Bed:
    """Marks a bed."""


@dataclass(frozen=True)
class MapTile:
    """Marks a map tile."""


@dataclass(frozen=True)
class MoveRandom:
    """Marks an entity that wanders randomly."""


@dataclass(frozen=True)
class MonsterGenerator:
    """Marks a monster spawner."""


@dataclass
class GeneratedBy:
    entity: Entity


@dataclass
class Targeting:
    target: Entity


@dataclass
class Pathing:
    path: list[Position] = field(default_factory=list)
    destination: Position = Position(0, 0, 0)
    unreachable: bool = False


@dataclass(frozen=True)
class MoveTowardsTarget:
    """Marks an entity that moves towards its target."""


@dataclass(frozen=True)
class MoveTowardsNearestAttackable:
    """Marks an entity that hunts the nearest attackable entity."""


@dataclass(frozen=True)
class Attackable:
    """Marks an entity that can be attacked."""


@dataclass
class SizeXYZ:
    width: float
    height: float
    depth: float

    @classmethod
    def cube(cls, x: float) -> SizeXYZ:
        return cls(x, x, x)

    @classmethod
    def flat(cls, x: float) -> SizeXYZ:
        return cls(x, x, 0.1)

    @classmethod
    def flat_2(cls, x: float) -> SizeXYZ:
        return cls(x, x, 1.0)


@dataclass(frozen=True)
class Logs:
    """Marks a pile of logs."""


@dataclass
class Biome:
    plants: list[PlantType]
    tiles: list[TileType]


def starting_biome() -> Biome:
    """The forest biome the map starts with."""
    return Biome(
        plants=[
            PlantType.CABBAGE,
            *[PlantType.PINE_TREE] * 5,
            PlantType.CEDAR_TREE,
            PlantType.THORN_BUSH,
            PlantType.WEED,
            PlantType.CACTUS_ROUND,
        ],
        tiles=[*[TileType.GRASS] * 11, TileType.DIRT, TileType.GRAVEL],
    )


@dataclass
class Dragging:
    dragging: bool = False
    start_position: Optional[Position] = None
    looking_for: SelectableType = SelectableType.FORAGABLE
    zone_type: ZoneType = ZoneType.FARM
    plant_type: PlantType = PlantType.CABBAGE


@dataclass
class SelectedObjectInformation:
    info: list[str] = field(default_factory=list)


@dataclass
class InfoPanelInformation:
    info: list[str] = field(default_factory=list)
    name: str = ""