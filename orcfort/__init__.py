"""A headless colony simulation on a tile map, with settlers driven by needs and tasks."""

__version__ = "0.1.0"