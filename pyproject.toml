[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "orcfort"
version = "0.1.0"
description = "A headless colony simulation: settlers forage, chop, plant, eat and sleep on a tile map."
requires-python = ">=3.10"
dependencies = []
keywords = ["colony", "simulation", "game", "entity-component", "pathfinding"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
orcfort = "orcfort.game:main"

[tool.hatch.build.targets.wheel]
packages = ["orcfort"]

[tool.pytest.ini_options]
addopts = "-ra"
