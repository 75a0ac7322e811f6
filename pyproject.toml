[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pineapple"
version = "0.1.0"
description = "A small top-down action game with a tile map, enemies, quests and a level editor state"
requires-python = ">=3.10"
keywords = ["game", "pygame", "top-down", "tile-map", "pathfinding"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Role-Playing",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
pineapple = "pineapple.app:main"

[tool.hatch.build.targets.wheel]
packages = ["pineapple"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
