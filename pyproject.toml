[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "alchimera"
version = "0.1.0"
description = "Deterministic procedural world generation: chunks, terrain, biomes, meshes, objects, rocks and trees"
requires-python = ">=3.10"
dependencies = []
keywords = ["procedural-generation", "terrain", "game", "deterministic", "worldgen", "biome"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
alchimera-object-viewer = "alchimera.viewer:main"

[tool.hatch.build.targets.wheel]
packages = ["alchimera"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
