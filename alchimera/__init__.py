"""Deterministic procedural world generation: chunks, terrain, biomes, meshes, objects, rocks and trees."""

__version__ = "0.1.0"