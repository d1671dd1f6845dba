"""Deterministic biome sampling for terrain generation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from alchimera.chunk import CHUNK_SIZE_METERS, ChunkCoord
from alchimera.seed import WorldSeed


class Biome(Enum):
    """Biomes available to the terrain and object generators."""

    GRASSLAND = "grassland"
    FOREST = "forest"
    ROCKY_HIGHLAND = "rocky_highland"
    RIVER_VALLEY = "river_valley"

    @classmethod
    def initial_biomes(cls) -> tuple[Biome, ...]:
        return (cls.GRASSLAND, cls.FOREST, cls.ROCKY_HIGHLAND, cls.RIVER_VALLEY)


@dataclass(frozen=True)
class BiomeSampler:
    """Stateless deterministic biome sampler."""

    def sample(self, seed: WorldSeed, chunk: ChunkCoord, local_x: float, local_z: float) -> Biome:
        return sample_biome(seed, chunk, local_x, local_z)


def sample_biome(seed: WorldSeed, chunk: ChunkCoord, local_x: float, local_z: float) -> Biome:
    """Return the biome at a chunk-local position."""
    world_x = chunk.x * CHUNK_SIZE_METERS + local_x
    world_z = chunk.z * CHUNK_SIZE_METERS + local_z
    valley_band = abs(world_x - world_z)
    valley_noise = abs(_signed_noise(seed, "biome.river", world_x, world_z))

    if valley_band <= 4.0 or valley_noise <= 0.08:
        return Biome.RIVER_VALLEY

    biome_noise = _signed_noise(seed, "biome.primary", world_x * 0.5, world_z * 0.5)
    if biome_noise < -0.25:
        return Biome.GRASSLAND
    if biome_noise < 0.35:
        return Biome.FOREST
    return Biome.ROCKY_HIGHLAND


def _signed_noise(seed: WorldSeed, label: str, world_x: float, world_z: float) -> float:
    cell = (math.floor(world_x / 8.0), math.floor(world_z / 8.0))
    child = seed.derive_child(label, cell, 0).as_u64()
    unit = (child >> 11) / float(1 << 53)
    return unit * 2.0 - 1.0