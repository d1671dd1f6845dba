"""Deterministic terrain height sampling."""

from __future__ import annotations

import math
from dataclasses import dataclass

from alchimera.chunk import CHUNK_SIZE_METERS, ChunkCoord
from alchimera.seed import WorldSeed


@dataclass(frozen=True)
class TerrainConfig:
    """Height range that sampled terrain is mapped into."""

    min_height: float = -8.0
    max_height: float = 36.0


@dataclass(frozen=True)
class HeightSampler:
    """Stateless height sampler bound to a terrain configuration."""

    config: TerrainConfig = TerrainConfig()

    def sample(self, seed: WorldSeed, chunk: ChunkCoord, local_x: float, local_z: float) -> float:
        return sample_height(seed, chunk, local_x, local_z, self.config)


def sample_height(
    seed: WorldSeed,
    chunk: ChunkCoord,
    local_x: float,
    local_z: float,
    config: TerrainConfig,
) -> float:
    """Sample the terrain height at a chunk-local position."""
    world_x = chunk.x * CHUNK_SIZE_METERS + local_x
    world_z = chunk.z * CHUNK_SIZE_METERS + local_z
    broad = _signed_noise(seed, "terrain.height.broad", world_x / 32.0, world_z / 32.0)
    detail = _signed_noise(seed, "terrain.height.detail", world_x / 8.0, world_z / 8.0) * 0.25
    normalized = min(1.0, max(0.0, (broad + detail + 1.25) / 2.5))
    return config.min_height + normalized * (config.max_height - config.min_height)


def _signed_noise(seed: WorldSeed, label: str, x: float, z: float) -> float:
    hashed = seed.derive_child(label, (math.floor(x), math.floor(z)), 0).as_u64()
    unit = (hashed >> 11) / float(1 << 53)
    return unit * 2.0 - 1.0