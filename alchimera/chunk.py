"""Chunk coordinate math on the X/Z plane."""

from __future__ import annotations

import math
from dataclasses import dataclass

CHUNK_SIZE_METERS = 64.0
"""Width and depth of a generation chunk in world meters."""

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def _floor_i32(value: float) -> int:
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return _I32_MAX if value > 0 else _I32_MIN
    return max(_I32_MIN, min(_I32_MAX, math.floor(value)))


@dataclass(frozen=True)
class ChunkWorldBounds:
    """World-space bounds of a chunk, inclusive on the minimum, exclusive on the maximum."""

    min_x: float
    min_z: float
    max_x: float
    max_z: float


@dataclass(frozen=True)
class ChunkCoord:
    """Integer coordinate of a world-generation chunk."""

    x: int
    z: int

    @classmethod
    def from_world_position(cls, x: float, z: float) -> ChunkCoord:
        """Map a world position to its chunk, flooring so that negative positions go down."""
        return cls(_floor_i32(x / CHUNK_SIZE_METERS), _floor_i32(z / CHUNK_SIZE_METERS))

    def world_bounds(self) -> ChunkWorldBounds:
        min_x = self.x * CHUNK_SIZE_METERS
        min_z = self.z * CHUNK_SIZE_METERS
        return ChunkWorldBounds(
            min_x=min_x,
            min_z=min_z,
            max_x=min_x + CHUNK_SIZE_METERS,
            max_z=min_z + CHUNK_SIZE_METERS,
        )