"""Engine-agnostic heightmap terrain mesh generation."""

from __future__ import annotations

import math
from dataclasses import dataclass

from alchimera.chunk import CHUNK_SIZE_METERS, ChunkCoord
from alchimera.seed import WorldSeed
from alchimera.terrain import TerrainConfig, sample_height

Vec3 = tuple[float, float, float]
Vec2 = tuple[float, float]


@dataclass(frozen=True)
class TerrainMeshConfig:
    """Grid resolution of a chunk terrain mesh."""

    subdivisions: int


@dataclass(frozen=True)
class TerrainMeshData:
    """Vertex positions, normals, UVs and triangle indices of a terrain mesh."""

    positions: list[Vec3]
    normals: list[Vec3]
    uvs: list[Vec2]
    indices: list[int]


@dataclass(frozen=True)
class TerrainMeshGenerator:
    """Generates terrain meshes for chunks with fixed configuration."""

    terrain_config: TerrainConfig
    mesh_config: TerrainMeshConfig

    def generate_chunk(self, seed: WorldSeed, chunk: ChunkCoord) -> TerrainMeshData:
        return generate_terrain_mesh(seed, chunk, self.terrain_config, self.mesh_config)


def generate_terrain_mesh(
    seed: WorldSeed,
    chunk: ChunkCoord,
    terrain_config: TerrainConfig,
    mesh_config: TerrainMeshConfig,
) -> TerrainMeshData:
    """Build the heightmap mesh covering one chunk."""
    subdivisions = max(mesh_config.subdivisions, 1)
    per_axis = subdivisions + 1
    step = CHUNK_SIZE_METERS / subdivisions

    positions: list[Vec3] = []
    uvs: list[Vec2] = []
    for z in range(per_axis):
        for x in range(per_axis):
            local_x = x * step
            local_z = z * step
            height = sample_height(seed, chunk, local_x, local_z, terrain_config)
            positions.append((local_x, height, local_z))
            uvs.append((x / subdivisions, z / subdivisions))

    indices: list[int] = []
    for z in range(subdivisions):
        for x in range(subdivisions):
            top_left = z * per_axis + x
            top_right = top_left + 1
            bottom_left = top_left + per_axis
            bottom_right = bottom_left + 1
            indices.extend(
                (top_left, bottom_left, top_right, top_right, bottom_left, bottom_right)
            )

    return TerrainMeshData(
        positions=positions,
        normals=_calculate_normals(positions, subdivisions),
        uvs=uvs,
        indices=indices,
    )


def _calculate_normals(positions: list[Vec3], subdivisions: int) -> list[Vec3]:
    per_axis = subdivisions + 1

    def height_at(x: int, z: int) -> float:
        return positions[z * per_axis + x][1]

    def gradient(before: float, center: float, after: float, at: int) -> float:
        if at == 0:
            return after - center
        if at == subdivisions:
            return center - before
        return (after - before) * 0.5

    normals: list[Vec3] = []
    for z in range(per_axis):
        for x in range(per_axis):
            center = height_at(x, z)
            left = height_at(max(x - 1, 0), z)
            right = height_at(min(x + 1, subdivisions), z)
            down = height_at(x, max(z - 1, 0))
            up = height_at(x, min(z + 1, subdivisions))
            dx = gradient(left, center, right, x)
            dz = gradient(down, center, up, z)
            normals.append(_normalize((-dx, 1.0, -dz)))
    return normals


def _normalize(vector: Vec3) -> Vec3:
    length = math.sqrt(sum(component * component for component in vector))
    return (vector[0] / length, vector[1] / length, vector[2] / length)