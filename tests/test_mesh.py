import math

from alchimera.chunk import ChunkCoord
from alchimera.mesh import TerrainMeshConfig, TerrainMeshGenerator, generate_terrain_mesh
from alchimera.seed import WorldSeed
from alchimera.terrain import TerrainConfig, sample_height


def test_grid_resolution_controls_vertex_and_index_counts():
    mesh = generate_terrain_mesh(
        WorldSeed(42), ChunkCoord(0, 0), TerrainConfig(0.0, 10.0), TerrainMeshConfig(4)
    )

    assert len(mesh.positions) == 25
    assert len(mesh.normals) == 25
    assert len(mesh.uvs) == 25
    assert len(mesh.indices) == 96


def test_normals_reflect_sampled_height_slopes():
    mesh = generate_terrain_mesh(
        WorldSeed(7), ChunkCoord(2, -1), TerrainConfig(-20.0, 40.0), TerrainMeshConfig(8)
    )

    assert all(abs(math.sqrt(sum(c * c for c in normal)) - 1.0) <= 0.001 for normal in mesh.normals)
    assert any(abs(normal[0]) > 0.001 or abs(normal[2]) > 0.001 for normal in mesh.normals)


def test_terrain_mesh_generator_is_deterministic_for_same_seed_and_chunk():
    first = TerrainMeshGenerator(TerrainConfig(), TerrainMeshConfig(8)).generate_chunk(
        WorldSeed(0xA1C0_E011), ChunkCoord(-4, 3)
    )
    second = generate_terrain_mesh(
        WorldSeed(0xA1C0_E011), ChunkCoord(-4, 3), TerrainConfig(), TerrainMeshConfig(8)
    )

    assert first == second
    assert len(first.positions) == 81
    assert len(first.indices) == 384


def test_zero_subdivisions_clamp_to_one_quad():
    mesh = generate_terrain_mesh(WorldSeed(1), ChunkCoord(0, 0), TerrainConfig(), TerrainMeshConfig(0))
    assert len(mesh.positions) == 4
    assert mesh.indices == [0, 2, 1, 1, 2, 3]


def test_positions_cover_chunk_and_follow_height_sampler():
    seed = WorldSeed(9)
    chunk = ChunkCoord(1, -2)
    config = TerrainConfig()
    mesh = generate_terrain_mesh(seed, chunk, config, TerrainMeshConfig(4))

    assert mesh.positions[0][0] == 0.0 and mesh.positions[0][2] == 0.0
    assert mesh.positions[-1][0] == 64.0 and mesh.positions[-1][2] == 64.0
    for x, y, z in mesh.positions:
        assert y == sample_height(seed, chunk, x, z, config)
    assert mesh.uvs[0] == (0.0, 0.0)
    assert mesh.uvs[-1] == (1.0, 1.0)


def test_indices_reference_existing_vertices():
    mesh = generate_terrain_mesh(WorldSeed(3), ChunkCoord(0, 0), TerrainConfig(), TerrainMeshConfig(6))
    assert len(mesh.indices) % 3 == 0
    assert all(0 <= index < len(mesh.positions) for index in mesh.indices)
    assert set(mesh.indices) == set(range(len(mesh.positions)))


def test_flat_terrain_has_upward_normals():
    mesh = generate_terrain_mesh(WorldSeed(5), ChunkCoord(0, 0), TerrainConfig(2.0, 2.0), TerrainMeshConfig(3))
    assert all(normal == (0.0, 1.0, 0.0) for normal in mesh.normals)