from alchimera.chunk import ChunkCoord
from alchimera.seed import WorldSeed
from alchimera.terrain import HeightSampler, TerrainConfig, sample_height


def test_same_seed_same_position_same_height():
    first = HeightSampler(TerrainConfig()).sample(WorldSeed(123), ChunkCoord(-2, 5), 8.0, 24.0)
    second = HeightSampler(TerrainConfig()).sample(WorldSeed(123), ChunkCoord(-2, 5), 8.0, 24.0)

    assert first == second
    assert -8.0 <= first <= 36.0


def test_different_seed_changes_height_summary():
    sampler = HeightSampler(TerrainConfig())
    chunk = ChunkCoord(1, 1)

    first = [sampler.sample(WorldSeed(1), chunk, i * 4.0, 12.0) for i in range(8)]
    second = [sampler.sample(WorldSeed(2), chunk, i * 4.0, 12.0) for i in range(8)]

    assert first != second


def test_height_values_stay_within_configured_bounds():
    config = TerrainConfig(-12.0, 48.0)

    for x in range(-4, 5):
        for z in range(-4, 5):
            height = sample_height(WorldSeed(77), ChunkCoord(x, z), 32.0, 48.0, config)
            assert config.min_height <= height <= config.max_height


def test_default_terrain_config_range():
    config = TerrainConfig()
    assert config.min_height == -8.0
    assert config.max_height == 36.0


def test_sampler_matches_free_function():
    config = TerrainConfig(0.0, 10.0)
    sampler = HeightSampler(config)
    seed = WorldSeed(5)
    chunk = ChunkCoord(3, -7)
    assert sampler.sample(seed, chunk, 1.5, 60.0) == sample_height(seed, chunk, 1.5, 60.0, config)


def test_height_depends_on_world_position_not_chunk_split():
    config = TerrainConfig()
    seed = WorldSeed(11)
    across = sample_height(seed, ChunkCoord(1, 0), 0.0, 10.0, config)
    local_overflow = sample_height(seed, ChunkCoord(0, 0), 64.0, 10.0, config)
    assert across == local_overflow