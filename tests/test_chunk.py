from alchimera.chunk import CHUNK_SIZE_METERS, ChunkCoord, ChunkWorldBounds


def test_chunk_coord_origin_maps_to_origin_chunk():
    assert ChunkCoord.from_world_position(0.0, 0.0) == ChunkCoord(0, 0)


def test_chunk_coord_positive_world_position_maps_to_expected_chunk():
    assert ChunkCoord.from_world_position(127.99, 64.0) == ChunkCoord(1, 1)


def test_chunk_coord_negative_world_position_floors_to_negative_chunk():
    assert ChunkCoord.from_world_position(-0.01, -64.01) == ChunkCoord(-1, -2)


def test_chunk_coord_world_bounds_are_64m_square():
    bounds = ChunkCoord(-2, 3).world_bounds()

    assert CHUNK_SIZE_METERS == 64.0
    assert bounds.min_x == -128.0
    assert bounds.min_z == 192.0
    assert bounds.max_x == -64.0
    assert bounds.max_z == 256.0


def test_bounds_round_trip_to_same_chunk():
    for coord in (ChunkCoord(0, 0), ChunkCoord(-5, 7), ChunkCoord(12, -1)):
        bounds = coord.world_bounds()
        assert ChunkCoord.from_world_position(bounds.min_x, bounds.min_z) == coord
        assert ChunkCoord.from_world_position(bounds.max_x, bounds.max_z) == ChunkCoord(
            coord.x + 1, coord.z + 1
        )


def test_chunk_coords_are_hashable_values():
    assert {ChunkCoord(1, 2), ChunkCoord(1, 2)} == {ChunkCoord(1, 2)}
    assert ChunkCoord(0, 0).world_bounds() == ChunkWorldBounds(0.0, 0.0, 64.0, 64.0)