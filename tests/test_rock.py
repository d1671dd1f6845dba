import pytest

from alchimera.rock import RockBounds, RockConfig, generate_rock
from alchimera.seed import WorldSeed


def test_same_rock_seed_generates_same_summary():
    seed = WorldSeed(31337)
    first = generate_rock(seed, RockConfig()).summary()
    second = generate_rock(seed, RockConfig()).summary()
    assert first == second


def test_rock_has_nonzero_bounds():
    rock = generate_rock(WorldSeed(23), RockConfig())
    bounds = rock.bounds
    assert bounds.width() > 0.0
    assert bounds.height() > 0.0
    assert bounds.depth() > 0.0
    assert len(rock.vertices) > 0


def test_rock_harvest_points_are_within_bounds():
    rock = generate_rock(WorldSeed(404), RockConfig())
    assert len(rock.harvest_points) > 0
    for point in rock.harvest_points:
        assert rock.bounds.contains(point.position)


def test_default_rock_summary_counts():
    summary = generate_rock(WorldSeed(42), RockConfig()).summary()
    assert summary.vertices == 10 * 4 + 2
    assert summary.triangles == 10 + 2 * 10 * 3 + 10
    assert summary.harvest_points == 4
    assert summary.height_millimeters == 1400


def test_indices_reference_existing_vertices():
    rock = generate_rock(WorldSeed(9), RockConfig())
    assert len(rock.indices) % 3 == 0
    assert all(0 <= index < len(rock.vertices) for index in rock.indices)


def test_degenerate_config_is_clamped():
    config = RockConfig(radial_segments=1, vertical_layers=0, harvest_point_count=0)
    summary = generate_rock(WorldSeed(5), config).summary()
    assert summary.vertices == 3 * 2 + 2
    assert summary.triangles == 3 + 2 * 3 + 3
    assert summary.harvest_points == 1


def test_harvest_normals_are_unit_length():
    rock = generate_rock(WorldSeed(77), RockConfig(harvest_point_count=8))
    for point in rock.harvest_points:
        length = sum(component * component for component in point.normal) ** 0.5
        assert length == pytest.approx(1.0)


def test_rock_bounds_measures_and_contains():
    bounds = RockBounds(min=(0.0, -1.0, 2.0), max=(1.0, 2.0, 5.0))
    assert bounds.width() == 1.0
    assert bounds.height() == 3.0
    assert bounds.depth() == 3.0
    assert bounds.contains((1.0, 2.0, 5.0))
    assert bounds.contains((0.5, 0.0, 3.0))
    assert not bounds.contains((0.5, 0.0, 5.5))
    assert not bounds.contains((-0.1, 0.0, 3.0))