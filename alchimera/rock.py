"""Deterministic irregular rock mesh-source generation."""

from __future__ import annotations

import math
from dataclasses import dataclass

from alchimera.seed import WorldSeed

Vec3 = tuple[float, float, float]


@dataclass(frozen=True)
class RockConfig:
    """Shape parameters for procedural rock generation."""

    radial_segments: int = 10
    vertical_layers: int = 4
    base_radius: float = 1.1
    radius_variation: float = 0.35
    height: float = 1.4
    harvest_point_count: int = 4


@dataclass(frozen=True)
class RockBounds:
    """Axis-aligned bounds of generated rock geometry."""

    min: Vec3
    max: Vec3

    def width(self) -> float:
        return self.max[0] - self.min[0]

    def height(self) -> float:
        return self.max[1] - self.min[1]

    def depth(self) -> float:
        return self.max[2] - self.min[2]

    def contains(self, position: Vec3) -> bool:
        """Whether a point lies inside the bounds, edges included."""
        return all(
            low <= coordinate <= high
            for coordinate, low, high in zip(position, self.min, self.max)
        )


@dataclass(frozen=True)
class RockHarvestPoint:
    """A point on the rock used for mining hits or loot placement."""

    position: Vec3
    normal: Vec3


@dataclass(frozen=True)
class RockSummary:
    """Compact deterministic summary of generated rock data."""

    vertices: int
    triangles: int
    harvest_points: int
    width_millimeters: int
    height_millimeters: int
    depth_millimeters: int


@dataclass
class RockAssembly:
    """Irregular rock mesh-source data."""

    vertices: list[Vec3]
    indices: list[int]
    bounds: RockBounds
    harvest_points: list[RockHarvestPoint]

    def summary(self) -> RockSummary:
        """Return a compact summary for tests, diagnostics and cache keys."""
        return RockSummary(
            vertices=len(self.vertices),
            triangles=len(self.indices) // 3,
            harvest_points=len(self.harvest_points),
            width_millimeters=_quantize(self.bounds.width()),
            height_millimeters=_quantize(self.bounds.height()),
            depth_millimeters=_quantize(self.bounds.depth()),
        )


def generate_rock(seed: WorldSeed, config: RockConfig) -> RockAssembly:
    """Generate deterministic irregular rock geometry from a seed and configuration."""
    radial_segments = max(config.radial_segments, 3)
    vertical_layers = max(config.vertical_layers, 2)

    vertices: list[Vec3] = [(0.0, config.height, 0.0)]
    for layer in range(vertical_layers):
        layer_fraction = layer / (vertical_layers - 1)
        y = config.height * (1.0 - layer_fraction) * 0.86
        profile = max(math.sin(math.pi * layer_fraction), 0.18)
        for segment in range(radial_segments):
            angle = segment / radial_segments * math.tau
            jitter = _signed_unit(seed, "rock.radius", layer * radial_segments + segment)
            radius = (config.base_radius + jitter * config.radius_variation) * profile
            vertices.append((math.cos(angle) * radius, y, math.sin(angle) * radius))
    bottom_index = len(vertices)
    vertices.append((0.0, 0.0, 0.0))

    indices: list[int] = []
    for segment in range(radial_segments):
        following = (segment + 1) % radial_segments
        indices.extend((0, 1 + segment, 1 + following))

    for layer in range(vertical_layers - 1):
        current_start = 1 + layer * radial_segments
        next_start = current_start + radial_segments
        for segment in range(radial_segments):
            following = (segment + 1) % radial_segments
            a = current_start + segment
            b = current_start + following
            c = next_start + segment
            d = next_start + following
            indices.extend((a, c, b, b, c, d))

    bottom_ring_start = 1 + (vertical_layers - 1) * radial_segments
    for segment in range(radial_segments):
        following = (segment + 1) % radial_segments
        indices.extend((bottom_index, bottom_ring_start + following, bottom_ring_start + segment))

    bounds = _calculate_bounds(vertices)
    harvest_points = _generate_harvest_points(
        seed, max(config.harvest_point_count, 1), vertices, bounds
    )
    return RockAssembly(
        vertices=vertices,
        indices=indices,
        bounds=bounds,
        harvest_points=harvest_points,
    )


def _generate_harvest_points(
    seed: WorldSeed,
    count: int,
    vertices: list[Vec3],
    bounds: RockBounds,
) -> list[RockHarvestPoint]:
    ring_vertex_count = len(vertices) - 2
    points = []
    for index in range(count):
        picked = seed.derive_child("rock.harvest.vertex", (), index).as_u64()
        position = _clamp_to_bounds(vertices[1 + picked % ring_vertex_count], bounds)
        normal = _normalize(
            (position[0], position[1] - bounds.height() * 0.45, position[2])
        )
        points.append(RockHarvestPoint(position=position, normal=normal))
    return points


def _calculate_bounds(vertices: list[Vec3]) -> RockBounds:
    xs, ys, zs = zip(*vertices)
    return RockBounds(
        min=(min(xs), min(ys), min(zs)),
        max=(max(xs), max(ys), max(zs)),
    )


def _clamp_to_bounds(position: Vec3, bounds: RockBounds) -> Vec3:
    x, y, z = (
        min(max(coordinate, low), high)
        for coordinate, low, high in zip(position, bounds.min, bounds.max)
    )
    return (x, y, z)


def _normalize(vector: Vec3) -> Vec3:
    length = math.sqrt(sum(component * component for component in vector))
    if length == 0.0:
        return (0.0, 1.0, 0.0)
    return (vector[0] / length, vector[1] / length, vector[2] / length)


def _quantize(value: float) -> int:
    scaled = value * 1000.0
    return int(math.copysign(math.floor(abs(scaled) + 0.5), scaled))


def _signed_unit(seed: WorldSeed, label: str, index: int) -> float:
    return _unit(seed, label, index) * 2.0 - 1.0


def _unit(seed: WorldSeed, label: str, index: int) -> float:
    child = seed.derive_child(label, (), index).as_u64()
    return (child >> 11) / float(1 << 53)