"""Deterministic tree assembly generation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from alchimera.seed import WorldSeed

Vec3 = tuple[float, float, float]


@dataclass(frozen=True)
class TreeConfig:
    """Shape parameters for procedural tree generation."""

    trunk_segments: int = 5
    branch_count: int = 4
    leaf_cluster_count: int = 5
    base_height: float = 5.0
    height_variation: float = 2.0
    trunk_radius: float = 0.28


@dataclass(frozen=True)
class TrunkSegment:
    """A vertical trunk cylinder section."""

    base: Vec3
    top: Vec3
    radius: float


@dataclass(frozen=True)
class BranchSegment:
    """A branch extending from the trunk."""

    start: Vec3
    end: Vec3
    radius: float


@dataclass(frozen=True)
class LeafCluster:
    """A spherical leaf cluster."""

    center: Vec3
    radius: float


class AttachmentKind(Enum):
    """What an attachment point is anchored to."""

    BRANCH = "branch"
    LEAF_CLUSTER = "leaf_cluster"
    CANOPY_TOP = "canopy_top"


@dataclass(frozen=True)
class TreeAttachmentPoint:
    """A stable point for gameplay and rendering hooks."""

    kind: AttachmentKind
    position: Vec3


@dataclass(frozen=True)
class TreeSummary:
    """Compact deterministic tree summary."""

    trunk_segments: int
    branches: int
    leaf_clusters: int
    attachment_points: int
    height_millimeters: int
    branch_reach_millimeters: int
    leaf_radius_millimeters: int


@dataclass
class TreeAssembly:
    """Generated tree structure."""

    trunk_segments: list[TrunkSegment]
    branches: list[BranchSegment]
    leaf_clusters: list[LeafCluster]
    attachment_points: list[TreeAttachmentPoint]

    def summary(self) -> TreeSummary:
        """Return a compact summary for tests, cache keys and diagnostics."""
        height = _quantize(self.trunk_segments[-1].top[1]) if self.trunk_segments else 0
        return TreeSummary(
            trunk_segments=len(self.trunk_segments),
            branches=len(self.branches),
            leaf_clusters=len(self.leaf_clusters),
            attachment_points=len(self.attachment_points),
            height_millimeters=height,
            branch_reach_millimeters=sum(
                _quantize(_distance_xz(branch.start, branch.end)) for branch in self.branches
            ),
            leaf_radius_millimeters=sum(
                _quantize(cluster.radius) for cluster in self.leaf_clusters
            ),
        )


def generate_tree(seed: WorldSeed, config: TreeConfig) -> TreeAssembly:
    """Generate a deterministic tree from a seed and configuration."""
    trunk_count = max(config.trunk_segments, 1)
    branch_count = max(config.branch_count, 1)
    leaf_count = max(config.leaf_cluster_count, 1)
    height = config.base_height + _unit(seed, "tree.height", 0) * config.height_variation
    segment_height = height / trunk_count

    trunk_segments = [
        TrunkSegment(
            base=(0.0, index * segment_height, 0.0),
            top=(0.0, (index + 1) * segment_height, 0.0),
            radius=config.trunk_radius * (1.0 - (index / trunk_count) * 0.45),
        )
        for index in range(trunk_count)
    ]

    branches = []
    for index in range(branch_count):
        fraction = 0.35 + (index / branch_count) * 0.5
        start_y = height * fraction
        angle = _unit(seed, "tree.branch.angle", index) * math.tau
        reach = 0.9 + _unit(seed, "tree.branch.reach", index) * 1.1
        lift = 0.25 + _unit(seed, "tree.branch.lift", index) * 0.45
        branches.append(
            BranchSegment(
                start=(0.0, start_y, 0.0),
                end=(math.cos(angle) * reach, start_y + lift, math.sin(angle) * reach),
                radius=config.trunk_radius * (0.35 + 0.2 * (1.0 - fraction)),
            )
        )

    leaf_clusters = []
    for index in range(leaf_count):
        end = branches[index % len(branches)].end
        leaf_clusters.append(
            LeafCluster(
                center=(
                    end[0] + _signed_unit(seed, "tree.leaf.x", index) * 0.25,
                    end[1] + 0.15 + _unit(seed, "tree.leaf.y", index) * 0.35,
                    end[2] + _signed_unit(seed, "tree.leaf.z", index) * 0.25,
                ),
                radius=0.55 + _unit(seed, "tree.leaf.radius", index) * 0.35,
            )
        )

    attachment_points = [
        TreeAttachmentPoint(AttachmentKind.BRANCH, branch.end) for branch in branches
    ]
    attachment_points.extend(
        TreeAttachmentPoint(AttachmentKind.LEAF_CLUSTER, cluster.center)
        for cluster in leaf_clusters
    )
    attachment_points.append(TreeAttachmentPoint(AttachmentKind.CANOPY_TOP, (0.0, height, 0.0)))

    return TreeAssembly(
        trunk_segments=trunk_segments,
        branches=branches,
        leaf_clusters=leaf_clusters,
        attachment_points=attachment_points,
    )


def _distance_xz(a: Vec3, b: Vec3) -> float:
    return math.hypot(b[0] - a[0], b[2] - a[2])


def _quantize(value: float) -> int:
    scaled = value * 1000.0
    return int(math.copysign(math.floor(abs(scaled) + 0.5), scaled))


def _signed_unit(seed: WorldSeed, label: str, index: int) -> float:
    return _unit(seed, label, index) * 2.0 - 1.0


def _unit(seed: WorldSeed, label: str, index: int) -> float:
    child = seed.derive_child(label, (), index).as_u64()
    return (child >> 11) / float(1 << 53)