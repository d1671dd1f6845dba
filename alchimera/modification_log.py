"""Serializable overlays of player changes on top of generated chunk content."""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from alchimera.chunk import ChunkCoord
from alchimera.seed import ObjectId

Vec3 = tuple[float, float, float]


@dataclass(frozen=True)
class ObjectPlacementOverride:
    """A player-authored object placement layered over procedural output."""

    stable_id: str
    prototype_key: str
    world_position: Vec3

    def __post_init__(self) -> None:
        position = tuple(float(component) for component in self.world_position)
        if len(position) != 3:
            raise ValueError(f"world position needs 3 components, got {len(position)}")
        object.__setattr__(self, "world_position", position)


@dataclass
class ResolvedChunkObjects:
    """Generated objects that remain visible, plus player-authored placements."""

    generated_object_ids: list[ObjectId]
    placed_objects: list[ObjectPlacementOverride]


@dataclass
class ChunkModificationLog:
    """Record of removals, damage and placements applied to one generated chunk."""

    chunk: ChunkCoord
    removed_object_ids: list[int] = field(default_factory=list)
    damaged_objects: dict[int, int] = field(default_factory=dict)
    placed_objects: list[ObjectPlacementOverride] = field(default_factory=list)

    def record_removed(self, object_id: ObjectId) -> None:
        raw = object_id.as_u64()
        if raw not in self.removed_object_ids:
            self.removed_object_ids.append(raw)

    def record_damaged(self, object_id: ObjectId, damage: int) -> None:
        self.damaged_objects[object_id.as_u64()] = damage

    def record_placed(self, placed: ObjectPlacementOverride) -> None:
        self.placed_objects.append(placed)

    def is_removed(self, object_id: ObjectId) -> bool:
        return object_id.as_u64() in self.removed_object_ids

    def damage_for(self, object_id: ObjectId) -> int | None:
        return self.damaged_objects.get(object_id.as_u64())

    def visible_generated_objects(self, generated_object_ids: Iterable[ObjectId]) -> list[ObjectId]:
        """Return the generated objects that have not been removed, in order."""
        return [object_id for object_id in generated_object_ids if not self.is_removed(object_id)]

    def apply_to_generated(self, generated_object_ids: Iterable[ObjectId]) -> ResolvedChunkObjects:
        return ResolvedChunkObjects(
            generated_object_ids=self.visible_generated_objects(generated_object_ids),
            placed_objects=list(self.placed_objects),
        )

    def to_save_json(self) -> str:
        document = {
            "chunk": {"x": self.chunk.x, "z": self.chunk.z},
            "removed_object_ids": list(self.removed_object_ids),
            "damaged_object_ids": [
                {"object_id": object_id, "damage": damage}
                for object_id, damage in self.damaged_objects.items()
            ],
            "placed_objects": [
                {
                    "stable_id": placed.stable_id,
                    "prototype_key": placed.prototype_key,
                    "world_position": list(placed.world_position),
                }
                for placed in self.placed_objects
            ],
        }
        return json.dumps(document, separators=(",", ":"), ensure_ascii=False)

    @classmethod
    def from_save_json(cls, source: str) -> ChunkModificationLog:
        """Decode a log from its save format; raises ValueError on malformed input."""
        document = json.loads(source)
        chunk = _field(document, "chunk", "modification log")
        log = cls(
            ChunkCoord(
                _integer(_field(chunk, "x", "chunk"), 32, signed=True),
                _integer(_field(chunk, "z", "chunk"), 32, signed=True),
            )
        )
        log.removed_object_ids = [
            _integer(raw, 64, signed=False)
            for raw in _array(_field(document, "removed_object_ids", "modification log"))
        ]
        for entry in _array(_field(document, "damaged_object_ids", "modification log")):
            object_id = _integer(_field(entry, "object_id", "damage entry"), 64, signed=False)
            log.damaged_objects[object_id] = _integer(
                _field(entry, "damage", "damage entry"), 32, signed=False
            )
        for entry in _array(_field(document, "placed_objects", "modification log")):
            position = [
                _number(component)
                for component in _array(_field(entry, "world_position", "placed object"))
            ]
            if len(position) != 3:
                raise ValueError(f"world position needs 3 components, got {len(position)}")
            log.placed_objects.append(
                ObjectPlacementOverride(
                    stable_id=_string(_field(entry, "stable_id", "placed object")),
                    prototype_key=_string(_field(entry, "prototype_key", "placed object")),
                    world_position=(position[0], position[1], position[2]),
                )
            )
        return log


def _field(mapping: Any, name: str, context: str) -> Any:
    if not isinstance(mapping, dict):
        raise ValueError(f"expected an object for {context}")
    try:
        return mapping[name]
    except KeyError:
        raise ValueError(f"missing field `{name}` in {context}") from None


def _array(value: Any) -> list[Any]:
    if not isinstance(value, list):
        raise ValueError(f"expected an array, got {value!r}")
    return value


def _string(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"expected a string, got {value!r}")
    return value


def _integer(value: Any, bits: int, *, signed: bool) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"expected an integer, got {value!r}")
    low, high = (-(1 << (bits - 1)), (1 << (bits - 1)) - 1) if signed else (0, (1 << bits) - 1)
    if not low <= value <= high:
        raise ValueError(f"integer {value} is out of range")
    return value


def _number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a number, got {value!r}")
    return float(value)