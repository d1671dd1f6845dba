"""World seeds, deterministic child derivation and stable identifiers."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

_MASK64 = (1 << 64) - 1
_MASK32 = (1 << 32) - 1
_FNV_OFFSET = 0xCBF29CE484222325
_FNV_PRIME = 0x100000001B3


def _splitmix(value: int) -> int:
    value = (value + 0x9E3779B97F4A7C15) & _MASK64
    value = ((value ^ (value >> 30)) * 0xBF58476D1CE4E5B9) & _MASK64
    value = ((value ^ (value >> 27)) * 0x94D049BB133111EB) & _MASK64
    return value ^ (value >> 31)


def _fnv1a(data: bytes) -> int:
    hashed = _FNV_OFFSET
    for byte in data:
        hashed = ((hashed ^ byte) * _FNV_PRIME) & _MASK64
    return hashed


@dataclass(frozen=True)
class WorldSeed:
    """A 64-bit world seed from which all procedural content is derived."""

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= _MASK64:
            raise ValueError(f"world seed {self.value} is outside the unsigned 64-bit range")

    def derive_child(self, label: str, coords: Iterable[int], index: int) -> WorldSeed:
        """Derive a deterministic child seed from a label, integer coordinates and an index."""
        state = _splitmix(self.value ^ _fnv1a(label.encode("utf-8")))
        count = 0
        for coord in coords:
            state = _splitmix(state ^ (coord & _MASK32))
            count += 1
        state = _splitmix(state ^ count)
        state = _splitmix(state ^ (index & _MASK64))
        return WorldSeed(state)

    def as_u64(self) -> int:
        return self.value


class IdError(ValueError):
    """Raised when an identifier string is not well formed."""


@dataclass(frozen=True)
class ObjectId:
    """Stable identifier of a procedurally generated object instance."""

    value: int

    @classmethod
    def from_seed_chunk_and_index(cls, seed: WorldSeed, chunk: Iterable[int], index: int) -> ObjectId:
        return cls(seed.derive_child("object.id", chunk, index).as_u64())

    def as_u64(self) -> int:
        return self.value


_ID_PATTERN = re.compile(r"[a-z0-9_.\-]+(/[a-z0-9_.\-]+)*")


def _validate_id(kind: str, value: str) -> None:
    if not value:
        raise IdError(f"{kind} id must not be empty")
    if _ID_PATTERN.fullmatch(value) is None:
        raise IdError(
            f"{kind} id {value!r} must be lowercase path segments of [a-z0-9_.-] separated by '/'"
        )


@dataclass(frozen=True)
class PrototypeId:
    """Validated identifier of an object prototype definition."""

    value: str

    def __post_init__(self) -> None:
        _validate_id("prototype", self.value)

    def as_str(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class MaterialId:
    """Validated identifier of a material definition."""

    value: str

    def __post_init__(self) -> None:
        _validate_id("material", self.value)

    def as_str(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value