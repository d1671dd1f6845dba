"""Deterministic procedural game objects: prototypes, placement and lifecycle."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from alchimera.biome import Biome, sample_biome
from alchimera.chunk import CHUNK_SIZE_METERS, ChunkCoord
from alchimera.seed import IdError, MaterialId, ObjectId, PrototypeId, WorldSeed
from alchimera.terrain import TerrainConfig, sample_height

Vec3 = tuple[float, float, float]


class ObjectPrototypeGenerator(Enum):
    """Generator family used to build concrete object data from a prototype."""

    UNKNOWN = "Unknown"
    TREE = "Tree"
    ROCK = "Rock"
    HERB = "Herb"


class ObjectPrototypeDefinitionError(ValueError):
    """Parse or validation failure of a data-driven object prototype."""

    class Kind(Enum):
        PARSE = "parse"
        INVALID_PROTOTYPE_ID = "invalid_prototype_id"
        INVALID_MATERIAL_ID = "invalid_material_id"
        MISSING_GENERATOR = "missing_generator"
        MISSING_MATERIAL_REFERENCE = "missing_material_reference"

    def __init__(self, kind: ObjectPrototypeDefinitionError.Kind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


_Kind = ObjectPrototypeDefinitionError.Kind


@dataclass(frozen=True, init=False)
class ObjectPrototypeDefinition:
    """Validated object prototype definition loaded from asset data."""

    id: PrototypeId
    display_name: str
    generator: ObjectPrototypeGenerator
    material_refs: tuple[MaterialId, ...]

    def __init__(
        self,
        id: str,
        display_name: str,
        generator: ObjectPrototypeGenerator,
        material_refs: Any,
    ) -> None:
        refs = []
        for material_ref in material_refs:
            try:
                refs.append(MaterialId(str(material_ref)))
            except IdError as error:
                raise ObjectPrototypeDefinitionError(
                    _Kind.INVALID_MATERIAL_ID, f"invalid material reference: {error}"
                ) from error
        if not refs:
            raise ObjectPrototypeDefinitionError(
                _Kind.MISSING_MATERIAL_REFERENCE,
                "object prototype must reference at least one material",
            )
        try:
            prototype_id = PrototypeId(str(id))
        except IdError as error:
            raise ObjectPrototypeDefinitionError(
                _Kind.INVALID_PROTOTYPE_ID, f"invalid prototype id: {error}"
            ) from error
        object.__setattr__(self, "id", prototype_id)
        object.__setattr__(self, "display_name", display_name)
        object.__setattr__(self, "generator", generator)
        object.__setattr__(self, "material_refs", tuple(refs))


def load_object_prototype_ron(source: str) -> ObjectPrototypeDefinition:
    """Load and validate an object prototype definition from RON text."""
    try:
        raw = _decode_raw_prototype(_RonParser(source).parse_document())
    except _RonError as error:
        raise ObjectPrototypeDefinitionError(
            _Kind.PARSE, f"failed to parse object prototype: {error}"
        ) from error
    identifier, display_name, generator, material_refs = raw
    if generator is ObjectPrototypeGenerator.UNKNOWN:
        raise ObjectPrototypeDefinitionError(
            _Kind.MISSING_GENERATOR, "object prototype must declare a generator"
        )
    return ObjectPrototypeDefinition(identifier, display_name, generator, material_refs)


class _RonError(ValueError):
    pass


@dataclass(frozen=True)
class _RonIdent:
    name: str


@dataclass(frozen=True)
class _RonStruct:
    name: str | None
    fields: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class _RonTuple:
    name: str | None
    items: tuple[Any, ...]


_IDENT = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_NUMBER = re.compile(
    r"[+-]?(?:0x[0-9a-fA-F_]+|0b[01_]+|0o[0-7_]+"
    r"|(?:[0-9][0-9_]*(?:\.[0-9_]*)?|\.[0-9][0-9_]*)(?:[eE][+-]?[0-9]+)?)"
)
_SIMPLE_ESCAPES = {'"': '"', "\\": "\\", "/": "/", "'": "'", "n": "\n", "t": "\t", "r": "\r", "0": "\0", "b": "\b", "f": "\f"}


class _RonParser:
    """Recursive-descent reader for the RON value subset used by asset files."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def error(self, message: str) -> _RonError:
        line = self.text.count("\n", 0, self.pos) + 1
        column = self.pos - (self.text.rfind("\n", 0, self.pos) + 1) + 1
        return _RonError(f"{line}:{column}: {message}")

    def skip(self) -> None:
        text = self.text
        while self.pos < len(text):
            if text[self.pos].isspace():
                self.pos += 1
            elif text.startswith("//", self.pos):
                end = text.find("\n", self.pos)
                self.pos = len(text) if end < 0 else end + 1
            elif text.startswith("/*", self.pos):
                depth = 0
                while True:
                    if self.pos >= len(text):
                        raise self.error("unclosed block comment")
                    if text.startswith("/*", self.pos):
                        depth += 1
                        self.pos += 2
                    elif text.startswith("*/", self.pos):
                        depth -= 1
                        self.pos += 2
                        if depth == 0:
                            break
                    else:
                        self.pos += 1
            else:
                break

    def peek(self) -> str:
        self.skip()
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def expect(self, token: str) -> None:
        if self.peek() != token:
            raise self.error(f"expected `{token}`")
        self.pos += 1

    def parse_document(self) -> Any:
        while self.peek() == "#":
            self.skip_attribute()
        value = self.parse_value()
        if self.peek():
            raise self.error("trailing characters")
        return value

    def skip_attribute(self) -> None:
        if not self.text.startswith("#![", self.pos):
            raise self.error("expected `#![`")
        self.pos += 3
        self.parse_value()
        self.expect("]")

    def parse_ident(self) -> str:
        self.skip()
        match = _IDENT.match(self.text, self.pos)
        if match is None:
            raise self.error("expected an identifier")
        self.pos = match.end()
        return match.group()

    def parse_value(self) -> Any:
        char = self.peek()
        if char == '"':
            return self.parse_string()
        if char == "'":
            return self.parse_char()
        if char == "[":
            self.pos += 1
            return self.parse_items("]")
        if char == "{":
            return self.parse_map()
        if char == "(":
            return self.parse_parens(None)
        if char == "r" and re.match(r'r#*"', self.text[self.pos :]):
            return self.parse_raw_string()
        if char and (char.isdigit() or char in "+-."):
            return self.parse_number()
        if char and (char.isalpha() or char == "_"):
            name = self.parse_ident()
            if name in ("true", "false"):
                return name == "true"
            if name in ("inf", "NaN"):
                return float(name.lower())
            if self.peek() == "(":
                return self.parse_parens(name)
            return _RonIdent(name)
        raise self.error("expected a value" if char else "unexpected end of input")

    def parse_items(self, closing: str) -> list[Any]:
        items: list[Any] = []
        while self.peek() != closing:
            items.append(self.parse_value())
            if self.peek() == ",":
                self.pos += 1
            elif self.peek() != closing:
                raise self.error(f"expected `,` or `{closing}`")
        self.pos += 1
        return items

    def parse_map(self) -> tuple[tuple[Any, Any], ...]:
        self.expect("{")
        pairs = []
        while self.peek() != "}":
            key = self.parse_value()
            self.expect(":")
            pairs.append((key, self.parse_value()))
            if self.peek() == ",":
                self.pos += 1
            elif self.peek() != "}":
                raise self.error("expected `,` or `}`")
        self.pos += 1
        return tuple(pairs)

    def parse_parens(self, name: str | None) -> _RonStruct | _RonTuple:
        self.expect("(")
        if self.peek() == ")":
            self.pos += 1
            return _RonStruct(name)
        start = self.pos
        match = _IDENT.match(self.text, self.pos)
        if match is not None:
            self.pos = match.end()
            is_struct = self.peek() == ":"
            self.pos = start
        else:
            is_struct = False
        if not is_struct:
            return _RonTuple(name, tuple(self.parse_items(")")))
        fields: dict[str, Any] = {}
        while self.peek() != ")":
            key = self.parse_ident()
            if key in fields:
                raise self.error(f"duplicate field `{key}`")
            self.expect(":")
            fields[key] = self.parse_value()
            if self.peek() == ",":
                self.pos += 1
            elif self.peek() != ")":
                raise self.error("expected `,` or `)`")
        self.pos += 1
        return _RonStruct(name, fields)

    def parse_number(self) -> int | float:
        match = _NUMBER.match(self.text, self.pos)
        if match is None or not any(c.isdigit() for c in match.group()):
            raise self.error("expected a number")
        self.pos = match.end()
        literal = match.group().replace("_", "")
        body = literal.lstrip("+-")
        if body[:2].lower() in ("0x", "0b", "0o"):
            return int(literal, 0)
        if any(c in body for c in ".eE"):
            return float(literal)
        return int(literal, 10)

    def parse_string(self) -> str:
        self.expect('"')
        chars: list[str] = []
        while True:
            if self.pos >= len(self.text):
                raise self.error("unterminated string")
            char = self.text[self.pos]
            self.pos += 1
            if char == '"':
                return "".join(chars)
            chars.append(self.parse_escape() if char == "\\" else char)

    def parse_char(self) -> str:
        self.expect("'")
        if self.pos >= len(self.text):
            raise self.error("unterminated character")
        char = self.text[self.pos]
        self.pos += 1
        if char == "\\":
            char = self.parse_escape()
        if self.text[self.pos : self.pos + 1] != "'":
            raise self.error("expected `'`")
        self.pos += 1
        return char

    def parse_escape(self) -> str:
        code = self.text[self.pos : self.pos + 1]
        self.pos += 1
        if code in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[code]
        if code == "x":
            digits = self.text[self.pos : self.pos + 2]
            self.pos += 2
        elif code == "u" and self.text[self.pos : self.pos + 1] == "{":
            end = self.text.find("}", self.pos)
            if end < 0:
                raise self.error("unterminated unicode escape")
            digits = self.text[self.pos + 1 : end]
            self.pos = end + 1
        elif code == "u":
            digits = self.text[self.pos : self.pos + 4]
            self.pos += 4
        else:
            raise self.error(f"invalid escape `\\{code}`")
        try:
            return chr(int(digits, 16))
        except ValueError:
            raise self.error(f"invalid escape digits `{digits}`") from None

    def parse_raw_string(self) -> str:
        self.pos += 1
        hashes = 0
        while self.text[self.pos] == "#":
            hashes += 1
            self.pos += 1
        self.pos += 1
        terminator = '"' + "#" * hashes
        end = self.text.find(terminator, self.pos)
        if end < 0:
            raise self.error("unterminated raw string")
        value = self.text[self.pos : end]
        self.pos = end + len(terminator)
        return value


def _decode_raw_prototype(value: Any) -> tuple[str, str, ObjectPrototypeGenerator, list[str]]:
    if not isinstance(value, _RonStruct):
        raise _RonError("expected a struct for the object prototype")
    if value.name not in (None, "RawObjectPrototype"):
        raise _RonError(f"expected struct `RawObjectPrototype`, found `{value.name}`")
    fields = value.fields

    def required_string(name: str) -> str:
        if name not in fields:
            raise _RonError(f"missing field `{name}`")
        if not isinstance(fields[name], str):
            raise _RonError(f"field `{name}` must be a string")
        return fields[name]

    identifier = required_string("id")
    display_name = required_string("display_name")

    generator = ObjectPrototypeGenerator.UNKNOWN
    if "generator" in fields:
        raw_generator = fields["generator"]
        if not isinstance(raw_generator, _RonIdent):
            raise _RonError("field `generator` must be a unit variant")
        try:
            generator = ObjectPrototypeGenerator(raw_generator.name)
        except ValueError:
            raise _RonError(f"unknown variant `{raw_generator.name}`") from None

    material_refs: list[str] = []
    if "material_refs" in fields:
        raw_refs = fields["material_refs"]
        if not isinstance(raw_refs, list) or not all(isinstance(ref, str) for ref in raw_refs):
            raise _RonError("field `material_refs` must be a list of strings")
        material_refs = raw_refs
    return identifier, display_name, generator, material_refs


class ObjectPrototypeKey(Enum):
    """Stable lowercase key of a procedural object archetype."""

    TREE = "tree"
    BOULDER = "boulder"
    HERB = "herb"


@dataclass(frozen=True)
class ObjectVisualRender:
    """Visual card rendered for an object prototype."""

    key: str
    card: str


@dataclass(frozen=True)
class ObjectPrototype:
    """Metadata of a procedural object archetype."""

    key: ObjectPrototypeKey
    display_name: str
    ascii_icon: str
    spawn_weight: int
    allowed_biomes: tuple[Biome, ...]

    def render_visual(self) -> ObjectVisualRender:
        key = self.key.value
        card = (
            f"┌─ {self.display_name} ({key}) ─┐\n"
            f"key: {key}\n"
            f"name: {self.display_name}\n"
            f"spawn_weight: {self.spawn_weight}\n"
            f"visual:\n"
            f"{self.ascii_icon}\n"
            "└────────────────────┘\n"
        )
        return ObjectVisualRender(key=key, card=card)


_CATALOG: tuple[ObjectPrototype, ...] = (
    ObjectPrototype(
        key=ObjectPrototypeKey.TREE,
        display_name="Canopy Tree",
        ascii_icon="  &&&\n &&&&&\n   |",
        spawn_weight=5,
        allowed_biomes=(Biome.FOREST, Biome.GRASSLAND),
    ),
    ObjectPrototype(
        key=ObjectPrototypeKey.BOULDER,
        display_name="Weathered Boulder",
        ascii_icon=" /\\\n/##\\\n\\##/",
        spawn_weight=4,
        allowed_biomes=(Biome.ROCKY_HIGHLAND, Biome.RIVER_VALLEY),
    ),
    ObjectPrototype(
        key=ObjectPrototypeKey.HERB,
        display_name="Wild Herb",
        ascii_icon=" \\|/\n--*--\n /|\\",
        spawn_weight=7,
        allowed_biomes=(
            Biome.GRASSLAND,
            Biome.FOREST,
            Biome.RIVER_VALLEY,
            Biome.ROCKY_HIGHLAND,
        ),
    ),
)


def object_catalog() -> tuple[ObjectPrototype, ...]:
    """Every object archetype known to generation and visualization."""
    return _CATALOG


class LifecycleState(Enum):
    """Lifecycle state shared by all procedural game objects."""

    PROCEDURAL = "procedural"
    CREATED = "created"
    ACTIVE = "active"
    DESTROYED = "destroyed"


@dataclass(frozen=True)
class ObjectLifecycle:
    """A lifecycle transition of one object."""

    object_id: ObjectId
    previous_state: LifecycleState
    new_state: LifecycleState


@dataclass(frozen=True)
class ObjectTransform:
    """Position, rotation and scale of a generated object instance."""

    translation: Vec3
    yaw_radians: float
    scale: float


@dataclass
class GeneratedObject:
    """An object instance derived from seed, chunk and index."""

    id: ObjectId
    prototype_key: ObjectPrototypeKey
    chunk: ChunkCoord
    local_x: float
    local_z: float
    transform: ObjectTransform
    slope_height_delta: float
    lifecycle_state: LifecycleState = LifecycleState.PROCEDURAL

    @property
    def local_position(self) -> tuple[float, float]:
        return (self.local_x, self.local_z)

    def create(self) -> ObjectLifecycle:
        return self.transition_to(LifecycleState.CREATED)

    def activate(self) -> ObjectLifecycle:
        return self.transition_to(LifecycleState.ACTIVE)

    def destroy(self) -> ObjectLifecycle:
        return self.transition_to(LifecycleState.DESTROYED)

    def transition_to(self, new_state: LifecycleState) -> ObjectLifecycle:
        previous_state = self.lifecycle_state
        self.lifecycle_state = new_state
        return ObjectLifecycle(self.id, previous_state, new_state)


@dataclass(frozen=True)
class ObjectPlacementConfig:
    """Slope limits applied when placing generated objects."""

    max_slope_height_delta: float = 3.0
    slope_sample_radius_meters: float = 1.0

    def with_max_slope_height_delta(self, max_slope_height_delta: float) -> ObjectPlacementConfig:
        return replace(self, max_slope_height_delta=max_slope_height_delta)


@dataclass(frozen=True)
class ObjectGenerator:
    """Stateless deterministic object generator."""

    objects_per_chunk: int = 8
    terrain_config: TerrainConfig = TerrainConfig()
    placement_config: ObjectPlacementConfig = ObjectPlacementConfig()

    @classmethod
    def with_placement_config(
        cls,
        objects_per_chunk: int,
        terrain_config: TerrainConfig,
        placement_config: ObjectPlacementConfig,
    ) -> ObjectGenerator:
        return cls(objects_per_chunk, terrain_config, placement_config)

    def generate_chunk(self, seed: WorldSeed, chunk: ChunkCoord) -> list[GeneratedObject]:
        """Generate every object of a chunk that passes the slope filter."""
        generated = (self._generate_object(seed, chunk, index) for index in range(self.objects_per_chunk))
        return [obj for obj in generated if obj is not None]

    def _generate_object(self, seed: WorldSeed, chunk: ChunkCoord, index: int) -> GeneratedObject | None:
        instance_seed = seed.derive_child("object.instance", (chunk.x, chunk.z), index)
        local_x = _unit(instance_seed, "object.local_x") * CHUNK_SIZE_METERS
        local_z = _unit(instance_seed, "object.local_z") * CHUNK_SIZE_METERS
        biome = sample_biome(seed, chunk, local_x, local_z)
        prototype = _choose_prototype(instance_seed, biome)
        height = sample_height(seed, chunk, local_x, local_z, self.terrain_config)
        slope = _slope_height_delta(
            seed,
            chunk,
            local_x,
            local_z,
            self.terrain_config,
            self.placement_config.slope_sample_radius_meters,
        )
        if slope > self.placement_config.max_slope_height_delta:
            return None
        bounds = chunk.world_bounds()
        return GeneratedObject(
            id=ObjectId.from_seed_chunk_and_index(seed, (chunk.x, chunk.z), index),
            prototype_key=prototype.key,
            chunk=chunk,
            local_x=local_x,
            local_z=local_z,
            transform=ObjectTransform(
                translation=(bounds.min_x + local_x, height, bounds.min_z + local_z),
                yaw_radians=_unit(instance_seed, "object.yaw") * math.tau,
                scale=0.75 + _unit(instance_seed, "object.scale") * 0.75,
            ),
            slope_height_delta=slope,
        )


def _choose_prototype(seed: WorldSeed, biome: Biome) -> ObjectPrototype:
    candidates = [prototype for prototype in _CATALOG if biome in prototype.allowed_biomes]
    total_weight = sum(prototype.spawn_weight for prototype in candidates)
    ticket = math.floor(_unit(seed, "object.prototype") * total_weight)
    for prototype in candidates:
        if ticket < prototype.spawn_weight:
            return prototype
        ticket -= prototype.spawn_weight
    return _CATALOG[0]


def _slope_height_delta(
    seed: WorldSeed,
    chunk: ChunkCoord,
    local_x: float,
    local_z: float,
    terrain_config: TerrainConfig,
    radius: float,
) -> float:
    def clamp(value: float) -> float:
        return min(CHUNK_SIZE_METERS, max(0.0, value))

    xs = (clamp(local_x - radius), clamp(local_x + radius))
    zs = (clamp(local_z - radius), clamp(local_z + radius))
    samples = [sample_height(seed, chunk, x, z, terrain_config) for x in xs for z in zs]
    return max(samples) - min(samples)


def _unit(seed: WorldSeed, label: str) -> float:
    child = seed.derive_child(label, (), 0).as_u64()
    return (child >> 11) / float(1 << 53)