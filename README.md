# alchimera

Deterministic procedural world generation. Every result is derived from a
`WorldSeed` and, where it applies, a chunk coordinate. The same inputs
always give the same world.

The package has no third-party dependencies.

## Modules

- `alchimera.seed`: `WorldSeed`, a 64-bit seed with `derive_child(label,
  coords, index)` for deterministic child seeds; `ObjectId` (built with
  `ObjectId.from_seed_chunk_and_index`); and the validated identifiers
  `PrototypeId` and `MaterialId`, which raise `IdError` unless they are
  lowercase path segments of `[a-z0-9_.-]` separated by `/`.
- `alchimera.chunk`: `ChunkCoord` for 64 m square chunks on the X/Z plane
  (`CHUNK_SIZE_METERS`). `ChunkCoord.from_world_position` floors, so
  `-0.01` falls in chunk `-1`. `world_bounds()` returns a `ChunkWorldBounds`.
- `alchimera.terrain`: `sample_height` and `HeightSampler`. Heights stay
  within a `TerrainConfig` range (default `-8.0` to `36.0`).
- `alchimera.biome`: `sample_biome` and `BiomeSampler`. Each returns a
  `Biome`: `GRASSLAND`, `FOREST`, `ROCKY_HIGHLAND` or `RIVER_VALLEY`.
- `alchimera.mesh`: `generate_terrain_mesh` and `TerrainMeshGenerator`.
  They build a `TerrainMeshData` holding positions, unit normals, UVs and
  triangle indices for a chunk, at the grid resolution set by
  `TerrainMeshConfig`.
- `alchimera.objects`: the object catalogue (`object_catalog()`), with
  `render_visual()` text cards for each prototype. `ObjectGenerator`
  places objects and filters them by slope through `ObjectPlacementConfig`.
  `GeneratedObject` has lifecycle transitions (`create`, `activate`,
  `destroy`), each returning an `ObjectLifecycle` event.
  `load_object_prototype_ron` reads a prototype definition written in RON.
  It raises `ObjectPrototypeDefinitionError`, whose `kind` says what went
  wrong: a parse error, an invalid id, a missing generator or a missing
  material reference.
- `alchimera.modification_log`: `ChunkModificationLog` records removed,
  damaged and player-placed objects (`ObjectPlacementOverride`) for one
  chunk. `apply_to_generated` lays them over generated object ids. The log
  saves with `to_save_json()` and loads with `from_save_json()`; loading
  raises `ValueError` on malformed input.
- `alchimera.rock` and `alchimera.tree`: `generate_rock` and
  `generate_tree` build mesh-source data from a seed and a `RockConfig` or
  `TreeConfig`. Each assembly has a compact `summary()`.
- `alchimera.viewer`: `render_all_objects()` and `rendered_prototype_keys()`.

## Installation

```
pip install .
```

## Example

```python
from alchimera.seed import WorldSeed
from alchimera.chunk import ChunkCoord
from alchimera.objects import ObjectGenerator
from alchimera.tree import TreeConfig, generate_tree

seed = WorldSeed(42)
chunk = ChunkCoord.from_world_position(100.0, -20.0)
for obj in ObjectGenerator().generate_chunk(seed, chunk):
    print(obj.prototype_key.value, obj.transform.translation)

print(generate_tree(seed, TreeConfig()).summary())
```

## Object viewer

This command prints a text card for every object archetype in the catalogue:

```
alchimera-object-viewer
```

## What it does not do

The package generates data only. It does not open a window or render
anything in 3D. It has no game loop, no player and no chunk streaming, and
it does not report runtime metrics. Meshes and assemblies are plain Python
lists and tuples, which a rendering engine has to consume itself.

## Tests

```
pip install .[test]
pytest
```