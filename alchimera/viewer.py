"""Text visualizer for every procedural object archetype."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from alchimera.objects import object_catalog

_HEADER = "Procedural Alchimera Objects\n============================\n"
_KEY_PREFIX = "key: "


def render_all_objects() -> str:
    """Render every known object archetype as a visual card listing."""
    return _HEADER + "".join("\n" + prototype.render_visual().card for prototype in object_catalog())


def rendered_prototype_keys(rendered: str) -> list[str]:
    """Extract the prototype keys from rendered viewer output."""
    keys = []
    for line in rendered.split("\n"):
        line = line.removesuffix("\r")
        if line.startswith(_KEY_PREFIX):
            keys.append(line[len(_KEY_PREFIX):])
    return keys


def main(argv: Sequence[str] | None = None) -> int:
    """Print all object archetypes to standard output."""
    sys.stdout.write(render_all_objects())
    return 0