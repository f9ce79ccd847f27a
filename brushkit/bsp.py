"""Hull-only brushes and model lookup for compiled maps."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field

from brushkit.brush import BrushPlane, ConvexHull

GENERIC_MATERIAL_PREFIX = "GenericMaterial_"
TEXTURE_PREFIX = "Texture_"

_MODEL_INDEX = re.compile(r"\+?[0-9]+")


@dataclass
class BspBrush(ConvexHull):
    """Like a Brush, but with hull geometry only and no texture information."""

    brush_planes: list[BrushPlane] = field(default_factory=list)

    def planes(self) -> Iterator[BrushPlane]:
        return iter(self.brush_planes)


def get_model_idx(classname: str, model_property: str | None) -> int | None:
    """Model index of an entity: 0 for worldspawn, else from a ``*N`` model property."""
    if classname == "worldspawn":
        return 0
    if model_property is None:
        return None
    trimmed = model_property.lstrip("*")
    if trimmed == model_property:
        return None
    if not _MODEL_INDEX.fullmatch(trimmed):
        return None
    return int(trimmed)