"""Construction of irradiance volumes from light grid samples."""

from __future__ import annotations

import enum
from collections.abc import Callable, MutableSequence
from dataclasses import dataclass, field
from typing import ClassVar

UVec3 = tuple[int, int, int]
Color = tuple[int, int, int, int]
Multiplier = tuple[float, float, float]

LIGHTMAP_STYLE_NONE = 255


@dataclass(frozen=True)
class IrradianceVolumeMultipliers:
    """Per-direction colour multipliers applied when filling a volume."""

    x: Multiplier = (1.0, 1.0, 1.0)
    y: Multiplier = (1.0, 1.0, 1.0)
    z: Multiplier = (1.0, 1.0, 1.0)
    neg_x: Multiplier = (1.0, 1.0, 1.0)
    neg_y: Multiplier = (1.0, 1.0, 1.0)
    neg_z: Multiplier = (1.0, 1.0, 1.0)

    IDENTITY: ClassVar[IrradianceVolumeMultipliers]
    SLIGHT_SHADOW: ClassVar[IrradianceVolumeMultipliers]


IrradianceVolumeMultipliers.IDENTITY = IrradianceVolumeMultipliers()
IrradianceVolumeMultipliers.SLIGHT_SHADOW = IrradianceVolumeMultipliers(
    x=(1.2, 1.2, 1.2),
    y=(1.4, 1.4, 1.4),
    z=(1.1, 1.1, 1.1),
    neg_x=(0.9, 0.9, 0.9),
    neg_y=(0.7, 0.7, 0.7),
    neg_z=(1.0, 1.0, 1.0),
)


class IrradianceVolumeDirection(enum.Enum):
    """One of the six directional sub-grids, identified by its grid offset."""

    X = (0, 0, 0)
    Y = (0, 0, 1)
    Z = (0, 0, 2)
    NEG_X = (0, 1, 0)
    NEG_Y = (0, 1, 1)
    NEG_Z = (0, 1, 2)

    @classmethod
    def from_offset(cls, offset: UVec3) -> IrradianceVolumeDirection | None:
        """The direction for a grid offset, or None if it names no sub-grid."""
        x, y, z = offset
        if x != 0 or not 0 <= y <= 1 or not 0 <= z <= 2:
            return None
        return cls((x, y, z))

    def offset(self) -> UVec3:
        return self.value


_ALL_DIRECTIONS = (
    (IrradianceVolumeDirection.X, "x"),
    (IrradianceVolumeDirection.Y, "y"),
    (IrradianceVolumeDirection.Z, "z"),
    (IrradianceVolumeDirection.NEG_X, "neg_x"),
    (IrradianceVolumeDirection.NEG_Y, "neg_y"),
    (IrradianceVolumeDirection.NEG_Z, "neg_z"),
)


@dataclass(frozen=True)
class VolumeImage:
    """A 3D RGBA8 image: width by height by depth texels, row-major with x fastest."""

    width: int
    height: int
    depth: int
    data: bytes
    format: str = "rgba8_unorm_srgb"


def _scale_color(color: Color, multiplier: Multiplier) -> Color:
    r, g, b, a = color
    mr, mg, mb = multiplier
    return (
        int(min(max(r * mr, 0.0), 255.0)),
        int(min(max(g * mg, 0.0), 255.0)),
        int(min(max(b * mb, 0.0), 255.0)),
        a,
    )


class IrradianceVolumeBuilder:
    """Colour grid laid out as a 1x2x3 arrangement of six directional sub-grids."""

    def __init__(
        self,
        size: UVec3,
        default_color: Color,
        multipliers: IrradianceVolumeMultipliers = IrradianceVolumeMultipliers.IDENTITY,
    ) -> None:
        sx, sy, sz = size
        self.size: UVec3 = (int(sx), int(sy), int(sz))
        self.full_shape: UVec3 = self.full_size(self.size)
        count = self.full_shape[0] * self.full_shape[1] * self.full_shape[2]
        self.data: list[Color] = [tuple(default_color)] * count  # type: ignore[list-item]
        self.filled: list[bool] = [False] * count
        self.multipliers = multipliers

    @staticmethod
    def full_size(size: UVec3) -> UVec3:
        """Size of the whole texture holding all six sub-grids."""
        x, y, z = size
        return (x, y * 2, z * 3)

    def delinearize(self, idx: int) -> tuple[UVec3, IrradianceVolumeDirection]:
        """Position within its sub-grid and the direction of the cell at ``idx``."""
        fx, fy, _ = self.full_shape
        pos = (idx % fx, (idx // fx) % fy, idx // (fx * fy))
        grid_offset = (0, pos[1] // self.size[1], pos[2] // self.size[2])
        direction = IrradianceVolumeDirection.from_offset(grid_offset)
        if direction is None:
            raise IndexError("idx out of bounds")
        local = tuple(p - o * s for p, o, s in zip(pos, grid_offset, self.size))
        return local, direction  # type: ignore[return-value]

    def linearize(self, pos: UVec3, direction: IrradianceVolumeDirection) -> int:
        """Flat index of ``pos`` within the sub-grid for ``direction``."""
        x, y, z = (p + o * s for p, o, s in zip(pos, direction.offset(), self.size))
        fx, fy, _ = self.full_shape
        return x + fx * (y + fy * z)

    def put(self, pos: UVec3, direction: IrradianceVolumeDirection, color: Color) -> None:
        idx = self.linearize(pos, direction)
        self.data[idx] = tuple(color)  # type: ignore[assignment]
        self.filled[idx] = True

    def put_all(self, pos: UVec3, color: Color) -> None:
        """Write ``color`` into every direction, scaled by that direction's multiplier."""
        for direction, name in _ALL_DIRECTIONS:
            self.put(pos, direction, _scale_color(tuple(color), getattr(self.multipliers, name)))  # type: ignore[arg-type]

    def build(self) -> VolumeImage:
        width, height, depth = self.full_shape
        return VolumeImage(
            width=width,
            height=height,
            depth=depth,
            data=bytes(channel for texel in self.data for channel in texel),
        )


@dataclass
class _Sample:
    color: list[int] = field(default_factory=lambda: [0, 0, 0, 0])
    style: int = LIGHTMAP_STYLE_NONE
    contributors: int = 0


def flood_non_filled(
    input_builders: MutableSequence[IrradianceVolumeBuilder | None],
    style_map_builder: IrradianceVolumeBuilder,
    new_builder: Callable[[], IrradianceVolumeBuilder],
) -> None:
    """Set each unfilled cell to the average of its filled neighbours, per style.

    Cells with no filled neighbour keep their colour; the style map records them
    as filled either way. New slot builders are made with ``new_builder`` when needed.
    """
    present = [builder for builder in input_builders if builder is not None]
    if len({len(builder.data) for builder in present}) > 1:
        raise ValueError("input builders differ in size")
    if any(len(builder.data) != len(builder.filled) for builder in present):
        raise ValueError("input builder data and fill map differ in size")
    if not present:
        return

    reference = present[0]
    filled = list(reference.filled)
    size = reference.size

    for i, was_filled in enumerate(filled):
        if was_filled:
            continue

        pos, direction = reference.delinearize(i)
        low = tuple(max(p - 1, 0) for p in pos)
        high = tuple(min(p + 1, s - 1) for p, s in zip(pos, size))
        samples = [_Sample() for _ in range(4)]

        for x in range(low[0], high[0] + 1):
            for y in range(low[1], high[1] + 1):
                for z in range(low[2], high[2] + 1):
                    offset_idx = reference.linearize((x, y, z), direction)
                    if not filled[offset_idx]:
                        continue
                    styles = style_map_builder.data[offset_idx]
                    for slot, style in enumerate(styles):
                        if style == LIGHTMAP_STYLE_NONE:
                            continue
                        source = input_builders[slot]
                        if source is None:
                            continue
                        color = source.data[offset_idx]
                        for sample in samples:
                            if sample.style == LIGHTMAP_STYLE_NONE:
                                sample.style = style
                                sample.contributors = 1
                                sample.color = list(color)
                                break
                            if sample.style != style:
                                continue
                            sample.contributors += 1
                            sample.color = [a + b for a, b in zip(sample.color, color)]
                            break

        for slot, sample in enumerate(samples):
            if sample.contributors == 0:
                continue
            slot_builder = input_builders[slot]
            if slot_builder is None:
                slot_builder = new_builder()
                input_builders[slot] = slot_builder
            slot_builder.data[i] = tuple(c // sample.contributors for c in sample.color)  # type: ignore[assignment]
            slot_builder.filled[i] = True

        style_map_builder.data[i] = tuple(sample.style for sample in samples)  # type: ignore[assignment]
        style_map_builder.filled[i] = True