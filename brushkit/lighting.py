"""Animation of lightmap styles and its serialized form."""

from __future__ import annotations

import enum
import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from brushkit.brush import Vec3

MAX_LIGHTMAP_FRAMES = 64

_USIZE_MAX = 2**64 - 1
_FIELDS = ("sequence", "speed", "interpolate")


class AnimatedLightingType(enum.Enum):
    """What kind of image an animated lighting set composites."""

    # 2D textures; differing sizes are stretched.
    LIGHTMAP = "lightmap"
    # 3D textures; differing sizes repeat.
    IRRADIANCE_VOLUME = "irradiance_volume"


def _vec3(value: Iterable[Any]) -> Vec3:
    try:
        x, y, z = value
        return (float(x), float(y), float(z))
    except (TypeError, ValueError) as err:
        raise ValueError(f"expected a 3-component vector, got {value!r}") from err


def _to_index(value: float) -> int:
    """Float to unsigned index, saturating like a float-to-usize cast."""
    if math.isnan(value) or value <= 0.0:
        return 0
    if math.isinf(value):
        return _USIZE_MAX
    return min(int(value), _USIZE_MAX)


@dataclass(frozen=True)
class LightingAnimator:
    """Sequence of RGB multipliers applied to a lightmap style over time."""

    sequence: tuple[Vec3, ...] = ((1.0, 1.0, 1.0),)
    # Frames of the sequence to advance each second.
    speed: float = 0.0
    # 0 swaps frames instantly, 1 blends smoothly, 0.5 reaches the next frame halfway.
    interpolate: float = 0.0

    def __post_init__(self) -> None:
        frames = tuple(_vec3(frame) for frame in self.sequence)
        if len(frames) > MAX_LIGHTMAP_FRAMES:
            raise ValueError(
                f"sequence has {len(frames)} frames, but the max is {MAX_LIGHTMAP_FRAMES}"
            )
        object.__setattr__(self, "sequence", frames)
        object.__setattr__(self, "speed", float(self.speed))
        object.__setattr__(self, "interpolate", float(self.interpolate))

    @property
    def sequence_len(self) -> int:
        return len(self.sequence)

    @classmethod
    def new(cls, speed: float, interpolate: float, sequence: Sequence[Vec3]) -> LightingAnimator:
        """Animator cycling through ``sequence`` at ``speed`` frames per second."""
        return cls(sequence=tuple(sequence), speed=speed, interpolate=interpolate)

    @classmethod
    def unanimated(cls, rgb: Vec3) -> LightingAnimator:
        """Animator that always yields ``rgb``."""
        return cls(sequence=(rgb,), speed=0.0, interpolate=0.0)

    def sample(self, seconds: float) -> Vec3:
        """The multiplier at ``seconds`` of elapsed time."""
        if not self.sequence:
            raise ValueError("cannot sample an animator with an empty sequence")
        position = seconds * self.speed
        frame = _to_index(position)
        count = len(self.sequence)
        current = self.sequence[frame % count]

        if self.interpolate > 0.0:
            following = self.sequence[(frame + 1) % count]
            t = min(math.fmod(position, 1.0) / self.interpolate, 1.0)
            current = tuple(a + (b - a) * t for a, b in zip(current, following))  # type: ignore[assignment]
        return current

    def to_dict(self) -> dict[str, Any]:
        """Serializable form: the active frames, speed and interpolation."""
        return {
            "sequence": [list(frame) for frame in self.sequence],
            "speed": self.speed,
            "interpolate": self.interpolate,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LightingAnimator:
        """Read the form written by ``to_dict``; unknown keys are ignored."""
        missing = [name for name in _FIELDS if name not in data]
        if missing:
            raise ValueError(f"missing field `{missing[0]}`")
        return cls._build(data["sequence"], data["speed"], data["interpolate"])

    @classmethod
    def from_sequence(cls, data: Sequence[Any]) -> LightingAnimator:
        """Read the positional form ``[sequence, speed, interpolate]``."""
        items = list(data)
        if len(items) != 3:
            raise ValueError(
                f"invalid length {len(items)}, expected struct LightingAnimator with 3 elements"
            )
        return cls._build(*items)

    @classmethod
    def _build(cls, sequence: Any, speed: Any, interpolate: Any) -> LightingAnimator:
        frames = tuple(_vec3(frame) for frame in sequence)
        return cls(sequence=frames, speed=float(speed), interpolate=float(interpolate))


@dataclass
class LightingAnimators:
    """The current animator for each lightmap style."""

    values: dict[int, LightingAnimator] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"values": {str(style): animator.to_dict() for style, animator in self.values.items()}}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LightingAnimators:
        if "values" not in data:
            raise ValueError("missing field `values`")
        values: dict[int, LightingAnimator] = {}
        for key, animator in data["values"].items():
            try:
                style = int(key)
            except (TypeError, ValueError) as err:
                raise ValueError(f"invalid lightmap style {key!r}") from err
            if not 0 <= style <= 255:
                raise ValueError(f"lightmap style {style} is out of range")
            values[style] = LightingAnimator.from_dict(animator)
        return cls(values=values)