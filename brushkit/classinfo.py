"""Class metadata helpers: sizes, documentation and class names."""

from __future__ import annotations

import enum
import math
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from decimal import Decimal


class QuakeClassType(enum.Enum):
    """Kind of entity class."""

    BASE = "Base"
    POINT = "Point"
    SOLID = "Solid"


_NUMBER = re.compile(r"-?\d+(?:\.\d*)?(?:[eE][+-]?\d+)?")


def _format_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return format(Decimal(repr(value)).normalize(), "f")


def _parse_numbers(part: str, names: tuple[str, str, str]) -> list[float]:
    tokens = part.split()
    values = []
    for index, name in enumerate(names):
        if index >= len(tokens) or not _NUMBER.fullmatch(tokens[index]):
            raise ValueError(f"Size: expected a number for {name}")
        values.append(float(tokens[index]))
    return values


@dataclass(frozen=True)
class Size:
    """Editor bounding box of an entity, from one corner to the other."""

    from_x: float
    from_y: float
    from_z: float
    to_x: float
    to_y: float
    to_z: float

    @classmethod
    def parse(cls, text: str) -> Size:
        """Parse ``"<-x> <-y> <-z>, <+x> <+y> <+z>"``."""
        head, sep, tail = text.partition(",")
        values = _parse_numbers(head, ("from_x", "from_y", "from_z"))
        if not sep or len(head.split()) != 3:
            raise ValueError("Size: expected comma")
        if "," in tail:
            raise ValueError("Size: unexpected trailing input")
        values += _parse_numbers(tail, ("to_x", "to_y", "to_z"))
        if len(tail.split()) != 3:
            raise ValueError("Size: unexpected trailing input")
        return cls(*values)

    def __str__(self) -> str:
        low = " ".join(_format_number(v) for v in (self.from_x, self.from_y, self.from_z))
        high = " ".join(_format_number(v) for v in (self.to_x, self.to_y, self.to_z))
        return f"{low}, {high}"


def extract_doc(value: str, doc: str | None) -> str:
    """Append one documentation line to ``doc``; an empty line becomes a newline."""
    line = value.strip().replace('"', "''")
    text = doc or ""
    if text:
        text += " "
    return text + (line if line else "\n")


def _words(text: str) -> Iterator[str]:
    lower, upper, boundary = "lower", "upper", "boundary"
    for chunk in re.split(r"[\W_]+", text):
        start = 0
        mode = boundary
        for i, ch in enumerate(chunk):
            if i + 1 == len(chunk):
                yield chunk[start:]
                break
            nxt = chunk[i + 1]
            next_mode = lower if ch.islower() else upper if ch.isupper() else mode
            if next_mode == lower and nxt.isupper():
                yield chunk[start : i + 1]
                start = i + 1
                mode = boundary
            elif mode == upper and ch.isupper() and nxt.islower():
                yield chunk[start:i]
                start = i
                mode = boundary
            else:
                mode = next_mode


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def to_snake_case(text: str) -> str:
    return "_".join(word.lower() for word in _words(text))


def to_shouty_snake_case(text: str) -> str:
    return "_".join(word.upper() for word in _words(text))


def to_lower_camel_case(text: str) -> str:
    return "".join(
        word.lower() if index == 0 else _capitalize(word)
        for index, word in enumerate(_words(text))
    )


def to_pascal_case(text: str) -> str:
    return "".join(_capitalize(word) for word in _words(text))


_CASINGS: dict[str, Callable[[str], str]] = {
    "snake_case": to_snake_case,
    "UPPER_SNAKE_CASE": to_shouty_snake_case,
    "lowercase": str.lower,
    "UPPERCASE": str.upper,
    "camelCase": to_lower_camel_case,
    "PascalCase": to_pascal_case,
}


def convert_classname(ident: str, casing: str) -> str:
    """Convert a type name with a casing such as ``snake_case``."""
    try:
        convert = _CASINGS[casing]
    except KeyError:
        raise ValueError(
            "Invalid casing! Valid casings are snake_case, UPPER_SNAKE_CASE, "
            "lowercase, UPPERCASE, camelCase, and PascalCase."
        ) from None
    return convert(ident)


_STRING_LITERAL = re.compile(r'"((?:[^"\\]|\\.)*)"', re.DOTALL)
_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0", "\\": "\\", '"': '"', "'": "'"}


def _unescape(text: str) -> str:
    return re.sub(r"\\(.)", lambda m: _ESCAPES.get(m.group(1), m.group(1)), text, flags=re.DOTALL)


def class_name(ident: str, classname: str | None = None) -> str:
    """Name of a class as written to definition files.

    ``classname`` is the attribute text: a casing name such as ``PascalCase``, or a
    quoted string such as ``"worldspawn"``. Only its first token counts. Without it,
    the type name in snake_case is used.
    """
    text = (classname or "").strip()
    if not text:
        return to_snake_case(ident)
    literal = _STRING_LITERAL.match(text)
    if literal:
        return _unescape(literal.group(1))
    name = _IDENTIFIER.match(text)
    if name:
        return convert_classname(ident, name.group(0))
    raise ValueError(
        'Invalid arguments! Must either be a casing like snake_case, or a name like "worldspawn"!'
    )


def compare_path(path: str, name: str) -> bool:
    """True if ``path`` has a single segment, that segment being ``name``."""
    stripped = path.strip()
    if stripped.startswith("::"):
        stripped = stripped[2:]
    segments = [segment.strip().split("<", 1)[0].strip() for segment in stripped.split("::")]
    return len(segments) == 1 and segments[0] == name