"""Choice properties built from enumerations."""

from __future__ import annotations

import enum
from dataclasses import dataclass


@dataclass(frozen=True)
class ChoicesKey:
    """Key of one choice: an integer for number-keyed enums, else the member name."""

    value: int | str

    @property
    def is_integer(self) -> bool:
        return isinstance(self.value, int)

    def __str__(self) -> str:
        return str(self.value)


class FgdChoiceError(ValueError):
    """Raised when text names no member of a choices enumeration."""


def _members(enum_type: type) -> list[enum.Enum]:
    if not (isinstance(enum_type, type) and issubclass(enum_type, enum.Enum)):
        raise TypeError("Currently only enums supported")
    return list(enum_type)


def _key(member: enum.Enum, number_key: bool) -> ChoicesKey:
    if number_key:
        value = member.value
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(
                f"Variant `{member.name}` doesn't have a discriminant! "
                f"Add `{member.name} = <number>`."
            )
        return ChoicesKey(int(value))
    return ChoicesKey(member.name)


def _title(member: enum.Enum) -> str:
    doc = getattr(member, "__dict__", {}).get("__doc__")
    return doc if isinstance(doc, str) else member.name


def property_type_choices(
    enum_type: type, number_key: bool = False
) -> list[tuple[ChoicesKey, str]]:
    """The (key, title) pairs of a choices property, in member order.

    A member's title is its own ``__doc__`` when one was set on it, else its name.
    """
    return [(_key(member, number_key), _title(member)) for member in _members(enum_type)]


def fgd_to_string_unquoted(member: enum.Enum, number_key: bool = False) -> str:
    """The text a member is written as."""
    return str(_key(member, number_key).value)


def fgd_parse(enum_type: type, text: str, number_key: bool = False) -> enum.Enum:
    """The member written as ``text``."""
    table = {fgd_to_string_unquoted(member, number_key): member for member in _members(enum_type)}
    try:
        return table[text]
    except KeyError:
        raise FgdChoiceError(
            f"{text} isn't a valid {enum_type.__name__}! "
            f"Valid variants are {', '.join(table)}"
        ) from None