import enum

import pytest

from brushkit.fgd import (
    ChoicesKey,
    FgdChoiceError,
    fgd_parse,
    fgd_to_string_unquoted,
    property_type_choices,
)


class Door(enum.Enum):
    OPEN = 1
    CLOSED = 2
    LOCKED = 4


Door.OPEN.__doc__ = " Swings freely"


class Shade(enum.Enum):
    RED = "r"
    GREEN = "g"


def test_choices_use_member_names_by_default():
    assert property_type_choices(Door, False) == [
        (ChoicesKey("OPEN"), " Swings freely"),
        (ChoicesKey("CLOSED"), "CLOSED"),
        (ChoicesKey("LOCKED"), "LOCKED"),
    ]


def test_choices_with_number_keys():
    keys = [key for key, _ in property_type_choices(Door, True)]
    assert keys == [ChoicesKey(1), ChoicesKey(2), ChoicesKey(4)]
    assert all(key.is_integer for key in keys)


def test_string_keys_are_not_integers():
    keys = [key for key, _ in property_type_choices(Shade, False)]
    assert [key.is_integer for key in keys] == [False, False]


@pytest.mark.parametrize("member", list(Door))
@pytest.mark.parametrize("number_key", [False, True])
def test_round_trip(member, number_key):
    text = fgd_to_string_unquoted(member, number_key)
    assert fgd_parse(Door, text, number_key) is member


def test_number_key_text_is_discriminant():
    assert fgd_to_string_unquoted(Door.LOCKED, True) == "4"
    assert fgd_parse(Door, "2", True) is Door.CLOSED


def test_name_key_text_is_name():
    assert fgd_to_string_unquoted(Shade.GREEN) == "GREEN"


def test_invalid_text_lists_variants():
    with pytest.raises(FgdChoiceError, match="isn't a valid Door! Valid variants are OPEN, CLOSED, LOCKED"):
        fgd_parse(Door, "AJAR", False)


def test_parse_is_case_sensitive():
    with pytest.raises(ValueError):
        fgd_parse(Door, "open", False)


def test_number_key_does_not_accept_names():
    with pytest.raises(FgdChoiceError):
        fgd_parse(Door, "OPEN", True)


def test_number_key_requires_integer_values():
    with pytest.raises(ValueError, match="doesn't have a discriminant"):
        property_type_choices(Shade, True)


def test_only_enums_supported():
    with pytest.raises(TypeError, match="only enums"):
        property_type_choices(dict, False)