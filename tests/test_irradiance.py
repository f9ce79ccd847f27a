import pytest

from brushkit.irradiance import (
    LIGHTMAP_STYLE_NONE,
    IrradianceVolumeBuilder,
    IrradianceVolumeDirection,
    IrradianceVolumeMultipliers,
    flood_non_filled,
)

IDENTITY = IrradianceVolumeMultipliers.IDENTITY
EMPTY = (0, 0, 0, 255)
NO_STYLES = (255, 255, 255, 255)
D = IrradianceVolumeDirection


def _new_builder(size=(3, 1, 1)):
    return IrradianceVolumeBuilder(size, EMPTY, IDENTITY)


def _style_builder(size=(3, 1, 1)):
    return IrradianceVolumeBuilder(size, NO_STYLES, IDENTITY)


def test_full_size_layout():
    assert IrradianceVolumeBuilder.full_size((2, 3, 4)) == (2, 3 * 2, 4 * 3)


@pytest.mark.parametrize("direction", list(D))
def test_linearize_delinearize_round_trip(direction):
    builder = IrradianceVolumeBuilder((2, 3, 4), EMPTY, IDENTITY)
    seen = set()
    for x in range(2):
        for y in range(3):
            for z in range(4):
                idx = builder.linearize((x, y, z), direction)
                assert builder.delinearize(idx) == ((x, y, z), direction)
                seen.add(idx)
    assert len(seen) == 2 * 3 * 4


def test_every_index_maps_to_a_direction():
    builder = IrradianceVolumeBuilder((2, 2, 2), EMPTY, IDENTITY)
    for idx in range(len(builder.data)):
        pos, direction = builder.delinearize(idx)
        assert builder.linearize(pos, direction) == idx


def test_delinearize_out_of_bounds():
    builder = IrradianceVolumeBuilder((2, 2, 2), EMPTY, IDENTITY)
    with pytest.raises(IndexError):
        builder.delinearize(len(builder.data))


@pytest.mark.parametrize("offset", [(1, 0, 0), (0, 2, 0), (0, 0, 3)])
def test_from_offset_invalid(offset):
    assert D.from_offset(offset) is None


def test_from_offset_valid():
    assert D.from_offset((0, 1, 2)) is D.NEG_Z
    assert D.NEG_Z.offset() == (0, 1, 2)


def test_put_all_identity_fills_all_directions():
    builder = IrradianceVolumeBuilder((2, 2, 2), EMPTY, IDENTITY)
    color = (10, 20, 30, 255)
    builder.put_all((1, 0, 1), color)
    for direction in D:
        idx = builder.linearize((1, 0, 1), direction)
        assert builder.data[idx] == color
        assert builder.filled[idx]
    assert sum(builder.filled) == 6


def test_put_all_clamps_and_scales():
    builder = IrradianceVolumeBuilder((1, 1, 1), EMPTY, IrradianceVolumeMultipliers.SLIGHT_SHADOW)
    builder.put_all((0, 0, 0), (250, 0, 100, 7))
    x = builder.data[builder.linearize((0, 0, 0), D.X)]
    assert x[0] == 255
    assert x[1] == 0
    assert x[3] == 7
    assert builder.data[builder.linearize((0, 0, 0), D.NEG_Z)] == (250, 0, 100, 7)


def test_build_dimensions_and_data():
    builder = IrradianceVolumeBuilder((2, 1, 1), (1, 2, 3, 4), IDENTITY)
    image = builder.build()
    assert (image.width, image.height, image.depth) == IrradianceVolumeBuilder.full_size((2, 1, 1))
    assert len(image.data) == image.width * image.height * image.depth * 4
    assert image.data[:4] == bytes((1, 2, 3, 4))


def test_flood_copies_single_neighbour():
    slot0 = _new_builder()
    styles = _style_builder()
    color = (10, 20, 30, 255)
    slot0.put_all((0, 0, 0), color)
    styles.put_all((0, 0, 0), (1, 255, 255, 255))
    builders = [slot0, None, None, None]

    flood_non_filled(builders, styles, _new_builder)

    idx = slot0.linearize((1, 0, 0), D.X)
    assert slot0.data[idx] == color
    assert slot0.filled[idx]
    assert styles.data[idx] == (1, 255, 255, 255)

    far = slot0.linearize((2, 0, 0), D.X)
    assert slot0.data[far] == EMPTY
    assert not slot0.filled[far]
    assert styles.data[far] == (LIGHTMAP_STYLE_NONE,) * 4
    assert styles.filled[far]


def test_flood_averages_same_style():
    slot0 = _new_builder()
    styles = _style_builder()
    slot0.put_all((0, 0, 0), (10, 10, 10, 255))
    slot0.put_all((2, 0, 0), (20, 20, 20, 255))
    styles.put_all((0, 0, 0), (1, 255, 255, 255))
    styles.put_all((2, 0, 0), (1, 255, 255, 255))

    flood_non_filled([slot0, None, None, None], styles, _new_builder)

    idx = slot0.linearize((1, 0, 0), D.Y)
    assert slot0.data[idx] == (15, 15, 15, 255)


def test_flood_creates_builder_for_second_style():
    slot0 = _new_builder()
    styles = _style_builder()
    slot0.put_all((0, 0, 0), (10, 10, 10, 255))
    slot0.put_all((2, 0, 0), (40, 50, 60, 255))
    styles.put_all((0, 0, 0), (1, 255, 255, 255))
    styles.put_all((2, 0, 0), (2, 255, 255, 255))
    builders = [slot0, None, None, None]

    flood_non_filled(builders, styles, _new_builder)

    assert builders[1] is not None
    idx = slot0.linearize((1, 0, 0), D.X)
    assert builders[1].data[idx] == (40, 50, 60, 255)
    assert slot0.data[idx] == (10, 10, 10, 255)
    assert styles.data[idx] == (1, 2, 255, 255)


def test_flood_without_builders_changes_nothing():
    styles = _style_builder()
    before = list(styles.data)
    flood_non_filled([None, None, None, None], styles, _new_builder)
    assert styles.data == before
    assert not any(styles.filled)


def test_flood_rejects_mismatched_builders():
    with pytest.raises(ValueError):
        flood_non_filled(
            [_new_builder((3, 1, 1)), _new_builder((2, 1, 1)), None, None],
            _style_builder(),
            _new_builder,
        )