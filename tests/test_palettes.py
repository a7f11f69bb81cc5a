import sys
from pathlib import Path

import numpy as np
import pytest

# Add repo root to path
ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from mandelgrid.errors import InvalidArgument
from mandelgrid.palettes import (
    PALETTES,
    apply_palette,
    color_for,
    get_default_palette,
    get_palette,
    list_palette_names,
    make_palette,
)


@pytest.fixture
def palette():
    return make_palette([(255, 0, 0), (0, 255, 0), (0, 0, 255, 128)])


def test_make_palette_adds_alpha(palette):
    assert palette.shape == (3, 4)
    assert palette.dtype == np.uint8
    assert tuple(palette[0]) == (255, 0, 0, 255)
    assert tuple(palette[2]) == (0, 0, 255, 128)
    assert not palette.flags.writeable


@pytest.mark.parametrize("colors", [[], [(1, 2)], [(0, 0, 300)], [(-1, 0, 0)]])
def test_make_palette_rejects_bad_input(colors):
    with pytest.raises(InvalidArgument):
        make_palette(colors)


def test_color_for_is_periodic(palette):
    for k in range(20):
        assert np.array_equal(color_for(k, palette), color_for(k + len(palette), palette))
    assert tuple(color_for(4, palette)) == (0, 255, 0, 255)


def test_color_for_empty_palette():
    with pytest.raises(InvalidArgument):
        color_for(3, [])


def test_apply_palette_matches_color_for(palette):
    iterations = np.arange(12, dtype=np.int32).reshape(3, 4)
    colors = apply_palette(iterations, palette)
    assert colors.shape == (3, 4, 4)
    assert not colors.flags.writeable
    for row in range(3):
        for col in range(4):
            assert np.array_equal(colors[row, col],
                                  color_for(int(iterations[row, col]), palette))


def test_apply_palette_accepts_read_only_grid(palette):
    iterations = np.full((2, 2), 7, dtype=np.int32)
    iterations.setflags(write=False)
    colors = apply_palette(iterations, palette)
    assert (colors == palette[7 % 3]).all()


def test_apply_palette_empty_palette():
    with pytest.raises(InvalidArgument):
        apply_palette(np.zeros((2, 2), dtype=np.int32), np.zeros((0, 4), dtype=np.uint8))


def test_classic_palette():
    classic = get_default_palette()
    assert classic.shape == (16, 4)
    assert tuple(classic[0]) == (66, 30, 15, 255)
    assert tuple(classic[-1]) == (106, 52, 3, 255)


@pytest.mark.parametrize("name", list(PALETTES))
def test_registered_palettes_are_valid(name):
    pal = get_palette(name)
    assert pal.ndim == 2
    assert pal.shape[0] > 0
    assert pal.shape[1] == 4


def test_unknown_palette():
    with pytest.raises(InvalidArgument):
        get_palette("Nope")


def test_list_palette_names():
    assert list_palette_names()[0] == "Classic"
