"""
Palette definitions and the iteration-count to colour mapping.

A palette is an immutable numpy array of shape (N, 4) with RGBA values
(uint8), N > 0. Colours are picked by periodic indexing: an iteration
count k gets palette[k % N], so the palette repeats as counts grow.

To add a new palette:
1. Define a create_palette_xxx() function that returns the colour array
2. Add it to the PALETTES dictionary at the bottom of this file
"""

import numpy as np

from .compute import apply_palette_indexed
from .errors import AllocationFailure, InvalidArgument


NUM_COLORS = 64  # Length of the generated (non-Classic) palettes


def make_palette(colors):
    """
    Build a read-only palette from a sequence of RGB or RGBA colours.

    RGB entries get an alpha of 255.

    Raises:
        InvalidArgument if the sequence is empty or not a list of colours
    """
    try:
        rows = [tuple(int(v) for v in color) for color in colors]
    except (TypeError, ValueError):
        raise InvalidArgument("palette must be a sequence of RGB(A) colours") from None
    rows = [row + (255,) if len(row) == 3 else row for row in rows]
    if not rows or any(len(row) != 4 for row in rows):
        raise InvalidArgument("palette must be a non-empty sequence of RGB(A) colours")

    arr = np.array(rows, dtype=np.int64)
    if arr.min() < 0 or arr.max() > 255:
        raise InvalidArgument("palette channel values must be in 0..255")
    palette = arr.astype(np.uint8)
    palette.setflags(write=False)
    return palette


def _check_palette(palette):
    if palette is None or len(palette) == 0:
        raise InvalidArgument("palette must not be empty")


def color_for(iteration_count, palette):
    """Colour for one iteration count: palette[iteration_count % len(palette)]."""
    _check_palette(palette)
    return palette[iteration_count % len(palette)]


def apply_palette(iterations, palette):
    """
    Map a whole 2D iteration array to an RGBA colour grid.

    Returns:
        New read-only (height, width, 4) uint8 array
    """
    _check_palette(palette)
    palette = np.ascontiguousarray(palette, dtype=np.uint8)
    height, width = iterations.shape
    try:
        out = np.empty((height, width, palette.shape[1]), dtype=np.uint8)
    except MemoryError as e:
        raise AllocationFailure("cannot allocate %dx%d colour grid" % (width, height)) from e
    apply_palette_indexed(iterations, palette, out)
    out.setflags(write=False)
    return out


def create_palette_classic():
    """
    Classic palette: brown -> deep blue -> light blue -> yellow -> brown.

    Sixteen hand-picked colours that cycle smoothly, so neighbouring
    iteration counts get neighbouring shades.
    """
    return make_palette([
        (66, 30, 15), (25, 7, 26), (9, 1, 47), (4, 4, 73),
        (0, 7, 100), (12, 44, 138), (24, 82, 177), (57, 125, 209),
        (134, 181, 229), (211, 236, 248), (241, 233, 191), (248, 201, 95),
        (255, 170, 0), (204, 128, 0), (153, 87, 0), (106, 52, 3),
    ])


def create_palette_hot():
    """
    Hot palette: black -> red -> orange -> yellow -> white.
    """
    colors = []
    for i in range(NUM_COLORS):
        t = (i / (NUM_COLORS - 1)) ** 0.8  # Power < 1 stretches toward bright colors
        colors.append((
            int(min(255, 255 * min(1, t * 2.5))),
            int(min(255, 255 * max(0, (t - 0.4) * 2.5))),
            int(min(255, 255 * max(0, (t - 0.7) * 3.3))),
        ))
    return make_palette(colors)


def create_palette_ocean():
    """
    Ocean palette: deep blue -> cyan -> white.
    """
    colors = []
    for i in range(NUM_COLORS):
        t = i / (NUM_COLORS - 1)
        colors.append((
            int(min(255, 255 * max(0, (t - 0.5) * 2))),
            int(min(255, 255 * t)),
            int(min(255, 50 + 205 * t)),
        ))
    return make_palette(colors)


def create_palette_rainbow():
    """
    Rainbow palette: one full hue rotation at full saturation.
    """
    colors = []
    for i in range(NUM_COLORS):
        h = i / NUM_COLORS
        if h < 1/6:
            colors.append((255, int(255 * h * 6), 0))
        elif h < 2/6:
            colors.append((int(255 * (2/6 - h) * 6), 255, 0))
        elif h < 3/6:
            colors.append((0, 255, int(255 * (h - 2/6) * 6)))
        elif h < 4/6:
            colors.append((0, int(255 * (4/6 - h) * 6), 255))
        elif h < 5/6:
            colors.append((int(255 * (h - 4/6) * 6), 0, 255))
        else:
            colors.append((255, 0, int(255 * (1 - h) * 6)))
    return make_palette(colors)


def create_palette_grayscale():
    """Grayscale palette: black -> white."""
    colors = []
    for i in range(NUM_COLORS):
        v = int(255 * i / (NUM_COLORS - 1))
        colors.append((v, v, v))
    return make_palette(colors)


# Registry of all available palettes.
# Keys are display names, values are factory functions.
PALETTES = {
    'Classic': create_palette_classic,
    'Hot': create_palette_hot,
    'Ocean': create_palette_ocean,
    'Rainbow': create_palette_rainbow,
    'Grayscale': create_palette_grayscale,
}


def get_palette(name):
    """
    Get a palette by name.

    Raises:
        InvalidArgument if name is not in PALETTES
    """
    try:
        factory = PALETTES[name]
    except KeyError:
        raise InvalidArgument(
            "unknown palette %r (available: %s)" % (name, ", ".join(PALETTES))
        ) from None
    return factory()


def get_default_palette():
    """Get the default palette (Classic)."""
    return create_palette_classic()


def list_palette_names():
    """Get list of available palette names."""
    return list(PALETTES.keys())
