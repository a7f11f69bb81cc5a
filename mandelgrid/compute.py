"""
Mandelbrot computation kernels using Numba JIT compilation.

This module contains the performance-critical functions. They are
JIT-compiled and know nothing about viewports or threads:
- Escape-time iteration for a single point with periodicity detection
- Row-range computation writing into an existing iteration array
- Palette lookup over a whole iteration array

The row kernel is compiled with nogil=True so that several Python
threads can run it concurrently on disjoint row bands.
"""

import numpy as np
from numba import jit, prange


# Orbit components closer than this to the reference point count as periodic
PERIODICITY_EPSILON = 1.0e-7

# Iterations between refreshes of the periodicity reference point
DEFAULT_PERIODICITY_CUTOFF = 20

# Squared escape radius (|z| > 2)
ESCAPE_RADIUS_SQUARED = 4.0


@jit(nopython=True, cache=True)
def escape_time(x0, y0, max_iterations, periodicity_cutoff):
    """
    Count iterations of z <- z² + c until the orbit of c = x0 + i·y0 escapes.

    Every periodicity_cutoff iterations the current orbit point is saved
    as a reference. If a later point lands within PERIODICITY_EPSILON of
    that reference in both components, the orbit has settled into a cycle
    and the point is reported as interior straight away.

    Args:
        x0, y0: Real and imaginary parts of c
        max_iterations: Iteration cap
        periodicity_cutoff: Iterations between reference snapshots

    Returns:
        Iteration count in [0, max_iterations]. max_iterations means
        the point did not escape (or was found to be periodic).
    """
    x = 0.0
    y = 0.0
    x2 = 0.0
    y2 = 0.0
    x_old = 0.0
    y_old = 0.0
    period = 0
    iterations = 0

    while x2 + y2 <= ESCAPE_RADIUS_SQUARED and iterations < max_iterations:
        y = 2.0 * x * y + y0
        x = x2 - y2 + x0
        x2 = x * x
        y2 = y * y

        iterations += 1

        # hasn't really moved, jump to the end
        if abs(x - x_old) < PERIODICITY_EPSILON and abs(y - y_old) < PERIODICITY_EPSILON:
            iterations = max_iterations
            break

        period += 1
        if period > periodicity_cutoff:
            period = 0
            x_old = x
            y_old = y

    return iterations


@jit(nopython=True, nogil=True, cache=True)
def compute_rows(out, x_min, y_max, dx, dy, row_start, row_end,
                 max_iterations, periodicity_cutoff):
    """
    Fill rows [row_start, row_end) of an iteration array.

    Row 0 is the top of the image and maps to y_max; the imaginary part
    decreases as the row index grows. Each cell's coordinate is derived
    from its own indices, so the result does not depend on which rows
    are computed together.

    Args:
        out: 2D int array (height, width), modified in place
        x_min: Real coordinate of column 0
        y_max: Imaginary coordinate of row 0
        dx, dy: Complex-plane size of one pixel
        row_start, row_end: Half-open row range to compute
        max_iterations: Iteration cap
        periodicity_cutoff: Iterations between periodicity snapshots
    """
    width = out.shape[1]
    for py in range(row_start, row_end):
        y0 = y_max - py * dy
        for px in range(width):
            x0 = x_min + px * dx
            out[py, px] = escape_time(x0, y0, max_iterations, periodicity_cutoff)


@jit(nopython=True, parallel=True, cache=True)
def apply_palette_indexed(data, palette, out):
    """
    Map iteration counts to colours by periodic palette indexing.

    Args:
        data: 2D array of iteration counts
        palette: Nx4 array of RGBA colours (uint8), N > 0
        out: Output RGBA image array (height, width, 4), modified in place
    """
    height, width = data.shape
    num_colors = palette.shape[0]
    channels = palette.shape[1]

    for py in prange(height):
        for px in range(width):
            idx = data[py, px] % num_colors
            for ch in range(channels):
                out[py, px, ch] = palette[idx, ch]


def warmup_jit(palette):
    """
    Warm up JIT compilation with small dummy arrays.

    Call this once at startup to pre-compile the Numba functions,
    avoiding a delay on the first real pass.

    Args:
        palette: A palette array to use for warming up apply_palette_indexed
    """
    data = np.zeros((10, 10), dtype=np.int32)
    compute_rows(data, -2.5, 1.0, 0.35, 0.2, 0, 10, 10, DEFAULT_PERIODICITY_CUTOFF)
    dummy = np.zeros((10, 10, palette.shape[1]), dtype=np.uint8)
    apply_palette_indexed(data, palette, dummy)
