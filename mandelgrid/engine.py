"""
Grid computation engine.

Evaluates the escape-time kernel over every pixel of a grid, either in
one sequential pass or split into contiguous row bands that run on
short-lived worker threads. Threads are joined before compute()
returns, so callers always receive a complete grid.
"""

import logging
import numbers
import threading
import time
from collections import namedtuple

import numpy as np

from .compute import compute_rows, DEFAULT_PERIODICITY_CUTOFF
from .errors import AllocationFailure, InvalidArgument


logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 1000

# Iteration counts are stored as int32
MAX_ITERATIONS_LIMIT = int(np.iinfo(np.int32).max)


def _positive_int(name, value):
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value <= 0:
        raise InvalidArgument("%s must be a positive integer, got %r" % (name, value))
    return int(value)


class MandelbrotParams(namedtuple("MandelbrotParams", ["max_iterations", "periodicity_cutoff"])):
    """Immutable per-pass parameters: iteration cap and periodicity cutoff."""

    __slots__ = ()

    def __new__(cls, max_iterations=DEFAULT_MAX_ITERATIONS,
                periodicity_cutoff=DEFAULT_PERIODICITY_CUTOFF):
        max_iterations = _positive_int("max_iterations", max_iterations)
        if max_iterations > MAX_ITERATIONS_LIMIT:
            raise InvalidArgument("max_iterations must be at most %d, got %d"
                                  % (MAX_ITERATIONS_LIMIT, max_iterations))
        return super().__new__(
            cls,
            max_iterations,
            _positive_int("periodicity_cutoff", periodicity_cutoff),
        )


class IterationGrid:
    """
    Iteration counts for a width x height pixel grid.

    Storage is one flat row-major buffer; cell (row, col) lives at
    index(row, col) = row * width + col. The 2D `array` view shares the
    same memory.
    """

    dtype = np.int32

    def __init__(self, width, height):
        self.width = _positive_int("width", width)
        self.height = _positive_int("height", height)
        try:
            self.data = np.zeros(self.width * self.height, dtype=self.dtype)
        except MemoryError as e:
            raise AllocationFailure(
                "cannot allocate %dx%d iteration grid" % (self.width, self.height)
            ) from e

    @property
    def shape(self):
        return (self.height, self.width)

    @property
    def array(self):
        """2D (height, width) view of the buffer."""
        return self.data.reshape(self.height, self.width)

    def index(self, row, col):
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError("cell (%d, %d) outside %dx%d grid" % (row, col, self.width, self.height))
        return row * self.width + col

    def __getitem__(self, cell):
        row, col = cell
        return int(self.data[self.index(row, col)])

    def rows(self, start, end):
        """View of the rows [start, end)."""
        return self.array[start:end]

    def freeze(self):
        """Make the buffer read-only. Called once a pass has completed."""
        self.data.setflags(write=False)
        return self

    @property
    def frozen(self):
        return not self.data.flags.writeable


def row_bands(height, workers):
    """
    Split `height` rows into `workers` contiguous half-open bands.

    Every band has height // workers rows except the last, which also
    takes the remainder. workers <= 1 gives a single band.
    """
    if workers <= 1:
        return [(0, height)]
    step = height // workers
    bands = []
    for i in range(workers):
        start = i * step
        end = height if i == workers - 1 else start + step
        bands.append((start, end))
    return bands


class GridEngine:
    """
    Computes iteration grids for a given bounds and parameter set.

    Usage:
        engine = GridEngine(worker_count=8)
        grid = engine.compute(bounds, 700, 400, MandelbrotParams(1000, 20))

    Attributes:
        worker_count: Number of row bands / threads per pass.
            0 or 1 computes sequentially on the calling thread.
    """

    def __init__(self, worker_count=0):
        if isinstance(worker_count, bool) or not isinstance(worker_count, numbers.Integral):
            raise InvalidArgument("worker_count must be an integer, got %r" % (worker_count,))
        self.worker_count = int(worker_count)

    def compute(self, bounds, width, height, params=None):
        """
        Run one full pass and return a frozen IterationGrid.

        Args:
            bounds: Complex-plane rectangle (viewport.Bounds)
            width, height: Grid dimensions in pixels
            params: MandelbrotParams (defaults if None)

        Raises:
            InvalidArgument: non-positive dimensions
            AllocationFailure: the grid could not be allocated
        """
        if params is None:
            params = MandelbrotParams()
        width = _positive_int("width", width)
        height = _positive_int("height", height)

        grid = IterationGrid(width, height)
        out = grid.array
        dx = bounds.xrange / width
        dy = bounds.yrange / height
        bands = row_bands(height, self.worker_count)

        started = time.perf_counter()
        if len(bands) == 1:
            compute_rows(out, bounds.x_min, bounds.y_max, dx, dy, 0, height,
                         params.max_iterations, params.periodicity_cutoff)
        else:
            self._compute_threaded(out, bounds, dx, dy, bands, params)

        logger.debug("computed %dx%d grid in %d band(s), max_iterations=%d, %.3fs",
                     width, height, len(bands), params.max_iterations,
                     time.perf_counter() - started)
        return grid.freeze()

    def _compute_threaded(self, out, bounds, dx, dy, bands, params):
        """Run one thread per non-empty band and wait for all of them."""
        errors = []

        def run_band(start, end):
            try:
                compute_rows(out, bounds.x_min, bounds.y_max, dx, dy, start, end,
                             params.max_iterations, params.periodicity_cutoff)
            except Exception as e:
                errors.append(e)

        threads = []
        for i, (start, end) in enumerate(bands):
            if end <= start:
                continue
            thread = threading.Thread(target=run_band, args=(start, end),
                                      name="MandelbrotBand-%d" % i)
            thread.daemon = True
            threads.append(thread)
            thread.start()

        for thread in threads:
            thread.join()

        if errors:
            raise errors[0]


def compute_grid(bounds, width, height, params=None, worker_count=0):
    """Convenience wrapper: one pass with a throwaway GridEngine."""
    return GridEngine(worker_count).compute(bounds, width, height, params)
