"""
Viewport-driven Mandelbrot renderer.

The MandelbrotRenderer class ties the pieces together:
- A caller-owned Viewport for pan / zoom / drag / reset / resize
- A GridEngine that computes the iteration grid (optionally threaded)
- Periodic palette mapping into an RGBA colour grid
- Atomic publication of the latest complete result

Every bounds-changing call blocks until the new pass has finished and
has been published. Calls that leave bounds, dimensions and parameters
unchanged do not recompute.
"""

import logging
import threading

from .engine import GridEngine, MandelbrotParams, DEFAULT_MAX_ITERATIONS
from .compute import DEFAULT_PERIODICITY_CUTOFF
from .palettes import apply_palette, get_default_palette, make_palette
from .viewport import Viewport


logger = logging.getLogger(__name__)

DEFAULT_WORKER_COUNT = 16


class RenderResult:
    """
    One published pass: read-only iteration and colour grids plus the
    bounds and parameters they were computed for.
    """

    __slots__ = ("iterations", "colors", "bounds", "params")

    def __init__(self, iterations, colors, bounds, params):
        self.iterations = iterations
        self.colors = colors
        self.bounds = bounds
        self.params = params

    @property
    def width(self):
        return self.iterations.shape[1]

    @property
    def height(self):
        return self.iterations.shape[0]


class MandelbrotRenderer:
    """
    Keeps an iteration grid and colour grid in sync with a viewport.

    Usage:
        renderer = MandelbrotRenderer(700, 400, max_iterations=1000)
        renderer.zoom(0.75)
        result = renderer.get_result()
        display(result.colors)

    Attributes:
        viewport: The Viewport driving the bounds
        params: Current MandelbrotParams
        palette: Current (N, 4) RGBA palette
        engine: GridEngine used for passes
        pass_count: Number of passes published so far
    """

    def __init__(self, width, height, max_iterations=DEFAULT_MAX_ITERATIONS,
                 periodicity_cutoff=DEFAULT_PERIODICITY_CUTOFF, palette=None,
                 worker_count=DEFAULT_WORKER_COUNT, viewport=None):
        """
        Initialize the renderer and run the first pass.

        Args:
            width, height: Grid dimensions in pixels (ignored if viewport is given)
            max_iterations: Escape iteration cap
            periodicity_cutoff: Iterations between periodicity checks
            palette: Sequence of RGB(A) colours (default: Classic)
            worker_count: Row-band threads per pass (0 or 1 = sequential)
            viewport: Existing Viewport to drive (default: classic framing)
        """
        self.viewport = viewport if viewport is not None else Viewport(width, height)
        self.params = MandelbrotParams(max_iterations, periodicity_cutoff)
        self.palette = get_default_palette() if palette is None else make_palette(palette)
        self.engine = GridEngine(worker_count)
        self.pass_count = 0

        self.lock = threading.Lock()
        self._result = None
        self.recompute()

    def recompute(self):
        """Run a full pass for the current viewport and publish it."""
        view = self.viewport
        bounds = view.bounds
        params = self.params
        grid = self.engine.compute(bounds, view.width, view.height, params)
        colors = apply_palette(grid.array, self.palette)
        result = RenderResult(grid.array, colors, bounds, params)
        with self.lock:
            self._result = result
            self.pass_count += 1
        logger.debug("published pass %d for %r", self.pass_count, bounds)
        return result

    def get_result(self):
        """Latest complete RenderResult (never a partially computed one)."""
        with self.lock:
            return self._result

    def _view_state(self):
        return (self.viewport.bounds, self.viewport.width, self.viewport.height)

    def _apply_view_change(self, change, *args):
        """
        Run a viewport operation and recompute if it changed the view.

        If the pass fails, the viewport is rolled back so it keeps
        matching the published result.
        """
        before = self._view_state()
        saved = self.viewport.snapshot()
        change(*args)
        if self._view_state() == before:
            return False
        try:
            self.recompute()
        except Exception:
            self.viewport.restore(saved)
            raise
        return True

    def pan(self, dx_pixels, dy_pixels):
        """Pan by a screen-pixel offset. Returns True if a pass ran."""
        return self._apply_view_change(self.viewport.pan, dx_pixels, dy_pixels)

    def shift(self, x_ticks, y_ticks):
        """Pan by whole pan steps. Returns True if a pass ran."""
        return self._apply_view_change(self.viewport.shift, x_ticks, y_ticks)

    def zoom(self, factor):
        """Zoom about the view centre. Returns True if a pass ran."""
        return self._apply_view_change(self.viewport.zoom, factor)

    def drag(self, px0, py0, px1, py1):
        """Apply a mouse drag. Returns True if a pass ran."""
        return self._apply_view_change(self.viewport.drag_to, px0, py0, px1, py1)

    def reset(self):
        """Return to the home framing. Returns True if a pass ran."""
        return self._apply_view_change(self.viewport.reset)

    def resize(self, new_width, new_height):
        """Resize the grid, keeping scale and centre. Returns True if a pass ran."""
        return self._apply_view_change(self.viewport.resize, new_width, new_height)

    def update_settings(self, max_iterations=None, periodicity_cutoff=None, palette=None):
        """
        Update rendering settings and recompute if anything changed.

        Args:
            max_iterations: New iteration cap (or None to keep current)
            periodicity_cutoff: New periodicity cutoff (or None to keep current)
            palette: New palette colours (or None to keep current)

        Returns:
            True if any setting changed, False otherwise
        """
        new_params = MandelbrotParams(
            self.params.max_iterations if max_iterations is None else max_iterations,
            self.params.periodicity_cutoff if periodicity_cutoff is None else periodicity_cutoff,
        )
        new_palette = self.palette if palette is None else make_palette(palette)

        changed = (new_params != self.params
                   or new_palette.shape != self.palette.shape
                   or (new_palette != self.palette).any())
        if not changed:
            return False

        old_params, old_palette = self.params, self.palette
        self.params, self.palette = new_params, new_palette
        try:
            self.recompute()
        except Exception:
            self.params, self.palette = old_params, old_palette
            raise
        return True
