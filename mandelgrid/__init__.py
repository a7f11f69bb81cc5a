"""
Mandelbrot Set Grid Engine

Computes escape-time iteration grids for a window into the complex
plane, using Numba for JIT-compiled kernels and plain threads to split
a pass into row bands, and maps the counts to colours with a periodic
palette. A small Pygame viewer is included.

Quick Start:
    from mandelgrid import MandelbrotRenderer
    renderer = MandelbrotRenderer(700, 400, max_iterations=1000)
    renderer.zoom(0.75)
    result = renderer.get_result()   # result.iterations, result.colors

Or from command line:
    python -m mandelgrid

Package Structure:
    - compute.py: JIT-compiled escape-time and palette kernels
    - viewport.py: Complex-plane bounds with pan / zoom / drag / resize
    - engine.py: Iteration grid and the (optionally threaded) grid engine
    - palettes.py: Palette definitions and periodic colour mapping
    - renderer.py: Viewport-driven recompute and result publication
    - config.py: JSON settings loading
    - app.py: Pygame window and event loop

Controls:
    - Arrows: Pan
    - + / -: Zoom in / out
    - Drag: Pan around
    - R: Reset to default view
    - G: Toggle grid lines
    - Q / ESC: Quit
"""

from .compute import escape_time, warmup_jit
from .engine import GridEngine, IterationGrid, MandelbrotParams, compute_grid, row_bands
from .errors import AllocationFailure, InvalidArgument, MandelbrotError
from .palettes import PALETTES, apply_palette, color_for, get_palette, list_palette_names
from .renderer import MandelbrotRenderer, RenderResult
from .viewport import Bounds, DEFAULT_BOUNDS, Viewport

__version__ = "1.0.0"
__all__ = [
    "escape_time",
    "warmup_jit",
    "GridEngine",
    "IterationGrid",
    "MandelbrotParams",
    "compute_grid",
    "row_bands",
    "AllocationFailure",
    "InvalidArgument",
    "MandelbrotError",
    "PALETTES",
    "apply_palette",
    "color_for",
    "get_palette",
    "list_palette_names",
    "MandelbrotRenderer",
    "RenderResult",
    "Bounds",
    "DEFAULT_BOUNDS",
    "Viewport",
]
