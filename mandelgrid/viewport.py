"""
Complex-plane viewport: maps a rectangle of the complex plane onto a
pixel grid and handles pan, zoom, drag, reset and resize.

Bounds are immutable. Every viewport change builds a new Bounds and
swaps it in, so a reader holding the old value never sees a rectangle
that is half updated.

Pixel coordinates follow the screen convention: x grows to the right,
y grows downward. Row 0 is the top of the image and corresponds to the
largest imaginary coordinate.
"""

import math
import numbers
from collections import namedtuple

from .errors import InvalidArgument


DEFAULT_STEP = 0.25         # Complex-plane units per pan tick
DEFAULT_SCALE = 1.0 / 400.0  # Complex-plane units per pixel (scale-based framing)


class Bounds(namedtuple("Bounds", ["x_min", "y_min", "x_max", "y_max"])):
    """
    Rectangle in the complex plane, given by its bottom-left
    (x_min, y_min) and top-right (x_max, y_max) corners.
    """

    __slots__ = ()

    def __new__(cls, x_min, y_min, x_max, y_max):
        x_min, y_min, x_max, y_max = float(x_min), float(y_min), float(x_max), float(y_max)
        if not all(math.isfinite(v) for v in (x_min, y_min, x_max, y_max)):
            raise InvalidArgument("bounds must be finite")
        if not (x_max > x_min and y_max > y_min):
            raise InvalidArgument(
                "degenerate bounds: (%r, %r) .. (%r, %r)" % (x_min, y_min, x_max, y_max)
            )
        return super().__new__(cls, x_min, y_min, x_max, y_max)

    @property
    def xrange(self):
        return self.x_max - self.x_min

    @property
    def yrange(self):
        return self.y_max - self.y_min

    @property
    def center(self):
        return (self.x_min + self.xrange / 2.0, self.y_min + self.yrange / 2.0)

    def translated(self, dx, dy):
        """Return the same-sized rectangle moved by (dx, dy)."""
        return Bounds(self.x_min + dx, self.y_min + dy, self.x_max + dx, self.y_max + dy)

    def scaled(self, fx, fy):
        """Return the rectangle scaled by (fx, fy) about its centre."""
        cx, cy = self.center
        half_w = self.xrange * fx / 2.0
        half_h = self.yrange * fy / 2.0
        return Bounds(cx - half_w, cy - half_h, cx + half_w, cy + half_h)


# Classic overview of the Mandelbrot set
DEFAULT_BOUNDS = Bounds(-2.5, -1.0, 1.0, 1.0)


def _check_dimension(name, value):
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value <= 0:
        raise InvalidArgument("%s must be a positive integer, got %r" % (name, value))
    return int(value)


class Viewport:
    """
    Caller-owned view into the complex plane.

    Usage:
        view = Viewport(700, 400)
        view.zoom(0.75).pan(10, 0)
        x0, y0 = view.pixel_to_complex(350, 200)

    Mutating methods return the viewport so calls can be chained.
    """

    def __init__(self, width, height, bounds=DEFAULT_BOUNDS, step=DEFAULT_STEP):
        """
        Args:
            width, height: Pixel dimensions of the grid the view is drawn on
            bounds: Initial complex-plane rectangle (also restored by reset())
            step: Complex-plane units moved per shift() tick
        """
        self._width = _check_dimension("width", width)
        self._height = _check_dimension("height", height)
        if not isinstance(bounds, Bounds):
            bounds = Bounds(*bounds)
        self._bounds = bounds
        self._step = float(step)
        self._home = (bounds, self._step)

    @classmethod
    def from_scale(cls, width, height, center=(0.0, 0.0), scale=DEFAULT_SCALE,
                   step=DEFAULT_STEP):
        """
        Build a viewport from a centre point and a per-pixel scale.

        The rectangle spans width*scale by height*scale complex units.
        """
        _check_dimension("width", width)
        _check_dimension("height", height)
        if not (scale > 0 and math.isfinite(scale)):
            raise InvalidArgument("scale must be positive, got %r" % (scale,))
        cx, cy = center
        half_w = width * scale / 2.0
        half_h = height * scale / 2.0
        bounds = Bounds(cx - half_w, cy - half_h, cx + half_w, cy + half_h)
        return cls(width, height, bounds, step)

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    @property
    def bounds(self):
        return self._bounds

    @property
    def step(self):
        return self._step

    @property
    def scale(self):
        """Complex-plane size of one pixel as (x, y)."""
        b = self._bounds
        return (b.xrange / self._width, b.yrange / self._height)

    def pixel_to_complex(self, px, py):
        """Complex coordinate sampled for pixel (px, py)."""
        sx, sy = self.scale
        return (self._bounds.x_min + px * sx, self._bounds.y_max - py * sy)

    def pan(self, dx_pixels, dy_pixels):
        """
        Move the view by a screen-pixel offset.

        Positive dx moves the view right (larger real part), positive dy
        moves it down the screen (smaller imaginary part).
        """
        if dx_pixels == 0 and dy_pixels == 0:
            return self
        sx, sy = self.scale
        self._bounds = self._bounds.translated(dx_pixels * sx, -dy_pixels * sy)
        return self

    def shift(self, x_ticks, y_ticks):
        """
        Move the view by whole pan steps.

        Positive y_ticks move towards larger imaginary values. The step
        shrinks and grows with zoom() so a tick always covers the same
        share of the view.
        """
        if x_ticks == 0 and y_ticks == 0:
            return self
        self._bounds = self._bounds.translated(x_ticks * self._step, y_ticks * self._step)
        return self

    def zoom(self, factor):
        """
        Scale the view about its centre.

        factor < 1 zooms in, factor > 1 zooms out. The pan step is scaled
        by the same factor.
        """
        if (isinstance(factor, bool) or not isinstance(factor, numbers.Real)
                or not (factor > 0 and math.isfinite(factor))):
            raise InvalidArgument("zoom factor must be positive, got %r" % (factor,))
        if factor == 1.0:
            return self
        self._bounds = self._bounds.scaled(factor, factor)
        self._step *= factor
        return self

    def reset(self):
        """Restore the initial framing and pan step."""
        self._bounds, self._step = self._home
        return self

    def drag_to(self, px0, py0, px1, py1):
        """
        Apply a mouse drag from (px0, py0) to (px1, py1).

        The content follows the mouse: dragging right moves the view left.
        """
        return self.pan(px0 - px1, py0 - py1)

    def resize(self, new_width, new_height):
        """
        Change the pixel dimensions while keeping the per-pixel scale and
        the centre of the view.
        """
        new_width = _check_dimension("width", new_width)
        new_height = _check_dimension("height", new_height)
        if new_width == self._width and new_height == self._height:
            return self
        self._bounds = self._bounds.scaled(new_width / self._width,
                                           new_height / self._height)
        self._width = new_width
        self._height = new_height
        return self

    def snapshot(self):
        """Opaque copy of the mutable view state, for restore()."""
        return (self._bounds, self._width, self._height, self._step)

    def restore(self, state):
        """Return to a state captured by snapshot()."""
        self._bounds, self._width, self._height, self._step = state
        return self

    def __repr__(self):
        return "Viewport(%d, %d, %r, step=%r)" % (self._width, self._height,
                                                  self._bounds, self._step)
