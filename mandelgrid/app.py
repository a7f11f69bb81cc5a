"""
Main application module for the Mandelbrot viewer.

Contains the MandelbrotApp class which handles:
- Window setup and main loop
- User input (pan, zoom, drag, reset, resize)
- Blitting the renderer's colour grid to the screen
- The optional centre grid-line overlay and FPS caption

All fractal work is delegated to MandelbrotRenderer; this module only
translates pygame events into viewport operations.
"""

import logging

import pygame

from .compute import warmup_jit
from .config import load_settings, validate_settings
from .palettes import get_palette
from .renderer import MandelbrotRenderer


logger = logging.getLogger(__name__)


class MandelbrotApp:
    """
    Pygame front end for MandelbrotRenderer.

    Key bindings:
        Arrows: pan in the arrow's direction
        + / =: zoom in
        -: zoom out
        R: reset to the default view
        G: toggle grid lines
        Q / ESC: quit
        Left drag: pan (content follows the mouse)
    """

    FPS_LIMIT = 60
    GRID_COLOR = (255, 255, 255)
    GRID_DASHES = 8

    def __init__(self, settings=None):
        """
        Initialize the application.

        Args:
            settings: Settings dict (default: config.load_settings())
        """
        self.settings = validate_settings(settings if settings is not None else load_settings())
        self.width = self.settings['width']
        self.height = self.settings['height']

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None
        self.surface = None
        self.surface_pass = 0

        self.renderer = None
        self.show_grid = False
        self.drag_start = None
        self.running = False

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        self._init_components()

        self.running = True
        while self.running:
            for event in pygame.event.get():
                self.handle_event(event)
            self._draw()
            self.clock.tick(self.FPS_LIMIT)
            pygame.display.set_caption("Mandelbrot - %.1f FPS" % self.clock.get_fps())

        pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create a resizable window."""
        pygame.init()
        self.screen = pygame.display.set_mode((self.width, self.height), pygame.RESIZABLE)
        pygame.display.set_caption("Mandelbrot")
        self.clock = pygame.time.Clock()

    def _init_components(self):
        """Compile kernels and run the first pass."""
        palette = get_palette(self.settings['palette'])
        logger.info("Compiling kernels (first run only)...")
        warmup_jit(palette)
        self.renderer = MandelbrotRenderer(
            self.width, self.height,
            max_iterations=self.settings['max_iterations'],
            periodicity_cutoff=self.settings['periodicity_cutoff'],
            palette=palette,
            worker_count=self.settings['worker_count'],
        )
        logger.info("Initial view %r", self.renderer.viewport.bounds)

    def handle_event(self, event):
        """
        Process one pygame event.

        Returns:
            True if the event caused a new pass to be computed
        """
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYUP:
            return self._handle_key(event)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.drag_start = event.pos
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            return self._handle_drag_end(event)
        elif event.type == pygame.VIDEORESIZE:
            return self._handle_resize(event)
        return False

    def _handle_key(self, event):
        """Handle keyboard input."""
        step = self.settings['pan_pixels']
        zoom = self.settings['zoom_factor']
        key = event.key

        if key == pygame.K_UP:
            return self.renderer.pan(0, -step)
        elif key == pygame.K_DOWN:
            return self.renderer.pan(0, step)
        elif key == pygame.K_LEFT:
            return self.renderer.pan(-step, 0)
        elif key == pygame.K_RIGHT:
            return self.renderer.pan(step, 0)
        elif key in (pygame.K_EQUALS, pygame.K_PLUS, pygame.K_KP_PLUS):
            return self.renderer.zoom(zoom)
        elif key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            return self.renderer.zoom(1.0 / zoom)
        elif key == pygame.K_r:
            logger.info("Reset to default view")
            return self.renderer.reset()
        elif key == pygame.K_g:
            self.show_grid = not self.show_grid
        elif key in (pygame.K_q, pygame.K_ESCAPE):
            self.running = False
        return False

    def _handle_drag_end(self, event):
        """Apply the drag that started at the last left-button press."""
        start, self.drag_start = self.drag_start, None
        if start is None:
            return False
        return self.renderer.drag(start[0], start[1], event.pos[0], event.pos[1])

    def _handle_resize(self, event):
        """Resize the viewport to the new window size."""
        logger.info("Window resized to %dx%d", event.w, event.h)
        self.width, self.height = event.w, event.h
        if self.screen is not None:
            self.screen = pygame.display.set_mode((self.width, self.height), pygame.RESIZABLE)
        return self.renderer.resize(event.w, event.h)

    def _draw(self):
        """Draw the current frame."""
        if self.surface is None or self.surface_pass != self.renderer.pass_count:
            result = self.renderer.get_result()
            self.surface = pygame.surfarray.make_surface(result.colors[:, :, :3].swapaxes(0, 1))
            self.surface_pass = self.renderer.pass_count

        self.screen.fill((0, 0, 0))
        self.screen.blit(self.surface, (0, 0))
        if self.show_grid:
            self._draw_grid()
        pygame.display.flip()

    def _draw_grid(self):
        """Draw the centre axes with evenly spaced tick marks."""
        w, h = self.screen.get_size()
        color = self.GRID_COLOR
        pygame.draw.line(self.screen, color, (0, h // 2), (w, h // 2))
        pygame.draw.line(self.screen, color, (w // 2, 0), (w // 2, h))

        tick = int(0.05 * h)
        spacing = w // self.GRID_DASHES
        for i in range(self.GRID_DASHES):
            x = i * spacing
            pygame.draw.line(self.screen, color, (x, h // 2 - tick // 2), (x, h // 2 + tick // 2))

        tick = int(0.05 * w)
        spacing = h // self.GRID_DASHES
        for i in range(self.GRID_DASHES):
            y = i * spacing
            pygame.draw.line(self.screen, color, (w // 2 - tick // 2, y), (w // 2 + tick // 2, y))


def run(settings=None):
    """
    Run the Mandelbrot viewer.

    Args:
        settings: Settings dict (default: config.load_settings())
    """
    app = MandelbrotApp(settings)
    try:
        app.run()
    except KeyboardInterrupt:
        pygame.quit()
