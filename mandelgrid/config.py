"""
Settings loading for the Mandelbrot viewer.

Settings live in a JSON file (settings.json next to this module by
default). Values from the file are merged over DEFAULT_SETTINGS; a
missing or broken file falls back to the defaults with a warning.
"""

import json
import logging
import numbers
import os

from .errors import InvalidArgument


logger = logging.getLogger(__name__)

SETTINGS_PATH = os.path.join(os.path.dirname(__file__), 'settings.json')

DEFAULT_SETTINGS = {
    'width': 700,
    'height': 400,
    'max_iterations': 1000,
    'periodicity_cutoff': 20,
    'palette': 'Classic',
    'worker_count': 16,
    'zoom_factor': 0.75,   # Applied on zoom in; zoom out uses 1 / zoom_factor
    'pan_pixels': 10,      # Screen pixels moved per arrow key press
}

# Keys that must be positive integers
_POSITIVE_INT_KEYS = ('width', 'height', 'max_iterations', 'periodicity_cutoff', 'pan_pixels')


def load_settings(path=None):
    """
    Load settings from a JSON file.

    Args:
        path: JSON file to read (default: the packaged settings.json)

    Returns:
        dict with every key of DEFAULT_SETTINGS
    """
    settings = dict(DEFAULT_SETTINGS)
    settings_path = path or SETTINGS_PATH
    try:
        with open(settings_path, 'r') as f:
            loaded = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.warning("Could not load %s: %s", settings_path, e)
        return settings

    if not isinstance(loaded, dict):
        logger.warning("Ignoring %s: top level must be an object", settings_path)
        return settings

    for key, value in loaded.items():
        if key not in DEFAULT_SETTINGS:
            logger.warning("Ignoring unknown setting %r in %s", key, settings_path)
            continue
        settings[key] = value
    return settings


def validate_settings(settings):
    """
    Check types and ranges of a settings dict.

    Raises:
        InvalidArgument on the first bad value
    """
    for key in _POSITIVE_INT_KEYS:
        value = settings[key]
        if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value <= 0:
            raise InvalidArgument("setting %r must be a positive integer, got %r" % (key, value))

    workers = settings['worker_count']
    if isinstance(workers, bool) or not isinstance(workers, numbers.Integral) or workers < 0:
        raise InvalidArgument("setting 'worker_count' must be a non-negative integer, got %r"
                              % (workers,))

    zoom = settings['zoom_factor']
    if isinstance(zoom, bool) or not isinstance(zoom, numbers.Real) or not 0 < zoom < 1:
        raise InvalidArgument("setting 'zoom_factor' must be between 0 and 1, got %r" % (zoom,))

    if not isinstance(settings['palette'], str):
        raise InvalidArgument("setting 'palette' must be a palette name")
    return settings
