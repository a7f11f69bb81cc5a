"""
Allow running the package directly: python -m mandelgrid
"""
import argparse
import logging
import sys

from .config import load_settings, validate_settings
from .errors import MandelbrotError


logger = logging.getLogger("mandelgrid")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="mandelgrid",
        description="Interactive Mandelbrot set viewer"
    )
    parser.add_argument("--settings", default=None,
                        help="JSON settings file (default: packaged settings.json)")
    parser.add_argument("--width", type=int, help="Window width in pixels")
    parser.add_argument("--height", type=int, help="Window height in pixels")
    parser.add_argument("--max-iterations", type=int, dest="max_iterations",
                        help="Escape iteration cap")
    parser.add_argument("--periodicity-cutoff", type=int, dest="periodicity_cutoff",
                        help="Iterations between periodicity checks")
    parser.add_argument("--workers", type=int, dest="worker_count",
                        help="Worker threads per pass (0 or 1 = sequential)")
    parser.add_argument("--palette", help="Palette name")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    return parser.parse_args(argv)


def build_settings(args):
    """Settings file values overridden by any flags given on the command line."""
    settings = load_settings(args.settings)
    for key in ("width", "height", "max_iterations", "periodicity_cutoff",
                "worker_count", "palette"):
        value = getattr(args, key)
        if value is not None:
            settings[key] = value
    return validate_settings(settings)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        settings = build_settings(args)
        from .app import run
        run(settings)
    except MandelbrotError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
