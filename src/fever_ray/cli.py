"""Command-line entry point.

Renders a scene description (or the built-in demo scene) to a PNG file.

Usage:
    fever-ray OUTPUT [options]

Options:
    --scene FILE          JSON scene description (default: built-in demo scene)
    --width WIDTH         Image width in pixels (default: scene file or 640)
    --height HEIGHT       Image height in pixels (default: scene file or 480)
    --fov DEGREES         Field of view in degrees (default: scene file or 90)
    --shadow-bias EPS     Shadow ray offset (default: scene file or 1e-4)
    --workers N           Worker threads for the Python backend (default: CPU count)
    --backend NAME        "python" (thread pool) or "taichi" (Taichi kernel)
    --preview             Show the result in a Matplotlib window
    --quiet               Suppress progress output
    --verbose             Enable debug logging

Example:
    fever-ray out.png --scene scene.json --width 800 --height 600
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
import time
from collections.abc import Sequence
from pathlib import Path

import numpy as np
import numpy.typing as npt

from fever_ray.errors import RenderError
from fever_ray.logging_config import setup_logging
from fever_ray.scene.manager import Config, load_config
from fever_ray.scene.presets import create_demo_config

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="fever-ray",
        description="Render a scene with the fever-ray ray tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("output", type=str, help="Output PNG file path")
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene description (default: built-in demo scene)",
    )
    parser.add_argument("--width", type=int, default=None, help="Image width in pixels")
    parser.add_argument("--height", type=int, default=None, help="Image height in pixels")
    parser.add_argument("--fov", type=float, default=None, help="Field of view in degrees")
    parser.add_argument(
        "--shadow-bias",
        type=float,
        default=None,
        help="Offset along the surface normal for shadow rays",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker threads for the Python backend (default: CPU count)",
    )
    parser.add_argument(
        "--backend",
        choices=("python", "taichi"),
        default="python",
        help="Rendering backend (default: python)",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the rendered image in a Matplotlib window",
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)
    if args.workers is not None and args.workers < 1:
        parser.error(f"--workers must be at least 1, got {args.workers}")
    return args


def build_config(args: argparse.Namespace) -> Config:
    """Build the render configuration from parsed arguments.

    Flags given on the command line override values from the scene file.

    Raises:
        SceneFormatError: If the scene file is malformed.
        ConfigError: If the resulting configuration is invalid.
    """
    if args.scene is not None:
        config = load_config(args.scene)
    else:
        config = create_demo_config()

    overrides = {
        "width": args.width,
        "height": args.height,
        "fov": args.fov,
        "shadow_bias": args.shadow_bias,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if overrides:
        config = dataclasses.replace(config, **overrides)
    return config


def render_with_backend(
    config: Config,
    backend: str,
    workers: int | None = None,
    quiet: bool = False,
) -> npt.NDArray[np.uint8]:
    """Render a configuration with the selected backend.

    Args:
        config: The render configuration.
        backend: "python" or "taichi".
        workers: Worker threads for the Python backend.
        quiet: If True, suppress progress output.

    Returns:
        The rendered 8-bit buffer.
    """
    if backend == "taichi":
        # Lazy import keeps Taichi optional for the Python backend
        from fever_ray.core.taichi_backend import init_taichi, render_taichi

        init_taichi()
        return render_taichi(config)

    from fever_ray.core.dispatcher import render

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (current / target) * 100 if target > 0 else 0
            print(
                f"\r  Progress: {current}/{target} rows ({progress_pct:.1f}%) - {elapsed:.1f}s",
                end="",
                flush=True,
            )

    buffer = render(config, workers=workers, callback=progress_callback)
    if not quiet:
        print()  # Newline after progress
    return buffer


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "WARNING")

    # Lazy import keeps Pillow/Matplotlib out of argument parsing
    from fever_ray.preview.export import save_png

    try:
        config = build_config(args)
        if not args.quiet:
            print(
                f"Rendering {config.width}x{config.height} "
                f"({len(config.scene.objects)} objects, {len(config.scene.lights)} lights) "
                f"with the {args.backend} backend..."
            )

        start_time = time.time()
        buffer = render_with_backend(config, args.backend, args.workers, args.quiet)
        output_file = save_png(buffer, Path(args.output))

        if not args.quiet:
            print(f"Saved to: {output_file.absolute()}")
            print(f"Total time: {time.time() - start_time:.2f}s")
    except (RenderError, OSError) as e:
        logger.debug("Render failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.preview:
        from fever_ray.preview.display import show_preview

        show_preview(buffer)
    return 0


if __name__ == "__main__":
    sys.exit(main())
