"""Parallel pixel dispatcher.

Every pixel's color is a pure function of (x, y, config), so the image is
rendered as a parallel map followed by a single-threaded write:

1. The camera is built first, so an invalid image shape fails before any
   worker starts.
2. The rows are split into disjoint bands. Each band is shaded by a
   ThreadPoolExecutor worker into a private list.
3. The calling thread collects finished bands and copies them into the
   output buffer. No two workers ever touch the same mutable state, so no
   locks are needed.

The scene and config are shared by reference between all workers and are
never copied.

Example:
    >>> from fever_ray.core.dispatcher import render
    >>> from fever_ray.scene.presets import create_demo_config
    >>> image = render(create_demo_config(160, 120), workers=4)
    >>> image.shape, image.dtype
    ((120, 160, 3), dtype('uint8'))
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from fever_ray.camera.pinhole import PinholeCamera, setup_camera
from fever_ray.core.integrator import shade

if TYPE_CHECKING:
    from fever_ray.scene.manager import Config

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]

# Rows per work item when no band height is given
DEFAULT_BAND_HEIGHT = 8

Pixel = tuple[int, int, int]


def render_pixel(
    config: Config,
    x: int,
    y: int,
    camera: PinholeCamera | None = None,
) -> Pixel:
    """Compute the display color of a single pixel.

    Args:
        config: The render configuration.
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).
        camera: The camera for config. Built from config when omitted.

    Returns:
        The gamma-encoded 8-bit (r, g, b) triple.
    """
    if camera is None:
        camera = setup_camera(config)
    return shade(config, camera.get_ray(x, y)).to_display()


def render_band(
    config: Config,
    camera: PinholeCamera,
    row_start: int,
    row_stop: int,
) -> list[list[Pixel]]:
    """Render rows [row_start, row_stop) of the image.

    Returns:
        One list of pixels per row, left to right.
    """
    return [
        [render_pixel(config, x, y, camera) for x in range(config.width)]
        for y in range(row_start, row_stop)
    ]


def _bands(height: int, band_height: int) -> list[tuple[int, int]]:
    return [(start, min(start + band_height, height)) for start in range(0, height, band_height)]


def render(
    config: Config,
    *,
    workers: int | None = None,
    band_height: int | None = None,
    callback: ProgressCallback | None = None,
) -> npt.NDArray[np.uint8]:
    """Render a configuration into an 8-bit RGB buffer.

    Args:
        config: The render configuration.
        workers: Number of worker threads. None uses os.cpu_count();
            1 renders serially in the calling thread.
        band_height: Rows per work item (default DEFAULT_BAND_HEIGHT).
        callback: Optional callback called from the calling thread after
            each band is written. Receives (rows_done, total_rows).

    Returns:
        Array of shape (height, width, 3) with dtype uint8, where
        buffer[y, x] is pixel (x, y).

    Raises:
        InvalidAspectRatio: If config.width <= config.height.
        ValueError: If workers or band_height is not positive.
    """
    camera = setup_camera(config)

    if workers is None:
        workers = os.cpu_count() or 1
    if workers < 1:
        raise ValueError(f"Worker count must be positive, got {workers}")
    if band_height is None:
        band_height = DEFAULT_BAND_HEIGHT
    if band_height < 1:
        raise ValueError(f"Band height must be positive, got {band_height}")

    buffer = np.zeros((config.height, config.width, 3), dtype=np.uint8)
    bands = _bands(config.height, band_height)
    rows_done = 0

    logger.debug(
        "Rendering %dx%d with %d worker(s), %d band(s)",
        config.width,
        config.height,
        workers,
        len(bands),
    )
    start_time = time.perf_counter()

    if workers == 1:
        for row_start, row_stop in bands:
            buffer[row_start:row_stop] = render_band(config, camera, row_start, row_stop)
            rows_done += row_stop - row_start
            if callback is not None:
                callback(rows_done, config.height)
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(render_band, config, camera, row_start, row_stop): (row_start, row_stop)
                for row_start, row_stop in bands
            }
            # Single collector: only this thread writes into the buffer
            for future in as_completed(futures):
                row_start, row_stop = futures[future]
                buffer[row_start:row_stop] = future.result()
                rows_done += row_stop - row_start
                if callback is not None:
                    callback(rows_done, config.height)

    logger.info(
        "Rendered %dx%d in %.2fs",
        config.width,
        config.height,
        time.perf_counter() - start_time,
    )
    return buffer
