"""Image export utilities for rendered images.

This module converts between linear float images and gamma-encoded 8-bit
buffers, and reads/writes 8-bit buffers as PNG files.

The vectorised conversions match Color.to_display() and
Color.from_display() per channel:

    linear_to_uint8: clamp to [0, 1], raise to 1 / GAMMA, scale by 255, truncate
    uint8_to_linear: divide by 255, raise to GAMMA

Supported formats:
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from fever_ray.core.dispatcher import render
    >>> from fever_ray.preview.export import save_png
    >>> from fever_ray.scene.presets import create_demo_config
    >>> save_png(render(create_demo_config()), "demo.png")
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from fever_ray.core.color import GAMMA

logger = logging.getLogger(__name__)


def linear_to_uint8(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to a gamma-encoded 8-bit buffer.

    Args:
        image: Linear image array of shape (H, W, 3).

    Returns:
        8-bit image array of shape (H, W, 3) with dtype uint8.
    """
    clamped = np.clip(np.asarray(image, dtype=np.float64), 0.0, 1.0)
    encoded = np.power(clamped, 1.0 / GAMMA)
    # astype truncates toward zero, as int() does in Color.to_display()
    return (encoded * 255.0).astype(np.uint8)


def uint8_to_linear(image: npt.NDArray[np.uint8]) -> npt.NDArray[np.float64]:
    """Convert a gamma-encoded 8-bit buffer back to linear light.

    Args:
        image: 8-bit image array of shape (H, W, 3).

    Returns:
        Linear image array of shape (H, W, 3) with dtype float64 in [0, 1].
    """
    return np.power(np.asarray(image, dtype=np.float64) / 255.0, GAMMA)


def save_png(buffer: npt.NDArray[np.uint8], filepath: str | Path) -> Path:
    """Save an 8-bit RGB buffer as a PNG file.

    Args:
        buffer: Image array of shape (H, W, 3) with dtype uint8, as returned
            by fever_ray.core.dispatcher.render().
        filepath: Output file path (should end in .png).

    Returns:
        The path written.

    Raises:
        ValueError: If the buffer does not have shape (H, W, 3) and dtype uint8.
    """
    if buffer.ndim != 3 or buffer.shape[2] != 3 or buffer.dtype != np.uint8:
        raise ValueError(
            f"Expected a uint8 buffer of shape (H, W, 3), got {buffer.dtype} {buffer.shape}"
        )
    path = Path(filepath)
    PILImage.fromarray(buffer).save(path)
    logger.info("Saved %dx%d image to %s", buffer.shape[1], buffer.shape[0], path)
    return path


def load_png(filepath: str | Path) -> npt.NDArray[np.uint8]:
    """Load an image file as an 8-bit RGB buffer.

    Returns:
        Image array of shape (H, W, 3) with dtype uint8.
    """
    with PILImage.open(filepath) as image:
        return np.asarray(image.convert("RGB"), dtype=np.uint8).copy()
