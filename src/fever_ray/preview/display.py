"""Matplotlib-based preview display for rendered images.

Example:
    >>> from fever_ray.core.dispatcher import render
    >>> from fever_ray.preview.display import show_preview
    >>> from fever_ray.scene.presets import create_demo_config
    >>> show_preview(render(create_demo_config()))
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt


def show_preview(
    buffer: npt.NDArray[np.uint8],
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Display a rendered 8-bit buffer as a Matplotlib figure.

    The buffer is already gamma encoded, so it is shown as-is.

    Args:
        buffer: Image array of shape (H, W, 3) with dtype uint8.
        title: Custom title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until the figure is closed.
    """
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(1, 1, figsize=figsize)

    ax.imshow(buffer)
    ax.axis("off")

    if title is None:
        title = f"Render Preview - {buffer.shape[1]}x{buffer.shape[0]}"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
