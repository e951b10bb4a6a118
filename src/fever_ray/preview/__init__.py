"""Preview module for output and visualization.

Components:
    export: Linear/8-bit conversion and PNG export via Pillow
    display: Matplotlib-based preview window

Example:
    >>> from fever_ray.preview import save_png, show_preview
    >>> save_png(image, "output.png")
    >>> show_preview(image)
"""

from fever_ray.preview.display import show_preview
from fever_ray.preview.export import (
    linear_to_uint8,
    load_png,
    save_png,
    uint8_to_linear,
)

__all__ = [
    # Display
    "show_preview",
    # Export
    "save_png",
    "load_png",
    "linear_to_uint8",
    "uint8_to_linear",
]
