"""Preview module for image output.

Components:
    export: 8-bit conversion, PNG export and image comparison

Example:
    >>> from tinytracer.preview import save_png
    >>> renderer.render(64)  # doctest: +SKIP
    >>> save_png(renderer, "output.png")  # doctest: +SKIP
"""

from tinytracer.preview.export import (
    compute_rmse,
    image_to_uint8,
    save_png,
    save_png_from_array,
)

__all__ = [
    "save_png",
    "save_png_from_array",
    "image_to_uint8",
    "compute_rmse",
]
