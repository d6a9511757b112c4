"""Image export utilities for rendered images.

Rendered images are float arrays of shape (H, W, 3) with display-encoded
values in [0, 1]. Conversion to 8 bits truncates each channel:

    ch8 = floor(ch * 255) & 0xFF

Supported formats:
    - PNG (8-bit via Pillow)

Example:
    >>> from tinytracer.preview.export import save_png
    >>> renderer.render(64)  # doctest: +SKIP
    >>> save_png(renderer, "output.png")  # doctest: +SKIP
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

if TYPE_CHECKING:
    from tinytracer.core.progressive import ProgressiveRenderer


def image_to_uint8(image: npt.NDArray[np.floating[npt.NBitBase]]) -> npt.NDArray[np.uint8]:
    """Convert a float image in [0, 1] to uint8 by truncation.

    Values outside [0, 1] are clamped first.

    Args:
        image: Image array of shape (H, W, 3).

    Returns:
        8-bit image array of the same shape.
    """
    clipped = np.clip(np.asarray(image, dtype=np.float64), 0.0, 1.0)
    return (np.floor(clipped * 255.0).astype(np.int64) & 0xFF).astype(np.uint8)


def save_png(
    renderer: ProgressiveRenderer,
    filepath: str,
    *,
    gamma: float | None = None,
) -> None:
    """Save a renderer's current image as a PNG file.

    Args:
        renderer: The ProgressiveRenderer instance to save.
        filepath: Output file path (should end in .png).
        gamma: Display exponent; defaults to the renderer's settings.
    """
    save_png_from_array(renderer.get_image_numpy(gamma=gamma), filepath)


def save_png_from_array(image: npt.NDArray[np.floating[npt.NBitBase]], filepath: str) -> None:
    """Save a display-encoded float image as an 8-bit PNG.

    Args:
        image: Image array of shape (H, W, 3), top row first.
        filepath: Output file path (should end in .png).
    """
    pil_image = PILImage.fromarray(image_to_uint8(image))
    pil_image.save(filepath)


def compute_rmse(
    image_a: npt.NDArray[np.floating[npt.NBitBase]],
    image_b: npt.NDArray[np.floating[npt.NBitBase]],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
