"""Progressive renderer: jittered camera sampling with adaptive convergence.

This module drives the RayTracer over an image and keeps the results in the
Taichi render target (see ``accumulator``). It supports:
- Fixed-sample rendering: every pixel gets ``samples_per_pixel`` jittered
  rays, blended once
- Adaptive rendering: repeated one-sample passes that stop sampling pixels
  whose deviation has dropped below a tightening threshold
- Progress callbacks and a generator interface for UI updates
- Reset, resize and image export

Adaptive schedule for pass ``p`` (0-based):
- ``p < warmup_passes``: every pixel is sampled
- otherwise, with ``phase = p % precision_interval``: deviations are
  recomputed when ``phase == 0``, and a pixel is sampled iff its normalized
  deviation is at least ``sqrt(phase / precision_interval)`` and it is under
  the per-pixel sample cap

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from tinytracer.core.progressive import ProgressiveRenderer
    >>> from tinytracer.core.raytracer import RayTracer
    >>> from tinytracer.scene.demo import create_three_spheres_scene
    >>>
    >>> renderer = ProgressiveRenderer(RayTracer(create_three_spheres_scene()), 64, 48)
    >>> renderer.render(32)  # 32 adaptive passes
    >>> image = renderer.get_image_numpy()
"""

import logging
import math
from collections.abc import Callable, Generator
from typing import Any

import numpy as np
import numpy.typing as npt

from tinytracer.core.accumulator import (
    accumulate,
    clear_render_target,
    get_active_mask,
    get_deviation_numpy,
    get_mean_numpy,
    get_sample_counts_numpy,
    setup_render_target,
    store_image,
    update_active_mask,
    update_deviation,
)
from tinytracer.core.color import Color
from tinytracer.core.raytracer import RayTracer
from tinytracer.core.settings import RenderMode, RenderSettings
from tinytracer.preview.export import image_to_uint8, save_png_from_array

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (completed_passes, target_passes)
ProgressCallback = Callable[[int, int], None]


class ProgressiveRenderer:
    """Renders a traced scene into the Taichi render target.

    The render target is module-global Taichi state, so only one renderer
    should be active at a time; creating or resizing a renderer resets it.

    Attributes:
        tracer: The RayTracer computing each sample's color.
        settings: Sampling mode and adaptive schedule.
        rng: Random source for sub-pixel jitter.
    """

    def __init__(
        self,
        tracer: RayTracer,
        width: int,
        height: int,
        settings: RenderSettings | None = None,
        rng: Any = None,
    ) -> None:
        """Initialize the renderer and its render target.

        Args:
            tracer: The RayTracer to sample.
            width: Image width in pixels (max 1024).
            height: Image height in pixels (max 1024).
            settings: Render settings; defaults to the tracer's.
            rng: Random source for jitter; defaults to the tracer's.

        Raises:
            ValueError: If dimensions are not positive or exceed the maximum
                supported size.
        """
        self.tracer = tracer
        self.settings = settings if settings is not None else tracer.settings
        self.rng = rng if rng is not None else tracer.rng
        self._width = width
        self._height = height
        self._pass_count = 0
        setup_render_target(width, height)

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def pass_count(self) -> int:
        """Number of passes rendered since the last reset."""
        return self._pass_count

    def reset(self) -> None:
        """Discard all samples and restart the pass schedule."""
        clear_render_target()
        self._pass_count = 0

    def resize(self, width: int, height: int) -> None:
        """Resize the render target and reset the accumulator.

        Raises:
            ValueError: If dimensions exceed maximum supported size.
        """
        setup_render_target(width, height)
        self._width = width
        self._height = height
        self._pass_count = 0

    # =========================================================================
    # Sampling
    # =========================================================================

    def _lens_fraction(self, x: float, y: float) -> tuple[float, float]:
        """Map (jittered) pixel coordinates to lens fractions.

        The image is centered in a square frame of side ``max(width, height)``
        so pixels stay square whatever the aspect ratio.
        """
        size = max(self._width, self._height)
        x_padding = (size - self._width) / 2
        y_padding = (size - self._height) / 2
        span = max(size - 1, 1)
        return (x_padding + x) / span, (y_padding + y) / span

    def sample_pixel(self, x: int, y: int, samples: int = 1) -> Color:
        """Trace jittered camera rays through a pixel and blend them.

        Args:
            x: Pixel column (0 = left).
            y: Pixel row (0 = bottom).
            samples: Number of rays to trace.

        Returns:
            The unweighted blend of the sample colors.
        """
        camera = self.tracer.scene.camera
        colors = []
        for _ in range(samples):
            dx = self.rng.random() - 0.5
            dy = self.rng.random() - 0.5
            ray = camera.get_ray(*self._lens_fraction(x + dx, y + dy))
            colors.append(self.tracer.get_ray_color(ray))
        return Color.blend(colors)

    def _threshold_for_pass(self, pass_index: int) -> float:
        settings = self.settings
        if pass_index < settings.warmup_passes:
            return 0.0

        phase = pass_index % settings.precision_interval
        # Also recompute on the first pass after warmup, whatever its phase
        if phase == 0 or pass_index == settings.warmup_passes:
            max_deviation = update_deviation()
            logger.debug(
                "Pass %d: recomputed deviation (max %.6f)", pass_index, max_deviation
            )
        return math.sqrt(phase / settings.precision_interval)

    def render_pass(self) -> int:
        """Render one pass.

        In adaptive mode, traces one sample for every currently active pixel
        and accumulates it. In fixed mode, re-renders the whole image with
        ``render_fixed()``.

        Returns:
            The number of pixels sampled.
        """
        if self.settings.mode == RenderMode.FIXED:
            self.render_fixed()
            return self._width * self._height

        threshold = self._threshold_for_pass(self._pass_count)
        active_count = update_active_mask(threshold, self.settings.max_samples_per_pixel)

        samples = np.zeros((self._width, self._height, 3), dtype=np.float32)
        if active_count > 0:
            for x, y in np.argwhere(get_active_mask()):
                samples[x, y] = self.sample_pixel(int(x), int(y)).to_tuple()
            accumulate(samples)

        logger.debug(
            "Pass %d: threshold %.3f, sampled %d pixels",
            self._pass_count,
            threshold,
            active_count,
        )
        self._pass_count += 1
        return active_count

    def render(self, num_passes: int = 1, callback: ProgressCallback | None = None) -> None:
        """Render passes with an optional progress callback.

        Args:
            num_passes: Number of passes to add.
            callback: Optional callback called after each pass with
                (completed_passes, target_passes).

        Example:
            >>> def progress(current, target):
            ...     print(f"Progress: {current}/{target} passes")
            >>> renderer.render(100, callback=progress)
        """
        for current, target in self.render_progressive(num_passes):
            if callback is not None:
                callback(current, target)

    def render_progressive(self, num_passes: int = 1) -> Generator[tuple[int, int], None, None]:
        """Render passes, yielding progress after each one.

        Args:
            num_passes: Number of passes to add.

        Yields:
            Tuple of (completed_passes, target_passes).
        """
        if num_passes <= 0:
            return

        target = self._pass_count + num_passes
        while self._pass_count < target:
            self.render_pass()
            yield (self._pass_count, target)

    def render_fixed(self, samples_per_pixel: int | None = None) -> None:
        """Render every pixel once from a fixed number of jittered rays.

        Replaces any previous image content.

        Args:
            samples_per_pixel: Rays per pixel; defaults to
                ``settings.samples_per_pixel``.

        Raises:
            ValueError: If samples_per_pixel is less than 1.
        """
        if samples_per_pixel is None:
            samples_per_pixel = self.settings.samples_per_pixel
        if samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be at least 1, got {samples_per_pixel}")

        colors = np.zeros((self._width, self._height, 3), dtype=np.float32)
        for x in range(self._width):
            for y in range(self._height):
                colors[x, y] = self.sample_pixel(x, y, samples_per_pixel).to_tuple()
        store_image(colors, samples_per_pixel)

        logger.debug(
            "Rendered %dx%d image at %d samples per pixel",
            self._width,
            self._height,
            samples_per_pixel,
        )
        self._pass_count += 1

    # =========================================================================
    # Output
    # =========================================================================

    def get_image_numpy(self, gamma: float | None = None) -> npt.NDArray[np.float32]:
        """Get the rendered image as a NumPy array.

        Args:
            gamma: Display exponent applied per channel; defaults to
                ``settings.gamma``. Use 1.0 for linear values.

        Returns:
            NumPy array of shape (height, width, 3) with dtype float32, values
            in [0, 1], top row first.
        """
        if gamma is None:
            gamma = self.settings.gamma
        image = get_mean_numpy()
        if gamma != 1.0:
            image = np.power(image, gamma)
        return image.astype(np.float32)

    def get_image_uint8(self, gamma: float | None = None) -> npt.NDArray[np.uint8]:
        """Get the rendered image as an 8-bit NumPy array (truncated channels)."""
        return image_to_uint8(self.get_image_numpy(gamma=gamma))

    def get_sample_counts_numpy(self) -> npt.NDArray[np.int32]:
        """Per-pixel sample counts, shape (height, width), top row first."""
        return get_sample_counts_numpy()

    def get_deviation_numpy(self) -> npt.NDArray[np.float32]:
        """Normalized deviation scores from the last recomputation."""
        return get_deviation_numpy()

    def save_image(self, filepath: str, gamma: float | None = None) -> None:
        """Save the rendered image to a file (format from the extension).

        Args:
            filepath: Path to save the image (e.g., "output.png").
            gamma: Display exponent; defaults to ``settings.gamma``.
        """
        save_png_from_array(self.get_image_numpy(gamma=gamma), filepath)

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"ProgressiveRenderer(width={self.width}, height={self.height}, "
            f"passes={self.pass_count}, mode={self.settings.mode.name})"
        )
