"""Taichi render target: per-pixel running statistics and the active mask.

Tracing runs in Python; each pass hands a (width, height, 3) array of new
samples to ``accumulate()``, and the per-pixel arithmetic runs in Taichi
kernels over preallocated fields:

    mean        running mean color (Welford)
    m2          running sum of squared deviations per channel (Welford)
    sample      number of samples accumulated per pixel
    deviation   mean of the per-channel sample standard deviations,
                normalized by the image maximum
    active      1 if the pixel receives a sample in the next pass

Field coordinates are (x, y) with y = 0 at the bottom row; the numpy getters
return (height, width, ...) arrays with the top row first.

Note: importing this module declares Taichi fields, so ``ti.init()`` must be
called first.
"""

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from tinytracer.core.settings import MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH

vec3 = tm.vec3

# =============================================================================
# Render Target Fields
# =============================================================================

# Image dimensions (actual active size)
_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Running statistics (preallocated to max size to avoid kernel recompilation)
_mean = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))
_m2 = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))
_sample_count = ti.field(dtype=ti.i32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

# Convergence state
_deviation = ti.field(dtype=ti.f32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))
_max_deviation = ti.field(dtype=ti.f32, shape=())
_active = ti.field(dtype=ti.i32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

# Flag to track if render target is initialized
_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Initialize the render target buffers.

    Sets the active image dimensions, clears the statistics and marks every
    pixel active.

    Args:
        width: Image width in pixels (max MAX_IMAGE_WIDTH).
        height: Image height in pixels (max MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If dimensions are not positive or exceed the maximum
            supported size.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1

    clear_render_target()


def clear_render_target() -> None:
    """Clear the accumulated statistics and reactivate every pixel."""
    _mean.fill(0.0)
    _m2.fill(0.0)
    _sample_count.fill(0)
    _deviation.fill(0.0)
    _max_deviation[None] = 0.0
    _active.fill(1)


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions.

    Returns:
        Tuple of (width, height).
    """
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


# =============================================================================
# Kernels
# =============================================================================


@ti.kernel
def _accumulate_samples(samples: ti.types.ndarray(dtype=ti.f32, ndim=3), width: ti.i32, height: ti.i32):
    """Fold one sample into every active pixel (Welford's update).

    Args:
        samples: Array of shape (width, height, 3); inactive pixels are ignored.
        width: Image width in pixels.
        height: Image height in pixels.
    """
    for i, j in ti.ndrange(width, height):
        if _active[i, j] == 1:
            color = vec3(samples[i, j, 0], samples[i, j, 1], samples[i, j, 2])

            _sample_count[i, j] += 1
            n = _sample_count[i, j]

            # mean_n = mean_{n-1} + (x_n - mean_{n-1}) / n
            delta = color - _mean[i, j]
            _mean[i, j] += delta / ti.cast(n, ti.f32)
            _m2[i, j] += delta * (color - _mean[i, j])


@ti.kernel
def _store_image(colors: ti.types.ndarray(dtype=ti.f32, ndim=3), samples: ti.i32, width: ti.i32, height: ti.i32):
    """Overwrite every pixel with a finished color.

    Args:
        colors: Array of shape (width, height, 3).
        samples: Number of samples each color was blended from.
        width: Image width in pixels.
        height: Image height in pixels.
    """
    for i, j in ti.ndrange(width, height):
        _mean[i, j] = vec3(colors[i, j, 0], colors[i, j, 1], colors[i, j, 2])
        _m2[i, j] = vec3(0.0, 0.0, 0.0)
        _sample_count[i, j] = samples
        _deviation[i, j] = 0.0
        _active[i, j] = 0


@ti.kernel
def _compute_deviation(width: ti.i32, height: ti.i32):
    """Compute each pixel's raw deviation and the image maximum.

    The raw deviation is the mean over channels of the unbiased sample
    standard deviation, 0 for pixels with fewer than two samples.
    """
    _max_deviation[None] = 0.0
    for i, j in ti.ndrange(width, height):
        n = _sample_count[i, j]
        deviation = 0.0
        if n >= 2:
            variance = _m2[i, j] / ti.cast(n - 1, ti.f32)
            # Rounding can leave tiny negative sums
            variance = tm.max(variance, vec3(0.0, 0.0, 0.0))
            deviation = (ti.sqrt(variance[0]) + ti.sqrt(variance[1]) + ti.sqrt(variance[2])) / 3.0
        _deviation[i, j] = deviation
        ti.atomic_max(_max_deviation[None], deviation)


@ti.kernel
def _normalize_deviation(width: ti.i32, height: ti.i32):
    """Scale deviations to [0, 1] by the image maximum (all 0 if it is 0)."""
    max_deviation = _max_deviation[None]
    for i, j in ti.ndrange(width, height):
        if max_deviation > 0.0:
            _deviation[i, j] = _deviation[i, j] / max_deviation
        else:
            _deviation[i, j] = 0.0


@ti.kernel
def _update_active(threshold: ti.f32, max_samples: ti.i32, width: ti.i32, height: ti.i32) -> ti.i32:
    """Mark pixels active when their deviation reaches the threshold.

    Pixels at or over ``max_samples`` (when positive) are never active.

    Returns:
        The number of active pixels.
    """
    active_count = 0
    for i, j in ti.ndrange(width, height):
        active = 0
        if _deviation[i, j] >= threshold:
            if max_samples <= 0 or _sample_count[i, j] < max_samples:
                active = 1
        _active[i, j] = active
        active_count += active
    return active_count


@ti.kernel
def _copy_active(mask: ti.types.ndarray(dtype=ti.i32, ndim=2), width: ti.i32, height: ti.i32):
    """Copy the active flags of the image region into a (width, height) array."""
    for i, j in ti.ndrange(width, height):
        mask[i, j] = _active[i, j]


# =============================================================================
# Public API
# =============================================================================


def accumulate(samples: npt.ArrayLike) -> None:
    """Fold one new sample per active pixel into the running statistics.

    Args:
        samples: Colors of shape (width, height, 3) in field coordinates
            (x first, y = 0 at the bottom). Entries of inactive pixels are
            ignored.

    Raises:
        RuntimeError: If render target has not been set up.
        ValueError: If the array shape does not match the render target.
    """
    _check_render_target_initialized()
    width, height = get_image_dimensions()
    array = _as_field_array(samples, width, height)
    _accumulate_samples(array, width, height)


def store_image(colors: npt.ArrayLike, samples_per_pixel: int) -> None:
    """Replace the whole image with finished colors (fixed-sample mode).

    Args:
        colors: Colors of shape (width, height, 3) in field coordinates.
        samples_per_pixel: Samples each color was blended from.

    Raises:
        RuntimeError: If render target has not been set up.
        ValueError: If the array shape does not match the render target.
    """
    _check_render_target_initialized()
    width, height = get_image_dimensions()
    array = _as_field_array(colors, width, height)
    _store_image(array, samples_per_pixel, width, height)


def update_deviation() -> float:
    """Recompute the normalized deviation of every pixel.

    Returns:
        The raw (unnormalized) maximum deviation over the image.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()
    width, height = get_image_dimensions()
    _compute_deviation(width, height)
    max_deviation = float(_max_deviation[None])
    _normalize_deviation(width, height)
    return max_deviation


def update_active_mask(threshold: float, max_samples: int = 0) -> int:
    """Select the pixels to sample in the next pass.

    Args:
        threshold: Minimum normalized deviation of an active pixel. A
            threshold of 0 activates every pixel.
        max_samples: Per-pixel sample cap (0 = unlimited).

    Returns:
        The number of active pixels.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()
    width, height = get_image_dimensions()
    return int(_update_active(threshold, max_samples, width, height))


def get_active_mask() -> npt.NDArray[np.bool_]:
    """Active pixels as a (width, height) boolean array in field coordinates.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()
    width, height = get_image_dimensions()
    # Only the image region leaves taichi, not the preallocated field
    mask = np.zeros((width, height), dtype=np.int32)
    _copy_active(mask, width, height)
    return mask.astype(bool)


def get_mean_numpy() -> npt.NDArray[np.float32]:
    """Running mean colors as a (height, width, 3) float32 array, top row first.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()
    return np.clip(_to_image_layout(_mean.to_numpy()), 0.0, 1.0).astype(np.float32)


def get_sample_counts_numpy() -> npt.NDArray[np.int32]:
    """Per-pixel sample counts as a (height, width) array, top row first.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()
    return _to_image_layout(_sample_count.to_numpy()).astype(np.int32)


def get_deviation_numpy() -> npt.NDArray[np.float32]:
    """Normalized deviations as a (height, width) array, top row first.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()
    return _to_image_layout(_deviation.to_numpy()).astype(np.float32)


def _as_field_array(values: npt.ArrayLike, width: int, height: int) -> npt.NDArray[np.float32]:
    array = np.ascontiguousarray(values, dtype=np.float32)
    if array.shape != (width, height, 3):
        raise ValueError(f"Expected array of shape {(width, height, 3)}, got {array.shape}")
    return array


def _to_image_layout(full: np.ndarray) -> np.ndarray:
    """Crop a preallocated field to the active region and reorient it."""
    width, height = get_image_dimensions()
    region = full[:width, :height]

    # Transpose from (width, height, ...) to (height, width, ...)
    axes = (1, 0) + tuple(range(2, region.ndim))
    region = np.transpose(region, axes)

    # Flip vertically (row 0 is the bottom of the image)
    return np.flipud(region)
