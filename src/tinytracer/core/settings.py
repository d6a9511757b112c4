"""Rendering constants and the RenderSettings configuration object.

Module-level constants fix the numerical tolerances used by every geometry;
``RenderSettings`` groups the knobs a caller may tune per render (bounce
limit, sampling fan-out, adaptive schedule, background).

Example:
    >>> from tinytracer.core.settings import RenderSettings, RenderMode
    >>> settings = RenderSettings(max_bounces=8, mode=RenderMode.FIXED)
    >>> settings.samples_per_bounce(previous_hits=2)
    1
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import IntEnum

from tinytracer.core.color import Color
from tinytracer.core.ray import Ray

# =============================================================================
# Numerical Constants
# =============================================================================

# Minimum t for a valid hit; excludes self-intersection at a bounce origin
EPSILON = 1e-4

# Rays whose direction is this close to perpendicular to a plane's normal miss it
PARALLEL_EPSILON = 1e-5

# =============================================================================
# Rendering Defaults
# =============================================================================

DEFAULT_MAX_BOUNCES = 16
DEFAULT_MAX_SAMPLES_PER_BOUNCE = 4
DEFAULT_SAMPLES_PER_PIXEL = 8

# Display exponent applied per channel (approximately linear-to-sRGB)
DISPLAY_GAMMA = 0.45

DEFAULT_WARMUP_PASSES = 16
DEFAULT_PRECISION_INTERVAL = 8

# Maximum supported image dimensions (render target is preallocated)
MAX_IMAGE_WIDTH = 1024
MAX_IMAGE_HEIGHT = 1024

Background = Callable[[Ray], Color]


class RenderMode(IntEnum):
    """Sampling policy of the progressive renderer."""

    FIXED = 0
    ADAPTIVE = 1


# =============================================================================
# Backgrounds
# =============================================================================


def sky_gradient(ray: Ray) -> Color:
    """Direction-dependent sky: brighter and bluer towards +Y.

    Args:
        ray: The escaping ray.

    Returns:
        ``Color(a, 0.3 + a, 0.5 + 2a)`` with ``a = (direction.y + 0.5)^2``.
    """
    a = (ray.direction.y + 0.5) ** 2
    return Color(a, 0.3 + a, 0.5 + a * 2)


def flat_background(color: Color) -> Background:
    """Return a background that ignores the ray and yields a single color."""

    def background(ray: Ray) -> Color:
        return color

    return background


# =============================================================================
# Settings
# =============================================================================


@dataclass(frozen=True)
class RenderSettings:
    """Configuration for the tracer and progressive renderer.

    Attributes:
        max_bounces: Recursion cutoff. A ray whose bounce chain would reach
            this length returns ``terminal_color`` without being traced.
        max_samples_per_bounce: Deflected rays spawned at the first hit; the
            count halves with each further bounce (never below 1).
        samples_per_pixel: Jittered rays per pixel in fixed-sample mode.
        gamma: Display exponent applied to accumulated colors.
        mode: FIXED renders each pixel once; ADAPTIVE repeats passes and
            skips converged pixels.
        warmup_passes: Passes rendered on every pixel before adaptive
            skipping begins.
        precision_interval: Passes between deviation recomputations.
        max_samples_per_pixel: Adaptive sample cap per pixel (0 = unlimited).
        prune_by_lower_bound: Order and cut the closest-hit search with the
            bounding-sphere lower bound.
        background: Color of rays escaping the scene.
        terminal_color: Color returned at the bounce cutoff. ``None`` uses
            the background for the ray instead.
    """

    max_bounces: int = DEFAULT_MAX_BOUNCES
    max_samples_per_bounce: int = DEFAULT_MAX_SAMPLES_PER_BOUNCE
    samples_per_pixel: int = DEFAULT_SAMPLES_PER_PIXEL
    gamma: float = DISPLAY_GAMMA
    mode: RenderMode = RenderMode.ADAPTIVE
    warmup_passes: int = DEFAULT_WARMUP_PASSES
    precision_interval: int = DEFAULT_PRECISION_INTERVAL
    max_samples_per_pixel: int = 0
    prune_by_lower_bound: bool = True
    background: Background = field(default=sky_gradient, compare=False)
    terminal_color: Color | None = Color.BLACK

    def __post_init__(self) -> None:
        if self.max_bounces < 1:
            raise ValueError(f"max_bounces must be at least 1, got {self.max_bounces}")
        if self.max_samples_per_bounce < 1:
            raise ValueError(
                f"max_samples_per_bounce must be at least 1, got {self.max_samples_per_bounce}"
            )
        if self.samples_per_pixel < 1:
            raise ValueError(
                f"samples_per_pixel must be at least 1, got {self.samples_per_pixel}"
            )
        if not math.isfinite(self.gamma) or self.gamma <= 0.0:
            raise ValueError(f"gamma must be a positive finite number, got {self.gamma}")
        if self.warmup_passes < 0:
            raise ValueError(f"warmup_passes must be non-negative, got {self.warmup_passes}")
        if self.precision_interval < 1:
            raise ValueError(
                f"precision_interval must be at least 1, got {self.precision_interval}"
            )
        if self.max_samples_per_pixel < 0:
            raise ValueError(
                f"max_samples_per_pixel must be non-negative, got {self.max_samples_per_pixel}"
            )

    def samples_per_bounce(self, previous_hits: int) -> int:
        """Number of deflected rays to trace at a hit.

        Args:
            previous_hits: Hits earlier in the bounce chain (0 at the first hit).

        Returns:
            ``ceil(max_samples_per_bounce / 2^previous_hits)``, at least 1.
        """
        return max(1, math.ceil(self.max_samples_per_bounce / 2**previous_hits))

    def with_changes(self, **changes: object) -> RenderSettings:
        """Return a copy with the given fields replaced (validated again)."""
        return replace(self, **changes)
