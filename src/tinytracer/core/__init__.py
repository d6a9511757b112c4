"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    errors: Exception types for invalid values and empty blends
    vector: Immutable 3D vector and random unit vector sampling
    color: Saturating RGB color with blend/multiply/screen compositing
    ray: Ray and Hit records
    settings: Numerical constants, backgrounds and RenderSettings
    raytracer: Recursive shader (closest hit, deflection fan-out, composite)
    accumulator: Taichi render target (running mean, deviation, active mask)
    progressive: Progressive renderer driving the tracer pass by pass

Tracing itself is plain Python (recursive, scene-driven); the per-pixel
buffer arithmetic of the renderer runs in Taichi kernels.
"""

from .color import Color, rgb
from .errors import EmptyBlendError, InvalidValueError
from .ray import Hit, Ray
from .settings import (
    EPSILON,
    PARALLEL_EPSILON,
    RenderMode,
    RenderSettings,
    flat_background,
    sky_gradient,
)
from .vector import Vector, random_unit_vector

# Note: accumulator, progressive and raytracer are NOT imported here.
# accumulator declares Taichi fields, which must happen after ti.init();
# raytracer depends on the geometry and material packages, which import core.
#
# For progressive rendering, use:
#   from tinytracer.core.progressive import ProgressiveRenderer

__all__ = [
    "Color",
    "rgb",
    "Vector",
    "random_unit_vector",
    "Ray",
    "Hit",
    "InvalidValueError",
    "EmptyBlendError",
    "EPSILON",
    "PARALLEL_EPSILON",
    "RenderMode",
    "RenderSettings",
    "sky_gradient",
    "flat_background",
]
