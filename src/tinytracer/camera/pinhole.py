"""Cameras mapping lens fractions to world-space rays.

The tracer treats a camera as a black box exposing

    get_ray(x_fraction, y_fraction) -> Ray

where (0, 0) is the bottom-left of the lens and (1, 1) the top-right.
Fractions slightly outside [0, 1] are allowed (sub-pixel jitter at the edges).

Two cameras are provided:
- LensCamera: a fixed camera at the origin looking along +Z through a
  1x1 lens, with its focal point a fixed depth behind the lens.
- PinholeCamera: look-from / look-at positioning with a vertical field of
  view and aspect ratio.

Example:
    >>> from tinytracer.camera.pinhole import PinholeCamera
    >>> camera = PinholeCamera(
    ...     lookfrom=(0.0, 0.0, 3.0),
    ...     lookat=(0.0, 0.0, 0.0),
    ...     vup=(0.0, 1.0, 0.0),
    ...     vfov=60.0,
    ...     aspect_ratio=1.0,
    ... )
    >>> ray = camera.get_ray(0.5, 0.5)  # Ray through image center
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Protocol

import numpy as np

from tinytracer.core.ray import Ray
from tinytracer.core.vector import Vector


class Camera(Protocol):
    """Anything that can produce a ray for a point on its lens."""

    def get_ray(self, x: float, y: float) -> Ray: ...


# =============================================================================
# Lens Camera
# =============================================================================


@dataclass(frozen=True)
class LensCamera:
    """A camera at ``location`` looking along +Z.

    Rays start on a ``width`` x ``height`` lens centered on ``location`` and
    point away from a focal point ``depth`` units behind it, so a larger
    depth gives a narrower field of view.

    Attributes:
        location: Center of the lens.
        depth: Distance of the focal point behind the lens.
        width: Lens width.
        height: Lens height.
    """

    location: Vector = Vector.ZERO
    depth: float = 2.0
    width: float = 1.0
    height: float = 1.0

    @property
    def focal_point(self) -> Vector:
        return self.location - Vector.Z * self.depth

    def get_ray(self, x: float, y: float) -> Ray:
        """Ray leaving the lens at fractions x and y across its width and height."""
        lens_point = self.location + Vector(
            -self.width / 2.0 + x * self.width,
            -self.height / 2.0 + y * self.height,
            0.0,
        )
        return Ray(lens_point, lens_point - self.focal_point)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "lens",
            "location": list(self.location.to_tuple()),
            "depth": self.depth,
            "width": self.width,
            "height": self.height,
        }


# =============================================================================
# Pinhole Camera
# =============================================================================


@dataclass(frozen=True)
class PinholeCamera:
    """Configuration for a pinhole (perspective) camera.

    The camera builds an orthonormal basis (u, v, w) from the view parameters:
    - w: points from lookat toward lookfrom (opposite view direction)
    - u: points right in the image plane
    - v: points up in the image plane

    Attributes:
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Up direction vector for camera orientation (typically (0, 1, 0)).
        vfov: Vertical field of view in degrees (typically 40-90).
        aspect_ratio: Width divided by height of the output image.
    """

    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float]
    vfov: float
    aspect_ratio: float
    _origin: Vector = field(init=False, repr=False, compare=False)
    _horizontal: Vector = field(init=False, repr=False, compare=False)
    _vertical: Vector = field(init=False, repr=False, compare=False)
    _lower_left: Vector = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"vfov must be in (0, 180) degrees, got {self.vfov}")
        if self.aspect_ratio <= 0.0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")

        # Viewport dimensions at unit distance
        h = math.tan(math.radians(self.vfov) / 2.0)
        viewport_height = 2.0 * h
        viewport_width = self.aspect_ratio * viewport_height

        lookfrom = np.array(self.lookfrom, dtype=np.float64)
        lookat = np.array(self.lookat, dtype=np.float64)
        vup = np.array(self.vup, dtype=np.float64)

        w = lookfrom - lookat
        w_norm = np.linalg.norm(w)
        if w_norm == 0.0:
            raise ValueError("lookfrom and lookat must be different points")
        w = w / w_norm

        u = np.cross(vup, w)
        u_norm = np.linalg.norm(u)
        if u_norm == 0.0:
            raise ValueError("vup must not be parallel to the view direction")
        u = u / u_norm

        v = np.cross(w, u)

        horizontal = viewport_width * u
        vertical = viewport_height * v
        lower_left = lookfrom - w - horizontal / 2.0 - vertical / 2.0

        # Frozen dataclass: derived fields are set once here
        object.__setattr__(self, "_origin", Vector.from_sequence(lookfrom))
        object.__setattr__(self, "_horizontal", Vector.from_sequence(horizontal))
        object.__setattr__(self, "_vertical", Vector.from_sequence(vertical))
        object.__setattr__(self, "_lower_left", Vector.from_sequence(lower_left))

    def get_ray(self, x: float, y: float) -> Ray:
        """Generate a ray through normalized image coordinates.

        Args:
            x: Horizontal coordinate, 0 = left edge, 1 = right edge.
            y: Vertical coordinate, 0 = bottom edge, 1 = top edge.

        Returns:
            A Ray from the camera position through the viewport point.
        """
        point_on_viewport = self._lower_left + self._horizontal * x + self._vertical * y
        return Ray(self._origin, point_on_viewport - self._origin)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "pinhole",
            "lookfrom": list(self.lookfrom),
            "lookat": list(self.lookat),
            "vup": list(self.vup),
            "vfov": self.vfov,
            "aspect_ratio": self.aspect_ratio,
        }


def camera_from_dict(data: dict[str, Any]) -> LensCamera | PinholeCamera:
    """Rebuild a camera serialized with ``to_dict()``.

    Raises:
        ValueError: If the camera type is unknown.
    """
    camera_type = data.get("type", "").lower()
    if camera_type == "lens":
        return LensCamera(
            location=Vector.from_sequence(data.get("location", [0.0, 0.0, 0.0])),
            depth=data.get("depth", 2.0),
            width=data.get("width", 1.0),
            height=data.get("height", 1.0),
        )
    if camera_type == "pinhole":
        return PinholeCamera(
            lookfrom=tuple(data["lookfrom"]),
            lookat=tuple(data["lookat"]),
            vup=tuple(data.get("vup", [0.0, 1.0, 0.0])),
            vfov=data.get("vfov", 60.0),
            aspect_ratio=data.get("aspect_ratio", 1.0),
        )
    raise ValueError(f"Unknown camera type: {camera_type}")
