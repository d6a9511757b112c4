"""Sphere primitive and ray-sphere intersection.

The intersection solves the quadratic

    a*t^2 + b*t + c = 0

with ``a = d.d``, ``b = 2(o - center).d`` and ``c = |o - center|^2 - r^2``.
A negative discriminant is a miss, zero is a single tangent hit and a positive
discriminant gives the entry and exit hits. Normals always point outward
from the center, whichever side the ray comes from.

Example:
    >>> from tinytracer.core.ray import Ray
    >>> from tinytracer.core.vector import Vector
    >>> from tinytracer.geometry.sphere import Sphere
    >>> sphere = Sphere(Vector.ZERO, 1.0)
    >>> hit = sphere.first_hit(Ray(Vector(0.0, 0.0, -2.0), Vector.Z))
    >>> hit.t, hit.normal
    (1.0, Vector(0.0, 0.0, -1.0))
"""

from __future__ import annotations

import math
from typing import Any

from tinytracer.core.errors import InvalidValueError
from tinytracer.core.ray import Hit, Ray
from tinytracer.core.vector import Vector
from tinytracer.geometry.base import Geometry


class Sphere(Geometry):
    """A sphere defined by center point and radius.

    The bounding sphere used for pruning is the sphere itself.

    Attributes:
        position: The center of the sphere.
        radius: The radius of the sphere (positive, finite).
    """

    def __init__(self, center: Vector, radius: float) -> None:
        if not math.isfinite(radius):
            raise InvalidValueError(f"Sphere radius is {radius}")
        super().__init__(center, radius)

    @property
    def center(self) -> Vector:
        return self.position

    def all_hits(self, ray: Ray) -> list[Hit]:
        """Intersect the ray's line with the sphere.

        Args:
            ray: The ray to test.

        Returns:
            An empty list on a miss, one hit for a tangent ray, otherwise the
            entry and exit hits ordered by t.
        """
        c = self.position
        o = ray.origin
        d = ray.direction

        ox = o.x - c.x
        oy = o.y - c.y
        oz = o.z - c.z

        a = d.x * d.x + d.y * d.y + d.z * d.z
        if a == 0.0:
            # Zero direction never travels anywhere
            return []
        b = 2.0 * (ox * d.x + oy * d.y + oz * d.z)
        k = ox * ox + oy * oy + oz * oz - self.radius * self.radius
        discriminant = b * b - 4.0 * a * k

        if discriminant < 0.0:
            return []
        if discriminant == 0.0:
            return [self._hit_at(ray, -b / (2.0 * a))]

        sqrt_disc = math.sqrt(discriminant)
        return [
            self._hit_at(ray, (-b - sqrt_disc) / (2.0 * a)),
            self._hit_at(ray, (-b + sqrt_disc) / (2.0 * a)),
        ]

    def _hit_at(self, ray: Ray, t: float) -> Hit:
        location = ray.at(t)
        normal = (location - self.position).direction()
        return Hit(ray=ray, t=t, location=location, normal=normal)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "sphere",
            "center": list(self.position.to_tuple()),
            "radius": self.radius,
        }

    def __repr__(self) -> str:
        return f"Sphere(center={self.position!r}, radius={self.radius})"
