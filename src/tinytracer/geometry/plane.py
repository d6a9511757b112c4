"""Infinite plane primitive.

A plane is unbounded, so its bounding radius is infinite and the lower-bound
prune never excludes it. The stored normal is returned unchanged as the hit
normal regardless of which side the ray approaches from.
"""

from __future__ import annotations

import math
from typing import Any

from tinytracer.core.errors import InvalidValueError
from tinytracer.core.ray import Hit, Ray
from tinytracer.core.settings import PARALLEL_EPSILON
from tinytracer.core.vector import Vector
from tinytracer.geometry.base import Geometry


class Plane(Geometry):
    """An infinite plane through ``origin`` perpendicular to ``normal``.

    Attributes:
        position: A point on the plane.
        normal: Unit normal of the plane (normalized at construction).
    """

    def __init__(self, origin: Vector, normal: Vector) -> None:
        if normal.magnitude() == 0.0:
            raise InvalidValueError("Plane normal must be non-zero")
        super().__init__(origin, math.inf)
        self.normal = normal.direction()

    @property
    def origin(self) -> Vector:
        return self.position

    def all_hits(self, ray: Ray) -> list[Hit]:
        """Intersect the ray's line with the plane.

        Args:
            ray: The ray to test.

        Returns:
            A single hit, or an empty list if the ray is parallel to the plane
            (within ``PARALLEL_EPSILON``).
        """
        dot = ray.direction.dot(self.normal)
        if abs(dot) <= PARALLEL_EPSILON:
            return []
        t = self.normal.dot(self.position - ray.origin) / dot
        return [Hit(ray=ray, t=t, location=ray.at(t), normal=self.normal)]

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "plane",
            "origin": list(self.position.to_tuple()),
            "normal": list(self.normal.to_tuple()),
        }

    def __repr__(self) -> str:
        return f"Plane(origin={self.position!r}, normal={self.normal!r})"
