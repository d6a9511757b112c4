"""Base class for hittable geometry and the bounding-sphere lower bound.

Every geometry has a position and a bounding radius around it. Unbounded
shapes (planes) use an infinite radius, which makes the lower bound
``-inf`` so they are never pruned.

Subclasses implement ``all_hits()``; ``first_hit()`` filters those hits to
the closest one in front of the ray origin.
"""

from __future__ import annotations

import math
from typing import Any

from tinytracer.core.errors import InvalidValueError
from tinytracer.core.ray import Hit, Ray
from tinytracer.core.settings import EPSILON
from tinytracer.core.vector import Vector


class Geometry:
    """An object that rays can hit.

    Attributes:
        position: Reference point of the shape (center of its bounding sphere).
        radius: Bounding radius around ``position``; ``math.inf`` if unbounded.
    """

    def __init__(self, position: Vector, radius: float = math.inf) -> None:
        if math.isnan(radius) or radius <= 0.0:
            raise InvalidValueError(f"Geometry radius must be positive, got {radius}")
        self.position = position
        self.radius = radius

    def first_possible_hit_t(self, ray: Ray) -> float | None:
        """Cheap lower bound on the t at which this geometry could be hit.

        Uses only the bounding sphere. The bound may be loose (and negative
        when the ray starts inside the bounding sphere).

        Args:
            ray: The ray to test (direction must be normalized).

        Returns:
            A lower bound on t, or None if the bounding sphere proves the ray
            cannot hit: it lies entirely behind the origin, or the ray's
            closest approach to the center exceeds the radius.
        """
        radius = self.radius
        if math.isinf(radius):
            return -math.inf

        p = self.position
        o = ray.origin
        d = ray.direction
        dx = p.x - o.x
        dy = p.y - o.y
        dz = p.z - o.z

        # t of closest approach to the center
        rebased_t = dx * d.x + dy * d.y + dz * d.z
        if rebased_t + radius < 0.0:
            return None

        distance_squared = dx * dx + dy * dy + dz * dz - rebased_t * rebased_t
        if distance_squared > radius * radius:
            return None

        return rebased_t - radius

    def all_hits(self, ray: Ray) -> list[Hit]:
        """Every intersection of the ray's line with this geometry.

        Hits behind the origin (t <= 0) are included; callers filter them.
        """
        raise NotImplementedError("all_hits() must be implemented by subclasses.")

    def first_hit(self, ray: Ray) -> Hit | None:
        """Return the closest hit with ``t > EPSILON``, or None."""
        first: Hit | None = None
        for hit in self.all_hits(ray):
            if hit.t > EPSILON and (first is None or hit.t < first.t):
                first = hit
        return first

    def to_dict(self) -> dict[str, Any]:
        """Serialize the geometry's parameters."""
        raise NotImplementedError("to_dict() must be implemented by subclasses.")
