"""Ray and hit records.

A Ray always carries a normalized direction and the number of bounces that
produced it. A Hit is created transiently by a geometry's intersection test
and discarded once the tracer has shaded it.

Example:
    >>> from tinytracer.core.ray import Ray
    >>> from tinytracer.core.vector import Vector
    >>> ray = Ray(Vector.ZERO, Vector(0.0, 0.0, 2.0))
    >>> ray.direction
    Vector(0.0, 0.0, 1.0)
    >>> ray.at(5.0)
    Vector(0.0, 0.0, 5.0)
"""

from __future__ import annotations

from dataclasses import dataclass

from tinytracer.core.vector import Vector


class Ray:
    """A ray proceeding from a point in a constant direction.

    Attributes:
        origin: The starting point of the ray.
        direction: The unit direction of travel (normalized at construction;
            stays zero if given a zero vector).
        bounce_count: Number of prior bounces that produced this ray.
    """

    __slots__ = ("origin", "direction", "bounce_count")

    def __init__(self, origin: Vector, direction: Vector, bounce_count: int = 0) -> None:
        if bounce_count < 0:
            raise ValueError(f"bounce_count must be non-negative, got {bounce_count}")
        self.origin = origin
        self.direction = direction.direction()
        self.bounce_count = bounce_count

    def at(self, t: float) -> Vector:
        """Return the point along the ray at parameter t."""
        o = self.origin
        d = self.direction
        return Vector(o.x + d.x * t, o.y + d.y * t, o.z + d.z * t)

    def __repr__(self) -> str:
        return (
            f"Ray(origin={self.origin!r}, direction={self.direction!r}, "
            f"bounce_count={self.bounce_count})"
        )


@dataclass(frozen=True)
class Hit:
    """Record of a ray-geometry intersection.

    Attributes:
        ray: The ray that produced the hit.
        t: Parametric distance along the ray.
        location: The hit point, ``ray.origin + ray.direction * t``.
        normal: Unit surface normal at the hit, oriented however the geometry
            defines it (not guaranteed to face the ray).
    """

    ray: Ray
    t: float
    location: Vector
    normal: Vector
