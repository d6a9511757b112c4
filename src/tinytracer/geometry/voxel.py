"""Voxel cluster geometry built from three orthographic silhouettes.

A lattice cell ``(x, y, z)`` is solid when all three of its projections are
solid:

    front[height - 1 - y][x]   (XY silhouette, row 0 at the top)
    side[height - 1 - y][z]    (ZY silhouette, row 0 at the top)
    top[z][x]                  (XZ silhouette)

Each solid cell becomes a fixed-radius sphere spaced ``voxel_distance`` apart
from ``position``. Intersection is a linear scan over the sub-spheres.

Example:
    >>> import numpy as np
    >>> from tinytracer.core.vector import Vector
    >>> from tinytracer.geometry.voxel import VoxelCluster
    >>> full = np.ones((8, 8), dtype=bool)
    >>> len(VoxelCluster(Vector.ZERO, full, full, full).voxels)
    512
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np
import numpy.typing as npt

from tinytracer.core.ray import Hit, Ray
from tinytracer.core.vector import Vector
from tinytracer.geometry.base import Geometry
from tinytracer.geometry.sphere import Sphere

# Lattice spacing and sphere radius of the demo voxel logo
DEFAULT_VOXEL_DISTANCE = 32.0
DEFAULT_VOXEL_RADIUS = 25.0
DEFAULT_PIXEL_SIZE = 16


def _as_mask(name: str, mask: Any) -> npt.NDArray[np.bool_]:
    array = np.asarray(mask, dtype=bool)
    if array.ndim != 2:
        raise ValueError(f"{name} mask must be 2-dimensional, got shape {array.shape}")
    return array


class VoxelCluster(Geometry):
    """A cluster of spheres approximating a shape from three silhouettes.

    Attributes:
        position: World position of lattice cell (0, 0, 0).
        front: XY silhouette, shape (pixel_height, pixel_width).
        top: XZ silhouette, shape (pixel_depth, pixel_width).
        side: ZY silhouette, shape (pixel_height, pixel_depth).
        voxel_distance: Spacing between lattice points.
        voxel_radius: Radius of each voxel sphere.
        voxels: The precomputed sub-spheres, in (x, y, z) lattice order.
    """

    def __init__(
        self,
        position: Vector,
        front: Any,
        top: Any,
        side: Any,
        voxel_distance: float = DEFAULT_VOXEL_DISTANCE,
        voxel_radius: float = DEFAULT_VOXEL_RADIUS,
    ) -> None:
        """Build the voxel spheres from three silhouette masks.

        Args:
            position: World position of lattice cell (0, 0, 0).
            front: XY silhouette indexed ``[row][x]``, row 0 at the top.
            top: XZ silhouette indexed ``[z][x]``.
            side: ZY silhouette indexed ``[row][z]``, row 0 at the top.
            voxel_distance: Spacing between lattice points.
            voxel_radius: Radius of each voxel sphere.

        Raises:
            ValueError: If the mask shapes do not describe a common lattice.
        """
        super().__init__(position, math.inf)

        self.front = _as_mask("front", front)
        self.top = _as_mask("top", top)
        self.side = _as_mask("side", side)

        height, width = self.front.shape
        depth = self.top.shape[0]
        if self.top.shape != (depth, width):
            raise ValueError(
                f"top mask shape {self.top.shape} does not match width {width}"
            )
        if self.side.shape != (height, depth):
            raise ValueError(
                f"side mask shape {self.side.shape} does not match "
                f"height {height} and depth {depth}"
            )

        self.pixel_width = width
        self.pixel_height = height
        self.pixel_depth = depth
        self.voxel_distance = voxel_distance
        self.voxel_radius = voxel_radius

        # Flip rows so index y grows upwards, then broadcast to (x, y, z)
        front_xy = self.front[::-1].T
        side_yz = self.side[::-1]
        top_xz = self.top.T
        solid = front_xy[:, :, None] & side_yz[None, :, :] & top_xz[:, None, :]

        self.voxels: list[Sphere] = [
            Sphere(
                position + Vector(float(x), float(y), float(z)) * voxel_distance,
                voxel_radius,
            )
            for x, y, z in np.argwhere(solid)
        ]

    @classmethod
    def random(
        cls,
        position: Vector,
        rng: Any,
        size: int = DEFAULT_PIXEL_SIZE,
        fill: float = 0.9,
        voxel_distance: float = DEFAULT_VOXEL_DISTANCE,
        voxel_radius: float = DEFAULT_VOXEL_RADIUS,
    ) -> VoxelCluster:
        """Build a cluster from random square silhouettes.

        Args:
            position: World position of lattice cell (0, 0, 0).
            rng: Random source with a ``random()`` method.
            size: Edge length of each square mask.
            fill: Probability that a mask cell is solid.
            voxel_distance: Spacing between lattice points.
            voxel_radius: Radius of each voxel sphere.

        Returns:
            A new VoxelCluster.
        """

        def random_mask() -> list[list[bool]]:
            return [[rng.random() < fill for _ in range(size)] for _ in range(size)]

        return cls(
            position,
            random_mask(),
            random_mask(),
            random_mask(),
            voxel_distance=voxel_distance,
            voxel_radius=voxel_radius,
        )

    def first_possible_hit_t(self, ray: Ray) -> float | None:
        """Minimum lower bound over all voxel spheres, or None if none can hit."""
        closest: float | None = None
        for voxel in self.voxels:
            t = voxel.first_possible_hit_t(ray)
            if t is not None and (closest is None or t < closest):
                closest = t
        return closest

    def all_hits(self, ray: Ray) -> list[Hit]:
        """The first hit of each voxel sphere the ray reaches."""
        hits = []
        for voxel in self.voxels:
            hit = voxel.first_hit(ray)
            if hit is not None:
                hits.append(hit)
        return hits

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "voxel_cluster",
            "position": list(self.position.to_tuple()),
            "front": self.front.astype(int).tolist(),
            "top": self.top.astype(int).tolist(),
            "side": self.side.astype(int).tolist(),
            "voxel_distance": self.voxel_distance,
            "voxel_radius": self.voxel_radius,
        }

    def __repr__(self) -> str:
        return (
            f"VoxelCluster(position={self.position!r}, "
            f"size={self.pixel_width}x{self.pixel_height}x{self.pixel_depth}, "
            f"voxels={len(self.voxels)})"
        )
