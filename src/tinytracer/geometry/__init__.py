"""Geometry module for shape primitives and intersection algorithms.

Components:
    base: Geometry base class with the bounding-sphere lower bound
    sphere: Sphere primitive with quadratic ray-sphere intersection
    plane: Infinite plane primitive
    voxel: Voxel cluster built from three 2D silhouette masks

Every geometry answers two queries:
    first_possible_hit_t(ray) -> float | None   cheap lower bound for pruning
    first_hit(ray) -> Hit | None                closest hit with t > EPSILON
"""

from .base import Geometry
from .plane import Plane
from .sphere import Sphere
from .voxel import VoxelCluster

__all__ = [
    "Geometry",
    "Sphere",
    "Plane",
    "VoxelCluster",
]
