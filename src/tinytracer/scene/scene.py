"""Scene container: (geometry, material) items plus a camera.

A Scene is built once before rendering and only read afterwards, so it can
be shared freely between render passes. Item order only matters when two
items are hit at exactly the same distance (the earlier item wins).

Scenes round-trip through plain dictionaries for JSON serialization:

    >>> from tinytracer.scene.scene import Scene
    >>> data = scene.to_dict()  # doctest: +SKIP
    >>> same_scene = Scene.from_dict(data)  # doctest: +SKIP
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from tinytracer.camera.pinhole import Camera, LensCamera, camera_from_dict
from tinytracer.core.color import Color
from tinytracer.core.vector import Vector
from tinytracer.geometry.base import Geometry
from tinytracer.geometry.plane import Plane
from tinytracer.geometry.sphere import Sphere
from tinytracer.geometry.voxel import VoxelCluster
from tinytracer.materials.base import Material
from tinytracer.materials.glass import GlassMaterial
from tinytracer.materials.light import LightMaterial
from tinytracer.materials.matte import MatteMaterial
from tinytracer.materials.shiny import ShinyMaterial

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Item:
    """A renderable object: what it is shaped like and what it is made of.

    Attributes:
        geometry: The shape tested for intersections.
        material: The material shading hits on the shape.
    """

    geometry: Geometry
    material: Material

    def to_dict(self) -> dict[str, Any]:
        return {
            "geometry": self.geometry.to_dict(),
            "material": self.material.to_dict(),
        }


@dataclass(frozen=True)
class Scene:
    """An immutable collection of items viewed through a camera.

    Attributes:
        items: The scene's items, in insertion order.
        camera: The camera primary rays are generated from.
    """

    items: tuple[Item, ...] = ()
    camera: Camera = field(default_factory=LensCamera)

    def __post_init__(self) -> None:
        # Accept any iterable of items but store an immutable tuple
        object.__setattr__(self, "items", tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self.items)

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization).

        Raises:
            TypeError: If the camera does not support serialization.
        """
        to_dict = getattr(self.camera, "to_dict", None)
        if to_dict is None:
            raise TypeError(f"Camera {type(self.camera).__name__} cannot be serialized")
        return {
            "camera": to_dict(),
            "items": [item.to_dict() for item in self.items],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Scene:
        """Load a scene from a dictionary produced by ``to_dict()``.

        Args:
            data: Dictionary with optional 'camera' and 'items' keys.

        Returns:
            The rebuilt scene.

        Raises:
            ValueError: If a geometry, material or camera type is unknown.
        """
        camera_data = data.get("camera")
        camera = camera_from_dict(camera_data) if camera_data else LensCamera()

        items = [
            Item(
                geometry=geometry_from_dict(item_data["geometry"]),
                material=material_from_dict(item_data["material"]),
            )
            for item_data in data.get("items", [])
        ]
        logger.debug("Loaded scene with %d items", len(items))
        return cls(items, camera)


def geometry_from_dict(data: dict[str, Any]) -> Geometry:
    """Rebuild a geometry serialized with ``to_dict()``.

    Raises:
        ValueError: If the geometry type is unknown.
    """
    geometry_type = data.get("type", "").lower()
    if geometry_type == "sphere":
        return Sphere(
            Vector.from_sequence(data.get("center", [0.0, 0.0, 0.0])),
            data.get("radius", 1.0),
        )
    elif geometry_type == "plane":
        return Plane(
            Vector.from_sequence(data.get("origin", [0.0, 0.0, 0.0])),
            Vector.from_sequence(data.get("normal", [0.0, 1.0, 0.0])),
        )
    elif geometry_type == "voxel_cluster":
        return VoxelCluster(
            Vector.from_sequence(data.get("position", [0.0, 0.0, 0.0])),
            data["front"],
            data["top"],
            data["side"],
            voxel_distance=data.get("voxel_distance", 32.0),
            voxel_radius=data.get("voxel_radius", 25.0),
        )
    raise ValueError(f"Unknown geometry type: {geometry_type}")


def material_from_dict(data: dict[str, Any], rng: Any = None) -> Material:
    """Rebuild a material serialized with ``to_dict()``.

    Matte and shiny materials without a stored ``fuzziness`` draw their
    default fuzz from ``rng``, as their constructors do.

    Raises:
        ValueError: If the material type is unknown.
    """
    material_type = data.get("type", "").lower()
    if material_type == "glass":
        return GlassMaterial()

    color = Color.from_sequence(data.get("color", [1.0, 0.0, 1.0]))
    color_strength = data.get("color_strength", 1.0)
    if material_type == "flat":
        return Material(color, color_strength, data.get("fuzziness", 0.0))
    elif material_type == "matte":
        return MatteMaterial(color, color_strength, data.get("fuzziness"), rng=rng)
    elif material_type == "shiny":
        return ShinyMaterial(color, color_strength, data.get("fuzziness"), rng=rng)
    elif material_type == "light":
        return LightMaterial(color, color_strength, data.get("fuzziness", 1.0))
    raise ValueError(f"Unknown material type: {material_type}")
