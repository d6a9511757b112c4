"""Scene module: item containers, serialization and demo scenes.

Components:
    scene: Item and Scene, plus dictionary (de)serialization
    demo: Ready-made scenes (landscape with voxel logo, three spheres)
"""

from .demo import create_demo_scene, create_three_spheres_scene
from .scene import Item, Scene, geometry_from_dict, material_from_dict

__all__ = [
    "Item",
    "Scene",
    "geometry_from_dict",
    "material_from_dict",
    "create_demo_scene",
    "create_three_spheres_scene",
]
