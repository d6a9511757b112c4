"""Ready-made demo scenes.

Two scenes are provided:

- ``create_demo_scene``: a landscape lit by a sky and a sun, with a voxel
  logo floating in front of the camera and a sparse field of random spheres
  behind it.
- ``create_three_spheres_scene``: three small spheres (two shiny, one matte)
  resting on a large dark sphere under a big white one. Fully deterministic,
  useful for quick test renders.

Both scenes use the default LensCamera, which sits at the origin looking
along +Z.

Example:
    >>> import numpy as np
    >>> from tinytracer.scene.demo import create_demo_scene
    >>> scene = create_demo_scene(np.random.default_rng(7))
    >>> len(scene) >= 5
    True
"""

from __future__ import annotations

from typing import Any

import numpy as np

from tinytracer.camera.pinhole import LensCamera
from tinytracer.core.color import Color, rgb
from tinytracer.core.vector import Vector
from tinytracer.geometry.plane import Plane
from tinytracer.geometry.sphere import Sphere
from tinytracer.geometry.voxel import VoxelCluster
from tinytracer.materials.light import LightMaterial
from tinytracer.materials.matte import MatteMaterial
from tinytracer.materials.shiny import ShinyMaterial
from tinytracer.scene.scene import Item, Scene

# =============================================================================
# Demo Scene Parameters
# =============================================================================

# Probability that a lattice cell of the sphere field gets a sphere
RANDOM_SPHERE_PROBABILITY = 0.01

RANDOM_SPHERE_COLORS = (Color.RED, Color.BLUE, Color.GREEN, Color.WHITE, Color.BLACK)

LOGO_POSITION = Vector(-100.0, -100.0, 1100.0)


def create_demo_scene(rng: Any = None) -> Scene:
    """Create the landscape demo scene.

    Items, in order:
    - ground plane at y=-500 (green matte)
    - sky plane at y=30000 facing down (blue matte, half strength)
    - sky light plane at y=29000 (faint blue emitter)
    - sun: a huge yellow emitting sphere
    - voxel logo built from random 16x16 silhouettes
    - random shiny or matte spheres scattered over a lattice behind the logo

    Args:
        rng: Random source with a ``random()`` method. Defaults to a fresh
            ``numpy.random.default_rng()``; pass a seeded generator for a
            reproducible scene.

    Returns:
        The demo Scene with a default LensCamera.
    """
    if rng is None:
        rng = np.random.default_rng()

    items = [
        Item(
            Plane(Vector(0.0, -500.0, 0.0), Vector.Y),
            MatteMaterial(rgb(0.2, 0.4, 0.1), 1.0, 0.9),
        ),
        Item(
            Plane(Vector(0.0, 30000.0, 0.0), -Vector.Y),
            MatteMaterial(rgb(0.3, 0.6, 0.9), 0.5, 0.8),
        ),
        Item(
            Plane(Vector(0.0, 29000.0, 0.0), -Vector.Y),
            LightMaterial(rgb(0.02, 0.04, 0.06)),
        ),
        Item(
            Sphere(Vector(5000.0, 15000.0, 0.0), 10000.0),
            LightMaterial(rgb(1.0, 1.0, 0.2)),
        ),
        Item(
            VoxelCluster.random(LOGO_POSITION, rng),
            MatteMaterial(rgb(0.4, 0.4, 0.8), 1.0, 0.9),
        ),
    ]

    for x in range(-4, 4):
        for y in range(-8, 8):
            for z in range(-7, 0):
                if rng.random() >= RANDOM_SPHERE_PROBABILITY:
                    continue

                position = Vector(x * 120.0, -400.0 + 130.0 * y, 4100.0 + 200.0 * z)
                geometry = Sphere(position, rng.random() * 300.0 + 30.0)

                color = RANDOM_SPHERE_COLORS[int(rng.random() * len(RANDOM_SPHERE_COLORS))]
                material_class = ShinyMaterial if rng.random() < 0.5 else MatteMaterial
                material = material_class(color, 0.5 * rng.random(), rng.random())

                items.append(Item(geometry, material))

    return Scene(items, LensCamera())


def create_three_spheres_scene() -> Scene:
    """Create the three spheres scene.

    Fuzziness is fixed per material so the scene is identical every time.

    Returns:
        The Scene with a default LensCamera.
    """
    items = [
        Item(
            Sphere(Vector(125.0, 50.0, 1100.0), 50.0),
            ShinyMaterial(Color.GREEN, fuzziness=0.1),
        ),
        Item(
            Sphere(Vector(0.0, 50.0, 1100.0), 50.0),
            ShinyMaterial(Color.RED, fuzziness=0.1),
        ),
        Item(
            Sphere(Vector(-125.0, 50.0, 1100.0), 50.0),
            MatteMaterial(Color.BLUE, fuzziness=0.5),
        ),
        Item(
            Sphere(Vector(0.0, -1000.0, 2000.0), 1000.0),
            MatteMaterial(Color.BLACK, fuzziness=0.5),
        ),
        Item(
            Sphere(Vector(-50.0, 500.0, 1400.0), 400.0),
            MatteMaterial(Color.WHITE, fuzziness=0.5),
        ),
    ]
    return Scene(items, LensCamera())
