"""Shiny (reflective) material.

The incoming direction ``d`` is mirrored about the surface normal ``n``:

    r = d - 2(d . n)n

and then perturbed by a random unit vector scaled by the fuzziness, so a
fuzziness of 0 is a perfect mirror.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from tinytracer.core.color import Color
from tinytracer.core.ray import Hit
from tinytracer.core.vector import Vector
from tinytracer.materials.base import Material, MaterialType, fuzz_direction


def reflect(incident: Vector, normal: Vector) -> Vector:
    """Reflect an incident vector about a (unit) normal."""
    return incident - normal * (2.0 * incident.dot(normal))


class ShinyMaterial(Material):
    """A material that reflects rays about the surface normal.

    If no fuzziness is given, one is drawn once at construction as ``u^2``
    for uniform ``u``, so most shiny objects are close to mirrors.
    """

    material_type = MaterialType.SHINY

    def __init__(
        self,
        color: Color,
        color_strength: float = 1.0,
        fuzziness: float | None = None,
        rng: Any = None,
    ) -> None:
        if fuzziness is None:
            if rng is None:
                rng = np.random.default_rng()
            fuzziness = float(rng.random() ** 2)
        super().__init__(color, color_strength, fuzziness)

    def get_deflection(self, hit: Hit, rng: Any) -> Vector:
        reflection = reflect(hit.ray.direction, hit.normal)
        return fuzz_direction(reflection, self.fuzziness, rng)
