"""Matte (diffuse) material.

Scattered rays ignore the incoming angle: the outgoing direction is the
surface normal perturbed by a random unit vector scaled by the fuzziness,
a cheap approximation of Lambertian scattering.

Example:
    >>> import numpy as np
    >>> from tinytracer.core.color import Color
    >>> from tinytracer.materials.matte import MatteMaterial
    >>> material = MatteMaterial(Color.BLUE, fuzziness=0.5)
    >>> # direction = material.get_deflection(hit, np.random.default_rng(0))
"""

from __future__ import annotations

from typing import Any

import numpy as np

from tinytracer.core.color import Color
from tinytracer.core.ray import Hit
from tinytracer.core.vector import Vector
from tinytracer.materials.base import Material, MaterialType, fuzz_direction


class MatteMaterial(Material):
    """A material that scatters rays around the surface normal.

    If no fuzziness is given, one is drawn once at construction as
    ``sqrt(u)`` for uniform ``u``, giving each object a fixed look for its
    lifetime.
    """

    material_type = MaterialType.MATTE

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
            fuzziness = float(np.sqrt(rng.random()))
        super().__init__(color, color_strength, fuzziness)

    def get_deflection(self, hit: Hit, rng: Any) -> Vector:
        """Scatter around the normal: ``normal + random_unit * fuzziness``."""
        return fuzz_direction(hit.normal, self.fuzziness, rng)
