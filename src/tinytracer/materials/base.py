"""Base material: color properties and passthrough deflection.

A material only decides where light goes next (``get_deflection``). How the
gathered light is combined with the material's own color is decided by the
tracer from ``color``, ``color_strength`` and ``color_mode``, since the blend
depends on the trace depth.

The base class is the flat material: rays pass straight through it.
"""

from __future__ import annotations

import math
from enum import IntEnum
from typing import Any

from tinytracer.core.color import Color
from tinytracer.core.errors import InvalidValueError
from tinytracer.core.ray import Hit
from tinytracer.core.vector import Vector, random_unit_vector


class ColorMode(IntEnum):
    """How a material's color combines with the light it scatters.

    ABSORB multiplies the gathered light by the color (a filter); EMIT
    screen-composites the color onto it (a light source).
    """

    ABSORB = 0
    EMIT = 1


class MaterialType(IntEnum):
    """Enumeration of material variants, used for serialization."""

    FLAT = 0
    MATTE = 1
    SHINY = 2
    GLASS = 3
    LIGHT = 4


def fuzz_direction(direction: Vector, fuzziness: float, rng: Any) -> Vector:
    """Perturb a direction by a random unit vector scaled by ``fuzziness``.

    Args:
        direction: The unperturbed direction (need not be normalized).
        fuzziness: Scale of the random offset; 0 returns the direction as is.
        rng: Random source with a ``random()`` method.

    Returns:
        The perturbed unit direction. If the offset exactly cancels the
        direction, the unperturbed direction is returned instead.
    """
    base = direction.direction()
    if fuzziness == 0.0:
        return base
    fuzzed = (base + random_unit_vector(rng) * fuzziness).direction()
    if fuzzed.magnitude() == 0.0:
        return base
    return fuzzed


class Material:
    """A flat material that lets rays pass through unchanged.

    Attributes:
        color: The material's own color.
        color_strength: Weight of ``color`` against white (absorbing) or black
            (emitting) in [0, 1]; clamped at construction.
        fuzziness: Random perturbation strength in [0, 1].
        color_mode: ABSORB or EMIT.
    """

    material_type = MaterialType.FLAT
    color_mode = ColorMode.ABSORB

    def __init__(
        self,
        color: Color = Color.MAGENTA,
        color_strength: float = 1.0,
        fuzziness: float = 0.0,
    ) -> None:
        if not math.isfinite(color_strength):
            raise InvalidValueError(f"color_strength is {color_strength}")
        if not math.isfinite(fuzziness) or fuzziness < 0.0 or fuzziness > 1.0:
            raise ValueError(
                f"fuzziness = {fuzziness} is outside [0, 1]. "
                "Fuzziness must be between 0 (deterministic) and 1 (maximum fuzz)."
            )
        self.color = color
        self.color_strength = min(1.0, max(0.0, color_strength))
        self.fuzziness = fuzziness

    def get_deflection(self, hit: Hit, rng: Any) -> Vector:
        """Choose the outgoing direction for the next bounce.

        May be randomized; the tracer calls it once per deflected sample.

        Args:
            hit: The hit being shaded.
            rng: Random source with a ``random()`` method.

        Returns:
            A unit direction (here, the incoming direction unchanged).
        """
        return hit.ray.direction

    def to_dict(self) -> dict[str, Any]:
        """Serialize the material's parameters."""
        return {
            "type": self.material_type.name.lower(),
            "color": list(self.color.to_tuple()),
            "color_strength": self.color_strength,
            "fuzziness": self.fuzziness,
        }

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(color={self.color!r}, "
            f"color_strength={self.color_strength}, fuzziness={self.fuzziness})"
        )
