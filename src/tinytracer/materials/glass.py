"""Glass material.

Refraction is not implemented: glass is an opaque black surface. Its
deflection is a passthrough, but a black filter at full strength absorbs
everything, so the tracer shades every glass hit to a fixed black without
following any deflected rays.
"""

from __future__ import annotations

from typing import Any

from tinytracer.core.color import Color
from tinytracer.materials.base import Material, MaterialType


class GlassMaterial(Material):
    """Placeholder for a refractive material; always shades black."""

    material_type = MaterialType.GLASS

    def __init__(self) -> None:
        super().__init__(Color.BLACK, color_strength=1.0, fuzziness=0.0)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.material_type.name.lower()}
