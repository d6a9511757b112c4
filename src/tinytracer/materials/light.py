"""Light (emissive) material.

Deflects like a matte surface, but its color is screen-composited onto the
gathered light instead of filtering it, so the surface adds light to the
scene.
"""

from __future__ import annotations

from tinytracer.core.color import Color
from tinytracer.materials.base import ColorMode, MaterialType
from tinytracer.materials.matte import MatteMaterial


class LightMaterial(MatteMaterial):
    """An emitting material.

    Fuzziness defaults to 1.0 (fully diffuse scattering around the normal).
    """

    material_type = MaterialType.LIGHT
    color_mode = ColorMode.EMIT

    def __init__(
        self,
        color: Color,
        color_strength: float = 1.0,
        fuzziness: float = 1.0,
    ) -> None:
        super().__init__(color, color_strength, fuzziness)
