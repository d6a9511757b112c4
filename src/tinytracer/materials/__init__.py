"""Materials module: deflection models for scattered light.

Components:
    base: Material base class (flat passthrough), ColorMode, MaterialType
    matte: Diffuse scattering around the surface normal
    shiny: Mirror reflection with optional fuzz
    glass: Refraction placeholder (shades black)
    light: Emissive material (screen-composited color)

Each material provides:
    - get_deflection(hit, rng): the outgoing unit direction for a bounce
    - color, color_strength, color_mode: consumed by the tracer's composite
"""

from .base import ColorMode, Material, MaterialType, fuzz_direction
from .glass import GlassMaterial
from .light import LightMaterial
from .matte import MatteMaterial
from .shiny import ShinyMaterial, reflect

__all__ = [
    "ColorMode",
    "MaterialType",
    "Material",
    "fuzz_direction",
    "MatteMaterial",
    "ShinyMaterial",
    "reflect",
    "GlassMaterial",
    "LightMaterial",
]
