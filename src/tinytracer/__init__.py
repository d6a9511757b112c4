"""A small educational ray tracer with progressive, variance-adaptive sampling.

This package traces rays recursively through a scene of spheres, planes and
voxel clusters, scattering them according to simple materials and blending the
gathered light back up the bounce chain.

Subpackages:
    core: Vectors, colors, rays, settings, the recursive tracer and the
        progressive renderer (taichi-backed render target)
    geometry: Shape primitives and their intersection routines
    materials: Deflection models (flat, matte, shiny, glass, light)
    camera: Cameras mapping lens fractions to world-space rays
    scene: Scene container, serialization and demo scenes
    preview: 8-bit conversion and PNG export
"""

__version__ = "0.1.0"
