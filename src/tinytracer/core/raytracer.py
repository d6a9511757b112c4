"""Recursive ray tracer: closest-hit search, deflection fan-out and compositing.

For a ray, ``RayTracer.get_ray_color`` finds the closest item hit, asks the
item's material for deflected directions, traces those recursively and
composites the result with the material's own color:

    ABSORB: multiply(blend([s * color, (1 - s) * WHITE]), gathered)
    EMIT:   screen(blend([s * color, (1 - s) * BLACK]), gathered)

where ``s`` is the material's ``color_strength`` and ``gathered`` is the
unweighted blend of the deflected rays' colors.

The fan-out halves with every bounce (``ceil(max / 2^previous_hits)``, at
least 1), and the recursion stops once the bounce chain would reach
``max_bounces``: the tracer then returns the terminal color without testing
the scene at all.

Example:
    >>> import numpy as np
    >>> from tinytracer.core.raytracer import RayTracer
    >>> from tinytracer.scene.demo import create_three_spheres_scene
    >>> tracer = RayTracer(create_three_spheres_scene(), rng=np.random.default_rng(0))
    >>> color = tracer.get_ray_color(tracer.scene.camera.get_ray(0.5, 0.5))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from tinytracer.core.color import Color
from tinytracer.core.ray import Hit, Ray
from tinytracer.core.settings import RenderSettings
from tinytracer.materials.base import ColorMode
from tinytracer.scene.scene import Item, Scene


@dataclass(frozen=True)
class TracedHit:
    """A hit together with the item it belongs to and the hit before it.

    TracedHits form a singly-linked chain from the latest bounce back to the
    first hit of a camera ray.

    Attributes:
        hit: The geometric hit.
        item: The scene item that was hit.
        previous: The TracedHit of the previous bounce, or None.
        depth: Length of the chain ending at this hit (1 for a first hit).
    """

    hit: Hit
    item: Item
    previous: TracedHit | None = None
    depth: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "depth", 1 if self.previous is None else self.previous.depth + 1
        )

    @property
    def previous_hits(self) -> int:
        """Number of hits earlier in the chain (0 for a first hit)."""
        return self.depth - 1


class RayTracer:
    """Computes the color seen along rays through a scene.

    The tracer only reads the scene and settings, so one instance can serve
    any number of render passes.

    Attributes:
        scene: The scene to trace.
        settings: Bounce limit, fan-out and background configuration.
        rng: Random source passed to materials for deflection.
    """

    def __init__(
        self,
        scene: Scene,
        settings: RenderSettings | None = None,
        rng: Any = None,
    ) -> None:
        self.scene = scene
        self.settings = settings if settings is not None else RenderSettings()
        self.rng = rng if rng is not None else np.random.default_rng()

    def background(self, ray: Ray) -> Color:
        """Color of a ray escaping the scene."""
        return self.settings.background(ray)

    def get_ray_color(self, ray: Ray, previous_hit: TracedHit | None = None) -> Color:
        """Compute the color seen along a ray.

        Args:
            ray: The ray to trace.
            previous_hit: The hit that spawned this ray, or None for a camera
                ray.

        Returns:
            The composited color. Rays that hit nothing return the
            background; rays past the bounce limit return the terminal color
            (the background if ``settings.terminal_color`` is None). Hits on a
            surface that absorbs everything return black without tracing
            deflected rays.
        """
        settings = self.settings
        depth = previous_hit.depth if previous_hit is not None else 0
        if depth + 1 >= settings.max_bounces:
            if settings.terminal_color is None:
                return self.background(ray)
            return settings.terminal_color

        closest = self.find_closest_hit(ray)
        if closest is None:
            return self.background(ray)

        hit, item = closest
        traced_hit = TracedHit(hit, item, previous_hit)
        material = item.material

        strength = material.color_strength
        if material.color_mode == ColorMode.EMIT:
            tint = Color.blend([(strength, material.color), (1.0 - strength, Color.BLACK)])
        else:
            tint = Color.blend([(strength, material.color), (1.0 - strength, Color.WHITE)])
            # A black filter absorbs everything the deflected rays could gather
            if tint == Color.BLACK:
                return Color.BLACK

        gathered = self._gather(hit, traced_hit, ray.bounce_count + 1)
        if material.color_mode == ColorMode.EMIT:
            return Color.screen(tint, gathered)
        return Color.multiply(tint, gathered)

    def _gather(self, hit: Hit, traced_hit: TracedHit, bounce_count: int) -> Color:
        """Trace the deflected rays of a hit and blend their colors."""
        material = traced_hit.item.material
        samples = self.settings.samples_per_bounce(traced_hit.previous_hits)
        colors = []
        for _ in range(samples):
            direction = material.get_deflection(hit, self.rng)
            deflected = Ray(hit.location, direction, bounce_count)
            colors.append(self.get_ray_color(deflected, traced_hit))
        return Color.blend(colors)

    def find_closest_hit(self, ray: Ray) -> tuple[Hit, Item] | None:
        """Find the closest hit of a ray against every scene item.

        With ``settings.prune_by_lower_bound`` the items are tested in order
        of their bounding-sphere lower bound; items whose bound proves a miss
        are skipped, and the scan stops once the next bound is no closer than
        the best hit so far. Otherwise every item is tested in insertion
        order. Either way, on exactly equal distances the item tested first
        wins.

        Args:
            ray: The ray to test.

        Returns:
            The closest (hit, item) pair, or None if the ray hits nothing.
        """
        closest_hit: Hit | None = None
        closest_item: Item | None = None

        if self.settings.prune_by_lower_bound:
            candidates = []
            for index, item in enumerate(self.scene.items):
                lower_bound = item.geometry.first_possible_hit_t(ray)
                if lower_bound is not None:
                    candidates.append((lower_bound, index, item))
            # index keeps the sort stable and never compares items
            candidates.sort(key=lambda candidate: (candidate[0], candidate[1]))

            for lower_bound, _, item in candidates:
                if closest_hit is not None and lower_bound >= closest_hit.t:
                    break
                hit = item.geometry.first_hit(ray)
                if hit is not None and (closest_hit is None or hit.t < closest_hit.t):
                    closest_hit = hit
                    closest_item = item
        else:
            for item in self.scene.items:
                hit = item.geometry.first_hit(ray)
                if hit is not None and (closest_hit is None or hit.t < closest_hit.t):
                    closest_hit = hit
                    closest_item = item

        if closest_hit is None or closest_item is None:
            return None
        return closest_hit, closest_item
