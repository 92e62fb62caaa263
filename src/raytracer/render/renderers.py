"""Renderers: functions from a camera ray to a color.

Every renderer is called as ``renderer(ray, pcg)``. The generator argument
is the per-pixel stream handed out by the ImageTracer; renderers that need
randomness fall back to their own generator when it is omitted.

Renderers, from cheapest to most accurate:
    - OnOffRenderer: silhouette mask
    - FlatRenderer: surface color without shading
    - PointLightRenderer: direct lighting from point lights with shadows
    - PathTracer: Monte Carlo solution of the rendering equation

The path tracer is recursive. Paths end when they leave the scene, when
their depth exceeds max_depth, or when Russian roulette kills them.

Example:
    >>> from raytracer.render.renderers import PathTracer
    >>> from raytracer.scene.world import World
    >>> tracer = PathTracer(World(), n=4, max_depth=3, roulette_depth=2)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field

from raytracer.core.color import BLACK, WHITE, Color
from raytracer.core.pcg import PCG
from raytracer.core.ray import Ray
from raytracer.scene.lights import PointLight
from raytracer.scene.world import World

# =============================================================================
# Path Tracer Defaults
# =============================================================================

# Secondary rays fired per hit
DEFAULT_NUM_RAYS = 10

# Paths deeper than this return black
DEFAULT_MAX_DEPTH = 2

# Depth from which Russian roulette may terminate a path
DEFAULT_ROULETTE_DEPTH = 3

# Ambient term of the point-light renderer
DEFAULT_AMBIENT = Color(1e-3, 1e-3, 1e-3)


class Renderer(ABC):
    """Base class of all renderers.

    Attributes:
        world: The scene to render.
    """

    world: World

    @abstractmethod
    def __call__(self, ray: Ray, pcg: PCG | None = None) -> Color:
        """Return the radiance carried back along ``ray``."""


@dataclass
class OnOffRenderer(Renderer):
    """``on_color`` where the ray hits something, ``off_color`` elsewhere."""

    world: World
    on_color: Color = WHITE
    off_color: Color = BLACK

    def __call__(self, ray: Ray, pcg: PCG | None = None) -> Color:
        return self.on_color if self.world.ray_intersection(ray) is not None else self.off_color


@dataclass
class FlatRenderer(Renderer):
    """Emitted radiance plus pigment color at the nearest hit, no shading."""

    world: World
    background_color: Color = BLACK

    def __call__(self, ray: Ray, pcg: PCG | None = None) -> Color:
        hit = self.world.ray_intersection(ray)
        if hit is None:
            return self.background_color
        material = hit.material
        return material.brdf.pigment(hit.surface_point) + material.emitted_radiance(
            hit.surface_point
        )


@dataclass
class PointLightRenderer(Renderer):
    """Direct illumination from point lights, with hard shadows.

    Attributes:
        world: The scene to render.
        lights: Point light sources.
        background_color: Color of rays that hit nothing.
        ambient_color: Constant term added at every hit.
    """

    world: World
    lights: Sequence[PointLight] = ()
    background_color: Color = BLACK
    ambient_color: Color = DEFAULT_AMBIENT

    def __call__(self, ray: Ray, pcg: PCG | None = None) -> Color:
        hit = self.world.ray_intersection(ray)
        if hit is None:
            return self.background_color

        material = hit.material
        uv = hit.surface_point
        to_viewer = (-ray.dir).normalize()
        result = self.ambient_color + material.emitted_radiance(uv)

        for light in self.lights:
            if not self.world.is_point_visible(light.position, hit.world_point):
                continue
            offset = light.position - hit.world_point
            distance = offset.norm()
            to_light = offset / distance
            cos_theta = max(0.0, hit.normal.dot(to_light))
            if cos_theta == 0.0:
                continue
            brdf_color = material.brdf.at(hit.normal, to_light, to_viewer, uv)
            result = result + brdf_color * light.color * (
                cos_theta * light.distance_factor(distance)
            )
        return result


@dataclass
class PathTracer(Renderer):
    """Unbiased Monte Carlo path tracer with Russian roulette.

    Attributes:
        world: The scene to render.
        background_color: Radiance of rays that escape the scene.
        pcg: Generator used when the caller does not pass one.
        n: Number of scattered rays per hit.
        max_depth: Rays deeper than this contribute nothing.
        roulette_depth: Depth from which Russian roulette is applied.
            Set it above max_depth to disable roulette.

    Raises:
        ValueError: If n < 1.
    """

    world: World
    background_color: Color = BLACK
    pcg: PCG = field(default_factory=PCG)
    n: int = DEFAULT_NUM_RAYS
    max_depth: int = DEFAULT_MAX_DEPTH
    roulette_depth: int = DEFAULT_ROULETTE_DEPTH

    def __post_init__(self) -> None:
        if self.n < 1:
            raise ValueError(f"PathTracer needs at least one ray per hit, got n={self.n}")

    def __call__(self, ray: Ray, pcg: PCG | None = None) -> Color:
        return self.radiance(ray, pcg if pcg is not None else self.pcg)

    def radiance(self, ray: Ray, pcg: PCG) -> Color:
        """Estimate the radiance along ``ray`` drawing from ``pcg``."""
        if ray.depth > self.max_depth:
            return BLACK

        hit = self.world.ray_intersection(ray)
        if hit is None:
            return self.background_color

        material = hit.material
        hit_color = material.brdf.pigment(hit.surface_point)
        emitted = material.emitted_radiance(hit.surface_point)

        if ray.depth >= self.roulette_depth:
            # Survive with the brightest pigment channel, capped at 1.
            survival = min(hit_color.max_component(), 1.0)
            if pcg.random_float() >= survival:
                return emitted
            hit_color = hit_color / survival

        if hit_color.is_black():
            return emitted

        accumulated = BLACK
        for _ in range(self.n):
            scattered = material.brdf.scatter_ray(
                pcg, hit.ray.dir, hit.world_point, hit.normal, ray.depth + 1
            )
            accumulated = accumulated + hit_color * self.radiance(scattered, pcg)

        return emitted + accumulated / self.n
