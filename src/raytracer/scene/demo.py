"""Demo scene configuration.

This module provides factory functions for the demo images: a ready-to-use
renderer with its world, and a camera placed around the origin.

Each renderer gets a scene suited to what it can show:

- onoff: ten small spheres, eight on the vertices of a cube
- flat: the same spheres with uniform, checkered and image pigments, a
  checkered floor and a white sky dome
- pointlight: a checkered floor, two diffuse spheres and a carved CSG block,
  lit by a point light above the scene
- pathtracer: the same objects under an emissive sky dome, with a mirror
  sphere

Not imported by ``raytracer.scene``; import it directly, since it depends on
the render package.

Example:
    >>> from raytracer.core.image import HdrImage
    >>> from raytracer.render.image_tracer import ImageTracer
    >>> from raytracer.scene.demo import create_demo_camera, create_demo_renderer
    >>>
    >>> renderer = create_demo_renderer("pathtracer", n=4)
    >>> camera = create_demo_camera(320, 240)
    >>> tracer = ImageTracer(HdrImage(320, 240), camera)
    >>> tracer.fire_all_rays(renderer, workers=8)
"""

from __future__ import annotations

import itertools
import math
from typing import Literal

from raytracer.camera.cameras import Camera, OrthogonalCamera, PerspectiveCamera
from raytracer.core.color import BLACK, WHITE, Color
from raytracer.core.geometry import Point
from raytracer.core.image import HdrImage
from raytracer.core.pcg import PCG
from raytracer.core.transformation import (
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    translation,
)
from raytracer.geometry.csg import difference, intersect
from raytracer.geometry.cube import Cube
from raytracer.geometry.cylinder import Cylinder
from raytracer.geometry.plane import Plane
from raytracer.geometry.shape import Shape
from raytracer.geometry.sphere import Sphere
from raytracer.materials.brdf import DiffuseBRDF, SpecularBRDF
from raytracer.materials.material import Material
from raytracer.materials.pigments import CheckeredPigment, ImagePigment, UniformPigment
from raytracer.render.renderers import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_NUM_RAYS,
    DEFAULT_ROULETTE_DEPTH,
    FlatRenderer,
    OnOffRenderer,
    PathTracer,
    PointLightRenderer,
    Renderer,
)
from raytracer.scene.lights import PointLight
from raytracer.scene.world import World

# Type alias for the renderer choice
RendererName = Literal["onoff", "flat", "pointlight", "pathtracer"]

RENDERER_NAMES: tuple[str, ...] = ("onoff", "flat", "pointlight", "pathtracer")

# =============================================================================
# Demo Scene Constants
# =============================================================================

# Distance of the vertex spheres from the origin, along each axis
VERTEX_OFFSET = 1.1
VERTEX_RADIUS = 0.22

# Radius of the dome enclosing the scene
SKY_RADIUS = 100.0

RED = Color(1.0, 0.0, 0.0)
GREEN = Color(0.0, 1.0, 0.0)
BLUE = Color(0.0, 0.0, 1.0)
CYAN = Color(0.0, 1.0, 1.0)
MAGENTA = Color(1.0, 0.0, 1.0)

FLOOR_COLOR_ON = Color(0.3, 0.5, 0.1)
FLOOR_COLOR_OFF = Color(0.1, 0.2, 0.5)
BALL_COLOR = Color(0.2, 0.7, 0.8)
MIRROR_COLOR = Color(0.6, 0.2, 0.3)
BLOCK_COLOR = Color(0.8, 0.6, 0.2)

LIGHT_POSITION = (0.0, 0.0, 10.0)

# =============================================================================
# Camera Defaults
# =============================================================================

DEFAULT_CAMERA_POSITION = (-3.0, 0.0, 0.0)
DEFAULT_CAMERA_ORIENTATION = (0.0, 0.0, 0.0)
DEFAULT_SCREEN_DISTANCE = 2.0


def _small_sphere(x: float, y: float, z: float, material: Material | None = None) -> Sphere:
    return Sphere(
        translation(x * VERTEX_OFFSET, y * VERTEX_OFFSET, z * VERTEX_OFFSET)
        * scaling(VERTEX_RADIUS),
        material,
    )


def _vertex_spheres(material: Material | None = None) -> list[Shape]:
    return [
        _small_sphere(x, y, z, material)
        for x, y, z in itertools.product((-1.0, 1.0), repeat=3)
    ]


def _floor(z: float) -> Plane:
    pigment = CheckeredPigment(FLOOR_COLOR_ON, FLOOR_COLOR_OFF, steps=6)
    return Plane(translation(0.0, 0.0, z), Material(brdf=DiffuseBRDF(pigment)))


def _carved_block(material: Material) -> Shape:
    """A cube with rounded corners and a vertical hole through its center."""
    placement = translation(0.6, -1.5, -0.6) * rotation_z(math.radians(30.0)) * scaling(0.8)
    rounded = intersect(
        Cube(placement, material), Sphere(placement * scaling(0.65), material)
    )
    hole = Cylinder(placement * scaling(0.5, 0.5, 1.2), material)
    return difference(rounded, hole)


def _onoff_world() -> World:
    world = World(_vertex_spheres())
    world.add(_small_sphere(0.0, 0.0, -1.0))
    world.add(_small_sphere(0.0, 1.0, 0.0))
    return world


def _flat_world() -> World:
    world = World(_vertex_spheres(Material(brdf=DiffuseBRDF(UniformPigment(CYAN)))))

    checkered = CheckeredPigment(RED, GREEN, steps=8)
    world.add(_small_sphere(0.0, 1.0, 0.0, Material(brdf=DiffuseBRDF(checkered))))

    texture = HdrImage(4, 1)
    for col, color in enumerate((RED, GREEN, BLUE, MAGENTA)):
        texture.set_pixel(col, 0, color)
    world.add(_small_sphere(0.0, 0.0, -1.0, Material(brdf=DiffuseBRDF(ImagePigment(texture)))))

    world.add(
        Plane(translation(0.0, 0.0, -2.0), Material(brdf=DiffuseBRDF(CheckeredPigment(steps=4))))
    )
    world.add(Sphere(scaling(SKY_RADIUS), Material(brdf=DiffuseBRDF(UniformPigment(WHITE)))))
    return world


def _lit_world(sky: Material, mirror: bool) -> World:
    ball = Sphere(
        translation(0.5, 0.7, 0.1), Material(brdf=DiffuseBRDF(UniformPigment(BALL_COLOR)))
    )
    small_brdf = (
        SpecularBRDF(UniformPigment(MIRROR_COLOR))
        if mirror
        else DiffuseBRDF(UniformPigment(MIRROR_COLOR))
    )
    small = Sphere(translation(-0.2, -0.8, -0.8) * scaling(0.5), Material(brdf=small_brdf))
    block = _carved_block(Material(brdf=DiffuseBRDF(UniformPigment(BLOCK_COLOR))))

    return World([_floor(-1.0), Sphere(scaling(SKY_RADIUS), sky), ball, small, block])


def create_demo_renderer(
    name: RendererName = "pathtracer",
    n: int = DEFAULT_NUM_RAYS,
    max_depth: int = DEFAULT_MAX_DEPTH,
    roulette_depth: int = DEFAULT_ROULETTE_DEPTH,
    pcg: PCG | None = None,
) -> Renderer:
    """Create a renderer together with the demo world it draws.

    Args:
        name: Which renderer to build.
        n: Path tracer rays per hit.
        max_depth: Path tracer maximum depth.
        roulette_depth: Path tracer Russian roulette depth.
        pcg: Fallback generator of the path tracer.

    Returns:
        The configured renderer.

    Raises:
        ValueError: If the renderer name is unknown.
    """
    if name == "onoff":
        return OnOffRenderer(_onoff_world())
    if name == "flat":
        return FlatRenderer(_flat_world())
    if name == "pointlight":
        sky = Material(brdf=DiffuseBRDF(UniformPigment(WHITE * 1e-2)))
        return PointLightRenderer(
            _lit_world(sky, mirror=False),
            lights=[PointLight(position=Point(*LIGHT_POSITION))],
            background_color=BLACK,
            ambient_color=WHITE * 1e-3,
        )
    if name == "pathtracer":
        sky = Material(
            brdf=DiffuseBRDF(UniformPigment(BLACK)), emitted_radiance=UniformPigment(WHITE)
        )
        return PathTracer(
            _lit_world(sky, mirror=True),
            pcg=pcg if pcg is not None else PCG(),
            n=n,
            max_depth=max_depth,
            roulette_depth=roulette_depth,
        )
    raise ValueError(f"Unknown renderer: {name} (expected one of {', '.join(RENDERER_NAMES)})")


def create_demo_camera(
    width: int,
    height: int,
    orthogonal: bool = False,
    position: tuple[float, float, float] = DEFAULT_CAMERA_POSITION,
    orientation_deg: tuple[float, float, float] = DEFAULT_CAMERA_ORIENTATION,
    screen_distance: float = DEFAULT_SCREEN_DISTANCE,
) -> Camera:
    """Create a camera looking at the demo scene.

    The camera is first moved to ``position`` and then rotated about the
    world origin by the given angles, so changing the orientation orbits
    around the scene.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        orthogonal: Use an orthogonal instead of a perspective projection.
        position: Camera position before the rotation.
        orientation_deg: Rotation angles around x, y and z, in degrees.
        screen_distance: Eye-to-screen distance of the perspective camera.

    Returns:
        The configured camera.
    """
    ax, ay, az = (math.radians(angle) for angle in orientation_deg)
    transformation = rotation_x(ax) * rotation_y(ay) * rotation_z(az) * translation(*position)
    aspect_ratio = width / height
    if orthogonal:
        return OrthogonalCamera(aspect_ratio=aspect_ratio, transformation=transformation)
    return PerspectiveCamera(
        aspect_ratio=aspect_ratio,
        transformation=transformation,
        screen_distance=screen_distance,
    )
