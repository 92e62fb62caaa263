"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules: small scenes
that several test files render or intersect.
"""

import pytest


@pytest.fixture
def two_sphere_world():
    """Two unit spheres centered at x=2 and x=8."""
    from raytracer.core.transformation import translation
    from raytracer.geometry.sphere import Sphere
    from raytracer.scene.world import World

    world = World()
    world.add(Sphere(translation(2.0, 0.0, 0.0)))
    world.add(Sphere(translation(8.0, 0.0, 0.0)))
    return world


@pytest.fixture
def small_sphere_world():
    """A sphere of radius 0.2 at x=2, seen by the default cameras."""
    from raytracer.core.color import Color
    from raytracer.core.transformation import scaling, translation
    from raytracer.geometry.sphere import Sphere
    from raytracer.materials.brdf import DiffuseBRDF
    from raytracer.materials.material import Material
    from raytracer.materials.pigments import UniformPigment
    from raytracer.scene.world import World

    material = Material(brdf=DiffuseBRDF(UniformPigment(Color(1.0, 2.0, 3.0))))
    world = World()
    world.add(Sphere(translation(2.0, 0.0, 0.0) * scaling(0.2), material))
    return world


def make_furnace_world(emitted: float, reflectance: float):
    """A single sphere enclosing the origin, diffuse and emissive everywhere."""
    from raytracer.core.color import Color
    from raytracer.geometry.sphere import Sphere
    from raytracer.materials.brdf import DiffuseBRDF
    from raytracer.materials.material import Material
    from raytracer.materials.pigments import UniformPigment
    from raytracer.scene.world import World

    material = Material(
        brdf=DiffuseBRDF(UniformPigment(Color(1.0, 1.0, 1.0) * reflectance)),
        emitted_radiance=UniformPigment(Color(1.0, 1.0, 1.0) * emitted),
    )
    return World([Sphere(material=material)])


@pytest.fixture
def furnace_world():
    """Factory fixture building furnace scenes: furnace_world(emitted, reflectance)."""
    return make_furnace_world
