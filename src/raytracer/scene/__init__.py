"""Scene containers.

Components:
    world: World, the list of shapes with nearest-hit and visibility queries
    lights: PointLight sources
    demo: Demo worlds and camera (import raytracer.scene.demo directly)
"""

from .lights import PointLight
from .world import World

__all__ = ["World", "PointLight"]
