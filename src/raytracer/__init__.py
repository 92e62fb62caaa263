"""Offline path tracer with transformable primitives and constructive solid geometry.

The renderer follows light paths backwards from a camera through a scene of
shapes, each carrying a material. It supports:
- Affine transformations with cached inverses
- Spheres, planes, cubes and cylinders, combined through CSG
- Diffuse and mirror BRDFs with uniform, checkered and image pigments
- On/off, flat, point-light and Monte Carlo path-tracing renderers
- Reproducible, optionally multithreaded rendering with per-pixel PCG streams

Subpackages:
    core: Vectors, transformations, rays, colors, random numbers, images
    geometry: Shape primitives, CSG and intersection records
    materials: Pigments, BRDFs and materials
    scene: The World container and light sources
    camera: Orthogonal and perspective cameras
    render: Renderers and the pixel-sampling ImageTracer
    preview: Tone mapping and PNG export
"""

__version__ = "0.1.0"
