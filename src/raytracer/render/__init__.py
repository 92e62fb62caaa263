"""Rendering.

Components:
    renderers: On/off, flat, point-light and path-tracing renderers
    image_tracer: Per-pixel sampling, antialiasing and thread dispatch
"""

from .image_tracer import ImageTracer, ProgressCallback
from .renderers import (
    FlatRenderer,
    OnOffRenderer,
    PathTracer,
    PointLightRenderer,
    Renderer,
)

__all__ = [
    "Renderer",
    "OnOffRenderer",
    "FlatRenderer",
    "PointLightRenderer",
    "PathTracer",
    "ImageTracer",
    "ProgressCallback",
]
