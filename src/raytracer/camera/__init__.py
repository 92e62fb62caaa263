"""Camera models.

Components:
    cameras: Orthogonal and perspective (pinhole) cameras
"""

from .cameras import Camera, OrthogonalCamera, PerspectiveCamera

__all__ = ["Camera", "OrthogonalCamera", "PerspectiveCamera"]
