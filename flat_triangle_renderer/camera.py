#
# PROJECT: flat-triangle-renderer
# MODULE: flat_triangle_renderer/camera.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import math
from typing import NamedTuple

from .errors import ConfigurationError
from .math_utils import Vec3

# Depth that near-plane clamping and clipping push vertices to, past `near`
NEAR_EPSILON = 1e-5

_PARALLEL_TOLERANCE = 1e-12


class Projection(NamedTuple):
    x: float
    y: float
    depth: float
    clamped: bool


class Camera:
    """
    Look-at camera with a symmetric perspective frustum.

    Stores position, target and up vector in world space, the vertical
    field of view (radians) and near/far plane distances. The view basis is
    derived on every call from these values; nothing derived is cached.
    Fields may be reassigned between frames; Scene.compose_frame runs
    validate() again before drawing.
    """
    __slots__ = ('position', 'target', 'up', 'fov', 'near', 'far')

    def __init__(self, position=(0.0, 0.0, 5.0), target=(0.0, 0.0, 0.0),
                 up=(0.0, 1.0, 0.0), fov: float = math.radians(60.0),
                 near: float = 0.1, far: float = 1000.0):
        self.position = Vec3.of(position)
        self.target = Vec3.of(target)
        self.up = Vec3.of(up)
        self.fov = float(fov)
        self.near = float(near)
        self.far = float(far)
        self.validate()

    def __repr__(self):
        return (f"Camera(position={self.position!r}, target={self.target!r}, "
                f"up={self.up!r}, fov={self.fov:.4f}, near={self.near}, far={self.far})")

    def validate(self):
        """Raise ConfigurationError if no projection can be defined."""
        if self.target == self.position:
            raise ConfigurationError("camera target coincides with its position")
        forward = (self.target - self.position).normalize()
        if forward.cross(self.up).length() <= _PARALLEL_TOLERANCE:
            raise ConfigurationError("camera up vector is parallel to the view direction")
        if not 0.0 < self.fov < math.pi:
            raise ConfigurationError(f"field of view must be within (0, pi) radians, got {self.fov}")
        if self.near <= 0.0:
            raise ConfigurationError(f"near plane must be positive, got {self.near}")
        if self.far <= self.near:
            raise ConfigurationError(
                f"far plane ({self.far}) must lie beyond the near plane ({self.near})")

    def basis(self):
        """Return the orthonormal (forward, right, up) view basis."""
        forward = (self.target - self.position).normalize()
        right = forward.cross(self.up).normalize()
        cam_up = right.cross(forward)
        return forward, right, cam_up

    def light_direction(self) -> Vec3:
        """The fixed shading light travels along the view axis."""
        return (self.target - self.position).normalize()

    def to_view(self, point: Vec3) -> Vec3:
        """World space -> view space (x right, y up, z distance along forward)."""
        forward, right, cam_up = self.basis()
        rel = point - self.position
        return Vec3(rel.dot(right), rel.dot(cam_up), rel.dot(forward))

    def to_screen(self, view: Vec3, width: int, height: int):
        """
        Perspective-divide a view-space point and map NDC [-1, 1] to pixels.
        Y is flipped: pixel row 0 is the top of the image.
        """
        scale = 1.0 / math.tan(self.fov / 2.0)
        aspect = width / height
        ndc_x = view.x * scale / (view.z * aspect)
        ndc_y = view.y * scale / view.z
        sx = (ndc_x + 1.0) * 0.5 * width
        sy = (1.0 - ndc_y) * 0.5 * height
        return sx, sy

    def project(self, point: Vec3, width: int, height: int) -> Projection:
        """
        Project a world-space point to (screen x, screen y, view depth).

        Points at or behind the near plane are clamped to near + NEAR_EPSILON
        instead of being rejected; ``clamped`` tells the caller it happened.
        The returned depth is view-space z, not clip-space depth.
        """
        view = self.to_view(point)
        clamped = view.z <= self.near
        if clamped:
            view = Vec3(view.x, view.y, self.near + NEAR_EPSILON)
        sx, sy = self.to_screen(view, width, height)
        return Projection(sx, sy, view.z, clamped)
