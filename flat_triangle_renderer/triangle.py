#
# PROJECT: flat-triangle-renderer
# MODULE: flat_triangle_renderer/triangle.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import math

from .camera import NEAR_EPSILON, Camera
from .canvas import Canvas
from .config import RenderConfig
from .math_utils import Vec3
from .rasterizer import ScreenTriangle, clip_near, fill_triangle


class Triangle:
    """
    Three world-space vertices with a flat RGB color and a derived unit
    normal, normalize(cross(b - a, c - a)).

    Transforms mutate the vertices in place, recompute the normal and
    return the triangle so they can be chained. Collinear vertices leave a
    zero normal: such a triangle is treated as back-facing and lit at the
    minimum light level when culling is off.
    """
    __slots__ = ('a', 'b', 'c', 'color', 'normal')

    def __init__(self, a, b, c, color=(255, 255, 255)):
        self.a = Vec3.of(a)
        self.b = Vec3.of(b)
        self.c = Vec3.of(c)
        self.color = Vec3.of(color)
        self.update_normal()

    def __repr__(self):
        return f"Triangle({self.a!r}, {self.b!r}, {self.c!r}, color={self.color!r})"

    def copy(self) -> 'Triangle':
        return Triangle(self.a, self.b, self.c, self.color)

    def vertices(self):
        return (self.a, self.b, self.c)

    def update_normal(self):
        self.normal = (self.b - self.a).cross(self.c - self.a).normalize()

    def centroid(self) -> Vec3:
        return (self.a + self.b + self.c) / 3.0

    def is_degenerate(self) -> bool:
        return self.normal.is_zero()

    # ────────────────────────────────────────────────────────────────────
    # Transforms
    # ────────────────────────────────────────────────────────────────────
    def rotate_around_origin(self, angle: float) -> 'Triangle':
        """Rotate x/y about the world origin; z is untouched."""
        return self._rotate_xy(angle, 0.0, 0.0)

    def rotate_around_centroid(self, angle: float) -> 'Triangle':
        """Rotate x/y about the centroid; z is untouched."""
        center = self.centroid()
        return self._rotate_xy(angle, center.x, center.y)

    def rotate_around_centroid_y(self, angle: float) -> 'Triangle':
        """Rotate x/z about a vertical axis through the centroid."""
        center = self.centroid()
        c = math.cos(angle)
        s = math.sin(angle)

        def rot(v):
            dx = v.x - center.x
            dz = v.z - center.z
            return Vec3(center.x + dx * c + dz * s, v.y, center.z - dx * s + dz * c)

        self.a, self.b, self.c = rot(self.a), rot(self.b), rot(self.c)
        self.update_normal()
        return self

    def scale_from_centroid(self, scalar: float) -> 'Triangle':
        center = self.centroid()
        self.a = center + (self.a - center) * scalar
        self.b = center + (self.b - center) * scalar
        self.c = center + (self.c - center) * scalar
        self.update_normal()
        return self

    def translate(self, offset) -> 'Triangle':
        offset = Vec3.of(offset)
        self.a = self.a + offset
        self.b = self.b + offset
        self.c = self.c + offset
        self.update_normal()
        return self

    def _rotate_xy(self, angle, ox, oy):
        c = math.cos(angle)
        s = math.sin(angle)

        def rot(v):
            dx = v.x - ox
            dy = v.y - oy
            return Vec3(ox + dx * c - dy * s, oy + dx * s + dy * c, v.z)

        self.a, self.b, self.c = rot(self.a), rot(self.b), rot(self.c)
        self.update_normal()
        return self

    # ────────────────────────────────────────────────────────────────────
    # Visibility + rasterization
    # ────────────────────────────────────────────────────────────────────
    def is_facing_camera(self, camera_position) -> bool:
        """True when the normal points toward the camera side of the face."""
        to_camera = Vec3.of(camera_position) - self.centroid()
        return self.normal.dot(to_camera) > 0

    def prepare(self, camera: Camera, width: int, height: int, config: RenderConfig = None):
        """
        Project, apply the near-plane policy, cull and shade.

        Returns the screen-space pieces to scan convert: empty when the
        triangle is culled or entirely behind the near plane, two pieces
        when near-plane clipping cuts off one corner.
        """
        if config is None:
            config = RenderConfig()

        projections = [camera.project(v, width, height) for v in self.vertices()]
        crosses_near = any(p.clamped for p in projections)
        if crosses_near and config.near_plane_policy == 'reject':
            return []

        if config.backface_culling and not self.is_facing_camera(camera.position):
            return []

        factor = config.shading.lighting_factor(self.normal, camera.light_direction())
        rgb = config.shading.shade(self.color, factor)

        if crosses_near and config.near_plane_policy == 'clip':
            views = [camera.to_view(v) for v in self.vertices()]
            pieces = []
            for piece in clip_near(views, camera.near + NEAR_EPSILON):
                points = tuple((*camera.to_screen(v, width, height), v.z) for v in piece)
                pieces.append(ScreenTriangle(points, rgb))
            return pieces

        points = tuple((p.x, p.y, p.depth) for p in projections)
        return [ScreenTriangle(points, rgb)]

    def rasterize(self, canvas: Canvas, camera: Camera, config: RenderConfig = None,
                  region=None) -> int:
        """Paint this triangle into the canvas; returns pixels written."""
        if config is None:
            config = RenderConfig()
        written = 0
        for piece in self.prepare(camera, canvas.w, canvas.h, config):
            written += fill_triangle(canvas, piece, region,
                                     perspective_correct=config.perspective_correct_depth)
        return written
