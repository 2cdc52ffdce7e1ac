#
# PROJECT: flat-triangle-renderer
# MODULE: flat_triangle_renderer/rasterizer.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import logging
import math
from typing import NamedTuple

import numpy as np

from .canvas import Canvas
from .math_utils import Vec3

logger = logging.getLogger(__name__)


class ScreenTriangle(NamedTuple):
    """Projected triangle ready for scan conversion.

    points: three (x, y, depth) tuples in pixel space, depth is view-space z.
    color: already shaded (r, g, b) in 0-255.
    """
    points: tuple
    color: tuple


def barycentric(px: float, py: float, a, b, c):
    """
    Barycentric weights (u, v, w) of point p for triangle a, b, c (2D, only
    x/y of each point is read), such that p = u*a + v*b + w*c.
    Returns None when the triangle has zero area (denominator is exactly 0).
    """
    v0x, v0y = b[0] - a[0], b[1] - a[1]
    v1x, v1y = c[0] - a[0], c[1] - a[1]
    v2x, v2y = px - a[0], py - a[1]
    d00 = v0x * v0x + v0y * v0y
    d01 = v0x * v1x + v0y * v1y
    d11 = v1x * v1x + v1y * v1y
    d20 = v2x * v0x + v2y * v0y
    d21 = v2x * v1x + v2y * v1y
    denom = d00 * d11 - d01 * d01
    if denom == 0:
        return None
    v = (d11 * d20 - d01 * d21) / denom
    w = (d00 * d21 - d01 * d20) / denom
    return 1.0 - v - w, v, w


def bounding_box(points, region):
    """
    Integer pixel box of the points clamped to the inclusive region.
    Returns None if nothing of it lies inside the region.
    """
    rx0, ry0, rx1, ry1 = region
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    x0 = max(int(math.floor(min(xs))), rx0)
    x1 = min(int(math.floor(max(xs))), rx1)
    y0 = max(int(math.floor(min(ys))), ry0)
    y1 = min(int(math.floor(max(ys))), ry1)
    if x0 > x1 or y0 > y1:
        return None
    return x0, y0, x1, y1


def clip_near(view_points, z_clip: float):
    """
    Clip a view-space triangle against the plane z = z_clip, keeping the
    part with z >= z_clip (Sutherland-Hodgman, single plane).

    Returns a list of 0, 1 or 2 triangles (3-tuples of Vec3), fanned from
    the clipped polygon in the original winding order.
    """
    polygon = []
    count = len(view_points)
    for i in range(count):
        cur = view_points[i]
        nxt = view_points[(i + 1) % count]
        cur_in = cur.z >= z_clip
        nxt_in = nxt.z >= z_clip
        if cur_in:
            polygon.append(cur)
        if cur_in != nxt_in:
            t = (z_clip - cur.z) / (nxt.z - cur.z)
            hit = cur.lerp(nxt, t)
            polygon.append(Vec3(hit.x, hit.y, z_clip))

    if len(polygon) < 3:
        return []
    return [(polygon[0], polygon[i], polygon[i + 1]) for i in range(1, len(polygon) - 1)]


def fill_triangle(canvas: Canvas, tri: ScreenTriangle, region=None,
                  perspective_correct: bool = False) -> int:
    """
    Depth-tested scan conversion of one projected triangle.

    Samples pixel centres (i + 0.5, j + 0.5) inside the clamped bounding box,
    keeps those with all barycentric weights >= 0 (edges included) and
    writes color + depth where the interpolated depth is strictly less than
    the stored one, so on exact ties the earlier triangle keeps the pixel.
    Depth is interpolated affinely in screen space unless
    ``perspective_correct`` is set, which interpolates 1/z instead.

    Only pixels inside ``region`` (inclusive x0, y0, x1, y1; default: the
    whole canvas) are tested. Returns the number of pixels written.
    """
    p1, p2, p3 = tri.points
    box = bounding_box(tri.points, region if region is not None else canvas.bounds)
    if box is None:
        return 0

    v0x, v0y = p2[0] - p1[0], p2[1] - p1[1]
    v1x, v1y = p3[0] - p1[0], p3[1] - p1[1]
    d00 = v0x * v0x + v0y * v0y
    d01 = v0x * v1x + v0y * v1y
    d11 = v1x * v1x + v1y * v1y
    denom = d00 * d11 - d01 * d01
    if denom == 0:
        # Degenerate: zero area on screen, nothing to write
        logger.debug("skipping degenerate projected triangle %s", tri.points)
        return 0

    x0, y0, x1, y1 = box
    px, py = np.meshgrid(np.arange(x0, x1 + 1, dtype=np.float64) + 0.5,
                         np.arange(y0, y1 + 1, dtype=np.float64) + 0.5)
    v2x = px - p1[0]
    v2y = py - p1[1]
    d20 = v2x * v0x + v2y * v0y
    d21 = v2x * v1x + v2y * v1y
    v = (d11 * d20 - d01 * d21) / denom
    w = (d00 * d21 - d01 * d20) / denom
    u = 1.0 - v - w
    inside = (u >= 0) & (v >= 0) & (w >= 0)
    if not inside.any():
        return 0

    z1, z2, z3 = p1[2], p2[2], p3[2]
    if perspective_correct:
        # Outside pixels may hit 1/0; they are masked off below
        with np.errstate(divide='ignore', invalid='ignore'):
            depth = 1.0 / (u / z1 + v / z2 + w / z3)
    else:
        depth = u * z1 + v * z2 + w * z3

    color_view, depth_view = canvas.window(x0, y0, x1, y1)
    mask = inside & (depth < depth_view)
    depth_view[mask] = depth[mask]
    color_view[mask] = tri.color
    return int(mask.sum())
