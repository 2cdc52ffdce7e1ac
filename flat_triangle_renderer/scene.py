#
# PROJECT: flat-triangle-renderer
# MODULE: flat_triangle_renderer/scene.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import logging
from concurrent.futures import ThreadPoolExecutor

from .camera import Camera
from .canvas import Canvas
from .config import RenderConfig
from .rasterizer import fill_triangle
from .triangle import Triangle

logger = logging.getLogger(__name__)


class Scene:
    """
    Ordered collection of triangles viewed through one camera.

    Submission order matters only for depth ties: the depth test is a
    strict less-than, so of two fragments at exactly the same depth the
    earlier triangle's survives.
    """

    def __init__(self, camera: Camera = None, triangles=()):
        self.camera = camera if camera is not None else Camera()
        self.triangles = []
        self.extend(triangles)

    def __len__(self):
        return len(self.triangles)

    def __iter__(self):
        return iter(self.triangles)

    def add(self, triangle: Triangle):
        """Append a triangle. The scene owns it from now on."""
        if not isinstance(triangle, Triangle):
            raise TypeError(f"expected Triangle, got {type(triangle).__name__}")
        self.triangles.append(triangle)

    def extend(self, triangles):
        for tri in triangles:
            self.add(tri)

    def clear(self):
        """Remove all triangles from the scene."""
        self.triangles.clear()

    def apply(self, transform):
        """
        Replace every triangle with transform(triangle), keeping order.

        The transform receives a copy, so it may mutate and return it or
        return a new triangle. If it raises for any triangle the scene is
        left unchanged.
        """
        updated = []
        for tri in self.triangles:
            result = transform(tri.copy())
            if not isinstance(result, Triangle):
                raise TypeError(
                    f"transform must return a Triangle, got {type(result).__name__}")
            updated.append(result)
        self.triangles = updated

    def compose_frame(self, width: int, height: int, config: RenderConfig = None):
        """
        Rasterize every triangle into a fresh black frame and return the
        (height, width, 3) uint8 framebuffer. The depth buffer stays local.
        """
        if config is None:
            config = RenderConfig()
        self.camera.validate()
        canvas = Canvas(width, height)

        if config.workers > 1:
            written = self._compose_tiled(canvas, config)
        else:
            written = 0
            for tri in self.triangles:
                written += tri.rasterize(canvas, self.camera, config)

        logger.debug("composed %dx%d frame: %d triangles, %d pixel writes",
                     width, height, len(self.triangles), written)
        return canvas.framebuffer

    def _compose_tiled(self, canvas: Canvas, config: RenderConfig) -> int:
        """
        Tile-parallel composition. Every worker walks all prepared triangles
        in submission order but only tests pixels inside its own tile, so
        tiles never share a pixel and ties resolve as in the sequential path.
        """
        prepared = []
        for tri in self.triangles:
            prepared.extend(tri.prepare(self.camera, canvas.w, canvas.h, config))
        perspective_correct = config.perspective_correct_depth

        def fill_tile(region):
            return sum(fill_triangle(canvas, piece, region, perspective_correct)
                       for piece in prepared)

        tiles = list(canvas.tiles(config.tile_size))
        with ThreadPoolExecutor(max_workers=config.workers) as pool:
            return sum(pool.map(fill_tile, tiles))
