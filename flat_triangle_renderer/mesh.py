#
# PROJECT: flat-triangle-renderer
# MODULE: flat_triangle_renderer/mesh.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import logging

from .triangle import Triangle

logger = logging.getLogger(__name__)

# One color per cube face, in face order
CUBE_FACE_COLORS = [
    (220, 60, 60), (60, 200, 90), (70, 110, 230),
    (230, 200, 60), (200, 80, 210), (70, 210, 220),
]


class Mesh:
    """
    Indexed polygon mesh used to build scenes.

    faces hold vertex indices in counter-clockwise order seen from outside,
    so the triangles produced face outward for backface culling.
    """

    def __init__(self, filename=None):
        self.vertices = []
        self.faces = []
        if filename:
            self.load_from_obj(filename)
        else:
            self._make_demo_cube()

    def load_from_obj(self, filename):
        try:
            with open(filename, 'r') as f:
                for line in f:
                    if line.startswith('v '):
                        self.vertices.append([float(x) for x in line.split()[1:4]])
                    elif line.startswith('f '):
                        # Handle v/vt/vn format by splitting by '/'
                        face = [self._resolve_index(int(x.split('/')[0]))
                                for x in line.split()[1:]]
                        self.faces.append(face)
        except (OSError, ValueError) as e:
            logger.warning("could not load %r: %s", filename, e)
            self.vertices, self.faces = [], []

        if not self.vertices or not self.faces:
            logger.warning("no usable geometry in %r, using the demo cube", filename)
            self._make_demo_cube()

    def _resolve_index(self, index: int) -> int:
        # OBJ indices are 1-based; negative ones count back from the last vertex
        if index < 0:
            return len(self.vertices) + index
        return index - 1

    def _make_demo_cube(self):
        """Generate a 2-unit cube centered at origin as fallback geometry."""
        self.vertices = [
            [-1, -1, -1], [ 1, -1, -1], [ 1,  1, -1], [-1,  1, -1],
            [-1, -1,  1], [ 1, -1,  1], [ 1,  1,  1], [-1,  1,  1],
        ]
        self.faces = [
            [0, 3, 2, 1],  # back   (z = -1)
            [4, 5, 6, 7],  # front  (z = +1)
            [0, 4, 7, 3],  # left   (x = -1)
            [1, 2, 6, 5],  # right  (x = +1)
            [3, 7, 6, 2],  # top    (y = +1)
            [0, 1, 5, 4],  # bottom (y = -1)
        ]

    def triangles(self, colors=(255, 255, 255)):
        """
        Fan-triangulate every face into Triangles. ``colors`` is one RGB
        triple for the whole mesh or a list cycled per face; an empty
        sequence falls back to white.
        """
        if not colors:
            colors = [(255, 255, 255)]
        elif isinstance(colors[0], (int, float)):
            colors = [colors]
        result = []
        for face_no, face in enumerate(self.faces):
            if len(face) < 3:
                continue
            try:
                pts = [self.vertices[idx] for idx in face]
            except IndexError:
                logger.warning("face %d references a missing vertex, skipped", face_no)
                continue
            color = colors[face_no % len(colors)]
            for i in range(1, len(pts) - 1):
                result.append(Triangle(pts[0], pts[i], pts[i + 1], color))
        return result

    @classmethod
    def cube(cls):
        """Factory method to create a mesh with a demo cube."""
        return cls()

    @classmethod
    def from_obj(cls, filename):
        """Factory method to create a mesh from an OBJ file."""
        return cls(filename)
