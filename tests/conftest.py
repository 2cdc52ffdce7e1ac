import logging
import math

import pytest

from flat_triangle_renderer import Camera, Triangle


@pytest.fixture
def front_camera() -> Camera:
    """Camera on +z looking at the origin."""
    return Camera(position=(0.0, 0.0, 5.0), target=(0.0, 0.0, 0.0))


@pytest.fixture
def unit_triangle() -> Triangle:
    return Triangle((-1.0, -1.0, 0.0), (1.0, -1.0, 0.0), (0.0, 1.0, 0.0), (255, 0, 0))


@pytest.fixture
def pixel_camera() -> Camera:
    """
    Camera whose view maps world x/y 1:1 onto pixels of an 800x600 frame:
    90 degree fov at distance 300 (= half the frame height).
    """
    return Camera(position=(200.0, 200.0, 300.0), target=(200.0, 200.0, 0.0),
                  fov=math.radians(90.0))


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
