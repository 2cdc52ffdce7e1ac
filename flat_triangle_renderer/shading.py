#
# PROJECT: flat-triangle-renderer
# MODULE: flat_triangle_renderer/shading.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

from .math_utils import Vec3


class ShadingModel:
    """
    Flat per-triangle lighting:
    - Computes the lighting factor from the face normal and light direction
    - Applies it to an RGB color with 8-bit unsigned storage semantics
    """
    __slots__ = ('min_light',)

    def __init__(self, min_light: float = 0.3):
        self.min_light = min_light

    def lighting_factor(self, normal: Vec3, light_direction: Vec3) -> float:
        """
        max(min_light, -dot(normal, light)). A face whose normal points back
        along the light gets full intensity; a zero normal gets min_light.
        """
        return max(self.min_light, -normal.dot(light_direction))

    def shade(self, color: Vec3, factor: float) -> tuple:
        """
        Scale each channel and truncate toward zero. No clamping: values
        outside 0-255 wrap the way a uint8 store would.
        """
        return tuple(int(channel * factor) % 256 for channel in color)
