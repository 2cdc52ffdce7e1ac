#
# PROJECT: flat-triangle-renderer
# MODULE: flat_triangle_renderer/__init__.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

from .math_utils import Vec3
from .errors import (RendererError, ConfigurationError, BmpFormatError,
                     AnimationAssemblyError, DeadlineExceeded)
from .shading import ShadingModel
from .config import RenderConfig
from .camera import Camera, Projection
from .canvas import Canvas
from .rasterizer import ScreenTriangle, barycentric, fill_triangle
from .triangle import Triangle
from .mesh import Mesh
from .scene import Scene
from .bmp import encode_bmp, decode_bmp, write_bmp, read_bmp
from .animation import (Frame, render_single_frame, render_sequence,
                        FrameSequenceWriter, assemble_video, save_gif)
from .color import parse_hex_color, parse_color
