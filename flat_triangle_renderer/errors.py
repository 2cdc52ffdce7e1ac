#
# PROJECT: flat-triangle-renderer
# MODULE: flat_triangle_renderer/errors.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

"""Exception types raised by the renderer."""


class RendererError(Exception):
    """Base class for every error the renderer raises on purpose."""


class ConfigurationError(RendererError, ValueError):
    """Invalid camera, frame size or render configuration."""


class BmpFormatError(RendererError, ValueError):
    """Raised when bytes handed to the BMP decoder are not a 24-bit BMP."""


class AnimationAssemblyError(RendererError):
    """The external tool that merges frames into a video failed."""

    def __init__(self, message: str, returncode=None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class DeadlineExceeded(RendererError):
    """A frame sequence ran past its deadline.

    Checked only between frames, so ``frames_completed`` frames were
    fully composed and handed out before this was raised.
    """

    def __init__(self, frames_completed: int, deadline: float):
        super().__init__(
            f"deadline of {deadline:.3f}s exceeded after {frames_completed} frame(s)")
        self.frames_completed = frames_completed
        self.deadline = deadline
