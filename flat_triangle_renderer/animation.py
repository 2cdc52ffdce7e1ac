#
# PROJECT: flat-triangle-renderer
# MODULE: flat_triangle_renderer/animation.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import logging
import shutil
import subprocess
import time
from pathlib import Path
from typing import NamedTuple

import numpy as np
from PIL import Image

from .bmp import write_bmp
from .config import RenderConfig
from .errors import AnimationAssemblyError, ConfigurationError, DeadlineExceeded
from .scene import Scene

logger = logging.getLogger(__name__)


class Frame(NamedTuple):
    index: int
    pixels: np.ndarray


# ────────────────────────────────────────────────────────────────────────
# Per-frame transforms
# ────────────────────────────────────────────────────────────────────────
def spin_about_centroid(angle: float):
    """Each triangle turns in its own x/y plane by ``angle`` per frame."""
    return lambda tri: tri.rotate_around_centroid(angle)


def spin_about_centroid_y(angle: float):
    """Each triangle turns about a vertical axis through its centroid."""
    return lambda tri: tri.rotate_around_centroid_y(angle)


def orbit_origin(angle: float):
    """The whole scene turns in the x/y plane about the world origin."""
    return lambda tri: tri.rotate_around_origin(angle)


def compose(*transforms):
    """Chain transforms left to right into one per-frame step."""
    def step(tri):
        for transform in transforms:
            tri = transform(tri)
        return tri
    return step


# ────────────────────────────────────────────────────────────────────────
# Rendering
# ────────────────────────────────────────────────────────────────────────
def render_single_frame(scene: Scene, width: int, height: int, config: RenderConfig = None):
    """Compose the scene as it is now, without touching its geometry."""
    return scene.compose_frame(width, height, config)


def render_sequence(scene: Scene, width: int, height: int, frame_count: int,
                    transform, config: RenderConfig = None, deadline: float = None):
    """
    Generate ``frame_count`` frames. Before each frame the transform is
    applied once to every triangle, so frame k shows the geometry after k + 1
    steps and the scene is left in its final state.

    ``deadline`` is a budget in seconds checked between frames; running past
    it raises DeadlineExceeded. A frame in progress is always finished.
    """
    if frame_count < 0:
        raise ConfigurationError(f"frame_count must be >= 0, got {frame_count}")
    if config is None:
        config = RenderConfig()

    started = time.monotonic()
    for index in range(frame_count):
        if index and deadline is not None and time.monotonic() - started > deadline:
            raise DeadlineExceeded(index, deadline)
        scene.apply(transform)
        pixels = scene.compose_frame(width, height, config)
        logger.debug("frame %d/%d composed", index + 1, frame_count)
        yield Frame(index, pixels)


# ────────────────────────────────────────────────────────────────────────
# Frame sequence output
# ────────────────────────────────────────────────────────────────────────
class FrameSequenceWriter:
    """
    Writes numbered BMP frames (prefix_0000.bmp, prefix_0001.bmp, ...) into a
    directory for an external tool to merge, and removes them afterwards.

    Files already matching ``pattern`` in the directory are deleted on
    construction, so the glob only ever sees frames of this run.
    """

    def __init__(self, directory, prefix: str = 'frame', digits: int = 4):
        self.directory = Path(directory)
        self.prefix = prefix
        self.digits = digits
        self.paths = []
        self._created_dir = not self.directory.exists()
        self.directory.mkdir(parents=True, exist_ok=True)
        self._remove_stale_frames()

    def _remove_stale_frames(self):
        stale = sorted(p for p in self.directory.glob(self.pattern) if p.is_file())
        if stale:
            logger.warning("removing %d stale frame(s) matching %s in %s",
                           len(stale), self.pattern, self.directory)
        for path in stale:
            path.unlink()

    @property
    def pattern(self) -> str:
        """Glob matching every frame this writer produces."""
        return f"{self.prefix}_*.bmp"

    def path_for(self, index: int) -> Path:
        return self.directory / f"{self.prefix}_{index:0{self.digits}d}.bmp"

    def write(self, frame: Frame) -> Path:
        path = write_bmp(self.path_for(frame.index), frame.pixels)
        self.paths.append(path)
        return path

    def write_all(self, frames) -> int:
        count = 0
        for frame in frames:
            self.write(frame)
            count += 1
        logger.info("wrote %d frame(s) to %s", count, self.directory)
        return count

    def cleanup(self):
        """Delete written frames, and the directory if this writer made it."""
        for path in self.paths:
            path.unlink(missing_ok=True)
        self.paths.clear()
        if self._created_dir and self.directory.exists() and not any(self.directory.iterdir()):
            self.directory.rmdir()


def ffmpeg_command(directory, pattern: str, output, fps: int = 30, ffmpeg: str = 'ffmpeg'):
    return [
        ffmpeg, '-y',
        '-framerate', str(fps),
        '-pattern_type', 'glob',
        '-i', str(Path(directory) / pattern),
        '-pix_fmt', 'yuv420p',
        str(output),
    ]


def assemble_video(directory, pattern: str, output, fps: int = 30, ffmpeg: str = 'ffmpeg') -> Path:
    """Merge the frames matching ``pattern`` into a video with ffmpeg."""
    if shutil.which(ffmpeg) is None:
        raise AnimationAssemblyError(f"{ffmpeg!r} not found on PATH")
    cmd = ffmpeg_command(directory, pattern, output, fps=fps, ffmpeg=ffmpeg)
    logger.info("assembling %s at %d fps", output, fps)
    proc = subprocess.run(cmd, capture_output=True, text=True)
    if proc.returncode != 0:
        raise AnimationAssemblyError(
            f"ffmpeg exited with status {proc.returncode}",
            returncode=proc.returncode, stderr=proc.stderr)
    return Path(output)


def save_gif(frames, output, duration_ms: int = 100, loop: int = 0) -> Path:
    """Write frames (Frame tuples or bare arrays) as an animated GIF."""
    images = []
    for frame in frames:
        pixels = frame.pixels if isinstance(frame, Frame) else frame
        images.append(Image.fromarray(np.asarray(pixels, dtype=np.uint8)))
    if not images:
        raise ValueError("save_gif needs at least one frame")
    output = Path(output)
    images[0].save(
        output,
        save_all=True,
        append_images=images[1:],
        duration=duration_ms,
        loop=loop,
    )
    logger.info("saved %d frame GIF to %s", len(images), output)
    return output
