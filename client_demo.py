#!/usr/bin/env python3
#
# PROJECT: flat-triangle-renderer
# MODULE: client_demo.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import argparse
import logging
import math
import sys
from pathlib import Path

from flat_triangle_renderer import (Camera, ConfigurationError, FrameSequenceWriter, Mesh,
                                    RenderConfig, RendererError, Scene, assemble_video,
                                    parse_color, render_sequence, render_single_frame,
                                    save_gif, write_bmp)
from flat_triangle_renderer.animation import orbit_origin, spin_about_centroid, spin_about_centroid_y
from flat_triangle_renderer.logs import configure_logging
from flat_triangle_renderer.mesh import CUBE_FACE_COLORS

logger = logging.getLogger("client_demo")

MOTIONS = {
    'orbit': orbit_origin,
    'spin': spin_about_centroid,
    'spin-y': spin_about_centroid_y,
}


def parse_args(argv=None):
    """CLI argument parser."""
    epilog = """\
examples:
  %(prog)s                                         Demo cube to render.bmp
  %(prog)s cobra.obj --color #FF8800 -o cobra.bmp  Load OBJ model, single color
  %(prog)s --frames 36 --angle 10 -o spin.gif      Animated GIF, 10 deg per frame
  %(prog)s --frames 90 -o spin.mp4 --fps 30        Video via ffmpeg
  %(prog)s --frames 12 -o frames/ --format bmp     Numbered BMP frames only
"""
    parser = argparse.ArgumentParser(
        description="Flat-shaded triangle renderer",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("model", nargs='?', help="Path to .obj file")
    parser.add_argument("-o", "--output", default="render.bmp",
                        help="Output file, or directory for --format bmp with --frames > 1")
    parser.add_argument("--format", choices=("bmp", "gif", "mp4"), default=None,
                        help="Output format (default: from the output suffix)")
    parser.add_argument("--width", type=int, default=800, help="Image width (default: 800)")
    parser.add_argument("--height", type=int, default=600, help="Image height (default: 600)")
    parser.add_argument("--frames", type=int, default=1,
                        help="Number of frames; > 1 renders an animation (default: 1)")
    parser.add_argument("--angle", type=float, default=5.0,
                        help="Rotation per frame in degrees (default: 5)")
    parser.add_argument("--motion", choices=sorted(MOTIONS), default="orbit",
                        help="Per-frame transform (default: orbit)")
    parser.add_argument("--fps", type=int, default=30, help="Video frame rate (default: 30)")
    parser.add_argument("--fov", type=float, default=60.0,
                        help="Vertical field of view in degrees (default: 60)")
    parser.add_argument("--distance", type=float, default=6.0,
                        help="Camera distance from the origin (default: 6)")
    parser.add_argument("--color", default=None,
                        help="Single mesh color as #RRGGBB or r,g,b (default: per-face palette)")
    parser.add_argument("--workers", type=int, default=None,
                        help="Tile-parallel worker threads (default: 1)")
    parser.add_argument("--near-policy", choices=("clip", "reject", "clamp"), default=None,
                        help="Near-plane handling (default: clip)")
    parser.add_argument("--no-cull", action="store_true", help="Disable backface culling")
    parser.add_argument("--keep-frames", action="store_true",
                        help="Keep intermediate frames after video assembly")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    parser.add_argument("--log-format", choices=("text", "json"), default="text",
                        help="Log output format (default: text)")
    return parser.parse_args(argv)


def build_config(args) -> RenderConfig:
    """Environment defaults, then CLI overrides."""
    config = RenderConfig.from_environ()
    if args.workers is not None:
        config.workers = args.workers
    if args.near_policy is not None:
        config.near_plane_policy = args.near_policy
    if args.no_cull:
        config.backface_culling = False
    config.validate()
    config.init_shading()
    return config


def build_scene(args) -> Scene:
    mesh = Mesh(args.model if args.model else "")
    if args.color is not None:
        colors = parse_color(args.color)
        if colors is None:
            raise ConfigurationError(f"invalid color {args.color!r}")
    else:
        colors = CUBE_FACE_COLORS

    d = args.distance
    camera = Camera(position=(d * 0.5, d * 0.4, d), target=(0.0, 0.0, 0.0),
                    fov=math.radians(args.fov))
    return Scene(camera, mesh.triangles(colors))


def resolve_format(args) -> str:
    if args.format:
        return args.format
    suffix = Path(args.output).suffix.lower()
    if suffix in ('.gif', '.mp4'):
        return suffix[1:]
    return 'bmp'


def run(args) -> Path:
    config = build_config(args)
    scene = build_scene(args)
    output = Path(args.output)
    fmt = resolve_format(args)
    logger.info("rendering %d triangle(s) at %dx%d, %d frame(s), %s",
                len(scene), args.width, args.height, args.frames, fmt)

    if fmt == 'bmp' and args.frames <= 1:
        return write_bmp(output, render_single_frame(scene, args.width, args.height, config))

    transform = MOTIONS[args.motion](math.radians(args.angle))
    frames = render_sequence(scene, args.width, args.height, max(args.frames, 1),
                             transform, config)

    if fmt == 'gif':
        return save_gif(frames, output, duration_ms=max(1, round(1000 / args.fps)))

    if fmt == 'bmp':
        FrameSequenceWriter(output).write_all(frames)
        return output

    writer = FrameSequenceWriter(output.parent / f"{output.stem}_frames")
    try:
        writer.write_all(frames)
        assemble_video(writer.directory, writer.pattern, output, fps=args.fps)
    finally:
        if not args.keep_frames:
            writer.cleanup()
    return output


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level, args.log_format)
    try:
        path = run(args)
    except KeyboardInterrupt:
        return 130
    except (RendererError, OSError) as e:
        logger.error("%s", e)
        return 1
    logger.info("wrote %s", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
