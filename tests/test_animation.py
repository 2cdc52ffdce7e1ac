import math
import subprocess

import numpy as np
import pytest
from PIL import Image

from flat_triangle_renderer import (AnimationAssemblyError, Camera, ConfigurationError,
                                    DeadlineExceeded, Frame, FrameSequenceWriter, Scene,
                                    Triangle, assemble_video, read_bmp,
                                    render_sequence, render_single_frame, save_gif)
from flat_triangle_renderer import animation
from flat_triangle_renderer.animation import (compose, orbit_origin, spin_about_centroid,
                                              spin_about_centroid_y)


@pytest.fixture
def scene(front_camera: Camera) -> Scene:
    return Scene(front_camera, [
        Triangle((-1, -1, 0), (1, -1, 0), (0, 1, 0), (255, 0, 0)),
        Triangle((1, 1, -1), (2, 1, -1), (1.5, 2, -1), (0, 0, 255)),
    ])


def _snapshot(scene: Scene):
    return [tuple(coord for v in tri.vertices() for coord in v) for tri in scene]


def test_single_frame_leaves_geometry_alone(scene: Scene) -> None:
    before = _snapshot(scene)
    frame = render_single_frame(scene, 32, 32)
    assert frame.shape == (32, 32, 3)
    assert _snapshot(scene) == before


def test_sequence_applies_one_step_per_frame(scene: Scene) -> None:
    reference = [tri.copy() for tri in scene]
    frames = list(render_sequence(scene, 32, 24, 3, spin_about_centroid(0.1)))

    assert [f.index for f in frames] == [0, 1, 2]
    assert all(f.pixels.shape == (24, 32, 3) for f in frames)
    assert len({id(f.pixels) for f in frames}) == 3

    for tri in reference:
        for _ in range(3):
            tri.rotate_around_centroid(0.1)
    for moved, expected in zip(scene, reference):
        for v, w in zip(moved.vertices(), expected.vertices()):
            assert tuple(v) == pytest.approx(tuple(w), abs=1e-12)


def test_first_frame_already_shows_transformed_geometry(scene: Scene) -> None:
    still = render_single_frame(scene, 48, 48)
    (first,) = render_sequence(scene, 48, 48, 1, orbit_origin(math.pi / 4))
    assert not np.array_equal(still, first.pixels)


def test_full_turn_returns_to_start_without_visible_drift(scene: Scene) -> None:
    start = _snapshot(scene)
    for _ in render_sequence(scene, 8, 8, 36, spin_about_centroid(math.radians(10))):
        pass
    for got, want in zip(_snapshot(scene), start):
        assert got == pytest.approx(want, abs=1e-9)


def test_zero_frames_and_negative_count(scene: Scene) -> None:
    assert list(render_sequence(scene, 8, 8, 0, orbit_origin(0.1))) == []
    with pytest.raises(ConfigurationError):
        list(render_sequence(scene, 8, 8, -1, orbit_origin(0.1)))


def test_deadline_checked_between_frames(scene: Scene, monkeypatch) -> None:
    ticks = iter([0.0, 0.5, 1.5])
    monkeypatch.setattr(animation.time, "monotonic", lambda: next(ticks, 99.0))

    frames = render_sequence(scene, 8, 8, 5, orbit_origin(0.1), deadline=1.0)
    assert next(frames).index == 0
    assert next(frames).index == 1
    with pytest.raises(DeadlineExceeded) as exc:
        next(frames)
    assert exc.value.frames_completed == 2


def test_compose_chains_left_to_right() -> None:
    tri = Triangle((0, 0, 0), (1, 0, 0), (0, 1, 0))
    step = compose(lambda t: t.translate((1, 0, 0)), lambda t: t.scale_from_centroid(2.0))
    result = step(tri)
    assert result is tri
    assert tri.centroid().x == pytest.approx(1 + 1 / 3)


def test_spin_about_centroid_y_moves_in_xz_plane() -> None:
    tri = Triangle((-1, -1, 0), (1, -1, 0), (0, 1, 0))
    spin_about_centroid_y(math.pi)(tri)
    assert tri.normal.z == pytest.approx(-1.0)
    assert [v.y for v in tri.vertices()] == [-1.0, -1.0, 1.0]


def test_writer_numbers_frames_and_cleans_up(tmp_path, scene: Scene) -> None:
    target = tmp_path / "frames"
    writer = FrameSequenceWriter(target)
    count = writer.write_all(render_sequence(scene, 16, 12, 3, orbit_origin(0.2)))

    assert count == 3
    names = sorted(p.name for p in target.glob(writer.pattern))
    assert names == ["frame_0000.bmp", "frame_0001.bmp", "frame_0002.bmp"]
    assert read_bmp(target / "frame_0002.bmp").shape == (12, 16, 3)

    writer.cleanup()
    assert not target.exists()


def test_writer_keeps_preexisting_directory(tmp_path) -> None:
    writer = FrameSequenceWriter(tmp_path, prefix="shot", digits=2)
    path = writer.write(Frame(7, np.zeros((2, 2, 3), dtype=np.uint8)))
    assert path.name == "shot_07.bmp"
    writer.cleanup()
    assert not path.exists()
    assert tmp_path.exists()


def test_new_writer_removes_stale_frames(tmp_path) -> None:
    pixels = np.zeros((2, 2, 3), dtype=np.uint8)
    first = FrameSequenceWriter(tmp_path)
    for index in range(4):
        first.write(Frame(index, pixels))
    (tmp_path / "notes.txt").write_text("keep me")

    second = FrameSequenceWriter(tmp_path)
    second.write_all([Frame(0, pixels), Frame(1, pixels)])

    names = sorted(p.name for p in tmp_path.glob(second.pattern))
    assert names == ["frame_0000.bmp", "frame_0001.bmp"]
    assert (tmp_path / "notes.txt").exists()


def test_assemble_video_invokes_ffmpeg(tmp_path, monkeypatch) -> None:
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, 0, "", "")

    monkeypatch.setattr(animation.shutil, "which", lambda name: "/usr/bin/" + name)
    monkeypatch.setattr(animation.subprocess, "run", fake_run)

    out = assemble_video(tmp_path, "frame_*.bmp", tmp_path / "out.mp4", fps=24)
    assert out == tmp_path / "out.mp4"
    assert calls == [[
        "ffmpeg", "-y", "-framerate", "24", "-pattern_type", "glob",
        "-i", str(tmp_path / "frame_*.bmp"), "-pix_fmt", "yuv420p", str(tmp_path / "out.mp4"),
    ]]


def test_assemble_video_failures(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(animation.shutil, "which", lambda name: None)
    with pytest.raises(AnimationAssemblyError):
        assemble_video(tmp_path, "*.bmp", tmp_path / "out.mp4")

    monkeypatch.setattr(animation.shutil, "which", lambda name: "/usr/bin/" + name)
    monkeypatch.setattr(
        animation.subprocess, "run",
        lambda cmd, **kwargs: subprocess.CompletedProcess(cmd, 1, "", "no frames"))
    with pytest.raises(AnimationAssemblyError) as exc:
        assemble_video(tmp_path, "*.bmp", tmp_path / "out.mp4")
    assert exc.value.returncode == 1
    assert exc.value.stderr == "no frames"


def test_save_gif(tmp_path, scene: Scene) -> None:
    out = save_gif(render_sequence(scene, 40, 40, 3, orbit_origin(0.5)), tmp_path / "spin.gif")
    with Image.open(out) as img:
        assert img.n_frames == 3
        assert img.size == (40, 40)

    with pytest.raises(ValueError):
        save_gif([], tmp_path / "empty.gif")

