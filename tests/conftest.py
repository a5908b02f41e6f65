"""Shared pytest fixtures for ReelAgent."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from reelagent.models.segment import SegmentTags, make_segment
from reelagent.models.timeline import CandidateTimeline, Clip
from reelagent.utils.ffprobe import MediaInfo


@pytest.fixture
def segments():
    """Four 5-second segments covering [0, 20]."""
    return [
        make_segment(0.0, 5.0, 0.4, SegmentTags(has_face=True, speech_density=0.8)),
        make_segment(5.0, 10.0, 0.9, SegmentTags(has_action=True, motion_score=0.9)),
        make_segment(10.0, 15.0, 0.2, SegmentTags(has_dialogue=True, speech_density=0.3)),
        make_segment(15.0, 20.0, 0.7, SegmentTags(has_face=True, has_action=True, motion_score=0.5)),
    ]


@pytest.fixture
def single_clip():
    """Factory for a candidate timeline holding one clip."""

    def _make(start: float, end: float) -> CandidateTimeline:
        return CandidateTimeline(clips=[Clip(id="clip", start=start, end=end)])

    return _make


class FakeFFmpeg:
    """Stands in for subprocess.run inside reelagent.utils.ffmpeg."""

    def __init__(self, returncode: int = 0, stderr: str = "", raises: Exception | None = None):
        self.returncode = returncode
        self.stderr = stderr
        self.raises = raises
        self.calls: list[list[str]] = []
        self.inputs_present: list[bool] = []

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        input_paths = [cmd[i + 1] for i, arg in enumerate(cmd) if arg == "-i"]
        self.inputs_present.append(all(Path(p).exists() for p in input_paths))
        if self.raises is not None:
            raise self.raises
        if self.returncode == 0:
            Path(cmd[-1]).write_bytes(b"rendered")
        return subprocess.CompletedProcess(cmd, self.returncode, "", self.stderr)

    @property
    def last_args(self) -> list[str]:
        return self.calls[-1]


@pytest.fixture
def fake_ffmpeg(monkeypatch):
    """Install a successful fake encoder; tweak attributes for failure cases."""
    fake = FakeFFmpeg()
    monkeypatch.setattr("reelagent.utils.ffmpeg.subprocess.run", fake)
    return fake


@pytest.fixture
def fake_probe(monkeypatch):
    """Report every source as a small 320x180 video."""

    def _probe(path):
        return MediaInfo(
            path=str(path),
            width=320,
            height=180,
            duration_seconds=30.0,
            has_audio=True,
            codec="h264",
            format_name="mov,mp4,m4a,3gp,3g2,mj2",
        )

    monkeypatch.setattr("reelagent.render.export.probe_media", _probe)
    return _probe


@pytest.fixture
def source_video(tmp_path):
    path = tmp_path / "source.mp4"
    path.write_bytes(b"\x00" * 64)
    return path


@pytest.fixture
def work_dir(tmp_path):
    path = tmp_path / "work"
    path.mkdir()
    return path
