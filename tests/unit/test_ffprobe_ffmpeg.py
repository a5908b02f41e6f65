"""Tests for the ffprobe parser and FFmpeg argument builder."""

from __future__ import annotations

import pytest

from reelagent.models.config import RenderConfig
from reelagent.models.plan import PlanInput, RenderPlan
from reelagent.utils.ffmpeg import build_encode_args, run_ffmpeg
from reelagent.utils.ffprobe import parse_probe_output, probe_media


def test_parse_probe_output():
    info = parse_probe_output("clip.mp4", {
        "streams": [
            {"codec_type": "video", "codec_name": "h264", "width": 1280, "height": 720},
            {"codec_type": "audio", "codec_name": "aac"},
        ],
        "format": {"duration": "12.5", "format_name": "mp4"},
    })

    assert info.size == (1280, 720)
    assert info.duration_seconds == 12.5
    assert info.has_audio
    assert info.codec == "h264"


def test_parse_probe_output_defaults():
    info = parse_probe_output("clip.mp4", {})

    assert info.size == (1920, 1080)
    assert info.duration_seconds == 0
    assert not info.has_audio


def test_probe_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        probe_media(tmp_path / "missing.mp4")


def _plan(**kwargs):
    return RenderPlan(filter_graph="[0:v]null[outv];[0:a]anull[outa]", output_map=["[outv]", "[outa]"], **kwargs)


def test_encode_args_for_plain_plan():
    args = build_encode_args("in.mp4", _plan(), [], "out.mp4", RenderConfig())

    assert args[:2] == ["-i", "in.mp4"]
    assert args[args.index("-filter_complex") + 1] == "[0:v]null[outv];[0:a]anull[outa]"
    assert args.count("-map") == 2
    assert args[args.index("-preset") + 1] == "veryfast"
    assert "-t" not in args
    assert args[-1] == "out.mp4"


def test_encode_args_with_extra_inputs():
    plan = _plan(
        inputs=[
            PlanInput(index=1, kind="text", text="hi", loop_seconds=11),
            PlanInput(index=2, kind="bgm", keywords="calm"),
        ],
        duration_hint=10.0,
    )

    args = build_encode_args("in.mp4", plan, ["t.png", "bgm.mp3"], "out.mp4", RenderConfig(video_preset=None))

    assert args[:12] == [
        "-i", "in.mp4",
        "-loop", "1", "-t", "11", "-i", "t.png",
        "-stream_loop", "-1", "-i", "bgm.mp3",
    ]
    assert args[-3:] == ["-t", "10.000", "out.mp4"]
    assert "-preset" not in args


def test_encode_args_reject_input_mismatch():
    plan = _plan(inputs=[PlanInput(index=1, kind="text", text="hi", loop_seconds=3)])

    with pytest.raises(ValueError):
        build_encode_args("in.mp4", plan, [], "out.mp4", RenderConfig())


def test_run_ffmpeg_returns_failures(fake_ffmpeg):
    fake_ffmpeg.returncode = 1
    fake_ffmpeg.stderr = "boom"

    result = run_ffmpeg(["-i", "in.mp4", "out.mp4"])

    assert result.returncode == 1
    assert result.stderr == "boom"
    assert fake_ffmpeg.last_args[:2] == ["ffmpeg", "-y"]
