"""FFmpeg command builder and runner."""

from __future__ import annotations

import subprocess
from pathlib import Path

from reelagent.models.config import RenderConfig
from reelagent.models.plan import RenderPlan


def run_ffmpeg(args: list[str]) -> subprocess.CompletedProcess:
    """Run an FFmpeg command with standard options.

    The exit status is left for the caller to inspect; encoder failures are
    reported as values, not raised.
    """
    cmd = ["ffmpeg", "-y", "-hide_banner", "-loglevel", "error"] + args
    return subprocess.run(cmd, capture_output=True, text=True)


def build_encode_args(
    source_path: Path | str,
    plan: RenderPlan,
    extra_input_paths: list[Path | str],
    output_path: Path | str,
    config: RenderConfig,
) -> list[str]:
    """Build the FFmpeg argument list for a render plan.

    ``extra_input_paths`` must line up with ``plan.inputs`` (input 1, 2, ...).
    """
    if len(extra_input_paths) != len(plan.inputs):
        raise ValueError(
            f"Plan expects {len(plan.inputs)} extra input(s), got {len(extra_input_paths)}"
        )

    args = ["-i", str(source_path)]
    for plan_input, path in zip(plan.inputs, extra_input_paths):
        if plan_input.kind == "text":
            args.extend(["-loop", "1", "-t", str(plan_input.loop_seconds), "-i", str(path)])
        else:
            args.extend(["-stream_loop", "-1", "-i", str(path)])

    args.extend(["-filter_complex", plan.filter_graph])
    for label in plan.output_map:
        args.extend(["-map", label])

    args.extend(["-c:v", config.video_codec])
    if config.video_preset:
        args.extend(["-preset", config.video_preset])
    args.extend([
        "-b:v", config.video_bitrate,
        "-c:a", config.audio_codec,
        "-b:a", config.audio_bitrate,
    ])
    if plan.duration_hint is not None:
        # Looping inputs would otherwise run the output past the timeline end
        args.extend(["-t", f"{plan.duration_hint:.3f}"])
    args.append(str(output_path))
    return args


def encode(
    source_path: Path | str,
    plan: RenderPlan,
    extra_input_paths: list[Path | str],
    output_path: Path | str,
    config: RenderConfig,
) -> subprocess.CompletedProcess:
    """Execute a render plan as a single FFmpeg subprocess."""
    args = build_encode_args(source_path, plan, extra_input_paths, output_path, config)
    return run_ffmpeg(args)
