"""Export — run a render timeline through FFmpeg with guaranteed cleanup."""

from __future__ import annotations

import shutil
import tempfile
import time
import uuid
from pathlib import Path

from reelagent.models.config import RenderConfig
from reelagent.models.plan import ExportResult, RenderPlan
from reelagent.models.timeline import RenderTimeline
from reelagent.render.bgm import BgmProvider, BgmTrack
from reelagent.render.overlay import render_text_overlay
from reelagent.render.plan import build_render_plan
from reelagent.utils.ffmpeg import encode
from reelagent.utils.ffprobe import probe_media
from reelagent.utils.progress import (
    format_seconds,
    log_error,
    log_step,
    log_success,
    log_warning,
)

STDERR_TAIL_CHARS = 2000


def new_request_id() -> str:
    return f"export-{uuid.uuid4().hex[:12]}"


def _resolve_bgm(
    timeline: RenderTimeline,
    provider: BgmProvider | None,
    workdir: Path,
    request_id: str,
) -> BgmTrack | None:
    if not timeline.bgm_edits:
        return None
    edit = timeline.bgm_edits[-1]
    if provider is None:
        log_warning(
            f"No music provider configured — skipping bgm '{edit.keywords}'",
            request_id=request_id,
        )
        return None
    track = provider.fetch(edit.keywords, workdir)
    if track is None:
        log_warning(f"No music found for '{edit.keywords}' — skipping bgm", request_id=request_id)
    return track


def _materialize_inputs(
    plan: RenderPlan,
    input_path: Path,
    workdir: Path,
    bgm_track: BgmTrack | None,
    config: RenderConfig,
) -> list[Path]:
    """Create every extra input on disk, in plan input order."""
    paths: list[Path] = []
    size = probe_media(input_path).size if plan.text_inputs else None

    for plan_input in plan.inputs:
        if plan_input.kind == "text":
            width, height = size
            paths.append(render_text_overlay(
                plan_input.text or "",
                plan_input.position or "bottom",
                width,
                height,
                workdir / f"text{plan_input.index}.png",
                font_path=config.font_path,
                text_scale=config.text_scale,
            ))
        else:
            paths.append(bgm_track.path)
    return paths


def export_video(
    source_path: Path | str,
    timeline: RenderTimeline,
    output_path: Path | str,
    *,
    config: RenderConfig | None = None,
    bgm_provider: BgmProvider | None = None,
    request_id: str | None = None,
) -> ExportResult:
    """Render a timeline to ``output_path`` with one FFmpeg subprocess.

    All working files (input copy, overlay images, music, encoder output)
    live in a temporary directory private to this request and are removed
    on success, failure and exceptions alike. Encoder failures come back as
    a ``render_failed`` result and are not retried.
    """
    config = config or RenderConfig()
    request_id = request_id or new_request_id()
    source_path = Path(source_path)
    output_path = Path(output_path)
    started = time.monotonic()

    if not source_path.exists():
        raise FileNotFoundError(f"Source video not found: {source_path}")

    plan = build_render_plan(timeline)
    if plan.empty:
        log_warning("Nothing to render: the timeline has no clips", request_id=request_id)
        return ExportResult(request_id=request_id, status="nothing_to_render")

    with tempfile.TemporaryDirectory(prefix=f"{request_id}-", dir=config.temp_dir) as tmp:
        workdir = Path(tmp)
        input_copy = workdir / f"input{source_path.suffix}"
        shutil.copy2(source_path, input_copy)

        bgm_track = _resolve_bgm(timeline, bgm_provider, workdir, request_id)
        if timeline.bgm_edits and bgm_track is None:
            plan = build_render_plan(timeline, include_bgm=False)

        # Every overlay must exist before the encoder starts
        extra_paths = _materialize_inputs(plan, input_copy, workdir, bgm_track, config)
        tmp_output = workdir / f"output{output_path.suffix or '.mp4'}"

        log_step(
            "Export",
            f"{len(timeline.clips)} clip(s), {len(plan.inputs)} extra input(s), "
            f"{timeline.total_timeline_duration:.2f}s → {output_path.name}",
            request_id=request_id,
        )
        result = encode(input_copy, plan, extra_paths, tmp_output, config)
        elapsed = time.monotonic() - started

        if result.returncode != 0:
            log_error(f"Render failed (rc={result.returncode})", request_id=request_id)
            return ExportResult(
                request_id=request_id,
                status="render_failed",
                exit_code=result.returncode,
                stderr=(result.stderr or "")[-STDERR_TAIL_CHARS:],
                elapsed_seconds=elapsed,
            )

        output_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(tmp_output), output_path)

    log_success(f"Rendered {output_path} in {format_seconds(elapsed)}", request_id=request_id)
    return ExportResult(
        request_id=request_id,
        status="success",
        output_path=str(output_path),
        exit_code=0,
        elapsed_seconds=elapsed,
    )
