"""Project pipeline: select → compile → plan → export."""

from __future__ import annotations

import time
from pathlib import Path

from reelagent.models.plan import ExportResult, RenderPlan
from reelagent.models.project import Project
from reelagent.models.request import AgentResult, RequestContext
from reelagent.models.timeline import CandidateTimeline, RenderTimeline
from reelagent.utils.io import load_model, save_model
from reelagent.utils.progress import log_step, show_stage_summary


def load_project(project_path: Path) -> Project:
    """Load and validate a project manifest (YAML, or JSON by suffix)."""
    return load_model(project_path, Project)


def save_project(project_path: Path, project: Project) -> None:
    """Save the project manifest atomically."""
    save_model(project_path, project)


def source_path(project: Project, project_root: Path) -> Path:
    path = Path(project.source.path)
    return path if path.is_absolute() else project_root / path


def request_context(project: Project, request: str = "") -> RequestContext:
    return RequestContext(
        duration_seconds=project.source.duration_seconds,
        existing_segments=project.segments,
        request=request,
    )


def apply_agent_result(project: Project, result: AgentResult, *, replace: bool = False) -> Project:
    """Merge an agent's edits (and revised segments, if any) into a new project."""
    edits = list(result.edits) if replace else project.edits + list(result.edits)
    segments = result.segments if result.segments else project.segments
    log_step("Edits", f"{len(result.edits)} new, {len(edits)} total")
    return project.model_copy(update={"edits": edits, "segments": segments})


def base_timeline(project: Project) -> CandidateTimeline:
    """Candidate timeline from segment selection, or an empty one."""
    if not project.segments:
        return CandidateTimeline()

    from reelagent.selection.scoring import build_timeline

    return build_timeline(project.segments, project.intent, project.source.duration_seconds or None)


def compile_project(project: Project) -> RenderTimeline:
    """Compile the project's edits into a fresh render timeline."""
    from reelagent.timeline.compiler import apply_edits_to_timeline

    timeline = apply_edits_to_timeline(
        base_timeline(project),
        project.edits,
        project.source.duration_seconds,
    )
    log_step(
        "Compile",
        f"{len(timeline.clips)} clip(s), {timeline.total_timeline_duration:.2f}s, "
        f"{len(timeline.text_edits)} text, {len(timeline.fade_edits)} fade",
    )
    return timeline


def plan_project(project: Project) -> RenderPlan:
    from reelagent.render.plan import build_render_plan

    return build_render_plan(compile_project(project))


def export_project(
    project: Project,
    project_root: Path,
    output_path: Path,
    *,
    bgm_library: Path | None = None,
    request_id: str | None = None,
) -> ExportResult:
    """Compile and export a project."""
    from reelagent.render.bgm import LocalLibraryProvider
    from reelagent.render.export import export_video

    started = time.monotonic()
    config = project.config.render
    library = bgm_library or (Path(config.bgm_library_dir) if config.bgm_library_dir else None)
    provider = LocalLibraryProvider(library) if library else None

    timeline = compile_project(project)
    result = export_video(
        source_path(project, project_root),
        timeline,
        output_path,
        config=config,
        bgm_provider=provider,
        request_id=request_id,
    )

    if result.ok:
        show_stage_summary(
            "Export",
            time.monotonic() - started,
            {
                "Output": result.output_path,
                "Clips": len(timeline.clips),
                "Length": f"{timeline.total_timeline_duration:.2f}s",
            },
        )
    return result
