"""reelagent init — scaffold a project for a source video."""

from __future__ import annotations

from pathlib import Path

import click

from reelagent.models.intent import Intent
from reelagent.models.project import Project, SourceMedia
from reelagent.utils.progress import log_error, log_success


@click.command()
@click.option(
    "--source", "-s",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Source video file",
)
@click.option("--target", default=None, type=float, help="Target duration in seconds (default: whole video)")
@click.option("--style", default="balanced", type=click.Choice(["fast", "slow", "balanced"]))
@click.option("--focus", default="none", type=click.Choice(["none", "face", "action"]))
@click.option("--template", default="general", type=click.Choice(["general", "vlog", "sport", "story"]))
@click.option("--keep-end", is_flag=True, help="Always keep the last segment")
@click.option(
    "--output", "-o",
    default="project.yaml",
    type=click.Path(),
    help="Where to write the project manifest",
)
def init_cmd(
    source: str,
    target: float | None,
    style: str,
    focus: str,
    template: str,
    keep_end: bool,
    output: str,
) -> None:
    """Probe a video and write a project manifest with placeholder segments."""
    from reelagent.analysis.features import synthesize_segments
    from reelagent.pipeline.orchestrator import save_project
    from reelagent.utils.ffprobe import probe_media

    source_path = Path(source).resolve()
    project_path = Path(output).resolve()

    try:
        info = probe_media(source_path)
    except Exception as e:
        log_error(f"Could not probe {source_path.name}: {e}")
        raise SystemExit(1)

    if info.duration_seconds <= 0:
        log_error(f"{source_path.name} reports no duration")
        raise SystemExit(1)

    features = synthesize_segments(
        source_path.name,
        source_path.stat().st_size,
        info.duration_seconds,
    )

    project = Project(
        source=SourceMedia(
            path=str(source_path),
            duration_seconds=info.duration_seconds,
            width=info.width,
            height=info.height,
        ),
        intent=Intent(
            target_duration=target or info.duration_seconds,
            style=style,
            focus=focus,
            template=template,
            keep_end=keep_end,
        ),
        segments=features.segments,
    )
    save_project(project_path, project)

    log_success(f"Project initialized: {project_path}")
    log_success(
        f"Source: {source_path.name} ({info.duration_seconds:.1f}s, "
        f"{info.width}x{info.height}), {features.segment_count} segments"
    )
    click.echo(f"\nNext: reelagent edit -p {project_path.name} --edit '<json>'")
