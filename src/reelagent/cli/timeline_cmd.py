"""reelagent timeline — compile and show the render timeline."""

from __future__ import annotations

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from reelagent.cli.options import open_project, project_option
from reelagent.models.timeline import RenderTimeline

console = Console()


def _show(timeline: RenderTimeline) -> None:
    table = Table(title="Render Timeline", show_lines=False)
    table.add_column("Clip", style="bold")
    table.add_column("Media", justify="right")
    table.add_column("Rate", justify="right")
    table.add_column("Timeline", justify="right")
    table.add_column("Volume", justify="right")

    for clip in timeline.clips:
        table.add_row(
            clip.id,
            f"{clip.start:.2f}–{clip.end:.2f}",
            f"{clip.playback_rate:g}×",
            f"{clip.timeline_start:.2f}–{clip.timeline_end:.2f}",
            f"{clip.volume:.2f}",
        )

    console.print(table)
    for text in timeline.text_edits:
        console.print(
            f"[yellow]text[/yellow] '{text.text}' ({text.position}) "
            f"{text.timeline_start:.2f}–{text.timeline_end:.2f}"
        )
    for fade in timeline.fade_edits:
        console.print(
            f"[magenta]fade {fade.direction}[/magenta] "
            f"{fade.timeline_start:.2f}–{fade.timeline_end:.2f}"
        )
    for bgm in timeline.bgm_edits:
        console.print(f"[cyan]bgm[/cyan] '{bgm.keywords}' @ {bgm.volume:.2f}")
    console.print(f"\nTotal: [bold]{timeline.total_timeline_duration:.2f}s[/bold]")


@click.command()
@project_option
@click.option("--json", "as_json", is_flag=True, help="Print the timeline as JSON")
@click.option(
    "--otio", "otio_dir",
    default=None,
    type=click.Path(file_okay=False),
    help="Also write timeline.json and timeline.otio into this directory",
)
def timeline_cmd(project: str, as_json: bool, otio_dir: str | None) -> None:
    """Compile the project's edits and show the resulting timeline."""
    from reelagent.pipeline.orchestrator import compile_project, source_path

    project_path, proj = open_project(project)
    timeline = compile_project(proj)

    if as_json:
        click.echo(json.dumps(timeline.model_dump(mode="json"), indent=2, ensure_ascii=False))
    else:
        _show(timeline)

    if otio_dir:
        from reelagent.timeline.interchange import write_timeline_files

        write_timeline_files(
            timeline,
            Path(otio_dir),
            name=project_path.stem,
            source_url=str(source_path(proj, project_path.parent)),
        )
