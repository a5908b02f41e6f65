"""reelagent plan — print the FFmpeg filter graph for a project."""

from __future__ import annotations

import click

from reelagent.cli.options import open_project, project_option
from reelagent.utils.progress import log_warning


@click.command()
@project_option
def plan_cmd(project: str) -> None:
    """Print the render plan's filter graph, one stage per line."""
    from reelagent.pipeline.orchestrator import plan_project

    _, proj = open_project(project)
    plan = plan_project(proj)

    if plan.empty:
        log_warning("Nothing to render: the timeline has no clips")
        raise SystemExit(2)

    for stage in plan.filter_graph.split(";"):
        click.echo(stage)
    click.echo(f"\nmap: {' '.join(plan.output_map)}")
    for plan_input in plan.inputs:
        label = plan_input.text if plan_input.kind == "text" else plan_input.keywords
        click.echo(f"input {plan_input.index}: {plan_input.kind} {label!r}")
    if plan.duration_hint is not None:
        click.echo(f"duration cap: {plan.duration_hint:.3f}s")
