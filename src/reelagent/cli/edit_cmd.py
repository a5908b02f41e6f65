"""reelagent edit — add edit operations to a project."""

from __future__ import annotations

import json

import click

from reelagent.cli.options import open_project, project_option
from reelagent.models.request import AgentResult
from reelagent.utils.progress import log_error, log_success


@click.command()
@project_option
@click.option(
    "--from-agent", "agent_file",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Saved agent reply (JSON with segments/edits)",
)
@click.option(
    "--edit", "edit_json",
    multiple=True,
    help='Edit operation as JSON, e.g. \'{"type": "delete", "start": 10, "end": 20}\'',
)
@click.option("--replace", is_flag=True, help="Replace existing edits instead of appending")
def edit_cmd(project: str, agent_file: str | None, edit_json: tuple[str, ...], replace: bool) -> None:
    """Add edits from an agent reply and/or the command line."""
    from reelagent.analysis.providers import ResponseFileProvider
    from reelagent.pipeline.orchestrator import (
        apply_agent_result,
        request_context,
        save_project,
    )

    if not agent_file and not edit_json:
        log_error("Nothing to add: pass --from-agent and/or --edit")
        raise SystemExit(1)

    project_path, proj = open_project(project)

    result = AgentResult()
    if agent_file:
        try:
            result = ResponseFileProvider(agent_file).analyze(request_context(proj))
        except Exception as e:
            log_error(f"Could not read agent reply: {e}")
            raise SystemExit(1)

    edits = list(result.edits)
    for raw in edit_json:
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as e:
            log_error(f"Invalid edit JSON {raw!r}: {e}")
            raise SystemExit(1)
        edits.extend(parsed if isinstance(parsed, list) else [parsed])

    updated = apply_agent_result(proj, result.model_copy(update={"edits": edits}), replace=replace)
    save_project(project_path, updated)
    log_success(f"{len(updated.edits)} edit(s) in {project_path.name}")
