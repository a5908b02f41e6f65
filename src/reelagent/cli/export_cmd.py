"""reelagent export — render the edited video."""

from __future__ import annotations

from pathlib import Path

import click

from reelagent.cli.options import open_project, project_option
from reelagent.utils.progress import log_error


@click.command()
@project_option
@click.option(
    "--output", "-o",
    required=True,
    type=click.Path(dir_okay=False),
    help="Output video path",
)
@click.option(
    "--bgm-library",
    default=None,
    type=click.Path(exists=True, file_okay=False),
    help="Directory of music files for bgm edits",
)
def export_cmd(project: str, output: str, bgm_library: str | None) -> None:
    """Render the edited video through FFmpeg.

    Exits 1 when the encoder fails and 2 when there is nothing to render.
    """
    from reelagent.pipeline.orchestrator import export_project

    project_path, proj = open_project(project)

    try:
        result = export_project(
            proj,
            project_path.parent,
            Path(output).resolve(),
            bgm_library=Path(bgm_library) if bgm_library else None,
        )
    except Exception as e:
        log_error(f"Export failed: {e}")
        raise SystemExit(1)

    if result.status == "nothing_to_render":
        raise SystemExit(2)
    if not result.ok:
        log_error(f"FFmpeg exited with code {result.exit_code}")
        if result.stderr.strip():
            log_error(result.stderr.strip().splitlines()[-1])
        raise SystemExit(1)
