"""Shared CLI options and helpers."""

from __future__ import annotations

from pathlib import Path

import click

from reelagent.models.project import Project
from reelagent.utils.progress import log_error

project_option = click.option(
    "--project", "-p",
    default="project.yaml",
    type=click.Path(),
    help="Path to project.yaml",
)


def open_project(project: str) -> tuple[Path, Project]:
    """Resolve and load a project manifest, exiting on failure."""
    from reelagent.pipeline.orchestrator import load_project

    project_path = Path(project).resolve()
    if not project_path.exists():
        log_error(f"Project not found: {project_path}")
        raise SystemExit(1)
    try:
        return project_path, load_project(project_path)
    except Exception as e:
        log_error(f"Invalid project {project_path.name}: {e}")
        raise SystemExit(1)
