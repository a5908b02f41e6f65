"""Root CLI group for ReelAgent."""

from __future__ import annotations

import click

from reelagent import __version__


@click.group()
@click.version_option(version=__version__, prog_name="reelagent")
def cli() -> None:
    """ReelAgent — compile edit requests into an edited video."""


# Import and register subcommands
from reelagent.cli.init_cmd import init_cmd  # noqa: E402
from reelagent.cli.edit_cmd import edit_cmd  # noqa: E402
from reelagent.cli.timeline_cmd import timeline_cmd  # noqa: E402
from reelagent.cli.plan_cmd import plan_cmd  # noqa: E402
from reelagent.cli.export_cmd import export_cmd  # noqa: E402

cli.add_command(init_cmd, "init")
cli.add_command(edit_cmd, "edit")
cli.add_command(timeline_cmd, "timeline")
cli.add_command(plan_cmd, "plan")
cli.add_command(export_cmd, "export")
