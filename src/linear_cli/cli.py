"""CLI for the Linear analytics client.

Reads LINEAR_API_KEY from the environment; see linear_cli.config for the
other settings.

Usage:
    linear analytics report                           # Workspace summary
    linear analytics report --format=json             # ... as JSON
    linear analytics team-workload "Platform"         # One team, past 6 months
    linear analytics engineer-workload --period=month # All teams, current month
    linear teams list                                 # List teams
    linear projects list --team "Platform"            # Projects of a team
    linear projects view <project-id>                 # One project and its issues
    linear teams view PLT                             # Members, states, labels
    linear issues list --team PLT --limit 10          # Up to 10 issues of a team
    linear issues view ENG-123                        # One issue with comments
"""

from __future__ import annotations

from pathlib import Path

import click

from linear_cli import __version__
from linear_cli.cli_commands import analytics as analytics_commands
from linear_cli.cli_commands import issues as issues_commands
from linear_cli.cli_commands import workspace as workspace_commands
from linear_cli.config import ConfigError, load_config
from linear_cli.logging import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="linear")
@click.option(
    "--allow-mutations",
    is_flag=True,
    default=False,
    help="Disable read-only safe mode (allows GraphQL mutations)",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Write JSON logs to this directory (default: LINEAR_CLI_LOG_DIR)",
)
@click.pass_context
def cli(ctx: click.Context, allow_mutations: bool, log_dir: Path | None) -> None:
    """Linear CLI: analytics, reporting and read-only browsing for Linear workspaces."""
    ctx.ensure_object(dict)
    try:
        config = load_config()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    if allow_mutations:
        config = config.with_overrides(safe_mode=False)
    if log_dir is not None:
        config = config.with_overrides(log_dir=log_dir)
    if config.log_dir is not None:
        setup_logging(config.log_dir)
    ctx.obj["config"] = config


analytics_commands.register(cli)
issues_commands.register(cli)
workspace_commands.register(cli)


if __name__ == "__main__":
    cli()
