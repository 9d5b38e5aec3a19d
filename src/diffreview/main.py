"""CLI entry point for diffreview."""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

# Load .env before any code reads environment variables
load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

from diffreview import __version__  # noqa: E402
from diffreview.cli.commands.metrics import metrics  # noqa: E402
from diffreview.cli.commands.review import review  # noqa: E402
from diffreview.cli.context import CLIContext, ExitCode  # noqa: E402
from diffreview.config import load_config  # noqa: E402
from diffreview.exceptions import ConfigError  # noqa: E402
from diffreview.logging import configure_logging, level_for_verbosity  # noqa: E402


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="diffreview")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=False, path_type=str),
    default=None,
    help="Path to config file (overrides ./diffreview.yaml).",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (-v for INFO, -vv for DEBUG).",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    default=False,
    help="Suppress non-essential output (ERROR level only).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: str | None,
    verbose: int,
    quiet: bool,
) -> None:
    """diffreview - metrics and AI review for uncommitted git changes."""
    ctx.ensure_object(dict)

    config_path = Path(config_file) if config_file else None
    try:
        config = load_config(config_path)
    except ConfigError as e:
        # Logging is not configured yet
        error_parts = [f"Error: {e.message}"]
        if e.field:
            error_parts.append(f"  Field: {e.field}")
        if e.value is not None:
            error_parts.append(f"  Value: {e.value}")
        click.echo("\n".join(error_parts), err=True)
        ctx.exit(ExitCode.FAILURE)

    ctx.obj["cli_ctx"] = CLIContext(
        config=config,
        config_path=config_path,
        verbosity=verbose,
        quiet=quiet,
    )

    configure_logging(
        level=level_for_verbosity(
            quiet=quiet,
            verbose=verbose,
            configured=config.verbosity,
        )
    )

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(metrics)
cli.add_command(review)

if __name__ == "__main__":
    cli()
