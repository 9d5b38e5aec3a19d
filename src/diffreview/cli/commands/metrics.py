from __future__ import annotations

from pathlib import Path

import click

from diffreview.cli.common import cli_error_handler
from diffreview.cli.context import CLIContext, ExitCode, async_command
from diffreview.cli.helpers import format_metrics_markdown, format_metrics_text
from diffreview.cli.output import OutputFormat, format_json
from diffreview.logging import bind_context, get_logger
from diffreview.metrics import calculate_code_metrics


@click.command()
@click.argument(
    "root_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
)
@click.option(
    "--exclude",
    "exclude",
    multiple=True,
    help="Path to skip (repeatable). Replaces the configured exclusions.",
)
@click.option(
    "-o",
    "--output",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.TEXT.value,
    help="Output format.",
)
@click.pass_context
@async_command
async def metrics(
    ctx: click.Context,
    root_dir: Path,
    exclude: tuple[str, ...],
    output: str,
) -> None:
    """Compute metrics for the uncommitted changes in ROOT_DIR.

    Reports lines added and removed, files changed, an estimated complexity
    score and lines matching security indicator patterns.

    Examples:
        diffreview metrics
        diffreview metrics ../service --exclude package-lock.json
        diffreview metrics -o json
    """
    cli_ctx: CLIContext = ctx.obj["cli_ctx"]
    logger = get_logger(__name__)
    exclude_paths = exclude or tuple(cli_ctx.config.review.exclude_paths)

    with cli_error_handler():
        bind_context(root_dir=str(root_dir))
        logger.info("metrics_command", root_dir=str(root_dir), exclude=exclude_paths)
        result = await calculate_code_metrics(root_dir, exclude_paths)

        output_format = OutputFormat(output)
        if output_format == OutputFormat.JSON:
            click.echo(format_json(result.model_dump(mode="json", by_alias=True)))
        elif output_format == OutputFormat.MARKDOWN:
            click.echo(format_metrics_markdown(result))
        else:
            click.echo(format_metrics_text(result))

        raise SystemExit(ExitCode.SUCCESS)
