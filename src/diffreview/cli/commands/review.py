from __future__ import annotations

from pathlib import Path

import click

from diffreview.agents.code_reviewer import CodeReviewerAgent
from diffreview.cli.common import cli_error_handler
from diffreview.cli.console import err_console
from diffreview.cli.context import CLIContext, ExitCode, async_command
from diffreview.cli.helpers import format_review_text
from diffreview.cli.output import format_json
from diffreview.logging import bind_context, get_logger
from diffreview.models.review import ReviewContext
from diffreview.tools.review import verify_review_prerequisites


@click.command()
@click.argument(
    "root_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
)
@click.option(
    "--commit-message/--no-commit-message",
    default=None,
    help="Generate a conventional commit message (default from config).",
)
@click.option(
    "--report/--no-report",
    default=None,
    help="Write the review to a markdown file (default from config).",
)
@click.option(
    "--filename",
    default=None,
    help="Report filename, relative to ROOT_DIR.",
)
@click.option(
    "-o",
    "--output",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format.",
)
@click.pass_context
@async_command
async def review(
    ctx: click.Context,
    root_dir: Path,
    commit_message: bool | None,
    report: bool | None,
    filename: str | None,
    output: str,
) -> None:
    """Review the uncommitted changes in ROOT_DIR with Claude.

    The agent reads the changes and their metrics, writes a review, and
    optionally suggests a conventional commit message and saves the review
    as markdown.

    Examples:
        diffreview review
        diffreview review ../service --no-report
        diffreview review --filename REVIEW.md -o json
    """
    cli_ctx: CLIContext = ctx.obj["cli_ctx"]
    review_config = cli_ctx.config.review
    model_config = cli_ctx.config.model
    logger = get_logger(__name__)

    with cli_error_handler():
        cwd = root_dir.resolve()
        bind_context(root_dir=str(cwd))
        await verify_review_prerequisites(cwd)

        context = ReviewContext(
            cwd=cwd,
            commit_message=(
                review_config.commit_message
                if commit_message is None
                else commit_message
            ),
            write_report=review_config.write_report if report is None else report,
            report_filename=filename or review_config.report_filename,
        )
        agent = CodeReviewerAgent(
            model=model_config.model_id,
            max_tokens=model_config.max_tokens,
            temperature=model_config.temperature,
            exclude_paths=review_config.exclude_paths,
        )

        if not cli_ctx.quiet:
            err_console.print(f"Reviewing changes in [bold]{cwd}[/bold]...")
        logger.info("review_command", cwd=str(cwd), model=agent.model)

        result = await agent.execute(context)

        if output == "json":
            click.echo(format_json(result.to_dict()))
        else:
            click.echo(format_review_text(result))

        raise SystemExit(ExitCode.SUCCESS if result.success else ExitCode.FAILURE)
