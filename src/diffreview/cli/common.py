from __future__ import annotations

import contextlib
from collections.abc import Generator

import click

from diffreview.cli.context import ExitCode
from diffreview.cli.output import format_error
from diffreview.exceptions import (
    AgentError,
    ConfigError,
    DiffReviewError,
    GitError,
    NotARepositoryError,
)
from diffreview.logging import get_logger


@contextlib.contextmanager
def cli_error_handler() -> Generator[None, None, None]:
    """Context manager for common CLI error handling.

    - KeyboardInterrupt: Exit with code 130
    - GitError: Format error with operation details
    - AgentError: Format error with agent context
    - DiffReviewError: Format error with message
    - Generic exceptions: Log and format error

    Example:
        >>> with cli_error_handler():
        >>>     result = await calculate_code_metrics(root_dir)
    """
    logger = get_logger(__name__)

    try:
        yield
    except KeyboardInterrupt:
        click.echo("\n\nInterrupted by user.", err=True)
        raise SystemExit(ExitCode.INTERRUPTED) from None
    except NotARepositoryError as e:
        error_msg = format_error(
            e.message,
            suggestion="Run diffreview inside a git working tree",
        )
        click.echo(error_msg, err=True)
        raise SystemExit(ExitCode.FAILURE) from e
    except GitError as e:
        error_msg = format_error(
            e.message,
            details=[f"Operation: {e.operation}"] if e.operation else None,
        )
        click.echo(error_msg, err=True)
        raise SystemExit(ExitCode.FAILURE) from e
    except AgentError as e:
        details = [f"Agent: {e.agent_name}"] if e.agent_name else []
        if e.error_code:
            details.append(f"Code: {e.error_code}")
        error_msg = format_error(e.message, details=details or None)
        click.echo(error_msg, err=True)
        raise SystemExit(ExitCode.FAILURE) from e
    except ConfigError as e:
        details = [f"Field: {e.field}"] if e.field else None
        click.echo(format_error(e.message, details=details), err=True)
        raise SystemExit(ExitCode.FAILURE) from e
    except DiffReviewError as e:
        error_msg = format_error(e.message)
        click.echo(error_msg, err=True)
        raise SystemExit(ExitCode.FAILURE) from e
    except Exception as e:
        logger.exception("unexpected_command_error")
        click.echo(f"Error: {e!s}", err=True)
        raise SystemExit(ExitCode.FAILURE) from e
