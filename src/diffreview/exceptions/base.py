from __future__ import annotations


class DiffReviewError(Exception):
    """Base exception class for all diffreview errors.

    All custom exceptions in diffreview inherit from this class, so the CLI
    boundary can catch them in one place while system exceptions propagate
    naturally.

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            result = await calculate_code_metrics(Path("."))
        except DiffReviewError as e:
            logger.error("metrics_failed", error=e.message)
            sys.exit(1)
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the DiffReviewError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
