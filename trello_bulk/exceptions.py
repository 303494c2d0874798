"""Custom exception classes for trello_bulk.

API errors are raised by the Trello client; configuration errors are raised
before any card is touched.
"""

from __future__ import annotations


class TrelloAPIError(Exception):
    """Base exception for Trello API errors"""

    def __init__(
        self, message: str, status_code: int | None = None, response_text: str | None = None
    ):
        self.status_code = status_code
        self.response_text = response_text
        super().__init__(message)


class TrelloAuthenticationError(TrelloAPIError):
    """Raised when the session is invalid or expired (401/403)"""

    pass


class TrelloNotFoundError(TrelloAPIError):
    """Raised when a board or card is not found (404)"""

    pass


class TrelloRateLimitError(TrelloAPIError):
    """Raised when Trello rejects a request with 429"""

    pass


class TrelloServerError(TrelloAPIError):
    """Raised when Trello's servers return an error (500/502/503/504)"""

    pass


class TrelloConfigurationError(ValueError):
    """Raised when a run cannot start because its inputs are unusable.

    Covers a missing session token, a missing board id, an empty label list,
    a missing target board and similar preconditions. Nothing has been written
    to Trello when this is raised.
    """

    pass


class LabelResolutionError(TrelloConfigurationError):
    """Raised when none of the requested label names exist on the board.

    Attributes:
        missing: The label names that could not be matched

    Example:
        >>> try:
        ...     bulk_add_labels(client, config)
        ... except LabelResolutionError as e:
        ...     print(f"Unknown labels: {', '.join(e.missing)}")
    """

    def __init__(self, message: str, missing: list[str] | None = None):
        self.missing = list(missing or [])
        super().__init__(message)
