"""Trello web API client authenticated with a browser session."""

from __future__ import annotations

import logging
import re
from typing import Any, cast

import requests

from trello_bulk.exceptions import (
    TrelloAPIError,
    TrelloAuthenticationError,
    TrelloConfigurationError,
    TrelloNotFoundError,
    TrelloRateLimitError,
    TrelloServerError,
)
from trello_bulk.models import DEFAULT_KEEP_FROM_SOURCE, Board
from trello_bulk.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

# Projection used by the single wide board read
BOARD_QUERY = {
    "fields": "id,name",
    "cards": "visible",
    "card_fields": "id,name,idList,idLabels,labels,closed,pos,shortLink",
    "labels": "all",
    "lists": "open",
    "list_fields": "id,name,pos,closed",
}


class TrelloClient:
    """Read boards and write cards through the Trello web API

    Authentication uses the logged-in browser session rather than an API key:
    the ``dsc`` cookie value is sent both as a cookie and inside every write
    body, the way trello.com itself does. Any other session cookies (usually
    ``token``) can be passed through ``cookies``.

    No request is retried. A failed board read is fatal to the caller; a
    failed card write is reported to whoever called the write method.
    """

    def __init__(
        self,
        dsc: str,
        cookies: dict[str, str] | None = None,
        base_url: str = "https://trello.com/1",
        timeout: float | None = None,
        verify_ssl: bool = True,
        requests_per_second: float | None = None,
    ):
        if not dsc or not dsc.strip():
            raise TrelloConfigurationError(
                "DSC session token is missing. Log in to Trello in your browser and copy "
                "the value of the 'dsc' cookie into TRELLO_DSC."
            )

        self.dsc = dsc.strip()
        self.cookies = dict(cookies or {})
        self.cookies["dsc"] = self.dsc
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.verify_ssl = verify_ssl

        # Optional pacing; None sends requests as fast as the run produces them
        self.rate_limiter: RateLimiter | None = (
            RateLimiter(requests_per_second) if requests_per_second else None
        )

    @staticmethod
    def parse_board_url(url: str) -> str:
        """Extract the board short id from a Trello board URL

        Supports formats:
        - https://trello.com/b/Bm0nnz1R/board-name
        - https://trello.com/b/Bm0nnz1R
        - trello.com/b/Bm0nnz1R/board-name

        Raises:
            ValueError: If URL format is invalid or board ID cannot be extracted
        """
        if not url:
            raise ValueError("URL cannot be empty")

        match = re.search(r"trello\.com/b/([a-zA-Z0-9]+)", url)
        if match:
            return match.group(1)

        raise ValueError(f"Could not extract board ID from URL: {url}")

    def _request(
        self,
        method: str,
        endpoint: str,
        params: dict | None = None,
        body: dict | None = None,
    ) -> Any:
        """Send one request and translate HTTP failures into TrelloAPIError subclasses"""
        if self.rate_limiter is not None:
            self.rate_limiter.acquire()

        url = f"{self.base_url}/{endpoint}"
        json_body = None
        if body is not None:
            json_body = {"dsc": self.dsc, **body}

        logger.debug("%s %s", method, url)

        try:
            response = requests.request(
                method,
                url,
                params=params,
                json=json_body,
                cookies=self.cookies,
                timeout=self.timeout,
                verify=self.verify_ssl,
            )
            response.raise_for_status()
        except requests.HTTPError as e:
            raise self._translate_http_error(e, method, endpoint) from e
        except requests.RequestException as e:
            raise TrelloAPIError(
                f"Network error during {method} {endpoint}: {e}\n"
                "Check your internet connection and try again.",
                status_code=None,
                response_text=None,
            ) from e

        if not response.content:
            return None
        try:
            return cast(Any, response.json())
        except ValueError:
            return response.text

    @staticmethod
    def _translate_http_error(
        error: requests.HTTPError, method: str, endpoint: str
    ) -> TrelloAPIError:
        response = error.response
        status_code = response.status_code if response is not None else 0
        response_text = response.text if response is not None else ""

        if status_code == 401:
            return TrelloAuthenticationError(
                "Trello rejected the session. Your dsc token may have expired; "
                "log in again and copy a fresh value.",
                status_code=status_code,
                response_text=response_text,
            )
        if status_code == 403:
            return TrelloAuthenticationError(
                f"Access forbidden to resource: {endpoint}\n"
                "Your account may not have permission to change this board.",
                status_code=status_code,
                response_text=response_text,
            )
        if status_code == 404:
            return TrelloNotFoundError(
                f"Resource not found: {endpoint}\n"
                "Check that the board or card ID is correct and still exists.",
                status_code=status_code,
                response_text=response_text,
            )
        if status_code == 429:
            return TrelloRateLimitError(
                f"Rate limit exceeded during {method} {endpoint}. "
                "Lower --rate or wait a few minutes.",
                status_code=status_code,
                response_text=response_text,
            )
        if status_code in {500, 502, 503, 504}:
            return TrelloServerError(
                f"Trello server error (HTTP {status_code}) during {method} {endpoint}",
                status_code=status_code,
                response_text=response_text,
            )
        return TrelloAPIError(
            f"HTTP {status_code} error for {method} {endpoint}: {response_text[:200]}",
            status_code=status_code,
            response_text=response_text,
        )

    def get_board(self, board_id: str) -> Board:
        """Fetch a board with its open lists, all labels and visible cards in one call"""
        if not board_id:
            raise TrelloConfigurationError("board_id is required to fetch a board")

        payload = self._request("GET", f"board/{board_id}", params=dict(BOARD_QUERY))
        if not isinstance(payload, dict) or "id" not in payload:
            raise TrelloAPIError(
                f"Unexpected response when fetching board {board_id}: {str(payload)[:200]}"
            )
        board = Board.from_api(payload)
        logger.debug(
            "Fetched board %s: %d lists, %d labels, %d cards",
            board_id,
            len(board.lists),
            len(board.labels),
            len(board.cards),
        )
        return board

    def update_card(self, card_id: str, patch: dict[str, Any]) -> Any:
        """Partially update a card (labels, closed flag, ...)"""
        return self._request("PUT", f"cards/{card_id}", body=patch)

    def create_card(
        self,
        source_card_id: str,
        list_id: str,
        name: str,
        keep_from_source: tuple[str, ...] | list[str] = DEFAULT_KEEP_FROM_SOURCE,
    ) -> Any:
        """Create a copy of an existing card in ``list_id``

        ``keep_from_source`` is passed to Trello verbatim as a comma-separated
        list; Trello decides which of those fields it can carry over.
        """
        return self._request(
            "POST",
            "cards",
            body={
                "idCardSource": source_card_id,
                "idList": list_id,
                "name": name,
                "keepFromSource": ",".join(keep_from_source),
            },
        )

    def delete_card(self, card_id: str) -> Any:
        """Permanently delete a card"""
        return self._request("DELETE", f"cards/{card_id}", body={})
