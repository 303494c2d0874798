"""Run configuration and session credentials."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from trello_bulk.diff import CLOSE_ACTIONS
from trello_bulk.exceptions import TrelloConfigurationError
from trello_bulk.models import DEFAULT_KEEP_FROM_SOURCE, CardFilter
from trello_bulk.trello_client import TrelloClient

logger = logging.getLogger(__name__)


def _require_board_id(value: str, what: str = "board_id") -> None:
    if not value or not value.strip():
        raise TrelloConfigurationError(f"{what} is required")


def _require_names(names: list[str], what: str) -> None:
    if not [name for name in names if name]:
        raise TrelloConfigurationError(f"At least one {what} is required")


def _check_workers(max_workers: int) -> None:
    if max_workers < 1:
        raise TrelloConfigurationError(f"max_workers must be at least 1, got {max_workers}")


@dataclass
class AddLabelsConfig:
    board_id: str
    label_names: list[str]
    dry_run: bool = True
    card_filter: CardFilter | None = None
    max_workers: int = 1

    def validate(self) -> None:
        _require_board_id(self.board_id)
        _require_names(self.label_names, "label name")
        _check_workers(self.max_workers)


@dataclass
class CopyCardsConfig:
    board_id: str
    target_board_id: str
    # source list name -> target list name; unmapped lists keep their name
    list_mapping: dict[str, str] = field(default_factory=dict)
    keep_from_source: tuple[str, ...] = DEFAULT_KEEP_FROM_SOURCE
    dry_run: bool = True
    card_filter: CardFilter | None = None
    max_workers: int = 1

    def validate(self) -> None:
        _require_board_id(self.board_id)
        _require_board_id(self.target_board_id, "target_board_id")
        _check_workers(self.max_workers)


@dataclass
class DeleteByLabelConfig:
    board_id: str
    label_names: list[str]
    action: str = "archive"
    dry_run: bool = True
    card_filter: CardFilter | None = None
    max_workers: int = 1

    def validate(self) -> None:
        _require_board_id(self.board_id)
        _require_names(self.label_names, "label name")
        if self.action not in CLOSE_ACTIONS:
            raise TrelloConfigurationError(
                f"Invalid action: '{self.action}'. Must be one of: {', '.join(CLOSE_ACTIONS)}"
            )
        _check_workers(self.max_workers)


def load_env_file(path: str | Path) -> bool:
    """Load KEY=VALUE lines from a .env file into os.environ

    Existing environment variables are never overridden. Returns False when the
    file does not exist.
    """
    env_path = Path(path)
    if not env_path.exists():
        return False

    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip("'\"")
                if key not in os.environ:  # Don't override existing env vars
                    os.environ[key] = value

    logger.debug("Loaded environment from %s", env_path)
    return True


def parse_cookie_header(header: str | None) -> dict[str, str]:
    """Split a raw ``Cookie:`` header value into a name -> value dict"""
    cookies: dict[str, str] = {}
    if not header:
        return cookies
    for part in header.split(";"):
        if "=" in part:
            name, value = part.split("=", 1)
            if name.strip():
                cookies[name.strip()] = value.strip()
    return cookies


@dataclass
class Credentials:
    """Browser-session credentials and the board a run acts on"""

    dsc: str
    cookies: dict[str, str] = field(default_factory=dict)
    board_id: str | None = None
    board_url: str | None = None

    @classmethod
    def from_env(cls) -> Credentials:
        """Read TRELLO_DSC, TRELLO_COOKIE and TRELLO_BOARD_ID / TRELLO_BOARD_URL

        TRELLO_DSC wins over a ``dsc`` inside TRELLO_COOKIE. The board URL is
        kept as given and only parsed by ``default_board_id()``.

        Raises:
            TrelloConfigurationError: If no dsc token is available
        """
        cookies = parse_cookie_header(os.getenv("TRELLO_COOKIE"))
        dsc = os.getenv("TRELLO_DSC") or cookies.get("dsc", "")
        if not dsc.strip():
            raise TrelloConfigurationError(
                "Missing Trello session token. Set TRELLO_DSC to the value of the 'dsc' "
                "cookie (or TRELLO_COOKIE to the full Cookie header) from a logged-in browser."
            )

        return cls(
            dsc=dsc.strip(),
            cookies=cookies,
            board_id=os.getenv("TRELLO_BOARD_ID") or None,
            board_url=os.getenv("TRELLO_BOARD_URL") or None,
        )

    def default_board_id(self) -> str | None:
        """Board from the environment; TRELLO_BOARD_URL beats TRELLO_BOARD_ID

        Raises:
            ValueError: If TRELLO_BOARD_URL is not a board URL
        """
        if self.board_url:
            return TrelloClient.parse_board_url(self.board_url)
        return self.board_id

    def client(
        self,
        timeout: float | None = None,
        verify_ssl: bool = True,
        requests_per_second: float | None = None,
    ) -> TrelloClient:
        return TrelloClient(
            self.dsc,
            cookies=self.cookies,
            timeout=timeout,
            verify_ssl=verify_ssl,
            requests_per_second=requests_per_second,
        )
