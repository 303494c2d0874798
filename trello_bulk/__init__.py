"""Bulk label, copy and archive operations on Trello boards."""

from __future__ import annotations

from trello_bulk.cli import main
from trello_bulk.config import (
    AddLabelsConfig,
    CopyCardsConfig,
    Credentials,
    DeleteByLabelConfig,
    load_env_file,
)
from trello_bulk.diff import CopyPlan, plan_add_labels, plan_close_by_label, plan_copy_cards
from trello_bulk.exceptions import (
    LabelResolutionError,
    TrelloAPIError,
    TrelloAuthenticationError,
    TrelloConfigurationError,
    TrelloNotFoundError,
    TrelloRateLimitError,
    TrelloServerError,
)
from trello_bulk.executor import MutationExecutor
from trello_bulk.logging_config import setup_logging
from trello_bulk.models import (
    DEFAULT_KEEP_FROM_SOURCE,
    AddLabels,
    Board,
    BoardList,
    Card,
    CopyToList,
    DeleteCard,
    Label,
    PlannedMutation,
    SetClosed,
)
from trello_bulk.operations import (
    bulk_add_labels,
    bulk_copy_cards,
    bulk_delete_cards_by_label,
    quick_add_labels,
    quick_copy_cards,
    quick_delete_by_label,
)
from trello_bulk.rate_limiter import RateLimiter
from trello_bulk.reporter import CardError, RunReporter, RunSummary
from trello_bulk.resolver import LabelResolution, resolve_label_ids, resolve_target_list
from trello_bulk.trello_client import TrelloClient

__version__ = "0.1.0"

__all__ = [
    # Client and models
    "TrelloClient",
    "Board",
    "BoardList",
    "Card",
    "Label",
    "AddLabels",
    "CopyToList",
    "SetClosed",
    "DeleteCard",
    "PlannedMutation",
    "DEFAULT_KEEP_FROM_SOURCE",
    # Planning and execution
    "LabelResolution",
    "resolve_label_ids",
    "resolve_target_list",
    "CopyPlan",
    "plan_add_labels",
    "plan_copy_cards",
    "plan_close_by_label",
    "MutationExecutor",
    "RunReporter",
    "RunSummary",
    "CardError",
    "RateLimiter",
    # Operations
    "bulk_add_labels",
    "bulk_copy_cards",
    "bulk_delete_cards_by_label",
    "quick_add_labels",
    "quick_copy_cards",
    "quick_delete_by_label",
    # Configuration
    "AddLabelsConfig",
    "CopyCardsConfig",
    "DeleteByLabelConfig",
    "Credentials",
    "load_env_file",
    "setup_logging",
    # Exceptions
    "TrelloAPIError",
    "TrelloAuthenticationError",
    "TrelloNotFoundError",
    "TrelloRateLimitError",
    "TrelloServerError",
    "TrelloConfigurationError",
    "LabelResolutionError",
    # CLI
    "main",
]
