"""Bulk operation entry points.

Each operation validates its config, fetches fresh board snapshots, plans one
mutation per card and applies them. Configuration and snapshot failures raise
before any card is written; card write failures end up in the summary.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from trello_bulk.config import AddLabelsConfig, CopyCardsConfig, DeleteByLabelConfig
from trello_bulk.diff import plan_add_labels, plan_close_by_label, plan_copy_cards
from trello_bulk.exceptions import LabelResolutionError
from trello_bulk.executor import MutationExecutor
from trello_bulk.reporter import RunReporter, RunSummary
from trello_bulk.resolver import resolve_label_ids
from trello_bulk.trello_client import TrelloClient

logger = logging.getLogger(__name__)


def bulk_add_labels(client: TrelloClient, config: AddLabelsConfig) -> RunSummary:
    """Add the labels named in ``config.label_names`` to every card of the board.

    Label names that do not exist on the board are reported in
    ``missing_labels``; if none of them exist the run stops with
    LabelResolutionError before touching any card.
    """
    config.validate()

    logger.info(f"🏷️  Adding labels {', '.join(config.label_names)} on board {config.board_id}")
    board = client.get_board(config.board_id)

    resolution = resolve_label_ids(board.labels, config.label_names)
    for name in resolution.missing:
        logger.warning(f"⚠️  Label '{name}' not found on board {board.id}")
    if not resolution.found:
        raise LabelResolutionError(
            f"None of the labels {', '.join(config.label_names)} exist on board {board.id}",
            missing=resolution.missing,
        )

    mutations = plan_add_labels(board, resolution.found, config.card_filter)
    logger.info(f"📝 {len(mutations)} of {len(board.cards)} cards need new labels")

    reporter = RunReporter("add labels", dry_run=config.dry_run)
    reporter.summary.missing_labels = list(resolution.missing)
    MutationExecutor(client, config.max_workers).run(mutations, config.dry_run, reporter)
    return reporter.finish()


def bulk_copy_cards(client: TrelloClient, config: CopyCardsConfig) -> RunSummary:
    """Copy every card of the board into the same-named list of another board.

    ``config.list_mapping`` renames lists on the way; cards in lists with no
    target counterpart are skipped and the list name is reported once in
    ``skipped_lists``. Copies are not deduplicated: running twice creates two
    copies of each card.
    """
    config.validate()

    logger.info(f"📋 Copying cards from board {config.board_id} to {config.target_board_id}")
    source = client.get_board(config.board_id)
    target = client.get_board(config.target_board_id)

    plan = plan_copy_cards(
        source, target, config.list_mapping, config.keep_from_source, config.card_filter
    )
    logger.info(f"📝 {len(plan.mutations)} of {len(source.cards)} cards will be copied")

    reporter = RunReporter("copy cards", dry_run=config.dry_run)
    reporter.summary.skipped_lists = list(plan.skipped_lists)
    MutationExecutor(client, config.max_workers).run(plan.mutations, config.dry_run, reporter)
    return reporter.finish()


def bulk_delete_cards_by_label(client: TrelloClient, config: DeleteByLabelConfig) -> RunSummary:
    """Archive (default) or permanently delete every card carrying one of the labels."""
    config.validate()

    logger.info(
        f"🗑️  {config.action.capitalize()} cards labelled {', '.join(config.label_names)} "
        f"on board {config.board_id}"
    )
    board = client.get_board(config.board_id)

    known = {label.name for label in board.labels}
    missing = [name for name in dict.fromkeys(config.label_names) if name not in known]
    for name in missing:
        logger.warning(f"⚠️  Label '{name}' not found on board {board.id}")

    mutations = plan_close_by_label(board, config.label_names, config.action, config.card_filter)
    logger.info(f"📝 {len(mutations)} of {len(board.cards)} cards match")

    reporter = RunReporter(f"{config.action} by label", dry_run=config.dry_run)
    reporter.summary.missing_labels = missing
    MutationExecutor(client, config.max_workers).run(mutations, config.dry_run, reporter)
    return reporter.finish()


def quick_add_labels(
    client: TrelloClient, board_id: str, label_names: Iterable[str], dry_run: bool = True
) -> RunSummary:
    """Add labels to all cards with default settings"""
    return bulk_add_labels(
        client, AddLabelsConfig(board_id=board_id, label_names=list(label_names), dry_run=dry_run)
    )


def quick_copy_cards(
    client: TrelloClient, board_id: str, target_board_id: str, dry_run: bool = True
) -> RunSummary:
    """Copy all cards to same-named lists of another board"""
    return bulk_copy_cards(
        client,
        CopyCardsConfig(board_id=board_id, target_board_id=target_board_id, dry_run=dry_run),
    )


def quick_delete_by_label(
    client: TrelloClient, board_id: str, label_names: Iterable[str], dry_run: bool = True
) -> RunSummary:
    """Archive all cards carrying any of the labels"""
    return bulk_delete_cards_by_label(
        client,
        DeleteByLabelConfig(
            board_id=board_id, label_names=list(label_names), action="archive", dry_run=dry_run
        ),
    )
