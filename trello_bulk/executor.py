"""Apply planned card mutations through the Trello client."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any

from trello_bulk.exceptions import TrelloAPIError
from trello_bulk.models import AddLabels, CopyToList, DeleteCard, PlannedMutation, SetClosed
from trello_bulk.reporter import RunReporter
from trello_bulk.trello_client import TrelloClient

logger = logging.getLogger(__name__)


class MutationExecutor:
    """Turn each PlannedMutation into exactly one write call.

    Mutations run one after another by default, so progress lines come out in
    board order. ``max_workers > 1`` sends writes from a thread pool instead;
    cards are independent so the outcome is the same, only the log order
    changes.

    A failed write is recorded against its card and the run moves on. There
    is no retry and no error threshold.

    Example:
        >>> executor = MutationExecutor(client)
        >>> reporter = RunReporter("add labels", dry_run=False)
        >>> executor.run(mutations, dry_run=False, reporter=reporter)
        >>> reporter.finish().success
        12
    """

    def __init__(self, client: TrelloClient, max_workers: int = 1):
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.client = client
        self.max_workers = max_workers

    def apply(self, mutation: PlannedMutation, dry_run: bool = True) -> Any:
        """Send the write for one mutation, or nothing in dry-run mode"""
        if dry_run:
            return None

        card = mutation.card
        intent = mutation.intent

        if isinstance(intent, AddLabels):
            return self.client.update_card(card.id, {"idLabels": list(intent.label_ids)})
        if isinstance(intent, CopyToList):
            return self.client.create_card(
                card.id, intent.list_id, card.name, intent.keep_from_source
            )
        if isinstance(intent, SetClosed):
            return self.client.update_card(card.id, {"closed": intent.closed})
        if isinstance(intent, DeleteCard):
            return self.client.delete_card(card.id)

        raise TypeError(f"Unsupported mutation intent: {type(intent).__name__}")

    def _apply_and_record(
        self, mutation: PlannedMutation, dry_run: bool, reporter: RunReporter
    ) -> None:
        try:
            response = self.apply(mutation, dry_run)
        except TrelloAPIError as e:
            reporter.record_error(mutation, e)
            return
        logger.debug("Response for %s: %s", mutation.card.id, response)
        reporter.record_success(mutation)

    def run(
        self, mutations: Sequence[PlannedMutation], dry_run: bool, reporter: RunReporter
    ) -> None:
        """Apply every mutation and record each outcome on ``reporter``"""
        if not mutations:
            logger.info("Nothing to do")
            return

        if dry_run or self.max_workers == 1:
            for mutation in mutations:
                self._apply_and_record(mutation, dry_run, reporter)
            return

        logger.info(f"⚡ Sending {len(mutations)} writes with {self.max_workers} workers")
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = [
                pool.submit(self._apply_and_record, mutation, dry_run, reporter)
                for mutation in mutations
            ]
            for future in as_completed(futures):
                future.result()
