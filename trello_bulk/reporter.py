"""Run accounting and progress output for bulk operations."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any

from trello_bulk.models import AddLabels, CopyToList, DeleteCard, PlannedMutation, SetClosed

logger = logging.getLogger(__name__)


@dataclass
class CardError:
    card_id: str
    name: str
    error: str

    def to_dict(self) -> dict[str, str]:
        return {"card_id": self.card_id, "name": self.name, "error": self.error}


@dataclass
class RunSummary:
    """Outcome of one bulk run

    ``processed`` counts cards that passed the filter and needed a change;
    ``success`` counts writes that succeeded, or would have in a dry run.
    """

    processed: int = 0
    success: int = 0
    errors: list[CardError] = field(default_factory=list)
    missing_labels: list[str] | None = None
    skipped_lists: list[str] | None = None

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "processed": self.processed,
            "success": self.success,
            "errors": [error.to_dict() for error in self.errors],
        }
        if self.missing_labels is not None:
            result["missing_labels"] = list(self.missing_labels)
        if self.skipped_lists is not None:
            result["skipped_lists"] = list(self.skipped_lists)
        return result


def _done_verb(mutation: PlannedMutation) -> str:
    intent = mutation.intent
    if isinstance(intent, AddLabels):
        return "Updated card"
    if isinstance(intent, CopyToList):
        return "Created card"
    if isinstance(intent, SetClosed):
        return "Archived card" if intent.closed else "Restored card"
    if isinstance(intent, DeleteCard):
        return "Deleted card"
    return "Changed card"


class RunReporter:
    """Collect per-card results into a RunSummary and log a line for each

    Safe to call from several executor threads at once.
    """

    def __init__(self, operation: str, dry_run: bool = True):
        self.operation = operation
        self.dry_run = dry_run
        self.summary = RunSummary()
        self._lock = threading.Lock()

    def record_success(self, mutation: PlannedMutation) -> None:
        with self._lock:
            self.summary.processed += 1
            self.summary.success += 1
        card = mutation.card
        if self.dry_run:
            logger.info(f"Dry run: {mutation.description}")
        else:
            logger.info(f"{_done_verb(mutation)} {card.id} | {mutation.description}")

    def record_error(self, mutation: PlannedMutation, error: Exception) -> None:
        card = mutation.card
        with self._lock:
            self.summary.processed += 1
            self.summary.errors.append(CardError(card.id, card.name, str(error)))
        logger.error(f"❌ Failed on card {card.id} | {card.name}: {error}")

    def finish(self) -> RunSummary:
        """Log the closing summary block and return the summary"""
        summary = self.summary
        mode = " (dry run)" if self.dry_run else ""

        logger.info("=" * 60)
        logger.info(f"📊 {self.operation.upper()} SUMMARY{mode}")
        logger.info("=" * 60)
        logger.info(f"Processed: {summary.processed}")
        if self.dry_run:
            logger.info(f"Would succeed: {summary.success}")
        else:
            logger.info(f"Succeeded: {summary.success}")

        if summary.missing_labels:
            logger.warning(f"⚠️  Labels not found: {', '.join(summary.missing_labels)}")
        if summary.skipped_lists:
            logger.warning(f"⚠️  Lists skipped: {', '.join(summary.skipped_lists)}")

        if summary.errors:
            logger.warning(f"⚠️  Failed: {len(summary.errors)}")
            for error in summary.errors[:5]:  # Show first 5
                logger.warning(f"    - {error.name} ({error.card_id}): {error.error}")
            if len(summary.errors) > 5:
                logger.warning(f"    ... and {len(summary.errors) - 5} more")
        else:
            logger.info("✅ Done")
        logger.info("=" * 60)

        return summary
