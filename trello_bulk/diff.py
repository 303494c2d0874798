"""Per-card mutation planning for the bulk operations.

Each planner walks every card of a snapshot, drops cards rejected by the
caller's filter, applies its own predicate and emits a PlannedMutation for
every card that actually needs a change. Nothing here touches the network.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from trello_bulk.models import (
    DEFAULT_KEEP_FROM_SOURCE,
    AddLabels,
    Board,
    Card,
    CardFilter,
    CopyToList,
    DeleteCard,
    PlannedMutation,
    SetClosed,
)
from trello_bulk.resolver import resolve_target_list

logger = logging.getLogger(__name__)

CLOSE_ACTIONS = ("archive", "delete")


@dataclass
class CopyPlan:
    mutations: list[PlannedMutation] = field(default_factory=list)
    skipped_lists: list[str] = field(default_factory=list)


def _filtered(cards: Iterable[Card], card_filter: CardFilter | None) -> Iterator[Card]:
    for card in cards:
        if card_filter is None or card_filter(card):
            yield card


def _label_summary(label_ids: Iterable[str], board: Board) -> str:
    by_id = board.labels_by_id()
    names = [by_id[label_id].display_name for label_id in label_ids if label_id in by_id]
    return ", ".join(names) or "N/A"


def plan_add_labels(
    board: Board, label_ids: Iterable[str], card_filter: CardFilter | None = None
) -> list[PlannedMutation]:
    """Plan adding ``label_ids`` to every card of ``board``.

    The new label set is the union of the card's labels and ``label_ids``.
    Cards that already carry all of them are skipped.
    """
    wanted = list(dict.fromkeys(label_ids))
    mutations: list[PlannedMutation] = []

    for card in _filtered(board.cards, card_filter):
        current = set(card.label_ids)
        added = [label_id for label_id in wanted if label_id not in current]
        if not added:
            logger.debug("Skipping '%s': already has every target label", card.name)
            continue

        new_ids = card.label_ids + tuple(added)
        description = (
            f"{card.name} | {_label_summary(card.label_ids, board)} -> "
            f"{_label_summary(new_ids, board)}"
        )
        mutations.append(PlannedMutation(card, AddLabels(new_ids), description))

    return mutations


def plan_copy_cards(
    source: Board,
    target: Board,
    list_mapping: Mapping[str, str] | None = None,
    keep_from_source: Iterable[str] = DEFAULT_KEEP_FROM_SOURCE,
    card_filter: CardFilter | None = None,
) -> CopyPlan:
    """Plan copying every card of ``source`` into the matching list of ``target``.

    Lists with no counterpart on the target board are reported once in
    ``skipped_lists`` and all their cards are left out.
    """
    keep = tuple(keep_from_source)
    plan = CopyPlan()

    for card in _filtered(source.cards, card_filter):
        source_list = source.list_by_id(card.id_list)
        if source_list is None:
            # Card sits in a list the snapshot did not return (closed list)
            closed_list = f"<closed list {card.id_list}>"
            if closed_list not in plan.skipped_lists:
                logger.warning("List %s not found on source board", card.id_list)
                plan.skipped_lists.append(closed_list)
            continue

        target_list = resolve_target_list(target.lists, source_list.name, list_mapping)
        if target_list is None:
            if source_list.name not in plan.skipped_lists:
                logger.warning("List %s not found in target board", source_list.name)
                plan.skipped_lists.append(source_list.name)
            continue

        plan.mutations.append(
            PlannedMutation(
                card,
                CopyToList(target_list.id, target_list.name, keep),
                f"{card.name} | {source_list.name} -> {target_list.name}",
            )
        )

    return plan


def plan_close_by_label(
    board: Board,
    label_names: Iterable[str],
    action: str = "archive",
    card_filter: CardFilter | None = None,
) -> list[PlannedMutation]:
    """Plan archiving or deleting every card that carries one of ``label_names``.

    Labels are matched by name, case-sensitively. Already archived cards are
    skipped when archiving.
    """
    if action not in CLOSE_ACTIONS:
        raise ValueError(f"Invalid action: '{action}'. Must be one of: {', '.join(CLOSE_ACTIONS)}")

    targets = set(label_names)
    mutations: list[PlannedMutation] = []

    for card in _filtered(board.cards, card_filter):
        if not card.label_names & targets:
            continue

        if action == "archive":
            if card.closed:
                logger.debug("Skipping '%s': already archived", card.name)
                continue
            mutations.append(PlannedMutation(card, SetClosed(True), f"archive card {card.name}"))
        else:
            mutations.append(PlannedMutation(card, DeleteCard(), f"delete card {card.name}"))

    return mutations
