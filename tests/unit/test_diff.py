"""
Unit tests for per-card mutation planning

Tests cover:
- Label union and no-op skipping for add-labels
- List mapping and skipped-list reporting for copy-cards
- Name-based matching for archive/delete
- Caller-supplied card filters
"""

import sys
from pathlib import Path

# Add parent directory to path to import trello_bulk module
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest

from trello_bulk import (
    AddLabels,
    Board,
    BoardList,
    Card,
    CopyToList,
    DeleteCard,
    Label,
    SetClosed,
    plan_add_labels,
    plan_close_by_label,
    plan_copy_cards,
)


def make_board(cards, labels=(), lists=(), board_id="b1"):
    return Board(id=board_id, lists=tuple(lists), labels=tuple(labels), cards=tuple(cards))


class TestPlanAddLabels:
    LABELS = (Label("a", "A"), Label("b", "B"), Label("c", "C"))

    def test_union_with_existing_labels(self):
        """L = {a, b}, T = {b, c} -> {a, b, c}"""
        card = Card(id="c1", name="Card", id_list="l1", label_ids=("a", "b"))
        board = make_board([card], labels=self.LABELS)

        mutations = plan_add_labels(board, ["b", "c"])

        assert len(mutations) == 1
        intent = mutations[0].intent
        assert isinstance(intent, AddLabels)
        assert set(intent.label_ids) == {"a", "b", "c"}
        assert len(intent.label_ids) == 3

    def test_card_with_all_target_labels_is_skipped(self):
        """L = {a, b}, T = {a, b} -> no mutation"""
        card = Card(id="c1", name="Card", id_list="l1", label_ids=("a", "b"))
        board = make_board([card], labels=self.LABELS)

        assert plan_add_labels(board, ["a", "b"]) == []

    def test_source_card_is_not_modified(self):
        card = Card(id="c1", name="Card", id_list="l1", label_ids=("a",))
        board = make_board([card], labels=self.LABELS)

        plan_add_labels(board, ["c"])

        assert card.label_ids == ("a",)

    def test_description_uses_label_names_and_colors(self, source_board):
        mutations = plan_add_labels(source_board, ["lbl-general"])
        by_card = {m.card.id: m for m in mutations}

        assert by_card["card-3"].description == "Build header | N/A -> General"
        assert by_card["card-4"].description == "Fix footer links | Urgent, purple -> Urgent, purple, General"

    def test_fixture_board(self, source_board):
        """Cards already labelled General are left alone"""
        mutations = plan_add_labels(source_board, ["lbl-general"])
        assert [m.card.id for m in mutations] == ["card-1", "card-3", "card-4"]

    def test_filter_excludes_cards(self, source_board):
        mutations = plan_add_labels(
            source_board, ["lbl-general"], card_filter=lambda card: card.id_list == "list-doing"
        )
        assert [m.card.id for m in mutations] == ["card-3", "card-4"]


class TestPlanCopyCards:
    def test_mapping_and_same_name_lists(self, source_board, target_board):
        plan = plan_copy_cards(source_board, target_board, {"Backlog": "Todo"})

        targets = {m.card.id: m.intent for m in plan.mutations}
        assert set(targets) == {"card-1", "card-2", "card-5"}
        assert targets["card-1"] == CopyToList(
            "tlist-todo", "Todo", ("start", "due", "dueReminder", "labels")
        )
        assert targets["card-5"].list_id == "tlist-done"

    def test_missing_target_list_reported_once(self, source_board, target_board):
        """Both 'Doing' cards are skipped, 'Doing' is listed once"""
        plan = plan_copy_cards(source_board, target_board, {"Backlog": "Todo"})
        assert plan.skipped_lists == ["Doing"]

    def test_without_mapping_backlog_is_skipped(self, source_board, target_board):
        plan = plan_copy_cards(source_board, target_board)
        assert plan.skipped_lists == ["Backlog", "Doing"]
        assert [m.card.id for m in plan.mutations] == ["card-5"]

    def test_target_lists_come_from_target_board(self):
        """A same-named source list is never used as the target"""
        source_list = BoardList("src-list", "Todo")
        target_list = BoardList("tgt-list", "Todo")
        source = make_board([Card("c1", "Card", "src-list")], lists=[source_list])
        target = make_board([], lists=[target_list], board_id="b2")

        plan = plan_copy_cards(source, target)

        assert plan.mutations[0].intent.list_id == "tgt-list"

    def test_card_in_unknown_source_list(self, target_board):
        source = make_board([Card("c1", "Card", "closed-list")], lists=[BoardList("x", "Todo")])
        plan = plan_copy_cards(source, target_board)
        assert plan.mutations == []
        assert plan.skipped_lists == ["<closed list closed-list>"]

    def test_closed_list_recorded_apart_from_list_names(self):
        """A list id is never reported as if it were a list name"""
        source = make_board(
            [
                Card("c1", "Card", "closed-list"),
                Card("c2", "Other", "closed-list"),
                Card("c3", "Third", "x"),
            ],
            lists=[BoardList("x", "closed-list")],
        )
        target = make_board([], lists=[BoardList("t1", "Todo")], board_id="b2")

        plan = plan_copy_cards(source, target)

        assert plan.mutations == []
        assert plan.skipped_lists == ["<closed list closed-list>", "closed-list"]

    def test_custom_keep_fields(self, source_board, target_board):
        plan = plan_copy_cards(source_board, target_board, keep_from_source=["due"])
        assert plan.mutations[0].intent.keep_from_source == ("due",)

    def test_description(self, source_board, target_board):
        plan = plan_copy_cards(source_board, target_board)
        assert plan.mutations[0].description == "Launch checklist | Done -> Done"


class TestPlanCloseByLabel:
    def _card(self, card_id, *label_names, closed=False):
        labels = tuple(Label(f"id-{name}", name) for name in label_names)
        return Card(
            card_id,
            f"Card {card_id}",
            "l1",
            label_ids=tuple(label.id for label in labels),
            labels=labels,
            closed=closed,
        )

    def test_exact_name_matches(self):
        board = make_board([self._card("c1", "Website")])
        mutations = plan_close_by_label(board, ["Website"])
        assert len(mutations) == 1
        assert mutations[0].intent == SetClosed(True)

    def test_match_is_case_sensitive(self):
        board = make_board([self._card("c1", "website")])
        assert plan_close_by_label(board, ["Website"]) == []

    def test_any_overlap_matches(self):
        board = make_board([self._card("c1", "Urgent", "Website"), self._card("c2", "Urgent")])
        mutations = plan_close_by_label(board, ["Website", "Other"])
        assert [m.card.id for m in mutations] == ["c1"]

    def test_delete_action(self):
        board = make_board([self._card("c1", "Website")])
        mutations = plan_close_by_label(board, ["Website"], action="delete")
        assert mutations[0].intent == DeleteCard()
        assert mutations[0].description == "delete card Card c1"

    def test_already_archived_card_skipped_for_archive(self):
        board = make_board([self._card("c1", "Website", closed=True)])
        assert plan_close_by_label(board, ["Website"], action="archive") == []
        assert len(plan_close_by_label(board, ["Website"], action="delete")) == 1

    def test_invalid_action(self):
        board = make_board([])
        with pytest.raises(ValueError, match="Invalid action"):
            plan_close_by_label(board, ["Website"], action="shred")

    def test_filter_applied_first(self, source_board):
        mutations = plan_close_by_label(
            source_board, ["Website"], card_filter=lambda card: "Launch" in card.name
        )
        assert [m.card.id for m in mutations] == ["card-5"]
