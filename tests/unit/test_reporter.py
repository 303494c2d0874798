"""
Unit tests for RunReporter and RunSummary
"""

import logging
import sys
from pathlib import Path

# Add parent directory to path to import trello_bulk module
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest

from trello_bulk import (
    AddLabels,
    Card,
    CardError,
    CopyToList,
    PlannedMutation,
    RunReporter,
    RunSummary,
    SetClosed,
    TrelloAPIError,
)


@pytest.fixture(autouse=True)
def propagate_logs():
    """setup_logging() turns propagation off; caplog needs it on"""
    logger = logging.getLogger("trello_bulk")
    previous = logger.propagate
    logger.propagate = True
    yield
    logger.propagate = previous


def planned(intent, description="Card | x -> y"):
    return PlannedMutation(Card("c1", "Card", "l1"), intent, description)


class TestRunSummary:
    def test_to_dict_minimal(self):
        summary = RunSummary(processed=2, success=1, errors=[CardError("c1", "Card", "boom")])
        assert summary.to_dict() == {
            "processed": 2,
            "success": 1,
            "errors": [{"card_id": "c1", "name": "Card", "error": "boom"}],
        }

    def test_to_dict_with_soft_warnings(self):
        summary = RunSummary(missing_labels=["Nope"], skipped_lists=["Doing"])
        result = summary.to_dict()
        assert result["missing_labels"] == ["Nope"]
        assert result["skipped_lists"] == ["Doing"]

    def test_ok(self):
        assert RunSummary().ok
        assert not RunSummary(errors=[CardError("c1", "Card", "boom")]).ok


class TestRunReporter:
    def test_dry_run_lines(self, caplog):
        reporter = RunReporter("add labels", dry_run=True)
        with caplog.at_level(logging.INFO, logger="trello_bulk"):
            reporter.record_success(planned(AddLabels(("a",))))

        assert "Dry run: Card | x -> y" in caplog.text
        assert reporter.summary.processed == 1
        assert reporter.summary.success == 1

    def test_real_run_lines(self, caplog):
        reporter = RunReporter("copy cards", dry_run=False)
        with caplog.at_level(logging.INFO, logger="trello_bulk"):
            reporter.record_success(planned(CopyToList("t", "Todo"), "Card | Doing -> Todo"))
            reporter.record_success(planned(SetClosed(True), "archive card Card"))

        assert "Created card c1 | Card | Doing -> Todo" in caplog.text
        assert "Archived card c1" in caplog.text

    def test_error_recorded(self, caplog):
        reporter = RunReporter("add labels", dry_run=False)
        with caplog.at_level(logging.INFO, logger="trello_bulk"):
            reporter.record_error(planned(AddLabels(("a",))), TrelloAPIError("HTTP 400"))

        assert reporter.summary.processed == 1
        assert reporter.summary.success == 0
        assert reporter.summary.errors == [CardError("c1", "Card", "HTTP 400")]
        assert "Failed on card c1" in caplog.text

    def test_finish_logs_summary(self, caplog):
        reporter = RunReporter("copy cards", dry_run=True)
        reporter.summary.skipped_lists = ["Doing"]
        with caplog.at_level(logging.INFO, logger="trello_bulk"):
            summary = reporter.finish()

        assert summary is reporter.summary
        assert "COPY CARDS SUMMARY (dry run)" in caplog.text
        assert "Lists skipped: Doing" in caplog.text

    def test_finish_truncates_error_list(self, caplog):
        reporter = RunReporter("add labels", dry_run=False)
        for i in range(7):
            reporter.summary.errors.append(CardError(f"c{i}", f"Card {i}", "boom"))
        with caplog.at_level(logging.INFO, logger="trello_bulk"):
            reporter.finish()

        assert "Failed: 7" in caplog.text
        assert "... and 2 more" in caplog.text
