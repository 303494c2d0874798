"""
Shared pytest fixtures for trello_bulk tests
"""
import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from trello_bulk import Board, TrelloClient


@pytest.fixture
def fixtures_dir():
    """Return path to test fixtures directory"""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def source_board_payload(fixtures_dir):
    """Raw API payload of the board the operations act on"""
    with open(fixtures_dir / "source_board.json") as f:
        return json.load(f)


@pytest.fixture
def target_board_payload(fixtures_dir):
    """Raw API payload of the copy-cards target board"""
    with open(fixtures_dir / "target_board.json") as f:
        return json.load(f)


@pytest.fixture
def source_board(source_board_payload):
    return Board.from_api(source_board_payload)


@pytest.fixture
def target_board(target_board_payload):
    return Board.from_api(target_board_payload)


@pytest.fixture
def mock_client(source_board, target_board):
    """TrelloClient stand-in serving the fixture boards and recording writes"""
    client = MagicMock(spec=TrelloClient)
    boards = {source_board.id: source_board, target_board.id: target_board}
    client.get_board.side_effect = lambda board_id: boards[board_id]
    client.update_card.return_value = {"id": "updated"}
    client.create_card.return_value = {"id": "created"}
    client.delete_card.return_value = {"_value": None}
    return client
