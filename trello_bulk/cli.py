"""CLI entry point for trello_bulk."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from trello_bulk.config import (
    AddLabelsConfig,
    CopyCardsConfig,
    Credentials,
    DeleteByLabelConfig,
    load_env_file,
)
from trello_bulk.diff import CLOSE_ACTIONS
from trello_bulk.exceptions import TrelloAPIError, TrelloConfigurationError
from trello_bulk.logging_config import setup_logging
from trello_bulk.models import DEFAULT_KEEP_FROM_SOURCE, Card, CardFilter
from trello_bulk.operations import (
    bulk_add_labels,
    bulk_copy_cards,
    bulk_delete_cards_by_label,
)
from trello_bulk.reporter import RunSummary
from trello_bulk.trello_client import TrelloClient

logger = logging.getLogger("trello_bulk.cli")

EPILOG = """
Credentials:
    export TRELLO_DSC="value of the dsc cookie"
    export TRELLO_COOKIE="token=...; dsc=..."   (optional, full Cookie header)
    export TRELLO_BOARD_ID="Bm0nnz1R"           (or TRELLO_BOARD_URL)

Examples:
    trello-bulk add-labels General                      # dry run
    trello-bulk --apply add-labels General Urgent
    trello-bulk copy-cards Bn4rRI6Z --map Backlog=Todo
    trello-bulk --apply delete-by-label Website --action archive

Nothing is written unless --apply is given.
"""


def _parse_mapping(pairs: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise TrelloConfigurationError(f"Invalid --map value '{pair}', expected SOURCE=TARGET")
        source, target = pair.split("=", 1)
        mapping[source] = target
    return mapping


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trello-bulk",
        description="Bulk label, copy and archive operations on Trello boards",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    board = parser.add_mutually_exclusive_group()
    board.add_argument("--board-id", help="Board to act on (default: $TRELLO_BOARD_ID)")
    board.add_argument("--board-url", help="Board URL to act on (default: $TRELLO_BOARD_URL)")

    parser.add_argument(
        "--apply", action="store_true", help="Actually write changes (default is a dry run)"
    )
    parser.add_argument(
        "--max-workers", type=int, default=1, help="Parallel card writes (default: 1)"
    )
    parser.add_argument("--rate", type=float, help="Maximum requests per second")
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds")
    parser.add_argument(
        "--name-contains", help="Only touch cards whose name contains this text"
    )
    parser.add_argument(
        "--no-verify-ssl", action="store_true", help="Disable SSL certificate verification"
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug output")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Errors only")
    verbosity.add_argument("--log-level", default="INFO", help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument("--log-file", help="Also write the log to this file")

    commands = parser.add_subparsers(dest="command", required=True)

    add = commands.add_parser("add-labels", help="Add labels to every card")
    add.add_argument("labels", nargs="+", help="Label names to add")

    copy = commands.add_parser("copy-cards", help="Copy every card to another board")
    copy.add_argument("target_board", help="Target board ID or URL")
    copy.add_argument(
        "--map",
        action="append",
        default=[],
        metavar="SOURCE=TARGET",
        help="Send cards from list SOURCE to list TARGET (repeatable)",
    )
    copy.add_argument(
        "--keep",
        default=",".join(DEFAULT_KEEP_FROM_SOURCE),
        help="Fields to keep from the source card (default: %(default)s)",
    )

    delete = commands.add_parser("delete-by-label", help="Archive or delete labelled cards")
    delete.add_argument("labels", nargs="+", help="Label names to match")
    delete.add_argument("--action", choices=CLOSE_ACTIONS, default="archive")

    return parser


def _log_level(args: argparse.Namespace) -> str:
    if args.verbose:
        return "DEBUG"
    if args.quiet:
        return "ERROR"
    return str(args.log_level).upper()


def name_filter(text: str) -> CardFilter:
    """Card filter keeping cards whose name contains ``text``"""

    def matches(card: Card) -> bool:
        return text in card.name

    return matches


def _target_board_id(value: str) -> str:
    if "trello.com/" in value:
        return TrelloClient.parse_board_url(value)
    return value


def run(args: argparse.Namespace) -> RunSummary:
    """Resolve credentials from the environment and run the selected command"""
    credentials = Credentials.from_env()

    if args.board_url:
        board_id = TrelloClient.parse_board_url(args.board_url)
    elif args.board_id:
        board_id = args.board_id
    else:
        board_id = credentials.default_board_id()
    if not board_id:
        raise TrelloConfigurationError(
            "Missing board identifier. Pass --board-id / --board-url or set "
            "TRELLO_BOARD_ID / TRELLO_BOARD_URL."
        )

    if args.no_verify_ssl:
        import urllib3

        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        logger.info("🔓 SSL verification disabled")

    client = credentials.client(
        timeout=args.timeout,
        verify_ssl=not args.no_verify_ssl,
        requests_per_second=args.rate,
    )

    card_filter = name_filter(args.name_contains) if args.name_contains else None

    dry_run = not args.apply
    if dry_run:
        logger.info("🔍 Dry run: no changes will be written (use --apply to write)")

    if args.command == "add-labels":
        return bulk_add_labels(
            client,
            AddLabelsConfig(
                board_id=board_id,
                label_names=args.labels,
                dry_run=dry_run,
                card_filter=card_filter,
                max_workers=args.max_workers,
            ),
        )
    if args.command == "copy-cards":
        keep = tuple(field.strip() for field in args.keep.split(",") if field.strip())
        return bulk_copy_cards(
            client,
            CopyCardsConfig(
                board_id=board_id,
                target_board_id=_target_board_id(args.target_board),
                list_mapping=_parse_mapping(args.map),
                keep_from_source=keep,
                dry_run=dry_run,
                card_filter=card_filter,
                max_workers=args.max_workers,
            ),
        )
    return bulk_delete_cards_by_label(
        client,
        DeleteByLabelConfig(
            board_id=board_id,
            label_names=args.labels,
            action=args.action,
            dry_run=dry_run,
            card_filter=card_filter,
            max_workers=args.max_workers,
        ),
    )


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(_log_level(args), args.log_file)

    load_env_file(os.getenv("TRELLO_ENV_FILE", ".env"))

    try:
        summary = run(args)
    except ValueError as e:
        # TrelloConfigurationError and bad board URLs
        logger.error(f"❌ Error: {e}")
        sys.exit(1)
    except TrelloAPIError as e:
        logger.error(f"❌ Trello request failed: {e}")
        sys.exit(1)

    if not summary.ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
