"""
trello-cli — fetch a Trello board's lists and print them.

Usage: trello-cli -k <app key> [-t <user token>] -b <board id> [--format table]
"""

import argparse

from trello_cli import config
from trello_cli.client import new_client
from trello_cli.exceptions import TrelloError
from trello_cli.formatters import format_lists_table, output

# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


class _Parser(argparse.ArgumentParser):
    """Parser that raises TrelloError instead of printing usage and exiting."""

    def error(self, message):
        raise TrelloError(f"[ERROR] {message}")


def build_parser():
    parser = _Parser(
        prog="trello-cli",
        description="Fetch a Trello board's lists and print them",
    )
    parser.add_argument("-k", "--key", help="application key (default: TRELLO_KEY from .env)")
    parser.add_argument(
        "-t", "--token", help="user authentication token (default: TRELLO_TOKEN from .env)"
    )
    parser.add_argument("-b", "--board", required=True, help="board to retrieve")
    parser.add_argument("--format", choices=["json", "table"], default="json")
    parser.add_argument("--verbose", "-v", action="store_true", help="log HTTP requests to stderr")
    parser.add_argument("--version", action="version", version=f"trello-cli {config.VERSION}")
    return parser


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------


def fetch_board_lists(key, token, board_id):
    """Client -> BoardService.get_board -> Board.lists."""
    client = new_client(key, token)
    board = client.board_service().get_board(board_id)
    return board.lists()


def _emit_error(err):
    # Errors go to stdout and the process still exits 0.
    print(f"err: {err}")


def main(argv=None):
    try:
        ns = build_parser().parse_args(argv)
        if ns.verbose:
            config.HTTP_LOG_ENABLED = True
        key = config.API_KEY if ns.key is None else ns.key
        token = config.API_TOKEN if ns.token is None else ns.token
        lists = fetch_board_lists(key, token, ns.board)
    except TrelloError as e:
        _emit_error(e)
        return
    output([lst.to_dict() for lst in lists], format_lists_table, ns.format)


if __name__ == "__main__":
    main()
