"""Table formatters for boards and their lists (input: decoded JSON dicts)."""

from trello_cli.formatters._table import _table, _trunc


def format_lists_table(lists):
    rows = [(lst.get("id", ""), _trunc(lst.get("name", ""), 60)) for lst in lists]
    return _table([("ID", 26), ("Name", 0)], rows, f"Total: {len(rows)}")


def format_board_table(board):
    closed = "yes" if board.get("closed") else "no"
    url = board.get("shortUrl") or board.get("url") or "-"
    rows = [(board.get("id", ""), _trunc(board.get("name", ""), 40), closed, url)]
    return _table([("ID", 26), ("Name", 40), ("Closed", 7), ("URL", 0)], rows)
