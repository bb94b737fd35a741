"""Output formatting for trello-cli.

  _core.py      — pretty_print, output dispatcher
  _table.py     — table rendering primitives
  _entities.py  — board and list tables
"""

from trello_cli.formatters._core import output, pretty_print
from trello_cli.formatters._entities import format_board_table, format_lists_table
from trello_cli.formatters._table import _sanitize_str, _table, _trunc

__all__ = [
    "output",
    "pretty_print",
    "format_board_table",
    "format_lists_table",
    "_sanitize_str",
    "_table",
    "_trunc",
]
