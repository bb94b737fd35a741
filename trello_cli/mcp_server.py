"""MCP server exposing board and list operations as tools.

Run: trello-mcp   (or: python -m trello_cli.mcp_server)
Requires: pip install .[mcp]
Credentials: TRELLO_KEY / TRELLO_TOKEN in .env
"""

from __future__ import annotations

import re

from mcp.server.fastmcp import FastMCP

from trello_cli import config
from trello_cli.client import Client, new_client
from trello_cli.exceptions import BadResponseError, DecodeError, TransportError, TrelloError

mcp = FastMCP(
    "trello",
    instructions=(
        "Trello board and list tools. "
        "Board and list IDs are alphanumeric (24-char ids or 8-char short links). "
        "Closing a list archives it; there is no delete."
    ),
)

_client: Client | None = None

_ID_RE = re.compile(r"^[A-Za-z0-9]+$")


# ---------------------------------------------------------------------------
# Core helpers
# ---------------------------------------------------------------------------


def _get_client() -> Client:
    """Return a cached Client built from .env credentials."""
    global _client
    if _client is None:
        if not config.API_KEY:
            raise TrelloError("[SETUP_NEEDED] TRELLO_KEY not set in .env.")
        _client = new_client(config.API_KEY, config.API_TOKEN)
    return _client


def _contract_error(message: str, error_type: str = "error") -> dict:
    return {
        "ok": False,
        "schema_version": config.CONTRACT_SCHEMA_VERSION,
        "error": message,
        "error_detail": {"type": error_type, "message": message},
    }


def _contract_ok(data) -> dict:
    return {"ok": True, "schema_version": config.CONTRACT_SCHEMA_VERSION, "data": data}


def _error_type(err: TrelloError) -> str:
    if isinstance(err, BadResponseError):
        return "bad_response"
    if isinstance(err, TransportError):
        return "transport"
    if isinstance(err, DecodeError):
        return "decode"
    if str(err).startswith("[SETUP_NEEDED]"):
        return "setup"
    return "error"


def _validate_id(value: str, field: str) -> str:
    if not isinstance(value, str) or not _ID_RE.match(value):
        raise TrelloError(f"[ERROR] {field} must be an alphanumeric Trello id, got: {value!r}")
    return value


def _call(fn, *args):
    """Run fn(client, *args), converting TrelloError into an error dict."""
    try:
        return _contract_ok(fn(_get_client(), *args))
    except TrelloError as e:
        return _contract_error(str(e), _error_type(e))


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


def get_board(board_id: str, include_lists: bool = False) -> dict:
    """Fetch a board's fields, optionally with its lists embedded."""
    try:
        _validate_id(board_id, "board_id")
    except TrelloError as e:
        return _contract_error(str(e))
    return _call(
        lambda c, bid: c.board_service().get_board(bid, include_lists=include_lists).to_dict(),
        board_id,
    )


def list_board_lists(board_id: str) -> dict:
    """List the lists on a board (id and name)."""
    try:
        _validate_id(board_id, "board_id")
    except TrelloError as e:
        return _contract_error(str(e))
    return _call(
        lambda c, bid: [lst.to_dict() for lst in c.board_service().get_board(bid).lists()],
        board_id,
    )


def create_list(name: str, board_id: str, pos: str = "") -> dict:
    """Create a list on a board.

    Args:
        pos: "top", "bottom" or a positive number. Empty keeps Trello's default.
    """
    try:
        _validate_id(board_id, "board_id")
        if not name.strip():
            raise TrelloError("[ERROR] name cannot be empty.")
    except TrelloError as e:
        return _contract_error(str(e))
    return _call(
        lambda c, n, bid, p: c.list_service().create(n, bid, p).to_dict(),
        name,
        board_id,
        pos,
    )


def rename_list(list_id: str, new_name: str) -> dict:
    """Rename a list."""
    try:
        _validate_id(list_id, "list_id")
        if not new_name.strip():
            raise TrelloError("[ERROR] new_name cannot be empty.")
    except TrelloError as e:
        return _contract_error(str(e))

    def _rename(c, lid, nn):
        lst = c.list_service().get_list(lid)
        lst.rename(nn)
        return {"id": lst.id, "name": nn}

    return _call(_rename, list_id, new_name)


def close_list(list_id: str) -> dict:
    """Archive (close) a list."""
    try:
        _validate_id(list_id, "list_id")
    except TrelloError as e:
        return _contract_error(str(e))

    def _close(c, lid):
        lst = c.list_service().get_list(lid)
        lst.close()
        return {"id": lst.id, "closed": True}

    return _call(_close, list_id)


for _tool in (get_board, list_board_lists, create_list, rename_list, close_list):
    mcp.tool()(_tool)


def main():
    """Run the MCP server (stdio transport)."""
    mcp.run()


if __name__ == "__main__":
    main()
