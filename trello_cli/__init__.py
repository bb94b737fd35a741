"""trello-cli — minimal client for the Trello boards and lists REST API."""

from trello_cli.client import Client, new_client
from trello_cli.config import VERSION
from trello_cli.exceptions import (
    BadResponseError,
    DecodeError,
    RequestError,
    TransportError,
    TrelloError,
)
from trello_cli.services import BoardService, ListService
from trello_cli.types import Board, BoardPayload, List, ListPayload

__all__ = [
    "VERSION",
    "Client",
    "new_client",
    "BoardService",
    "ListService",
    "Board",
    "List",
    "BoardPayload",
    "ListPayload",
    "TrelloError",
    "RequestError",
    "TransportError",
    "DecodeError",
    "BadResponseError",
]
