"""
Client — root object holding the Trello credential pair.

Construction performs no I/O and no validation; a bad key or token only
shows up as a BadResponseError from the first request.
"""

from __future__ import annotations

from dataclasses import dataclass

from trello_cli.api import _mask_token
from trello_cli.services import BoardService, ListService


@dataclass(frozen=True)
class Client:
    key: str
    token: str = ""

    def __repr__(self):
        return f"Client(key={_mask_token(self.key)!r}, token={_mask_token(self.token)!r})"

    def board_service(self) -> BoardService:
        return BoardService(self)

    def list_service(self) -> ListService:
        return ListService(self)


def new_client(key: str, token: str = "") -> Client:
    """Create a Client. Never fails and never touches the network."""
    return Client(key=key, token=token)
