"""
Service objects: stateless accessors bound to a Client, one per resource kind.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from trello_cli.api import _path_segment, api_request
from trello_cli.models import _Board, _List

if TYPE_CHECKING:
    from trello_cli.client import Client
    from trello_cli.types import Board, List


@dataclass(frozen=True)
class BoardService:
    client: Client

    def get_board(self, board_id: str, include_lists: bool = False) -> Board:
        """Fetch one board. The id is passed through unvalidated.

        With include_lists the response embeds the board's lists
        (see ``board_lists``); ``Board.lists()`` always fetches them anew.
        """
        params = [("lists", "all")] if include_lists else []
        payload = api_request(
            self.client.key,
            self.client.token,
            "GET",
            f"/boards/{_path_segment(board_id)}",
            params,
        )
        return _Board.from_payload(payload, self.client)


@dataclass(frozen=True)
class ListService:
    client: Client

    def create(self, name: str, board_id: str, pos: str = "") -> List:
        """Create a list on a board; *pos* ("top", "bottom" or a number) is optional."""
        params = [("name", name), ("idBoard", board_id)]
        if pos:
            params.append(("pos", pos))
        payload = api_request(self.client.key, self.client.token, "POST", "/lists", params)
        return _List.from_payload(payload, self.client)

    def get_list(self, list_id: str) -> List:
        payload = api_request(
            self.client.key,
            self.client.token,
            "GET",
            f"/lists/{_path_segment(list_id)}",
        )
        return _List.from_payload(payload, self.client)
