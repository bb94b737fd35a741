"""
Board and List snapshots decoded from Trello responses.

Instances are built by the service layer only. Each one holds a
non-owning reference to the Client that fetched it, so follow-up calls
(lists, rename, close) authenticate without the caller passing credentials.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from trello_cli.api import _expect_object_response, _path_segment, api_request
from trello_cli.exceptions import DecodeError

if TYPE_CHECKING:
    from trello_cli.client import Client
    from trello_cli.types import BoardPayload, List, ListPayload


def _typed(payload, key, kind, default=None):
    """Read *key* from a decoded object, enforcing its JSON type when present."""
    value = payload.get(key)
    if value is None:
        return default
    if not isinstance(value, kind):
        raise DecodeError(
            f"[ERROR] Unexpected type for '{key}': expected {kind.__name__}, "
            f"got {type(value).__name__}."
        )
    return value


@dataclass(frozen=True)
class _List:
    id: str
    name: str
    _client: Client = field(repr=False, compare=False)

    @classmethod
    def from_payload(cls, payload: Any, client: Client) -> _List:
        data = _expect_object_response(payload, "list")
        return cls(
            id=_typed(data, "id", str, ""),
            name=_typed(data, "name", str, ""),
            _client=client,
        )

    def _put_field(self, field_name: str, value: str) -> None:
        api_request(
            self._client.key,
            self._client.token,
            "PUT",
            f"/lists/{_path_segment(self.id)}/{field_name}",
            [("value", value)],
            decode=False,
        )

    def rename(self, new_name: str) -> None:
        """Set the list's name. Raises BadResponseError on a non-2xx answer."""
        self._put_field("name", new_name)

    def close(self) -> None:
        """Archive the list (PUT .../closed; the /name path would rename it to "true")."""
        self._put_field("closed", "true")

    def to_dict(self) -> ListPayload:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True, eq=True)
class _Board:
    """Board snapshot. Not hashable: prefs and label_names are plain dicts."""

    __hash__ = None  # type: ignore[assignment]

    id: str
    name: str
    _client: Client = field(repr=False, compare=False)
    desc: str = ""
    desc_data: Any = None
    closed: bool = False
    id_organization: Any = None
    pinned: bool = False
    short_url: str = ""
    url: str = ""
    prefs: dict[str, Any] | None = None
    label_names: dict[str, Any] | None = None
    # only filled when the fetch asked for lists=all
    board_lists: tuple[_List, ...] = ()

    @classmethod
    def from_payload(cls, payload: Any, client: Client) -> _Board:
        data = _expect_object_response(payload, "board")
        raw_lists = _typed(data, "lists", list, [])
        return cls(
            id=_typed(data, "id", str, ""),
            name=_typed(data, "name", str, ""),
            _client=client,
            desc=_typed(data, "desc", str, ""),
            desc_data=data.get("descData"),
            closed=_typed(data, "closed", bool, False),
            id_organization=data.get("idOrganization"),
            pinned=_typed(data, "pinned", bool, False),
            short_url=_typed(data, "shortUrl", str, ""),
            url=_typed(data, "url", str, ""),
            prefs=_typed(data, "prefs", dict),
            label_names=_typed(data, "labelNames", dict),
            board_lists=tuple(_List.from_payload(item, client) for item in raw_lists),
        )

    def lists(self) -> list[List]:
        """Fetch this board again with lists=all and return its lists.

        Always a new request, even if this snapshot already embeds lists.
        A board without lists yields an empty list.
        """
        payload = api_request(
            self._client.key,
            self._client.token,
            "GET",
            f"/boards/{_path_segment(self.id)}",
            [("lists", "all")],
        )
        return list(_Board.from_payload(payload, self._client).board_lists)

    def to_dict(self) -> BoardPayload:
        out: BoardPayload = {
            "id": self.id,
            "name": self.name,
            "desc": self.desc,
            "descData": self.desc_data,
            "closed": self.closed,
            "idOrganization": self.id_organization,
            "pinned": self.pinned,
            "shortUrl": self.short_url,
            "url": self.url,
        }
        if self.prefs is not None:
            out["prefs"] = self.prefs
        if self.label_names is not None:
            out["labelNames"] = self.label_names
        if self.board_lists:
            out["lists"] = [lst.to_dict() for lst in self.board_lists]
        return out
