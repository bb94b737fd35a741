"""Capability interfaces and JSON payload shapes.

Callers program against the Board and List protocols; the concrete
implementations in trello_cli.models are only built by the service layer.
The TypedDicts document the raw response bodies (plain dicts at runtime).
"""

from __future__ import annotations

from typing import Any, Protocol, TypedDict

# ---------------------------------------------------------------------------
# Capabilities
# ---------------------------------------------------------------------------


class List(Protocol):
    """A list on a board."""

    @property
    def id(self) -> str: ...

    @property
    def name(self) -> str: ...

    def rename(self, new_name: str) -> None: ...

    def close(self) -> None: ...

    def to_dict(self) -> ListPayload: ...


class Board(Protocol):
    """A board. Its lists are fetched on demand."""

    @property
    def id(self) -> str: ...

    @property
    def name(self) -> str: ...

    def lists(self) -> list[List]: ...

    def to_dict(self) -> BoardPayload: ...


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------


class ListPayload(TypedDict, total=False):
    id: str
    name: str


class BoardPayload(TypedDict, total=False):
    id: str
    name: str
    desc: str
    descData: Any
    closed: bool
    idOrganization: Any
    pinned: bool
    shortUrl: str
    url: str
    prefs: dict[str, Any]
    labelNames: dict[str, Any]
    lists: list[ListPayload]
