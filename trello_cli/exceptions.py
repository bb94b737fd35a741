"""
trello-cli exception hierarchy.

All custom exceptions live here to avoid circular imports.
"""


class TrelloError(Exception):
    """Base for every error surfaced to callers. Exit code 1."""

    exit_code = 1


class RequestError(TrelloError):
    """The request could not be built (malformed URL or verb)."""


class TransportError(TrelloError):
    """Network, DNS, connection or timeout failure."""


class DecodeError(TrelloError):
    """Response body is not JSON or does not have the expected shape."""


class BadResponseError(TrelloError):
    """The remote service answered with a non-2xx status."""

    def __init__(self, code, reason, message=None):
        self.code = code
        self.reason = reason or ""
        self.status = f"{code} {self.reason}".strip()
        super().__init__(message or f"[ERROR] bad response code: {self.status}")


class HTTPError(Exception):
    """Raised by _http_request for HTTP errors that callers want to handle."""

    def __init__(self, code, reason, body, headers=None):
        self.code = code
        self.reason = reason
        self.body = body
        self.headers = headers or {}
