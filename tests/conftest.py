"""
Shared test fixtures for trello-cli tests.
Patches config module to avoid loading a real .env and making real API calls.
"""

import json
import os
import sys
import threading
import urllib.parse
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

# Add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from trello_cli import config  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    """Ensure every test starts with a clean config state."""
    monkeypatch.setattr(config, "env", {})
    monkeypatch.setattr(config, "API_KEY", "fake-key")
    monkeypatch.setattr(config, "API_TOKEN", "fake-token")
    monkeypatch.setattr(config, "HTTP_LOG_ENABLED", False)
    monkeypatch.setattr(config, "HTTP_LOG_SAMPLE_RATE", 1.0)
    monkeypatch.setattr(config, "HTTP_TIMEOUT_SECONDS", 5)


# ---------------------------------------------------------------------------
# Local stand-in for the Trello API
# ---------------------------------------------------------------------------


@dataclass
class RecordedRequest:
    method: str
    path: str
    query: str
    pairs: list = field(default_factory=list)

    @property
    def params(self):
        return dict(self.pairs)


class FakeTrello:
    """Canned responses keyed by (method, path); records every request."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def route(self, method, path, body=None, status=200):
        self.routes[(method, path)] = (status, body)

    def count(self, method=None, path=None):
        return sum(
            1
            for r in self.requests
            if (method is None or r.method == method) and (path is None or r.path == path)
        )


class _Handler(BaseHTTPRequestHandler):
    def _handle(self):
        fake = self.server.fake
        split = urllib.parse.urlsplit(self.path)
        fake.requests.append(
            RecordedRequest(
                method=self.command,
                path=split.path,
                query=split.query,
                pairs=urllib.parse.parse_qsl(split.query, keep_blank_values=True),
            )
        )
        status, body = fake.routes.get((self.command, split.path), (404, "not found"))
        if body is None:
            data = b""
        elif isinstance(body, (bytes, str)):
            data = body.encode("utf-8") if isinstance(body, str) else body
        else:
            data = json.dumps(body).encode("utf-8")
        self.send_response(status)
        if status == 204:
            self.end_headers()
            return
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    do_GET = _handle
    do_PUT = _handle
    do_POST = _handle

    def log_message(self, format, *args):
        pass


@pytest.fixture
def trello_server(monkeypatch):
    """Serve FakeTrello on localhost and point config.BASE_URL at it."""
    for var in ("http_proxy", "HTTP_PROXY", "https_proxy", "HTTPS_PROXY", "all_proxy", "ALL_PROXY"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("no_proxy", "127.0.0.1,localhost")
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")

    server = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    server.fake = FakeTrello()
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    monkeypatch.setattr(config, "BASE_URL", f"http://127.0.0.1:{server.server_address[1]}")
    try:
        yield server.fake
    finally:
        server.shutdown()
        server.server_close()
