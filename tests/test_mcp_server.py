"""Tests for the MCP tool wrappers.

Tools run against the local Trello stand-in; errors must come back as dicts.
"""

import pytest

mcp_mod = pytest.importorskip("trello_cli.mcp_server", reason="mcp package not installed")

from trello_cli import config  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_client_cache():
    mcp_mod._client = None
    yield
    mcp_mod._client = None


class TestReadTools:
    def test_get_board(self, trello_server):
        trello_server.route("GET", "/1/boards/B1", {"id": "B1", "name": "Roadmap"})
        result = mcp_mod.get_board("B1")
        assert result["ok"] is True
        assert result["data"]["name"] == "Roadmap"
        assert trello_server.requests[0].params == {"key": "fake-key", "token": "fake-token"}

    def test_list_board_lists(self, trello_server):
        trello_server.route(
            "GET", "/1/boards/B1", {"id": "B1", "lists": [{"id": "L1", "name": "Todo"}]}
        )
        result = mcp_mod.list_board_lists("B1")
        assert result["data"] == [{"id": "L1", "name": "Todo"}]

    def test_not_found_becomes_error_dict(self, trello_server):
        result = mcp_mod.get_board("B404")
        assert result["ok"] is False
        assert result["error_detail"]["type"] == "bad_response"
        assert "404" in result["error"]


class TestWriteTools:
    def test_create_list(self, trello_server):
        trello_server.route("POST", "/1/lists", {"id": "L9", "name": "New"})
        result = mcp_mod.create_list("New", "B1", "bottom")
        assert result["data"] == {"id": "L9", "name": "New"}
        assert trello_server.requests[0].params["pos"] == "bottom"

    def test_rename_list(self, trello_server):
        trello_server.route("GET", "/1/lists/L1", {"id": "L1", "name": "Old"})
        trello_server.route("PUT", "/1/lists/L1/name", None, status=204)
        result = mcp_mod.rename_list("L1", "New name")
        assert result["data"] == {"id": "L1", "name": "New name"}
        assert trello_server.count("PUT") == 1

    def test_close_list(self, trello_server):
        trello_server.route("GET", "/1/lists/L1", {"id": "L1", "name": "Old"})
        trello_server.route("PUT", "/1/lists/L1/closed", {"id": "L1", "closed": True})
        result = mcp_mod.close_list("L1")
        assert result["data"] == {"id": "L1", "closed": True}


class TestValidation:
    @pytest.mark.parametrize("bad", ["", "a/b", "../x", "id with space"])
    def test_bad_ids_rejected_without_request(self, trello_server, bad):
        result = mcp_mod.get_board(bad)
        assert result["ok"] is False
        assert trello_server.count() == 0

    def test_empty_name_rejected(self, trello_server):
        assert mcp_mod.create_list("  ", "B1")["ok"] is False
        assert mcp_mod.rename_list("L1", "")["ok"] is False
        assert trello_server.count() == 0

    def test_missing_key_is_setup_error(self, monkeypatch):
        monkeypatch.setattr(config, "API_KEY", "")
        result = mcp_mod.list_board_lists("B1")
        assert result["ok"] is False
        assert result["error_detail"]["type"] == "setup"

    def test_client_cached(self, trello_server):
        trello_server.route("GET", "/1/boards/B1", {"id": "B1", "name": "R"})
        mcp_mod.get_board("B1")
        first = mcp_mod._client
        mcp_mod.get_board("B1")
        assert mcp_mod._client is first
