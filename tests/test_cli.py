"""
Tests for the command line front-end. GatewayClient is patched to a fake transport.
"""

from __future__ import annotations

import httpx
import pytest

from solver import cli
from solver.client import GatewayClient


def _patched_client(handler):
    class _Client(GatewayClient):
        def __init__(self, session, http=None):
            super().__init__(
                session,
                http=httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://gateway"),
            )

    return _Client


def _handler(content: str, configured: bool = True):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/config":
            return httpx.Response(200, json={"apiKeyConfigured": configured, "apiKeyHint": None, "model": "gpt-4o"})
        return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})

    return handler


def test_solve_prints_and_exports(monkeypatch: pytest.MonkeyPatch, tmp_path, capsys):
    monkeypatch.setattr(cli, "GatewayClient", _patched_client(_handler('[{"title": "Pilot"}]')))
    out_file = tmp_path / "export.txt"

    code = cli.main(["solve", "Too many meetings", "--domain", "business", "--export", str(out_file)])

    assert code == 0
    assert "1. Pilot" in capsys.readouterr().out
    assert "Title: Pilot" in out_file.read_text(encoding="utf-8")


def test_reframe_labels_techniques(monkeypatch: pytest.MonkeyPatch, capsys):
    monkeypatch.setattr(cli, "GatewayClient", _patched_client(_handler('["a", "b", "c"]')))
    assert cli.main(["reframe", "Too many meetings"]) == 0
    out = capsys.readouterr().out
    assert "[inversion] a" in out
    assert "[random-association] c" in out


def test_unconfigured_gateway_exits_1(monkeypatch: pytest.MonkeyPatch, capsys):
    monkeypatch.setattr(cli, "GatewayClient", _patched_client(_handler("x", configured=False)))
    monkeypatch.setattr("solver.client.asyncio.sleep", _no_sleep)

    assert cli.main(["ask", "Too many meetings", "--title", "Pilot", "What now?"]) == 1
    assert "API key not configured" in capsys.readouterr().err


async def _no_sleep(_seconds):
    return None


def test_unreachable_gateway_exits_1(monkeypatch: pytest.MonkeyPatch, capsys):
    def down(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    monkeypatch.setattr(cli, "GatewayClient", _patched_client(down))
    monkeypatch.setattr("solver.client.asyncio.sleep", _no_sleep)

    assert cli.main(["solve", "Too many meetings"]) == 1
    assert "Gateway unreachable" in capsys.readouterr().err
