# tests/test_http_app.py
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from storefront_app.config import Settings
from storefront_app.di import build_container
from storefront_server import http_app


@pytest.fixture
def client():
    return TestClient(http_app.app)


def _rpc(client, method, params=None, token=None):
    token = token or http_app.settings.MCP_HTTP_BEARER_TOKEN
    return client.post(
        http_app.settings.MCP_HTTP_PATH,
        headers={"Authorization": f"Bearer {token}"},
        json={"jsonrpc": "2.0", "id": 1, "method": method, "params": params or {}},
    )


def test_requires_bearer_token(client):
    resp = client.post(http_app.settings.MCP_HTTP_PATH, json={"jsonrpc": "2.0", "id": 1, "method": "tools/list"})
    assert resp.status_code == 401


def test_tools_list(client):
    body = _rpc(client, "tools/list").json()
    assert len(body["result"]["tools"]) == 8


def test_unknown_tool_is_error_result(client):
    body = _rpc(client, "tools/call", {"name": "unknown_tool_x", "arguments": {}}).json()
    result = body["result"]
    assert result["isError"] is True
    assert result["content"] == [{"type": "text", "text": "Error: Unknown tool: unknown_tool_x"}]


def test_resources_list(client):
    body = _rpc(client, "resources/list").json()
    assert len(body["result"]["resources"]) == 4


def test_resource_read_failure(client):
    body = _rpc(client, "resources/read", {"uri": "file://does/not/exist.rs"}).json()
    assert body["error"]["code"] == -32002
    assert body["error"]["message"].startswith("Failed to read resource:")


def test_unknown_method(client):
    body = _rpc(client, "prompts/list").json()
    assert body["error"]["code"] == -32601


def _post(client, body):
    return client.post(
        http_app.settings.MCP_HTTP_PATH,
        headers={"Authorization": f"Bearer {http_app.settings.MCP_HTTP_BEARER_TOKEN}"},
        json=body,
    )


def test_read_binary_resource(client, tmp_path: Path, monkeypatch):
    (tmp_path / "x.wasm").write_bytes(b"\x00asm\xff\xfe")
    monkeypatch.setattr(http_app, "container", build_container(Settings(PROJECT_ROOT=tmp_path)))

    resp = _rpc(client, "resources/read", {"uri": "file://x.wasm"})

    assert resp.status_code == 200
    contents = resp.json()["result"]["contents"]
    assert contents[0]["uri"] == "file://x.wasm"
    assert contents[0]["mimeType"] == "text/plain"


def test_batch_body_is_invalid_request(client):
    resp = _post(client, [{"jsonrpc": "2.0", "id": 1, "method": "tools/list"}])
    assert resp.status_code == 200
    assert resp.json()["error"]["code"] == -32600


def test_non_object_params_is_invalid_request(client):
    resp = _post(client, {"jsonrpc": "2.0", "id": 7, "method": "tools/call", "params": ["get_product"]})
    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == 7
    assert body["error"]["code"] == -32600
