# storefront_server/http_app.py
from __future__ import annotations

from typing import Any, Dict
from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse

from storefront_app.di import build_container
from storefront_app.config import Settings
from storefront_app.logging import configure_logging
from storefront_app.services.resources import ResourceReadError

from storefront_server.registry import (
    build_tool_registry,
    dispatch_tool_call,
    list_resources_payload,
    list_tools_payload,
    read_resource_payload,
)

settings = Settings()
configure_logging(settings.LOG_LEVEL)
app = FastAPI(title="Storefront API MCP HTTP Server", version="0.1.0")
container = build_container(settings)
REGISTRY = build_tool_registry(container)


PROTOCOL_VERSION = "2025-03-26"  # MCP protocol revision

# ---------- Security: Origin validation & Bearer token ----------

def _origin_allowed(req: Request) -> bool:
    origin = req.headers.get("origin")
    if not origin:
        return settings.MCP_HTTP_ALLOW_NO_ORIGIN
    allowed = {o.strip().lower() for o in settings.MCP_HTTP_ALLOWED_ORIGINS.split(",") if o.strip()}
    return origin.lower() in allowed

def _require_auth(req: Request):
    auth = req.headers.get("authorization", "")
    if not auth.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing Bearer token")
    token = auth.split(" ", 1)[1]
    if token != settings.MCP_HTTP_BEARER_TOKEN:
        raise HTTPException(status_code=401, detail="Invalid Bearer token")

@app.middleware("http")
async def origin_validation_mw(request: Request, call_next):
    # MCP transport requires Origin validation to prevent DNS rebinding
    # If provided and not allowed → 403
    if not _origin_allowed(request):
        return JSONResponse({"error": {"code": 403, "message": "Forbidden origin"}}, status_code=403)
    return await call_next(request)


def _jsonrpc_error(id_: Any, code: int, message: str, data: Any | None = None) -> JSONResponse:
    body: Dict[str, Any] = {"jsonrpc": "2.0", "id": id_, "error": {"code": code, "message": message}}
    if data is not None:
        body["error"]["data"] = data
    return JSONResponse(body)

def _jsonrpc_result(id_: Any, result: Any) -> JSONResponse:
    return JSONResponse({"jsonrpc": "2.0", "id": id_, "result": result})



# ---------- MCP JSON-RPC endpoint (Streamable HTTP) ----------

@app.post(settings.MCP_HTTP_PATH)
async def mcp_endpoint(request: Request):
    _require_auth(request)

    try:
        payload = await request.json()
    except ValueError:
        return _jsonrpc_error(None, -32700, "Parse error")

    # Batches and non-object bodies are not supported
    if not isinstance(payload, dict):
        return _jsonrpc_error(None, -32600, "Invalid Request")

    id_ = payload.get("id")
    method = payload.get("method")
    params = payload.get("params") or {}
    if not isinstance(params, dict):
        return _jsonrpc_error(id_, -32600, "Invalid Request", "params must be an object")

    if method == "initialize":
        return _jsonrpc_result(id_, {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {"tools": {}, "resources": {}},
            "serverInfo": {"name": "storefront-api-mcp-server", "version": "0.1.0"},
        })

    if method == "tools/list":
        return _jsonrpc_result(id_, list_tools_payload(REGISTRY))

    if method == "tools/call":
        result = dispatch_tool_call(REGISTRY, params.get("name"), params.get("arguments"))
        return _jsonrpc_result(id_, result.model_dump())

    if method == "resources/list":
        return _jsonrpc_result(id_, list_resources_payload())

    if method == "resources/read":
        uri = params.get("uri")
        if not uri:
            return _jsonrpc_error(id_, -32602, "Missing resource uri")
        try:
            return _jsonrpc_result(id_, read_resource_payload(container, uri))
        except ResourceReadError as e:
            return _jsonrpc_error(id_, -32002, str(e), {"uri": uri})

    return _jsonrpc_error(id_, -32601, f"Method not found: {method}")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "storefront_server.http_app:app",
        host=settings.MCP_HTTP_HOST,
        port=settings.MCP_HTTP_PORT,
        reload=False,
    )
