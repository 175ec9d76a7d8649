# storefront_server/registry.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Type, Optional, List, Literal, Tuple
from pydantic import BaseModel, PrivateAttr

from fastmcp.exceptions import ResourceError, ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult as McpToolResult
from mcp.types import TextContent

from storefront_app.di import Container, build_container
from storefront_app.logging import log_tool_call
from storefront_app.services.resources import FILE_SCHEME, ResourceReadError

# Import only the Pydantic input models from the tool modules.
from storefront_server.tools.build import BuildWasmIn, CheckBuildStatusIn
from storefront_server.tools.sources import ReadRustCodeIn, ReadJsWrapperIn
from storefront_server.tools.storefront import (
    QueryStorefrontIn,
    GetProductIn,
    GetCollectionIn,
    SearchProductsIn,
)

logger = logging.getLogger(__name__)


class TextBlock(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    content: List[TextBlock]
    isError: bool = False

    @classmethod
    def ok(cls, text: str) -> "ToolResult":
        return cls(content=[TextBlock(text=text)])

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        return cls(content=[TextBlock(text=f"Error: {message}")], isError=True)

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.content)


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_model: Type[BaseModel]
    handler: Callable[[BaseModel], str]


@dataclass(frozen=True)
class ResourceSpec:
    uri: str
    name: str
    description: str
    mimeType: str


RESOURCES: Tuple[ResourceSpec, ...] = (
    ResourceSpec(
        uri="file://storefront-api-wasm/src/lib.rs",
        name="Rust Source Code",
        description="Main Rust implementation for Storefront API",
        mimeType="text/x-rust",
    ),
    ResourceSpec(
        uri="file://Liquid-main/assets/storefront-api.js",
        name="JavaScript Wrapper",
        description="JavaScript wrapper for WebAssembly module",
        mimeType="application/javascript",
    ),
    ResourceSpec(
        uri="file://Liquid-main/assets/storefront-api-integration.js",
        name="Integration Helper",
        description="High-level integration helper",
        mimeType="application/javascript",
    ),
    ResourceSpec(
        uri="file://storefront-api-wasm/Cargo.toml",
        name="Cargo Configuration",
        description="Rust dependencies and build configuration",
        mimeType="text/x-toml",
    ),
)


class ToolHandlers:
    """
    Named handlers for each tool (no lambdas).
    Each returns the text of a successful result or raises; the dispatcher
    turns exceptions into error results.
    """
    def __init__(self, container: Optional[Container] = None):
        self.container = container or build_container()

    # ---- Build
    def build_wasm(self, args: BuildWasmIn) -> str:
        return self.container.wasm_build_service.build_instructions(args.target or "web")

    def check_build_status(self, args: CheckBuildStatusIn) -> str:
        status = self.container.wasm_build_service.check_build_status()
        return json.dumps(status, indent=2)

    # ---- Storefront API
    def query_storefront_api(self, args: QueryStorefrontIn) -> str:
        return self.container.storefront_service.query(args.query, args.variables)

    def get_product(self, args: GetProductIn) -> str:
        return self.container.storefront_service.get_product(args.handle)

    def get_collection(self, args: GetCollectionIn) -> str:
        return self.container.storefront_service.get_collection(args.handle, args.first)

    def search_products(self, args: SearchProductsIn) -> str:
        return self.container.storefront_service.search_products(args.query, args.first)

    # ---- Project sources
    def read_rust_code(self, args: ReadRustCodeIn) -> str:
        return self.container.project_files.read_rust_code(args.file or "lib.rs")

    def read_js_wrapper(self, args: ReadJsWrapperIn) -> str:
        return self.container.project_files.read_js_wrapper(args.file)


def _schema_from_model(model: Type[BaseModel]) -> Dict[str, Any]:
    return model.model_json_schema()


def build_tool_registry(container: Optional[Container] = None) -> Dict[str, ToolSpec]:
    """
    Build a registry once at startup using DI.
    Transport layers (stdio/HTTP) read from this registry to expose tools.
    Insertion order is the order tools are listed in.
    """
    handlers = ToolHandlers(container)

    specs = [
        ToolSpec(
            name="build_wasm",
            description="Build the WebAssembly module for Storefront API",
            input_model=BuildWasmIn,
            handler=handlers.build_wasm,
        ),
        ToolSpec(
            name="query_storefront_api",
            description="Execute a GraphQL query against Shopify Storefront API",
            input_model=QueryStorefrontIn,
            handler=handlers.query_storefront_api,
        ),
        ToolSpec(
            name="get_product",
            description="Get product data by handle using Storefront API",
            input_model=GetProductIn,
            handler=handlers.get_product,
        ),
        ToolSpec(
            name="get_collection",
            description="Get collection data by handle using Storefront API",
            input_model=GetCollectionIn,
            handler=handlers.get_collection,
        ),
        ToolSpec(
            name="search_products",
            description="Search products using Storefront API",
            input_model=SearchProductsIn,
            handler=handlers.search_products,
        ),
        ToolSpec(
            name="read_rust_code",
            description="Read and analyze Rust source code from the WebAssembly module",
            input_model=ReadRustCodeIn,
            handler=handlers.read_rust_code,
        ),
        ToolSpec(
            name="read_js_wrapper",
            description="Read JavaScript wrapper code",
            input_model=ReadJsWrapperIn,
            handler=handlers.read_js_wrapper,
        ),
        ToolSpec(
            name="check_build_status",
            description="Check if WebAssembly files are built and up to date",
            input_model=CheckBuildStatusIn,
            handler=handlers.check_build_status,
        ),
    ]
    return {spec.name: spec for spec in specs}


def list_tools_payload(registry: Dict[str, ToolSpec]) -> Dict[str, Any]:
    """
    Produce the `tools/list` payload body as per the MCP tools protocol.
    """
    tools = []
    for spec in registry.values():
        tools.append({
            "name": spec.name,
            "description": spec.description,
            "inputSchema": _schema_from_model(spec.input_model),
        })
    return {"tools": tools}


def dispatch_tool_call(
    registry: Dict[str, ToolSpec], name: str, arguments: Optional[Dict[str, Any]]
) -> ToolResult:
    """
    Validate args with the tool's Pydantic model, then invoke the named handler.
    Never raises: unknown tools and handler failures come back as error results.
    """
    arguments = arguments or {}
    try:
        log_tool_call(logger, name, arguments)
        if name not in registry:
            raise LookupError(f"Unknown tool: {name}")
        spec = registry[name]
        args_obj = spec.input_model(**arguments)
        return ToolResult.ok(spec.handler(args_obj))
    except Exception as e:
        logger.warning("tool_error %s %s", name, e)
        return ToolResult.error(str(e))


def list_resources_payload() -> Dict[str, Any]:
    return {
        "resources": [
            {"uri": r.uri, "name": r.name, "description": r.description, "mimeType": r.mimeType}
            for r in RESOURCES
        ]
    }


def read_resource_payload(container: Container, uri: str) -> Dict[str, Any]:
    """`resources/read` payload; ResourceReadError propagates to the transport."""
    return {"contents": [container.resource_service.read(uri)]}


class RegistryTool(Tool):
    """FastMCP tool whose schema and behaviour come from a registry entry."""

    _registry: Dict[str, ToolSpec] = PrivateAttr(default_factory=dict)

    async def run(self, arguments: Dict[str, Any]) -> McpToolResult:
        result = dispatch_tool_call(self._registry, self.name, arguments)
        if result.isError:
            raise ToolError(result.text)
        return McpToolResult(
            content=[TextContent(type="text", text=block.text) for block in result.content]
        )


def register_into_fastmcp(mcp, registry: Dict[str, ToolSpec], container: Container) -> None:
    """
    Register all registry tools, the fixed resources and a file:// template
    into a FastMCP stdio host.
    This keeps stdio and HTTP transports in sync without duplication.
    """
    for spec in registry.values():
        tool = RegistryTool(
            name=spec.name,
            description=spec.description,
            parameters=_schema_from_model(spec.input_model),
        )
        tool._registry = registry
        mcp.add_tool(tool)

    def read_text(uri: str) -> str:
        try:
            return container.resource_service.read(uri)["text"]
        except ResourceReadError as e:
            raise ResourceError(str(e)) from e

    for res in RESOURCES:
        # Create a local closure so each reader binds to its URI
        def make_reader(uri: str):
            def read_resource() -> str:
                return read_text(uri)
            return read_resource

        mcp.resource(
            res.uri, name=res.name, description=res.description, mime_type=res.mimeType
        )(make_reader(res.uri))

    # Any other file under the project root is readable by URI, unlisted
    @mcp.resource(
        FILE_SCHEME + "{path*}",
        name="Project File",
        description="Any text file under the project root",
    )
    def read_project_file(path: str) -> str:
        return read_text(FILE_SCHEME + path)
