# storefront_app/config.py
from pathlib import Path
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # Project layout (relative dirs are resolved under PROJECT_ROOT)
    PROJECT_ROOT: Path = Path(".")
    MCP_CONFIG_FILE: str = ".mcp-config.json"
    WASM_SOURCE_DIR: str = "storefront-api-wasm/src"
    THEME_ASSETS_DIR: str = "Liquid-main/assets"
    WASM_OUT_DIR: str = "Liquid-main/assets/wasm"


    # HTTP MCP transport
    MCP_HTTP_HOST: str = "127.0.0.1"
    MCP_HTTP_PORT: int = 8080
    MCP_HTTP_PATH: str = "/mcp"

    # Security: Bearer token and allowed origins
    MCP_HTTP_BEARER_TOKEN: str = "change-me"         # set in .env for prod
    MCP_HTTP_ALLOWED_ORIGINS: str = "http://localhost, http://127.0.0.1"
    MCP_HTTP_ALLOW_NO_ORIGIN: bool = True            # allow non-browser clients

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
