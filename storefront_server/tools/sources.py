# storefront_server/tools/sources.py
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

JS_WRAPPER_FILES = ["storefront-api.js", "storefront-api-integration.js"]


class ReadRustCodeIn(BaseModel):
    file: Optional[str] = Field("lib.rs", description="File path relative to storefront-api-wasm/src/")


class ReadJsWrapperIn(BaseModel):
    model_config = ConfigDict(json_schema_extra={"required": ["file"]})

    file: Optional[str] = Field(
        None,
        description="JavaScript wrapper file to read",
        json_schema_extra={"enum": JS_WRAPPER_FILES},
    )
