# storefront_server/tools/build.py
from typing import Optional
from pydantic import BaseModel, Field


class BuildWasmIn(BaseModel):
    target: Optional[str] = Field(
        "web",
        description='Build target (currently only "web" is supported)',
        json_schema_extra={"enum": ["web"]},
    )


class CheckBuildStatusIn(BaseModel):
    pass
