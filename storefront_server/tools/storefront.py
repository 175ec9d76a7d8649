# storefront_server/tools/storefront.py
from __future__ import annotations
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field

# Required arguments are declared in the schema but checked by the handlers,
# so a missing one yields the handler's own message rather than a pydantic error.


class QueryStorefrontIn(BaseModel):
    model_config = ConfigDict(json_schema_extra={"required": ["query"]})

    query: Optional[str] = Field(None, description="GraphQL query string")
    variables: Optional[Dict[str, Any]] = Field(None, description="Optional GraphQL variables")


class GetProductIn(BaseModel):
    model_config = ConfigDict(json_schema_extra={"required": ["handle"]})

    handle: Optional[str] = Field(None, description="Product handle")


class GetCollectionIn(BaseModel):
    model_config = ConfigDict(json_schema_extra={"required": ["handle"]})

    handle: Optional[str] = Field(None, description="Collection handle")
    first: int = Field(20, description="Number of products to fetch")


class SearchProductsIn(BaseModel):
    model_config = ConfigDict(json_schema_extra={"required": ["query"]})

    query: Optional[str] = Field(None, description="Search query")
    first: int = Field(20, description="Number of results")
