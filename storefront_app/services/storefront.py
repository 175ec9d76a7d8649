# storefront_app/services/storefront.py
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import httpx

from storefront_app.services.config_loader import ConfigLoader

logger = logging.getLogger(__name__)

CONFIG_MISSING_MESSAGE = (
    "Storefront API configuration not found. Please set up your access token first."
)

PRODUCT_QUERY = """
query getProduct($handle: String!) {
  product(handle: $handle) {
    id
    title
    description
    handle
    vendor
    priceRange {
      minVariantPrice {
        amount
        currencyCode
      }
    }
    images(first: 10) {
      edges {
        node {
          url
          altText
        }
      }
    }
  }
}
"""

COLLECTION_QUERY = """
query getCollection($handle: String!, $first: Int!) {
  collection(handle: $handle) {
    id
    title
    description
    products(first: $first) {
      edges {
        node {
          id
          title
          handle
          priceRange {
            minVariantPrice {
              amount
              currencyCode
            }
          }
        }
      }
    }
  }
}
"""

SEARCH_PRODUCTS_QUERY = """
query searchProducts($query: String!, $first: Int!) {
  products(first: $first, query: $query) {
    edges {
      node {
        id
        title
        handle
        priceRange {
          minVariantPrice {
            amount
            currencyCode
          }
        }
      }
    }
  }
}
"""


class StorefrontApiError(RuntimeError):
    pass


class StorefrontHttpClient:
    """
    One POST per call to the shop's Storefront GraphQL endpoint:
    - fresh httpx.Client each time (no pooling), httpx default timeout
    - no retries, no status check; the JSON body is returned as sent
    """

    def __init__(self, transport: Optional[httpx.BaseTransport] = None):
        # transport is only overridden in tests
        self._transport = transport

    def endpoint(self, shop_domain: str, api_version: str) -> str:
        return f"https://{shop_domain}/api/{api_version}/graphql.json"

    def post_graphql(
        self,
        shop_domain: str,
        api_version: str,
        access_token: str,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
    ) -> Any:
        url = self.endpoint(shop_domain, api_version)
        headers = {
            "Content-Type": "application/json",
            "X-Shopify-Storefront-Access-Token": access_token,
        }
        payload = {"query": query, "variables": variables or {}}
        try:
            with httpx.Client(transport=self._transport) as client:
                resp = client.post(url, headers=headers, json=payload)
                return resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise StorefrontApiError(f"API request failed: {e}") from e


class StorefrontService:
    """GraphQL proxy tools; the product/collection/search helpers are fixed documents."""

    def __init__(self, config_loader: ConfigLoader, http_client: StorefrontHttpClient):
        self.config_loader = config_loader
        self.http_client = http_client

    def query(self, query: Optional[str], variables: Optional[Dict[str, Any]] = None) -> str:
        if not query:
            raise ValueError("GraphQL query is required")

        config = self.config_loader.load_config()
        if config is None:
            logger.info("storefront config missing; skipping request")
            return CONFIG_MISSING_MESSAGE

        data = self.http_client.post_graphql(
            config.shopDomain, config.apiVersion, config.accessToken, query, variables
        )
        return json.dumps(data, indent=2)

    def get_product(self, handle: Optional[str]) -> str:
        if not handle:
            raise ValueError("Product handle is required")
        return self.query(PRODUCT_QUERY, {"handle": handle})

    def get_collection(self, handle: Optional[str], first: int = 20) -> str:
        if not handle:
            raise ValueError("Collection handle is required")
        return self.query(COLLECTION_QUERY, {"handle": handle, "first": first})

    def search_products(self, query: Optional[str], first: int = 20) -> str:
        if not query:
            raise ValueError("Search query is required")
        return self.query(SEARCH_PRODUCTS_QUERY, {"query": query, "first": first})
