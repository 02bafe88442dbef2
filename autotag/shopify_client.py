"""
Thin client for the Shopify Admin GraphQL API.

Only two operations are needed: replacing a product's tags and paging
through a shop's products for the backfill script.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

import requests

from .errors import ShopifyApiError

logger = logging.getLogger(__name__)

PRODUCT_UPDATE_MUTATION = """
mutation AutoTagProduct($input: ProductInput!) {
  productUpdate(input: $input) {
    product {
      id
      tags
    }
    userErrors {
      field
      message
    }
  }
}
"""

PRODUCTS_QUERY = """
query GetProducts($first: Int!, $after: String) {
  products(first: $first, after: $after) {
    pageInfo {
      hasNextPage
      endCursor
    }
    edges {
      node {
        id
        title
        vendor
        status
        tags
        totalInventory
        variants(first: 1) {
          edges {
            node {
              price
            }
          }
        }
      }
    }
  }
}
"""

# Shopify rejects queries whose requested cost exceeds this many points.
# A connection costs 2 plus one per requested object, so a page of products
# with one variant each costs 2 + page_size * (1 + 3).
QUERY_COST_LIMIT = 1000
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class UserError:
    field: Optional[List[str]]
    message: str


@dataclass
class MutationResult:
    errors: List[UserError] = field(default_factory=list)
    tags: Optional[List[str]] = None


class ShopifyAdminClient:
    def __init__(self, shop_domain: str, access_token: str, api_version: str = "2024-10",
                 timeout: float = 10, session: Optional[requests.Session] = None):
        self.shop_domain = shop_domain
        self.endpoint = f"https://{shop_domain}/admin/api/{api_version}/graphql.json"
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            "X-Shopify-Access-Token": access_token,
        })

    def graphql(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Run a query and return its ``data`` object; any failure raises ``ShopifyApiError``."""
        try:
            response = self.session.post(
                self.endpoint,
                json={"query": query, "variables": variables or {}},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ShopifyApiError(f"Request to {self.shop_domain} failed: {e}") from e

        if not response.ok:
            raise ShopifyApiError(
                f"Shopify API error: {response.status_code} {response.reason}",
                {"status": response.status_code, "body": response.text[:200]},
            )

        try:
            body = response.json()
        except ValueError as e:
            raise ShopifyApiError(f"Invalid JSON from {self.shop_domain}") from e

        if body.get("errors"):
            messages = [err.get("message", str(err)) for err in body["errors"]]
            raise ShopifyApiError(f"GraphQL errors: {', '.join(messages)}", {"errors": body["errors"]})

        return body.get("data") or {}

    def update_product_tags(self, product_gid: str, tags: List[str]) -> MutationResult:
        """Replace the product's tag list with ``tags``."""
        data = self.graphql(PRODUCT_UPDATE_MUTATION, {"input": {"id": product_gid, "tags": list(tags)}})
        update = data.get("productUpdate") or {}
        errors = [
            UserError(field=err.get("field"), message=err.get("message", ""))
            for err in update.get("userErrors") or []
        ]
        product = update.get("product") or {}
        return MutationResult(errors=errors, tags=product.get("tags"))

    def iter_products(self, page_size: int = MAX_PAGE_SIZE) -> Iterator[Dict[str, Any]]:
        """Yield every product of the shop as a webhook-shaped payload."""
        cursor = None
        while True:
            data = self.graphql(PRODUCTS_QUERY, {"first": min(page_size, MAX_PAGE_SIZE), "after": cursor})
            products = data.get("products")
            if not products:
                raise ShopifyApiError("No products data in response")

            for edge in products.get("edges") or []:
                yield graphql_product_to_payload(edge["node"])

            page_info = products.get("pageInfo") or {}
            if not page_info.get("hasNextPage"):
                break
            cursor = page_info.get("endCursor")


def graphql_product_to_payload(node: Dict[str, Any]) -> Dict[str, Any]:
    """Convert a GraphQL product node to the REST webhook payload shape."""
    match = re.search(r"/(\d+)$", node.get("id") or "")
    tags = node.get("tags") or []
    # Only the first variant is fetched; totalInventory already sums all of them
    variants = (node.get("variants") or {}).get("edges") or []
    return {
        "id": int(match.group(1)) if match else 0,
        "title": node.get("title") or None,
        "vendor": node.get("vendor") or None,
        "status": node["status"].lower() if node.get("status") else None,
        "tags": ", ".join(tags) or None,
        "variants": [
            {
                "price": variants[0]["node"].get("price"),
                "inventory_quantity": node.get("totalInventory"),
            }
        ] if variants else [],
    }
