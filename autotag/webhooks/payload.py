"""
Mapping of Shopify product webhook payloads (REST shape) to the values the
rule engine works with.

Only the fields we depend on are read; everything else in the payload is
ignored. Nothing here raises for bad payload content: unusable values become
``None`` and the evaluator decides what that means.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..rules.evaluator import ProductForEvaluation
from ..rules.fields import parse_float, parse_int

PRODUCT_GID_PREFIX = "gid://shopify/Product/"


@dataclass(frozen=True)
class MappedProduct:
    shopify_product_id: str
    product_for_evaluation: ProductForEvaluation
    existing_tags: List[str] = field(default_factory=list)


def product_gid(product_id: Any) -> str:
    return f"{PRODUCT_GID_PREFIX}{product_id}"


def parse_tags(raw: Any) -> List[str]:
    """Split a comma-joined tag string; trims, drops empties and duplicates."""
    if not isinstance(raw, str):
        return []
    tags = (tag.strip() for tag in raw.split(","))
    return list(dict.fromkeys(tag for tag in tags if tag))


def variants_of(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    variants = payload.get("variants")
    if not isinstance(variants, list):
        return []
    return [v for v in variants if isinstance(v, dict)]


def first_variant_price(payload: Dict[str, Any]) -> Optional[float]:
    variants = variants_of(payload)
    if not variants:
        return None
    return parse_float(variants[0].get("price"))


def total_inventory(payload: Dict[str, Any]) -> Optional[int]:
    variants = variants_of(payload)
    if not variants:
        return None
    return sum(parse_int(v.get("inventory_quantity")) or 0 for v in variants)


def map_webhook_payload_to_product(payload: Dict[str, Any]) -> MappedProduct:
    vendor = payload.get("vendor")
    if not isinstance(vendor, str) or not vendor.strip():
        vendor = None

    return MappedProduct(
        shopify_product_id=product_gid(payload.get("id")),
        product_for_evaluation=ProductForEvaluation(
            price=first_variant_price(payload),
            total_inventory=total_inventory(payload),
            vendor=vendor,
        ),
        existing_tags=parse_tags(payload.get("tags")),
    )
