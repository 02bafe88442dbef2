"""Local mirror of the products we receive, written from webhooks and the backfill."""
from typing import Any, Dict

from .extensions import db
from .models.product import Product
from .webhooks.payload import variants_of, total_inventory


def save_product_snapshot(shop_id: int, payload: Dict[str, Any]) -> Product:
    """Insert or update the shop's copy of the product described by ``payload``."""
    shopify_product_id = int(payload["id"])
    product = Product.query.filter_by(shop_id=shop_id, shopify_product_id=shopify_product_id).first()
    if product is None:
        product = Product(shop_id=shop_id, shopify_product_id=shopify_product_id)
        db.session.add(product)

    variants = variants_of(payload)
    price = variants[0].get("price") if variants else None

    product.title = payload.get("title")
    product.vendor = payload.get("vendor")
    product.tags = payload.get("tags")
    product.status = payload.get("status")
    product.price = str(price) if price is not None else None
    product.total_inventory = total_inventory(payload)
    db.session.commit()
    return product
