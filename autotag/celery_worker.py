import logging
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from .extensions import celery_app, db
from .products import save_product_snapshot
from .rules.store import SqlAlchemyRuleStore
from .shopify_client import ShopifyAdminClient
from .shops import get_active_shop
from .webhooks.applier import apply_product_rules

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, name="tasks.process_product_webhook", max_retries=0)
def process_product_webhook(self, shop_domain: str, topic: str, payload: dict):
    """
    Celery task handling one products/create or products/update webhook:
    mirrors the product locally, then applies the shop's tagging rules.
    """
    try:
        shop = get_active_shop(shop_domain)
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.warning(f"Shop lookup failed for {shop_domain}, skipping {topic}: {e}")
        return {"status": "store_unavailable"}
    if shop is None:
        logger.warning(f"No Shop record found for domain {shop_domain}, skipping {topic}")
        return {"status": "shop_not_found"}

    try:
        save_product_snapshot(shop.id, payload)
    except (SQLAlchemyError, KeyError, TypeError, ValueError) as e:
        # The snapshot is a convenience copy; tagging still goes ahead
        db.session.rollback()
        logger.warning(f"Could not save product {payload.get('id')} for {shop_domain}: {e}")

    client = ShopifyAdminClient(
        shop.shop_domain,
        shop.access_token,
        api_version=current_app.config["SHOPIFY_API_VERSION"],
        timeout=current_app.config["SHOPIFY_HTTP_TIMEOUT"],
    )
    result = apply_product_rules(
        shop.id,
        payload,
        client.update_product_tags,
        SqlAlchemyRuleStore(db.session),
    )
    logger.info(f"{topic} for {shop_domain} product {payload.get('id')}: {result.value}")
    return {"status": result.value}
