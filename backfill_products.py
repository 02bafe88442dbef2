"""
Fetch every product of one shop (or of all installed shops) from the Shopify
Admin API and save it to the local products table, optionally running the
shop's tagging rules on each product as well.

Usage:
    python backfill_products.py [shop_domain] [--apply-rules]
"""
import argparse
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from autotag.app import create_app
from autotag.errors import ShopifyApiError
from autotag.extensions import db
from autotag.models.shop import Shop
from autotag.products import save_product_snapshot
from autotag.rules.store import SqlAlchemyRuleStore
from autotag.shopify_client import ShopifyAdminClient
from autotag.shops import get_active_shop
from autotag.webhooks.applier import ApplyResult, apply_product_rules

logger = logging.getLogger("backfill_products")


def backfill_shop(shop, config, apply_rules=False):
    """Returns (saved, errors, tagged) counts for the shop."""
    client = ShopifyAdminClient(
        shop.shop_domain,
        shop.access_token,
        api_version=config["SHOPIFY_API_VERSION"],
        timeout=config["SHOPIFY_HTTP_TIMEOUT"],
    )
    store = SqlAlchemyRuleStore(db.session)
    saved = errors = tagged = 0

    for payload in client.iter_products():
        try:
            save_product_snapshot(shop.id, payload)
            saved += 1
        except (SQLAlchemyError, KeyError, TypeError, ValueError) as e:
            db.session.rollback()
            errors += 1
            logger.error(f"Error saving product {payload.get('id')}: {e}")
            continue

        if apply_rules:
            result = apply_product_rules(shop.id, payload, client.update_product_tags, store)
            if result is ApplyResult.UPDATED:
                tagged += 1

        if saved % 50 == 0:
            logger.info(f"Saved {saved} products so far for {shop.shop_domain}...")

    return saved, errors, tagged


def main(argv=None):
    parser = argparse.ArgumentParser(description="Backfill Shopify products into the local database.")
    parser.add_argument("shop_domain", nargs="?", help="Only backfill this shop")
    parser.add_argument("--apply-rules", action="store_true", help="Also apply tagging rules to every product")
    args = parser.parse_args(argv)

    app = create_app()
    with app.app_context():
        if args.shop_domain:
            shop = get_active_shop(args.shop_domain)
            if shop is None:
                logger.error(f"Shop not found or uninstalled: {args.shop_domain}")
                return 1
            shops = [shop]
        else:
            shops = Shop.query.filter(Shop.uninstalled_at.is_(None)).order_by(Shop.id).all()
            if not shops:
                logger.info("No installed shops found.")
                return 0

        failed = 0
        for shop in shops:
            logger.info(f"Backfilling products for {shop.shop_domain}")
            try:
                saved, errors, tagged = backfill_shop(shop, app.config, apply_rules=args.apply_rules)
            except ShopifyApiError as e:
                failed += 1
                logger.error(f"Error backfilling products for {shop.shop_domain}: {e.message}")
                continue
            logger.info(f"Completed {shop.shop_domain}: saved={saved} errors={errors} tagged={tagged}")

        return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
