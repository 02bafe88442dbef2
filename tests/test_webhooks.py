from unittest import mock

import pytest
from kombu.exceptions import OperationalError

from autotag.models.product import Product
from autotag.rules.store import SqlAlchemyRuleStore
from autotag.shopify_client import MutationResult

HEADERS = {"X-Shopify-Shop-Domain": "demo.myshopify.com", "X-Shopify-Topic": "products/update"}

PAYLOAD = {
    "id": 632910392,
    "title": "Ocean Shirt",
    "vendor": "Acme",
    "status": "active",
    "tags": "sale",
    "variants": [{"price": "120.00", "inventory_quantity": 3}],
}


@pytest.fixture
def admin_client():
    with mock.patch("autotag.celery_worker.ShopifyAdminClient") as client_cls:
        client_cls.return_value.update_product_tags.return_value = MutationResult()
        yield client_cls


def test_update_webhook_tags_product(client, db_session, shop, admin_client):
    SqlAlchemyRuleStore(db_session).create_rule(shop.id, "price", "gt", "100", "expensive")

    response = client.post("/webhooks/products/update", json=PAYLOAD, headers=HEADERS)

    assert response.status_code == 200
    admin_client.assert_called_once()
    assert admin_client.call_args.args[:2] == ("demo.myshopify.com", "shpat_test")
    admin_client.return_value.update_product_tags.assert_called_once_with(
        "gid://shopify/Product/632910392", ["sale", "expensive"]
    )


def test_create_webhook_saves_product_snapshot(client, db_session, shop, admin_client):
    response = client.post("/webhooks/products/create", json=PAYLOAD, headers=HEADERS)

    assert response.status_code == 200
    saved = Product.query.filter_by(shop_id=shop.id, shopify_product_id=632910392).one()
    assert saved.title == "Ocean Shirt"
    assert saved.price == "120.00"
    assert saved.total_inventory == 3
    # No rules configured, so Shopify is never written to
    admin_client.return_value.update_product_tags.assert_not_called()


def test_repeated_delivery_writes_once(client, db_session, shop, admin_client):
    SqlAlchemyRuleStore(db_session).create_rule(shop.id, "price", "gt", "100", "expensive")

    client.post("/webhooks/products/update", json=PAYLOAD, headers=HEADERS)
    tagged = dict(PAYLOAD, tags="sale, expensive")
    client.post("/webhooks/products/update", json=tagged, headers=HEADERS)

    assert admin_client.return_value.update_product_tags.call_count == 1


def test_unknown_shop_is_acknowledged(client, db_session, admin_client):
    response = client.post("/webhooks/products/update", json=PAYLOAD, headers=HEADERS)

    assert response.status_code == 200
    admin_client.assert_not_called()


def test_missing_shop_header_is_rejected(client, db_session):
    response = client.post("/webhooks/products/update", json=PAYLOAD)
    assert response.status_code == 400


def test_non_product_body_is_rejected(client, db_session):
    response = client.post("/webhooks/products/update", json=["not", "a", "product"], headers=HEADERS)
    assert response.status_code == 400
    response = client.post("/webhooks/products/update", data="garbage", headers=HEADERS)
    assert response.status_code == 400


def test_unknown_topic_is_not_found(client, db_session):
    response = client.post("/webhooks/products/delete", json=PAYLOAD, headers=HEADERS)
    assert response.status_code == 404


def test_queued_when_not_inline(app, client, db_session, monkeypatch):
    monkeypatch.setitem(app.config, "PROCESS_WEBHOOKS_INLINE", False)
    with mock.patch("autotag.blueprints.webhooks.routes.process_product_webhook") as task:
        response = client.post("/webhooks/products/update", json=PAYLOAD, headers=HEADERS)

    assert response.status_code == 200
    task.delay.assert_called_once_with("demo.myshopify.com", "products/update", PAYLOAD)


def test_broker_down_asks_for_redelivery(app, client, db_session, monkeypatch):
    monkeypatch.setitem(app.config, "PROCESS_WEBHOOKS_INLINE", False)
    with mock.patch("autotag.blueprints.webhooks.routes.process_product_webhook") as task:
        task.delay.side_effect = OperationalError("Error 111 connecting to localhost:6379")
        response = client.post("/webhooks/products/update", json=PAYLOAD, headers=HEADERS)

    assert response.status_code == 503
