from flask import request, current_app, abort
from kombu.exceptions import OperationalError

from ...extensions import limiter
from ...celery_worker import process_product_webhook
from . import webhooks_bp

PRODUCT_TOPICS = {"create": "products/create", "update": "products/update"}


def _webhook_rate_limit():
    return current_app.config["WEBHOOK_RATE_LIMIT"]


@webhooks_bp.route("/products/<action>", methods=["POST"])
@limiter.limit(_webhook_rate_limit)
def product_webhook(action):
    """
    Receives products/create and products/update deliveries and hands them to
    the tagging task. Answers 200 once the work is queued (or done, when
    processing inline) so the delivery counts as handled.
    """
    topic = PRODUCT_TOPICS.get(action)
    if topic is None:
        return abort(404)

    shop_domain = (request.headers.get("X-Shopify-Shop-Domain") or "").strip().lower()
    if not shop_domain:
        current_app.logger.warning(f"{topic} webhook without shop domain header")
        return {"error": "missing X-Shopify-Shop-Domain header"}, 400

    payload = request.get_json(silent=True)
    if not isinstance(payload, dict) or "id" not in payload:
        current_app.logger.warning(f"{topic} webhook for {shop_domain} with unusable body")
        return {"error": "expected a product JSON object"}, 400

    current_app.logger.info(f"Received {topic} webhook for {shop_domain}")

    if current_app.config.get("PROCESS_WEBHOOKS_INLINE"):
        process_product_webhook(shop_domain, topic, payload)
        return "", 200

    try:
        process_product_webhook.delay(shop_domain, topic, payload)
    except OperationalError as e:
        # Not acknowledged, so the delivery is retried by Shopify
        current_app.logger.exception(f"Could not queue {topic} for {shop_domain}: {e}")
        return {"error": "queue unavailable"}, 503
    return "", 200
