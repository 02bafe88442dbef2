import logging
from enum import Enum
from typing import Any, Callable, Dict, List

from ..errors import RuleStoreError, ShopifyApiError
from ..rules.evaluator import evaluate_product_rules
from ..rules.merger import NO_CHANGE, merge_product_tags
from ..rules.store import RuleStore
from .payload import map_webhook_payload_to_product

logger = logging.getLogger(__name__)


def mutation_errors(result: Any) -> list:
    """Field errors from a mutation result, given as an object or a mapping."""
    if isinstance(result, dict):
        errors = result.get("errors")
    else:
        errors = getattr(result, "errors", None)
    return list(errors or [])


class ApplyResult(str, Enum):
    STORE_UNAVAILABLE = "store_unavailable"
    NO_RULES = "no_rules"
    NO_MATCH = "no_match"
    NO_CHANGE = "no_change"
    UPDATED = "updated"
    MUTATION_ERRORS = "mutation_errors"
    MUTATION_FAILED = "mutation_failed"


def apply_product_rules(
    shop_id: int,
    payload: Dict[str, Any],
    mutate: Callable[[str, List[str]], Any],
    store: RuleStore,
) -> ApplyResult:
    """
    Apply a shop's rules to one product webhook payload.

    ``mutate(product_gid, tags)`` is called at most once, with the full tag
    list, and only when at least one new tag would be added. Existing tags
    are never removed. Failures are logged and reported through the returned
    ``ApplyResult``; nothing is raised to the caller.
    """
    try:
        rules = store.load_rules(shop_id)
    except RuleStoreError as e:
        logger.warning(f"Skipping product rules for shop {shop_id}: {e.message}")
        return ApplyResult.STORE_UNAVAILABLE

    if not rules:
        return ApplyResult.NO_RULES

    mapped = map_webhook_payload_to_product(payload)

    rule_tags = evaluate_product_rules(mapped.product_for_evaluation, rules)
    if not rule_tags:
        logger.debug(f"No rule matched {mapped.shopify_product_id} for shop {shop_id}")
        return ApplyResult.NO_MATCH

    merged_tags = merge_product_tags(mapped.existing_tags, rule_tags)
    if merged_tags is NO_CHANGE:
        logger.debug(f"{mapped.shopify_product_id} already carries {sorted(rule_tags)}")
        return ApplyResult.NO_CHANGE

    try:
        result = mutate(mapped.shopify_product_id, merged_tags)
    except ShopifyApiError as e:
        logger.error(f"Tag update failed for {mapped.shopify_product_id} (shop {shop_id}): {e.message}")
        return ApplyResult.MUTATION_FAILED
    except Exception as e:
        logger.exception(f"Tag update failed for {mapped.shopify_product_id} (shop {shop_id}): {e}")
        return ApplyResult.MUTATION_FAILED

    user_errors = mutation_errors(result)
    if user_errors:
        logger.error(f"AutoTagProduct userErrors for {mapped.shopify_product_id}: {user_errors}")
        return ApplyResult.MUTATION_ERRORS

    logger.info(f"Tagged {mapped.shopify_product_id} for shop {shop_id}: {merged_tags}")
    return ApplyResult.UPDATED
