from dataclasses import dataclass
from typing import Iterable, Optional, Set

from .fields import COMPARATORS, FIELD_SPECS, coerce_field, coerce_operator


@dataclass(frozen=True)
class ProductForEvaluation:
    """Typed view of a product used for rule evaluation. ``None`` means unknown."""

    price: Optional[float] = None
    total_inventory: Optional[int] = None
    vendor: Optional[str] = None


def evaluate_product_rules(product: ProductForEvaluation, rules: Iterable) -> Set[str]:
    """
    Return the tags of every enabled rule that matches the product.

    Rules are any objects exposing ``field``, ``operator``, ``value``, ``tag``
    and ``enabled``. A rule whose value can't be parsed, whose operator isn't
    supported for its field, or whose field is unknown on the product simply
    doesn't match.
    """
    tags = set()
    for rule in rules:
        if not rule.enabled:
            continue
        if evaluate_single_rule(product, rule):
            tags.add(rule.tag)
    return tags


def evaluate_single_rule(product: ProductForEvaluation, rule) -> bool:
    field = coerce_field(rule.field)
    op = coerce_operator(rule.operator)
    if field is None or op is None:
        return False

    spec = FIELD_SPECS[field]
    if op not in spec.operators:
        return False

    actual = getattr(product, spec.attribute, None)
    if spec.normalize is not None:
        actual = spec.normalize(actual)
    if actual is None:
        return False

    target = spec.parse(rule.value)
    if target is None:
        return False

    return COMPARATORS[op](actual, target)
