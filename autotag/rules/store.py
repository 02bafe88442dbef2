import logging
from abc import ABC, abstractmethod
from typing import List

from sqlalchemy.exc import SQLAlchemyError

from ..errors import InvalidRuleError, RuleStoreError
from ..models.rule import ProductRule
from .fields import FIELD_SPECS, coerce_field, coerce_operator, is_supported

logger = logging.getLogger(__name__)


class RuleStore(ABC):
    """Per-shop rule storage. Every operation is scoped by ``shop_id``."""

    @abstractmethod
    def load_rules(self, shop_id: int) -> List[ProductRule]:
        """All rules of the shop in creation order, disabled ones included."""

    @abstractmethod
    def create_rule(self, shop_id: int, field: str, operator: str, value: str,
                    tag: str, enabled: bool = True) -> ProductRule:
        ...

    @abstractmethod
    def toggle_rule(self, shop_id: int, rule_id: int, enabled: bool) -> None:
        ...

    @abstractmethod
    def delete_rule(self, shop_id: int, rule_id: int) -> bool:
        ...


def validate_rule(field, operator, value, tag, enabled=True):
    """Check a rule definition before it is stored; returns the cleaned values."""
    rule_field = coerce_field(field)
    if rule_field is None:
        raise InvalidRuleError(f"Unsupported field: {field!r}", {"field": field})
    rule_operator = coerce_operator(operator)
    if rule_operator is None:
        raise InvalidRuleError(f"Unsupported operator: {operator!r}", {"operator": operator})
    if not is_supported(rule_field, rule_operator):
        allowed = sorted(op.value for op in FIELD_SPECS[rule_field].operators)
        raise InvalidRuleError(
            f"Operator {rule_operator.value!r} is not supported for field {rule_field.value!r}",
            {"field": rule_field.value, "operator": rule_operator.value, "allowed": allowed},
        )

    value = (value or "").strip() if isinstance(value, str) else ""
    tag = (tag or "").strip() if isinstance(tag, str) else ""
    if not value:
        raise InvalidRuleError("Rule value is required", {"field": "value"})
    if not tag:
        raise InvalidRuleError("Rule tag is required", {"field": "tag"})
    if FIELD_SPECS[rule_field].parse(value) is None:
        raise InvalidRuleError(
            f"Value {value!r} is not valid for field {rule_field.value!r}",
            {"field": "value", "value": value},
        )
    if not isinstance(enabled, bool):
        raise InvalidRuleError("Rule enabled flag must be true or false", {"field": "enabled", "value": enabled})
    return rule_field, rule_operator, value, tag


class SqlAlchemyRuleStore(RuleStore):
    """Rule store backed by the ``product_rules`` table."""

    def __init__(self, session):
        self.session = session

    def load_rules(self, shop_id):
        try:
            return (
                self.session.query(ProductRule)
                .filter(ProductRule.shop_id == shop_id)
                .order_by(ProductRule.created_at.asc(), ProductRule.id.asc())
                .all()
            )
        except SQLAlchemyError as e:
            self.session.rollback()
            raise RuleStoreError(f"Could not load rules for shop {shop_id}: {e}", {"shop_id": shop_id}) from e

    def create_rule(self, shop_id, field, operator, value, tag, enabled=True):
        rule_field, rule_operator, value, tag = validate_rule(field, operator, value, tag, enabled)
        rule = ProductRule(
            shop_id=shop_id,
            field=rule_field.value,
            operator=rule_operator.value,
            value=value,
            tag=tag,
            enabled=enabled,
        )
        try:
            self.session.add(rule)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise RuleStoreError(f"Could not create rule for shop {shop_id}: {e}", {"shop_id": shop_id}) from e
        logger.info(f"Created rule {rule.id} for shop {shop_id}: {rule.field} {rule.operator} {rule.value!r} -> {rule.tag!r}")
        return rule

    def toggle_rule(self, shop_id, rule_id, enabled):
        try:
            updated = (
                self.session.query(ProductRule)
                .filter(ProductRule.id == rule_id, ProductRule.shop_id == shop_id)
                .update({ProductRule.enabled: bool(enabled)}, synchronize_session="fetch")
            )
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise RuleStoreError(f"Could not toggle rule {rule_id} for shop {shop_id}: {e}", {"shop_id": shop_id}) from e
        if not updated:
            logger.debug(f"Toggle ignored: rule {rule_id} does not belong to shop {shop_id}")

    def delete_rule(self, shop_id, rule_id):
        try:
            deleted = (
                self.session.query(ProductRule)
                .filter(ProductRule.id == rule_id, ProductRule.shop_id == shop_id)
                .delete(synchronize_session="fetch")
            )
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise RuleStoreError(f"Could not delete rule {rule_id} for shop {shop_id}: {e}", {"shop_id": shop_id}) from e
        return deleted > 0
