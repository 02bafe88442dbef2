from .evaluator import ProductForEvaluation, evaluate_product_rules
from .fields import FIELD_SPECS, RuleField, RuleOperator
from .merger import NO_CHANGE, merge_product_tags
from .store import RuleStore, SqlAlchemyRuleStore

__all__ = [
    "ProductForEvaluation",
    "evaluate_product_rules",
    "FIELD_SPECS",
    "RuleField",
    "RuleOperator",
    "NO_CHANGE",
    "merge_product_tags",
    "RuleStore",
    "SqlAlchemyRuleStore",
]
