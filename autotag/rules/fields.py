"""
Rule fields, operators and the table tying them together.

Each field declares which operators are meaningful for it, how a rule's raw
string value is parsed, and which attribute of the evaluation record it
reads. Parsers return ``None`` when a value can't be used, which the
evaluator treats as "no match".
"""
import operator
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Optional


class RuleField(str, Enum):
    PRICE = "price"
    INVENTORY = "inventory"
    VENDOR = "vendor"


class RuleOperator(str, Enum):
    GT = "gt"
    LT = "lt"
    EQ = "eq"


COMPARATORS: Dict[RuleOperator, Callable[[Any, Any], bool]] = {
    RuleOperator.GT: operator.gt,
    RuleOperator.LT: operator.lt,
    RuleOperator.EQ: operator.eq,
}


def parse_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    # float() and int() would accept digit separators such as "1_000"
    if "_" in text:
        return None
    try:
        return float(text)
    except (ValueError, TypeError):
        return None


def parse_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if "_" in text:
        return None
    try:
        return int(text)
    except (ValueError, TypeError):
        return None


def normalize_text(value: Any) -> Optional[str]:
    """Trim and lowercase; blank or non-string values are unknown."""
    if not isinstance(value, str):
        return None
    cleaned = value.strip().lower()
    return cleaned or None


@dataclass(frozen=True)
class FieldSpec:
    attribute: str
    operators: FrozenSet[RuleOperator]
    parse: Callable[[Any], Any]
    # Applied to the record's value before comparing
    normalize: Optional[Callable[[Any], Any]] = None


FIELD_SPECS: Dict[RuleField, FieldSpec] = {
    RuleField.PRICE: FieldSpec(
        attribute="price",
        operators=frozenset(RuleOperator),
        parse=parse_float,
    ),
    RuleField.INVENTORY: FieldSpec(
        attribute="total_inventory",
        operators=frozenset(RuleOperator),
        parse=parse_int,
    ),
    RuleField.VENDOR: FieldSpec(
        attribute="vendor",
        operators=frozenset({RuleOperator.EQ}),
        parse=normalize_text,
        normalize=normalize_text,
    ),
}


def coerce_field(value: Any) -> Optional[RuleField]:
    try:
        return RuleField(value)
    except ValueError:
        return None


def coerce_operator(value: Any) -> Optional[RuleOperator]:
    try:
        return RuleOperator(value)
    except ValueError:
        return None


def is_supported(field: RuleField, op: RuleOperator) -> bool:
    return op in FIELD_SPECS[field].operators
