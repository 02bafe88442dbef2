from .applier import ApplyResult, apply_product_rules
from .payload import MappedProduct, map_webhook_payload_to_product

__all__ = ["ApplyResult", "apply_product_rules", "MappedProduct", "map_webhook_payload_to_product"]
