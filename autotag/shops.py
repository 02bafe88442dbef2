from typing import Optional

from .errors import ShopNotFoundError
from .models.shop import Shop


def get_active_shop(shop_domain: str) -> Optional[Shop]:
    """The installed shop for ``shop_domain``, or None if unknown or uninstalled."""
    if not shop_domain:
        return None
    shop = Shop.query.filter_by(shop_domain=shop_domain.strip().lower()).first()
    if shop is None or shop.uninstalled_at is not None:
        return None
    return shop


def require_active_shop(shop_domain: str) -> Shop:
    shop = get_active_shop(shop_domain)
    if shop is None:
        raise ShopNotFoundError(f"No installed shop for domain {shop_domain}", {"shop_domain": shop_domain})
    return shop
