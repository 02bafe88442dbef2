"""
Imports every model so they are registered with SQLAlchemy when the
application context is created, which Flask-Migrate relies on to see all
tables.
"""
from .shop import Shop
from .rule import ProductRule
from .product import Product

__all__ = ["Shop", "ProductRule", "Product"]
