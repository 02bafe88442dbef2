from datetime import datetime
from ..extensions import db

class Product(db.Model):
    """Last seen state of a Shopify product, per shop."""

    __tablename__ = "products"
    __table_args__ = (
        db.UniqueConstraint("shop_id", "shopify_product_id", name="uq_products_shop_product"),
    )

    id = db.Column(db.Integer, primary_key=True)
    shop_id = db.Column(db.Integer, db.ForeignKey("shops.id", ondelete="CASCADE"), nullable=False, index=True)
    shopify_product_id = db.Column(db.BigInteger, nullable=False, index=True)
    title = db.Column(db.String(255))
    vendor = db.Column(db.String(255))
    tags = db.Column(db.Text)
    status = db.Column(db.String(32))
    price = db.Column(db.String(32))
    total_inventory = db.Column(db.Integer)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
