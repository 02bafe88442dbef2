from datetime import datetime
from ..extensions import db

class ProductRule(db.Model):
    __tablename__ = "product_rules"

    id = db.Column(db.Integer, primary_key=True)
    shop_id = db.Column(db.Integer, db.ForeignKey("shops.id", ondelete="CASCADE"), nullable=False, index=True)
    field = db.Column(db.String(32), nullable=False)     # price / inventory / vendor
    operator = db.Column(db.String(8), nullable=False)   # gt / lt / eq
    value = db.Column(db.String(255), nullable=False)
    tag = db.Column(db.String(255), nullable=False)
    enabled = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "field": self.field,
            "operator": self.operator,
            "value": self.value,
            "tag": self.tag,
            "enabled": self.enabled,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
