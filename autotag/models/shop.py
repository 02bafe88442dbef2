from datetime import datetime
from ..extensions import db

class Shop(db.Model):
    __tablename__ = "shops"

    id = db.Column(db.Integer, primary_key=True)
    shop_domain = db.Column(db.String(255), unique=True, nullable=False, index=True)
    access_token = db.Column(db.String(255), nullable=False)
    installed_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    uninstalled_at = db.Column(db.DateTime)

    rules = db.relationship("ProductRule", backref="shop", cascade="all, delete-orphan", lazy="dynamic")
