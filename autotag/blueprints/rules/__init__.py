from flask import Blueprint

rules_bp = Blueprint("rules", __name__, url_prefix="/shops/<shop_domain>/rules")

from . import routes  # noqa: E402,F401
