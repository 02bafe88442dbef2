from flask import request, abort

from ...errors import InvalidRuleError, RuleStoreError, ShopNotFoundError
from ...extensions import db
from ...rules.store import SqlAlchemyRuleStore
from ...shops import require_active_shop
from . import rules_bp


@rules_bp.errorhandler(ShopNotFoundError)
def shop_not_found(e):
    return e.to_dict(), 404


@rules_bp.errorhandler(RuleStoreError)
def rule_store_unavailable(e):
    return e.to_dict(), 503


@rules_bp.route("", methods=["GET"])
def list_rules(shop_domain):
    shop = require_active_shop(shop_domain)
    rules = SqlAlchemyRuleStore(db.session).load_rules(shop.id)
    return {"rules": [r.to_dict() for r in rules]}


@rules_bp.route("", methods=["POST"])
def create_rule(shop_domain):
    shop = require_active_shop(shop_domain)
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    try:
        rule = SqlAlchemyRuleStore(db.session).create_rule(
            shop.id,
            field=data.get("field"),
            operator=data.get("operator"),
            value=data.get("value"),
            tag=data.get("tag"),
            enabled=data.get("enabled", True),
        )
    except InvalidRuleError as e:
        return e.to_dict(), 400
    return rule.to_dict(), 201


@rules_bp.route("/<int:rule_id>/toggle", methods=["POST"])
def toggle_rule(shop_domain, rule_id):
    shop = require_active_shop(shop_domain)
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    if not isinstance(data.get("enabled"), bool):
        return {"error": "enabled must be true or false"}, 400
    SqlAlchemyRuleStore(db.session).toggle_rule(shop.id, rule_id, data["enabled"])
    return "", 204


@rules_bp.route("/<int:rule_id>", methods=["DELETE"])
def delete_rule(shop_domain, rule_id):
    shop = require_active_shop(shop_domain)
    # Another shop's rule is reported as missing
    if not SqlAlchemyRuleStore(db.session).delete_rule(shop.id, rule_id):
        return abort(404)
    return "", 204
