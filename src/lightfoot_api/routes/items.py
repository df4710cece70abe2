"""
Items API - menu lookups and cashier POS checkout
"""

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from lightfoot_shared.schemas import PosOrderRequest
from lightfoot_shared.serializers import success_response
from lightfoot_shared.services.menu_service import (
    find_by_name,
    list_core_food_names,
    list_menu_items,
)
from lightfoot_shared.services.order_service import record_pos_order

# Create blueprint without url_prefix (inherited from parent)
items_bp = Blueprint("items", __name__)


@items_bp.get("/items")
def get_items():
    return jsonify(list_menu_items())


@items_bp.get("/items/onlyfood")
def get_food_names():
    """Names of the core food items shown on the sales report screen."""
    return jsonify(list_core_food_names())


@items_bp.get("/items/<string:name>")
def get_items_by_name(name: str):
    return jsonify(find_by_name(name))


@items_bp.post("/items")
def create_pos_order():
    """
    Record an order rung up at the cashier POS.

    Body:
        {
            "employee_id": int,
            "total": number,
            "order": {category: [{"menu_item_id": int, ...}]}
        }

    The order lines and the ingredient deduction commit together.
    """
    payload = PosOrderRequest.model_validate(request.get_json(silent=True) or {})
    order_id = record_pos_order(payload)
    return jsonify(success_response({"order_id": order_id})), HTTPStatus.CREATED
