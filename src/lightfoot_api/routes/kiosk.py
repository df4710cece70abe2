"""
Kiosk API - self-service menu, checkout and inventory deduction
"""

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from lightfoot_shared.schemas import InventoryDeductionRequest, KioskOrderRequest
from lightfoot_shared.serializers import success_response
from lightfoot_shared.services.inventory_service import deduct_for_order
from lightfoot_shared.services.menu_service import list_kiosk_menu
from lightfoot_shared.services.order_service import latest_order_id, submit_kiosk_order

kiosk_bp = Blueprint("kiosk", __name__)


@kiosk_bp.get("/kiosk")
def get_kiosk_menu():
    """Menu items with nutrition facts for the kiosk cards."""
    return jsonify(list_kiosk_menu())


@kiosk_bp.get("/kiosk/nextorder")
def get_next_order():
    order_id = latest_order_id()
    if order_id is None:
        return jsonify({"message": "No orders found"}), HTTPStatus.NOT_FOUND
    return jsonify({"order_id": order_id})


@kiosk_bp.post("/kiosk/database")
def submit_order():
    """
    Kiosk checkout.

    Body:
        {
            "total": number,
            "rating": int (0-5, optional),
            "order": {category: [item, ...]},
            "groupedOrder": [{"type": "MEAL", "groupNum": 2, "meal": {...},
                              "sides": [...], "entrees": [...]}, ...]
        }
    """
    payload = KioskOrderRequest.model_validate(request.get_json(silent=True) or {})
    order_id = submit_kiosk_order(payload)
    return jsonify(success_response({"order_id": order_id})), HTTPStatus.CREATED


@kiosk_bp.put("/kiosk/updateInventory")
def update_inventory():
    """Consume the ingredients of a kiosk order, clamping stock at zero."""
    payload = InventoryDeductionRequest.model_validate(request.get_json(silent=True) or {})
    amounts = deduct_for_order(payload.order)
    deducted = {str(ingredient_id): float(amount) for ingredient_id, amount in amounts.items()}
    return jsonify(success_response({"ingredients": deducted}))
