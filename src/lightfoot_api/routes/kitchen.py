"""
Kitchen API - in-progress queue shown on the kitchen board
"""

from http import HTTPStatus

from flask import Blueprint, jsonify

from lightfoot_shared.serializers import error_response, success_response
from lightfoot_shared.services.kitchen_service import complete_order, list_current_orders

kitchen_bp = Blueprint("kitchen", __name__)


@kitchen_bp.get("/kioskorders")
def get_current_orders():
    return jsonify(list_current_orders())


@kitchen_bp.delete("/kioskorders/<int:order_id>")
def finish_order(order_id: int):
    """Move an order from the kitchen queue to today's completed orders."""
    result, status = complete_order(order_id)
    if status == HTTPStatus.OK:
        return jsonify(success_response(result)), status
    return jsonify(error_response(result["message"])), status
