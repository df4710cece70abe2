"""
Completed orders API
"""

from flask import Blueprint, jsonify

from lightfoot_shared.services.kitchen_service import list_completed_today

completed_orders_bp = Blueprint("completed_orders", __name__)


@completed_orders_bp.get("/completedorders")
def get_completed_orders():
    """Orders the kitchen finished today, most recent first."""
    return jsonify(list_completed_today())
