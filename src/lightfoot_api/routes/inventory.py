"""
Inventory API - stock levels, usage mapping and restocking
"""

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from lightfoot_shared.serializers import error_response, success_response
from lightfoot_shared.services.inventory_service import (
    delete_ingredient,
    get_ingredient_label,
    list_inventory,
    list_usage_mapping,
    restock_below_minimum,
)
from lightfoot_shared.validation import ValidationError

inventory_bp = Blueprint("inventory", __name__)


@inventory_bp.get("/inventory")
def get_inventory():
    return jsonify(list_inventory())


@inventory_bp.get("/inventory/orders")
def get_usage_mapping():
    """Per-item ingredient usage rows, the input of the usage chart."""
    return jsonify(list_usage_mapping())


@inventory_bp.get("/inventory/name")
def get_ingredient_name():
    """
    Name and unit of one ingredient.

    Query params:
        - ingredient: int ingredient id
    """
    ingredient_id = request.args.get("ingredient", type=int)
    if ingredient_id is None:
        raise ValidationError("ingredient must be an ingredient id")

    result, status = get_ingredient_label(ingredient_id)
    if status != HTTPStatus.OK:
        return jsonify(error_response(result["message"])), status
    return jsonify(result)


@inventory_bp.post("/inventory/restock")
def restock():
    """Raise every ingredient below its minimum back to its maximum."""
    restocked, message = restock_below_minimum()
    return jsonify(success_response({"restocked": restocked}, message=message))


@inventory_bp.delete("/inventory/<int:ingredient_id>")
def remove_ingredient(ingredient_id: int):
    result, status = delete_ingredient(ingredient_id)
    if status != HTTPStatus.OK:
        return jsonify(error_response(result["message"])), status
    return jsonify(success_response(result))
