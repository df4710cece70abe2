"""
Seasonal API - manager administration of menu items and ingredients
"""

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from lightfoot_shared.schemas import IngredientRequest, SeasonalItemRequest
from lightfoot_shared.serializers import error_response, success_response
from lightfoot_shared.services.inventory_service import add_ingredient
from lightfoot_shared.services.menu_service import (
    add_seasonal_item,
    delete_menu_item,
    list_menu_items,
)

seasonal_bp = Blueprint("seasonal", __name__)


@seasonal_bp.get("/seasonal")
def get_seasonal_items():
    return jsonify(list_menu_items())


@seasonal_bp.post("/seasonal/add")
def post_seasonal_item():
    """
    Add a menu item.

    Body:
        {
            "name": str, "type": str, "price": number,
            "calories": number, "protein": number, "carbohydrate": number,
            "saturated_fat": number, "spicy": bool, "premium": bool,
            "allergens": str,
            "ingredientQuantities": {ingredient_id: quantity},
            "ingredientUnits": {ingredient_id: unit}
        }

    Food items need calories and at least one ingredient quantity in (0, 10].
    """
    payload = SeasonalItemRequest.model_validate(request.get_json(silent=True) or {})
    item = add_seasonal_item(payload)
    return jsonify(success_response(item)), HTTPStatus.CREATED


@seasonal_bp.delete("/seasonal/<int:menu_item_id>")
def remove_seasonal_item(menu_item_id: int):
    result, status = delete_menu_item(menu_item_id)
    if status != HTTPStatus.OK:
        return jsonify(error_response(result["message"])), status
    return jsonify(success_response(result))


@seasonal_bp.post("/seasonal/ingredient")
def post_ingredient():
    """
    Body:
        {"ingname": str, "stock": number, "ingunit": str, "min": number,
         "max": number, "restock": number, "currprice": number}
    """
    payload = IngredientRequest.model_validate(request.get_json(silent=True) or {})
    ingredient = add_ingredient(payload)
    return jsonify(success_response(ingredient)), HTTPStatus.CREATED
