"""
Serializers for consistent API responses.
"""

from datetime import date, datetime
from typing import Any

from lightfoot_shared.constants import NO_ALLERGENS
from lightfoot_shared.models import (
    Employee,
    Ingredient,
    MenuItem,
    MenuItemIngredient,
    Order,
    UserRole,
)


def _safe_float(value) -> float:
    try:
        return float(value) if value is not None else 0.0
    except Exception:
        return 0.0


def _isoformat(value: datetime | date | None) -> str | None:
    return value.isoformat() if value is not None else None


def serialize_menu_item(item: MenuItem) -> dict[str, Any]:
    """Serialize MenuItem model."""
    return {
        "menu_item_id": item.menu_item_id,
        "name": item.name,
        "item_type": item.item_type,
        "price": _safe_float(item.price),
    }


def serialize_kiosk_item(item: MenuItem) -> dict[str, Any]:
    """Menu item with its nutrition record, defaulting when none is attached."""
    info = item.info
    return {
        **serialize_menu_item(item),
        "calories": info.calories if info else 0,
        "protein": _safe_float(info.protein) if info else 0.0,
        "carbohydrate": _safe_float(info.carbohydrate) if info else 0.0,
        "saturated_fat": _safe_float(info.saturated_fat) if info else 0.0,
        "spicy": bool(info.spicy) if info else False,
        "premium": bool(info.premium) if info else False,
        "allergens": (info.allergens or NO_ALLERGENS) if info else NO_ALLERGENS,
    }


def serialize_ingredient(ingredient: Ingredient) -> dict[str, Any]:
    return {
        "ingredient_id": ingredient.ingredient_id,
        "name": ingredient.name,
        "quantity_stock": _safe_float(ingredient.quantity_stock),
        "unit": ingredient.unit,
        "min_threshold": _safe_float(ingredient.min_threshold),
        "max_threshold": _safe_float(ingredient.max_threshold),
        "restock_quantity": _safe_float(ingredient.restock_quantity),
        "current_price": _safe_float(ingredient.current_price),
    }


def serialize_usage(usage: MenuItemIngredient) -> dict[str, Any]:
    return {
        "id": usage.id,
        "menu_item_id": usage.menu_item_id,
        "ingredient_id": usage.ingredient_id,
        "quantity_used": _safe_float(usage.quantity_used),
        "unit": usage.unit,
    }


def serialize_order(order: Order) -> dict[str, Any]:
    """Serialize the order header (history and report screens)."""
    return {
        "order_id": order.order_id,
        "total": _safe_float(order.total),
        "timestamp": _isoformat(order.timestamp),
        "employee_id": order.employee_id,
        "reportable": order.reportable,
    }


def serialize_review(order: Order) -> dict[str, Any]:
    return {
        "order_id": order.order_id,
        "employee_id": order.employee_id,
        "timestamp": _isoformat(order.timestamp),
        "review": order.review,
        "reportable": order.reportable,
    }


def serialize_employee(employee: Employee) -> dict[str, Any]:
    """Serialize Employee model."""
    return {
        "employee_id": employee.employee_id,
        "first_name": employee.first_name,
        "last_name": employee.last_name,
        "position": employee.position,
        "is_active": employee.is_active,
        "pin_id": employee.pin_id,
        "role": employee.role,
        "sub": employee.sub,
    }


def serialize_user_role(user: UserRole) -> dict[str, Any]:
    return {"user_id": user.user_id, "role": user.role, "name": user.name}


def success_response(data: Any, message: str | None = None) -> dict[str, Any]:
    """Create a standardized success response."""
    response = {"status": "success", "data": data, "error": None}
    if message:
        response["message"] = message
    return response


def error_response(error: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    """Create a standardized error response."""
    response = {"status": "error", "data": None, "error": error}
    if details:
        response["details"] = details
    return response
