"""
Menu catalogue and the manager's seasonal item administration.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from http import HTTPStatus

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from lightfoot_shared.config import get_active_config
from lightfoot_shared.constants import INGREDIENT_FREE_TYPES, MAX_INGREDIENT_QUANTITY, ItemType
from lightfoot_shared.db import get_session
from lightfoot_shared.logging_config import get_logger
from lightfoot_shared.models import Ingredient, MenuItem, MenuItemIngredient, MenuItemInfo
from lightfoot_shared.schemas import SeasonalItemRequest
from lightfoot_shared.serializers import serialize_kiosk_item, serialize_menu_item
from lightfoot_shared.validation import ValidationError

logger = get_logger(__name__)


def list_menu_items() -> list[dict]:
    with get_session() as session:
        items = session.execute(select(MenuItem).order_by(MenuItem.menu_item_id)).scalars()
        return [serialize_menu_item(item) for item in items]


def list_core_food_names() -> list[dict]:
    """Names of the core food items, the rows the sales report iterates over."""
    config = get_active_config()
    with get_session() as session:
        names = session.execute(
            select(MenuItem.name)
            .where(MenuItem.menu_item_id.between(config.core_menu_min_id, config.core_menu_max_id))
            .order_by(MenuItem.menu_item_id)
        ).scalars()
        return [{"name": name} for name in names]


def find_by_name(name: str) -> list[dict]:
    with get_session() as session:
        items = session.execute(
            select(MenuItem).where(MenuItem.name == name).order_by(MenuItem.menu_item_id)
        ).scalars()
        return [serialize_menu_item(item) for item in items]


def list_kiosk_menu() -> list[dict]:
    with get_session() as session:
        items = session.execute(
            select(MenuItem).options(selectinload(MenuItem.info)).order_by(MenuItem.menu_item_id)
        ).scalars()
        return [serialize_kiosk_item(item) for item in items]


def _parse_ingredient_quantities(raw: dict | None) -> dict[int, Decimal]:
    if not raw:
        raise ValidationError("Ingredient quantities are required for food items")

    quantities: dict[int, Decimal] = {}
    for ingredient_id, quantity in raw.items():
        try:
            parsed_id = int(ingredient_id)
            parsed_quantity = Decimal(str(quantity).strip())
        except (ValueError, InvalidOperation) as exc:
            raise ValidationError(f"Invalid ingredient quantity for {ingredient_id}") from exc
        if not parsed_quantity.is_finite() or not (
            Decimal("0") < parsed_quantity <= MAX_INGREDIENT_QUANTITY
        ):
            raise ValidationError(
                f"Ingredient quantity must be above 0 and at most {MAX_INGREDIENT_QUANTITY}"
            )
        quantities[parsed_id] = parsed_quantity
    return quantities


def add_seasonal_item(payload: SeasonalItemRequest) -> dict:
    """
    Add a menu item from the seasonal screen.

    Drinks, rewards and meal containers are plain menu rows. Food items also
    need a nutrition record with calories and at least one ingredient usage.
    """
    try:
        item_type = ItemType.normalize(payload.type)
    except ValueError as exc:
        raise ValidationError(f"Unknown item type: {payload.type}") from exc

    needs_ingredients = item_type not in INGREDIENT_FREE_TYPES
    quantities: dict[int, Decimal] = {}
    if needs_ingredients:
        quantities = _parse_ingredient_quantities(payload.ingredient_quantities)
        if payload.calories <= 0:
            raise ValidationError("Calories must be above 0 for food items")

    units = payload.ingredient_units or {}

    with get_session() as session:
        if quantities:
            ingredients = {
                ingredient.ingredient_id: ingredient
                for ingredient in session.execute(
                    select(Ingredient).where(Ingredient.ingredient_id.in_(list(quantities)))
                ).scalars()
            }
            missing = sorted(set(quantities) - set(ingredients))
            if missing:
                raise ValidationError(f"Unknown ingredients: {missing}")

        item = MenuItem(name=payload.name, item_type=item_type.value, price=payload.price)
        session.add(item)

        if needs_ingredients:
            item.info = MenuItemInfo(
                name=payload.name,
                calories=int(payload.calories),
                protein=payload.protein,
                carbohydrate=payload.carbohydrate,
                saturated_fat=payload.saturated_fat,
                spicy=payload.spicy,
                premium=payload.premium,
                allergens=payload.allergens.strip() or None,
            )
            for ingredient_id, quantity in quantities.items():
                item.ingredient_usages.append(
                    MenuItemIngredient(
                        ingredient_id=ingredient_id,
                        quantity_used=quantity,
                        unit=units.get(str(ingredient_id))
                        or ingredients[ingredient_id].unit
                        or "Unknown",
                    )
                )

        session.flush()
        result = serialize_menu_item(item)

    logger.info(
        f"Added menu item {result['menu_item_id']} ({item_type.value}) "
        f"with {len(quantities)} ingredients"
    )
    return result


def delete_menu_item(menu_item_id: int) -> tuple[dict, HTTPStatus]:
    """Remove a menu item with its nutrition record and ingredient usages."""
    with get_session() as session:
        item = session.get(MenuItem, menu_item_id)
        if item is None:
            return {"message": "Menu item not found"}, HTTPStatus.NOT_FOUND
        session.delete(item)

    logger.info(f"Removed menu item {menu_item_id}")
    return {"menu_item_id": menu_item_id}, HTTPStatus.OK
