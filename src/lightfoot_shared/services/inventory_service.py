"""
Inventory ledger: ingredient stock levels, consumption and restocking.

Stock never goes below zero. Every deduction, whichever route triggers it,
goes through apply_deduction() which clamps at zero.
"""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from http import HTTPStatus

from sqlalchemy import select
from sqlalchemy.orm import Session

from lightfoot_shared.constants import (
    CARTE_ITEMS_KEY,
    LACARTE_DEFAULT_PORTION,
    LACARTE_PORTIONS,
    SIDE_PORTION,
    ItemType,
)
from lightfoot_shared.db import get_session
from lightfoot_shared.logging_config import get_logger
from lightfoot_shared.models import Ingredient, MenuItemIngredient
from lightfoot_shared.schemas import Cart, IngredientRequest
from lightfoot_shared.serializers import serialize_ingredient, serialize_usage
from lightfoot_shared.validation import ValidationError

logger = get_logger(__name__)

ZERO = Decimal("0")


def portion_multiplier(category: str, size_name: str | None = None) -> Decimal:
    """
    Scale an item's per-unit ingredient usage by how it was ordered.

    Sides inside a meal are half portions; a la carte sizes scale the paired
    entree by 1, 1.5 or 2.
    """
    if category == ItemType.SIDE.value:
        return SIDE_PORTION
    if category == ItemType.LACARTE.value:
        name = size_name or ""
        for marker, portion in LACARTE_PORTIONS:
            if marker in name:
                return portion
        return LACARTE_DEFAULT_PORTION
    return Decimal("1")


def _consumption_for_cart(cart: Cart, *, per_unit: bool = False) -> list[tuple[int, Decimal]]:
    """
    Flatten a cart into (menu_item_id, multiplier) pairs, one per unit.

    With per_unit every entry under every key consumes its own recipe once.
    The cashier screen sends a la carte sizes without paired items, so there
    is nothing to pair or scale.
    """
    if per_unit:
        return [(item.menu_item_id, Decimal("1")) for items in cart.values() for item in items]

    consumption: list[tuple[int, Decimal]] = []
    carte_items = cart.get(CARTE_ITEMS_KEY, [])

    for category, items in cart.items():
        if category == CARTE_ITEMS_KEY:
            continue
        for index, item in enumerate(items):
            if category == ItemType.LACARTE.value:
                if index >= len(carte_items):
                    raise ValidationError(
                        f"LACARTE entry {index} has no matching {CARTE_ITEMS_KEY} item"
                    )
                consumption.append(
                    (carte_items[index].menu_item_id, portion_multiplier(category, item.name))
                )
            else:
                consumption.append((item.menu_item_id, portion_multiplier(category)))
    return consumption


def apply_deduction(
    session: Session, cart: Cart, *, per_unit: bool = False
) -> dict[int, Decimal]:
    """
    Subtract the ingredients consumed by a cart inside the caller's transaction.

    Kiosk carts use portion multipliers (sides at half, a la carte sizes
    scaling their paired CARTEITEMS entry); per_unit carts deduct each item's
    own recipe at full quantity. Returns the amount requested per ingredient
    id. The caller owns the transaction, so a failure part-way through rolls
    back every update.
    """
    consumption = _consumption_for_cart(cart, per_unit=per_unit)
    if not consumption:
        return {}

    item_ids = {menu_item_id for menu_item_id, _ in consumption}
    usages_by_item: dict[int, list[MenuItemIngredient]] = defaultdict(list)
    for usage in session.execute(
        select(MenuItemIngredient).where(MenuItemIngredient.menu_item_id.in_(list(item_ids)))
    ).scalars():
        usages_by_item[usage.menu_item_id].append(usage)

    amounts: dict[int, Decimal] = defaultdict(lambda: ZERO)
    for menu_item_id, multiplier in consumption:
        for usage in usages_by_item.get(menu_item_id, []):
            amounts[usage.ingredient_id] += Decimal(str(usage.quantity_used)) * multiplier

    if not amounts:
        return {}

    ingredients = session.execute(
        select(Ingredient)
        .where(Ingredient.ingredient_id.in_(list(amounts)))
        .with_for_update()
    ).scalars()
    for ingredient in ingredients:
        current = Decimal(str(ingredient.quantity_stock))
        ingredient.quantity_stock = max(current - amounts[ingredient.ingredient_id], ZERO)

    session.flush()
    return dict(amounts)


def deduct_for_order(cart: Cart) -> dict[int, Decimal]:
    """Deduct the ingredients for one order as a single transaction."""
    with get_session() as session:
        amounts = apply_deduction(session, cart)

    logger.info(f"Deducted inventory for {len(amounts)} ingredients")
    return amounts


def restock_below_minimum() -> tuple[int, str]:
    """
    Bring every ingredient below its minimum back up to its maximum.

    All updates commit together or not at all. Running it again straight
    away finds nothing to do.
    """
    with get_session() as session:
        below_minimum = (
            session.execute(
                select(Ingredient)
                .where(Ingredient.quantity_stock < Ingredient.min_threshold)
                .with_for_update()
            )
            .scalars()
            .all()
        )

        if not below_minimum:
            return 0, "No items need restocking."

        for ingredient in below_minimum:
            ingredient.quantity_stock = ingredient.max_threshold

    logger.info(f"Restocked {len(below_minimum)} ingredients to maximum threshold")
    return len(below_minimum), "Inventory restocked to maximum thresholds successfully."


def list_inventory() -> list[dict]:
    with get_session() as session:
        ingredients = session.execute(
            select(Ingredient).order_by(Ingredient.ingredient_id)
        ).scalars()
        return [serialize_ingredient(ingredient) for ingredient in ingredients]


def list_usage_mapping() -> list[dict]:
    with get_session() as session:
        usages = session.execute(
            select(MenuItemIngredient).order_by(
                MenuItemIngredient.menu_item_id, MenuItemIngredient.id
            )
        ).scalars()
        return [serialize_usage(usage) for usage in usages]


def get_ingredient_label(ingredient_id: int) -> tuple[list[dict] | dict, HTTPStatus]:
    with get_session() as session:
        ingredient = session.get(Ingredient, ingredient_id)
        if ingredient is None:
            return {"message": "Ingredient not found"}, HTTPStatus.NOT_FOUND
        return [{"name": ingredient.name, "unit": ingredient.unit}], HTTPStatus.OK


def delete_ingredient(ingredient_id: int) -> tuple[dict, HTTPStatus]:
    """Remove an ingredient together with the menu usage rows that reference it."""
    with get_session() as session:
        ingredient = session.get(Ingredient, ingredient_id)
        if ingredient is None:
            return {"message": "Ingredient not found"}, HTTPStatus.NOT_FOUND
        session.delete(ingredient)

    logger.info(f"Deleted ingredient {ingredient_id}")
    return {"ingredient_id": ingredient_id}, HTTPStatus.OK


def normalize_ingredient_name(name: str) -> str:
    return name.strip().lower().replace(" ", "_")


def add_ingredient(payload: IngredientRequest) -> dict:
    with get_session() as session:
        ingredient = Ingredient(
            name=normalize_ingredient_name(payload.name),
            quantity_stock=payload.stock,
            unit=payload.unit,
            min_threshold=payload.min,
            max_threshold=payload.max,
            restock_quantity=payload.restock,
            current_price=payload.current_price,
        )
        session.add(ingredient)
        session.flush()
        result = serialize_ingredient(ingredient)

    logger.info(f"Added ingredient {result['ingredient_id']}: {result['name']}")
    return result
