"""
Starter menu and inventory for an empty database (LOAD_SEED_DATA=true).
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from lightfoot_shared.constants import ItemType
from lightfoot_shared.logging_config import get_logger
from lightfoot_shared.models import Ingredient, MenuItem, MenuItemIngredient, MenuItemInfo

logger = get_logger(__name__)

# name, stock, unit, min, max, restock, price
INGREDIENTS = [
    ("white_rice", "200", "lbs", "40", "250", "100", "0.60"),
    ("lo_mein_noodles", "150", "lbs", "30", "200", "80", "0.90"),
    ("chicken_breast", "180", "lbs", "40", "220", "100", "2.75"),
    ("beef_steak", "90", "lbs", "20", "120", "60", "5.10"),
    ("orange_sauce", "60", "gal", "10", "80", "30", "8.00"),
    ("broccoli", "80", "lbs", "15", "100", "50", "1.20"),
    ("cups", "1000", "each", "200", "1500", "500", "0.05"),
]

# name, type, price
MENU = [
    ("Bowl", ItemType.MEAL, "8.30"),
    ("Plate", ItemType.MEAL, "9.80"),
    ("Bigger Plate", ItemType.MEAL, "11.30"),
    ("White Steamed Rice", ItemType.SIDE, "0"),
    ("Chow Mein", ItemType.SIDE, "0"),
    ("Orange Chicken", ItemType.ENTREE, "0"),
    ("Broccoli Beef", ItemType.ENTREE, "0"),
    ("Small", ItemType.LACARTE, "5.20"),
    ("Medium", ItemType.LACARTE, "8.50"),
    ("Large", ItemType.LACARTE, "11.20"),
    ("Fountain Drink", ItemType.DRINK, "2.10"),
]

# menu item -> (usages, calories, protein, carbohydrate, saturated fat, allergens)
RECIPES = {
    "White Steamed Rice": ([("white_rice", "0.50")], 380, "7", "87", "0", ""),
    "Chow Mein": ([("lo_mein_noodles", "0.50")], 600, "13", "94", "3.5", "Wheat, Soy"),
    "Orange Chicken": (
        [("chicken_breast", "0.33"), ("orange_sauce", "0.05")],
        490,
        "25",
        "51",
        "5",
        "Wheat, Soy, Egg",
    ),
    "Broccoli Beef": (
        [("beef_steak", "0.25"), ("broccoli", "0.15")],
        150,
        "9",
        "13",
        "1.5",
        "Soy",
    ),
    "Fountain Drink": ([("cups", "1")], 0, "0", "0", "0", ""),
}


def load_seed_data(session: Session) -> bool:
    """
    Insert the starter data when no menu exists yet.

    Returns True when rows were inserted; an existing menu is left untouched.
    """
    if session.scalar(select(func.count()).select_from(MenuItem)):
        logger.info("Menu already present, skipping seed data")
        return False

    ingredients = {}
    for name, stock, unit, minimum, maximum, restock, price in INGREDIENTS:
        ingredient = Ingredient(
            name=name,
            quantity_stock=Decimal(stock),
            unit=unit,
            min_threshold=Decimal(minimum),
            max_threshold=Decimal(maximum),
            restock_quantity=Decimal(restock),
            current_price=Decimal(price),
        )
        session.add(ingredient)
        ingredients[name] = ingredient

    for name, item_type, price in MENU:
        item = MenuItem(name=name, item_type=item_type.value, price=Decimal(price))
        recipe = RECIPES.get(name)
        if recipe:
            usages, calories, protein, carbohydrate, saturated_fat, allergens = recipe
            if item_type != ItemType.DRINK:
                item.info = MenuItemInfo(
                    name=name,
                    calories=calories,
                    protein=Decimal(protein),
                    carbohydrate=Decimal(carbohydrate),
                    saturated_fat=Decimal(saturated_fat),
                    allergens=allergens or None,
                )
            for ingredient_name, quantity in usages:
                ingredient = ingredients[ingredient_name]
                item.ingredient_usages.append(
                    MenuItemIngredient(
                        ingredient=ingredient,
                        quantity_used=Decimal(quantity),
                        unit=ingredient.unit,
                    )
                )
        session.add(item)

    session.flush()
    logger.info(f"Seeded {len(MENU)} menu items and {len(INGREDIENTS)} ingredients")
    return True
