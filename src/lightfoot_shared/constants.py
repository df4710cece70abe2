"""
Application constants and enums.
"""

from decimal import Decimal
from enum import Enum


class ItemType(str, Enum):
    MEAL = "MEAL"
    SIDE = "SIDE"
    ENTREE = "ENTREE"
    APPETIZER = "APPETIZER"
    DRINK = "DRINK"
    LACARTE = "LACARTE"
    SPECIAL = "SPECIAL"
    REWARD = "REWARD"

    @classmethod
    def normalize(cls, value: str) -> "ItemType":
        """Map a submitted type name to a member; the manager screen sends REWARDS."""
        value = (value or "").strip().upper()
        if value == "REWARDS":
            return cls.REWARD
        return cls(value)


# Cart key holding the menu item paired (by index) with each LACARTE size entry
CARTE_ITEMS_KEY = "CARTEITEMS"

# Item types added from the seasonal screen without nutrition or ingredients
INGREDIENT_FREE_TYPES = {ItemType.DRINK, ItemType.REWARD, ItemType.MEAL}

SIDE_PORTION = Decimal("0.5")
LACARTE_PORTIONS = (
    ("Small", Decimal("1")),
    ("Medium", Decimal("1.5")),
)
LACARTE_DEFAULT_PORTION = Decimal("2")

MAX_INGREDIENT_QUANTITY = Decimal("10.0")

KIOSK_EMPLOYEE_ID = 0
NO_RATING = 0
MAX_RATING = 5

MIN_EMPLOYEE_ROLE = -1
MAX_EMPLOYEE_ROLE = 4
UNASSIGNED_EMPLOYEE_ROLE = -1
MIN_USER_ROLE = 0
MAX_USER_ROLE = 4
DEFAULT_USER_ROLE = 1
UNASSIGNED_POSITION = "None"
PIN_OFFSET = 1000

UNKNOWN_ITEM_NAME = "Unknown Item"
UNKNOWN_ITEM_TYPE = "Unknown Type"
NO_ALLERGENS = "None"
