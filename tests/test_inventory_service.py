from decimal import Decimal

import pytest

from lightfoot_shared.db import get_session
from lightfoot_shared.models import Ingredient
from lightfoot_shared.schemas import InventoryDeductionRequest, IngredientRequest
from lightfoot_shared.services.inventory_service import (
    add_ingredient,
    apply_deduction,
    deduct_for_order,
    get_ingredient_label,
    portion_multiplier,
    restock_below_minimum,
)
from lightfoot_shared.validation import ValidationError


def _deduct(cart):
    return deduct_for_order(InventoryDeductionRequest.model_validate({"order": cart}).order)


@pytest.mark.parametrize(
    ("category", "size_name", "expected"),
    [
        ("SIDE", None, Decimal("0.5")),
        ("ENTREE", None, Decimal("1")),
        ("DRINK", None, Decimal("1")),
        ("LACARTE", "Small", Decimal("1")),
        ("LACARTE", "Medium", Decimal("1.5")),
        ("LACARTE", "Large", Decimal("2")),
    ],
)
def test_portion_multiplier(category, size_name, expected):
    assert portion_multiplier(category, size_name) == expected


def test_side_uses_half_portion(menu, stock):
    amounts = _deduct({"SIDE": [{"menu_item_id": menu["rice_side"]}]})

    assert amounts == {menu["rice"]: Decimal("1.0")}
    assert stock(menu["rice"]) == 9.0


def test_stock_is_clamped_at_zero(menu, stock):
    _deduct({"ENTREE": [{"menu_item_id": menu["orange_chicken"]}] * 3})

    assert stock(menu["chicken"]) == 0.0


def test_repeated_items_accumulate(menu, stock):
    _deduct(
        {
            "SIDE": [{"menu_item_id": menu["rice_side"]}, {"menu_item_id": menu["rice_side"]}],
            "DRINK": [{"menu_item_id": menu["drink"]}],
        }
    )

    assert stock(menu["rice"]) == 8.0
    assert stock(menu["cups"]) == 99.0


def test_lacarte_scales_the_paired_item(menu, stock):
    _deduct(
        {
            "LACARTE": [{"menu_item_id": menu["medium"], "name": "Medium"}],
            "CARTEITEMS": [{"menu_item_id": menu["orange_chicken"]}],
        }
    )

    assert stock(menu["chicken"]) == pytest.approx(0.25)


def test_lacarte_without_paired_item_changes_nothing(menu, stock):
    with pytest.raises(ValidationError):
        _deduct(
            {
                "SIDE": [{"menu_item_id": menu["rice_side"]}],
                "LACARTE": [{"menu_item_id": menu["large"], "name": "Large"}],
            }
        )

    assert stock(menu["rice"]) == 10.0


def test_per_unit_deduction_uses_each_item_recipe_once(menu, stock):
    cart = InventoryDeductionRequest.model_validate(
        {
            "order": {
                "MEAL": [],
                "SIDE": [{"menu_item_id": menu["rice_side"]}],
                "LACARTE": [{"menu_item_id": menu["medium"], "name": "Medium"}],
                "ENTREE": [{"menu_item_id": menu["orange_chicken"]}] * 3,
            }
        }
    ).order

    with get_session() as session:
        amounts = apply_deduction(session, cart, per_unit=True)

    assert amounts == {menu["rice"]: Decimal("2"), menu["chicken"]: Decimal("1.5")}
    assert stock(menu["rice"]) == 8.0
    assert stock(menu["chicken"]) == 0.0


def test_items_without_usage_deduct_nothing(menu, stock):
    assert _deduct({"MEAL": [{"menu_item_id": menu["bowl"]}]}) == {}
    assert stock(menu["rice"]) == 10.0


def test_restock_is_idempotent(menu, stock):
    restocked, message = restock_below_minimum()

    assert restocked == 1
    assert message == "Inventory restocked to maximum thresholds successfully."
    assert stock(menu["chicken"]) == 30.0
    assert stock(menu["rice"]) == 10.0

    restocked, message = restock_below_minimum()

    assert restocked == 0
    assert message == "No items need restocking."
    assert stock(menu["chicken"]) == 30.0


def test_failed_restock_rolls_back_every_ingredient(menu, stock, fail_on_write):
    with get_session() as session:
        session.get(Ingredient, menu["noodles"]).quantity_stock = Decimal("1")
    fail_on_write(Ingredient, "after_update", on_call=2)

    with pytest.raises(RuntimeError):
        restock_below_minimum()

    assert stock(menu["chicken"]) == 1.0
    assert stock(menu["noodles"]) == 1.0


def test_add_ingredient_normalizes_name(app):
    payload = IngredientRequest.model_validate(
        {
            "ingname": " Green Beans ",
            "stock": "40",
            "ingunit": "lbs",
            "min": "5",
            "max": "60",
            "restock": "20",
            "currprice": "1.10",
        }
    )
    ingredient = add_ingredient(payload)

    assert ingredient["name"] == "green_beans"
    assert ingredient["quantity_stock"] == 40.0

    label, status = get_ingredient_label(ingredient["ingredient_id"])
    assert status == 200
    assert label == [{"name": "green_beans", "unit": "lbs"}]
