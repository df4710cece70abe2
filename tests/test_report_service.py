from datetime import timedelta

import pytest

from lightfoot_shared.config import get_active_config
from lightfoot_shared.datetime_utils import day_bounds
from lightfoot_shared.models import Order
from lightfoot_shared.schemas import PosOrderRequest
from lightfoot_shared.services.order_service import record_pos_order
from lightfoot_shared.services.report_service import (
    favorite_items,
    item_usage,
    list_reportable_orders,
    menu_item_ids_for_orders,
    reset_reportable,
    sales_report,
    x_report,
    z_report,
)


@pytest.fixture
def pos_order(menu):
    def place(items, total="2.10", employee_id=5):
        return record_pos_order(
            PosOrderRequest.model_validate(
                {"order": items, "total": total, "employee_id": employee_id}
            )
        )

    return place


@pytest.fixture
def today():
    start, end = day_bounds()
    return start, end - timedelta(microseconds=1)


def test_z_report_twice(menu, place_bowl_order, pos_order, count_rows):
    place_bowl_order()
    pos_order({"SIDE": [{"menu_item_id": menu["rice_side"]}]})

    first = z_report()

    assert first["order_count"] == 2
    assert first["total"] == pytest.approx(10.40)
    assert first["hours"]
    assert sum(hour["total"] for hour in first["hours"]) == pytest.approx(10.40)
    assert {item["menu_item_id"]: item["count"] for item in first["items"]} == {
        menu["bowl"]: 1,
        menu["rice_side"]: 1,
    }
    assert first["ingredients"] == [
        {
            "ingredient_id": menu["rice"],
            "name": "white_rice",
            "unit": "lbs",
            "quantity_used": 2.0,
        }
    ]
    assert count_rows(Order, Order.reportable.is_(True)) == 0

    second = z_report()

    assert second == {"total": 0.0, "order_count": 0, "hours": [], "items": [], "ingredients": []}


def test_z_report_sums_shared_ingredients(menu, pos_order):
    pos_order(
        {
            "SIDE": [
                {"menu_item_id": menu["rice_side"]},
                {"menu_item_id": menu["rice_side"]},
            ]
        }
    )

    report = z_report()

    assert report["ingredients"][0]["quantity_used"] == 4.0


def test_x_report_is_read_only(menu, place_bowl_order):
    place_bowl_order()

    report = x_report()

    assert report["order_count"] == 1
    assert report["total"] == pytest.approx(8.30)
    assert report["hours"][0]["label"].endswith(("am", "pm"))
    assert len(list_reportable_orders()) == 1
    assert x_report() == report


def test_reset_reportable(menu, place_bowl_order):
    place_bowl_order()
    place_bowl_order()

    assert reset_reportable() == 2
    assert list_reportable_orders() == []
    assert reset_reportable() == 0


def test_menu_item_ids_for_orders(menu, place_bowl_order, pos_order):
    kiosk_id = place_bowl_order()
    pos_id = pos_order({"DRINK": [{"menu_item_id": menu["drink"]}]})

    assert menu_item_ids_for_orders([kiosk_id]) == [{"menu_item_id": menu["bowl"]}]
    assert menu_item_ids_for_orders([kiosk_id, pos_id]) == [
        {"menu_item_id": menu["bowl"]},
        {"menu_item_id": menu["drink"]},
    ]
    assert menu_item_ids_for_orders([]) == []


def test_favorites_rank_recent_lines(menu, pos_order):
    config = get_active_config()
    config.favorites_min_id = 1
    config.favorites_max_id = 100
    pos_order(
        {
            "SIDE": [
                {"menu_item_id": menu["rice_side"]},
                {"menu_item_id": menu["rice_side"]},
                {"menu_item_id": menu["rice_side"]},
                {"menu_item_id": menu["chow_mein"]},
            ],
            "ENTREE": [
                {"menu_item_id": menu["orange_chicken"]},
                {"menu_item_id": menu["orange_chicken"]},
            ],
        }
    )

    assert favorite_items() == [
        {"top_menu_items": [menu["rice_side"], menu["orange_chicken"], menu["chow_mein"]]}
    ]

    config.favorites_limit = 1
    assert favorite_items() == [{"top_menu_items": [menu["rice_side"]]}]


def test_favorites_without_orders(menu):
    assert favorite_items() == [{"top_menu_items": []}]


def test_sales_report(menu, place_bowl_order, today):
    place_bowl_order()
    place_bowl_order()

    assert sales_report("Bowl", *today) == [{"total_quantity": 2, "total_revenue": 16.6}]
    assert sales_report("Nothing Sold", *today) == [{"total_quantity": 0, "total_revenue": 0.0}]


def test_item_usage_buckets_by_day(menu, pos_order, today):
    pos_order({"SIDE": [{"menu_item_id": menu["rice_side"]}]})
    pos_order({"SIDE": [{"menu_item_id": menu["rice_side"]}]})

    usage = item_usage("white_rice", *today)

    assert usage == [{"usage_date": today[0].date().isoformat(), "total_usage": 4.0}]
    assert item_usage("broccoli", *today) == []
