"""
Sales and ingredient reports derived from order history.

Nothing here is persisted except the Z report's reset of the reportable flag,
which closes the current accumulation window.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from decimal import Decimal

from sqlalchemy import func, select, update

from lightfoot_shared.config import get_active_config
from lightfoot_shared.datetime_utils import day_bounds, hour_label
from lightfoot_shared.db import get_session
from lightfoot_shared.logging_config import get_logger
from lightfoot_shared.models import Ingredient, MenuItem, MenuItemIngredient, Order, OrderLine
from lightfoot_shared.serializers import serialize_order, serialize_review

logger = get_logger(__name__)


def _money(value: Decimal) -> float:
    return float(round(Decimal(str(value)), 2))


def _hourly_totals(orders: list[Order]) -> list[dict]:
    buckets: dict[int, Decimal] = defaultdict(Decimal)
    for order in orders:
        buckets[order.timestamp.hour] += Decimal(str(order.total))
    return [
        {"hour": hour, "label": hour_label(hour), "total": _money(total)}
        for hour, total in sorted(buckets.items())
    ]


def x_report() -> dict:
    """Today's reportable sales by hour. Read-only, may be run any number of times."""
    start, end = day_bounds()
    with get_session() as session:
        orders = (
            session.execute(
                select(Order).where(
                    Order.reportable.is_(True),
                    Order.timestamp >= start,
                    Order.timestamp < end,
                )
            )
            .scalars()
            .all()
        )

    return {
        "total": _money(sum((Decimal(str(o.total)) for o in orders), Decimal("0"))),
        "order_count": len(orders),
        "hours": _hourly_totals(orders),
    }


def z_report() -> dict:
    """
    Close the reporting window: summarize every reportable order, then mark
    exactly those orders as reported.

    Orders placed while the report runs are not in the captured set and stay
    reportable for the next window.
    """
    with get_session() as session:
        orders = (
            session.execute(
                select(Order)
                .where(Order.reportable.is_(True))
                .order_by(Order.order_id)
                .with_for_update()
            )
            .scalars()
            .all()
        )
        if not orders:
            return {"total": 0.0, "order_count": 0, "hours": [], "items": [], "ingredients": []}

        order_ids = [order.order_id for order in orders]

        item_counts = session.execute(
            select(OrderLine.menu_item_id, func.count(OrderLine.menu_order_id), MenuItem.name)
            .outerjoin(MenuItem, MenuItem.menu_item_id == OrderLine.menu_item_id)
            .where(OrderLine.order_id.in_(order_ids))
            .group_by(OrderLine.menu_item_id, MenuItem.name)
            .order_by(OrderLine.menu_item_id)
        ).all()
        counts = {menu_item_id: count for menu_item_id, count, _ in item_counts}

        usage_rows = session.execute(
            select(MenuItemIngredient, Ingredient.name, Ingredient.unit)
            .join(Ingredient, Ingredient.ingredient_id == MenuItemIngredient.ingredient_id)
            .where(MenuItemIngredient.menu_item_id.in_(list(counts)))
        ).all()

        ingredients: dict[int, dict] = {}
        for usage, name, unit in usage_rows:
            entry = ingredients.setdefault(
                usage.ingredient_id,
                {
                    "ingredient_id": usage.ingredient_id,
                    "name": name,
                    "unit": unit,
                    "used": Decimal("0"),
                },
            )
            entry["used"] += Decimal(str(usage.quantity_used)) * counts[usage.menu_item_id]

        session.execute(
            update(Order)
            .where(Order.order_id.in_(order_ids))
            .values(reportable=False)
            .execution_options(synchronize_session=False)
        )

    logger.info(f"Z report closed {len(order_ids)} orders")
    return {
        "total": _money(sum((Decimal(str(o.total)) for o in orders), Decimal("0"))),
        "order_count": len(orders),
        "hours": _hourly_totals(orders),
        "items": [
            {"menu_item_id": menu_item_id, "name": name, "count": count}
            for menu_item_id, count, name in item_counts
        ],
        "ingredients": [
            {
                "ingredient_id": entry["ingredient_id"],
                "name": entry["name"],
                "unit": entry["unit"],
                "quantity_used": float(entry["used"]),
            }
            for entry in sorted(ingredients.values(), key=lambda e: e["ingredient_id"])
        ],
    }


def list_reportable_orders() -> list[dict]:
    with get_session() as session:
        orders = session.execute(
            select(Order).where(Order.reportable.is_(True)).order_by(Order.order_id.desc())
        ).scalars()
        return [serialize_order(order) for order in orders]


def menu_item_ids_for_orders(order_ids: list[int]) -> list[dict]:
    if not order_ids:
        return []
    with get_session() as session:
        item_ids = session.execute(
            select(OrderLine.menu_item_id)
            .where(OrderLine.order_id.in_(order_ids))
            .order_by(OrderLine.menu_order_id)
        ).scalars()
        return [{"menu_item_id": menu_item_id} for menu_item_id in item_ids]


def reset_reportable() -> int:
    """Mark every reportable order as reported; returns how many were flipped."""
    with get_session() as session:
        result = session.execute(
            update(Order)
            .where(Order.reportable.is_(True))
            .values(reportable=False)
            .execution_options(synchronize_session=False)
        )
        flipped = result.rowcount or 0

    logger.info(f"Set {flipped} reportable orders to non-reportable")
    return flipped


def list_orders(start: datetime, end: datetime) -> list[dict]:
    with get_session() as session:
        orders = session.execute(
            select(Order)
            .where(Order.timestamp >= start, Order.timestamp <= end)
            .order_by(Order.order_id.desc())
        ).scalars()
        return [serialize_order(order) for order in orders]


def list_reviews(start: datetime, end: datetime) -> list[dict]:
    with get_session() as session:
        orders = session.execute(
            select(Order)
            .where(Order.timestamp >= start, Order.timestamp <= end)
            .order_by(Order.timestamp.desc(), Order.order_id.desc())
        ).scalars()
        return [serialize_review(order) for order in orders]


def sales_report(name: str, start: datetime, end: datetime) -> list[dict]:
    """Units sold and revenue for one menu item over a date range."""
    with get_session() as session:
        total_quantity, total_revenue = session.execute(
            select(
                func.coalesce(func.sum(OrderLine.quantity), 0),
                func.coalesce(func.sum(OrderLine.quantity * MenuItem.price), 0),
            )
            .select_from(OrderLine)
            .join(Order, Order.order_id == OrderLine.order_id)
            .join(MenuItem, MenuItem.menu_item_id == OrderLine.menu_item_id)
            .where(MenuItem.name == name, Order.timestamp >= start, Order.timestamp <= end)
        ).one()

    return [{"total_quantity": int(total_quantity), "total_revenue": _money(total_revenue)}]


def favorite_items() -> list[dict]:
    """
    Most ordered core items among the latest order lines, best first.
    """
    config = get_active_config()
    with get_session() as session:
        newest = session.scalar(select(func.max(OrderLine.menu_order_id)))
        if newest is None:
            return [{"top_menu_items": []}]

        line_count = func.count(OrderLine.menu_order_id).label("line_count")
        rows = session.execute(
            select(OrderLine.menu_item_id, line_count)
            .where(
                OrderLine.menu_order_id > newest - config.favorites_window,
                OrderLine.menu_item_id.between(config.favorites_min_id, config.favorites_max_id),
            )
            .group_by(OrderLine.menu_item_id)
            .order_by(line_count.desc(), OrderLine.menu_item_id)
            .limit(config.favorites_limit)
        ).all()

    return [{"top_menu_items": [menu_item_id for menu_item_id, _ in rows]}]


def item_usage(ingredient_name: str, start: datetime, end: datetime) -> list[dict]:
    """Daily quantity of one ingredient consumed by the orders in a range."""
    with get_session() as session:
        rows = session.execute(
            select(Order.timestamp, MenuItemIngredient.quantity_used, OrderLine.quantity)
            .select_from(Order)
            .join(OrderLine, OrderLine.order_id == Order.order_id)
            .join(MenuItemIngredient, MenuItemIngredient.menu_item_id == OrderLine.menu_item_id)
            .join(Ingredient, Ingredient.ingredient_id == MenuItemIngredient.ingredient_id)
            .where(
                Ingredient.name == ingredient_name,
                Order.timestamp >= start,
                Order.timestamp <= end,
            )
        ).all()

    daily: dict = defaultdict(Decimal)
    for timestamp, quantity_used, quantity in rows:
        daily[timestamp.date()] += Decimal(str(quantity_used)) * quantity
    return [
        {"usage_date": day.isoformat(), "total_usage": float(total)}
        for day, total in sorted(daily.items())
    ]
