"""
Kitchen queue: in-progress order components and their move to history.

An order is "placed" while its rows live in currentorders and "completed"
once they have been copied to completedorders and removed from the queue.
"""

from __future__ import annotations

from http import HTTPStatus

from sqlalchemy import delete, select

from lightfoot_shared.constants import UNKNOWN_ITEM_NAME, UNKNOWN_ITEM_TYPE
from lightfoot_shared.datetime_utils import day_bounds, local_now
from lightfoot_shared.db import get_session
from lightfoot_shared.logging_config import LoggerAdapter, get_logger
from lightfoot_shared.models import CompletedOrderLine, CurrentOrderLine, MenuItem

logger = get_logger(__name__)


def list_current_orders() -> list[dict]:
    """
    Group the kitchen queue by order for the kitchen board.

    Orders keep the order in which they were queued; inside an order the
    components are listed by descending group number.
    """
    with get_session() as session:
        rows = session.execute(
            select(CurrentOrderLine, MenuItem.name, MenuItem.item_type)
            .outerjoin(MenuItem, MenuItem.menu_item_id == CurrentOrderLine.menu_item_id)
            .order_by(CurrentOrderLine.order_id, CurrentOrderLine.menu_order_id)
        ).all()

    grouped: dict[int, dict] = {}
    for line, item_name, item_type in rows:
        entry = grouped.setdefault(
            line.order_id,
            {
                "order_id": line.order_id,
                "order_created": line.order_created.isoformat(),
                "items": [],
            },
        )
        entry["items"].append(
            {
                "menu_item_id": line.menu_item_id,
                "quantity": line.quantity,
                "itemgroup": line.itemgroup,
                "name": item_name or UNKNOWN_ITEM_NAME,
                "item_type": item_type or UNKNOWN_ITEM_TYPE,
            }
        )

    for entry in grouped.values():
        entry["items"].sort(key=lambda item: item["itemgroup"], reverse=True)
    return list(grouped.values())


def complete_order(order_id: int) -> tuple[dict, HTTPStatus]:
    """
    Move every queued component of an order to completedorders.

    Copy and delete share one transaction: on failure the order stays in the
    queue untouched.
    """
    log = LoggerAdapter(logger, {"order_id": order_id})

    with get_session() as session:
        lines = (
            session.execute(
                select(CurrentOrderLine)
                .where(CurrentOrderLine.order_id == order_id)
                .order_by(CurrentOrderLine.menu_order_id)
                .with_for_update()
            )
            .scalars()
            .all()
        )
        if not lines:
            log.warning(f"Kitchen completion requested for unknown order {order_id}")
            return {"message": "Order not found"}, HTTPStatus.NOT_FOUND

        completed_at = local_now()
        session.add_all(
            CompletedOrderLine(
                order_id=line.order_id,
                order_created=line.order_created,
                menu_item_id=line.menu_item_id,
                quantity=line.quantity,
                itemgroup=line.itemgroup,
                completed_at=completed_at,
            )
            for line in lines
        )
        session.execute(delete(CurrentOrderLine).where(CurrentOrderLine.order_id == order_id))

    log.info(f"Completed order {order_id} ({len(lines)} components)")
    return {"order_id": order_id, "completed_at": completed_at.isoformat()}, HTTPStatus.OK


def list_completed_today() -> list[dict]:
    """Today's completed orders, most recently finished first."""
    start, end = day_bounds()
    with get_session() as session:
        rows = session.execute(
            select(CompletedOrderLine, MenuItem.name)
            .outerjoin(MenuItem, MenuItem.menu_item_id == CompletedOrderLine.menu_item_id)
            .where(CompletedOrderLine.completed_at >= start, CompletedOrderLine.completed_at < end)
            .order_by(CompletedOrderLine.completed_at.desc(), CompletedOrderLine.id)
        ).all()

    grouped: dict[int, dict] = {}
    for line, item_name in rows:
        entry = grouped.setdefault(
            line.order_id,
            {
                "order_id": line.order_id,
                "completed_at": line.completed_at.isoformat(),
                "items": [],
            },
        )
        entry["items"].append(
            {
                "menu_item_id": line.menu_item_id,
                "quantity": line.quantity,
                "itemgroup": line.itemgroup,
                "name": item_name or UNKNOWN_ITEM_NAME,
            }
        )
    return list(grouped.values())
