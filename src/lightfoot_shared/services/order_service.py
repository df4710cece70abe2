"""
Order intake for the cashier POS and the customer kiosk.

An order is written as one unit of work: the order header, one history line
per unit sold, the kitchen queue rows for its grouped components and, for POS
orders, the inventory deduction. Identifiers come from the database, so two
checkouts submitted at the same moment can never collide.
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import func, select

from lightfoot_shared.constants import KIOSK_EMPLOYEE_ID, NO_RATING
from lightfoot_shared.datetime_utils import local_now
from lightfoot_shared.db import get_session
from lightfoot_shared.logging_config import get_logger
from lightfoot_shared.models import CurrentOrderLine, MenuItem, Order, OrderLine
from lightfoot_shared.schemas import (
    Cart,
    GroupedComponent,
    KioskOrderRequest,
    PosOrderRequest,
)
from lightfoot_shared.services.inventory_service import apply_deduction
from lightfoot_shared.validation import ValidationError

logger = get_logger(__name__)


def _referenced_item_ids(cart: Cart, grouped_components: list[GroupedComponent]) -> set[int]:
    item_ids = {item.menu_item_id for items in cart.values() for item in items}
    for group in grouped_components:
        item_ids.update(component.menu_item_id for component in group.components())
    return item_ids


def place_order(
    cart: Cart,
    grouped_components: list[GroupedComponent],
    total: Decimal,
    rating: int = NO_RATING,
    employee_id: int | None = None,
    *,
    deduct_inventory: bool = False,
    per_unit_deduction: bool = False,
) -> int:
    """
    Persist an order and return its id.

    Args:
        cart: category -> items; every unit becomes one order line
        grouped_components: kitchen groups; every physical component becomes
            one kitchen queue row tagged with the group's number
        total: amount charged
        rating: customer rating, 0 when none was given
        employee_id: cashier id, None for kiosk orders
        deduct_inventory: also consume ingredients in the same transaction
        per_unit_deduction: deduct each cart item's own recipe once, with no
            portion multipliers or a la carte pairing

    Raises:
        ValidationError: empty cart or unknown menu item; nothing is written
    """
    if not any(cart.values()):
        raise ValidationError("Order must contain at least one item")

    item_ids = _referenced_item_ids(cart, grouped_components)

    with get_session() as session:
        known_ids = set(
            session.execute(
                select(MenuItem.menu_item_id).where(MenuItem.menu_item_id.in_(list(item_ids)))
            ).scalars()
        )
        missing = sorted(item_ids - known_ids)
        if missing:
            raise ValidationError(f"Unknown menu items: {missing}")

        created_at = local_now()
        order = Order(
            employee_id=employee_id if employee_id is not None else KIOSK_EMPLOYEE_ID,
            timestamp=created_at,
            total=total,
            review=rating,
            reportable=True,
        )
        session.add(order)
        session.flush()

        session.add_all(
            OrderLine(order_id=order.order_id, menu_item_id=item.menu_item_id, quantity=1)
            for items in cart.values()
            for item in items
        )

        session.add_all(
            CurrentOrderLine(
                order_id=order.order_id,
                menu_item_id=component.menu_item_id,
                quantity=1,
                order_created=created_at,
                itemgroup=group.group_num,
            )
            for group in grouped_components
            for component in group.components()
        )

        if deduct_inventory:
            apply_deduction(session, cart, per_unit=per_unit_deduction)

        order_id = order.order_id

    logger.info(
        f"Placed order {order_id} ({len(grouped_components)} kitchen groups, "
        f"employee {employee_id if employee_id is not None else 'kiosk'})"
    )
    return order_id


def submit_kiosk_order(payload: KioskOrderRequest) -> int:
    """Kiosk checkout: order plus kitchen queue; inventory is deducted by a separate call."""
    return place_order(
        payload.order,
        payload.grouped_order,
        payload.total,
        payload.rating,
    )


def record_pos_order(payload: PosOrderRequest) -> int:
    """Cashier order: history lines and a per-unit inventory deduction in one transaction."""
    return place_order(
        payload.order,
        [],
        payload.total,
        NO_RATING,
        payload.employee_id,
        deduct_inventory=True,
        per_unit_deduction=True,
    )


def latest_order_id() -> int | None:
    """Highest order id on record; the kiosk shows it as the customer's number."""
    with get_session() as session:
        return session.scalar(select(func.max(Order.order_id)))
