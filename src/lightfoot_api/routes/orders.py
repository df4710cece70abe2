"""
Orders API - order history and the X / Z reports for the manager screens
"""

import json

from flask import Blueprint, jsonify, request

from lightfoot_shared.datetime_utils import parse_date_range
from lightfoot_shared.logging_config import get_logger
from lightfoot_shared.serializers import success_response
from lightfoot_shared.services.report_service import (
    favorite_items,
    list_orders,
    list_reportable_orders,
    menu_item_ids_for_orders,
    reset_reportable,
    x_report,
    z_report,
)
from lightfoot_shared.validation import ValidationError

orders_bp = Blueprint("orders", __name__)
logger = get_logger(__name__)


def _parse_order_ids(raw: str | None) -> list[int]:
    """
    Read the `orders` query param: a JSON list of ids, or of order objects as
    returned by /orders/zReport.
    """
    if not raw:
        raise ValidationError("orders is required")
    try:
        entries = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValidationError("orders must be a JSON list") from exc
    if not isinstance(entries, list):
        raise ValidationError("orders must be a JSON list")

    order_ids = []
    for entry in entries:
        value = entry.get("order_id") if isinstance(entry, dict) else entry
        if isinstance(value, bool):
            raise ValidationError("orders must contain order ids")
        try:
            order_ids.append(int(value))
        except (TypeError, ValueError) as exc:
            raise ValidationError("orders must contain order ids") from exc
    return order_ids


@orders_bp.get("/orders")
def get_orders():
    """
    Order history within a date range, newest first.

    Query params:
        - startDate: ISO date or datetime
        - endDate: ISO date or datetime (a bare date includes the whole day)
    """
    start, end = parse_date_range(request.args.get("startDate"), request.args.get("endDate"))
    return jsonify(list_orders(start, end))


@orders_bp.get("/orders/zReport")
def get_reportable_orders():
    return jsonify(list_reportable_orders())


@orders_bp.get("/orders/menuItemIDs")
def get_menu_item_ids():
    order_ids = _parse_order_ids(request.args.get("orders"))
    return jsonify(menu_item_ids_for_orders(order_ids))


@orders_bp.post("/orders/reset")
def reset_orders():
    flipped = reset_reportable()
    return jsonify(success_response({"orders_reset": flipped}))


@orders_bp.get("/orders/favorites")
def get_favorites():
    return jsonify(favorite_items())


@orders_bp.get("/orders/xreport")
def get_x_report():
    """Today's sales by hour. Does not change any order."""
    return jsonify(x_report())


@orders_bp.post("/orders/zreport")
def run_z_report():
    """Summarize the reportable orders and close the reporting window."""
    report = z_report()
    logger.info(f"Z report generated: {report['order_count']} orders, total {report['total']}")
    return jsonify(success_response(report))
