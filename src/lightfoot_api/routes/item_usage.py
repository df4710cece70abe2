"""
Item usage API - daily consumption of one ingredient
"""

from flask import Blueprint, jsonify, request

from lightfoot_shared.datetime_utils import parse_date_range
from lightfoot_shared.services.report_service import item_usage
from lightfoot_shared.validation import require_text

item_usage_bp = Blueprint("item_usage", __name__)


@item_usage_bp.get("/itemusage")
def get_item_usage():
    """
    Query params:
        - name: ingredient name
        - startDate, endDate: ISO dates
    """
    name = require_text(request.args.get("name"), "name")
    start, end = parse_date_range(request.args.get("startDate"), request.args.get("endDate"))
    return jsonify(item_usage(name, start, end))
