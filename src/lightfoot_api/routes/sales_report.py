"""
Sales report API - units sold and revenue of one menu item
"""

from flask import Blueprint, jsonify, request

from lightfoot_shared.datetime_utils import parse_date_range
from lightfoot_shared.services.report_service import sales_report
from lightfoot_shared.validation import require_text

sales_report_bp = Blueprint("sales_report", __name__)


@sales_report_bp.get("/salesreport")
def get_sales_report():
    name = require_text(request.args.get("name"), "name")
    start, end = parse_date_range(request.args.get("startDate"), request.args.get("endDate"))
    return jsonify(sales_report(name, start, end))
