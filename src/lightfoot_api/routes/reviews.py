"""
Reviews API - customer ratings left at the kiosk
"""

from flask import Blueprint, jsonify, request

from lightfoot_shared.datetime_utils import parse_date_range
from lightfoot_shared.services.report_service import list_reviews

reviews_bp = Blueprint("reviews", __name__)


@reviews_bp.get("/reviews")
def get_reviews():
    start, end = parse_date_range(request.args.get("startDate"), request.args.get("endDate"))
    return jsonify(list_reviews(start, end))
