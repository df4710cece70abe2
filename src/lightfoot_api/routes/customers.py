"""
Customers API - kiosk rewards accounts

The kiosk reads `success` and `message` from every response, including
failures, so these endpoints answer with that shape instead of the standard
envelope.
"""

from http import HTTPStatus

from flask import Blueprint, jsonify, request
from pydantic import ValidationError as PydanticValidationError

from lightfoot_shared.logging_config import get_logger
from lightfoot_shared.schemas import AddPointsRequest, EmailRequest, RedeemPointsRequest
from lightfoot_shared.services.customer_service import (
    add_points,
    check_email,
    create_customer,
    redeem_points,
)
from lightfoot_shared.validation import ValidationError

customers_bp = Blueprint("customers", __name__)
logger = get_logger(__name__)


def _failure(message: str, status: HTTPStatus = HTTPStatus.BAD_REQUEST):
    return jsonify({"success": False, "message": message}), status


@customers_bp.get("/customers/check-email")
def get_check_email():
    """
    Whether a rewards account exists for an email.

    Query params:
        - email: str
    """
    email = (request.args.get("email") or "").strip()
    if not email:
        return _failure("Email is required.")
    return jsonify(check_email(email))


@customers_bp.post("/customers/create")
def post_create():
    try:
        payload = EmailRequest.model_validate(request.get_json(silent=True) or {})
        result, status = create_customer(payload.email)
    except PydanticValidationError as e:
        logger.warning(f"Invalid rewards signup: {e.error_count()} errors")
        return _failure("Email is required.")
    except ValidationError as exc:
        return _failure(str(exc))
    return jsonify(result), status


@customers_bp.post("/customers/add-points")
def post_add_points():
    """
    Body:
        {"email": str, "points": int > 0}
    """
    try:
        payload = AddPointsRequest.model_validate(request.get_json(silent=True) or {})
    except PydanticValidationError as e:
        logger.warning(f"Invalid add-points request: {e.error_count()} errors")
        return _failure("Email and a positive number of points are required.")
    result, status = add_points(payload.email, payload.points)
    return jsonify(result), status


@customers_bp.post("/customers/redeem-points")
def post_redeem_points():
    """
    Body:
        {"email": str, "remainingPoints": int >= 0}
    """
    try:
        payload = RedeemPointsRequest.model_validate(request.get_json(silent=True) or {})
    except PydanticValidationError as e:
        logger.warning(f"Invalid redeem-points request: {e.error_count()} errors")
        return _failure("Email and a non-negative remaining balance are required.")
    result, status = redeem_points(payload.email, payload.remaining_points)
    return jsonify(result), status
