"""
Users API - access tiers of signed-in accounts
"""

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from lightfoot_shared.schemas import UserRoleRequest
from lightfoot_shared.serializers import error_response, success_response
from lightfoot_shared.services.employee_service import create_user_role, get_user_role

users_bp = Blueprint("users", __name__)


@users_bp.get("/users/<string:user_id>")
def get_user(user_id: str):
    result, status = get_user_role(user_id)
    if status != HTTPStatus.OK:
        return jsonify(error_response(result["message"])), status
    return jsonify(result)


@users_bp.post("/users")
def post_user():
    """
    Register a sign-in, or return the role already on file.

    Body:
        {"userId": str, "role": int (optional, 0..4, default 1), "name": str}
    """
    payload = UserRoleRequest.model_validate(request.get_json(silent=True) or {})
    result, status = create_user_role(payload)
    return jsonify(success_response(result)), status
