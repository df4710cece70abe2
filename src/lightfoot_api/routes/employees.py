"""
Employees API - staff records for the manager screen and first sign-in
"""

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from lightfoot_shared.schemas import (
    AddEmployeeRequest,
    ProvisionEmployeeRequest,
    UpdateActiveRequest,
    UpdateNameRequest,
    UpdatePositionRequest,
    UpdateRoleRequest,
)
from lightfoot_shared.serializers import error_response, success_response
from lightfoot_shared.services.employee_service import (
    add_employee,
    delete_employee,
    get_employee_by_subject,
    list_employees,
    provision_employee,
    set_active,
    update_name,
    update_position,
    update_role,
)

# Create blueprint without url_prefix (inherited from parent)
employees_bp = Blueprint("employees", __name__)


def _respond(result: dict, status: HTTPStatus):
    if status.value >= 400:
        return jsonify(error_response(result["message"])), status
    return jsonify(success_response(result)), status


# ==================== EMPLOYEES CRUD ENDPOINTS ====================


@employees_bp.get("/employees")
def get_all_employees():
    return jsonify(list_employees())


@employees_bp.get("/employees/<string:user_id>")
def get_employee(user_id: str):
    """Employee linked to a sign-in subject id."""
    result, status = get_employee_by_subject(user_id)
    if status != HTTPStatus.OK:
        return jsonify(error_response(result["message"])), status
    return jsonify(result)


@employees_bp.post("/employees")
def post_provision_employee():
    """
    Create the employee row for a first sign-in, or return the existing one.

    Body:
        {"userId": str, "name": str, "role": int (optional, -1..4)}
    """
    payload = ProvisionEmployeeRequest.model_validate(request.get_json(silent=True) or {})
    return _respond(*provision_employee(payload))


@employees_bp.post("/employees/add")
def post_add_employee():
    """
    Body:
        {"first_name": str, "last_name": str, "position": str, "pin_id": 4 digits}
    """
    payload = AddEmployeeRequest.model_validate(request.get_json(silent=True) or {})
    return jsonify(success_response(add_employee(payload))), HTTPStatus.CREATED


# ==================== FIELD UPDATES ====================


@employees_bp.post("/employees/position")
def post_position():
    payload = UpdatePositionRequest.model_validate(request.get_json(silent=True) or {})
    return _respond(*update_position(payload.id, payload.position))


@employees_bp.post("/employees/role")
def post_role():
    payload = UpdateRoleRequest.model_validate(request.get_json(silent=True) or {})
    return _respond(*update_role(payload.id, payload.role))


@employees_bp.post("/employees/name")
def post_name():
    payload = UpdateNameRequest.model_validate(request.get_json(silent=True) or {})
    return _respond(*update_name(payload.id, payload.first_name, payload.last_name))


@employees_bp.post("/employees/active")
def post_active():
    payload = UpdateActiveRequest.model_validate(request.get_json(silent=True) or {})
    return _respond(*set_active(payload.id, payload.is_active))


@employees_bp.delete("/employees/<int:employee_id>")
def remove_employee(employee_id: int):
    return _respond(*delete_employee(employee_id))
