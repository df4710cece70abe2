"""Service for managing employee records and sign-in roles."""

from __future__ import annotations

from http import HTTPStatus

from sqlalchemy import select

from lightfoot_shared.constants import (
    MAX_EMPLOYEE_ROLE,
    MAX_USER_ROLE,
    MIN_EMPLOYEE_ROLE,
    MIN_USER_ROLE,
    PIN_OFFSET,
    UNASSIGNED_EMPLOYEE_ROLE,
    UNASSIGNED_POSITION,
)
from lightfoot_shared.db import get_session
from lightfoot_shared.logging_config import get_logger
from lightfoot_shared.models import Employee, UserRole
from lightfoot_shared.schemas import AddEmployeeRequest, ProvisionEmployeeRequest, UserRoleRequest
from lightfoot_shared.serializers import serialize_employee, serialize_user_role
from lightfoot_shared.validation import ValidationError, is_pin, require_text, validate_role

logger = get_logger(__name__)

EMPLOYEE_NOT_FOUND = ({"message": "Employee not found"}, HTTPStatus.NOT_FOUND)


def list_employees() -> list[dict]:
    with get_session() as session:
        employees = session.execute(select(Employee).order_by(Employee.employee_id)).scalars()
        return [serialize_employee(emp) for emp in employees]


def get_employee_by_subject(subject: str) -> tuple[dict, HTTPStatus]:
    """Look up the employee linked to an external sign-in subject id."""
    with get_session() as session:
        employee = session.execute(
            select(Employee).where(Employee.sub == subject)
        ).scalar_one_or_none()
        if employee is None:
            return {"message": "User not found"}, HTTPStatus.NOT_FOUND
        return serialize_employee(employee), HTTPStatus.OK


def provision_employee(payload: ProvisionEmployeeRequest) -> tuple[dict, HTTPStatus]:
    """
    Create the employee row for a first sign-in.

    A known subject gets its existing row back. New accounts start without a
    position or role; a manager assigns them afterwards.
    """
    validate_role(payload.role, MIN_EMPLOYEE_ROLE, MAX_EMPLOYEE_ROLE)

    with get_session() as session:
        existing = session.execute(
            select(Employee).where(Employee.sub == payload.user_id)
        ).scalar_one_or_none()
        if existing is not None:
            return serialize_employee(existing), HTTPStatus.OK

        first_name, _, last_name = payload.name.strip().partition(" ")
        employee = Employee(
            first_name=first_name,
            last_name=last_name or None,
            position=UNASSIGNED_POSITION,
            is_active=True,
            role=UNASSIGNED_EMPLOYEE_ROLE,
            sub=payload.user_id,
        )
        session.add(employee)
        session.flush()
        employee.pin_id = employee.employee_id + PIN_OFFSET
        result = serialize_employee(employee)

    logger.info(f"Provisioned employee {result['employee_id']} for a new sign-in")
    return {"message": "Employee added successfully", "employee": result}, HTTPStatus.CREATED


def add_employee(payload: AddEmployeeRequest) -> dict:
    """Add an employee by hand from the manager screen."""
    first_name = require_text(payload.first_name, "first_name")
    last_name = require_text(payload.last_name, "last_name")
    position = require_text(payload.position, "position")
    if not is_pin(payload.pin_id):
        raise ValidationError("pin_id must be a 4 digit PIN")

    with get_session() as session:
        employee = Employee(
            first_name=first_name,
            last_name=last_name,
            position=position,
            is_active=True,
            pin_id=int(str(payload.pin_id).strip()),
        )
        session.add(employee)
        session.flush()
        result = serialize_employee(employee)

    logger.info(f"Created employee {result['employee_id']}: {first_name} {last_name}")
    return result


def _update_employee(employee_id: int, **changes) -> tuple[dict, HTTPStatus]:
    with get_session() as session:
        employee = session.get(Employee, employee_id)
        if employee is None:
            logger.warning(f"Attempt to update non-existent employee {employee_id}")
            return EMPLOYEE_NOT_FOUND
        for field, value in changes.items():
            setattr(employee, field, value)
        result = serialize_employee(employee)

    logger.info(f"Updated employee {employee_id}: {', '.join(changes)}")
    return result, HTTPStatus.OK


def update_position(employee_id: int, position: str) -> tuple[dict, HTTPStatus]:
    return _update_employee(employee_id, position=require_text(position, "selectedPosition"))


def update_role(employee_id: int, role: int) -> tuple[dict, HTTPStatus]:
    validate_role(role, MIN_EMPLOYEE_ROLE, MAX_EMPLOYEE_ROLE)
    return _update_employee(employee_id, role=role)


def update_name(employee_id: int, first_name: str, last_name: str) -> tuple[dict, HTTPStatus]:
    return _update_employee(
        employee_id,
        first_name=require_text(first_name, "first_name"),
        last_name=require_text(last_name, "last_name"),
    )


def set_active(employee_id: int, is_active: bool) -> tuple[dict, HTTPStatus]:
    return _update_employee(employee_id, is_active=is_active)


def delete_employee(employee_id: int) -> tuple[dict, HTTPStatus]:
    with get_session() as session:
        employee = session.get(Employee, employee_id)
        if employee is None:
            return EMPLOYEE_NOT_FOUND
        session.delete(employee)

    logger.info(f"Removed employee {employee_id}")
    return {"employee_id": employee_id}, HTTPStatus.OK


def get_user_role(user_id: str) -> tuple[dict, HTTPStatus]:
    with get_session() as session:
        user = session.get(UserRole, user_id)
        if user is None:
            return {"message": "User not found"}, HTTPStatus.NOT_FOUND
        return serialize_user_role(user), HTTPStatus.OK


def create_user_role(payload: UserRoleRequest) -> tuple[dict, HTTPStatus]:
    """Register a sign-in with an access tier, or return the one already stored."""
    role = payload.role
    validate_role(role, MIN_USER_ROLE, MAX_USER_ROLE)

    with get_session() as session:
        existing = session.get(UserRole, payload.user_id)
        if existing is not None:
            return serialize_user_role(existing), HTTPStatus.OK

        user = UserRole(user_id=payload.user_id, role=role, name=payload.name)
        session.add(user)
        session.flush()
        result = serialize_user_role(user)

    logger.info(f"Registered user role {role} for {payload.user_id}")
    return result, HTTPStatus.CREATED
