"""
Rewards accounts for kiosk customers, keyed by email.
"""

from __future__ import annotations

from http import HTTPStatus

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError

from lightfoot_shared.db import get_session
from lightfoot_shared.logging_config import get_logger
from lightfoot_shared.models import Customer
from lightfoot_shared.validation import validate_email

logger = get_logger(__name__)


def check_email(email: str) -> dict:
    with get_session() as session:
        customer = session.execute(
            select(Customer).where(Customer.email == email)
        ).scalar_one_or_none()
        if customer is None:
            return {"exists": False}
        return {"exists": True, "points": customer.points}


def create_customer(email: str) -> tuple[dict, HTTPStatus]:
    """Open an account with zero points; an email can only register once."""
    validate_email(email)

    try:
        with get_session() as session:
            existing = session.execute(
                select(Customer.user_id).where(Customer.email == email)
            ).scalar_one_or_none()
            if existing is not None:
                return {"success": False, "message": "Email already exists."}, HTTPStatus.CONFLICT

            customer = Customer(email=email, points=0)
            session.add(customer)
            session.flush()
            user_id = customer.user_id
    except IntegrityError:
        # Lost a race with a concurrent signup for the same address
        logger.warning(f"Duplicate rewards signup for {email}")
        return {"success": False, "message": "Email already exists."}, HTTPStatus.CONFLICT

    logger.info(f"Created rewards account {user_id}")
    return {"success": True, "userId": user_id}, HTTPStatus.OK


def add_points(email: str, points: int) -> tuple[dict, HTTPStatus]:
    with get_session() as session:
        result = session.execute(
            update(Customer)
            .where(Customer.email == email)
            .values(points=Customer.points + points)
            .execution_options(synchronize_session=False)
        )
        if not result.rowcount:
            return {"success": False, "message": "User not found."}, HTTPStatus.NOT_FOUND
        balance = session.scalar(select(Customer.points).where(Customer.email == email))

    logger.info(f"Added {points} points to rewards account {email}")
    return {"success": True, "points": balance}, HTTPStatus.OK


def redeem_points(email: str, remaining_points: int) -> tuple[dict, HTTPStatus]:
    """Set the balance left after the kiosk applied a reward."""
    with get_session() as session:
        customer = session.execute(
            select(Customer).where(Customer.email == email)
        ).scalar_one_or_none()
        if customer is None:
            return {"success": False, "message": "User not found."}, HTTPStatus.NOT_FOUND
        customer.points = remaining_points

    logger.info(f"Rewards account {email} balance set to {remaining_points}")
    return {"success": True, "remainingPoints": remaining_points}, HTTPStatus.OK
