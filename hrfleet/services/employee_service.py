import logging
import math
from numbers import Real

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hrfleet.models.employee import Employee, PointsAward
from hrfleet.models._common import utcnow
from hrfleet.schemas.employee import EmployeeCreate, EmployeeUpdate
from hrfleet.utils.exceptions import (
    ConflictError,
    NotFound,
    ValidationError,
    is_unique_violation,
    parse_identifier,
    store_errors,
)

logger = logging.getLogger(__name__)

INVALID_ID = "Invalid employee ID"
NOT_FOUND = "Employee not found"
DUPLICATE_STAFF_NUMBER = "Staff number must be unique"


async def _load(session: AsyncSession, employee_id: str) -> Employee | None:
    result = await session.execute(
        select(Employee)
        .where(Employee.id == employee_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def list_employees(session: AsyncSession) -> list[Employee]:
    with store_errors("Error fetching employees"):
        result = await session.execute(select(Employee).order_by(Employee.created_at))
        return list(result.scalars().all())


async def get_employee(session: AsyncSession, employee_id: str) -> Employee:
    employee_id = parse_identifier(employee_id, INVALID_ID)
    with store_errors("Error fetching employee"):
        employee = await _load(session, employee_id)
    if employee is None:
        raise NotFound(NOT_FOUND)
    return employee


async def create_employee(session: AsyncSession, payload: EmployeeCreate) -> Employee:
    employee = Employee(**payload.model_dump(), points=0)
    with store_errors("Failed to save employee"):
        session.add(employee)
        try:
            await session.commit()
        except IntegrityError as exc:
            await session.rollback()
            if not is_unique_violation(exc, "staff_number"):
                raise
            raise ConflictError(DUPLICATE_STAFF_NUMBER) from None
        return await _load(session, employee.id)


async def update_employee(session: AsyncSession, employee_id: str, payload: EmployeeUpdate) -> Employee:
    employee_id = parse_identifier(employee_id, INVALID_ID)
    changes = payload.changes()
    with store_errors("Error updating employee"):
        employee = await _load(session, employee_id)
        if employee is None:
            raise NotFound(NOT_FOUND)
        if not changes:
            return employee

        for field, value in changes.items():
            setattr(employee, field, value)
        try:
            await session.commit()
        except IntegrityError as exc:
            await session.rollback()
            if not is_unique_violation(exc, "staff_number"):
                raise
            raise ConflictError(DUPLICATE_STAFF_NUMBER) from None
        return await _load(session, employee_id)


async def delete_employee(session: AsyncSession, employee_id: str) -> None:
    employee_id = parse_identifier(employee_id, INVALID_ID)
    with store_errors("Error deleting employee"):
        employee = await _load(session, employee_id)
        if employee is None:
            raise NotFound(NOT_FOUND)
        await session.delete(employee)
        await session.commit()


def _validate_award(points, reason) -> tuple[float, str]:
    # bool is a Real subclass in Python; JSON true/false are not numbers.
    # json.loads also accepts Infinity and NaN, which no column can hold.
    if isinstance(points, bool) or not isinstance(points, Real) or not math.isfinite(points) or not points > 0:
        raise ValidationError("Points must be a positive number")
    if not isinstance(reason, str) or not reason.strip():
        raise ValidationError("Reason for points is required")
    return float(points), reason


async def award_points(session: AsyncSession, employee_id: str, points, reason) -> Employee:
    """Add ``points`` to the employee's total and log the award.

    The increment happens in SQL and the history row is inserted in the same
    transaction, so the total and the history move together and concurrent
    awards to one employee cannot overwrite each other.
    """
    employee_id = parse_identifier(employee_id, INVALID_ID)
    delta, reason = _validate_award(points, reason)

    with store_errors("Error adding points"):
        now = utcnow()
        result = await session.execute(
            update(Employee)
            .where(Employee.id == employee_id)
            .values(points=Employee.points + delta, updated_at=now)
        )
        if result.rowcount == 0:
            await session.rollback()
            raise NotFound(NOT_FOUND)

        session.add(PointsAward(employee_id=employee_id, points=delta, reason=reason, date=now))
        await session.commit()
        logger.info("Awarded %s points to employee %s", delta, employee_id)
        return await _load(session, employee_id)
