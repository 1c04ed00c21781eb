import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hrfleet.models.employee import Employee
from hrfleet.models.vehicle import Vehicle
from hrfleet.schemas.vehicle import VehicleCreate, VehicleUpdate
from hrfleet.utils.exceptions import (
    ConflictError,
    NotFound,
    ValidationError,
    is_unique_violation,
    parse_identifier,
    store_errors,
)

logger = logging.getLogger(__name__)

INVALID_ID = "Invalid vehicle ID"
NOT_FOUND = "Vehicle not found"
DUPLICATE_VIN = "VIN must be unique"


async def _load(session: AsyncSession, vehicle_id: str) -> Vehicle | None:
    result = await session.execute(
        select(Vehicle)
        .where(Vehicle.id == vehicle_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def _resolve_driver(session: AsyncSession, driver: str | None) -> str | None:
    if driver is None:
        return None
    driver_id = parse_identifier(driver, "Invalid driver ID")
    if await session.get(Employee, driver_id) is None:
        raise ValidationError("Driver not found")
    return driver_id


async def list_vehicles(session: AsyncSession) -> list[Vehicle]:
    with store_errors("Error fetching vehicles"):
        result = await session.execute(select(Vehicle).order_by(Vehicle.created_at))
        return list(result.scalars().all())


async def get_vehicle(session: AsyncSession, vehicle_id: str) -> Vehicle:
    vehicle_id = parse_identifier(vehicle_id, INVALID_ID)
    with store_errors("Error fetching vehicle"):
        vehicle = await _load(session, vehicle_id)
    if vehicle is None:
        raise NotFound(NOT_FOUND)
    return vehicle


async def create_vehicle(session: AsyncSession, payload: VehicleCreate) -> Vehicle:
    data = payload.model_dump()
    with store_errors("Failed to save vehicle"):
        driver_id = await _resolve_driver(session, data.pop("driver"))
        vehicle = Vehicle(**data, driver_id=driver_id)
        session.add(vehicle)
        try:
            await session.commit()
        except IntegrityError as exc:
            await session.rollback()
            if not is_unique_violation(exc, "vin"):
                raise
            raise ConflictError(DUPLICATE_VIN) from None
        return await _load(session, vehicle.id)


async def update_vehicle(session: AsyncSession, vehicle_id: str, payload: VehicleUpdate) -> Vehicle:
    vehicle_id = parse_identifier(vehicle_id, INVALID_ID)
    changes = payload.changes()
    with store_errors("Error updating vehicle"):
        vehicle = await _load(session, vehicle_id)
        if vehicle is None:
            raise NotFound(NOT_FOUND)
        if "driver" in changes:
            vehicle.driver_id = await _resolve_driver(session, changes.pop("driver"))
        for field, value in changes.items():
            setattr(vehicle, field, value)
        try:
            await session.commit()
        except IntegrityError as exc:
            await session.rollback()
            if not is_unique_violation(exc, "vin"):
                raise
            raise ConflictError(DUPLICATE_VIN) from None
        return await _load(session, vehicle_id)


async def delete_vehicle(session: AsyncSession, vehicle_id: str) -> None:
    vehicle_id = parse_identifier(vehicle_id, INVALID_ID)
    with store_errors("Error deleting vehicle"):
        vehicle = await _load(session, vehicle_id)
        if vehicle is None:
            raise NotFound(NOT_FOUND)
        await session.delete(vehicle)
        await session.commit()
