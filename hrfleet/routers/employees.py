from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hrfleet.database import get_db
from hrfleet.schemas.employee import (
    AwardPointsRequest,
    AwardPointsResponse,
    EmployeeCreate,
    EmployeeResponse,
    EmployeeUpdate,
)
from hrfleet.services import employee_service
from hrfleet.utils.response import message_response

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("", response_model=list[EmployeeResponse])
async def list_employees(db: AsyncSession = Depends(get_db)):
    return await employee_service.list_employees(db)


@router.post("", status_code=201, response_model=EmployeeResponse)
async def create_employee(payload: EmployeeCreate, db: AsyncSession = Depends(get_db)):
    return await employee_service.create_employee(db, payload)


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(employee_id: str, db: AsyncSession = Depends(get_db)):
    return await employee_service.get_employee(db, employee_id)


@router.put("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(employee_id: str, payload: EmployeeUpdate, db: AsyncSession = Depends(get_db)):
    return await employee_service.update_employee(db, employee_id, payload)


@router.delete("/{employee_id}")
async def delete_employee(employee_id: str, db: AsyncSession = Depends(get_db)):
    await employee_service.delete_employee(db, employee_id)
    return message_response("Employee deleted successfully")


@router.patch("/{employee_id}/add-points", response_model=AwardPointsResponse)
async def add_points(employee_id: str, payload: AwardPointsRequest, db: AsyncSession = Depends(get_db)):
    employee = await employee_service.award_points(db, employee_id, payload.points, payload.reason)
    return AwardPointsResponse(
        message="Points added successfully",
        employee=EmployeeResponse.model_validate(employee),
    )
