from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hrfleet.database import get_db
from hrfleet.schemas.vehicle import VehicleCreate, VehicleResponse, VehicleUpdate
from hrfleet.services import vehicle_service
from hrfleet.utils.response import message_response

router = APIRouter(prefix="/vehicles", tags=["vehicles"])


@router.get("", response_model=list[VehicleResponse])
async def list_vehicles(db: AsyncSession = Depends(get_db)):
    return await vehicle_service.list_vehicles(db)


@router.post("", status_code=201, response_model=VehicleResponse)
async def create_vehicle(payload: VehicleCreate, db: AsyncSession = Depends(get_db)):
    return await vehicle_service.create_vehicle(db, payload)


@router.get("/{vehicle_id}", response_model=VehicleResponse)
async def get_vehicle(vehicle_id: str, db: AsyncSession = Depends(get_db)):
    return await vehicle_service.get_vehicle(db, vehicle_id)


@router.put("/{vehicle_id}", response_model=VehicleResponse)
async def update_vehicle(vehicle_id: str, payload: VehicleUpdate, db: AsyncSession = Depends(get_db)):
    return await vehicle_service.update_vehicle(db, vehicle_id, payload)


@router.delete("/{vehicle_id}")
async def delete_vehicle(vehicle_id: str, db: AsyncSession = Depends(get_db)):
    await vehicle_service.delete_vehicle(db, vehicle_id)
    return message_response("Vehicle deleted successfully")
