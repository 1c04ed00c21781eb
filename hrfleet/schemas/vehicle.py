from typing import ClassVar, Literal

from pydantic import Field, field_serializer

from hrfleet.schemas.base import CamelModel, PartialUpdate, UtcDatetime, compact_number

VehicleStatus = Literal["available", "in use", "sold", "on service"]


class VehicleCreate(CamelModel):
    vin: str = Field(min_length=1)
    model: str = Field(min_length=1)
    mileage: float = Field(ge=0)
    driver: str | None = None
    status: VehicleStatus = "available"


class VehicleUpdate(PartialUpdate):
    nullable_fields: ClassVar[frozenset[str]] = frozenset({"driver"})

    vin: str | None = Field(None, min_length=1)
    model: str | None = Field(None, min_length=1)
    mileage: float | None = Field(None, ge=0)
    driver: str | None = None
    status: VehicleStatus | None = None


class DriverSummary(CamelModel):
    id: str
    full_name: str


class VehicleResponse(CamelModel):
    id: str
    vin: str
    model: str
    mileage: float
    driver: DriverSummary | None = None
    status: str
    created_at: UtcDatetime
    updated_at: UtcDatetime

    @field_serializer("mileage")
    def _mileage(self, value: float):
        return compact_number(value)
