from typing import Any, Literal

from pydantic import Field, field_serializer, field_validator

from hrfleet.schemas.base import CamelModel, PartialUpdate, UtcDatetime, compact_number, dedupe

ContractStatus = Literal["active", "terminated"]


class EmployeeCreate(CamelModel):
    staff_number: str = Field(min_length=1)
    full_name: str = Field(min_length=1)
    identity_number: str = Field(min_length=1)
    qualifications: str = Field(min_length=1)
    position: str = Field(min_length=1)
    salary: float
    contract_status: ContractStatus = "active"
    academic_training: list[str] = []
    professional_training: list[str] = []

    @field_validator("academic_training", "professional_training")
    @classmethod
    def _unique_entries(cls, value: list[str]) -> list[str]:
        return dedupe(value)


class EmployeeUpdate(PartialUpdate):
    # points and pointsHistory are not accepted here; only the award endpoint changes them
    staff_number: str | None = Field(None, min_length=1)
    full_name: str | None = Field(None, min_length=1)
    identity_number: str | None = Field(None, min_length=1)
    qualifications: str | None = Field(None, min_length=1)
    position: str | None = Field(None, min_length=1)
    salary: float | None = None
    contract_status: ContractStatus | None = None
    academic_training: list[str] | None = None
    professional_training: list[str] | None = None

    @field_validator("academic_training", "professional_training")
    @classmethod
    def _unique_entries(cls, value: list[str] | None) -> list[str] | None:
        return dedupe(value) if value is not None else None


class AwardPointsRequest(CamelModel):
    # Checked by the service so the error messages stay specific to each field
    points: Any = None
    reason: Any = None


class PointsAwardResponse(CamelModel):
    points: float
    reason: str
    date: UtcDatetime

    @field_serializer("points")
    def _points(self, value: float):
        return compact_number(value)


class EmployeeResponse(CamelModel):
    id: str
    staff_number: str
    full_name: str
    identity_number: str
    qualifications: str
    position: str
    salary: float
    contract_status: str
    points: float
    points_history: list[PointsAwardResponse]
    academic_training: list[str]
    professional_training: list[str]
    created_at: UtcDatetime
    updated_at: UtcDatetime

    @field_serializer("salary", "points")
    def _numbers(self, value: float):
        return compact_number(value)


class AwardPointsResponse(CamelModel):
    message: str
    employee: EmployeeResponse
