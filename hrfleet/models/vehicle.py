from sqlalchemy import Column, String, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from hrfleet.database import Base
from hrfleet.models._common import new_id, utcnow

VEHICLE_STATUSES = ("available", "in use", "sold", "on service")


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(String, primary_key=True, default=new_id)
    vin = Column(String, nullable=False, unique=True)
    model = Column(String, nullable=False)
    mileage = Column(Float, nullable=False)
    driver_id = Column(String, ForeignKey("employees.id", ondelete="SET NULL"), nullable=True)
    status = Column(String, nullable=False, default="available")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    driver = relationship("Employee", lazy="selectin")
