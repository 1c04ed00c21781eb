from sqlalchemy import Column, String, Float, Integer, DateTime, JSON, ForeignKey
from sqlalchemy.orm import relationship

from hrfleet.database import Base
from hrfleet.models._common import new_id, utcnow

CONTRACT_STATUSES = ("active", "terminated")


class Employee(Base):
    __tablename__ = "employees"

    id = Column(String, primary_key=True, default=new_id)
    staff_number = Column(String, nullable=False, unique=True)
    full_name = Column(String, nullable=False)
    identity_number = Column(String, nullable=False)
    qualifications = Column(String, nullable=False)
    position = Column(String, nullable=False)
    salary = Column(Float, nullable=False)
    contract_status = Column(String, nullable=False, default="active")
    points = Column(Float, nullable=False, default=0)
    academic_training = Column(JSON, nullable=False, default=list)
    professional_training = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    points_history = relationship(
        "PointsAward",
        order_by="PointsAward.seq",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class PointsAward(Base):
    __tablename__ = "points_awards"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    employee_id = Column(String, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    points = Column(Float, nullable=False)
    reason = Column(String, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
