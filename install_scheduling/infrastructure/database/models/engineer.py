"""
Engineer SQLAlchemy models.
"""

from sqlalchemy import Boolean, Column, Date, ForeignKey, Integer, String, Text, Time, Uuid
from sqlalchemy.orm import relationship

from .base import BaseModel


class EngineerModel(BaseModel):
    """Engineer database model."""

    __tablename__ = "engineers"

    name = Column(String(255), nullable=False)
    email = Column(String(255))
    starting_postcode = Column(String(16))
    availability = Column(Boolean, nullable=False, default=True)
    region = Column(String(100))

    # Relationships
    jobs = relationship("JobModel", back_populates="engineer")
    working_hours = relationship(
        "EngineerAvailabilityModel",
        back_populates="engineer",
        cascade="all, delete-orphan",
        order_by="EngineerAvailabilityModel.day_of_week",
    )
    time_off = relationship(
        "EngineerTimeOffModel", back_populates="engineer", cascade="all, delete-orphan"
    )
    service_areas = relationship(
        "EngineerServiceAreaModel", back_populates="engineer", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Engineer(id={self.id}, name={self.name})>"


class EngineerAvailabilityModel(BaseModel):
    """Weekly working hours, day_of_week 0 = Monday."""

    __tablename__ = "engineer_availability"

    engineer_id = Column(
        Uuid(as_uuid=True), ForeignKey("engineers.id"), nullable=False, index=True
    )
    day_of_week = Column(Integer, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    is_available = Column(Boolean, nullable=False, default=True)

    engineer = relationship("EngineerModel", back_populates="working_hours")


class EngineerTimeOffModel(BaseModel):
    """Time-off request, inclusive of both dates."""

    __tablename__ = "engineer_time_off"

    engineer_id = Column(
        Uuid(as_uuid=True), ForeignKey("engineers.id"), nullable=False, index=True
    )
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    reason = Column(Text)

    engineer = relationship("EngineerModel", back_populates="time_off")


class EngineerServiceAreaModel(BaseModel):
    """Postcode area an engineer covers."""

    __tablename__ = "engineer_service_areas"

    engineer_id = Column(
        Uuid(as_uuid=True), ForeignKey("engineers.id"), nullable=False, index=True
    )
    postcode_area = Column(String(10), nullable=False)
    max_travel_time_minutes = Column(Integer)

    engineer = relationship("EngineerModel", back_populates="service_areas")
