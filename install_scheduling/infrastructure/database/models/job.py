"""
Job (installation order) SQLAlchemy model.
"""

from sqlalchemy import (
    JSON,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import relationship

from .base import BaseModel


class JobModel(BaseModel):
    """Installation order database model."""

    __tablename__ = "orders"

    order_number = Column(String(50), unique=True)
    client_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    postcode = Column(String(16))
    status = Column(String(50), default="awaiting_install_booking", index=True)

    # Scheduling
    engineer_id = Column(
        Uuid(as_uuid=True), ForeignKey("engineers.id"), nullable=True, index=True
    )
    scheduled_install_date = Column(Date, nullable=True, index=True)
    time_window = Column(String(20))
    estimated_duration_hours = Column(Integer)
    internal_install_notes = Column(Text)

    # Engineer-completed work
    engineer_signed_off_at = Column(DateTime(timezone=True))
    engineer_signature_data = Column(Text)
    engineer_notes = Column(Text)
    engineer_status = Column(String(50))

    scheduling_conflicts = Column(JSON, nullable=True)

    # Compare-and-swap guard for assignment writes
    version = Column(Integer, nullable=False, default=1)

    # Relationships
    engineer = relationship("EngineerModel", back_populates="jobs")
    checklist_items = relationship(
        "ChecklistItemModel", back_populates="job", cascade="all, delete-orphan"
    )
    uploads = relationship(
        "EngineerUploadModel", back_populates="job", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Job(id={self.id}, order_number={self.order_number}, status={self.status})>"
