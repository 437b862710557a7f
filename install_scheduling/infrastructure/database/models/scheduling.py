"""
Scheduling support SQLAlchemy models.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship

from .base import BaseModel, utc_now


class ClientBlockedDateModel(BaseModel):
    """Day a client cannot host an installation."""

    __tablename__ = "client_blocked_dates"
    __table_args__ = (UniqueConstraint("client_id", "blocked_date"),)

    client_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    blocked_date = Column(Date, nullable=False)
    reason = Column(Text)


class ChecklistItemModel(BaseModel):
    """Completion checklist row for an order."""

    __tablename__ = "order_completion_checklist"

    order_id = Column(Uuid(as_uuid=True), ForeignKey("orders.id"), nullable=False, index=True)
    item_id = Column(String(100), nullable=False)
    item_label = Column(String(255), nullable=False)
    is_completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime(timezone=True))

    job = relationship("JobModel", back_populates="checklist_items")


class EngineerUploadModel(BaseModel):
    """Documentation uploaded by an engineer against an order."""

    __tablename__ = "engineer_uploads"

    order_id = Column(Uuid(as_uuid=True), ForeignKey("orders.id"), nullable=False, index=True)
    engineer_id = Column(Uuid(as_uuid=True), ForeignKey("engineers.id"), nullable=True)
    upload_type = Column(String(50), nullable=False)
    file_name = Column(String(255), nullable=False)
    file_url = Column(Text, nullable=False)
    description = Column(Text)
    uploaded_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    job = relationship("JobModel", back_populates="uploads")


class EngineerWorkArchiveModel(BaseModel):
    """Snapshot of engineer work taken before it was reset."""

    __tablename__ = "engineer_work_archive"

    order_id = Column(Uuid(as_uuid=True), ForeignKey("orders.id"), nullable=False, index=True)
    engineer_id = Column(Uuid(as_uuid=True), nullable=True)
    scheduled_date_before = Column(Date)
    scheduled_date_after = Column(Date)
    reset_reason = Column(String(50), nullable=False)
    engineer_notes = Column(Text)
    engineer_signature_data = Column(Text)
    engineer_signed_off_at = Column(DateTime(timezone=True))
    engineer_status = Column(String(50))
    uploads = Column(JSON, nullable=False, default=list)
    archived_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)


class OrderActivityModel(BaseModel):
    """Operator-visible activity entry for an order."""

    __tablename__ = "order_activity"

    order_id = Column(Uuid(as_uuid=True), ForeignKey("orders.id"), nullable=False, index=True)
    activity_type = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    details = Column(JSON)


class AdminSettingModel(BaseModel):
    """Admin-managed JSON setting blob."""

    __tablename__ = "admin_settings"

    setting_key = Column(String(100), nullable=False, unique=True)
    setting_value = Column(JSON, nullable=False, default=dict)
