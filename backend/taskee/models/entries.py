"""Time entries, trips and expenses — the records a manager signs off."""

import enum
import uuid

from sqlalchemy import Column, String, Integer, DateTime, Date, Numeric, Uuid
from sqlalchemy.sql import func

from taskee.database import Base


class ApprovalStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class ApprovableMixin:
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    org_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    user_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    status = Column(String(20), nullable=False, default=ApprovalStatus.pending.value)
    decided_by = Column(Uuid(as_uuid=True), nullable=True)
    decided_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Reported per entry kind in list/summary responses
    quantity_field: str = ""
    resource_type: str = ""

    @property
    def approved(self) -> bool:
        return self.status == ApprovalStatus.approved.value


class TimeEntry(ApprovableMixin, Base):
    __tablename__ = "time_entries"
    quantity_field = "duration_minutes"
    resource_type = "time_entry"

    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    project_id = Column(String(255), nullable=True)


class Trip(ApprovableMixin, Base):
    __tablename__ = "trips"
    quantity_field = "distance_km"
    resource_type = "trip"

    origin = Column(String(255), nullable=False)
    destination = Column(String(255), nullable=False)
    distance_km = Column(Numeric(8, 1), nullable=False)


class Expense(ApprovableMixin, Base):
    __tablename__ = "expenses"
    quantity_field = "amount"
    resource_type = "expense"

    amount = Column(Numeric(10, 2), nullable=False)
    category = Column(String(255), nullable=False)
    receipt_url = Column(String(2000), nullable=True)
