from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, model_validator
from typing import Optional
from datetime import date, datetime
from uuid import UUID
from decimal import Decimal

# duration_minutes is stored rounded and must stay above zero
MIN_ENTRY_SECONDS = 60


# ── Create ──


class TimeEntryCreate(BaseModel):
    date: date
    start_time: AwareDatetime
    end_time: AwareDatetime
    project_id: Optional[str] = Field(default=None, max_length=255)

    @model_validator(mode="after")
    def _end_after_start(self):
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be later than start_time")
        if (self.end_time - self.start_time).total_seconds() < MIN_ENTRY_SECONDS:
            raise ValueError("A time entry must cover at least one minute")
        return self


class TripCreate(BaseModel):
    date: date
    origin: str = Field(min_length=1, max_length=255)
    destination: str = Field(min_length=1, max_length=255)
    distance_km: Decimal = Field(gt=0, le=10000)


class ExpenseCreate(BaseModel):
    date: date
    amount: Decimal = Field(gt=0)
    category: str = Field(min_length=1, max_length=255)
    receipt_url: Optional[str] = Field(default=None, max_length=2000)


class ApprovalDecision(BaseModel):
    approve: bool


# ── Responses ──


class EntryResponse(BaseModel):
    id: UUID
    org_id: UUID
    user_id: UUID
    date: date
    status: str
    approved: bool
    decided_by: Optional[UUID] = None
    decided_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TimeEntryResponse(EntryResponse):
    start_time: datetime
    end_time: datetime
    duration_minutes: int
    project_id: Optional[str] = None


class TripResponse(EntryResponse):
    origin: str
    destination: str
    distance_km: Decimal


class ExpenseResponse(EntryResponse):
    amount: Decimal
    category: str
    receipt_url: Optional[str] = None


class EntrySummary(BaseModel):
    quantity: str
    total: float
    by_status: dict[str, float]
    entries: int
