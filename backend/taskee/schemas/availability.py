from pydantic import BaseModel, ConfigDict, Field
from datetime import time, datetime
from typing import Optional, List
from uuid import UUID


class AvailabilityEntry(BaseModel):
    weekday: int = Field(ge=0, le=6)  # 0 = Sunday
    start_time: time
    end_time: time
    location: Optional[str] = Field(default=None, max_length=255)


class AvailabilityReplace(BaseModel):
    user_id: Optional[UUID] = None
    entries: List[AvailabilityEntry]


class AvailabilityResponse(BaseModel):
    id: UUID
    user_id: UUID
    weekday: int
    start_time: time
    end_time: time
    location: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
