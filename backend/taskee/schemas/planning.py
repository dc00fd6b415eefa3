"""Planning suggestion schemas."""

from pydantic import BaseModel, ConfigDict, Field
from datetime import date, time
from typing import Optional, List
from uuid import UUID


class PlanningRequestBody(BaseModel):
    date: date
    start_time: time
    end_time: time
    preferred_user_ids: List[UUID] = Field(default_factory=list)
    location: Optional[str] = None


class SuggestedUser(BaseModel):
    user_id: UUID
    email: str
    name: Optional[str] = None
    role: str

    model_config = ConfigDict(from_attributes=True)


class PlanningSuggestionResponse(BaseModel):
    user: SuggestedUser
    available_from: time
    available_until: time
    location: Optional[str] = None
    assigned_tasks_that_day: int
    location_matches: bool
