from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import Optional
from uuid import UUID


class ReminderCreate(BaseModel):
    text: str = Field(min_length=1, max_length=500)
    remind_at: datetime
    sent: bool = False

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Reminder text cannot be empty")
        return v


class ReminderUpdate(BaseModel):
    text: Optional[str] = Field(default=None, min_length=1, max_length=500)
    remind_at: Optional[datetime] = None
    sent: Optional[bool] = None

    @field_validator("text", "remind_at", "sent", mode="before")
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Reminder text cannot be empty")
        return v


class ReminderResponse(BaseModel):
    id: UUID
    user_id: UUID
    text: str
    remind_at: datetime
    sent: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
