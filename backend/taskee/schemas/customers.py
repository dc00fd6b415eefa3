from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional, List
from uuid import UUID


class CustomerCreate(BaseModel):
    first_name: str = Field(min_length=1, max_length=200)
    last_name: str = Field(min_length=1, max_length=200)
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    company_name: Optional[str] = Field(default=None, max_length=300)
    phone: Optional[str] = Field(default=None, max_length=50)
    city: Optional[str] = Field(default=None, max_length=200)


class CustomerResponse(BaseModel):
    id: UUID
    org_id: UUID
    first_name: str
    last_name: str
    company_name: Optional[str] = None
    email: str
    phone: Optional[str] = None
    city: Optional[str] = None
    archived_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CustomerPage(BaseModel):
    items: List[CustomerResponse]
    total: int
    page: int
    page_size: int


class ImportRowError(BaseModel):
    line: int
    message: str


class CustomerImportResult(BaseModel):
    created: int
    updated: int
    errors: List[ImportRowError]
