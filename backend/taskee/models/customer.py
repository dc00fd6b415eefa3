import uuid

from sqlalchemy import Column, String, DateTime, UniqueConstraint, Uuid
from sqlalchemy.sql import func

from taskee.database import Base


class Customer(Base):
    __tablename__ = "customers"
    __table_args__ = (
        UniqueConstraint("org_id", "email", name="uq_customers_org_email"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    org_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    first_name = Column(String(200), nullable=False)
    last_name = Column(String(200), nullable=False)
    company_name = Column(String(300), nullable=True)
    email = Column(String(255), nullable=False)  # stored lower-cased
    phone = Column(String(50), nullable=True)
    city = Column(String(200), nullable=True)
    archived_at = Column(DateTime(timezone=True), nullable=True)
    created_by = Column(Uuid(as_uuid=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
