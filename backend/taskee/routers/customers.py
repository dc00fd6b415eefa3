"""Customers router — CRM records and CSV import."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Literal, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskee.config import MAX_IMPORT_BYTES
from taskee.database import get_db
from taskee.dependencies import Actor, get_current_actor, require_manager
from taskee.errors import NotFound
from taskee.models.customer import Customer
from taskee.schemas.customers import CustomerCreate, CustomerImportResult, CustomerPage, CustomerResponse
from taskee.services.customer_import import import_customers
from taskee.services.rate_limit import import_rate_limit

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/customers", tags=["Customers"])

SORT_FIELDS = {
    "created_at": Customer.created_at,
    "last_name": Customer.last_name,
    "company_name": Customer.company_name,
}


def _get_customer(db: Session, customer_id: uuid.UUID, org_id: uuid.UUID) -> Customer:
    customer = db.query(Customer).filter(Customer.id == customer_id, Customer.org_id == org_id).first()
    if not customer:
        raise NotFound("Customer not found")
    return customer


@router.post("/", response_model=CustomerResponse)
def create_customer(
    body: CustomerCreate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    customer = Customer(
        org_id=actor.org_id,
        created_by=actor.user_id,
        **{**body.model_dump(), "email": body.email.strip().lower()},
    )
    db.add(customer)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="A customer with this email already exists")
    db.refresh(customer)
    return customer


@router.get("/", response_model=CustomerPage)
def list_customers(
    q: Optional[str] = Query(None),
    city: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(25, ge=1, le=200),
    sort: Literal["created_at", "last_name", "company_name"] = Query("created_at"),
    dir: Literal["asc", "desc"] = Query("desc"),
    archived: Literal["only", "exclude", "include"] = Query("exclude"),
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    query = db.query(Customer).filter(Customer.org_id == actor.org_id)
    if archived == "only":
        query = query.filter(Customer.archived_at.is_not(None))
    elif archived == "exclude":
        query = query.filter(Customer.archived_at.is_(None))
    if city:
        query = query.filter(Customer.city.ilike(city.strip()))
    if q and q.strip():
        pattern = f"%{q.strip()}%"
        query = query.filter(or_(
            Customer.first_name.ilike(pattern),
            Customer.last_name.ilike(pattern),
            Customer.company_name.ilike(pattern),
            Customer.email.ilike(pattern),
            Customer.phone.ilike(pattern),
            Customer.city.ilike(pattern),
        ))

    total = query.count()
    column = SORT_FIELDS[sort]
    items = (
        query.order_by(column.asc() if dir == "asc" else column.desc(), Customer.id)
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return CustomerPage(items=items, total=total, page=page, page_size=page_size)


# Import must be registered before /{customer_id}.
# Role check runs first so refused callers do not use up the throttle.
@router.post(
    "/import",
    response_model=CustomerImportResult,
    dependencies=[Depends(require_manager), Depends(import_rate_limit)],
)
async def import_csv(
    file: UploadFile = File(...),
    actor: Actor = Depends(require_manager),
    db: Session = Depends(get_db),
):
    content = await file.read()
    if len(content) > MAX_IMPORT_BYTES:
        raise HTTPException(status_code=413, detail="Import file too large")
    try:
        raw = content.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="Import file must be UTF-8 encoded CSV")
    return import_customers(db, actor, raw)


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(
    customer_id: uuid.UUID,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return _get_customer(db, customer_id, actor.org_id)


@router.post("/{customer_id}/archive", response_model=CustomerResponse)
def archive_customer(
    customer_id: uuid.UUID,
    actor: Actor = Depends(require_manager),
    db: Session = Depends(get_db),
):
    customer = _get_customer(db, customer_id, actor.org_id)
    if customer.archived_at is None:
        customer.archived_at = datetime.now(timezone.utc)
        db.commit()
        db.refresh(customer)
    return customer


@router.post("/{customer_id}/restore", response_model=CustomerResponse)
def restore_customer(
    customer_id: uuid.UUID,
    actor: Actor = Depends(require_manager),
    db: Session = Depends(get_db),
):
    customer = _get_customer(db, customer_id, actor.org_id)
    if customer.archived_at is not None:
        customer.archived_at = None
        db.commit()
        db.refresh(customer)
    return customer
