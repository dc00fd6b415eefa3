"""
Customer CSV import — reconcile rows against existing customers by e-mail.

Rows with a known e-mail (per organization) update that customer and bring it
back from the archive; unknown e-mails create a new customer. Rows missing
e-mail, first name or last name are reported and skipped.
"""

import csv
import io
import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from taskee.dependencies import Actor
from taskee.models.customer import Customer

logger = logging.getLogger(__name__)

# normalized CSV header -> Customer column
HEADER_MAP = {
    "companyname": "company_name",
    "firstname": "first_name",
    "lastname": "last_name",
    "email": "email",
    "phone": "phone",
    "city": "city",
}
REQUIRED = ("email", "first_name", "last_name")


def _normalize_header(name: str) -> str:
    return name.strip().lower().replace("_", "").replace(" ", "")


def parse_rows(raw: str) -> list[tuple[int, dict]]:
    """(line number, customer fields) per data row; the header is line 1."""
    reader = csv.DictReader(io.StringIO(raw.lstrip("﻿")))
    rows = []
    for line, record in enumerate(reader, start=2):
        data = {}
        for key, value in record.items():
            if key is None:
                continue
            field = HEADER_MAP.get(_normalize_header(key))
            if field and value is not None and value.strip():
                data[field] = value.strip()
        rows.append((line, data))
    return rows


def import_customers(db: Session, actor: Actor, raw: str) -> dict:
    created = 0
    updated = 0
    errors = []

    for line, data in parse_rows(raw):
        missing = [f for f in REQUIRED if not data.get(f)]
        if missing:
            errors.append({"line": line, "message": f"Missing required fields: {', '.join(missing)}"})
            continue

        email = data["email"].lower()
        data["email"] = email
        customer = db.query(Customer).filter(Customer.org_id == actor.org_id, Customer.email == email).first()
        if customer:
            for field, value in data.items():
                setattr(customer, field, value)
            customer.archived_at = None
            customer.updated_at = datetime.now(timezone.utc)
            updated += 1
        else:
            db.add(Customer(org_id=actor.org_id, created_by=actor.user_id, **data))
            created += 1
        # flush per row so a repeated e-mail later in the file updates instead of duplicating
        db.flush()

    db.commit()
    logger.info("Customer import for org %s: %d created, %d updated, %d errors",
                actor.org_id, created, updated, len(errors))
    return {"created": created, "updated": updated, "errors": errors}
