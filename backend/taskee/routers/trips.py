"""Trips (mileage) router."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskee.database import get_db
from taskee.dependencies import Actor, get_current_actor
from taskee.models.entries import Trip
from taskee.routers.entry_routes import register_entry_routes
from taskee.schemas.entries import TripCreate, TripResponse

router = APIRouter(prefix="/api/v1/trips", tags=["Trips"])


@router.post("/", response_model=TripResponse)
def create_trip(
    body: TripCreate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    trip = Trip(
        org_id=actor.org_id,
        user_id=actor.user_id,
        date=body.date,
        origin=body.origin.strip(),
        destination=body.destination.strip(),
        distance_km=body.distance_km,
    )
    db.add(trip)
    db.commit()
    db.refresh(trip)
    return trip


register_entry_routes(router, Trip, TripResponse)
