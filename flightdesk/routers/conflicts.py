"""
Conflict report for the live schedule, recomputed on every request.
"""
from fastapi import APIRouter, Depends

from flightdesk.dependencies import get_store
from flightdesk.models.flights import ConflictOut
from flightdesk.schedule import (
    Conflict,
    DegenerateRoute,
    DoubleBooking,
    ScheduleStore,
    detect_conflicts,
    render_conflict,
)

router = APIRouter()


def to_conflict_out(conflict: Conflict) -> ConflictOut:
    match conflict:
        case DoubleBooking():
            return ConflictOut(
                kind=conflict.kind,
                message=render_conflict(conflict),
                aircraft_id=conflict.aircraft_id,
                flight_ids=[conflict.flight_id_1, conflict.flight_id_2],
            )
        case DegenerateRoute():
            return ConflictOut(
                kind=conflict.kind,
                message=render_conflict(conflict),
                flight_ids=[conflict.flight_id],
                airport=conflict.airport,
            )
    raise TypeError(f"Unknown conflict type: {type(conflict).__name__}")


@router.get("/", response_model=list[ConflictOut])
def list_conflicts(store: ScheduleStore = Depends(get_store)):
    return [to_conflict_out(c) for c in detect_conflicts(store.get_flights())]
