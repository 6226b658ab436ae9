"""
Aircraft and airport reference data.
"""
from fastapi import APIRouter, Depends, HTTPException

from flightdesk.dependencies import get_store
from flightdesk.models.flights import AircraftLocationUpdate, AircraftOut, AirportOut
from flightdesk.schedule import ScheduleStore

router = APIRouter()


@router.get("/aircraft", response_model=list[AircraftOut])
def list_aircraft(store: ScheduleStore = Depends(get_store)):
    return store.get_aircraft()


@router.get("/airports", response_model=list[AirportOut])
def list_airports(store: ScheduleStore = Depends(get_store)):
    return store.get_airports()


@router.patch("/aircraft/{aircraft_id}/location", response_model=AircraftOut)
def move_aircraft(aircraft_id: str, body: AircraftLocationUpdate,
                  store: ScheduleStore = Depends(get_store)):
    if not store.update_aircraft_location(aircraft_id, body.location):
        raise HTTPException(status_code=404, detail=f"Aircraft '{aircraft_id}' not found")
    return next(a for a in store.get_aircraft() if a.id == aircraft_id)
