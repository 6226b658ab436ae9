"""
Flight schedule CRUD plus per-flight weather.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from flightdesk.dependencies import get_store, get_weather, mark_schedule_changed
from flightdesk.models.flights import FlightCreate, FlightOut, FlightUpdate
from flightdesk.schedule import ScheduleStore
from flightdesk.weather import WeatherClient, WeatherReport

logger = logging.getLogger("flightdesk-api.flights")

router = APIRouter()


class FlightWeatherOut(BaseModel):
    flight_id: str
    departure: WeatherReport | None
    arrival: WeatherReport | None


def _not_found(flight_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Flight '{flight_id}' not found")


@router.get("/", response_model=list[FlightOut])
def list_flights(store: ScheduleStore = Depends(get_store)):
    return store.get_flights()


@router.get("/{flight_id}", response_model=FlightOut)
def get_flight(flight_id: str, store: ScheduleStore = Depends(get_store)):
    flight = store.get_flight(flight_id)
    if flight is None:
        raise _not_found(flight_id)
    return flight


@router.post("/", response_model=FlightOut, status_code=201)
def create_flight(body: FlightCreate, request: Request, store: ScheduleStore = Depends(get_store)):
    flight = store.add_flight(
        body.departure_airport,
        body.arrival_airport,
        body.aircraft_id,
        body.departure_time,
    )
    mark_schedule_changed(request)
    return flight


@router.patch("/{flight_id}", response_model=FlightOut)
def update_flight(flight_id: str, body: FlightUpdate, request: Request,
                  store: ScheduleStore = Depends(get_store)):
    """Partial update; omitted or null fields keep their current value."""
    updates = body.model_dump(exclude_unset=True, exclude_none=True)
    flight = store.update_flight(flight_id, updates)
    mark_schedule_changed(request)
    if flight is None:
        raise _not_found(flight_id)
    return flight


@router.delete("/{flight_id}", status_code=204)
def delete_flight(flight_id: str, request: Request, store: ScheduleStore = Depends(get_store)):
    deleted = store.delete_flight(flight_id)
    mark_schedule_changed(request)
    if not deleted:
        raise _not_found(flight_id)


@router.get("/{flight_id}/weather", response_model=FlightWeatherOut)
def flight_weather(flight_id: str, store: ScheduleStore = Depends(get_store),
                   weather: WeatherClient = Depends(get_weather)):
    """Departure weather at departure time and arrival weather at arrival time.

    A side the provider could not answer for is null.
    """
    flight = store.get_flight(flight_id)
    if flight is None:
        raise _not_found(flight_id)

    return FlightWeatherOut(
        flight_id=flight.id,
        departure=weather.resolve(flight.departure_airport, flight.departure_time),
        arrival=weather.resolve(flight.arrival_airport, flight.arrival_time),
    )
