"""
Pydantic models for the schedule REST endpoints.
"""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class FlightOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    departure_airport: str
    arrival_airport: str
    aircraft_id: str
    departure_time: datetime
    arrival_time: datetime


class FlightCreate(BaseModel):
    departure_airport: str = Field(..., min_length=1, max_length=10)
    arrival_airport: str = Field(..., min_length=1, max_length=10)
    aircraft_id: str = Field(..., min_length=1, max_length=20)
    departure_time: datetime


class FlightUpdate(BaseModel):
    departure_airport: str | None = Field(None, min_length=1, max_length=10)
    arrival_airport: str | None = Field(None, min_length=1, max_length=10)
    aircraft_id: str | None = Field(None, min_length=1, max_length=20)
    departure_time: datetime | None = None


class AircraftOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    current_location: str


class AircraftLocationUpdate(BaseModel):
    location: str = Field(..., min_length=1, max_length=10)


class AirportOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: str
    name: str
    city: str


class ConflictOut(BaseModel):
    kind: str
    message: str
    aircraft_id: str | None = None
    flight_ids: list[str]
    airport: str | None = None
