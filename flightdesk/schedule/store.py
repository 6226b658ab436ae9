"""
In-memory schedule store.

One ScheduleStore owns the flight list, the reference tables and the id
counter. The FastAPI app creates a seeded store at startup and hands the same
instance to the routers and the agent, so tests can build their own isolated
store instead of sharing module state.

Reads return copies. Flight records are frozen dataclasses, so a caller can
hold on to a snapshot without it changing underneath them.
"""
import logging
from dataclasses import replace
from datetime import datetime, timedelta, timezone

from flightdesk.schedule.data import (
    AIRCRAFT,
    AIRPORTS,
    FLIGHT_HOURS,
    SEED_FLIGHTS,
    Aircraft,
    Airport,
    Flight,
)

logger = logging.getLogger("flightdesk-schedule")

UPDATABLE_FIELDS = ("departure_airport", "arrival_airport", "aircraft_id", "departure_time")

# Changing any of these moves the arrival time
ARRIVAL_TRIGGERS = ("departure_time", "departure_airport", "arrival_airport")


def flight_duration(origin: str, destination: str, table: dict | None = None) -> int:
    """Hours between two airports. Unknown pairs are 0 hours."""
    table = FLIGHT_HOURS if table is None else table
    hours = table.get(origin, {}).get(destination)
    if hours is None:
        logger.warning("No duration for %s -> %s, treating as 0 hours", origin, destination)
        return 0
    return hours


def calculate_arrival_time(departure_time: datetime, origin: str, destination: str,
                           table: dict | None = None) -> datetime:
    return departure_time + timedelta(hours=flight_duration(origin, destination, table))


def _naive(value: datetime) -> datetime:
    """Schedule times are naive. Aware inputs are converted to UTC first."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class ScheduleStore:
    def __init__(self, airports=None, aircraft=None, flight_hours=None):
        self._airports: list[Airport] = list(AIRPORTS if airports is None else airports)
        self._aircraft: list[Aircraft] = list(AIRCRAFT if aircraft is None else aircraft)
        self._flight_hours: dict = FLIGHT_HOURS if flight_hours is None else flight_hours
        self._flights: list[Flight] = []
        self._next_id = 1

    @classmethod
    def seeded(cls) -> "ScheduleStore":
        """Build a store holding the five demonstration flights (F1-F5)."""
        store = cls()
        for departure, arrival, aircraft_id, departure_time in SEED_FLIGHTS:
            store.add_flight(departure, arrival, aircraft_id, departure_time)
        return store

    # ─────────────────────────────────────────────────────────────
    # Flights
    # ─────────────────────────────────────────────────────────────

    def add_flight(self, departure_airport: str, arrival_airport: str,
                   aircraft_id: str, departure_time: datetime) -> Flight:
        departure_time = _naive(departure_time)
        flight = Flight(
            id=f"F{self._next_id}",
            departure_airport=departure_airport,
            arrival_airport=arrival_airport,
            aircraft_id=aircraft_id,
            departure_time=departure_time,
            arrival_time=calculate_arrival_time(
                departure_time, departure_airport, arrival_airport, self._flight_hours
            ),
        )
        self._next_id += 1
        self._flights.append(flight)
        logger.info("Added flight %s %s -> %s on %s", flight.id,
                    departure_airport, arrival_airport, aircraft_id)
        return flight

    def get_flights(self) -> list[Flight]:
        return list(self._flights)

    def get_flight(self, flight_id: str) -> Flight | None:
        for flight in self._flights:
            if flight.id == flight_id:
                return flight
        return None

    def update_flight(self, flight_id: str, updates: dict) -> Flight | None:
        """Replace only the supplied fields of a flight.

        `updates` may carry any of UPDATABLE_FIELDS. When departure time or
        either airport is among them, the arrival time is derived again from
        the merged record, so a departure-only change still uses the flight's
        existing airports.

        Returns the updated flight, or None when the id is unknown (the store
        is left untouched).
        """
        unknown = set(updates) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update flight fields: {', '.join(sorted(unknown))}")

        index = self._index_of(flight_id)
        if index is None:
            return None

        changes = dict(updates)
        if "departure_time" in changes:
            changes["departure_time"] = _naive(changes["departure_time"])

        updated = replace(self._flights[index], **changes)
        if any(field in changes for field in ARRIVAL_TRIGGERS):
            updated = replace(updated, arrival_time=calculate_arrival_time(
                updated.departure_time,
                updated.departure_airport,
                updated.arrival_airport,
                self._flight_hours,
            ))

        self._flights[index] = updated
        logger.info("Updated flight %s: %s", flight_id, ", ".join(sorted(changes)))
        return updated

    def delete_flight(self, flight_id: str) -> bool:
        index = self._index_of(flight_id)
        if index is None:
            return False
        del self._flights[index]
        logger.info("Deleted flight %s", flight_id)
        return True

    def _index_of(self, flight_id: str) -> int | None:
        for index, flight in enumerate(self._flights):
            if flight.id == flight_id:
                return index
        return None

    # ─────────────────────────────────────────────────────────────
    # Reference data
    # ─────────────────────────────────────────────────────────────

    def get_aircraft(self) -> list[Aircraft]:
        return list(self._aircraft)

    def get_airports(self) -> list[Airport]:
        return list(self._airports)

    def update_aircraft_location(self, aircraft_id: str, location: str) -> bool:
        for index, aircraft in enumerate(self._aircraft):
            if aircraft.id == aircraft_id:
                self._aircraft[index] = replace(aircraft, current_location=location)
                return True
        return False
