"""
Conflict detection over a schedule snapshot.

Two hazards are reported:
- DoubleBooking: the same aircraft is on two flights whose time windows overlap.
- DegenerateRoute: a flight departs and arrives at the same airport.

The overlap test is inclusive: a flight arriving at 16:00 and the next one on
the same aircraft departing at 16:00 count as a double booking, since no
turnaround time is left between them.

Nothing here is cached. Every call walks the full list (O(n²) pairs).
"""
from dataclasses import dataclass
from typing import Union

from flightdesk.schedule.data import Flight


@dataclass(frozen=True)
class DoubleBooking:
    aircraft_id: str
    flight_id_1: str
    flight_id_2: str
    kind: str = "double_booking"


@dataclass(frozen=True)
class DegenerateRoute:
    flight_id: str
    airport: str
    kind: str = "same_airport"


Conflict = Union[DoubleBooking, DegenerateRoute]


def windows_overlap(first: Flight, second: Flight) -> bool:
    return (first.departure_time <= second.arrival_time
            and first.arrival_time >= second.departure_time)


def detect_conflicts(flights: list[Flight]) -> list[Conflict]:
    """Return every double booking (pair order) followed by every same-airport route."""
    conflicts: list[Conflict] = []

    for i, first in enumerate(flights):
        for second in flights[i + 1:]:
            if first.aircraft_id == second.aircraft_id and windows_overlap(first, second):
                conflicts.append(DoubleBooking(first.aircraft_id, first.id, second.id))

    for flight in flights:
        if flight.departure_airport == flight.arrival_airport:
            conflicts.append(DegenerateRoute(flight.id, flight.departure_airport))

    return conflicts


def render_conflict(conflict: Conflict) -> str:
    """Human-readable warning line for one conflict."""
    match conflict:
        case DoubleBooking(aircraft_id=aircraft, flight_id_1=first, flight_id_2=second):
            return f"Aircraft {aircraft} is double-booked for flights {first} and {second}"
        case DegenerateRoute(flight_id=flight_id, airport=airport):
            return f"Flight {flight_id} departs and arrives at the same airport ({airport})"
    raise TypeError(f"Unknown conflict type: {type(conflict).__name__}")
