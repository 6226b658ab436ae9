"""
Schedule records and the fixed demonstration data the store is seeded with.

Aircraft and airports are reference data: schedule operations read them but
never create or delete them. FLIGHT_HOURS is the origin → destination duration
matrix used to derive every flight's arrival time.
"""
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Airport:
    code: str
    name: str
    city: str


@dataclass(frozen=True)
class Aircraft:
    id: str
    name: str
    current_location: str


@dataclass(frozen=True)
class Flight:
    id: str
    departure_airport: str
    arrival_airport: str
    aircraft_id: str
    departure_time: datetime
    arrival_time: datetime


# =============================================
# REFERENCE DATA
# =============================================

AIRPORTS = [
    Airport("JFK", "John F. Kennedy International", "New York"),
    Airport("LAX", "Los Angeles International", "Los Angeles"),
    Airport("ORD", "O'Hare International", "Chicago"),
    Airport("DFW", "Dallas/Fort Worth International", "Dallas"),
    Airport("SFO", "San Francisco International", "San Francisco"),
]

AIRCRAFT = [
    Aircraft("A1", "Plane 1", "JFK"),
    Aircraft("A2", "Plane 2", "LAX"),
    Aircraft("A3", "Plane 3", "ORD"),
]

# Block time in whole hours, origin → destination
FLIGHT_HOURS = {
    "JFK": {"JFK": 0, "LAX": 6, "ORD": 3, "DFW": 4, "SFO": 6},
    "LAX": {"JFK": 6, "LAX": 0, "ORD": 4, "DFW": 3, "SFO": 1},
    "ORD": {"JFK": 3, "LAX": 4, "ORD": 0, "DFW": 2, "SFO": 4},
    "DFW": {"JFK": 4, "LAX": 3, "ORD": 2, "DFW": 0, "SFO": 3},
    "SFO": {"JFK": 6, "LAX": 1, "ORD": 4, "DFW": 3, "SFO": 0},
}


# =============================================
# DEMONSTRATION SCHEDULE
# =============================================
# (departure, arrival, aircraft, departure time). Ids and arrival times are
# assigned by the store when it is seeded.

SEED_FLIGHTS = [
    ("JFK", "LAX", "A1", datetime(2024, 6, 13, 10, 0)),
    ("LAX", "SFO", "A2", datetime(2024, 6, 13, 14, 0)),
    ("ORD", "DFW", "A3", datetime(2024, 6, 13, 12, 0)),
    ("DFW", "JFK", "A1", datetime(2024, 6, 13, 16, 0)),
    ("SFO", "ORD", "A2", datetime(2024, 6, 13, 18, 0)),
]
