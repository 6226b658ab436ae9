"""
Flight schedule: records, the in-memory store and conflict detection.

Usage:
    from flightdesk.schedule import ScheduleStore, detect_conflicts
    store = ScheduleStore.seeded()
    conflicts = detect_conflicts(store.get_flights())
"""
from flightdesk.schedule.conflicts import (
    Conflict,
    DegenerateRoute,
    DoubleBooking,
    detect_conflicts,
    render_conflict,
)
from flightdesk.schedule.data import Aircraft, Airport, Flight
from flightdesk.schedule.store import ScheduleStore, calculate_arrival_time, flight_duration

__all__ = [
    "Aircraft",
    "Airport",
    "Conflict",
    "DegenerateRoute",
    "DoubleBooking",
    "Flight",
    "ScheduleStore",
    "calculate_arrival_time",
    "detect_conflicts",
    "flight_duration",
    "render_conflict",
]
