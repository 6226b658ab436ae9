"""
Tool execution: turns one tool request from the agent into a reply string.

The dispatcher is the boundary between the model and the schedule. Whatever
the model sends (unknown tool names, broken JSON, missing fields, ids that do
not exist), the result is always a sentence the user can read; nothing raises
past `dispatch`.

Mutating tools (add_flight, edit_flight, delete_flight) call `on_data_changed`
after every attempt, successful or not, so a consumer holding a cached copy of
the flight list re-reads it.
"""
import json
import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from flightdesk.agent.prompts import format_time
from flightdesk.schedule.conflicts import detect_conflicts, render_conflict
from flightdesk.schedule.store import ScheduleStore

logger = logging.getLogger("flightdesk-agent")

APOLOGY = "Sorry, I encountered an error. Please try again."
UNKNOWN_FUNCTION = "Unknown function call received."
NO_CONFLICTS = "There are no double-booked aircraft or flight conflicts."
CONFLICTS_HEADER = "Here are the current warnings about double-booked aircraft:"


@dataclass
class ToolOutcome:
    message: str
    data_changed: bool = False
    # Extra context for the conversation history (e.g. "Flight F2 has been deleted")
    system_note: str | None = None


# ─────────────────────────────────────────────────────────────
# Argument models, camelCase names as declared in the catalog
# ─────────────────────────────────────────────────────────────

class _ToolArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class FlightIdArgs(_ToolArgs):
    flight_id: str = Field(alias="flightId", min_length=1)


class AddFlightArgs(_ToolArgs):
    departure_airport: str = Field(alias="departureAirport", min_length=1)
    arrival_airport: str = Field(alias="arrivalAirport", min_length=1)
    aircraft_id: str = Field(alias="aircraftId", min_length=1)
    departure_time: datetime = Field(alias="departureTime")


class EditFlightArgs(_ToolArgs):
    flight_id: str = Field(alias="flightId", min_length=1)
    departure_airport: str | None = Field(default=None, alias="departureAirport")
    arrival_airport: str | None = Field(default=None, alias="arrivalAirport")
    aircraft_id: str | None = Field(default=None, alias="aircraftId")
    departure_time: datetime | None = Field(default=None, alias="departureTime")

    @field_validator("departure_time", mode="before")
    @classmethod
    def _blank_time_is_absent(cls, value):
        return value or None

    def updates(self) -> dict:
        """Only the fields that were actually given; blanks never clear a field."""
        fields = ("departure_airport", "arrival_airport", "aircraft_id", "departure_time")
        return {name: getattr(self, name) for name in fields if getattr(self, name)}


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def parse_arguments(raw: str | dict | None) -> dict:
    """Decode the model's argument payload into a dict. Raises ValueError if it isn't one."""
    if raw is None or raw == "":
        return {}
    if isinstance(raw, dict):
        return raw
    parsed = json.loads(raw)
    if not isinstance(parsed, dict):
        raise ValueError(f"tool arguments must be a JSON object, got {type(parsed).__name__}")
    return parsed


class ToolDispatcher:
    def __init__(self, store: ScheduleStore, weather, on_data_changed: Callable[[], None] | None = None):
        self.store = store
        self.weather = weather
        self.on_data_changed = on_data_changed
        self._handlers = {
            "check_warnings": self._check_warnings,
            "add_flight": self._add_flight,
            "edit_flight": self._edit_flight,
            "delete_flight": self._delete_flight,
            "check_weather": self._check_weather,
        }

    def dispatch(self, name: str, raw_arguments: str | dict | None) -> ToolOutcome:
        """Execute one tool call and return the reply for the user."""
        try:
            arguments = parse_arguments(raw_arguments)
        except ValueError as e:
            logger.warning("Malformed arguments for %s: %s", name, e)
            return ToolOutcome(APOLOGY)

        handler = self._handlers.get(name)
        if handler is None:
            logger.warning("Unknown tool called: %s", name)
            return ToolOutcome(UNKNOWN_FUNCTION)

        logger.info("Dispatching %s with %s", name, arguments)
        try:
            return handler(arguments)
        except ValidationError as e:
            logger.warning("Invalid arguments for %s: %s", name, e)
            return ToolOutcome(APOLOGY)

    def _changed(self, outcome: ToolOutcome) -> ToolOutcome:
        outcome.data_changed = True
        if self.on_data_changed is not None:
            self.on_data_changed()
        return outcome

    # ─────────────────────────────────────────────────────────────
    # Handlers
    # ─────────────────────────────────────────────────────────────

    def _check_warnings(self, arguments: dict) -> ToolOutcome:
        conflicts = detect_conflicts(self.store.get_flights())
        if not conflicts:
            return ToolOutcome(NO_CONFLICTS)
        lines = [render_conflict(c) for c in conflicts]
        return ToolOutcome(CONFLICTS_HEADER + "\n" + "\n".join(lines))

    def _add_flight(self, arguments: dict) -> ToolOutcome:
        args = AddFlightArgs.model_validate(arguments)
        flight = self.store.add_flight(
            args.departure_airport,
            args.arrival_airport,
            args.aircraft_id,
            args.departure_time,
        )
        departs = format_time(flight.departure_time)
        return self._changed(ToolOutcome(
            f"Flight added: {flight.departure_airport} to {flight.arrival_airport} "
            f"with aircraft {flight.aircraft_id} departing at {departs}",
            system_note=(
                f"A new flight has been added: {flight.id} from {flight.departure_airport} "
                f"to {flight.arrival_airport}, departing at {departs}."
            ),
        ))

    def _edit_flight(self, arguments: dict) -> ToolOutcome:
        args = EditFlightArgs.model_validate(arguments)
        updates = args.updates()
        updated = self.store.update_flight(args.flight_id, updates)
        if updated is None:
            return self._changed(ToolOutcome(f"Could not find flight with ID {args.flight_id}."))

        changes = []
        if "departure_airport" in updates:
            changes.append(f"departure airport to {updates['departure_airport']}")
        if "arrival_airport" in updates:
            changes.append(f"arrival airport to {updates['arrival_airport']}")
        if "aircraft_id" in updates:
            changes.append(f"aircraft to {updates['aircraft_id']}")
        if "departure_time" in updates:
            changes.append(f"departure time to {format_time(updated.departure_time)}")
        return self._changed(ToolOutcome(
            f"Flight {args.flight_id} has been updated.",
            system_note=f"Flight {args.flight_id} has been updated: {', '.join(changes)}.",
        ))

    def _delete_flight(self, arguments: dict) -> ToolOutcome:
        args = FlightIdArgs.model_validate(arguments)
        if self.store.delete_flight(args.flight_id):
            outcome = ToolOutcome(
                f"Flight {args.flight_id} has been successfully deleted from the schedule.",
                system_note=f"Flight {args.flight_id} has been deleted from the schedule.",
            )
        else:
            outcome = ToolOutcome(f"Could not find flight with ID {args.flight_id}.")
        return self._changed(outcome)

    def _check_weather(self, arguments: dict) -> ToolOutcome:
        args = FlightIdArgs.model_validate(arguments)
        flight = self.store.get_flight(args.flight_id)
        if flight is None:
            return ToolOutcome(f"Could not find flight with ID {args.flight_id}.")

        try:
            report = self.weather.resolve(flight.departure_airport, flight.departure_time)
        except Exception:
            logger.exception("Weather lookup raised for flight %s", flight.id)
            report = None
        if report is None:
            return ToolOutcome(f"Could not fetch weather for flight {flight.id}.")

        return ToolOutcome(
            f"Weather for Flight {flight.id} ({flight.departure_airport}):\n"
            f"Temperature: {round_half_up(report.temperature)}°C\n"
            f"Conditions: {report.description}"
        )
