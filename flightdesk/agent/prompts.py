"""
System preamble sent at the top of every agent request.

The model has no other view of the schedule, so the preamble lists every
flight currently in the store together with today's date (needed to resolve
"tomorrow at 9" into a departure time).
"""
from datetime import datetime

from flightdesk.schedule.data import Flight

NO_FLIGHTS = "There are currently no scheduled flights."

SYSTEM_PROMPT = """Today is {now}
You are an AI assistant for a flight management app. Here is the current flight schedule:
{schedule}
You can answer user questions about the schedule. You can also use the available tools to check for warnings, add a flight, edit a flight, delete a flight, or check the weather forecast for a flight. Be VERY concise. Don't use any fancy formatting."""


def format_time(value: datetime) -> str:
    """en-US style timestamp, e.g. '6/13/2024, 10:00:00 AM'."""
    clock = value.strftime("%I:%M:%S %p").lstrip("0")
    return f"{value.month}/{value.day}/{value.year}, {clock}"


def describe_flight(flight: Flight) -> str:
    return (
        f"Flight {flight.id}: {flight.departure_airport} to {flight.arrival_airport}, "
        f"Aircraft {flight.aircraft_id}, "
        f"Departs {format_time(flight.departure_time)}, "
        f"Arrives {format_time(flight.arrival_time)}"
    )


def build_system_prompt(flights: list[Flight], now: datetime | None = None,
                        notes: list[str] | None = None) -> str:
    """Render the preamble for the current schedule.

    `notes` are system turns from the conversation history (schedule changes
    made in earlier rounds); they are appended after the main prompt.
    """
    schedule = "\n".join(describe_flight(f) for f in flights) if flights else NO_FLIGHTS
    prompt = SYSTEM_PROMPT.format(now=format_time(now or datetime.now()), schedule=schedule)
    if notes:
        prompt += "\nRecent schedule changes:\n" + "\n".join(notes)
    return prompt
