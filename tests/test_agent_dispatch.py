"""
Unit tests for tool execution: each tool runs against a real seeded store
and a mocked weather client, and always comes back as a readable string.
"""
import json
from datetime import datetime
from unittest.mock import MagicMock

import pytest

from flightdesk.agent.dispatch import (
    APOLOGY,
    NO_CONFLICTS,
    UNKNOWN_FUNCTION,
    ToolDispatcher,
    parse_arguments,
    round_half_up,
)
from flightdesk.schedule import ScheduleStore
from flightdesk.weather import WeatherReport


@pytest.fixture
def notify():
    return MagicMock()


@pytest.fixture
def dispatcher(store, weather, notify):
    return ToolDispatcher(store, weather, on_data_changed=notify)


def test_check_warnings_lists_conflicts(dispatcher):
    outcome = dispatcher.dispatch("check_warnings", "{}")
    assert outcome.message.splitlines() == [
        "Here are the current warnings about double-booked aircraft:",
        "Aircraft A1 is double-booked for flights F1 and F4",
    ]
    assert outcome.data_changed is False


def test_check_warnings_without_conflicts(weather):
    dispatcher = ToolDispatcher(ScheduleStore(), weather)
    assert dispatcher.dispatch("check_warnings", "").message == NO_CONFLICTS


def test_add_flight_derives_arrival(dispatcher, store, notify):
    """JFK → LAX is 6 hours, so a 10:00 departure lands at 16:00."""
    args = json.dumps({
        "departureAirport": "JFK",
        "arrivalAirport": "LAX",
        "aircraftId": "A1",
        "departureTime": "2024-06-13T10:00:00",
    })
    outcome = dispatcher.dispatch("add_flight", args)

    flights = store.get_flights()
    assert len(flights) == 6
    assert flights[-1].arrival_time == datetime(2024, 6, 13, 16, 0)
    assert outcome.message == "Flight added: JFK to LAX with aircraft A1 departing at 6/13/2024, 10:00:00 AM"
    assert outcome.system_note.startswith("A new flight has been added: F6 from JFK to LAX")
    assert outcome.data_changed is True
    notify.assert_called_once_with()


def test_add_flight_missing_field_is_rejected(dispatcher, store, notify):
    args = json.dumps({"departureAirport": "JFK", "arrivalAirport": "LAX", "aircraftId": "A1"})
    outcome = dispatcher.dispatch("add_flight", args)
    assert outcome.message == APOLOGY
    assert len(store.get_flights()) == 5
    notify.assert_not_called()


def test_add_flight_bad_time_is_rejected(dispatcher, store):
    args = {"departureAirport": "JFK", "arrivalAirport": "LAX",
            "aircraftId": "A1", "departureTime": "next tuesday-ish"}
    assert dispatcher.dispatch("add_flight", args).message == APOLOGY
    assert len(store.get_flights()) == 5


def test_malformed_json_is_an_apology(dispatcher, store, notify):
    outcome = dispatcher.dispatch("delete_flight", '{"flightId": "F1"')
    assert outcome.message == APOLOGY
    assert store.get_flight("F1") is not None
    notify.assert_not_called()


def test_edit_flight_applies_only_supplied_fields(dispatcher, store, notify):
    args = json.dumps({"flightId": "F2", "aircraftId": "A3", "departureAirport": "", "arrivalAirport": None})
    outcome = dispatcher.dispatch("edit_flight", args)

    flight = store.get_flight("F2")
    assert flight.aircraft_id == "A3"
    assert flight.departure_airport == "LAX"
    assert flight.arrival_airport == "SFO"
    assert flight.arrival_time == datetime(2024, 6, 13, 15, 0)
    assert outcome.message == "Flight F2 has been updated."
    assert outcome.system_note == "Flight F2 has been updated: aircraft to A3."
    notify.assert_called_once_with()


def test_edit_flight_departure_time_recomputes_arrival(dispatcher, store):
    dispatcher.dispatch("edit_flight", {"flightId": "F3", "departureTime": "2024-06-13T13:00:00"})
    assert store.get_flight("F3").arrival_time == datetime(2024, 6, 13, 15, 0)


def test_edit_flight_not_found_still_notifies(dispatcher, store, notify):
    before = store.get_flights()
    outcome = dispatcher.dispatch("edit_flight", {"flightId": "F99", "aircraftId": "A2"})
    assert outcome.message == "Could not find flight with ID F99."
    assert outcome.data_changed is True
    assert store.get_flights() == before
    notify.assert_called_once_with()


def test_delete_flight(dispatcher, store, notify):
    outcome = dispatcher.dispatch("delete_flight", {"flightId": "F4"})
    assert outcome.message == "Flight F4 has been successfully deleted from the schedule."
    assert outcome.system_note == "Flight F4 has been deleted from the schedule."
    assert store.get_flight("F4") is None

    again = dispatcher.dispatch("delete_flight", {"flightId": "F4"})
    assert again.message == "Could not find flight with ID F4."
    assert again.system_note is None
    assert notify.call_count == 2


def test_check_weather_formats_report(dispatcher, weather):
    weather.resolve.return_value = WeatherReport(
        city="Los Angeles", temperature=21.5, description="clear sky", icon="01d",
    )
    outcome = dispatcher.dispatch("check_weather", {"flightId": "F2"})
    weather.resolve.assert_called_once_with("LAX", datetime(2024, 6, 13, 14, 0))
    assert outcome.message == "Weather for Flight F2 (LAX):\nTemperature: 22°C\nConditions: clear sky"
    assert outcome.data_changed is False


def test_check_weather_unknown_flight_skips_lookup(dispatcher, weather):
    outcome = dispatcher.dispatch("check_weather", {"flightId": "F12"})
    assert outcome.message == "Could not find flight with ID F12."
    weather.resolve.assert_not_called()


def test_check_weather_lookup_failure(dispatcher, weather):
    weather.resolve.return_value = None
    outcome = dispatcher.dispatch("check_weather", {"flightId": "F1"})
    assert "could not fetch" in outcome.message.lower()


def test_check_weather_lookup_raising_is_contained(dispatcher, weather):
    weather.resolve.side_effect = ConnectionError("network down")
    outcome = dispatcher.dispatch("check_weather", {"flightId": "F1"})
    assert outcome.message == "Could not fetch weather for flight F1."


def test_unknown_tool(dispatcher, store, notify):
    before = store.get_flights()
    outcome = dispatcher.dispatch("cancel_all_flights", "{}")
    assert outcome.message == UNKNOWN_FUNCTION
    assert store.get_flights() == before
    notify.assert_not_called()


def test_parse_arguments():
    assert parse_arguments(None) == {}
    assert parse_arguments('{"flightId": "F1"}') == {"flightId": "F1"}
    with pytest.raises(ValueError):
        parse_arguments("[1, 2]")


def test_round_half_up():
    assert round_half_up(21.5) == 22
    assert round_half_up(22.5) == 23
    assert round_half_up(-0.4) == 0
