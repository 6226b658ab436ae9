"""
FastAPI dependencies for the objects created in the app lifespan.

Routers never import the store or the assistant directly; tests swap them via
`app.dependency_overrides` or by replacing `app.state` attributes.
"""
from fastapi import Request

from flightdesk.agent import ScheduleAssistant
from flightdesk.schedule import ScheduleStore
from flightdesk.weather import WeatherClient


def get_store(request: Request) -> ScheduleStore:
    return request.app.state.store


def get_weather(request: Request) -> WeatherClient:
    return request.app.state.weather


def get_assistant(request: Request) -> ScheduleAssistant:
    return request.app.state.assistant


def mark_schedule_changed(request: Request) -> None:
    request.app.state.schedule_revision += 1
