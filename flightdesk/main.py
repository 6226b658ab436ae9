"""
FastAPI application entry point.
Lifespan seeds the schedule store and wires the weather client and assistant.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from flightdesk.agent import ScheduleAssistant
from flightdesk.config import settings
from flightdesk.routers import chat, conflicts, flights, reference, weather
from flightdesk.schedule import ScheduleStore
from flightdesk.weather import WeatherClient

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger("flightdesk-api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    store = ScheduleStore.seeded()
    weather_client = WeatherClient(
        api_key=settings.weather_api_key,
        base_url=settings.weather_base_url,
        timeout=settings.weather_timeout_seconds,
    )
    if not settings.weather_api_key:
        logger.warning("WEATHER_API_KEY not set, weather lookups will fail")

    def on_data_changed():
        app.state.schedule_revision += 1
        logger.info("Schedule changed by assistant (revision %d)", app.state.schedule_revision)

    app.state.store = store
    app.state.weather = weather_client
    app.state.schedule_revision = 0
    app.state.assistant = ScheduleAssistant(store, weather_client, on_data_changed=on_data_changed)
    logger.info("Schedule seeded with %d flights", len(store.get_flights()))
    yield
    # Shutdown: state is in-memory only
    logger.info("Discarding schedule (%d flights)", len(store.get_flights()))


app = FastAPI(
    title="FlightDesk API",
    description="In-memory flight schedule with conflict detection and a natural language assistant",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(flights.router, prefix="/api/v1/flights", tags=["Flights"])
app.include_router(conflicts.router, prefix="/api/v1/conflicts", tags=["Conflicts"])
app.include_router(reference.router, prefix="/api/v1/reference", tags=["Reference"])
app.include_router(weather.router, prefix="/api/v1/weather", tags=["Weather"])
app.include_router(chat.router, prefix="/api/v1/chat", tags=["Chat"])


@app.get("/api/v1/health", tags=["Health"])
def health(request: Request):
    return {
        "status": "ok",
        "flights": len(request.app.state.store.get_flights()),
        "schedule_revision": request.app.state.schedule_revision,
    }
