"""
Weather lookup by airport code or city name.
"""
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query

from flightdesk.dependencies import get_weather
from flightdesk.weather import WeatherClient, WeatherReport

router = APIRouter()


@router.get("/", response_model=WeatherReport)
def get_weather_report(
    location: str = Query(..., min_length=1, description="Airport code (JFK) or city name"),
    at: datetime | None = Query(None, description="Forecast time; current conditions when omitted"),
    weather: WeatherClient = Depends(get_weather),
):
    report = weather.resolve(location, at)
    if report is None:
        raise HTTPException(status_code=502, detail=f"Could not fetch weather for {location}")
    return report
