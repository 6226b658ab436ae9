"""
Weather Lookup
==============
Fetches conditions for an airport or city from OpenWeatherMap.

Two modes:
- current:  /weather?q=<city>    → one sample, no forecast time
- forecast: /forecast?q=<city>   → 5 days of 3-hourly samples; the one closest
                                    to the requested time is returned

Airport codes are translated to city names through the airport reference
table before querying (JFK → New York). Anything else is sent as-is.

Every failure (network error, non-2xx status, payload without the expected
fields) is logged and reported as None. Nothing is retried.
"""
import json
import logging
import urllib.parse
import urllib.request
from datetime import datetime, timezone

from pydantic import BaseModel

from flightdesk.schedule.data import AIRPORTS, Airport

logger = logging.getLogger("flightdesk-weather")


class WeatherReport(BaseModel):
    city: str
    temperature: float
    description: str
    icon: str
    forecast_time: datetime | None = None


def city_for(code_or_city: str, airports: list[Airport] | None = None) -> str:
    """Map an airport code to its city (case-insensitive). Unknown values pass through."""
    for airport in AIRPORTS if airports is None else airports:
        if airport.code.lower() == code_or_city.lower():
            return airport.city
    return code_or_city


def _as_utc(value: datetime) -> datetime:
    # Schedule times are naive; read them as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def closest_forecast(samples: list[dict], target: datetime) -> dict | None:
    """Pick the sample whose `dt` (unix seconds) is nearest the target.

    Ties keep the earlier sample in provider order.
    """
    target = _as_utc(target)
    closest = None
    min_diff = None
    for sample in samples:
        sample_time = datetime.fromtimestamp(sample["dt"], tz=timezone.utc)
        diff = abs((sample_time - target).total_seconds())
        if min_diff is None or diff < min_diff:
            min_diff = diff
            closest = sample
    return closest


class WeatherClient:
    def __init__(self, api_key: str, base_url: str = "https://api.openweathermap.org/data/2.5",
                 timeout: float = 10, airports: list[Airport] | None = None):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.airports = airports

    def resolve(self, code_or_city: str, at: datetime | None = None) -> WeatherReport | None:
        """Weather for an airport/city, at a given time when `at` is supplied."""
        city = city_for(code_or_city, self.airports)
        try:
            if at is not None:
                return self._forecast(city, at)
            return self._current(city)
        except OSError as e:
            logger.warning("Weather request failed for %s: %s", city, e)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.warning("Unexpected weather payload for %s: %r", city, e)
        return None

    def _forecast(self, city: str, at: datetime) -> WeatherReport | None:
        data = self._get_json("forecast", city)
        samples = data.get("list")
        if not samples:
            logger.warning("No forecast list in weather response for %s", city)
            return None

        closest = closest_forecast(samples, at)
        return WeatherReport(
            city=data["city"]["name"],
            temperature=closest["main"]["temp"],
            description=closest["weather"][0]["description"],
            icon=closest["weather"][0]["icon"],
            forecast_time=datetime.fromtimestamp(closest["dt"], tz=timezone.utc),
        )

    def _current(self, city: str) -> WeatherReport:
        data = self._get_json("weather", city)
        return WeatherReport(
            city=data["name"],
            temperature=data["main"]["temp"],
            description=data["weather"][0]["description"],
            icon=data["weather"][0]["icon"],
        )

    def _get_json(self, endpoint: str, city: str) -> dict:
        query = urllib.parse.urlencode({"q": city, "appid": self.api_key, "units": "metric"})
        url = f"{self.base_url}/{endpoint}?{query}"

        with urllib.request.urlopen(url, timeout=self.timeout) as response:
            data = json.loads(response.read().decode("utf-8"))

        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        return data
