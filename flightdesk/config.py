"""
Application settings from environment variables.
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # LLM
    anthropic_api_key: str = ""
    llm_model: str = "claude-sonnet-4-20250514"
    llm_max_tokens: int = 1024
    llm_temperature: float = 0

    # Weather (OpenWeatherMap)
    weather_api_key: str = ""
    weather_base_url: str = "https://api.openweathermap.org/data/2.5"
    weather_timeout_seconds: float = 10

    # CORS
    cors_origins: list[str] = ["*"]


settings = Settings()
