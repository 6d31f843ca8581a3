from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings

from outage_map.errors import ConfigError


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Google Maps JS API key embedded in the map page (required)
    google_maps_api_key: str = Field(min_length=1)

    # HTTP server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)

    # PSE outage map
    pse_outage_map_url: str = Field(default="https://www.pse.com/api/sitecore/OutageMap/AnonymoussMapListView")
    fetch_timeout_seconds: float = Field(default=15.0)

    # Scheduler interval (minutes)
    fetch_interval_minutes: int = Field(default=5)

    # Baseline snapshot, rotated on the first fetch after local midnight
    state_file: str = Field(default="outage_state.json")
    reset_timezone: str = Field(default="America/Los_Angeles")

    # Map page polling interval (seconds) - sent to frontend
    client_poll_interval_seconds: int = Field(default=60)

    log_level: str = Field(default="INFO")


def load_settings() -> Settings:
    try:
        return Settings()
    except ValidationError as e:
        missing = ", ".join(str(err["loc"][0]).upper() for err in e.errors() if err.get("loc"))
        raise ConfigError(f"Invalid or missing configuration: {missing or e}") from e


settings = load_settings()
