"""
FitTrack Client Settings.

Kept apart from the server's ``settings.Settings`` so the client can run
without the JWT signing secret or any MongoDB configuration.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Workout client settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    API_BASE_URL: str = Field(
        default="http://localhost:8000",
        description="Base URL the workout client sends requests to"
    )
    CLIENT_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0)


client_settings = ClientSettings()
