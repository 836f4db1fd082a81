# travel_resolver/config.py
from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # App
    APP_ENV: Literal["dev", "prod", "staging"] = "dev"
    TZ: str = "UTC"

    # OpenAI (generative fallback)
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o-mini"
    FALLBACK_TEMPERATURE: float = 0.4
    FALLBACK_MAX_ATTEMPTS: int = 2

    # Amadeus (both credentials must be present for the live provider)
    AMADEUS_CLIENT_ID: Optional[str] = None
    AMADEUS_CLIENT_SECRET: Optional[str] = None
    AMADEUS_ENV: str = "sandbox"  # or "production"
    AMADEUS_TIMEOUT_SECONDS: float = 12.0

    # read .env and ignore any extra keys so this doesn't break again
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def amadeus_configured(self) -> bool:
        return bool(self.AMADEUS_CLIENT_ID) and bool(self.AMADEUS_CLIENT_SECRET)

    @property
    def amadeus_base_url(self) -> str:
        if self.AMADEUS_ENV == "production":
            return "https://api.amadeus.com"
        return "https://test.api.amadeus.com"

settings = Settings()
