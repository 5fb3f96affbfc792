from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ApiService = Literal["bookings", "itineraries", "partners", "users"]


class Settings(BaseSettings):
    app_name: str = "ecotrails-admin"
    app_env: Literal["dev", "prod"] = Field("prod")
    log_level: str = Field("INFO")
    bookings_api_base_url: str = Field("https://ecotrails-dev-bookings-func.azurewebsites.net/api/api")
    itineraries_api_base_url: str = Field("https://ecotrails-dev-itineraries-func.azurewebsites.net/api/api")
    partners_api_base_url: str = Field("https://ecotrails-dev-partners-func.azurewebsites.net/api/api")
    users_api_base_url: str = Field("https://ecotrails-dev-users-func20250717225342.azurewebsites.net/api/api")
    request_timeout_seconds: float | None = Field(None)
    admin_role: str = Field("Admin")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator(
        "bookings_api_base_url",
        "itineraries_api_base_url",
        "partners_api_base_url",
        "users_api_base_url",
    )
    @classmethod
    def normalize_base_url(cls, value: str) -> str:
        normalized = value.strip().rstrip("?").rstrip("/")
        if not normalized:
            raise ValueError("base URL must not be empty")
        return normalized

    @field_validator("request_timeout_seconds")
    @classmethod
    def validate_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("request_timeout_seconds must be positive")
        return value

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"

    @model_validator(mode="after")
    def validate_prod_settings(self) -> "Settings":
        if self.app_env != "prod":
            return self
        insecure = [
            name.upper()
            for name in (
                "bookings_api_base_url",
                "itineraries_api_base_url",
                "partners_api_base_url",
                "users_api_base_url",
            )
            if not getattr(self, name).startswith("https://")
        ]
        if insecure:
            raise ValueError(f"HTTPS base URLs are required in prod: {', '.join(insecure)}")
        return self

    def api_base_url(self, service: ApiService) -> str:
        return getattr(self, f"{service}_api_base_url")


settings = Settings()
