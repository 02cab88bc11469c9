import re
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    database_url: str = Field(alias="DATABASE_URL")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    stripe_secret_key: str = Field(default="", alias="STRIPE_SECRET_KEY")
    payments_enabled: bool = Field(default=False, alias="PAYMENTS_ENABLED")
    use_mock_payments: bool = Field(default=False, alias="USE_MOCK_PAYMENTS")
    payment_currency: str = Field(default="usd", alias="PAYMENT_CURRENCY")

    notifications_enabled: bool = Field(default=True, alias="NOTIFICATIONS_ENABLED")

    @model_validator(mode="after")
    def validate_required_runtime(self) -> "Settings":
        if not self.database_url.strip():
            raise ValueError("DATABASE_URL is required")
        if self.payments_enabled and (not self.use_mock_payments) and (not self.stripe_secret_key.strip()):
            raise ValueError("STRIPE_SECRET_KEY is required when payments are enabled")
        if not re.fullmatch(r"[a-z]{3}", self.payment_currency):
            raise ValueError("PAYMENT_CURRENCY must be a lowercase ISO 4217 code")
        if self.log_level.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported LOG_LEVEL: {self.log_level}")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
