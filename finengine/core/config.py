from __future__ import annotations

import os
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_KNOWN_TAX_REGIMES = ("simplificado", "utilidades")


class BaseAppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "FinEngine"
    ENV: str = "dev"
    DATABASE_URL: str | None = None
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "plain"

    # Reporting
    CURRENCY_SYMBOL: str = "Q"  # Quetzales
    RECONCILIATION_THRESHOLD: int = 100  # CRM vs invoiced materiality, currency units
    DEFAULT_TAX_REGIME: str = "simplificado"

    # Payroll expenses are dated on this day of the paid month
    PAYROLL_PAYMENT_DAY: int = 28

    @field_validator("DEFAULT_TAX_REGIME", mode="before")
    @classmethod
    def normalize_regime(cls, v):
        if v is None:
            return v
        return str(v).strip().lower()

    @model_validator(mode="after")
    def _validate_reporting_fields(self) -> BaseAppSettings:
        if self.DEFAULT_TAX_REGIME not in _KNOWN_TAX_REGIMES:
            raise ValueError(
                f"DEFAULT_TAX_REGIME must be one of {', '.join(_KNOWN_TAX_REGIMES)}"
            )
        # Day 28 exists in every month
        if not 1 <= self.PAYROLL_PAYMENT_DAY <= 28:
            raise ValueError("PAYROLL_PAYMENT_DAY must be between 1 and 28")
        if self.RECONCILIATION_THRESHOLD < 0:
            raise ValueError("RECONCILIATION_THRESHOLD cannot be negative")
        return self


class DevSettings(BaseAppSettings):
    ENV: str = "dev"
    DATABASE_URL: str = "sqlite:///./finengine_dev.db"


class TestSettings(BaseAppSettings):
    ENV: str = "test"
    DATABASE_URL: str = "sqlite:///:memory:"


class ProdSettings(BaseAppSettings):
    ENV: str = "prod"
    LOG_FORMAT: str = "json"

    @model_validator(mode="after")
    def _require_database(self) -> ProdSettings:
        if not self.DATABASE_URL:
            raise ValueError("Missing required production settings: DATABASE_URL")
        return self


_ENV_TO_SETTINGS: dict[str, type[BaseAppSettings]] = {
    "dev": DevSettings,
    "development": DevSettings,
    "test": TestSettings,
    "testing": TestSettings,
    "prod": ProdSettings,
    "production": ProdSettings,
}


@lru_cache
def get_settings() -> BaseAppSettings:
    env_name = os.getenv("APP_ENV") or os.getenv("ENV") or "dev"
    env = env_name.lower()
    settings_cls = _ENV_TO_SETTINGS.get(env, DevSettings)
    return settings_cls()


settings = get_settings()
