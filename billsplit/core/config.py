from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, AliasChoices


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "BillSplit API"
    cors_origins: str = "http://localhost:3000"
    currency: str = Field(default="EGP", validation_alias=AliasChoices("currency", "display_currency"))
    money_places: int = 2
    completeness_tolerance: Decimal = Decimal("0.05")
    log_level: str = "INFO"
    max_sessions: int = 1000


settings = Settings()
