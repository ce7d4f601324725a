"""
config.py — Konfiguracja aplikacji przez zmienne środowiskowe.
Wszystkie zmienne mają prefiks EXPRCALC_.
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Parser: maksymalne zagnieżdżenie nawiasów (ograniczone, żeby rekurencja
    # parsera nie zbliżyła się do limitu interpretera)
    max_depth: int = Field(default=64, ge=1, le=128)

    # Logging
    log_level: str = "INFO"

    # App
    app_title: str = "ExprCalc"
    app_version: str = "0.1.0"

    model_config = SettingsConfigDict(env_prefix="EXPRCALC_", env_file=".env", extra="ignore")
