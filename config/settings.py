"""
Configuration management for the course scheduling API.
"""
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = "Course Slot Scheduling API"
    app_version: str = "1.0.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    reload: bool = False

    # Scheduling window
    day_start: str = "08:00"
    day_end: str = "17:30"
    slot_minutes: int = 30

    # Catalog seed (JSON with "courses" and "enrollment_periods")
    catalog_file: Optional[str] = None

    # Logging
    log_level: str = "INFO"

    # CORS
    cors_origins: List[str] = ["http://localhost:3000"]

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
