"""
Configuration settings for the application
"""

import os
from typing import List, Optional
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Guest store (external service)
    GUESTS_API_BASE_URL: str = os.getenv("GUESTS_API_BASE_URL", "http://localhost:3000")
    GET_GUESTS_PATH: str = os.getenv("GET_GUESTS_PATH", "/api/get-guests")
    UPDATE_GUEST_PATH: str = os.getenv("UPDATE_GUEST_PATH", "/api/update-guest")
    FETCH_TIMEOUT_SECONDS: Optional[float] = None  # guest list fetch only; None waits indefinitely

    # Portal
    SUBMIT_SUCCESS_DELAY_SECONDS: float = 0.6
    MINISTER_DISPLAY_NAME: str = os.getenv("MINISTER_DISPLAY_NAME", "Attending Minister")
    CHURCH_NAME: str = os.getenv("CHURCH_NAME", "Word Sanctuary")
    PORTAL_TITLE: str = "Attending Minister Portal"
    SESSION_COOKIE_NAME: str = "portal_session"
    SESSION_IDLE_TTL_SECONDS: float = 30 * 60

    # CORS
    ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    class Config:
        env_file = ".env"

settings = Settings()
