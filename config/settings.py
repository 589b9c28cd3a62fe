"""Application configuration management."""

import os
from pathlib import Path
from typing import List
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent

class Settings:
    """Application settings."""

    # Project
    PROJECT_NAME = "App Scout"
    VERSION = "1.0.0"

    # API Keys (API_KEY kept for older .env files)
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY", "")

    # Model Defaults
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    DEFAULT_TEMPERATURE: float = float(os.getenv("DEFAULT_TEMPERATURE", "0.2"))

    # Output shaping
    MAX_CONTEXT_CHARS: int = int(os.getenv("MAX_CONTEXT_CHARS", "60000"))
    MAX_SEARCH_RESULTS: int = 4

    # Paths
    DATA_DIR = BASE_DIR / "data"
    LOG_DIR = DATA_DIR / "output" / "logs"

    # Application
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def missing_variables(cls) -> List[str]:
        """Names of required environment variables that are not set."""
        required = []

        if not cls.GEMINI_API_KEY:
            required.append("GEMINI_API_KEY")

        return required

    @classmethod
    def validate(cls):
        """Validate required settings."""
        required = cls.missing_variables()

        if required:
            raise ValueError(f"Missing required environment variables: {', '.join(required)}")

    @classmethod
    def ensure_directories(cls):
        """Create required directories if they don't exist."""
        for directory in [cls.DATA_DIR, cls.LOG_DIR]:
            directory.mkdir(parents=True, exist_ok=True)


settings = Settings()
