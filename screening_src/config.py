"""Configuration for preventive screening recommendations."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Find and load .env file
_env_candidates = [
    Path(__file__).parent.parent / ".env",
    Path(__file__).parent.parent / ".env.template",
]

for env_path in _env_candidates:
    if env_path.exists():
        load_dotenv(env_path)
        break


class Config:
    """Screening configuration."""

    # --- Guideline Labels ---
    # Shown in output headers only; rule logic is fixed in the catalog
    GUIDELINE_SOURCE: str = os.getenv("GUIDELINE_SOURCE", "USPSTF")
    GUIDELINE_YEAR: str = os.getenv("GUIDELINE_YEAR", "2025")

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # --- CLI ---
    OUTPUT_FORMAT: str = os.getenv("OUTPUT_FORMAT", "text")  # text or json

    # --- Web API ---
    SECRET_KEY: str = os.getenv("FLASK_SECRET_KEY", "dev-secret-change-in-production")
    DEBUG: bool = os.getenv("FLASK_DEBUG", "false").lower() == "true"
    HOST: str = os.getenv("HOST", "127.0.0.1")
    PORT: int = int(os.getenv("PORT", "5000"))

    @classmethod
    def guideline_label(cls) -> str:
        """Label such as 'USPSTF 2025'."""
        return f"{cls.GUIDELINE_SOURCE} {cls.GUIDELINE_YEAR}"

    @classmethod
    def use_json_output(cls) -> bool:
        """Check if the CLI should print JSON by default."""
        return cls.OUTPUT_FORMAT.lower() == "json"


# Module-level convenience instance
config = Config()
