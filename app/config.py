"""
Application settings
Read once from the environment (and an optional .env file)
"""
import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_SEED_PATH = Path(__file__).resolve().parent / "data" / "movies.json"


def _parse_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


class Settings:
    """Environment-driven configuration"""

    def __init__(self):
        self.environment = os.getenv("ENVIRONMENT", "development")
        self.host = os.getenv("HOST", "0.0.0.0")
        self.port = int(os.getenv("PORT", 1234))
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self.seed_path = Path(os.getenv("MOVIES_SEED_PATH", str(DEFAULT_SEED_PATH)))

        self.allowed_origins = _parse_origins(
            os.getenv("ALLOWED_ORIGINS", "http://localhost:8080,http://example.com")
        )
        if frontend_url := os.getenv("FRONTEND_URL"):
            self.allowed_origins.append(frontend_url)


settings = Settings()
