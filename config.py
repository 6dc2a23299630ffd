"""Runtime configuration for the storefront API."""

import os
from pathlib import Path
from typing import List
from urllib.parse import urlparse

from dotenv import load_dotenv

load_dotenv()

DEFAULT_MONGO_URI = "mongodb://127.0.0.1:27017/ecommercestore"


def _database_name(uri: str) -> str:
    """Pick the database named in the URI path, falling back to the store default."""
    name = urlparse(uri).path.lstrip("/")
    return name or "ecommercestore"


class Settings:
    """Central configuration, read once from the environment."""

    # --- Store ---
    MONGO_URI: str = os.getenv("MONGO_URI", DEFAULT_MONGO_URI)
    DATABASE_NAME: str = os.getenv("DATABASE_NAME") or _database_name(MONGO_URI)
    MONGO_TIMEOUT_MS: int = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))

    # --- Sessions ---
    JWT_SECRET: str = os.getenv("JWT_SECRET", "your_secret_key_here")
    JWT_ALGORITHM: str = "HS256"
    TOKEN_TTL_SECONDS: int = 3600       # Tokens expire one hour after issue

    # --- HTTP ---
    API_PREFIX: str = "/api"
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))
    CORS_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING")
    BASE_DIR: Path = Path(__file__).resolve().parent
    LOGS_DIR: Path = BASE_DIR / "logs"
