"""
Basic configuration

- CORS origins for development and production
- Data file location and cache TTL for the patient store
- Supports environment variables (and a .env file at the project root)
"""
import os
from pathlib import Path

from dotenv import load_dotenv

# Project root is the parent of the quarantine/ package
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
load_dotenv(dotenv_path=PROJECT_ROOT / ".env")

# Default localhost origins for development
DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:8080",
]

# Get additional CORS origins from environment variable
ADDITIONAL_CORS_ORIGINS = os.getenv("CORS_ORIGINS", "").split(",") if os.getenv("CORS_ORIGINS") else []

# Filter out empty strings from split
ADDITIONAL_CORS_ORIGINS = [origin.strip() for origin in ADDITIONAL_CORS_ORIGINS if origin.strip()]

# Combine default and additional origins
CORS_ORIGINS = DEFAULT_CORS_ORIGINS + ADDITIONAL_CORS_ORIGINS

# Patient store location
DATA_DIR = os.getenv("QUARANTINE_DATA_DIR", "data")
PATIENTS_FILE = os.getenv("QUARANTINE_PATIENTS_FILE", os.path.join(DATA_DIR, "patients.json"))

# Seconds a raw collection read stays cached
CACHE_TTL_SECONDS = int(os.getenv("QUARANTINE_CACHE_TTL", "60"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
