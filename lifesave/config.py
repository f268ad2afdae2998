"""
Runtime configuration for the LifeSave health assistant.

Values come from environment variables, optionally loaded from a .env file.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


def _get_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _get_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}")


# Bundled dataset shipped with the package
DEFAULT_DATASET_PATH = Path(__file__).parent / "data" / "comprehensive-health-dataset.json"

DATASET_PATH = os.getenv("DATASET_PATH") or str(DEFAULT_DATASET_PATH)
# Custom datasets read from disk must live under this directory
DATASET_DIR = os.getenv("DATASET_DIR") or str(DEFAULT_DATASET_PATH.parent)
DATASET_FETCH_TIMEOUT = _get_float("DATASET_FETCH_TIMEOUT", 10.0)

# Simulated latency for the symptom checker, in seconds
PREDICTION_DELAY = _get_float("PREDICTION_DELAY", 1.5)
PREDICTION_JITTER = _get_float("PREDICTION_JITTER", 1.0)

DB_URL = os.getenv("DB_URL", "sqlite:///./lifesave.db")
INTERACTION_LOGGING = _get_bool("INTERACTION_LOGGING", True)

# Key for HMAC fingerprints of logged interactions; plain SHA-256 when unset
APP_SECRET = os.getenv("APP_SECRET")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]
