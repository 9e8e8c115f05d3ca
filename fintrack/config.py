"""Configuration for the FinTrack dashboard.

Paths, storage keys and presentation defaults live here; the environment can
override the data directory and the log level.
"""

import logging
import os
from pathlib import Path

_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

DATA_DIR = Path(os.getenv("FINTRACK_DATA_DIR", _PROJECT_ROOT / "data"))

HISTORY_STORAGE_KEY = "fintrack_history_v1"

DEFAULT_CATEGORIES = ("Food", "Travel", "Shopping", "Rent", "Bills", "Other")

# Subject of the first insight
FOOD_CATEGORY = "Food"

RECENT_HISTORY_LIMIT = 5

CHART_COLORS = (
    "#4f46e5", "#06b6d4", "#f97316", "#8b5cf6",
    "#ef4444", "#22c55e", "#eab308", "#0ea5e9",
)

LOG_LEVEL = os.getenv("FINTRACK_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def ensure_data_directories() -> None:
    """Create the data directory if it doesn't exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
