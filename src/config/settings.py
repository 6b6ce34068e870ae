# src/config/settings.py

"""Central configuration for the product catalog service."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean flag from the environment ("1", "true", "yes")."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    """Central configuration for the product catalog service."""

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    DATA_FILE: Path = Path(
        os.getenv("CATALOG_DATA_FILE", str(BASE_DIR / "data" / "products.json"))
    )
    LOGS_DIR: Path = BASE_DIR / "logs"

    # --- Persistence ---
    # Raise PersistenceError (and roll back) when the data file
    # cannot be written, instead of logging and carrying on.
    STRICT_PERSISTENCE: bool = _env_flag("CATALOG_STRICT_PERSISTENCE")

    # --- Querying ---
    DEFAULT_PAGE: int = 0
    DEFAULT_PAGE_SIZE: int = 10
    DEFAULT_SORT_FIELD: str = "id"
    SORTABLE_FIELDS: list[str] = ["id", "price", "rating", "title"]

    # --- Product defaults ---
    DEFAULT_PAYMENT_METHODS: list[str] = [
        "Credit card",
        "Debit card",
        "PayPal",
        "Mercado Pago",
        "Apple Pay",
    ]

    # --- HTTP API ---
    API_HOST: str = os.getenv("CATALOG_API_HOST", "127.0.0.1")
    API_PORT: int = int(os.getenv("CATALOG_API_PORT", "8080"))
    API_PREFIX: str = "/api"
