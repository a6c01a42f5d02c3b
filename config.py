# config.py
import os

from dotenv import load_dotenv

load_dotenv()

ORDERS_API_URL: str = os.getenv("ORDERS_API_URL", "http://localhost:3001")
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR: str | None = os.getenv("LOG_DIR") or None

_timeout_raw = os.getenv("ORDERS_API_TIMEOUT", "10")
try:
    ORDERS_API_TIMEOUT: float = float(_timeout_raw)
except ValueError as e:
    raise RuntimeError(f"ORDERS_API_TIMEOUT must be a number of seconds, got {_timeout_raw!r}") from e
