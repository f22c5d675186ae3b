import logging
import os

def env_bool(key, default=False):
    return os.getenv(key, str(default)).lower() in ("1", "true", "yes", "on")

PRETTY_PRINT = env_bool("COUNTRIES_PRETTY_PRINT", True)
ENCODING = os.getenv("COUNTRIES_ENCODING", "UTF-8")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def configure_logging(level: str | None = None) -> None:
    """Apply LOG_LEVEL to the root logger (no-op if handlers already exist)."""
    logging.basicConfig(
        level=getattr(logging, level or LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
