"""Environment-driven settings (``.env`` files are honoured)."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_CORS_ORIGINS = ("http://localhost:3000",)
LOG_FORMAT = "[%(asctime)s] %(levelname)s in %(module)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    store_path: Optional[str] = None
    log_level: str = "INFO"
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    cors_origins: Tuple[str, ...] = DEFAULT_CORS_ORIGINS


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %s", name, raw, default)
        return default


def load_settings() -> Settings:
    origins = os.getenv("ATS_CORS_ORIGINS", "")
    return Settings(
        store_path=os.getenv("ATS_STORE_PATH") or None,
        log_level=os.getenv("ATS_LOG_LEVEL", "INFO").upper(),
        max_upload_bytes=_int_from_env("ATS_MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES),
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()) or DEFAULT_CORS_ORIGINS,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


def configure_logging(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
