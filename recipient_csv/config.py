from __future__ import annotations

import logging
import os
from dataclasses import dataclass


def _csv_env(name: str, default: str) -> list[str]:
    raw = os.getenv(name, default)
    return [s.strip() for s in (raw or "").split(",") if s.strip()]


def _int_env(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    return int(raw) if raw else default


@dataclass(frozen=True)
class Settings:
    max_upload_bytes: int = _int_env("RECIPIENT_CSV_MAX_UPLOAD_BYTES", 5 * 1024 * 1024)
    log_level: str = (os.getenv("RECIPIENT_CSV_LOG_LEVEL") or "INFO").strip().upper()
    cors_origins: list[str] = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.cors_origins is None:
            object.__setattr__(self, "cors_origins", _csv_env("RECIPIENT_CSV_CORS_ORIGINS", "*"))


settings = Settings()


def configure_logging(cfg: Settings = settings) -> None:
    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
