from __future__ import annotations

import os
from dataclasses import dataclass

STORAGE_BACKENDS = {"memory", "redis", "sql"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    storage_backend: str = "memory"
    redis_url: str | None = None
    database_url: str = "sqlite:///qrdine.db"
    key_prefix: str = ""
    latency_scale: float = 1.0
    payment_success_rate: float = 0.95
    strict_transitions: bool = False
    staff_password: str = "admin123"
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.storage_backend not in STORAGE_BACKENDS:
            raise RuntimeError(f"unsupported storage backend: {self.storage_backend}")
        if self.storage_backend == "redis" and not self.redis_url:
            raise RuntimeError("REDIS_URL is not set")
        if not 0.0 <= self.payment_success_rate <= 1.0:
            raise RuntimeError("PAYMENT_SUCCESS_RATE must be between 0 and 1")
        if self.latency_scale < 0:
            raise RuntimeError("LATENCY_SCALE must be >= 0")

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            storage_backend=os.getenv("QRDINE_STORAGE", "memory").strip().lower(),
            redis_url=os.getenv("REDIS_URL") or None,
            database_url=os.getenv("DATABASE_URL", "sqlite:///qrdine.db"),
            key_prefix=os.getenv("QRDINE_KEY_PREFIX", ""),
            latency_scale=_env_float("LATENCY_SCALE", 1.0),
            payment_success_rate=_env_float("PAYMENT_SUCCESS_RATE", 0.95),
            strict_transitions=_env_bool("STRICT_TRANSITIONS", False),
            staff_password=os.getenv("STAFF_PASSWORD", "admin123"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
