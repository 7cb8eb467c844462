from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from qrdine.config import Settings


def test_defaults_use_memory_storage(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("QRDINE_STORAGE", "LATENCY_SCALE", "STRICT_TRANSITIONS", "PAYMENT_SUCCESS_RATE"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert settings.storage_backend == "memory"
    assert settings.latency_scale == 1.0
    assert settings.strict_transitions is False
    assert settings.payment_success_rate == 0.95


def test_from_env_reads_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QRDINE_STORAGE", "SQL")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///tmp.db")
    monkeypatch.setenv("LATENCY_SCALE", "0")
    monkeypatch.setenv("STRICT_TRANSITIONS", "yes")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.storage_backend == "sql"
    assert settings.database_url == "sqlite:///tmp.db"
    assert settings.latency_scale == 0.0
    assert settings.strict_transitions is True
    assert settings.log_level == "DEBUG"


def test_redis_backend_requires_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QRDINE_STORAGE", "redis")
    monkeypatch.delenv("REDIS_URL", raising=False)

    with pytest.raises(RuntimeError, match="REDIS_URL"):
        Settings.from_env()


@pytest.mark.parametrize(
    "overrides",
    [
        {"storage_backend": "dynamo"},
        {"payment_success_rate": 1.5},
        {"latency_scale": -1.0},
    ],
)
def test_invalid_settings_are_rejected(overrides: dict[str, object]) -> None:
    with pytest.raises(RuntimeError):
        Settings(**overrides)  # type: ignore[arg-type]


def test_non_numeric_latency_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LATENCY_SCALE", "fast")

    with pytest.raises(RuntimeError, match="LATENCY_SCALE"):
        Settings.from_env()
