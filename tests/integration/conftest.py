from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Iterator

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from qrdine.infrastructure.storage import redis_client
from qrdine.infrastructure.storage import sql_session



@pytest.fixture(autouse=True)
def integration_environment() -> Iterator[None]:
    os.environ.setdefault("OTEL_SERVICE_NAME", "qrdine-test")
    os.environ.setdefault("OTEL_EXPORTER_OTLP_ENDPOINT", "")
    sql_session._build_engine.cache_clear()
    redis_client._build_client.cache_clear()
    yield
    sql_session._build_engine.cache_clear()
    redis_client._build_client.cache_clear()


@pytest.fixture
def sqlite_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'qrdine.db'}"


@pytest.fixture
def redis_url() -> str:
    url = os.getenv("REDIS_URL", "redis://localhost:6379/15")
    if not redis_client.ping_redis(url, timeout_seconds=0.5):
        pytest.skip(f"redis not reachable at {url}")
    return url
