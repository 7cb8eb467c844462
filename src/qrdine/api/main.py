from __future__ import annotations

import logging

from qrdine.api.service import QrDineService
from qrdine.config import Settings
from qrdine.infrastructure.observability.logging_config import configure_logging
from qrdine.infrastructure.observability.otel import configure_otel

logger = logging.getLogger("qrdine.api")


def create_service(settings: Settings | None = None) -> QrDineService:
    resolved = settings or Settings.from_env()
    configure_logging(resolved.log_level)
    configure_otel()
    service = QrDineService(settings=resolved)
    logger.info(
        "service_started storage=%s strict_transitions=%s",
        resolved.storage_backend,
        resolved.strict_transitions,
    )
    return service
