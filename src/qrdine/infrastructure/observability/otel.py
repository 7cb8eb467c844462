from __future__ import annotations

import logging
import os

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
)

TRACER_NAME = "qrdine.api"

_OTEL_CONFIGURED = False
logger = logging.getLogger(__name__)


def _add_otlp_exporter(provider: TracerProvider, endpoint: str) -> None:
    try:
        exporter = OTLPSpanExporter(endpoint=endpoint, insecure=endpoint.startswith("http://"))
    except Exception:
        logger.exception("otel_exporter_setup_failed endpoint=%s", endpoint)
        return
    provider.add_span_processor(BatchSpanProcessor(exporter))


def configure_otel() -> None:
    """Install the SDK tracer provider.

    Spans go to ``OTEL_EXPORTER_OTLP_ENDPOINT`` when set, and to stdout
    when ``OTEL_TRACES_EXPORTER=console``. Otherwise they are recorded
    but not exported, which still gives log lines their trace ids.
    """
    global _OTEL_CONFIGURED
    if _OTEL_CONFIGURED:
        return

    provider = TracerProvider(
        resource=Resource.create({SERVICE_NAME: os.getenv("OTEL_SERVICE_NAME", "qrdine")})
    )
    endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    if endpoint:
        _add_otlp_exporter(provider, endpoint)
    if os.getenv("OTEL_TRACES_EXPORTER", "").lower() == "console":
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    _OTEL_CONFIGURED = True


def get_tracer() -> trace.Tracer:
    return trace.get_tracer(TRACER_NAME)
