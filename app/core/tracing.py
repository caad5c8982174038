"""OpenTelemetry tracing setup."""

import logging
from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, SpanExporter

from app.core.config import Settings, get_settings

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = logging.getLogger(__name__)

# Kept so shutdown can flush pending spans
_tracer_provider: TracerProvider | None = None


def _build_exporter(settings: Settings) -> SpanExporter:
    """Create the OTLP exporter for the configured protocol."""
    if settings.otel_exporter_otlp_protocol == "grpc":
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
            OTLPSpanExporter,
        )
    else:
        from opentelemetry.exporter.otlp.proto.http.trace_exporter import (
            OTLPSpanExporter,
        )

    return OTLPSpanExporter(endpoint=settings.otel_exporter_otlp_endpoint)


def setup_tracing(app: "FastAPI") -> bool:
    """Initialize tracing and instrument the application and its database engine.

    Does nothing unless ``otel_enabled`` is set. The book service creates its
    own spans through the global tracer, so they are exported once this has run
    and are no-ops otherwise.

    Args:
        app: The FastAPI application instance to instrument.

    Returns:
        True if tracing was enabled.
    """
    global _tracer_provider

    settings = get_settings()

    if not settings.otel_enabled:
        logger.info("OpenTelemetry tracing is disabled")
        return False

    logger.info(f"Initializing OpenTelemetry tracing for service '{settings.otel_service_name}'")

    resource = Resource.create(
        {
            "service.name": settings.otel_service_name,
            "service.version": app.version,
            "deployment.environment": settings.environment,
        }
    )
    _tracer_provider = TracerProvider(resource=resource)
    _tracer_provider.add_span_processor(BatchSpanProcessor(_build_exporter(settings)))
    trace.set_tracer_provider(_tracer_provider)

    from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
    from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor

    from app.core.database import engine

    FastAPIInstrumentor.instrument_app(app)
    SQLAlchemyInstrumentor().instrument(engine=engine.sync_engine)

    logger.info(
        f"OpenTelemetry tracing initialized, exporting to {settings.otel_exporter_otlp_endpoint}"
    )
    return True


def shutdown_tracing() -> None:
    """Flush pending spans and shut the tracer provider down."""
    global _tracer_provider

    if _tracer_provider is not None:
        logger.info("Shutting down OpenTelemetry tracing")
        _tracer_provider.shutdown()
        _tracer_provider = None
