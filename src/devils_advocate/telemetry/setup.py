"""OpenTelemetry setup and configuration."""

import logging

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SpanExporter
from opentelemetry.sdk.trace.sampling import ALWAYS_OFF, ALWAYS_ON, Sampler, TraceIdRatioBased

from devils_advocate import __version__
from devils_advocate.config import get_settings

logger = logging.getLogger(__name__)

_tracer_provider: TracerProvider | None = None


def _get_sampler(sampler_type: str, sampler_arg: float) -> Sampler:
    if sampler_type == "always_off":
        return ALWAYS_OFF
    if sampler_type == "traceidratio":
        return TraceIdRatioBased(sampler_arg)
    return ALWAYS_ON


def _create_exporter(exporter_type: str, otlp_endpoint: str, otlp_http_endpoint: str) -> SpanExporter:
    if exporter_type == "otlp":
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

        return OTLPSpanExporter(endpoint=otlp_endpoint)

    if exporter_type == "otlp-http":
        from opentelemetry.exporter.otlp.proto.http.trace_exporter import (
            OTLPSpanExporter as OTLPHTTPSpanExporter,
        )

        return OTLPHTTPSpanExporter(endpoint=f"{otlp_http_endpoint}/v1/traces")

    return ConsoleSpanExporter()


def setup_telemetry() -> None:
    """Initialize OpenTelemetry tracing when enabled.

    Call before creating the app so route spans use the configured provider.
    """
    global _tracer_provider

    settings = get_settings()
    if not settings.otel_enabled:
        logger.debug("OpenTelemetry tracing is disabled")
        return

    logger.info(
        "Initializing OpenTelemetry tracing (service=%s, exporter=%s, sampler=%s)",
        settings.otel_service_name,
        settings.otel_exporter_type,
        settings.otel_traces_sampler,
    )

    resource = Resource.create(
        {
            "service.name": settings.otel_service_name,
            "service.version": __version__,
            "deployment.environment": settings.environment,
        }
    )
    _tracer_provider = TracerProvider(
        resource=resource,
        sampler=_get_sampler(settings.otel_traces_sampler, settings.otel_traces_sampler_arg),
    )
    _tracer_provider.add_span_processor(
        BatchSpanProcessor(
            _create_exporter(
                settings.otel_exporter_type,
                settings.otel_exporter_otlp_endpoint,
                settings.otel_exporter_otlp_http_endpoint,
            )
        )
    )
    trace.set_tracer_provider(_tracer_provider)


def shutdown_telemetry() -> None:
    """Flush pending spans and shut the tracer provider down."""
    global _tracer_provider

    if _tracer_provider is not None:
        logger.info("Shutting down OpenTelemetry tracing")
        _tracer_provider.shutdown()
        _tracer_provider = None
