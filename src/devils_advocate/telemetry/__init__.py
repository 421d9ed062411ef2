"""OpenTelemetry integration for distributed tracing."""

from devils_advocate.telemetry.setup import setup_telemetry, shutdown_telemetry

__all__ = ["setup_telemetry", "shutdown_telemetry"]
