"""Main entry point for the Devil's Advocate agent server."""

import logging
import sys

import uvicorn
from dotenv import load_dotenv

from devils_advocate.config import get_settings


def setup_logging() -> None:
    """Configure application logging."""
    settings = get_settings()

    log_format = (
        '{"time": "%(asctime)s", "level": "%(levelname)s", '
        '"logger": "%(name)s", "message": "%(message)s"}'
        if settings.log_format == "json"
        else "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format=log_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def main() -> None:
    """Run the Devil's Advocate agent server."""
    # Load environment variables from .env file
    load_dotenv()

    # Set up logging
    setup_logging()

    settings = get_settings()
    logger = logging.getLogger(__name__)

    # Initialize OpenTelemetry tracing (must be done before creating app)
    from devils_advocate.telemetry import setup_telemetry, shutdown_telemetry

    setup_telemetry()

    logger.info(
        "Starting Devil's Advocate agent",
        extra={
            "app_name": settings.app_name,
            "model": settings.gemini_model,
            "host": settings.agent_host,
            "port": settings.agent_port,
            "environment": settings.environment,
            "otel_enabled": settings.otel_enabled,
        },
    )

    # Import app here so telemetry is configured before routes are built
    from devils_advocate.api.app import create_app

    app = create_app()

    try:
        uvicorn.run(
            app,
            host=settings.agent_host,
            port=settings.agent_port,
            log_level=settings.log_level.lower(),
        )
    finally:
        # Flush pending spans before exit
        shutdown_telemetry()


if __name__ == "__main__":
    main()
