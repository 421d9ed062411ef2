"""FastAPI application for the Devil's Advocate agent."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from devils_advocate import __version__
from devils_advocate.api.a2a import a2a_router
from devils_advocate.config import get_settings
from devils_advocate.core import list_agent_ids

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Devil's Advocate agent served over the A2A protocol",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "healthy", "agent": settings.app_name}

    @app.get("/ready")
    async def ready_check() -> dict:
        """Readiness check endpoint."""
        return {"status": "ready", "agent": settings.app_name, "agents": list_agent_ids()}

    # Provides:
    # - POST /a2a/agent/{agent_id} - JSON-RPC 2.0 endpoint
    # - GET /a2a/agent/{agent_id}/.well-known/agent.json - AgentCard
    app.include_router(a2a_router)

    # CORS for A2A Inspector and other browser-based clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    logger.info("A2A routes configured for agents: %s", ", ".join(list_agent_ids()))
    return app
