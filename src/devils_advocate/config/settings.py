"""Application settings and configuration management."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Google AI / Gemini Configuration
    google_genai_use_vertexai: bool = Field(
        default=False,
        description="Use Vertex AI instead of Google AI Studio",
    )
    google_api_key: str | None = Field(
        default=None,
        description="Google AI Studio API key",
    )
    google_cloud_project: str | None = Field(
        default=None,
        description="Google Cloud project ID for Vertex AI",
    )
    google_cloud_location: str = Field(
        default="us-central1",
        description="Google Cloud location for Vertex AI",
    )
    gemini_model: str = Field(
        default="gemini-2.5-flash",
        description="Gemini model used by the agent",
    )
    judge_model: str = Field(
        default="gemini-2.5-flash",
        description="Gemini model used by LLM-judged scorers",
    )
    judge_pro_model: str = Field(
        default="gemini-2.5-pro",
        description="Gemini model used by the critical analysis depth scorer",
    )

    # Exa search
    exa_api_key: str | None = Field(
        default=None,
        description="Exa search API key",
    )
    exa_base_url: str = Field(
        default="https://api.exa.ai",
        description="Exa search API base URL",
    )
    exa_num_results: int = Field(
        default=10,
        description="Number of search results requested per query",
    )
    exa_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout for Exa search requests",
    )

    # Agent memory
    session_database_url: str | None = Field(
        default="sqlite:///./devils_advocate.db",
        description="Database URL for agent conversation sessions (empty for in-memory)",
    )

    # Server Configuration
    app_name: str = Field(
        default="devils_advocate",
        description="Application name used for agent sessions",
    )
    agent_provider_url: str = Field(
        default="http://localhost:8000",
        description="Public base URL advertised in AgentCards",
    )
    agent_host: str = Field(
        default="0.0.0.0",
        description="Server host",
    )
    agent_port: int = Field(
        default=8000,
        description="Server port",
    )
    environment: Literal["development", "production"] = Field(
        default="development",
        description="Deployment environment; production hides error stacks",
    )

    # Scoring
    scoring_enabled: bool = Field(
        default=False,
        description="Score every completed A2A turn in the background",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log format",
    )

    # Development Settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # OpenTelemetry Configuration
    otel_enabled: bool = Field(
        default=False,
        description="Enable OpenTelemetry tracing",
    )
    otel_service_name: str = Field(
        default="devils_advocate",
        description="Service name for OpenTelemetry traces",
    )
    otel_exporter_otlp_endpoint: str = Field(
        default="http://localhost:4317",
        description="OTLP exporter endpoint (gRPC)",
    )
    otel_exporter_otlp_http_endpoint: str = Field(
        default="http://localhost:4318",
        description="OTLP exporter endpoint (HTTP)",
    )
    otel_exporter_type: Literal["otlp", "otlp-http", "console"] = Field(
        default="otlp",
        description="Telemetry exporter type",
    )
    otel_traces_sampler: Literal["always_on", "always_off", "traceidratio"] = Field(
        default="always_on",
        description="Trace sampling strategy",
    )
    otel_traces_sampler_arg: float = Field(
        default=1.0,
        description="Sampler argument (ratio for traceidratio)",
    )

    @property
    def is_production(self) -> bool:
        """Whether the service runs in production mode."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
