from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Pydantic Settings automatically reads env vars matching field names (case-insensitive).
    In development, it also reads from .env file if present.
    In production, set environment variables directly (Docker, k8s, etc.).
    """

    # Base URL of the dashboard backend that owns rooms, deals, bookings and invoices.
    # Paths such as /api/rooms are appended to it.
    backend_url: str = "http://localhost:3000"

    # HTTP client settings for the backend gateway
    backend_timeout: float = 10.0  # Seconds to wait for a full response
    backend_connect_timeout: float = 5.0  # Seconds to wait for the TCP connection
    backend_max_connections: int = 20  # Upper bound on pooled connections

    model_config = SettingsConfigDict(
        env_file=".env",  # Load from .env in development
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


settings = Settings()
