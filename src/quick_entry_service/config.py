"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    environment: str = "development"
    debug: bool = False
    service_name: str = "quick-entry-service"

    # CORS
    cors_origins: list[str] = ["*"]

    # Task backend that owns projects and tasks
    tasks_api_url: str = "http://localhost:5000"
    tasks_api_token: str = ""  # Bearer token forwarded to the task backend
    request_timeout: float = 10.0

    # Parsing
    timezone: str = "UTC"  # IANA zone used to compute "today"
    default_project_id: str | None = None
    max_batch_lines: int = 200

    class Config:
        env_prefix = "QUICK_ENTRY_"
        case_sensitive = False


settings = Settings()
