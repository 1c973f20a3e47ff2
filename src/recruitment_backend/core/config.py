"""Application configuration management."""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Database Configuration
    database_url: Optional[str] = Field(
        default=None,
        description="Full SQLAlchemy URL; overrides the PostgreSQL components when set"
    )
    postgres_host: str = Field(default="localhost", description="PostgreSQL host")
    postgres_port: int = Field(default=5432, description="PostgreSQL port")
    postgres_db: str = Field(default="recruitment_db", description="PostgreSQL database name")
    postgres_user: str = Field(default="recruitment_user", description="PostgreSQL username")
    postgres_password: str = Field(default="", description="PostgreSQL password")

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    secret_key: str = Field(default="dev-secret-key", description="JWT secret key")
    algorithm: str = Field(default="HS256", description="JWT algorithm")
    access_token_expire_minutes: int = Field(default=60 * 24, description="Token expiry minutes")

    # Pagination
    max_page_size: int = Field(default=50, description="Upper bound for postings, applications and notifications pages")
    max_user_page_size: int = Field(default=100, description="Upper bound for account listing pages")

    # Subscriptions
    sse_heartbeat_seconds: float = Field(default=15.0, description="Idle interval before an SSE keep-alive comment")
    subscriber_queue_size: int = Field(default=0, description="Per-subscriber buffer size (0 = unbounded)")

    # Application Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    environment: str = Field(default="development", description="Environment name")
    testing: bool = Field(default=False, description="Use fast test-only password hashing")

    @property
    def sqlalchemy_url(self) -> str:
        """Database URL, preferring the explicit override."""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def is_sqlite(self) -> bool:
        return self.sqlalchemy_url.startswith("sqlite")


# Global settings instance
settings = Settings()
