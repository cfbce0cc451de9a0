# cms_delivery/config.py
"""Configuration settings loaded from environment variables."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Content delivery settings from environment variables."""

    # Content service connection
    content_service_url: str = Field(
        default="http://localhost:8081/cd/api",
        description="GraphQL endpoint of the content delivery service",
    )
    content_service_timeout: float = Field(
        default=30.0,
        description="Request timeout in seconds for metadata and binary downloads",
    )
    content_service_verify_ssl: bool = Field(
        default=True,
        description="Verify SSL certificates of the content service",
    )
    content_service_token: Optional[str] = Field(
        default=None,
        description="Optional bearer token sent to the content service",
    )

    # Factory caching
    factory_cache_ttl: int = Field(
        default=300,
        description="Seconds a page or component presentation stays in the factory cache",
    )

    log_level: str = Field(default="INFO", description="Logging level")

    class Config:
        env_prefix = ""
        case_sensitive = False
        env_file = ".env"
        env_file_encoding = "utf-8"


# Global settings instance
settings = Settings()
