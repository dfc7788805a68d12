"""
Application configuration settings.
Loads from environment variables with type checking.
"""

from pydantic import validator
from pydantic_settings import BaseSettings
from typing import Optional, List


class Settings(BaseSettings):
    # Application Metadata
    PROJECT_TITLE: str = "Forum Follow Service API"
    PROJECT_DESCRIPTION: str = "Read API for follow relationships between forum users"
    PROJECT_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"  # or 'testing', 'production'

    # Database Configuration
    DATABASE_URL: str = "sqlite+aiosqlite:///./follows.db"
    TEST_DATABASE_URL: Optional[str] = None
    DB_ECHO: bool = False

    LOG_LEVEL: str = "INFO"

    # Pagination
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    # Thumbnails
    THUMBNAIL_SIZE: int = 140
    GRAVATAR_BASE_URL: str = "https://secure.gravatar.com/avatar"

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = ["*"]

    @validator("BACKEND_CORS_ORIGINS", pre=True)
    def assemble_cors_origins(cls, v):
        if isinstance(v, str):
            return [item.strip() for item in v.split(",")]
        return v

    @validator("LOG_LEVEL")
    def normalize_log_level(cls, v):
        return v.upper()

    @validator("MAX_PAGE_SIZE")
    def validate_max_page_size(cls, v):
        if v < 1:
            raise ValueError("MAX_PAGE_SIZE must be at least 1")
        return v

    @property
    def async_database_url(self) -> str:
        """Database URL rewritten for the asyncpg driver when needed"""
        return str(self.DATABASE_URL).replace("postgresql://", "postgresql+asyncpg://", 1)

    class Config:
        env_file = ".env"
        case_sensitive = True
        env_file_encoding = "utf-8"


settings = Settings()
