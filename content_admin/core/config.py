import os
from dataclasses import dataclass
from typing import List

from dotenv import load_dotenv


load_dotenv()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    return int(raw) if raw.strip() else default


@dataclass(frozen=True)
class Config:
    """Admin API settings read from the environment.

    Supabase credentials are required to serve data; paging limits and the
    admin API base URL have working defaults for local development.
    """

    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_SERVICE_KEY: str = os.getenv("SUPABASE_SERVICE_KEY", "")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "production")

    DEFAULT_PAGE_SIZE: int = _env_int("DEFAULT_PAGE_SIZE", 10)
    MAX_PAGE_SIZE: int = _env_int("MAX_PAGE_SIZE", 100)

    ADMIN_API_BASE_URL: str = os.getenv("ADMIN_API_BASE_URL", "http://localhost:8080")
    ADMIN_API_TIMEOUT_SECONDS: int = _env_int("ADMIN_API_TIMEOUT_SECONDS", 30)

    @staticmethod
    def allowed_origins(extra_origins: List[str] | None = None) -> List[str]:
        """Origins from ``CORS_ALLOWED_ORIGINS`` followed by ``extra_origins``, first occurrence kept."""
        configured = os.getenv("CORS_ALLOWED_ORIGINS", "http://localhost:3000")
        origins = [o.strip() for o in configured.split(",") if o.strip()]
        origins.extend(extra_origins or [])
        return list(dict.fromkeys(origins))

    @classmethod
    def is_development(cls) -> bool:
        return cls.ENVIRONMENT == "development"

    @classmethod
    def validate(cls) -> None:
        if not cls.SUPABASE_URL:
            raise ValueError("SUPABASE_URL environment variable is required")
        if not cls.SUPABASE_SERVICE_KEY:
            raise ValueError("SUPABASE_SERVICE_KEY environment variable is required")
        if not 0 < cls.DEFAULT_PAGE_SIZE <= cls.MAX_PAGE_SIZE:
            raise ValueError("DEFAULT_PAGE_SIZE must be between 1 and MAX_PAGE_SIZE")
