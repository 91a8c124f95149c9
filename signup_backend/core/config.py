from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "Signup Backend"
    DATABASE_URL: str = "sqlite+aiosqlite:///./signups.db"
    ENVIRONMENT: str = "development"

    # CORS
    CORS_ALLOW_ORIGIN: str = "*"

    # Admin panel
    ADMIN_PATH: str = "/admin-panel-xyz"
    ADMIN_REALM: str = "Admin Panel"
    ADMIN_MIN_PASSWORD_LENGTH: int = 8

    # Signup rate limiting (per client IP, sliding window)
    CLIENT_IP_HEADER: str = "CF-Connecting-IP"
    RATE_LIMIT_WINDOW_MS: int = 60000
    RATE_LIMIT_MAX_REQUESTS: int = 5
    RATE_LIMIT_CLEANUP_INTERVAL_SECONDS: int = 300

    # Browser cache lifetime for the admin stylesheet
    ADMIN_STATIC_MAX_AGE: int = 3600

    LOGFIRE_TOKEN: str = ""
    SENTRY_DSN: str = ""

    @field_validator("ADMIN_PATH")
    @classmethod
    def normalize_admin_path(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith("/") or value == "/":
            raise ValueError("ADMIN_PATH must start with '/' and name a sub-path")
        return value.rstrip("/")

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # A wildcard origin is only acceptable outside production
        if self.ENVIRONMENT == "production" and self.CORS_ALLOW_ORIGIN == "*":
            raise ValueError(
                "CORS_ALLOW_ORIGIN must be restricted to the site domain in production"
            )

    class Config:
        case_sensitive = True
        env_file = ".env"


settings = Settings()
