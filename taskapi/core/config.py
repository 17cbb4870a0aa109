"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support; every variable carries the TASKAPI_ prefix
(e.g. TASKAPI_JWT_SECRET). Values are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "your_secret_key"


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings have defaults, so an empty environment runs against a local
    Firestore emulator with the development signing secret.
    """

    # App
    app_name: str = "taskapi"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # Document store (Firestore REST). Emulator: http://localhost:8080/v1
    store_uri: str = "https://firestore.googleapis.com/v1"
    store_project_id: str = "taskapi-local"
    store_database: str = "(default)"
    store_timeout_seconds: float = 5.0

    # Firebase service account: key (env, full JSON) or path (file).
    # Neither set means unauthenticated emulator mode.
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None

    # Security
    jwt_secret: SecretStr = SecretStr(DEFAULT_JWT_SECRET)
    jwt_algorithm: str = "HS256"
    jwt_expiry_hours: int = 24

    # Synthetic admin account, minted once per process
    admin_email: str = "admin@example.com"
    admin_password: SecretStr = SecretStr("admin123")

    # CORS
    allowed_origins: str = "*"

    # Request / middleware
    request_id_header: str = "X-Request-ID"
    request_timeout_seconds: int = 30

    # Rate limiting (slowapi)
    login_rate_limit: str = "10/minute"

    model_config = SettingsConfigDict(
        env_prefix="TASKAPI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate token lifetime, timeouts and signing secret."""
        if self.jwt_expiry_hours <= 0:
            raise ValueError("JWT_EXPIRY_HOURS must be greater than 0.")
        if self.store_timeout_seconds <= 0:
            raise ValueError("STORE_TIMEOUT_SECONDS must be greater than 0.")
        if self.request_timeout_seconds <= 0:
            raise ValueError("REQUEST_TIMEOUT_SECONDS must be greater than 0.")
        if not self.jwt_secret.get_secret_value():
            raise ValueError(
                "JWT_SECRET must not be empty. Generate with: openssl rand -hex 32."
            )
        return self

    @property
    def uses_default_jwt_secret(self) -> bool:
        return self.jwt_secret.get_secret_value() == DEFAULT_JWT_SECRET

    @property
    def cors_origins(self) -> list[str]:
        """allowed_origins split on commas, blanks dropped."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
