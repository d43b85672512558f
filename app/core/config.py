"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (e.g. SECRET_KEY) are validated at
load time.
"""

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except those validated in
    validate_required_and_storage (secret_key, storage backend when
    applicable, display timezone and UI locale).
    """

    # App
    app_name: str = "casefile"
    app_version: str = "1.0.0"
    debug: bool = False

    # Session cookie (signed JWT carrying uid + email)
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    session_expire_minutes: int = 60
    session_cookie_name: str = "casefile_session"
    session_cookie_secure: bool = False

    # Firebase: Firestore uses the service account, Identity Toolkit uses the web API key.
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None  # Path to JSON file
    firebase_web_api_key: SecretStr | None = None
    identity_toolkit_url: str = "https://identitytoolkit.googleapis.com/v1"

    # Storage
    storage_backend: str = "local"
    storage_root: str = "/var/casefile/storage"
    storage_base_url: str | None = None
    # Public base URL for S3-compatible buckets (CDN, Supabase, MinIO); None = AWS virtual-host URL.
    storage_public_base_url: str | None = None
    s3_bucket: str | None = None
    s3_region: str = "us-east-1"
    s3_endpoint_url: str | None = None
    s3_access_key: str | None = None
    s3_secret_key: SecretStr | None = None
    max_upload_size: int = 20 * 1024 * 1024  # 20MB

    # Presentation
    display_timezone: str = "UTC"
    ui_locale: str = "en"

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    # OpenTelemetry
    telemetry_enabled: bool = True
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required_and_storage(self) -> "Settings":
        """Validate required env, storage backend and presentation settings."""
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required (it signs session cookies). "
                "Generate with: openssl rand -hex 32."
            )
        if self.storage_backend == "s3":
            if not self.s3_bucket:
                raise ValueError(
                    "s3_bucket is required when storage_backend is 's3'. "
                    "Set S3_BUCKET environment variable or update .env file."
                )
        elif self.storage_backend != "local":
            raise ValueError(
                f"Invalid storage_backend '{self.storage_backend}'. "
                "Must be one of: 'local', 's3'"
            )
        try:
            ZoneInfo(self.display_timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(
                f"Unknown display_timezone {self.display_timezone!r}"
            ) from e
        if self.ui_locale not in ("en", "th"):
            raise ValueError(f"ui_locale must be 'en' or 'th', got: {self.ui_locale!r}")
        return self

    @property
    def timezone(self) -> ZoneInfo:
        """Timezone used to show and parse received dates."""
        return ZoneInfo(self.display_timezone)


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
