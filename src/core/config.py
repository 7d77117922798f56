"""Application configuration management using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Credentials have no defaults: a missing value raises a validation
    error when settings are first loaded, which aborts startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="jazbaa-backend", description="Application name")
    app_env: str = Field(default="development", description="Environment (development/staging/production)")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, description="Server port")

    # CORS
    cors_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins ('*' allows all)",
    )

    # Supabase
    supabase_url: str = Field(..., description="Supabase project URL")
    supabase_secret_key: str = Field(..., description="Supabase secret key for backend operations")
    supabase_signing_key_jwk: str = Field(..., description="Supabase signing key JWK (JSON string) for JWT token verification")

    # Tables and storage
    startups_table: str = Field(default="startups", description="Primary startup profile table")
    backup_startups_table: str = Field(default="permanent_profiles", description="Backup startup profile table")
    invites_table: str = Field(default="invites", description="Startup invite table")
    storage_bucket: str = Field(default="startup-assets", description="Public storage bucket for uploaded assets")

    # Uploads
    max_image_size_bytes: int = Field(default=5 * 1024 * 1024, description="Maximum logo/headshot size")
    max_pitch_deck_size_bytes: int = Field(default=10 * 1024 * 1024, description="Maximum pitch deck size")
    max_request_body_size: int = Field(default=25 * 1024 * 1024, description="Maximum request body size in bytes")

    # Email (Resend)
    resend_api_key: str = Field(..., description="Resend API key for sending emails")
    email_from_address: str = Field(..., description="From address for transactional emails")
    contact_inbox_address: str = Field(..., description="Team inbox that receives contact form submissions")

    # Frontend
    frontend_url: str = Field(
        default="http://localhost:5173",
        description="Frontend origin used for invite and profile links",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @property
    def email_configured(self) -> bool:
        """Check if email delivery credentials are present."""
        return bool(self.resend_api_key and self.email_from_address)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton.

    Returns:
        Settings: Application settings instance.

    Note:
        Settings are cached using lru_cache for performance.
        Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
