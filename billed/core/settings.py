"""Configuration and environment settings for the Billed service."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings for the Billed service."""

    database_url: str = "sqlite:///bills.db"
    s3_endpoint_url: str | None = None
    s3_access_key: str | None = None
    s3_secret_key: str | None = None
    s3_bucket: str = "billed-receipts"
    receipts_base_url: str = "/receipts"
    locale: str = "fr"
    log_dir: str = "logs"
    session_cookie_name: str = "billed_session"
    server_host: str = "127.0.0.1"
    server_port: int = 8000

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


def get_settings() -> "Settings":
    """Return an instance of the application settings."""
    return Settings()
