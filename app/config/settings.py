from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    storage_provider: str = "google_drive"
    google_credentials: str = ""
    google_credentials_json: str = ""
    google_drive_root_folder: str = ""
    google_drive_timeout_seconds: int = 30

    records_provider: str = "notion"
    notion_token: str = ""
    notion_contacts_database_id: str = ""
    notion_orders_database_id: str = ""
    notion_contact_area_id: str = ""
    notion_timeout_seconds: int = 30

    rate_limit_requests: int = 100
    rate_limit_window_seconds: int = 900
    submit_rate_limit_requests: int = 5
    submit_rate_limit_window_seconds: int = 600
    max_body_bytes: int = 10 * 1024 * 1024
