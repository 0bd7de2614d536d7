from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    auth_flow_type: str = "pkce"  # pkce | implicit

    # OAuth (Supabase Auth brokers the Google sign-in)
    oauth_provider: str = "google"
    oauth_scopes: str = "https://www.googleapis.com/auth/calendar"
    oauth_redirect_url: Optional[str] = None

    # Google Calendar
    calendar_api_base_url: str = "https://www.googleapis.com/calendar/v3"
    calendar_timeout_seconds: float = 15.0
    default_time_zone: str = "UTC"

    # Provider token acquisition after login
    provider_token_attempts: int = 3
    provider_token_retry_delay: float = 1.0

    # App
    app_name: str = "linkup-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
