from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List

from research_navigator.core.errors import ConfigurationError


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""  # public (anon) key; row-level security applies

    # Paper search API
    paper_search_url: str = "https://api.semanticscholar.org/graph/v1/paper/search"
    paper_search_limit: int = 10
    paper_search_fields: str = "title,authors,year,url,abstract"
    paper_search_timeout: Optional[float] = None  # None keeps the transport default
    search_debounce_seconds: float = 0.5
    record_search_history: bool = False

    # Auth
    oauth_redirect_url: Optional[str] = None

    # UI
    notification_duration: float = 3.0

    # App
    app_name: str = "research-navigator"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def validate_required(self) -> None:
        """Raise ConfigurationError unless both Supabase values are set."""
        missing = [
            name.upper()
            for name in ("supabase_url", "supabase_key")
            if not getattr(self, name).strip()
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variable(s): {', '.join(missing)}. "
                "Check your .env file."
            )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
        extra="ignore"
    )


settings = Settings()
