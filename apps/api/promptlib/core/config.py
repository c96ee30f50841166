from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env from apps/api so it works regardless of CWD
_env_file = Path(__file__).resolve().parent.parent.parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=_env_file, extra="ignore")

    database_url: str = "postgresql://localhost/promptlib"
    sql_echo: bool = False

    # CORS (comma-separated origins; * allows all)
    cors_origins: str = "http://localhost:5173"

    # Rate limiting (per client address)
    prompts_list_rate_limit: str = "120/minute"

    log_level: str = "INFO"

    # Where PromptLibraryClient points when no base_url is given
    api_base_url: str = "http://localhost:5032/api"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parsed CORS origins for middleware."""
        raw = self.cors_origins.strip()
        return ["*"] if not raw else [o.strip() for o in raw.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
