from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import AnyHttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

RATE_PROVIDERS = {"static", "external-http"}


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., DEBUG, DATA_DIR,
    DB_FILENAME, EXCHANGE_RATE_PROVIDER, HTTP_TIMEOUT_SECONDS).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "Conversor de Moedas"
    debug: bool = False
    version: str = "1.0.0"

    # Data & persistence
    data_dir: Path = Path("data")
    db_filename: str = "converter.sqlite3"
    db_path: Optional[Path] = None  # derived if not provided

    # Exchange rates
    base_currency: str = "USD"
    exchange_api_base_url: AnyHttpUrl = "https://api.exchangerate-api.com/v4/latest"  # base currency is appended
    exchange_rate_provider: str = "external-http"
    http_timeout_seconds: float = 10.0
    http_retries: int = 2
    http_backoff_seconds: float = 0.5

    # History
    history_limit: int = 10
    history_storage_key: str = "conversionHistory"

    # Display formats (pt-BR style, as shown to users)
    date_format: str = "%d/%m/%Y"
    datetime_format: str = "%d/%m/%Y %H:%M:%S"

    def init_post_load(self) -> None:
        """Finalize derived fields and ensure directories exist."""
        if self.db_path is None:
            self.db_path = self.data_dir / self.db_filename
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.base_currency = self.base_currency.upper()
        if self.exchange_rate_provider not in RATE_PROVIDERS:
            raise ValueError(
                f"Unsupported exchange_rate_provider '{self.exchange_rate_provider}'. Allowed: {RATE_PROVIDERS}"
            )
        if self.history_limit < 1:
            raise ValueError("history_limit must be at least 1")

    @property
    def rates_url(self) -> str:
        return f"{str(self.exchange_api_base_url).rstrip('/')}/{self.base_currency}"


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
