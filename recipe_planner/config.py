"""Configuration management with pydantic-settings and validation."""

from pydantic_settings import BaseSettings
from pydantic import field_validator


# Fields that must be present and non-empty
REQUIRED_FIELDS = {
    "database_url",
    "jwt_secret_key",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database Configuration
    database_url: str
    auto_create_tables: bool = False

    # Token Configuration
    jwt_secret_key: str
    jwt_expiry_hours: int = 2

    # Server
    port: int = 3001
    log_level: str = "INFO"

    # Spoonacular recipe API (optional - searches return empty without it)
    spoonacular_api_key: str = ""

    # Kroger API (optional - app works without them)
    kroger_client_id: str = ""
    kroger_client_secret: str = ""
    kroger_redirect_uri: str = ""
    kroger_success_redirect: str = "http://localhost:8081/KrogerShoppingCart"
    kroger_search_radius: int = 20

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("database_url", mode="before")
    @classmethod
    def fix_database_url(cls, v):
        """Heroku-style hosts use postgres:// but SQLAlchemy requires postgresql://."""
        if isinstance(v, str) and v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    @field_validator("*", mode="before")
    @classmethod
    def check_not_empty(cls, v, info):
        """Validate that required environment variables are not empty."""
        if info.field_name not in REQUIRED_FIELDS:
            return v
        if v is None:
            raise ValueError("Required environment variable is not set")
        if isinstance(v, str) and v.strip() == "":
            raise ValueError("Required environment variable is empty")
        return v

    @property
    def kroger_configured(self) -> bool:
        return bool(self.kroger_client_id and self.kroger_client_secret)


def get_settings() -> Settings:
    """Load and validate settings from environment.

    Raises:
        ValidationError: If required environment variables are missing or invalid.
    """
    return Settings()
