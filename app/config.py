"""Application configuration settings."""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database Configuration
    db_host: str = "localhost"
    db_port: int = 3306
    db_user: str = "sqlite"
    db_password: str = ""
    db_name: str = "volunteer_shifts"
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600

    # Calendar Settings
    timezone: str = "Europe/Rome"

    # Task catalog: "variable" (free tasks with hour ranges) or "fixed"
    # (named tasks with an implied hour range)
    task_mode: str = "variable"

    # Admin Authentication
    admin_password_hash: str = ""

    # Application Settings
    app_title: str = "Turni Volontari"
    secret_key: str = "change-me"
    debug: bool = False
    log_level: str = "INFO"

    # Refresh notifications
    notifier_queue_size: int = 8

    # Scheduler Settings
    purge_hour: int = 3

    # CORS Settings
    cors_origins: List[str] = []

    # Session Settings
    session_cookie_secure: bool = False
    session_cookie_httponly: bool = True
    session_cookie_samesite: str = "lax"
    session_max_age: int = 86400

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def database_url(self) -> str:
        """Construct database URL from configuration."""
        # Use SQLite if DB_USER is 'sqlite'
        if self.db_user.lower() == 'sqlite':
            return f"sqlite:///./{self.db_name}.db"
        return f"mysql+pymysql://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return not self.debug

    @property
    def fixed_tasks(self) -> bool:
        """Whether the fixed-hour task catalog is active."""
        return self.task_mode.lower() == "fixed"


# Global settings instance
settings = Settings()
