from pydantic_settings import SettingsConfigDict, BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server settings
    server_host: str = "0.0.0.0"
    server_port: int = 8080
    server_reload: bool = False

    # CORS settings
    cors_origins: List[str] = ["http://localhost:5173"]
    cors_allow_credentials: bool = True
    cors_allow_methods: List[str] = ["GET", "POST", "OPTIONS"]
    cors_allow_headers: List[str] = ["Content-Type", "Authorization"]

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"
    log_to_file: bool = True

    # Resolver (external metadata extraction process)
    resolver_command: List[str] = ["yt-dlp"]
    resolver_timeout_seconds: Optional[float] = 120.0  # None or <= 0 disables the timeout
    resolver_cancel_on_disconnect: bool = False

    # Image conversion
    upload_dir: str = "uploads"
    upload_url_prefix: str = "/uploads"
    image_output_formats: List[str] = ["png", "jpeg", "webp", "ico"]
    jpeg_quality: int = 70
    webp_quality: int = 80

    # Environment
    environment: str = "development"  # development, staging, production

    model_config = SettingsConfigDict(
        env_file=".env",  # Load from .env file if it exists
        case_sensitive=False,
        extra="ignore"  # Ignore extra fields in env file
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def resolver_timeout(self) -> Optional[float]:
        """Effective resolver timeout in seconds, or None when disabled."""
        if self.resolver_timeout_seconds is None or self.resolver_timeout_seconds <= 0:
            return None
        return self.resolver_timeout_seconds


# Create a single instance of settings
settings = Settings()
