"""Application configuration with environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment
    ENV: str = "dev"
    VERSION: str = "0.1.0"

    # Database
    DATABASE_URL: str
    SQL_ECHO: bool = False

    # Session token issued by the identity provider (supports key rotation)
    JWT_SECRET: str = "change-this-in-production"
    JWT_SECRET_PREVIOUS: str = ""  # Set during rotation, clear after
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_HOURS: int = 8
    SESSION_COOKIE_NAME: str = "fh_session"

    # Payment key encryption (scrypt-derived AES-256-GCM key)
    ENCRYPTION_SECRET: str = ""

    # CORS
    CORS_ORIGINS: str = "http://localhost:5173"

    # Proxy/Load Balancer Settings
    # Set to True when running behind nginx/Cloudflare to trust X-Forwarded-For
    TRUST_PROXY_HEADERS: bool = False

    # Rate Limiting (requests per minute, <= 0 disables)
    RATE_LIMIT_API: int = 120
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    # Logging
    LOG_LEVEL: str = "INFO"
    ACTIVITY_LOG_DEFAULT_LIMIT: int = 50

    # Cashfree payment gateway (falls back to stored payment keys if empty)
    CASHFREE_APP_ID: str = ""
    CASHFREE_SECRET_KEY: str = ""
    CASHFREE_API_VERSION: str = "2023-08-01"
    CASHFREE_TIMEOUT_SECONDS: float = 15.0

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def jwt_secrets(self) -> list[str]:
        """Returns list of valid secrets (current first, then previous if set)."""
        secrets = [self.JWT_SECRET]
        if self.JWT_SECRET_PREVIOUS:
            secrets.append(self.JWT_SECRET_PREVIOUS)
        return secrets

    @property
    def cashfree_base_url(self) -> str:
        if self.ENV == "production":
            return "https://api.cashfree.com/pg"
        return "https://sandbox.cashfree.com/pg"


settings = Settings()
