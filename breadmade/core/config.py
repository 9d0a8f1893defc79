"""Application configuration using Pydantic Settings"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Hosted backend (database, auth, storage, edge functions)
    SUPABASE_URL: str = "http://localhost:54321"
    SUPABASE_ANON_KEY: str = ""

    # App
    APP_ENV: str = "development"
    APP_NAME: str = "Bread Made Easy"
    API_V1_PREFIX: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # Remote calls
    REQUEST_TIMEOUT: float = 10.0

    # Local durable cache (signed-in identity and auth session)
    AUTH_CACHE_PATH: str = "data/auth_cache.json"

    # Auctions
    COUNTDOWN_INTERVAL_SECONDS: float = 1.0

    # Storage
    FUNNEL_IMAGE_BUCKET: str = "funnels"
    FUNNEL_IMAGE_FOLDER: str = "funnel-images"

    # Payments
    DEFAULT_CURRENCY: str = "usd"

    # Roles allowed into admin routes
    ADMIN_ROLES: list = ["admin"]

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def rest_url(self) -> str:
        return f"{self.SUPABASE_URL.rstrip('/')}/rest/v1"

    @property
    def auth_url(self) -> str:
        return f"{self.SUPABASE_URL.rstrip('/')}/auth/v1"

    @property
    def storage_url(self) -> str:
        return f"{self.SUPABASE_URL.rstrip('/')}/storage/v1"

    @property
    def functions_url(self) -> str:
        return f"{self.SUPABASE_URL.rstrip('/')}/functions/v1"


settings = Settings()
