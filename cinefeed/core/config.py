from typing import Optional
from pydantic_settings import BaseSettings

from .enums import LoadingPolicy

class Settings(BaseSettings):
    """Application settings using Pydantic BaseSettings"""

    # TMDB
    TMDB_API_KEY: str = ""
    TMDB_BASE_URL: str = "https://api.themoviedb.org/3"
    TMDB_LANGUAGE: str = "en-US"
    TMDB_REGION: str = "IN"

    # HTTP
    REQUEST_TIMEOUT: float = 30
    RESOURCE_TIMEOUT: float = 60
    MAX_CONCURRENT_REQUESTS: int = 8

    # Watchlist persistence
    REDIS_URL: Optional[str] = None
    WATCHLIST_KEY: str = "TMDBWatchlist"

    # Screens
    SEARCH_DEBOUNCE_SECONDS: float = 0.5
    DETAIL_CAST_LIMIT: int = 20
    LOADING_POLICY: LoadingPolicy = LoadingPolicy.ALL_SETTLED

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True

# Singleton instance
_settings: Optional[Settings] = None

def get_settings() -> Settings:
    """Get settings singleton instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
