from abc import ABC, abstractmethod
from typing import Dict, Optional, Type, TypeVar
from dataclasses import dataclass

from pydantic import BaseModel

from .config import Settings

T = TypeVar("T", bound=BaseModel)

@dataclass
class TMDBConfig:
    """Configuration class for TMDB API"""
    api_key: str
    base_url: str = "https://api.themoviedb.org/3"
    language: str = "en-US"
    region: str = "IN"
    request_timeout: float = 30
    resource_timeout: float = 60

    @classmethod
    def from_settings(cls, settings: Settings) -> "TMDBConfig":
        return cls(
            api_key=settings.TMDB_API_KEY,
            base_url=settings.TMDB_BASE_URL,
            language=settings.TMDB_LANGUAGE,
            region=settings.TMDB_REGION,
            request_timeout=settings.REQUEST_TIMEOUT,
            resource_timeout=settings.RESOURCE_TIMEOUT,
        )

class TMDBClientInterface(ABC):
    """Abstract interface for TMDB client"""

    @abstractmethod
    def make_request(self, endpoint: str, params: Optional[Dict[str, str]] = None,
                     response_model: Type[T] = None) -> T:
        pass

class KeyValueStore(ABC):
    """Byte-oriented key-value storage"""

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        pass

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        pass

class MovieServiceInterface(ABC):
    """Abstract interface for movie service"""

    @abstractmethod
    def get_now_playing_movies(self, page: int = 1):
        pass

    @abstractmethod
    def get_popular_movies(self, page: int = 1):
        pass

    @abstractmethod
    def get_top_rated_movies(self, page: int = 1):
        pass

    @abstractmethod
    def get_upcoming_movies(self, page: int = 1):
        pass

    @abstractmethod
    def get_trending_movies(self, page: int = 1):
        pass

    @abstractmethod
    def search_movies(self, query: str, page: int = 1):
        pass

    @abstractmethod
    def get_movie_details(self, movie_id: int):
        pass

    @abstractmethod
    def get_movie_credits(self, movie_id: int):
        pass

    @abstractmethod
    def get_movie_videos(self, movie_id: int):
        pass

    @abstractmethod
    def get_movie_recommendations(self, movie_id: int, page: int = 1):
        pass

    @abstractmethod
    def get_similar_movies(self, movie_id: int, page: int = 1):
        pass

    @abstractmethod
    def get_bollywood_movies(self, page: int = 1):
        pass

    @abstractmethod
    def get_south_indian_movies(self, page: int = 1):
        pass

    @abstractmethod
    def get_indian_movies_by_genre(self, genre_id: int, page: int = 1):
        pass
