import asyncio

import pytest
from unittest.mock import MagicMock

from cinefeed.core.interfaces import TMDBConfig
from cinefeed.core.services import MovieService
from cinefeed.core.store import InMemoryStore
from cinefeed.schemas.movie import Movie, MovieResponse

def make_movie(movie_id, vote_average=5.0, **overrides):
    data = {
        "id": movie_id,
        "title": f"Movie {movie_id}",
        "vote_average": vote_average,
        "vote_count": 10,
        "popularity": 1.0,
        "adult": False,
        "video": False,
    }
    data.update(overrides)
    return Movie(**data)

def make_response(movies, page=1):
    return MovieResponse(page=page, results=movies, total_pages=5, total_results=len(movies))

async def wait_until(predicate, timeout=2.0):
    for _ in range(int(timeout / 0.01)):
        if predicate():
            return
        await asyncio.sleep(0.01)
    raise AssertionError("condition not reached")

@pytest.fixture
def config():
    return TMDBConfig(api_key="test-key", base_url="https://api.themoviedb.org/3")

@pytest.fixture
def movie_service():
    """MovieService double; every list endpoint returns an empty page by default"""
    service = MagicMock(spec=MovieService)
    for name in ("get_trending_movies", "get_now_playing_movies", "get_popular_movies",
                 "get_top_rated_movies", "get_upcoming_movies", "get_bollywood_movies",
                 "get_south_indian_movies", "get_movie_recommendations", "get_similar_movies",
                 "search_movies"):
        getattr(service, name).return_value = make_response([])
    return service

@pytest.fixture
def store():
    return InMemoryStore()
