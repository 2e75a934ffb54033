from typing import Dict
from ..enums import HINDI_LANGUAGES, INDIAN_LANGUAGES, SOUTH_INDIAN_LANGUAGES
from ..interfaces import MovieServiceInterface, TMDBClientInterface
from cinefeed.schemas.credits import CreditsResponse
from cinefeed.schemas.movie import MovieDetails, MovieResponse
from cinefeed.schemas.video import VideosResponse

MIN_TOP_RATED_VOTES = 100

class MovieService(MovieServiceInterface):
    """Service class for movie-related operations"""

    def __init__(self, client: TMDBClientInterface, region: str = "IN"):
        self.client = client
        self.region = region

    def _discover_params(self, languages: str, page: int) -> Dict[str, str]:
        return {
            "region": self.region,
            "with_original_language": languages,
            "sort_by": "popularity.desc",
            "page": str(page)
        }

    def _movie_list(self, endpoint: str, params: Dict[str, str]) -> MovieResponse:
        return self.client.make_request(endpoint, params, MovieResponse)

    # Lists

    def get_now_playing_movies(self, page: int = 1) -> MovieResponse:
        """Get now playing movies"""
        return self._movie_list("movie/now_playing", self._discover_params(INDIAN_LANGUAGES, page))

    def get_popular_movies(self, page: int = 1) -> MovieResponse:
        """Get popular movies"""
        return self._movie_list("movie/popular", self._discover_params(INDIAN_LANGUAGES, page))

    def get_top_rated_movies(self, page: int = 1) -> MovieResponse:
        """Get top rated movies with enough votes to be meaningful"""
        params = self._discover_params(INDIAN_LANGUAGES, page)
        params["vote_count.gte"] = str(MIN_TOP_RATED_VOTES)
        return self._movie_list("movie/top_rated", params)

    def get_upcoming_movies(self, page: int = 1) -> MovieResponse:
        """Get upcoming movies"""
        return self._movie_list("movie/upcoming", self._discover_params(INDIAN_LANGUAGES, page))

    def get_trending_movies(self, page: int = 1) -> MovieResponse:
        """Get today's trending movies"""
        return self._movie_list("trending/movie/day", {"page": str(page)})

    # Search

    def search_movies(self, query: str, page: int = 1) -> MovieResponse:
        """Search movies by query"""
        params = {
            "query": query,
            "page": str(page),
            "region": self.region,
            "include_adult": "false"
        }
        return self._movie_list("search/movie", params)

    # Single movie

    def get_movie_details(self, movie_id: int) -> MovieDetails:
        """Get movie details by ID"""
        return self.client.make_request(f"movie/{movie_id}", None, MovieDetails)

    def get_movie_credits(self, movie_id: int) -> CreditsResponse:
        """Get movie credits by ID"""
        return self.client.make_request(f"movie/{movie_id}/credits", None, CreditsResponse)

    def get_movie_videos(self, movie_id: int) -> VideosResponse:
        """Get movie videos by ID"""
        return self.client.make_request(f"movie/{movie_id}/videos", None, VideosResponse)

    def get_movie_recommendations(self, movie_id: int, page: int = 1) -> MovieResponse:
        """Get movie recommendations by ID"""
        return self._movie_list(f"movie/{movie_id}/recommendations", {"page": str(page)})

    def get_similar_movies(self, movie_id: int, page: int = 1) -> MovieResponse:
        """Get movies similar to the given ID"""
        return self._movie_list(f"movie/{movie_id}/similar", {"page": str(page)})

    # Indian cinema

    def get_bollywood_movies(self, page: int = 1) -> MovieResponse:
        """Discover Hindi-language movies"""
        return self._movie_list("discover/movie", self._discover_params(HINDI_LANGUAGES, page))

    def get_south_indian_movies(self, page: int = 1) -> MovieResponse:
        """Discover Telugu, Tamil, Malayalam and Kannada movies"""
        return self._movie_list("discover/movie", self._discover_params(SOUTH_INDIAN_LANGUAGES, page))

    def get_indian_movies_by_genre(self, genre_id: int, page: int = 1) -> MovieResponse:
        """Discover Indian movies within one genre"""
        params = self._discover_params(INDIAN_LANGUAGES, page)
        params["with_genres"] = str(int(genre_id))
        return self._movie_list("discover/movie", params)
