import logging
from concurrent.futures import Executor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from cinefeed.core.enums import LoadingPolicy, MovieCategory
from cinefeed.core.services import MovieService
from cinefeed.schemas.movie import Movie, MovieResponse
from cinefeed.services.orchestrator import LoadState, Orchestrator, SlotCall

logger = logging.getLogger(__name__)

# Higher rank wins the featured slot regardless of arrival order
FEATURED_RANK = {
    MovieCategory.TRENDING: 1,
    MovieCategory.SOUTH_INDIAN: 2,
    MovieCategory.BOLLYWOOD: 3,
}

CATEGORY_SLOTS = {
    MovieCategory.TRENDING: "trending_movies",
    MovieCategory.NOW_PLAYING: "now_playing_movies",
    MovieCategory.POPULAR: "popular_movies",
    MovieCategory.TOP_RATED: "top_rated_movies",
    MovieCategory.UPCOMING: "upcoming_movies",
    MovieCategory.BOLLYWOOD: "bollywood_movies",
    MovieCategory.SOUTH_INDIAN: "south_indian_movies",
}

@dataclass(frozen=True)
class HomeFeedState(LoadState):
    trending_movies: List[Movie] = field(default_factory=list)
    now_playing_movies: List[Movie] = field(default_factory=list)
    popular_movies: List[Movie] = field(default_factory=list)
    top_rated_movies: List[Movie] = field(default_factory=list)
    upcoming_movies: List[Movie] = field(default_factory=list)
    bollywood_movies: List[Movie] = field(default_factory=list)
    south_indian_movies: List[Movie] = field(default_factory=list)
    featured_movie: Optional[Movie] = None
    featured_source: Optional[MovieCategory] = None

def highest_rated(movies: List[Movie]) -> Optional[Movie]:
    """First movie with the top vote_average, or None"""
    if not movies:
        return None
    return max(movies, key=lambda movie: movie.vote_average)

def featured_changes(state: HomeFeedState, source: MovieCategory,
                     candidate: Optional[Movie]) -> Dict[str, Any]:
    """Offer ``candidate`` for the featured slot on behalf of ``source``"""
    if candidate is None:
        return {}
    current = FEATURED_RANK.get(state.featured_source, 0) if state.featured_movie else 0
    if FEATURED_RANK[source] <= current:
        return {}
    return {"featured_movie": candidate, "featured_source": source}

class HomeFeedService(Orchestrator[HomeFeedState]):
    """Loads every row of the discovery screen in parallel"""

    def __init__(self, movie_service: MovieService, executor: Optional[Executor] = None,
                 loading_policy: LoadingPolicy = LoadingPolicy.ALL_SETTLED):
        super().__init__(HomeFeedState(), executor, loading_policy)
        self.movie_service = movie_service
        self._pages: Dict[MovieCategory, int] = {}

    def _fetcher(self, category: MovieCategory):
        return {
            MovieCategory.TRENDING: self.movie_service.get_trending_movies,
            MovieCategory.NOW_PLAYING: self.movie_service.get_now_playing_movies,
            MovieCategory.POPULAR: self.movie_service.get_popular_movies,
            MovieCategory.TOP_RATED: self.movie_service.get_top_rated_movies,
            MovieCategory.UPCOMING: self.movie_service.get_upcoming_movies,
            MovieCategory.BOLLYWOOD: self.movie_service.get_bollywood_movies,
            MovieCategory.SOUTH_INDIAN: self.movie_service.get_south_indian_movies,
        }[category]

    # Merges. Each runs on the event loop with the freshest state.

    @staticmethod
    def _merge_trending(response: MovieResponse, state: HomeFeedState) -> Dict[str, Any]:
        changes: Dict[str, Any] = {"trending_movies": response.results}
        if state.featured_movie is None and response.results:
            changes.update(featured_changes(state, MovieCategory.TRENDING, response.results[0]))
        return changes

    @staticmethod
    def _merge_bollywood(response: MovieResponse, state: HomeFeedState) -> Dict[str, Any]:
        changes: Dict[str, Any] = {"bollywood_movies": response.results}
        changes.update(featured_changes(state, MovieCategory.BOLLYWOOD, highest_rated(response.results)))
        return changes

    @staticmethod
    def _merge_south_indian(response: MovieResponse, state: HomeFeedState) -> Dict[str, Any]:
        changes: Dict[str, Any] = {"south_indian_movies": response.results}
        changes.update(featured_changes(state, MovieCategory.SOUTH_INDIAN, highest_rated(response.results)))
        return changes

    @staticmethod
    def _merge_upcoming(response: MovieResponse, state: HomeFeedState) -> Dict[str, Any]:
        changes: Dict[str, Any] = {"upcoming_movies": response.results}
        if state.featured_movie is None and state.trending_movies:
            changes.update(featured_changes(state, MovieCategory.TRENDING, state.trending_movies[0]))
        return changes

    @staticmethod
    def _merge_list(slot: str):
        def merge(response: MovieResponse, state: HomeFeedState) -> Dict[str, Any]:
            return {slot: response.results}
        return merge

    def _calls(self) -> List[SlotCall]:
        ms = self.movie_service
        return [
            SlotCall("trending_movies", ms.get_trending_movies, self._merge_trending),
            SlotCall("now_playing_movies", ms.get_now_playing_movies, self._merge_list("now_playing_movies")),
            SlotCall("popular_movies", ms.get_popular_movies, self._merge_list("popular_movies")),
            SlotCall("top_rated_movies", ms.get_top_rated_movies, self._merge_list("top_rated_movies")),
            SlotCall("bollywood_movies", ms.get_bollywood_movies, self._merge_bollywood),
            SlotCall("south_indian_movies", ms.get_south_indian_movies, self._merge_south_indian),
            SlotCall("upcoming_movies", ms.get_upcoming_movies, self._merge_upcoming, primary=True),
        ]

    async def load_initial_data(self) -> None:
        """Fetch page one of every row"""
        logger.info("Loading home feed")
        self._pages = {category: 1 for category in MovieCategory}
        await self._run_batch(self._calls())

    async def refresh_data(self) -> None:
        await self.load_initial_data()

    async def load_more_movies(self, category: MovieCategory) -> None:
        """Append the next page of one row, skipping movies already shown"""
        category = MovieCategory(category)
        slot = CATEGORY_SLOTS[category]
        page = self._pages.get(category, 1) + 1

        def merge(response: MovieResponse, state: HomeFeedState) -> Dict[str, Any]:
            existing = getattr(state, slot)
            seen = {movie.id for movie in existing}
            fresh = []
            for movie in response.results:
                if movie.id not in seen:
                    seen.add(movie.id)
                    fresh.append(movie)
            self._pages[category] = max(self._pages.get(category, 1), response.page)
            return {slot: existing + fresh}

        logger.info(f"Loading page {page} of {category.value}")
        await self._settle(SlotCall(slot, lambda: self._fetcher(category)(page), merge))
