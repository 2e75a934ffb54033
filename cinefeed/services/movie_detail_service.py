import logging
from concurrent.futures import Executor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from cinefeed.core.enums import LoadingPolicy
from cinefeed.core.services import MovieService
from cinefeed.schemas.credits import CastMember, CreditsResponse
from cinefeed.schemas.movie import Movie, MovieDetails
from cinefeed.schemas.video import Video, VideosResponse, trailers_official_first
from cinefeed.services.orchestrator import LoadState, Orchestrator, SlotCall

logger = logging.getLogger(__name__)

DETAIL_SLOTS = ("movie_details", "cast", "videos", "recommendations", "similar_movies")

@dataclass(frozen=True)
class MovieDetailState(LoadState):
    movie_id: Optional[int] = None
    movie_details: Optional[MovieDetails] = None
    cast: List[CastMember] = field(default_factory=list)
    videos: List[Video] = field(default_factory=list)
    recommendations: List[Movie] = field(default_factory=list)
    similar_movies: List[Movie] = field(default_factory=list)

class MovieDetailService(Orchestrator[MovieDetailState]):
    """Loads everything the detail screen shows for one movie"""

    def __init__(self, movie_service: MovieService, executor: Optional[Executor] = None,
                 loading_policy: LoadingPolicy = LoadingPolicy.ALL_SETTLED, cast_limit: int = 20):
        super().__init__(MovieDetailState(), executor, loading_policy)
        self.movie_service = movie_service
        self.cast_limit = cast_limit

    def _merge_cast(self, credits: CreditsResponse, state: MovieDetailState) -> Dict[str, Any]:
        return {"cast": credits.cast[:self.cast_limit]}

    @staticmethod
    def _merge_videos(videos: VideosResponse, state: MovieDetailState) -> Dict[str, Any]:
        return {"videos": trailers_official_first(videos.results)}

    async def load_movie_details(self, movie_id: int) -> None:
        ms = self.movie_service
        calls = [
            SlotCall("movie_details", lambda: ms.get_movie_details(movie_id),
                     lambda details, state: {"movie_details": details},
                     clears_loading_on_failure=True),
            SlotCall("cast", lambda: ms.get_movie_credits(movie_id), self._merge_cast),
            SlotCall("videos", lambda: ms.get_movie_videos(movie_id), self._merge_videos),
            SlotCall("recommendations", lambda: ms.get_movie_recommendations(movie_id),
                     lambda response, state: {"recommendations": response.results}),
            SlotCall("similar_movies", lambda: ms.get_similar_movies(movie_id),
                     lambda response, state: {"similar_movies": response.results},
                     primary=True),
        ]
        # Results that arrive after another movie was opened are dropped
        for call in calls:
            call.is_current = lambda state: state.movie_id == movie_id

        # Slots of a different movie must not leak into this one
        reset = {}
        if self._state.movie_id != movie_id:
            reset = self._reset_slots(*DETAIL_SLOTS)

        logger.info(f"Loading details for movie {movie_id}")
        await self._run_batch(calls, movie_id=movie_id, **reset)
