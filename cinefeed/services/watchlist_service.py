import logging
from dataclasses import dataclass, field
from typing import List

from pydantic import TypeAdapter, ValidationError

from cinefeed.core.interfaces import KeyValueStore
from cinefeed.schemas.movie import Movie
from cinefeed.services.orchestrator import Observable

logger = logging.getLogger(__name__)

WATCHLIST_ADAPTER = TypeAdapter(List[Movie])

@dataclass(frozen=True)
class WatchlistState:
    movies: List[Movie] = field(default_factory=list)

class WatchlistService(Observable[WatchlistState]):
    """Ordered, id-unique movie list persisted under a single store key.

    Every mutation rewrites the whole list. Call it from one thread only
    (the event loop that owns the other services).
    """

    def __init__(self, store: KeyValueStore, key: str = "TMDBWatchlist"):
        self.store = store
        self.key = key
        super().__init__(WatchlistState(movies=self._load()))

    @property
    def movies(self) -> List[Movie]:
        return list(self._state.movies)

    def __len__(self) -> int:
        return len(self._state.movies)

    def __contains__(self, movie: Movie) -> bool:
        return self.is_in_watchlist(movie)

    def is_in_watchlist(self, movie: Movie) -> bool:
        return any(item.id == movie.id for item in self._state.movies)

    def add(self, movie: Movie) -> None:
        if self.is_in_watchlist(movie):
            return
        self._save(self._state.movies + [movie])

    def remove(self, movie: Movie) -> None:
        self._save([item for item in self._state.movies if item.id != movie.id])

    def toggle(self, movie: Movie) -> None:
        if self.is_in_watchlist(movie):
            self.remove(movie)
        else:
            self.add(movie)

    def clear(self) -> None:
        self._save([])

    def _save(self, movies: List[Movie]) -> None:
        self._update(movies=movies)
        self.store.set(self.key, WATCHLIST_ADAPTER.dump_json(movies))

    def _load(self) -> List[Movie]:
        data = self.store.get(self.key)
        if data is None:
            return []
        try:
            movies = WATCHLIST_ADAPTER.validate_json(data)
        except ValidationError as e:
            logger.warning(f"Discarding unreadable watchlist: {e.error_count()} error(s)")
            return []

        unique: List[Movie] = []
        seen = set()
        for movie in movies:
            if movie.id not in seen:
                seen.add(movie.id)
                unique.append(movie)
        return unique
